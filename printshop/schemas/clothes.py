"""
Clothes and clothing service schemas.
"""

from typing import Annotated

from pydantic import AfterValidator, Field

from printshop.schemas.base import BaseSchema, TimestampSchema
from printshop.models.clothes import (
    ClothingSize,
    ClothingType,
    ServiceLocation,
    ServiceType,
)


def _check_sizes(sizes: dict[ClothingSize, int]) -> dict[ClothingSize, int]:
    if any(count < 0 for count in sizes.values()):
        raise ValueError("Size quantities cannot be negative")
    return sizes


SizesMap = Annotated[dict[ClothingSize, int], AfterValidator(_check_sizes)]


class ClothingServiceCreate(BaseSchema):
    """Schema for adding a service to a clothes item."""

    service_type: ServiceType
    location: ServiceLocation
    description: str | None = None
    unit_price: float = Field(default=0.0, ge=0)


class ClothingServiceUpdate(BaseSchema):
    """Schema for updating a clothing service."""

    service_type: ServiceType | None = None
    location: ServiceLocation | None = None
    description: str | None = None
    unit_price: float | None = Field(None, ge=0)


class ClothingServiceResponse(TimestampSchema):
    """Clothing service response schema."""

    id: str
    clothes_id: str
    service_type: ServiceType
    location: ServiceLocation
    description: str | None
    unit_price: float


class ClothesCreate(BaseSchema):
    """Schema for creating a clothes item with its services."""

    order_id: str
    clothing_type: ClothingType
    custom_type: str | None = Field(None, max_length=255)
    unit_price: float = Field(default=0.0, ge=0)
    sizes: SizesMap = Field(default_factory=dict)
    color: str = Field(default="", max_length=100)
    services: list[ClothingServiceCreate] = Field(default_factory=list)


class ClothesUpdate(BaseSchema):
    """Schema for updating a clothes item. Services are edited separately."""

    clothing_type: ClothingType | None = None
    custom_type: str | None = Field(None, max_length=255)
    unit_price: float | None = Field(None, ge=0)
    sizes: SizesMap | None = None
    color: str | None = Field(None, max_length=100)


class ClothesResponse(TimestampSchema):
    """Clothes response schema, services included."""

    id: str
    order_id: str
    clothing_type: ClothingType
    custom_type: str | None
    unit_price: float
    sizes: SizesMap = Field(validation_alias="sizes_map")
    color: str
    total_quantity: int
    services: list[ClothingServiceResponse]


class ClothesTotalResponse(BaseSchema):
    """Sum of the clothes line prices of an order."""

    order_id: str
    total: float
