"""
Impression schemas for request/response validation.
"""

from pydantic import Field

from printshop.schemas.base import BaseSchema, TimestampSchema


class ImpressionBase(BaseSchema):
    """Base impression schema."""

    name: str = Field(..., min_length=1, max_length=255)
    size: str = Field(default="", max_length=100)
    material: str = Field(default="", max_length=255)
    description: str = ""
    price: float = Field(default=0.0, ge=0)


class ImpressionCreate(ImpressionBase):
    """Schema for creating an impression."""

    order_id: str


class ImpressionUpdate(BaseSchema):
    """Schema for updating an impression."""

    name: str | None = Field(None, min_length=1, max_length=255)
    size: str | None = Field(None, max_length=100)
    material: str | None = Field(None, max_length=255)
    description: str | None = None
    price: float | None = Field(None, ge=0)


class ImpressionResponse(ImpressionBase, TimestampSchema):
    """Impression response schema."""

    id: str
    order_id: str
