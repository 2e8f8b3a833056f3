"""
Clothes and ClothingService models.
A clothes item is a garment line on an order; its services (embroidery,
stamping...) add to the garment's unit price.
"""

import json
from typing import Optional, List, Dict, TYPE_CHECKING
from sqlalchemy import String, Text, ForeignKey, Integer, Float
from sqlalchemy.orm import Mapped, mapped_column, relationship

from printshop.models.base import BaseModel, ValueEnum, enum_column

if TYPE_CHECKING:
    from printshop.models.order import Order


class ClothingType(ValueEnum):
    """Garment type enumeration. OTHER is qualified by Clothes.custom_type."""
    COLLARED_TSHIRTS = "collared_tshirts"
    TSHIRTS_WITHOUT_COLLAR = "tshirts_without_collar"
    UNIFORM_SHIRTS = "uniform_shirts"
    UNIFORMS = "uniforms"
    UNIFORM_PANTS = "uniform_pants"
    BAGS = "bags"
    APRONS = "aprons"
    CLOTH_VESTS = "cloth_vests"
    REFLECTIVE_VESTS = "reflective_vests"
    THICK_CAPS = "thick_caps"
    SIMPLE_CAPS = "simple_caps"
    TOWELS = "towels"
    SHEETS = "sheets"
    APRONS_KITCHEN = "aprons_kitchen"
    OTHER = "other"


class ClothingSize(ValueEnum):
    """Size labels accepted in a sizes map."""
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"
    XXXL = "XXXL"


class ServiceType(ValueEnum):
    """Decoration service enumeration."""
    EMBROIDERY = "embroidery"
    STAMPING = "stamping"
    DTF = "dtf"
    TRANSFER = "transfer"


class ServiceLocation(ValueEnum):
    """Placement of a decoration on the garment."""
    FRONT_RIGHT = "front_right"
    FRONT_LEFT = "front_left"
    BACK = "back"
    SLEEVE_LEFT = "sleeve_left"
    SLEEVE_RIGHT = "sleeve_right"
    CENTER_FRONT = "center_front"
    CENTER_BACK = "center_back"
    LEFT_SIDE = "left_side"
    RIGHT_SIDE = "right_side"
    TOP = "top"
    BOTTOM = "bottom"
    CUSTOM = "custom"


def dump_sizes(sizes: Dict[ClothingSize, int]) -> str:
    """Serialize a sizes map to the stored JSON text."""
    return json.dumps({ClothingSize.parse(k).value: int(v) for k, v in sizes.items()})


def load_sizes(raw: str) -> Dict[ClothingSize, int]:
    """Parse the stored JSON text into a sizes map."""
    return {ClothingSize.parse(k): int(v) for k, v in json.loads(raw or "{}").items()}


class Clothes(BaseModel):
    """
    Clothes line item.

    Attributes:
        order_id: Foreign key to the order
        clothing_type: Garment type
        custom_type: Free-text type, used with ClothingType.OTHER
        unit_price: Price per garment, before services
        sizes: JSON text mapping size label to count
        color: Garment color
        total_quantity: Sum of the sizes map, computed at write time
    """

    __tablename__ = "clothes"

    order_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    clothing_type: Mapped[ClothingType] = mapped_column(
        enum_column(ClothingType),
        nullable=False,
    )
    custom_type: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )
    unit_price: Mapped[float] = mapped_column(
        Float,
        default=0.0,
        nullable=False,
    )
    sizes: Mapped[str] = mapped_column(
        Text,
        default="{}",
        nullable=False,
    )
    color: Mapped[str] = mapped_column(
        String(100),
        default="",
        nullable=False,
    )
    total_quantity: Mapped[int] = mapped_column(
        Integer,
        default=0,
        nullable=False,
    )

    # Relationships
    order: Mapped["Order"] = relationship(
        "Order",
        back_populates="clothes",
    )
    services: Mapped[List["ClothingService"]] = relationship(
        "ClothingService",
        back_populates="clothes",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="ClothingService.created_at",
    )

    @property
    def sizes_map(self) -> Dict[ClothingSize, int]:
        """Sizes as a mapping."""
        return load_sizes(self.sizes)

    def __repr__(self) -> str:
        return f"<Clothes(id={self.id}, type='{self.clothing_type}', quantity={self.total_quantity})>"


class ClothingService(BaseModel):
    """
    Decoration service attached to a clothes item.

    Attributes:
        clothes_id: Foreign key to the clothes item
        service_type: Kind of decoration
        location: Placement on the garment
        description: Optional free text
        unit_price: Price per garment
    """

    __tablename__ = "clothing_services"

    clothes_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("clothes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    service_type: Mapped[ServiceType] = mapped_column(
        enum_column(ServiceType),
        nullable=False,
    )
    location: Mapped[ServiceLocation] = mapped_column(
        enum_column(ServiceLocation),
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    unit_price: Mapped[float] = mapped_column(
        Float,
        default=0.0,
        nullable=False,
    )

    # Relationships
    clothes: Mapped["Clothes"] = relationship(
        "Clothes",
        back_populates="services",
    )

    def __repr__(self) -> str:
        return f"<ClothingService(id={self.id}, type='{self.service_type}', price={self.unit_price})>"
