"""
Impression model: a flat printed line item on an order.
"""

from typing import TYPE_CHECKING
from sqlalchemy import String, Text, ForeignKey, Float
from sqlalchemy.orm import Mapped, mapped_column, relationship

from printshop.models.base import BaseModel

if TYPE_CHECKING:
    from printshop.models.order import Order


class Impression(BaseModel):
    """
    Impression line item.

    Attributes:
        order_id: Foreign key to the order
        name: Short name of the print job
        size: Print size
        material: Printed material
        description: Free-text description
        price: Line price
    """

    __tablename__ = "impressions"

    order_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("orders.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    size: Mapped[str] = mapped_column(
        String(100),
        default="",
        nullable=False,
    )
    material: Mapped[str] = mapped_column(
        String(255),
        default="",
        nullable=False,
    )
    description: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )
    price: Mapped[float] = mapped_column(
        Float,
        default=0.0,
        nullable=False,
    )

    # Relationships
    order: Mapped["Order"] = relationship(
        "Order",
        back_populates="impressions",
    )

    def __repr__(self) -> str:
        return f"<Impression(id={self.id}, name='{self.name}', price={self.price})>"
