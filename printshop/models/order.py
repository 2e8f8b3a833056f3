"""
Order model.
Totals are derived from the order's clothes and impressions.
"""

from typing import Optional, List, TYPE_CHECKING
from datetime import date
from sqlalchemy import String, ForeignKey, Integer, Float, Date
from sqlalchemy.orm import Mapped, mapped_column, relationship

from printshop.models.base import BaseModel, ValueEnum, enum_column

if TYPE_CHECKING:
    from printshop.models.client import Client
    from printshop.models.clothes import Clothes
    from printshop.models.impression import Impression


class OrderStatus(ValueEnum):
    """Order workflow status enumeration."""
    ORDER_RECEIVED = "order_received"
    IN_PRODUCTION = "in_production"
    READY_FOR_DELIVERY = "ready_for_delivery"
    DELIVERED = "delivered"


class Order(BaseModel):
    """
    Order model.

    Attributes:
        client_id: Foreign key to the owning client
        name: Human label
        order_number: Global sequence number, assigned once
        client_requisition_number: Per-client sequence number, assigned once
        due_date: Delivery date
        discount: Absolute amount subtracted after tax
        iva: Tax rate in percent
        subtotal: Sum of line item prices
        total: subtotal + subtotal * iva / 100 - discount
        debt: Outstanding amount, never negative
        status: Workflow status
    """

    __tablename__ = "orders"

    client_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("clients.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    # Sequence numbers
    order_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        unique=True,
    )
    client_requisition_number: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    due_date: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
    )

    # Financial fields
    discount: Mapped[Optional[float]] = mapped_column(
        Float,
        default=0.0,
        nullable=True,
    )
    iva: Mapped[Optional[float]] = mapped_column(
        Float,
        default=0.0,
        nullable=True,
    )
    subtotal: Mapped[float] = mapped_column(
        Float,
        default=0.0,
        nullable=False,
    )
    total: Mapped[float] = mapped_column(
        Float,
        default=0.0,
        nullable=False,
    )
    debt: Mapped[float] = mapped_column(
        Float,
        default=0.0,
        nullable=False,
    )

    status: Mapped[OrderStatus] = mapped_column(
        enum_column(OrderStatus),
        default=OrderStatus.ORDER_RECEIVED,
        nullable=False,
    )

    # Relationships
    client: Mapped["Client"] = relationship(
        "Client",
        back_populates="orders",
    )
    clothes: Mapped[List["Clothes"]] = relationship(
        "Clothes",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    impressions: Mapped[List["Impression"]] = relationship(
        "Impression",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def client_name(self) -> Optional[str]:
        """Name of the owning client, when loaded."""
        client = self.__dict__.get("client")
        return client.name if client is not None else None

    @property
    def client_contact(self) -> Optional[str]:
        """Contact of the owning client, when loaded."""
        client = self.__dict__.get("client")
        return client.contact if client is not None else None

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, number={self.order_number}, total={self.total})>"
