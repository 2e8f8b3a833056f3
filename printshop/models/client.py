"""
Client model for managing customers.
"""

from typing import List, TYPE_CHECKING
from sqlalchemy import String, Text, Float
from sqlalchemy.orm import Mapped, mapped_column, relationship

from printshop.models.base import BaseModel

if TYPE_CHECKING:
    from printshop.models.order import Order


class Client(BaseModel):
    """
    Client model representing a customer.

    Attributes:
        name: Client's full name or company name
        nuit: Tax identification number
        contact: Phone or e-mail
        category: Free-text client category
        observations: Additional notes about the client
        debt: Sum of the debts of the client's orders
    """

    __tablename__ = "clients"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )
    nuit: Mapped[str] = mapped_column(
        String(100),
        default="",
        nullable=False,
    )
    contact: Mapped[str] = mapped_column(
        String(255),
        default="",
        nullable=False,
    )
    category: Mapped[str] = mapped_column(
        String(100),
        default="",
        nullable=False,
    )
    observations: Mapped[str] = mapped_column(
        Text,
        default="",
        nullable=False,
    )

    # Derived from orders, never set by callers
    debt: Mapped[float] = mapped_column(
        Float,
        default=0.0,
        nullable=False,
    )

    # Relationships
    orders: Mapped[List["Order"]] = relationship(
        "Order",
        back_populates="client",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name='{self.name}', debt={self.debt})>"
