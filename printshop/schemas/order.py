"""
Order schemas for request/response validation.
"""

from datetime import date

from pydantic import Field

from printshop.schemas.base import BaseSchema, PaginatedResponse, TimestampSchema
from printshop.models.order import OrderStatus


class OrderCreate(BaseSchema):
    """Schema for creating an order. Numbers and totals are assigned by the server."""

    name: str = Field(..., min_length=1, max_length=255)
    client_id: str
    due_date: date | None = None
    iva: float = Field(default=0.0, ge=0)
    discount: float = Field(default=0.0, ge=0)
    status: OrderStatus = OrderStatus.ORDER_RECEIVED


class OrderUpdate(BaseSchema):
    """
    Schema for updating an order.
    subtotal/total are an explicit override of the derived values.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    client_id: str | None = None
    due_date: date | None = None
    discount: float | None = Field(None, ge=0)
    iva: float | None = Field(None, ge=0)
    subtotal: float | None = Field(None, ge=0)
    total: float | None = None
    status: OrderStatus | None = None


class PayDebtRequest(BaseSchema):
    """Payment against an order's outstanding debt."""

    amount: float


class OrderResponse(TimestampSchema):
    """Order response schema."""

    id: str
    name: str
    client_id: str
    client_name: str | None = None
    client_contact: str | None = None
    order_number: int
    client_requisition_number: int
    due_date: date | None
    discount: float | None
    iva: float | None
    subtotal: float
    total: float
    debt: float
    status: OrderStatus


class OrderListResponse(PaginatedResponse):
    """Paginated order list response."""

    items: list[OrderResponse]
