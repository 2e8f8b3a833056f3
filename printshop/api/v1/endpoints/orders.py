"""
Order management endpoints.
CRUD operations, date range listing and debt payments.
"""

from datetime import date

from fastapi import APIRouter, Query, status

from printshop.api.deps import DbSession
from printshop.schemas.order import (
    OrderCreate,
    OrderUpdate,
    OrderResponse,
    OrderListResponse,
    PayDebtRequest,
)
from printshop.schemas.clothes import ClothesResponse, ClothesTotalResponse
from printshop.schemas.impression import ImpressionResponse
from printshop.schemas.base import MessageResponse
from printshop.services.clothes import ClothesService
from printshop.services.impression import ImpressionService
from printshop.services.order import OrderService


router = APIRouter()


@router.post(
    "",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an order",
    description="Create an order; order and requisition numbers are assigned by the server",
)
async def create_order(
    data: OrderCreate,
    db: DbSession,
) -> OrderResponse:
    """Create a new order."""
    service = OrderService(db)
    order = await service.create(data)
    return OrderResponse.model_validate(order)


@router.get(
    "",
    response_model=OrderListResponse,
    summary="List orders",
    description="Paginated order list, newest first",
)
async def list_orders(
    db: DbSession,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
) -> OrderListResponse:
    """List all orders with pagination."""
    service = OrderService(db)
    skip = (page - 1) * per_page

    orders, total = await service.list(skip=skip, limit=per_page)

    return OrderListResponse(
        items=[OrderResponse.model_validate(o) for o in orders],
        **OrderListResponse.page_fields(total, page, per_page),
    )


@router.get(
    "/due",
    response_model=list[OrderResponse],
    summary="Orders due in a date range",
)
async def list_orders_by_due_date(
    db: DbSession,
    start_date: date = Query(..., description="First due date, inclusive"),
    end_date: date = Query(..., description="Last due date, inclusive"),
) -> list[OrderResponse]:
    """List orders whose due date falls in the range."""
    service = OrderService(db)
    orders = await service.list_by_date_range(start_date, end_date)
    return [OrderResponse.model_validate(o) for o in orders]


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Order details",
)
async def get_order(
    order_id: str,
    db: DbSession,
) -> OrderResponse:
    """Get order by ID with client name and contact."""
    service = OrderService(db)
    order = await service.get_or_404(order_id)
    return OrderResponse.model_validate(order)


@router.patch(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Update an order",
    description="Update an order; subtotal/total in the body override the computed values",
)
async def update_order(
    order_id: str,
    data: OrderUpdate,
    db: DbSession,
) -> OrderResponse:
    """Update an order."""
    service = OrderService(db)
    order = await service.get_or_404(order_id)
    order = await service.update(order, data)
    return OrderResponse.model_validate(order)


@router.delete(
    "/{order_id}",
    response_model=MessageResponse,
    summary="Delete an order",
)
async def delete_order(
    order_id: str,
    db: DbSession,
) -> MessageResponse:
    """Delete an order with its line items."""
    service = OrderService(db)
    order = await service.get_or_404(order_id)
    await service.delete(order)
    return MessageResponse(message="Order deleted successfully")


@router.post(
    "/{order_id}/pay",
    response_model=OrderResponse,
    summary="Pay order debt",
    description="Subtract a payment from the order's debt, never below zero",
)
async def pay_order_debt(
    order_id: str,
    data: PayDebtRequest,
    db: DbSession,
) -> OrderResponse:
    """Record a payment on an order."""
    service = OrderService(db)
    order = await service.pay_debt(order_id, data.amount)
    return OrderResponse.model_validate(order)


@router.get(
    "/{order_id}/clothes",
    response_model=list[ClothesResponse],
    summary="Clothes of an order",
)
async def list_order_clothes(
    order_id: str,
    db: DbSession,
) -> list[ClothesResponse]:
    """List the clothes line items of an order."""
    await OrderService(db).get_or_404(order_id)
    clothes = await ClothesService(db).list_by_order(order_id)
    return [ClothesResponse.model_validate(c) for c in clothes]


@router.get(
    "/{order_id}/clothes/total",
    response_model=ClothesTotalResponse,
    summary="Clothes total of an order",
)
async def get_order_clothes_total(
    order_id: str,
    db: DbSession,
) -> ClothesTotalResponse:
    """Sum of the clothes line prices of an order."""
    total = await ClothesService(db).calculate_order_clothes_total(order_id)
    return ClothesTotalResponse(order_id=order_id, total=total)


@router.get(
    "/{order_id}/impressions",
    response_model=list[ImpressionResponse],
    summary="Impressions of an order",
)
async def list_order_impressions(
    order_id: str,
    db: DbSession,
) -> list[ImpressionResponse]:
    """List the impressions of an order."""
    await OrderService(db).get_or_404(order_id)
    impressions = await ImpressionService(db).list_by_order(order_id)
    return [ImpressionResponse.model_validate(i) for i in impressions]
