"""
Order service.
Handles order CRUD, numbering and debt payments.
"""

from datetime import date
import math
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
from sqlalchemy.orm import selectinload
import logging

from printshop.core.exceptions import InvalidArgumentError, NotFoundError
from printshop.models.order import Order
from printshop.schemas.order import OrderCreate, OrderUpdate
from printshop.services.client import ClientService
from printshop.services.financial import FinancialService
from printshop.services.sequence import SequenceAllocator

logger = logging.getLogger(__name__)


class OrderService:
    """Service for order operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: OrderCreate) -> Order:
        """
        Create an order with its global and per-client numbers.

        The numbers are allocated in the caller's transaction: if the insert
        fails nothing is consumed.

        Args:
            data: Order data

        Returns:
            Created order, client loaded

        Raises:
            NotFoundError: If the client does not exist
        """
        client = await ClientService(self.db).get_or_404(data.client_id)

        sequences = SequenceAllocator(self.db)
        order_number = await sequences.next_order_number()
        requisition_number = await sequences.next_requisition_number(client.id)

        order = Order(
            **data.model_dump(),
            order_number=order_number,
            client_requisition_number=requisition_number,
            subtotal=0.0,
            total=0.0,
            debt=0.0,
        )

        self.db.add(order)
        await self.db.flush()

        logger.info(
            f"Order created: {order.id} (number={order_number}, "
            f"requisition={requisition_number})"
        )
        return await self.get_or_404(order.id)

    async def get_by_id(self, order_id: str) -> Order | None:
        """Get order by ID with its client loaded."""
        result = await self.db.execute(
            select(Order)
            .options(selectinload(Order.client))
            .where(Order.id == order_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_or_404(self, order_id: str) -> Order:
        """
        Get order by ID or raise NotFoundError.

        Raises:
            NotFoundError: If order not found
        """
        order = await self.get_by_id(order_id)
        if not order:
            raise NotFoundError(f"Order not found: {order_id}")
        return order

    async def list_by_client(self, client_id: str) -> List[Order]:
        """List a client's orders, newest first."""
        result = await self.db.execute(
            select(Order)
            .options(selectinload(Order.client))
            .where(Order.client_id == client_id)
            .order_by(Order.created_at.desc(), Order.id)
        )
        return list(result.scalars().all())

    async def list_by_date_range(self, start_date: date, end_date: date) -> List[Order]:
        """
        List orders due within [start_date, end_date], soonest first.

        Raises:
            InvalidArgumentError: If start_date is after end_date
        """
        if start_date > end_date:
            raise InvalidArgumentError("start_date must not be after end_date")

        result = await self.db.execute(
            select(Order)
            .options(selectinload(Order.client))
            .where(
                Order.due_date >= start_date,
                Order.due_date <= end_date,
            )
            .order_by(Order.due_date, Order.order_number)
        )
        return list(result.scalars().all())

    async def list(
        self,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[List[Order], int]:
        """
        List orders, newest first.

        Returns:
            Tuple of (orders list, total count)
        """
        total_result = await self.db.execute(select(func.count(Order.id)))
        total = total_result.scalar() or 0

        result = await self.db.execute(
            select(Order)
            .options(selectinload(Order.client))
            .order_by(Order.created_at.desc(), Order.id)
            .offset(skip)
            .limit(limit)
        )
        orders = list(result.scalars().all())

        return orders, total

    async def update(self, order: Order, data: OrderUpdate) -> Order:
        """
        Update an order.

        subtotal/total in the payload override the derived values as given.
        Without an override, changing iva or discount recalculates the
        order from its line items.

        Args:
            order: Order to update
            data: Update data

        Returns:
            Updated order, client loaded

        Raises:
            NotFoundError: If a new client_id does not exist
        """
        update_data = data.model_dump(exclude_unset=True)
        previous_client_id = order.client_id

        if update_data.get("client_id") is not None:
            await ClientService(self.db).get_or_404(update_data["client_id"])

        for field, value in update_data.items():
            if value is None and field not in ("due_date", "discount", "iva"):
                continue
            setattr(order, field, value)

        await self.db.flush()

        overridden = "subtotal" in update_data or "total" in update_data
        rates_changed = "iva" in update_data or "discount" in update_data
        if rates_changed and not overridden:
            await FinancialService(self.db).recalculate(order.id)

        clients = ClientService(self.db)
        await clients.update_client_debt(order.client_id)
        if previous_client_id != order.client_id:
            await clients.update_client_debt(previous_client_id)

        return await self.get_or_404(order.id)

    async def delete(self, order: Order) -> None:
        """
        Delete order with its line items. Its numbers are not reused.

        Args:
            order: Order to delete
        """
        order_id, client_id = order.id, order.client_id
        await self.db.delete(order)
        await self.db.flush()
        await ClientService(self.db).update_client_debt(client_id)
        logger.info(f"Order deleted: {order_id}")

    async def pay_debt(self, order_id: str, amount: float) -> Order:
        """
        Record a payment against an order's debt.

        The debt never goes below zero; overpayment is absorbed. No payment
        history is kept.

        Args:
            order_id: Order ID
            amount: Paid amount, strictly positive

        Returns:
            Updated order

        Raises:
            InvalidArgumentError: If amount is not a positive finite number
            NotFoundError: If order not found
        """
        if not math.isfinite(amount) or amount <= 0:
            raise InvalidArgumentError("Payment amount must be greater than zero")

        order = await self.get_or_404(order_id)
        order.debt = max(0.0, order.debt - amount)
        await self.db.flush()

        await ClientService(self.db).update_client_debt(order.client_id)
        logger.info(f"Payment of {amount} on order {order_id}, remaining debt {order.debt}")

        return order
