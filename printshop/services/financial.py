"""
Financial aggregation service.
Derives order subtotal, total and debt from the order's line items.
"""

from collections import defaultdict
from typing import Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from printshop.core.exceptions import NotFoundError
from printshop.models.clothes import Clothes, ClothingService
from printshop.models.impression import Impression
from printshop.models.order import Order
from printshop.services.client import ClientService

logger = logging.getLogger(__name__)


def clothes_line_price(
    unit_price: float,
    service_prices: Iterable[float],
    total_quantity: int,
) -> float:
    """Price of a clothes line: (unit price + services) * quantity."""
    return (unit_price + sum(service_prices)) * total_quantity


def order_total(
    subtotal: float,
    iva: Optional[float],
    discount: Optional[float],
) -> float:
    """
    Order total from its subtotal.

    iva is a percentage applied to the subtotal, discount an absolute
    amount subtracted after tax. Missing values count as zero.
    """
    iva = iva or 0.0
    discount = discount or 0.0
    return subtotal + subtotal * iva / 100 - discount


def apply_debt_policy(order: Order) -> None:
    """
    Set the order's debt after a recalculation.

    The outstanding debt is reset to the new total, so payments made
    before a line item change are not carried over.
    """
    order.debt = max(0.0, order.total)


class FinancialService:
    """Service recomputing derived order amounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def calculate_clothes_total(self, order_id: str) -> float:
        """Sum of the clothes line prices of an order."""
        await self.db.flush()

        clothes_result = await self.db.execute(
            select(Clothes.id, Clothes.unit_price, Clothes.total_quantity)
            .where(Clothes.order_id == order_id)
            .order_by(Clothes.created_at, Clothes.id)
        )
        clothes_rows = clothes_result.all()

        services_result = await self.db.execute(
            select(ClothingService.clothes_id, ClothingService.unit_price)
            .join(Clothes, ClothingService.clothes_id == Clothes.id)
            .where(Clothes.order_id == order_id)
            .order_by(ClothingService.created_at, ClothingService.id)
        )
        service_prices: dict[str, list[float]] = defaultdict(list)
        for clothes_id, unit_price in services_result.all():
            service_prices[clothes_id].append(unit_price)

        return sum(
            clothes_line_price(unit_price, service_prices[clothes_id], total_quantity)
            for clothes_id, unit_price, total_quantity in clothes_rows
        )

    async def calculate_impressions_total(self, order_id: str) -> float:
        """Sum of the impression prices of an order."""
        await self.db.flush()

        result = await self.db.execute(
            select(Impression.price)
            .where(Impression.order_id == order_id)
            .order_by(Impression.created_at, Impression.id)
        )
        return sum(result.scalars().all())

    async def recalculate(self, order_id: str) -> Order:
        """
        Recompute an order's subtotal, total and debt from its line items,
        then refresh the owning client's debt.

        Running it twice without changes in between leaves the order as is.

        Raises:
            NotFoundError: If order not found
        """
        await self.db.flush()

        order = await self.db.get(Order, order_id)
        if not order:
            raise NotFoundError(f"Order not found: {order_id}")

        subtotal = (
            await self.calculate_clothes_total(order_id)
            + await self.calculate_impressions_total(order_id)
        )

        order.subtotal = subtotal
        order.total = order_total(subtotal, order.iva, order.discount)
        apply_debt_policy(order)
        await self.db.flush()

        logger.debug(
            f"Order {order_id} recalculated: subtotal={order.subtotal}, "
            f"total={order.total}"
        )

        await ClientService(self.db).update_client_debt(order.client_id)
        return order
