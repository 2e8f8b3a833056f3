"""
Impression service.
Handles printed line items. Every change recalculates the owning order.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from printshop.core.exceptions import NotFoundError
from printshop.models.impression import Impression
from printshop.models.order import Order
from printshop.schemas.impression import ImpressionCreate, ImpressionUpdate
from printshop.services.financial import FinancialService

logger = logging.getLogger(__name__)


class ImpressionService:
    """Service for impression operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.financial = FinancialService(db)

    async def create(self, data: ImpressionCreate) -> Impression:
        """
        Create an impression and recalculate the order.

        Raises:
            NotFoundError: If the order does not exist
        """
        if await self.db.get(Order, data.order_id) is None:
            raise NotFoundError(f"Order not found: {data.order_id}")

        impression = Impression(**data.model_dump())

        self.db.add(impression)
        await self.db.flush()
        await self.financial.recalculate(impression.order_id)
        await self.db.refresh(impression)

        return impression

    async def get_by_id(self, impression_id: str) -> Impression | None:
        """Get impression by ID."""
        return await self.db.get(Impression, impression_id)

    async def get_or_404(self, impression_id: str) -> Impression:
        """
        Get impression by ID or raise NotFoundError.

        Raises:
            NotFoundError: If impression not found
        """
        impression = await self.get_by_id(impression_id)
        if not impression:
            raise NotFoundError(f"Impression not found: {impression_id}")
        return impression

    async def list_by_order(self, order_id: str) -> List[Impression]:
        """List the impressions of an order in creation order."""
        result = await self.db.execute(
            select(Impression)
            .where(Impression.order_id == order_id)
            .order_by(Impression.created_at, Impression.id)
        )
        return list(result.scalars().all())

    async def update(self, impression: Impression, data: ImpressionUpdate) -> Impression:
        """Update an impression and recalculate the order."""
        update_data = data.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            if value is not None:
                setattr(impression, field, value)

        await self.db.flush()
        await self.financial.recalculate(impression.order_id)
        await self.db.refresh(impression)

        return impression

    async def delete(self, impression: Impression) -> None:
        """Delete an impression and recalculate the order."""
        impression_id, order_id = impression.id, impression.order_id
        await self.db.delete(impression)
        await self.db.flush()
        await self.financial.recalculate(order_id)
        logger.info(f"Impression deleted: {impression_id}")
