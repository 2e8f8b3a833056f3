"""
Sequence allocator.
Hands out order numbers and per-client requisition numbers.
"""

import logging

from sqlalchemy import delete, func, insert, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from printshop.core.exceptions import StoreFailureError
from printshop.models.order import Order
from printshop.models.sequence import (
    ORDER_NUMBER_SEQUENCE,
    SequenceCounter,
    requisition_sequence,
)

logger = logging.getLogger(__name__)


_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SequenceAllocator:
    """
    Allocator backed by the sequence_counters table.

    Each allocation is a single upsert-and-return statement executed in the
    caller's transaction, so concurrent creators never observe the same
    value. A counter is seeded from the orders table the first time it is
    used. Numbers are never reused; deleting orders leaves gaps.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def next_order_number(self) -> int:
        """Allocate the next global order number."""
        seed = select(func.coalesce(func.max(Order.order_number), 0) + 1)
        return await self._allocate(ORDER_NUMBER_SEQUENCE, seed)

    async def next_requisition_number(self, client_id: str) -> int:
        """Allocate the next requisition number of a client."""
        seed = select(
            func.coalesce(func.max(Order.client_requisition_number), 0) + 1
        ).where(Order.client_id == client_id)
        return await self._allocate(requisition_sequence(client_id), seed)

    async def _allocate(self, name: str, seed) -> int:
        dialect = self.db.get_bind().dialect.name
        try:
            upsert = _UPSERT_INSERTS[dialect]
        except KeyError:
            raise StoreFailureError(
                f"Sequence allocation is not supported on {dialect}",
                details={"dialect": dialect},
            )

        stmt = upsert(SequenceCounter).values(name=name, value=seed.scalar_subquery())
        stmt = stmt.on_conflict_do_update(
            index_elements=[SequenceCounter.name],
            set_={"value": SequenceCounter.value + 1},
        ).returning(SequenceCounter.value)

        result = await self.db.execute(stmt)
        value = result.scalar_one()
        logger.debug(f"Allocated {name} = {value}")
        return value

    async def forget_client(self, client_id: str) -> None:
        """Drop the requisition counter of a deleted client."""
        await self.db.execute(
            delete(SequenceCounter).where(
                SequenceCounter.name == requisition_sequence(client_id)
            )
        )

    async def reset_from_orders(self) -> None:
        """Rebuild every counter from the current orders table."""
        await self.db.execute(delete(SequenceCounter))

        rows = []
        max_number = (
            await self.db.execute(select(func.max(Order.order_number)))
        ).scalar()
        if max_number is not None:
            rows.append({"name": ORDER_NUMBER_SEQUENCE, "value": max_number})

        result = await self.db.execute(
            select(Order.client_id, func.max(Order.client_requisition_number))
            .group_by(Order.client_id)
        )
        rows.extend(
            {"name": requisition_sequence(client_id), "value": value}
            for client_id, value in result.all()
        )

        if rows:
            await self.db.execute(insert(SequenceCounter), rows)
        logger.info(f"Rebuilt {len(rows)} sequence counters from orders")
