"""
Client service.
Handles client CRUD operations and the derived client debt.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
import logging

from printshop.core.exceptions import NotFoundError
from printshop.models.client import Client
from printshop.models.order import Order
from printshop.schemas.client import ClientCreate, ClientUpdate
from printshop.services.sequence import SequenceAllocator

logger = logging.getLogger(__name__)


class ClientService:
    """Service for client operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: ClientCreate) -> Client:
        """
        Create a new client. Debt starts at zero.

        Args:
            data: Client data

        Returns:
            Created client
        """
        client = Client(**data.model_dump(), debt=0.0)

        self.db.add(client)
        await self.db.flush()
        await self.db.refresh(client)

        logger.info(f"Client created: {client.id}")
        return client

    async def get_by_id(self, client_id: str) -> Client | None:
        """Get client by ID."""
        return await self.db.get(Client, client_id)

    async def get_or_404(self, client_id: str) -> Client:
        """
        Get client by ID or raise NotFoundError.

        Raises:
            NotFoundError: If client not found
        """
        client = await self.get_by_id(client_id)
        if not client:
            raise NotFoundError(f"Client not found: {client_id}")
        return client

    async def search_by_name(self, name: str) -> list[Client]:
        """
        Case-insensitive substring search on client names.

        Args:
            name: Search term

        Returns:
            Matching clients, alphabetically
        """
        result = await self.db.execute(
            select(Client)
            .where(Client.name.ilike(f"%{name}%"))
            .order_by(Client.name)
        )
        return list(result.scalars().all())

    async def list(
        self,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[list[Client], int]:
        """
        List clients, newest first.

        Returns:
            Tuple of (clients list, total count)
        """
        total_result = await self.db.execute(select(func.count(Client.id)))
        total = total_result.scalar() or 0

        result = await self.db.execute(
            select(Client)
            .order_by(Client.created_at.desc(), Client.id)
            .offset(skip)
            .limit(limit)
        )
        clients = list(result.scalars().all())

        return clients, total

    async def update(self, client: Client, data: ClientUpdate) -> Client:
        """
        Update client profile fields.

        Args:
            client: Client to update
            data: Update data

        Returns:
            Updated client
        """
        update_data = data.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            if value is not None:
                setattr(client, field, value)

        await self.db.flush()
        await self.db.refresh(client)

        return client

    async def delete(self, client: Client) -> None:
        """
        Delete client with its orders and their line items.

        Args:
            client: Client to delete
        """
        client_id = client.id
        await self.db.delete(client)
        await self.db.flush()
        await SequenceAllocator(self.db).forget_client(client_id)
        logger.info(f"Client deleted: {client_id}")

    async def update_client_debt(self, client_id: str) -> Client:
        """
        Recompute a client's debt as the sum of its orders' debts.

        Raises:
            NotFoundError: If client not found
        """
        client = await self.get_or_404(client_id)

        await self.db.flush()
        result = await self.db.execute(
            select(func.coalesce(func.sum(Order.debt), 0.0))
            .where(Order.client_id == client_id)
        )
        client.debt = float(result.scalar_one())
        await self.db.flush()

        return client
