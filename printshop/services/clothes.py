"""
Clothes service.
Handles clothes line items and their decoration services. Every change
recalculates the owning order.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from printshop.core.exceptions import NotFoundError
from printshop.models.clothes import Clothes, ClothingService, dump_sizes
from printshop.models.order import Order
from printshop.schemas.clothes import (
    ClothesCreate,
    ClothesUpdate,
    ClothingServiceCreate,
    ClothingServiceUpdate,
)
from printshop.services.financial import FinancialService

logger = logging.getLogger(__name__)


class ClothesService:
    """Service for clothes and clothing service operations."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.financial = FinancialService(db)

    async def _ensure_order(self, order_id: str) -> None:
        if await self.db.get(Order, order_id) is None:
            raise NotFoundError(f"Order not found: {order_id}")

    async def create(self, data: ClothesCreate) -> Clothes:
        """
        Create a clothes item with its services and recalculate the order.

        Args:
            data: Clothes data, services included

        Returns:
            Created clothes item

        Raises:
            NotFoundError: If the order does not exist
        """
        await self._ensure_order(data.order_id)

        clothes = Clothes(
            order_id=data.order_id,
            clothing_type=data.clothing_type,
            custom_type=data.custom_type,
            unit_price=data.unit_price,
            sizes=dump_sizes(data.sizes),
            color=data.color,
            total_quantity=sum(data.sizes.values()),
            services=[
                ClothingService(**service.model_dump())
                for service in data.services
            ],
        )

        self.db.add(clothes)
        await self.db.flush()
        await self.financial.recalculate(clothes.order_id)

        logger.info(f"Clothes created: {clothes.id} on order {clothes.order_id}")
        return clothes

    async def get_by_id(self, clothes_id: str) -> Clothes | None:
        """Get clothes item by ID, services loaded."""
        return await self.db.get(Clothes, clothes_id)

    async def get_or_404(self, clothes_id: str) -> Clothes:
        """
        Get clothes item by ID or raise NotFoundError.

        Raises:
            NotFoundError: If clothes item not found
        """
        clothes = await self.get_by_id(clothes_id)
        if not clothes:
            raise NotFoundError(f"Clothes not found: {clothes_id}")
        return clothes

    async def list_by_order(self, order_id: str) -> List[Clothes]:
        """List the clothes of an order in creation order."""
        result = await self.db.execute(
            select(Clothes)
            .where(Clothes.order_id == order_id)
            .order_by(Clothes.created_at, Clothes.id)
        )
        return list(result.scalars().all())

    async def update(self, clothes: Clothes, data: ClothesUpdate) -> Clothes:
        """
        Update a clothes item and recalculate the order.
        Changing the sizes recomputes total_quantity.

        Args:
            clothes: Clothes item to update
            data: Update data

        Returns:
            Updated clothes item
        """
        update_data = data.model_dump(exclude_unset=True)

        sizes = update_data.pop("sizes", None)
        if sizes is not None:
            clothes.sizes = dump_sizes(sizes)
            clothes.total_quantity = sum(sizes.values())

        for field, value in update_data.items():
            if value is None and field != "custom_type":
                continue
            setattr(clothes, field, value)

        await self.db.flush()
        await self.financial.recalculate(clothes.order_id)
        await self.db.refresh(clothes)

        return clothes

    async def delete(self, clothes: Clothes) -> None:
        """
        Delete a clothes item with its services and recalculate the order.

        Args:
            clothes: Clothes item to delete
        """
        clothes_id, order_id = clothes.id, clothes.order_id
        await self.db.delete(clothes)
        await self.db.flush()
        await self.financial.recalculate(order_id)
        logger.info(f"Clothes deleted: {clothes_id}")

    async def calculate_order_clothes_total(self, order_id: str) -> float:
        """
        Sum of the clothes line prices of an order.

        Raises:
            NotFoundError: If the order does not exist
        """
        await self._ensure_order(order_id)
        return await self.financial.calculate_clothes_total(order_id)

    # Clothing services

    async def list_services(self, clothes_id: str) -> List[ClothingService]:
        """List the services of a clothes item."""
        clothes = await self.get_or_404(clothes_id)
        return list(clothes.services)

    async def get_service_or_404(self, service_id: str) -> ClothingService:
        """
        Get clothing service by ID or raise NotFoundError.

        Raises:
            NotFoundError: If clothing service not found
        """
        service = await self.db.get(ClothingService, service_id)
        if not service:
            raise NotFoundError(f"Clothing service not found: {service_id}")
        return service

    async def add_service(
        self,
        clothes_id: str,
        data: ClothingServiceCreate,
    ) -> ClothingService:
        """
        Attach a service to a clothes item and recalculate the order.

        Raises:
            NotFoundError: If clothes item not found
        """
        clothes = await self.get_or_404(clothes_id)

        service = ClothingService(clothes_id=clothes.id, **data.model_dump())
        self.db.add(service)
        await self.db.flush()

        await self.db.refresh(clothes, attribute_names=["services"])
        await self.financial.recalculate(clothes.order_id)

        return service

    async def update_service(
        self,
        service: ClothingService,
        data: ClothingServiceUpdate,
    ) -> ClothingService:
        """
        Update a clothing service and recalculate the order.

        Args:
            service: Service to update
            data: Update data

        Returns:
            Updated service
        """
        update_data = data.model_dump(exclude_unset=True)

        for field, value in update_data.items():
            if value is None and field != "description":
                continue
            setattr(service, field, value)

        await self.db.flush()
        await self.db.refresh(service)

        clothes = await self.get_or_404(service.clothes_id)
        await self.financial.recalculate(clothes.order_id)

        return service

    async def delete_service(self, service: ClothingService) -> None:
        """
        Delete a clothing service and recalculate the order.

        Args:
            service: Service to delete
        """
        clothes = await self.get_or_404(service.clothes_id)

        await self.db.delete(service)
        await self.db.flush()

        await self.db.refresh(clothes, attribute_names=["services"])
        await self.financial.recalculate(clothes.order_id)
