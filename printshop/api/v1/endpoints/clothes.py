"""
Clothes endpoints.
Clothes line items and their decoration services.
"""

from fastapi import APIRouter, status

from printshop.api.deps import DbSession
from printshop.schemas.clothes import (
    ClothesCreate,
    ClothesUpdate,
    ClothesResponse,
    ClothingServiceCreate,
    ClothingServiceUpdate,
    ClothingServiceResponse,
)
from printshop.schemas.base import MessageResponse
from printshop.services.clothes import ClothesService


router = APIRouter()


@router.post(
    "",
    response_model=ClothesResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add clothes to an order",
    description="Create a clothes item with its services and recalculate the order",
)
async def create_clothes(
    data: ClothesCreate,
    db: DbSession,
) -> ClothesResponse:
    """Create a clothes item."""
    service = ClothesService(db)
    clothes = await service.create(data)
    return ClothesResponse.model_validate(clothes)


@router.get(
    "/{clothes_id}",
    response_model=ClothesResponse,
    summary="Clothes details",
)
async def get_clothes(
    clothes_id: str,
    db: DbSession,
) -> ClothesResponse:
    """Get clothes item by ID."""
    service = ClothesService(db)
    clothes = await service.get_or_404(clothes_id)
    return ClothesResponse.model_validate(clothes)


@router.patch(
    "/{clothes_id}",
    response_model=ClothesResponse,
    summary="Update clothes",
)
async def update_clothes(
    clothes_id: str,
    data: ClothesUpdate,
    db: DbSession,
) -> ClothesResponse:
    """Update a clothes item."""
    service = ClothesService(db)
    clothes = await service.get_or_404(clothes_id)
    clothes = await service.update(clothes, data)
    return ClothesResponse.model_validate(clothes)


@router.delete(
    "/{clothes_id}",
    response_model=MessageResponse,
    summary="Delete clothes",
)
async def delete_clothes(
    clothes_id: str,
    db: DbSession,
) -> MessageResponse:
    """Delete a clothes item with its services."""
    service = ClothesService(db)
    clothes = await service.get_or_404(clothes_id)
    await service.delete(clothes)
    return MessageResponse(message="Clothes deleted successfully")


@router.get(
    "/{clothes_id}/services",
    response_model=list[ClothingServiceResponse],
    summary="Services of a clothes item",
)
async def list_clothing_services(
    clothes_id: str,
    db: DbSession,
) -> list[ClothingServiceResponse]:
    """List the services of a clothes item."""
    service = ClothesService(db)
    services = await service.list_services(clothes_id)
    return [ClothingServiceResponse.model_validate(s) for s in services]


@router.post(
    "/{clothes_id}/services",
    response_model=ClothingServiceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a service to a clothes item",
)
async def add_clothing_service(
    clothes_id: str,
    data: ClothingServiceCreate,
    db: DbSession,
) -> ClothingServiceResponse:
    """Attach a decoration service."""
    service = ClothesService(db)
    clothing_service = await service.add_service(clothes_id, data)
    return ClothingServiceResponse.model_validate(clothing_service)


@router.patch(
    "/services/{service_id}",
    response_model=ClothingServiceResponse,
    summary="Update a clothing service",
)
async def update_clothing_service(
    service_id: str,
    data: ClothingServiceUpdate,
    db: DbSession,
) -> ClothingServiceResponse:
    """Update a decoration service."""
    service = ClothesService(db)
    clothing_service = await service.get_service_or_404(service_id)
    clothing_service = await service.update_service(clothing_service, data)
    return ClothingServiceResponse.model_validate(clothing_service)


@router.delete(
    "/services/{service_id}",
    response_model=MessageResponse,
    summary="Delete a clothing service",
)
async def delete_clothing_service(
    service_id: str,
    db: DbSession,
) -> MessageResponse:
    """Delete a decoration service."""
    service = ClothesService(db)
    clothing_service = await service.get_service_or_404(service_id)
    await service.delete_service(clothing_service)
    return MessageResponse(message="Clothing service deleted successfully")
