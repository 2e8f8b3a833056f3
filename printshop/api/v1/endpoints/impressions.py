"""
Impression endpoints.
CRUD operations for printed line items.
"""

from fastapi import APIRouter, status

from printshop.api.deps import DbSession
from printshop.schemas.impression import (
    ImpressionCreate,
    ImpressionUpdate,
    ImpressionResponse,
)
from printshop.schemas.base import MessageResponse
from printshop.services.impression import ImpressionService


router = APIRouter()


@router.post(
    "",
    response_model=ImpressionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an impression to an order",
)
async def create_impression(
    data: ImpressionCreate,
    db: DbSession,
) -> ImpressionResponse:
    """Create an impression."""
    service = ImpressionService(db)
    impression = await service.create(data)
    return ImpressionResponse.model_validate(impression)


@router.get(
    "/{impression_id}",
    response_model=ImpressionResponse,
    summary="Impression details",
)
async def get_impression(
    impression_id: str,
    db: DbSession,
) -> ImpressionResponse:
    """Get impression by ID."""
    service = ImpressionService(db)
    impression = await service.get_or_404(impression_id)
    return ImpressionResponse.model_validate(impression)


@router.patch(
    "/{impression_id}",
    response_model=ImpressionResponse,
    summary="Update an impression",
)
async def update_impression(
    impression_id: str,
    data: ImpressionUpdate,
    db: DbSession,
) -> ImpressionResponse:
    """Update an impression."""
    service = ImpressionService(db)
    impression = await service.get_or_404(impression_id)
    impression = await service.update(impression, data)
    return ImpressionResponse.model_validate(impression)


@router.delete(
    "/{impression_id}",
    response_model=MessageResponse,
    summary="Delete an impression",
)
async def delete_impression(
    impression_id: str,
    db: DbSession,
) -> MessageResponse:
    """Delete an impression."""
    service = ImpressionService(db)
    impression = await service.get_or_404(impression_id)
    await service.delete(impression)
    return MessageResponse(message="Impression deleted successfully")
