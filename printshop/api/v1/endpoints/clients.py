"""
Client management endpoints.
CRUD operations for clients.
"""

from fastapi import APIRouter, Query, status

from printshop.api.deps import DbSession
from printshop.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientListResponse,
)
from printshop.schemas.order import OrderResponse
from printshop.schemas.base import MessageResponse
from printshop.services.client import ClientService
from printshop.services.order import OrderService


router = APIRouter()


@router.post(
    "",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a client",
)
async def create_client(
    data: ClientCreate,
    db: DbSession,
) -> ClientResponse:
    """Create a new client."""
    service = ClientService(db)
    client = await service.create(data)
    return ClientResponse.model_validate(client)


@router.get(
    "",
    response_model=ClientListResponse,
    summary="List clients",
    description="Paginated client list, newest first",
)
async def list_clients(
    db: DbSession,
    page: int = Query(1, ge=1, description="Page number"),
    per_page: int = Query(20, ge=1, le=100, description="Items per page"),
) -> ClientListResponse:
    """List all clients with pagination."""
    service = ClientService(db)
    skip = (page - 1) * per_page

    clients, total = await service.list(skip=skip, limit=per_page)

    return ClientListResponse(
        items=[ClientResponse.model_validate(c) for c in clients],
        **ClientListResponse.page_fields(total, page, per_page),
    )


@router.get(
    "/search",
    response_model=list[ClientResponse],
    summary="Search clients by name",
)
async def search_clients(
    db: DbSession,
    name: str = Query(..., min_length=1, description="Part of the client name"),
) -> list[ClientResponse]:
    """Case-insensitive search on client names."""
    service = ClientService(db)
    clients = await service.search_by_name(name)
    return [ClientResponse.model_validate(c) for c in clients]


@router.get(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Client details",
)
async def get_client(
    client_id: str,
    db: DbSession,
) -> ClientResponse:
    """Get client by ID."""
    service = ClientService(db)
    client = await service.get_or_404(client_id)
    return ClientResponse.model_validate(client)


@router.get(
    "/{client_id}/orders",
    response_model=list[OrderResponse],
    summary="Orders of a client",
)
async def list_client_orders(
    client_id: str,
    db: DbSession,
) -> list[OrderResponse]:
    """List a client's orders."""
    await ClientService(db).get_or_404(client_id)
    orders = await OrderService(db).list_by_client(client_id)
    return [OrderResponse.model_validate(o) for o in orders]


@router.patch(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Update a client",
)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    db: DbSession,
) -> ClientResponse:
    """Update a client."""
    service = ClientService(db)
    client = await service.get_or_404(client_id)
    client = await service.update(client, data)
    return ClientResponse.model_validate(client)


@router.delete(
    "/{client_id}",
    response_model=MessageResponse,
    summary="Delete a client",
    description="Delete a client with all its orders",
)
async def delete_client(
    client_id: str,
    db: DbSession,
) -> MessageResponse:
    """Delete a client."""
    service = ClientService(db)
    client = await service.get_or_404(client_id)
    await service.delete(client)
    return MessageResponse(message="Client deleted successfully")
