"""
API v1 router - aggregates all endpoint routers.
"""

from fastapi import APIRouter

from printshop.api.v1.endpoints import (
    users,
    clients,
    orders,
    clothes,
    impressions,
    backup,
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    users.router,
    prefix="/users",
    tags=["Users"],
)

api_router.include_router(
    clients.router,
    prefix="/clients",
    tags=["Clients"],
)

api_router.include_router(
    orders.router,
    prefix="/orders",
    tags=["Orders"],
)

api_router.include_router(
    clothes.router,
    prefix="/clothes",
    tags=["Clothes"],
)

api_router.include_router(
    impressions.router,
    prefix="/impressions",
    tags=["Impressions"],
)

api_router.include_router(
    backup.router,
    prefix="/backup",
    tags=["Backup"],
)
