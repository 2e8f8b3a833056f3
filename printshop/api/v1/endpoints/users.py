"""
User endpoints.
User creation, login check and listing.
"""

from fastapi import APIRouter, status

from printshop.api.deps import DbSession
from printshop.schemas.user import (
    UserCreate,
    UserResponse,
    LoginRequest,
    LoginResponse,
)
from printshop.services.user import UserService


router = APIRouter()


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
    description="Create a user with role 'admin' or 'user'",
)
async def create_user(
    data: UserCreate,
    db: DbSession,
) -> UserResponse:
    """Create a new user."""
    service = UserService(db)
    user = await service.create(data)
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=LoginResponse,
    summary="Log in",
    description="Check login and password; failures are reported in the body",
)
async def login(
    data: LoginRequest,
    db: DbSession,
) -> LoginResponse:
    """Check user credentials."""
    service = UserService(db)
    return await service.login(data)


@router.get(
    "",
    response_model=list[UserResponse],
    summary="List users",
)
async def list_users(
    db: DbSession,
) -> list[UserResponse]:
    """List all users."""
    service = UserService(db)
    users = await service.list()
    return [UserResponse.model_validate(u) for u in users]
