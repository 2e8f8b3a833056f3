"""
User service.
Handles desk users: creation, login check and listing.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import logging

from printshop.core.exceptions import InvalidArgumentError
from printshop.core.security import hash_password, verify_password
from printshop.models.user import User, UserRole
from printshop.schemas.user import LoginRequest, LoginResponse, UserCreate

logger = logging.getLogger(__name__)


class UserService:
    """Service for user operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_login(self, login: str) -> User | None:
        """Get user by login."""
        result = await self.db.execute(
            select(User).where(User.login == login)
        )
        return result.scalar_one_or_none()

    async def create(self, data: UserCreate) -> User:
        """
        Create a user with a hashed password.

        Args:
            data: User data

        Returns:
            Created user

        Raises:
            InvalidArgumentError: If the role is unknown or the login is taken
        """
        role = UserRole.parse(data.role)

        if await self.get_by_login(data.login):
            raise InvalidArgumentError(f"A user with login '{data.login}' already exists")

        user = User(
            login=data.login,
            password=hash_password(data.password),
            role=role,
        )

        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)

        logger.info(f"User created: {user.login} ({user.role.value})")
        return user

    async def login(self, data: LoginRequest) -> LoginResponse:
        """
        Check login credentials.
        A failed login is reported in the response, not raised.

        Args:
            data: Login credentials

        Returns:
            Login outcome
        """
        user = await self.get_by_login(data.login)

        if not user or not verify_password(data.password, user.password):
            logger.info(f"Failed login attempt for '{data.login}'")
            return LoginResponse(
                success=False,
                message="Invalid login or password",
            )

        return LoginResponse(
            id=user.id,
            login=user.login,
            role=user.role.value,
            success=True,
            message="Login successful",
        )

    async def list(self) -> List[User]:
        """List users by login."""
        result = await self.db.execute(
            select(User).order_by(User.login)
        )
        return list(result.scalars().all())
