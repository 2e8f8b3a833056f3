"""
User model for desk authentication.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from printshop.models.base import BaseModel, ValueEnum, enum_column


class UserRole(ValueEnum):
    """User role enumeration."""
    ADMIN = "admin"
    USER = "user"


class User(BaseModel):
    """
    User model.

    Attributes:
        login: Unique login name
        password: Bcrypt hashed password
        role: admin or user
    """

    __tablename__ = "users"

    login: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
    )
    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )
    role: Mapped[UserRole] = mapped_column(
        enum_column(UserRole),
        default=UserRole.USER,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, login='{self.login}', role='{self.role}')>"
