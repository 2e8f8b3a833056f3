"""
User schemas for request/response validation.
"""

from pydantic import Field

from printshop.schemas.base import BaseSchema, TimestampSchema
from printshop.models.user import UserRole


class UserCreate(BaseSchema):
    """Schema for creating a new user."""

    login: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)
    role: str = UserRole.USER.value


class LoginRequest(BaseSchema):
    """Login credentials."""

    login: str
    password: str


class LoginResponse(BaseSchema):
    """Login outcome. Failed logins are reported, not raised."""

    id: str = ""
    login: str = ""
    role: str = ""
    success: bool
    message: str


class UserResponse(TimestampSchema):
    """User response schema (public data)."""

    id: str
    login: str
    role: UserRole
