"""
Client schemas for request/response validation.
"""

from pydantic import Field

from printshop.schemas.base import BaseSchema, PaginatedResponse, TimestampSchema


class ClientBase(BaseSchema):
    """Base client schema with common fields."""

    name: str = Field(..., min_length=1, max_length=255)
    nuit: str = Field(default="", max_length=100)
    contact: str = Field(default="", max_length=255)
    category: str = Field(default="", max_length=100)
    observations: str = ""


class ClientCreate(ClientBase):
    """Schema for creating a new client."""
    pass


class ClientUpdate(BaseSchema):
    """Schema for updating a client. Debt is derived and cannot be set."""

    name: str | None = Field(None, min_length=1, max_length=255)
    nuit: str | None = Field(None, max_length=100)
    contact: str | None = Field(None, max_length=255)
    category: str | None = Field(None, max_length=100)
    observations: str | None = None


class ClientResponse(ClientBase, TimestampSchema):
    """Client response schema."""

    id: str
    debt: float


class ClientListResponse(PaginatedResponse):
    """Paginated client list response."""

    items: list[ClientResponse]
