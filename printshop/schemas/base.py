"""
Base schema configuration and common schemas.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict


class BaseSchema(BaseModel):
    """
    Base schema for API payloads.
    Reads ORM objects directly, strips surrounding whitespace from text
    and rejects infinite or NaN numbers.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        allow_inf_nan=False,
    )


class TimestampSchema(BaseSchema):
    """Schema with the created_at/updated_at pair every table carries."""

    created_at: datetime
    updated_at: datetime


class PaginatedResponse(BaseSchema):
    """Paging fields of a list response. Subclasses add the items."""

    total: int
    page: int
    per_page: int
    pages: int

    @staticmethod
    def page_fields(total: int, page: int, per_page: int) -> dict:
        """total/page/per_page/pages for a page of results."""
        pages = (total + per_page - 1) // per_page if per_page > 0 else 0
        return {"total": total, "page": page, "per_page": per_page, "pages": pages}


class MessageResponse(BaseSchema):
    """Outcome message of an action without a resource body."""

    message: str
    success: bool = True
