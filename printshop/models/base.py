"""
Base model with common fields and utilities.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Type, TypeVar

from sqlalchemy import DateTime, String, Enum as SQLEnum, func
from sqlalchemy.orm import Mapped, mapped_column

from printshop.core.database import Base
from printshop.core.exceptions import InvalidArgumentError


E = TypeVar("E", bound="ValueEnum")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class ValueEnum(str, Enum):
    """
    String enumeration persisted by value.

    The member list is the complete mapping between stored text and
    in-memory values; anything else is rejected.
    """

    @classmethod
    def parse(cls: Type[E], value) -> E:
        """Return the member for a stored value or raise InvalidArgumentError."""
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgumentError(
                f"Invalid {cls.__name__} value: {value!r}",
                details={"allowed": [m.value for m in cls]},
            )


def enum_column(enum_cls: Type[ValueEnum]) -> SQLEnum:
    """Column type storing an enum's values as text, validated on read and write."""
    return SQLEnum(
        enum_cls,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        validate_strings=True,
        length=32,
    )


class TimestampMixin:
    """Mixin for adding created_at and updated_at timestamps."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )


class BaseModel(Base, TimestampMixin):
    """
    Abstract base model with a UUID text ID and timestamps.
    All entity models inherit from this.
    """

    __abstract__ = True

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)
