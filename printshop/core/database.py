"""
Database engine, session factory and declarative base.

The engine is built explicitly and handed to the session factory; services
receive an AsyncSession and never reach for a global connection.
"""

import logging
from contextlib import contextmanager
from typing import AsyncGenerator, Iterator

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from printshop.core.config import settings
from printshop.core.exceptions import StoreFailureError


logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


def _install_sqlite_hooks(engine: AsyncEngine) -> None:
    """
    Enforce foreign keys and let SQLAlchemy drive transactions on SQLite.

    The sqlite driver manages BEGIN on its own and breaks SAVEPOINT, so
    autocommit is switched off at the driver level and BEGIN IMMEDIATE is
    emitted explicitly. Writers then queue on the database lock at the start
    of their transaction instead of failing when they upgrade a read lock.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str, **kwargs) -> AsyncEngine:
    """Create an async engine for the given URL."""
    engine = create_async_engine(url, pool_pre_ping=True, **kwargs)
    if engine.dialect.name == "sqlite":
        _install_sqlite_hooks(engine)
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to the given engine."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


engine = build_engine(settings.DATABASE_URL)
AsyncSessionLocal = build_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one session per request.
    The request's work is committed on success and rolled back on any error.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Create all tables (development only, migrations handle production)."""
    from printshop import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the connection pool."""
    await engine.dispose()


@contextmanager
def store_errors(action: str) -> Iterator[None]:
    """Translate storage errors raised inside the block into StoreFailureError."""
    try:
        yield
    except (SQLAlchemyError, OSError) as e:
        logger.error(f"Failed to {action}: {e}")
        raise StoreFailureError(f"Failed to {action}: {e}") from e
