"""
Pytest configuration and fixtures.
"""

from pathlib import Path
from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from printshop import models  # noqa: F401
from printshop.core.config import settings
from printshop.core.database import Base, build_engine, build_session_factory, get_db
from printshop.main import app
from printshop.models.client import Client
from printshop.models.order import Order
from printshop.schemas.client import ClientCreate
from printshop.schemas.order import OrderCreate
from printshop.services.client import ClientService
from printshop.services.order import OrderService


async def create_test_engine(path: Path) -> AsyncEngine:
    """SQLite engine on a fresh file with every table created."""
    engine = build_engine(
        f"sqlite+aiosqlite:///{path}",
        poolclass=NullPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    return engine


@pytest.fixture
async def test_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine."""
    engine = await create_test_engine(tmp_path / "test.db")
    yield engine
    await engine.dispose()


@pytest.fixture
async def restore_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """A second, empty database to restore into."""
    engine = await create_test_engine(tmp_path / "restored.db")
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return build_session_factory(test_engine)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def backup_path(tmp_path: Path) -> Path:
    """Backup file location for the test."""
    return tmp_path / "backups" / "database_backup.json"


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create test client. Each request gets its own session and transaction,
    as with the real get_db.
    """

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    monkeypatch.setattr(settings, "BACKUP_DIR", str(tmp_path / "backups"))
    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_client(db_session: AsyncSession):
    """Factory creating clients through the service."""

    async def _make_client(name: str = "Acme Lda", **kwargs) -> Client:
        return await ClientService(db_session).create(ClientCreate(name=name, **kwargs))

    return _make_client


@pytest.fixture
def make_order(db_session: AsyncSession):
    """Factory creating orders through the service."""

    async def _make_order(client: Client, name: str = "Order", **kwargs) -> Order:
        return await OrderService(db_session).create(
            OrderCreate(name=name, client_id=client.id, **kwargs)
        )

    return _make_order
