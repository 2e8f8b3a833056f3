"""
Backup and restore tests.
"""

import json
from pathlib import Path

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from printshop.core.database import build_session_factory
from printshop.core.exceptions import NotFoundError, ParseError, StoreFailureError
from printshop.models.client import Client
from printshop.models.clothes import (
    Clothes,
    ClothingService,
    ClothingSize,
    ClothingType,
    ServiceLocation,
    ServiceType,
)
from printshop.models.order import Order
from printshop.models.user import User
from printshop.schemas.clothes import ClothesCreate, ClothingServiceCreate
from printshop.schemas.impression import ImpressionCreate
from printshop.schemas.user import UserCreate
from printshop.services.backup import SNAPSHOT_TABLES, BackupService
from printshop.services.clothes import ClothesService
from printshop.services.impression import ImpressionService
from printshop.services.order import OrderService
from printshop.services.sequence import SequenceAllocator
from printshop.services.user import UserService


CLIENT_ID = "0b5e6f0e-3c1a-4c35-9a57-0c8e3e0d2a11"
ORDER_ID = "5f0c1c8e-8a0b-4d7c-b0f4-2f7f1f5e9b22"
CLOTHES_ID = "a3d2f6a4-1e7b-4a51-8f0e-9b1c2d3e4f33"
SERVICE_ID = "c9e8d7f6-5a4b-4c3d-8e2f-1a0b9c8d7e44"
STAMP = "2024-05-01T09:30:00Z"


def _snapshot(**overrides) -> dict:
    """
    A one-order snapshot written the way an older export would: the
    clothing service is listed before its clothes, money is text and the
    optional columns are missing.
    """
    snapshot = {
        "version": "1.0.0",
        "created_at": STAMP,
        "users": [],
        "clients": [
            {
                "id": CLIENT_ID,
                "name": "Escola Nova",
                "nuit": "400123456",
                "contact": "82 123 4567",
                "category": "school",
                "observations": "",
                "debt": 117.0,
                "created_at": STAMP,
                "updated_at": STAMP,
            }
        ],
        "orders": [
            {
                "id": ORDER_ID,
                "name": "Uniforms",
                "client_id": CLIENT_ID,
                "order_number": 7,
                "client_requisition_number": 3,
                "subtotal": "117.00",
                "total": "117.00",
                "status": "in_production",
                "debt": 117.0,
                "created_at": STAMP,
                "updated_at": STAMP,
            }
        ],
        "impressions": [],
        "clothing_services": [
            {
                "id": SERVICE_ID,
                "clothes_id": CLOTHES_ID,
                "service_type": "embroidery",
                "location": "front_left",
                "unit_price": 1.5,
                "created_at": STAMP,
                "updated_at": STAMP,
            }
        ],
        "clothes": [
            {
                "id": CLOTHES_ID,
                "order_id": ORDER_ID,
                "clothing_type": "uniform_shirts",
                "unit_price": "11.5",
                "sizes": '{"M": 6, "L": 3}',
                "color": "white",
                "total_quantity": 9,
                "created_at": STAMP,
                "updated_at": STAMP,
            }
        ],
    }
    snapshot.update(overrides)
    return snapshot


def _write(path: Path, content) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = content if isinstance(content, str) else json.dumps(content)
    path.write_text(text, encoding="utf-8")


async def _populate(db_session: AsyncSession, make_client, make_order) -> None:
    await UserService(db_session).create(UserCreate(login="admin", password="secret", role="admin"))
    client = await make_client("Hotel Mar", nuit="123", contact="84 555", category="hotel")
    order = await make_order(client, name="Aprons", iva=16.0, discount=2.5)
    await make_order(client, name="Empty order")

    await ClothesService(db_session).create(
        ClothesCreate(
            order_id=order.id,
            clothing_type=ClothingType.OTHER,
            custom_type="Chef hats",
            unit_price=7.25,
            sizes={ClothingSize.M: 4, ClothingSize.XXL: 1},
            services=[
                ClothingServiceCreate(
                    service_type=ServiceType.EMBROIDERY,
                    location=ServiceLocation.CUSTOM,
                    description="Hotel logo",
                    unit_price=2.0,
                )
            ],
        )
    )
    await ImpressionService(db_session).create(
        ImpressionCreate(order_id=order.id, name="Menu", size="A3", material="Paper", price=12.0)
    )
    await OrderService(db_session).pay_debt(order.id, 10.0)


async def _export(db_session: AsyncSession) -> dict:
    service = BackupService(db_session)
    return {key: await service._export_table(model) for key, _, model in SNAPSHOT_TABLES}


async def _count(db_session: AsyncSession, model) -> int:
    return (await db_session.execute(select(func.count()).select_from(model))).scalar_one()


@pytest.mark.asyncio
async def test_backup_then_restore_into_empty_store(
    db_session: AsyncSession, make_client, make_order, backup_path: Path, restore_engine
):
    """Every row survives a round trip into a fresh database."""
    await _populate(db_session, make_client, make_order)
    await db_session.commit()
    original = await _export(db_session)

    message = await BackupService(db_session, backup_path).create_backup()
    assert str(backup_path) in message
    assert json.loads(backup_path.read_text())["version"] == "1.0.0"

    async with build_session_factory(restore_engine)() as other_session:
        await BackupService(other_session, backup_path).restore_backup()
        await other_session.commit()

        assert await _export(other_session) == original
        assert await SequenceAllocator(other_session).next_order_number() == 3


@pytest.mark.asyncio
async def test_restore_replaces_existing_content(
    db_session: AsyncSession, make_client, make_order, backup_path: Path
):
    """Rows absent from the snapshot are gone after a restore."""
    await make_order(await make_client("Old client"))
    _write(backup_path, _snapshot())

    await BackupService(db_session, backup_path).restore_backup()

    clients = (await db_session.execute(select(Client))).scalars().all()
    assert [c.id for c in clients] == [CLIENT_ID]
    assert await _count(db_session, Order) == 1


@pytest.mark.asyncio
async def test_restore_accepts_older_snapshot_shape(db_session: AsyncSession, backup_path: Path):
    """Service before its clothes, money as text and missing optional columns."""
    _write(backup_path, _snapshot())

    message = await BackupService(db_session, backup_path).restore_backup()
    assert STAMP in message

    order = (await db_session.execute(select(Order))).scalar_one()
    assert order.subtotal == 117.0
    assert order.total == 117.0
    assert order.due_date is None
    assert order.iva is None
    assert order.discount is None

    clothes = (await db_session.execute(select(Clothes))).scalar_one()
    assert clothes.unit_price == 11.5
    assert clothes.custom_type is None
    assert clothes.sizes_map == {ClothingSize.M: 6, ClothingSize.L: 3}
    assert [s.id for s in clothes.services] == [SERVICE_ID]

    service = await db_session.get(ClothingService, SERVICE_ID)
    assert service.description is None


@pytest.mark.asyncio
async def test_restore_rebuilds_sequences(db_session: AsyncSession, backup_path: Path):
    """Numbering continues after the restored orders."""
    _write(backup_path, _snapshot())
    await BackupService(db_session, backup_path).restore_backup()

    sequences = SequenceAllocator(db_session)
    assert await sequences.next_order_number() == 8
    assert await sequences.next_requisition_number(CLIENT_ID) == 4


@pytest.mark.asyncio
async def test_restore_is_idempotent(db_session: AsyncSession, backup_path: Path):
    """Restoring the same file twice yields identical tables."""
    _write(backup_path, _snapshot())
    service = BackupService(db_session, backup_path)

    await service.restore_backup()
    first = await _export(db_session)
    await service.restore_backup()

    assert await _export(db_session) == first


@pytest.mark.asyncio
async def test_restore_reports_bad_timestamp(
    db_session: AsyncSession, make_client, backup_path: Path
):
    """A bad date names the record and field, and nothing is changed."""
    existing = await make_client("Keep me")
    snapshot = _snapshot()
    snapshot["orders"][0]["due_date"] = "31/12/2024"
    _write(backup_path, snapshot)

    with pytest.raises(ParseError) as exc_info:
        await BackupService(db_session, backup_path).restore_backup()

    assert ORDER_ID in exc_info.value.message
    assert "due_date" in exc_info.value.message
    assert exc_info.value.details["field"] == "due_date"

    clients = (await db_session.execute(select(Client))).scalars().all()
    assert [c.id for c in clients] == [existing.id]


@pytest.mark.asyncio
async def test_failed_restore_keeps_previous_content(
    db_session: AsyncSession, make_client, make_order, backup_path: Path
):
    """An insert failure rolls the whole restore back."""
    existing = await make_client("Keep me")
    await make_order(existing)
    snapshot = _snapshot()
    snapshot["orders"][0]["client_id"] = "no-such-client"
    _write(backup_path, snapshot)

    with pytest.raises(StoreFailureError):
        await BackupService(db_session, backup_path).restore_backup()

    clients = (await db_session.execute(select(Client))).scalars().all()
    assert [c.id for c in clients] == [existing.id]
    assert await _count(db_session, Order) == 1


@pytest.mark.asyncio
async def test_restore_rejects_unknown_enum_value(db_session: AsyncSession, backup_path: Path):
    """Enum values outside the current table fail the parse."""
    snapshot = _snapshot()
    snapshot["orders"][0]["status"] = "shipped"
    _write(backup_path, snapshot)

    with pytest.raises(ParseError):
        await BackupService(db_session, backup_path).restore_backup()


@pytest.mark.asyncio
async def test_restore_rejects_invalid_json(db_session: AsyncSession, backup_path: Path):
    """A file that is not JSON is a parse error."""
    _write(backup_path, "{not json")

    with pytest.raises(ParseError):
        await BackupService(db_session, backup_path).restore_backup()


@pytest.mark.asyncio
async def test_restore_without_backup_file(db_session: AsyncSession, backup_path: Path):
    """Restoring with no backup file fails with NotFoundError."""
    with pytest.raises(NotFoundError):
        await BackupService(db_session, backup_path).restore_backup()


@pytest.mark.asyncio
async def test_backup_overwrites_previous_file(
    db_session: AsyncSession, make_client, backup_path: Path
):
    """Only one backup file is kept and no temporary files remain."""
    service = BackupService(db_session, backup_path)
    await service.create_backup()
    await make_client("Added later")
    await service.create_backup()

    content = json.loads(backup_path.read_text())
    assert [c["name"] for c in content["clients"]] == ["Added later"]
    assert sorted(p.name for p in backup_path.parent.iterdir()) == [backup_path.name]


@pytest.mark.asyncio
async def test_backup_carries_password_hash(db_session: AsyncSession, backup_path: Path):
    """Users are exported with their stored hash, never the plain password."""
    await UserService(db_session).create(UserCreate(login="desk", password="s3cret"))
    await BackupService(db_session, backup_path).create_backup()

    user = json.loads(backup_path.read_text())["users"][0]
    stored = (await db_session.execute(select(User))).scalar_one()
    assert user["password"] == stored.password
    assert user["password"] != "s3cret"
    assert user["role"] == "user"


@pytest.mark.asyncio
async def test_backup_info(db_session: AsyncSession, backup_path: Path):
    """Info is None without a file and reports corruption instead of raising."""
    service = BackupService(db_session, backup_path)
    assert await service.get_backup_info() is None

    await service.create_backup()
    info = await service.get_backup_info()
    assert info.startswith("Backup found - Version: 1.0.0")
    assert "bytes" in info

    _write(backup_path, "garbage")
    info = await service.get_backup_info()
    assert "corrupted" in info


@pytest.mark.asyncio
@pytest.mark.parametrize("sizes", ["not json", '{"XS": 9}', '["M"]', '{"M": -1, "L": 10}'])
async def test_restore_rejects_invalid_sizes(
    db_session: AsyncSession, make_client, backup_path: Path, sizes: str
):
    """Sizes text that cannot be read back fails the parse and changes nothing."""
    existing = await make_client("Keep me")
    snapshot = _snapshot()
    snapshot["clothes"][0]["sizes"] = sizes
    _write(backup_path, snapshot)

    with pytest.raises(ParseError):
        await BackupService(db_session, backup_path).restore_backup()

    clients = (await db_session.execute(select(Client))).scalars().all()
    assert [c.id for c in clients] == [existing.id]
    assert await _count(db_session, Clothes) == 0


@pytest.mark.asyncio
async def test_restore_rejects_quantity_not_matching_sizes(
    db_session: AsyncSession, backup_path: Path
):
    """total_quantity must equal the sum of the sizes map."""
    snapshot = _snapshot()
    snapshot["clothes"][0]["total_quantity"] = 10
    _write(backup_path, snapshot)

    with pytest.raises(ParseError) as exc_info:
        await BackupService(db_session, backup_path).restore_backup()

    assert "total_quantity" in exc_info.value.message


@pytest.mark.asyncio
async def test_restore_rejects_non_finite_amount(db_session: AsyncSession, backup_path: Path):
    """NaN or infinite money in a snapshot is a parse error."""
    snapshot = _snapshot()
    snapshot["orders"][0]["total"] = "Infinity"
    _write(backup_path, snapshot)

    with pytest.raises(ParseError):
        await BackupService(db_session, backup_path).restore_backup()
