"""
Backup service.
Full-database JSON snapshot and restore.

The snapshot holds every row of the six entity tables. Restoring replaces
the whole database content with the snapshot in one transaction and then
rebuilds the sequence counters.
"""

import asyncio
import logging
import os
import tempfile
from datetime import date, datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Type

from pydantic import ValidationError
from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from printshop.core.config import settings
from printshop.core.database import store_errors
from printshop.core.exceptions import NotFoundError, ParseError
from printshop.models.base import BaseModel, utcnow
from printshop.models.client import Client
from printshop.models.clothes import Clothes, ClothingService
from printshop.models.impression import Impression
from printshop.models.order import Order
from printshop.models.user import User
from printshop.schemas.backup import (
    BACKUP_VERSION,
    BackupHeader,
    DatabaseBackup,
    SnapshotRow,
)
from printshop.services.sequence import SequenceAllocator

logger = logging.getLogger(__name__)


# (snapshot key, record label, model), parents before children
SNAPSHOT_TABLES = (
    ("users", "user", User),
    ("clients", "client", Client),
    ("orders", "order", Order),
    ("impressions", "impression", Impression),
    ("clothes", "clothes", Clothes),
    ("clothing_services", "clothing service", ClothingService),
)


def _export_value(value: Any) -> Any:
    """Convert a column value to its snapshot representation."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def _parse_timestamp(text: str) -> datetime:
    value = datetime.fromisoformat(text)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _restore_row(label: str, record: SnapshotRow) -> Dict[str, Any]:
    """
    Column values of one snapshot record, timestamps and dates parsed.

    Raises:
        ParseError: Naming the record id and the field that failed
    """
    row = record.model_dump()

    for field in record.timestamp_fields + record.date_fields:
        text = row.get(field)
        if text is None:
            continue
        try:
            if field in record.date_fields:
                row[field] = date.fromisoformat(text)
            else:
                row[field] = _parse_timestamp(text)
        except ValueError as e:
            raise ParseError(
                f"Failed to parse {field} for {label} {record.id}: {e}",
                details={"id": record.id, "field": field, "value": text},
            )

    return row


def _write_atomically(path: Path, content: str) -> None:
    """Replace the file at path with content; readers never see a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


class BackupService:
    """Service for database backup and restore."""

    def __init__(self, db: AsyncSession, backup_path: Optional[Path] = None):
        self.db = db
        self.backup_path = Path(backup_path) if backup_path else settings.backup_path

    async def _begin_snapshot_read(self) -> None:
        """Pin one consistent view of the database for the table reads."""
        if self.db.in_transaction():
            return
        if self.db.get_bind().dialect.name == "postgresql":
            await self.db.connection(
                execution_options={"isolation_level": "REPEATABLE READ"}
            )

    async def _export_table(self, model: Type[BaseModel]) -> List[Dict[str, Any]]:
        """All rows of a table, oldest first, as snapshot dicts."""
        result = await self.db.execute(
            select(*model.__table__.columns)
            .order_by(model.created_at, model.id)
        )
        return [
            {key: _export_value(value) for key, value in row.items()}
            for row in result.mappings().all()
        ]

    async def create_backup(self) -> str:
        """
        Write a snapshot of the whole database to the backup file,
        replacing the previous one.

        Returns:
            Success message with the backup path

        Raises:
            StoreFailureError: If reading the tables or writing the file fails
        """
        with store_errors("create backup"):
            await self._begin_snapshot_read()
            tables = {}
            for key, _, model in SNAPSHOT_TABLES:
                tables[key] = await self._export_table(model)

        snapshot = DatabaseBackup(
            version=BACKUP_VERSION,
            created_at=_export_value(utcnow()),
            **tables,
        )
        content = snapshot.model_dump_json(indent=2)

        with store_errors("write backup file"):
            await asyncio.to_thread(_write_atomically, self.backup_path, content)

        counts = ", ".join(f"{key}={len(rows)}" for key, rows in tables.items())
        logger.info(f"Backup written to {self.backup_path} ({counts})")
        return f"Database backup completed successfully! Saved to: {self.backup_path}"

    async def load_backup(self) -> DatabaseBackup:
        """
        Read and validate the backup file.

        Raises:
            NotFoundError: If there is no backup file
            ParseError: If the file is not a valid snapshot
            StoreFailureError: If the file cannot be read
        """
        if not self.backup_path.exists():
            raise NotFoundError(f"Backup file not found at: {self.backup_path}")

        with store_errors("read backup file"):
            content = await asyncio.to_thread(
                self.backup_path.read_text, encoding="utf-8"
            )

        try:
            return DatabaseBackup.model_validate_json(content)
        except ValidationError as e:
            raise ParseError(
                f"Failed to parse backup file: {e}",
                details={"errors": e.errors(include_url=False, include_context=False)},
            )

    async def restore_backup(self) -> str:
        """
        Replace the database content with the backup file.

        Every record is parsed before the database is touched. Deletion
        runs children first and insertion parents first, inside a single
        savepoint: any failure leaves the previous content in place.
        Restoring the same file twice yields the same tables.

        Returns:
            Success message with the snapshot creation time

        Raises:
            NotFoundError: If there is no backup file
            ParseError: If the file or one of its timestamps is invalid
            StoreFailureError: If deleting or inserting fails
        """
        snapshot = await self.load_backup()

        tables = [
            (model, [_restore_row(label, record) for record in getattr(snapshot, key)])
            for key, label, model in SNAPSHOT_TABLES
        ]

        with store_errors("restore backup"):
            async with self.db.begin_nested():
                for model, _ in reversed(tables):
                    await self.db.execute(
                        delete(model).execution_options(synchronize_session=False)
                    )
                for model, rows in tables:
                    if rows:
                        await self.db.execute(insert(model), rows)
                await SequenceAllocator(self.db).reset_from_orders()

        self.db.expire_all()

        counts = ", ".join(f"{model.__tablename__}={len(rows)}" for model, rows in tables)
        logger.info(f"Backup restored from {self.backup_path} ({counts})")
        return f"Database restored successfully from backup created on {snapshot.created_at}"

    async def get_backup_info(self) -> Optional[str]:
        """
        Describe the backup file.

        Returns:
            None if there is no backup, otherwise a message with version,
            creation time and size. A damaged file is reported in the
            message instead of raising.
        """
        if not self.backup_path.exists():
            return None

        with store_errors("read backup file metadata"):
            size = self.backup_path.stat().st_size

        try:
            content = await asyncio.to_thread(
                self.backup_path.read_text, encoding="utf-8"
            )
        except (OSError, UnicodeDecodeError):
            return f"Backup file found but unreadable - Size: {size} bytes"

        try:
            header = BackupHeader.model_validate_json(content)
        except ValidationError:
            return f"Backup file found but corrupted - Size: {size} bytes"

        return (
            f"Backup found - Version: {header.version}, "
            f"Created: {header.created_at}, File size: {size} bytes"
        )
