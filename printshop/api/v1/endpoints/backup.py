"""
Backup endpoints.
Full-database snapshot, restore and backup file description.
"""

from fastapi import APIRouter

from printshop.api.deps import DbSession
from printshop.schemas.backup import BackupInfoResponse
from printshop.schemas.base import MessageResponse
from printshop.services.backup import BackupService


router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    summary="Create a backup",
    description="Write a snapshot of the whole database, replacing the previous backup",
)
async def create_backup(
    db: DbSession,
) -> MessageResponse:
    """Create a database backup."""
    service = BackupService(db)
    message = await service.create_backup()
    return MessageResponse(message=message)


@router.post(
    "/restore",
    response_model=MessageResponse,
    summary="Restore the backup",
    description="Replace the whole database content with the backup",
)
async def restore_backup(
    db: DbSession,
) -> MessageResponse:
    """Restore the database from the backup file."""
    service = BackupService(db)
    message = await service.restore_backup()
    return MessageResponse(message=message)


@router.get(
    "",
    response_model=BackupInfoResponse,
    summary="Backup information",
)
async def get_backup_info(
    db: DbSession,
) -> BackupInfoResponse:
    """Describe the current backup file, if any."""
    service = BackupService(db)
    return BackupInfoResponse(info=await service.get_backup_info())
