"""
Backup snapshot schemas.

One class per table, plus the DatabaseBackup envelope. Timestamps and dates
travel as text and are parsed by the restore engine so that a bad value can
be reported with its record id and field. Optional columns added over the
schema's lifetime default to None; numeric fields accept numbers or numeric
strings.
"""

from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from printshop.core.exceptions import InvalidArgumentError
from printshop.models.clothes import ClothingType, ServiceLocation, ServiceType, load_sizes
from printshop.models.order import OrderStatus
from printshop.models.user import UserRole


BACKUP_VERSION = "1.0.0"


class SnapshotRow(BaseModel):
    """Common configuration of every snapshot row."""

    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    # Text fields converted to datetime on restore
    timestamp_fields: ClassVar[tuple[str, ...]] = ("created_at", "updated_at")
    # Text fields converted to date on restore
    date_fields: ClassVar[tuple[str, ...]] = ()

    id: str
    created_at: str
    updated_at: str


class UserBackup(SnapshotRow):
    login: str
    password: str
    role: UserRole


class ClientBackup(SnapshotRow):
    name: str
    nuit: str = ""
    contact: str = ""
    category: str = ""
    observations: str = ""
    debt: float = 0.0


class OrderBackup(SnapshotRow):
    date_fields: ClassVar[tuple[str, ...]] = ("due_date",)

    name: str
    client_id: str
    order_number: int
    client_requisition_number: int
    due_date: str | None = None
    discount: float | None = None
    iva: float | None = None
    subtotal: float
    total: float
    status: OrderStatus
    debt: float = 0.0


class ImpressionBackup(SnapshotRow):
    order_id: str
    name: str
    size: str = ""
    material: str = ""
    description: str = ""
    price: float


class ClothesBackup(SnapshotRow):
    order_id: str
    clothing_type: ClothingType
    custom_type: str | None = None
    unit_price: float
    sizes: str
    color: str = ""
    total_quantity: int

    @field_validator("sizes")
    @classmethod
    def check_sizes(cls, value: str) -> str:
        try:
            sizes = load_sizes(value)
        except (ValueError, TypeError, AttributeError, InvalidArgumentError) as e:
            raise ValueError(f"Invalid sizes {value!r}: {e}")
        if any(count < 0 for count in sizes.values()):
            raise ValueError(f"Invalid sizes {value!r}: negative quantity")
        return value

    @model_validator(mode="after")
    def check_total_quantity(self) -> "ClothesBackup":
        quantity = sum(load_sizes(self.sizes).values())
        if quantity != self.total_quantity:
            raise ValueError(
                f"total_quantity {self.total_quantity} does not match sizes ({quantity})"
            )
        return self


class ClothingServiceBackup(SnapshotRow):
    clothes_id: str
    service_type: ServiceType
    location: ServiceLocation
    description: str | None = None
    unit_price: float


class DatabaseBackup(BaseModel):
    """The whole snapshot file."""

    version: str = BACKUP_VERSION
    created_at: str
    users: list[UserBackup] = Field(default_factory=list)
    clients: list[ClientBackup] = Field(default_factory=list)
    orders: list[OrderBackup] = Field(default_factory=list)
    impressions: list[ImpressionBackup] = Field(default_factory=list)
    clothes: list[ClothesBackup] = Field(default_factory=list)
    clothing_services: list[ClothingServiceBackup] = Field(default_factory=list)


class BackupHeader(BaseModel):
    """Envelope fields read when only describing a backup file."""

    model_config = ConfigDict(extra="ignore")

    version: str = "unknown"
    created_at: str = "unknown"


class BackupInfoResponse(BaseModel):
    """Backup file description, None when no backup exists."""

    info: Optional[str] = None
