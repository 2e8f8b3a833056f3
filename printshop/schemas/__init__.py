"""
Pydantic schemas for request/response validation.
"""

from printshop.schemas.user import (
    UserCreate,
    UserResponse,
    LoginRequest,
    LoginResponse,
)
from printshop.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientListResponse,
)
from printshop.schemas.order import (
    OrderCreate,
    OrderUpdate,
    OrderResponse,
    PayDebtRequest,
    OrderListResponse,
)
from printshop.schemas.clothes import (
    ClothesCreate,
    ClothesUpdate,
    ClothesResponse,
    ClothesTotalResponse,
    ClothingServiceCreate,
    ClothingServiceUpdate,
    ClothingServiceResponse,
)
from printshop.schemas.impression import (
    ImpressionCreate,
    ImpressionUpdate,
    ImpressionResponse,
)
from printshop.schemas.backup import BackupHeader, BackupInfoResponse, DatabaseBackup

__all__ = [
    # User
    "UserCreate",
    "UserResponse",
    "LoginRequest",
    "LoginResponse",
    # Client
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "ClientListResponse",
    # Order
    "OrderCreate",
    "OrderUpdate",
    "OrderResponse",
    "PayDebtRequest",
    "OrderListResponse",
    # Clothes
    "ClothesCreate",
    "ClothesUpdate",
    "ClothesResponse",
    "ClothesTotalResponse",
    "ClothingServiceCreate",
    "ClothingServiceUpdate",
    "ClothingServiceResponse",
    # Impression
    "ImpressionCreate",
    "ImpressionUpdate",
    "ImpressionResponse",
    # Backup
    "BackupHeader",
    "BackupInfoResponse",
    "DatabaseBackup",
]
