"""
Database models module.
All SQLAlchemy models are exported from here for easy imports.
"""

from printshop.models.user import User, UserRole
from printshop.models.client import Client
from printshop.models.order import Order, OrderStatus
from printshop.models.clothes import (
    Clothes,
    ClothingService,
    ClothingSize,
    ClothingType,
    ServiceLocation,
    ServiceType,
)
from printshop.models.impression import Impression
from printshop.models.sequence import SequenceCounter


__all__ = [
    "User",
    "UserRole",
    "Client",
    "Order",
    "OrderStatus",
    "Clothes",
    "ClothingService",
    "ClothingSize",
    "ClothingType",
    "ServiceLocation",
    "ServiceType",
    "Impression",
    "SequenceCounter",
]
