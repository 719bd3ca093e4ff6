"""
SQLAlchemy models for the Havens POS backend.

Import models from here:
    from havens_api.models import Staff, MenuItem, Table
"""

from .base import Base, TimestampMixin, utcnow, utc_today, day_range
from .staff import Staff
from .catalog import MenuCategory, MenuItem
from .table import Table
from .order import Order, OrderItem, KitchenOrderStatus
from .reception import Reservation, WaitingGuest, GuestCheckin
from .performance import StaffPerformance

__all__ = [
    "Base",
    "TimestampMixin",
    "utcnow",
    "utc_today",
    "day_range",
    "Staff",
    "MenuCategory",
    "MenuItem",
    "Table",
    "Order",
    "OrderItem",
    "KitchenOrderStatus",
    "Reservation",
    "WaitingGuest",
    "GuestCheckin",
    "StaffPerformance",
]
