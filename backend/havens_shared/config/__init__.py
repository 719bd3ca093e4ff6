"""
Configuration module: Settings, logging, constants.
"""

from havens_shared.config.settings import settings, DATABASE_URL
from havens_shared.config.logging import get_logger, setup_logging
from havens_shared.config.constants import (
    Roles,
    Permissions,
    ROLE_PERMISSIONS,
    ReservationStatus,
    WaitingStatus,
    KitchenStatus,
    Limits,
    has_permission,
    role_dashboard,
)

__all__ = [
    # settings
    "settings",
    "DATABASE_URL",
    # logging
    "get_logger",
    "setup_logging",
    # constants
    "Roles",
    "Permissions",
    "ROLE_PERMISSIONS",
    "ReservationStatus",
    "WaitingStatus",
    "KitchenStatus",
    "Limits",
    "has_permission",
    "role_dashboard",
]
