"""
Centralized constants for the backend application.

Usage:
    from havens_shared.config.constants import Roles, Permissions, has_permission

    if has_permission(staff.role, Permissions.MANAGE_MENU):
        ...
"""

from typing import Final


# =============================================================================
# Staff Roles
# =============================================================================


class Roles:
    """Staff role constants (stored lowercase in the staff table)."""

    ADMIN: Final[str] = "admin"
    MANAGER: Final[str] = "manager"
    WAITER: Final[str] = "waiter"
    RECEPTIONIST: Final[str] = "receptionist"
    CHEF: Final[str] = "chef"

    ALL: Final[list[str]] = [ADMIN, MANAGER, WAITER, RECEPTIONIST, CHEF]


# =============================================================================
# Permissions
# =============================================================================


class Permissions:
    """Capabilities granted to roles."""

    MANAGE_STAFF: Final[str] = "manage_staff"
    MANAGE_MENU: Final[str] = "manage_menu"
    MANAGE_TABLES: Final[str] = "manage_tables"
    VIEW_ANALYTICS: Final[str] = "view_analytics"
    VIEW_TABLES: Final[str] = "view_tables"
    VIEW_MENU: Final[str] = "view_menu"
    POS: Final[str] = "pos"
    KITCHEN: Final[str] = "kitchen"


ROLE_PERMISSIONS: Final[dict[str, frozenset[str]]] = {
    Roles.ADMIN: frozenset({
        Permissions.MANAGE_STAFF,
        Permissions.MANAGE_MENU,
        Permissions.MANAGE_TABLES,
        Permissions.VIEW_ANALYTICS,
        Permissions.POS,
        Permissions.KITCHEN,
    }),
    Roles.MANAGER: frozenset({
        Permissions.MANAGE_MENU,
        Permissions.MANAGE_TABLES,
        Permissions.VIEW_ANALYTICS,
        Permissions.POS,
        Permissions.KITCHEN,
    }),
    Roles.WAITER: frozenset({Permissions.POS, Permissions.VIEW_TABLES}),
    Roles.RECEPTIONIST: frozenset({Permissions.MANAGE_TABLES, Permissions.POS}),
    Roles.CHEF: frozenset({Permissions.KITCHEN, Permissions.VIEW_MENU}),
}

ROLE_DASHBOARDS: Final[dict[str, str]] = {
    Roles.ADMIN: "/admin-dashboard",
    Roles.MANAGER: "/dashboard",
    Roles.WAITER: "/pos",
    Roles.RECEPTIONIST: "/reception-dashboard",
    Roles.CHEF: "/kitchen",
}
DEFAULT_DASHBOARD: Final[str] = "/pos"


def permissions_for(role: str | None) -> frozenset[str]:
    """Permission set for a role. Unknown roles get no permissions."""
    return ROLE_PERMISSIONS.get(role or "", frozenset())


def has_permission(role: str | None, permission: str) -> bool:
    """True when the role grants the permission."""
    return permission in permissions_for(role)


def role_dashboard(role: str | None) -> str:
    """Landing page path for a role."""
    return ROLE_DASHBOARDS.get(role or "", DEFAULT_DASHBOARD)


# =============================================================================
# Entity Status Constants
# =============================================================================


class ReservationStatus:
    """Reservation status constants."""

    CONFIRMED: Final[str] = "confirmed"
    SEATED: Final[str] = "seated"
    CANCELLED: Final[str] = "cancelled"
    NO_SHOW: Final[str] = "no_show"

    ALL: Final[list[str]] = [CONFIRMED, SEATED, CANCELLED, NO_SHOW]


class WaitingStatus:
    """Waiting-list entry status constants."""

    WAITING: Final[str] = "waiting"
    SEATED: Final[str] = "seated"

    ALL: Final[list[str]] = [WAITING, SEATED]


class KitchenStatus:
    """Kitchen status of a submitted order."""

    PENDING: Final[str] = "pending"
    PREPARING: Final[str] = "preparing"
    READY: Final[str] = "ready"
    COMPLETED: Final[str] = "completed"

    # Position in the forward-only lifecycle
    ORDER: Final[list[str]] = [PENDING, PREPARING, READY, COMPLETED]
    ACTIVE: Final[list[str]] = [PENDING, PREPARING, READY]


class OrderPriority:
    """Kitchen priority constants."""

    LOW: Final[str] = "low"
    NORMAL: Final[str] = "normal"
    HIGH: Final[str] = "high"

    ALL: Final[list[str]] = [LOW, NORMAL, HIGH]


def can_transition_kitchen(from_status: str, to_status: str) -> bool:
    """
    Kitchen status only moves forward. Skipping ahead is allowed,
    staying in place or going back is not.
    """
    order = KitchenStatus.ORDER
    if from_status not in order or to_status not in order:
        return False
    return order.index(to_status) > order.index(from_status)


# =============================================================================
# Limits
# =============================================================================


class Limits:
    """Validation limits."""

    MIN_TABLE_CAPACITY: Final[int] = 1
    MAX_TABLE_CAPACITY: Final[int] = 20
    PIN_LENGTH: Final[int] = 4
    DEFAULT_PREPARATION_MINUTES: Final[int] = 15
    PERFORMANCE_WINDOW_DAYS: Final[int] = 7
    TOP_PERFORMERS: Final[int] = 5
    RECENT_ORDERS: Final[int] = 10
    MAX_ORDER_QUANTITY: Final[int] = 99
