"""
API routers, one per dashboard surface.
"""

from .auth import router as auth_router
from .staff import router as staff_router
from .menu import router as menu_router
from .tables import router as tables_router
from .uploads import router as uploads_router
from .orders import router as orders_router
from .kitchen import router as kitchen_router
from .waiter import router as waiter_router
from .performance import router as performance_router
from .receptionist import router as receptionist_router

__all__ = [
    "auth_router",
    "staff_router",
    "menu_router",
    "tables_router",
    "uploads_router",
    "orders_router",
    "kitchen_router",
    "waiter_router",
    "performance_router",
    "receptionist_router",
]
