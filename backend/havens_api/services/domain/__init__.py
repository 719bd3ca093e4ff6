"""
Domain Services - application layer.

Services contain business logic and orchestrate operations.

Structure:
    Router (thin controller)
        ↓
    Service (business logic)  ← YOU ARE HERE
        ↓
    Model (entity)

Usage:
    from havens_api.services.domain import TableService

    # In router
    service = TableService(db)
    tables = service.list_all()
"""

from .staff_service import StaffService
from .category_service import CategoryService
from .menu_item_service import MenuItemService
from .table_service import TableService
from .reception_service import ReceptionService
from .order_service import OrderService
from .kitchen_service import KitchenService
from .performance_service import PerformanceService

__all__ = [
    "StaffService",
    "CategoryService",
    "MenuItemService",
    "TableService",
    "ReceptionService",
    "OrderService",
    "KitchenService",
    "PerformanceService",
]
