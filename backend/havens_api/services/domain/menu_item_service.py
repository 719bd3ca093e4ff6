"""
Menu Item Service.

Usage:
    from havens_api.services.domain import MenuItemService

    service = MenuItemService(db)
    items = service.list_menu()
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from havens_api.models import MenuCategory, MenuItem
from havens_api.services.base_service import BaseCRUDService
from havens_shared.config.constants import Limits
from havens_shared.utils.exceptions import ValidationError
from havens_shared.utils.schemas import MenuItemOutput


class MenuItemService(BaseCRUDService[MenuItem, MenuItemOutput]):
    """
    Service for menu items.

    Business rules:
    - Items must belong to an existing category
    - Price is stored as a non-negative decimal
    - preparation_time defaults to 15 minutes
    - Soft delete sets is_available to False
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=MenuItem,
            output_schema=MenuItemOutput,
            entity_name="Menu item",
            active_flag="is_available",
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_menu(self) -> list[MenuItemOutput]:
        """
        Items visible on the menu.

        Inner join on the category: an item shows only while it is available
        and its category is active. Ordered by category display order, then
        item name.
        """
        rows = self._db.execute(
            select(MenuItem, MenuCategory.name)
            .join(MenuCategory, MenuItem.category_id == MenuCategory.id)
            .where(
                MenuItem.is_available.is_(True),
                MenuCategory.is_active.is_(True),
            )
            .order_by(MenuCategory.display_order, MenuItem.name)
        ).all()
        return [self._with_category(item, category_name) for item, category_name in rows]

    def to_output(self, entity: MenuItem) -> MenuItemOutput:
        return self._with_category(entity, entity.category.name if entity.category else None)

    def _with_category(self, item: MenuItem, category_name: str | None) -> MenuItemOutput:
        output = MenuItemOutput.model_validate(item)
        output.category_name = category_name
        return output

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        self._require_category(data.get("category_id"))

    def _validate_update(self, entity: MenuItem, data: dict[str, Any]) -> None:
        if "category_id" in data:
            self._require_category(data["category_id"])

    def _prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        data = dict(data)
        data["price"] = Decimal(str(data.get("price") or 0))
        if not data.get("preparation_time"):
            data["preparation_time"] = Limits.DEFAULT_PREPARATION_MINUTES
        return data

    def _prepare_update(self, entity: MenuItem, data: dict[str, Any]) -> dict[str, Any]:
        data = dict(data)
        if data.get("price") is not None:
            data["price"] = Decimal(str(data["price"]))
        return data

    def _require_category(self, category_id: int | None) -> None:
        if category_id is None or self._db.get(MenuCategory, category_id) is None:
            raise ValidationError("Invalid category_id", field="category_id")
