"""
Category Service.

Usage:
    from havens_api.services.domain import CategoryService

    service = CategoryService(db)
    categories = service.list_ordered()
    category = service.create({"name": "Appetizers", "display_order": 1})
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from havens_api.models import MenuCategory
from havens_api.services.base_service import BaseCRUDService
from havens_shared.utils.schemas import CategoryOutput


class CategoryService(BaseCRUDService[MenuCategory, CategoryOutput]):
    """
    Service for menu category management.

    Business rules:
    - Listings show active categories only, by display_order then name
    - Soft delete sets is_active to False; items in the category drop
      out of the menu listing through the join filter
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=MenuCategory,
            output_schema=CategoryOutput,
            entity_name="Category",
        )

    def list_ordered(self) -> list[CategoryOutput]:
        """List active categories ordered by display order, then name."""
        return self.list_active(MenuCategory.display_order, MenuCategory.name)
