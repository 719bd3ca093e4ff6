"""
Menu endpoints: categories and items.
Reads are public (the POS and kitchen load them); writes require manage_menu.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from havens_api.models import Staff
from havens_api.routers._common import require_permission
from havens_api.services.domain import CategoryService, MenuItemService
from havens_shared.config.constants import Permissions
from havens_shared.infrastructure.db import get_db
from havens_shared.utils.schemas import (
    CategoryCreate,
    CategoryOutput,
    CategoryUpdate,
    CreatedResponse,
    MenuItemCreate,
    MenuItemOutput,
    MenuItemUpdate,
    SuccessResponse,
)


router = APIRouter(prefix="/api/menu", tags=["menu"])

manage_menu = require_permission(Permissions.MANAGE_MENU)


# =============================================================================
# Categories
# =============================================================================


@router.get("/categories", response_model=list[CategoryOutput])
def list_categories(db: Session = Depends(get_db)) -> list[CategoryOutput]:
    """Active categories by display order, then name."""
    return CategoryService(db).list_ordered()


@router.get("/categories/{category_id}", response_model=CategoryOutput)
def get_category(category_id: int, db: Session = Depends(get_db)) -> CategoryOutput:
    return CategoryService(db).get_by_id(category_id)


@router.post("/categories", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    body: CategoryCreate,
    db: Session = Depends(get_db),
    _: Staff = Depends(manage_menu),
) -> CreatedResponse:
    category = CategoryService(db).create(body.model_dump())
    return CreatedResponse(id=category.id)


@router.put("/categories/{category_id}", response_model=SuccessResponse)
def update_category(
    category_id: int,
    body: CategoryUpdate,
    db: Session = Depends(get_db),
    _: Staff = Depends(manage_menu),
) -> SuccessResponse:
    CategoryService(db).update(category_id, body.model_dump(exclude_unset=True))
    return SuccessResponse()


@router.delete("/categories/{category_id}", response_model=SuccessResponse)
def delete_category(
    category_id: int,
    db: Session = Depends(get_db),
    _: Staff = Depends(manage_menu),
) -> SuccessResponse:
    """Soft delete. Items of the category disappear from the menu listing."""
    CategoryService(db).delete(category_id)
    return SuccessResponse()


# =============================================================================
# Items
# =============================================================================


@router.get("/items", response_model=list[MenuItemOutput])
def list_items(db: Session = Depends(get_db)) -> list[MenuItemOutput]:
    """Available items of active categories, with category_name."""
    return MenuItemService(db).list_menu()


@router.get("/items/{item_id}", response_model=MenuItemOutput)
def get_item(item_id: int, db: Session = Depends(get_db)) -> MenuItemOutput:
    return MenuItemService(db).get_by_id(item_id)


@router.post("/items", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_item(
    body: MenuItemCreate,
    db: Session = Depends(get_db),
    _: Staff = Depends(manage_menu),
) -> CreatedResponse:
    item = MenuItemService(db).create(body.model_dump())
    return CreatedResponse(id=item.id)


@router.put("/items/{item_id}", response_model=SuccessResponse)
def update_item(
    item_id: int,
    body: MenuItemUpdate,
    db: Session = Depends(get_db),
    _: Staff = Depends(manage_menu),
) -> SuccessResponse:
    MenuItemService(db).update(item_id, body.model_dump(exclude_unset=True))
    return SuccessResponse()


@router.delete("/items/{item_id}", response_model=SuccessResponse)
def delete_item(
    item_id: int,
    db: Session = Depends(get_db),
    _: Staff = Depends(manage_menu),
) -> SuccessResponse:
    """Soft delete: is_available becomes False."""
    MenuItemService(db).delete(item_id)
    return SuccessResponse()
