"""
Kitchen display endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from havens_api.models import Staff
from havens_api.routers._common import require_permission
from havens_api.services.domain import KitchenService
from havens_shared.config.constants import Permissions
from havens_shared.infrastructure.db import get_db
from havens_shared.utils.schemas import KitchenOrder, KitchenStatusUpdate, KitchenStatusValue


router = APIRouter(prefix="/api/kitchen", tags=["kitchen"])

kitchen_access = require_permission(Permissions.KITCHEN)


@router.get("/orders", response_model=list[KitchenOrder])
def list_kitchen_orders(
    status: KitchenStatusValue | None = None,
    db: Session = Depends(get_db),
    _: Staff = Depends(kitchen_access),
) -> list[KitchenOrder]:
    """Open orders, oldest first. Pass status to filter (including completed)."""
    return KitchenService(db).list_orders(status=status)


@router.put("/orders/{order_id}/status", response_model=KitchenOrder)
def update_kitchen_status(
    order_id: int,
    body: KitchenStatusUpdate,
    db: Session = Depends(get_db),
    _: Staff = Depends(kitchen_access),
) -> KitchenOrder:
    """Move an order forward through pending, preparing, ready, completed."""
    return KitchenService(db).update_status(order_id, body.status)
