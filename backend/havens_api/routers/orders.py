"""
Order endpoints used by the POS at checkout.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from havens_api.models import Staff
from havens_api.routers._common import require_permission
from havens_api.services.domain import OrderService
from havens_shared.config.constants import Permissions
from havens_shared.infrastructure.db import get_db
from havens_shared.utils.schemas import OrderCreate, OrderCreated


router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=OrderCreated, status_code=status.HTTP_201_CREATED)
def create_order(
    body: OrderCreate,
    db: Session = Depends(get_db),
    _: Staff = Depends(require_permission(Permissions.POS)),
) -> OrderCreated:
    """
    Submit an order with its lines. The total is recomputed server side
    and the order enters the kitchen queue as pending.
    """
    return OrderService(db).create_order(
        waiter_id=body.waiter_id,
        table_id=body.table_id,
        items=[line.model_dump() for line in body.items],
        total_amount=body.total_amount,
    )
