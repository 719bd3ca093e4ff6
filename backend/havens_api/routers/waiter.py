"""
Waiter dashboard endpoint.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from havens_api.models import Staff
from havens_api.routers._common import require_permission
from havens_api.services.domain import OrderService
from havens_shared.config.constants import Permissions
from havens_shared.infrastructure.db import get_db
from havens_shared.utils.schemas import WaiterDashboard


router = APIRouter(prefix="/api/waiter", tags=["waiter"])


@router.get("/dashboard", response_model=WaiterDashboard)
def waiter_dashboard(
    db: Session = Depends(get_db),
    staff: Staff = Depends(require_permission(Permissions.POS)),
) -> WaiterDashboard:
    """Today's sales and order counts for the calling waiter."""
    return OrderService(db).waiter_dashboard(staff.id)
