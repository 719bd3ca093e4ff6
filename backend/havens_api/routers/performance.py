"""
Staff performance reporting endpoints. Require view_analytics.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from havens_api.models import Staff
from havens_api.routers._common import require_permission
from havens_api.services.domain import PerformanceService
from havens_shared.config.constants import Limits, Permissions
from havens_shared.infrastructure.db import get_db
from havens_shared.utils.schemas import (
    InitializeResponse,
    PerformanceSummary,
    RolePerformance,
    StaffPerformanceRow,
    TrendPoint,
)


router = APIRouter(prefix="/api/performance", tags=["performance"])

view_analytics = require_permission(Permissions.VIEW_ANALYTICS)


@router.get("/staff", response_model=list[StaffPerformanceRow])
def staff_performance(
    days: int = Query(default=Limits.PERFORMANCE_WINDOW_DAYS, ge=1, le=366),
    db: Session = Depends(get_db),
    _: Staff = Depends(view_analytics),
) -> list[StaffPerformanceRow]:
    """Per-staff rows for the window, with per-hour rates."""
    return PerformanceService(db).staff_performance(days=days)


@router.get("/staff/{staff_id}", response_model=list[StaffPerformanceRow])
def staff_history(
    staff_id: int,
    db: Session = Depends(get_db),
    _: Staff = Depends(view_analytics),
) -> list[StaffPerformanceRow]:
    return PerformanceService(db).staff_history(staff_id)


@router.get("/summary", response_model=PerformanceSummary)
def summary(
    db: Session = Depends(get_db),
    _: Staff = Depends(view_analytics),
) -> PerformanceSummary:
    """Today against yesterday plus the top performers."""
    return PerformanceService(db).summary()


@router.get("/trends", response_model=list[TrendPoint])
def trends(
    days: int = Query(default=Limits.PERFORMANCE_WINDOW_DAYS, ge=1, le=366),
    db: Session = Depends(get_db),
    _: Staff = Depends(view_analytics),
) -> list[TrendPoint]:
    return PerformanceService(db).trends(days=days)


@router.get("/by-role", response_model=list[RolePerformance])
def by_role(
    days: int = Query(default=Limits.PERFORMANCE_WINDOW_DAYS, ge=1, le=366),
    db: Session = Depends(get_db),
    _: Staff = Depends(view_analytics),
) -> list[RolePerformance]:
    return PerformanceService(db).by_role(days=days)


@router.post("/initialize", response_model=InitializeResponse)
def initialize(
    db: Session = Depends(get_db),
    _: Staff = Depends(view_analytics),
) -> InitializeResponse:
    """Create today's zeroed rows for active staff that lack one."""
    created = PerformanceService(db).initialize_today()
    return InitializeResponse(created=created)
