"""
Performance Service.

Read-only rollups over the daily staff_performance rows, plus the
initialization utility that creates today's zeroed rows.

Usage:
    from havens_api.services.domain import PerformanceService

    service = PerformanceService(db)
    rows = service.staff_performance(days=7)
    summary = service.summary()
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from havens_api.models import Staff, StaffPerformance, utc_today
from havens_shared.config.constants import Limits
from havens_shared.config.logging import get_logger
from havens_shared.infrastructure.db import safe_commit
from havens_shared.utils.exceptions import NotFoundError
from havens_shared.utils.schemas import (
    PerformanceSummary,
    RolePerformance,
    StaffPerformanceRow,
    TodaySummary,
    TopPerformer,
    TrendPoint,
    YesterdaySummary,
)

logger = get_logger(__name__)


def per_hour(metric: float | Decimal | int | None, shift_minutes: int | None) -> float | None:
    """
    Scale a shift total to an hourly rate.

    A zero or unknown shift length gives None rather than a division error.
    """
    if metric is None or not shift_minutes:
        return None
    return round(float(metric) / shift_minutes * 60, 2)


def _num(value: Decimal | float | int | None) -> float:
    return float(value) if value is not None else 0.0


def _rating(value: Decimal | float | None) -> float | None:
    return round(float(value), 2) if value is not None else None


class PerformanceService:
    """Staff performance reporting."""

    def __init__(self, db: Session):
        self._db = db

    def _window_start(self, days: int) -> date:
        # Window includes today: days=7 covers today and the six days before
        return utc_today() - timedelta(days=max(days, 1) - 1)

    # =========================================================================
    # Per-staff rows
    # =========================================================================

    def staff_performance(self, days: int = Limits.PERFORMANCE_WINDOW_DAYS) -> list[StaffPerformanceRow]:
        """Performance rows of the last `days` days joined with staff identity, newest first."""
        rows = self._db.execute(
            select(StaffPerformance, Staff)
            .join(Staff, StaffPerformance.staff_id == Staff.id)
            .where(StaffPerformance.date >= self._window_start(days))
            .order_by(StaffPerformance.date.desc(), StaffPerformance.total_sales.desc(), Staff.id)
        ).all()
        return [self._row(perf, staff) for perf, staff in rows]

    def staff_history(self, staff_id: int, days: int | None = None) -> list[StaffPerformanceRow]:
        """
        All performance rows of one staff member, newest first.

        Raises:
            NotFoundError: If the staff member does not exist.
        """
        staff = self._db.get(Staff, staff_id)
        if staff is None:
            raise NotFoundError("Staff", staff_id)

        query = select(StaffPerformance).where(StaffPerformance.staff_id == staff_id)
        if days is not None:
            query = query.where(StaffPerformance.date >= self._window_start(days))
        rows = self._db.execute(query.order_by(StaffPerformance.date.desc())).scalars().all()
        return [self._row(perf, staff) for perf in rows]

    def _row(self, perf: StaffPerformance, staff: Staff) -> StaffPerformanceRow:
        return StaffPerformanceRow(
            staff_id=staff.id,
            employee_id=staff.employee_id,
            first_name=staff.first_name,
            last_name=staff.last_name,
            role=staff.role,
            date=perf.date,
            orders_served=perf.orders_served,
            total_sales=_num(perf.total_sales),
            tables_served=perf.tables_served,
            shift_duration_minutes=perf.shift_duration_minutes,
            customer_rating_avg=_rating(perf.customer_rating_avg),
            tips_earned=_num(perf.tips_earned),
            sales_per_hour=per_hour(perf.total_sales, perf.shift_duration_minutes),
            orders_per_hour=per_hour(perf.orders_served, perf.shift_duration_minutes),
        )

    # =========================================================================
    # Rollups
    # =========================================================================

    def _day_totals(self, day: date) -> tuple[int, float, float | None]:
        orders, sales, rating = self._db.execute(
            select(
                func.coalesce(func.sum(StaffPerformance.orders_served), 0),
                func.coalesce(func.sum(StaffPerformance.total_sales), 0),
                func.avg(StaffPerformance.customer_rating_avg),
            ).where(StaffPerformance.date == day)
        ).one()
        return int(orders), _num(sales), _rating(rating)

    def summary(self) -> PerformanceSummary:
        """Today against yesterday, plus today's top performers by sales."""
        today = utc_today()
        yesterday = today - timedelta(days=1)

        active_staff = self._db.scalar(
            select(func.count()).select_from(Staff).where(Staff.is_active.is_(True))
        ) or 0
        orders_today, sales_today, rating_today = self._day_totals(today)
        orders_yesterday, sales_yesterday, _ = self._day_totals(yesterday)

        top = self._db.execute(
            select(StaffPerformance, Staff)
            .join(Staff, StaffPerformance.staff_id == Staff.id)
            .where(StaffPerformance.date == today)
            .order_by(StaffPerformance.total_sales.desc(), Staff.id)
            .limit(Limits.TOP_PERFORMERS)
        ).all()

        return PerformanceSummary(
            today=TodaySummary(
                active_staff=active_staff,
                total_orders_today=orders_today,
                total_sales_today=sales_today,
                avg_rating_today=rating_today,
            ),
            yesterday=YesterdaySummary(
                total_orders_yesterday=orders_yesterday,
                total_sales_yesterday=sales_yesterday,
            ),
            topPerformers=[
                TopPerformer(
                    staff_id=staff.id,
                    first_name=staff.first_name,
                    last_name=staff.last_name,
                    role=staff.role,
                    total_sales=_num(perf.total_sales),
                    orders_served=perf.orders_served,
                    customer_rating_avg=_rating(perf.customer_rating_avg),
                )
                for perf, staff in top
            ],
        )

    def trends(self, days: int = Limits.PERFORMANCE_WINDOW_DAYS) -> list[TrendPoint]:
        """Per-date totals over the window, oldest first. Days without rows are omitted."""
        rows = self._db.execute(
            select(
                StaffPerformance.date,
                func.coalesce(func.sum(StaffPerformance.orders_served), 0),
                func.coalesce(func.sum(StaffPerformance.total_sales), 0),
                func.avg(StaffPerformance.customer_rating_avg),
            )
            .where(StaffPerformance.date >= self._window_start(days))
            .group_by(StaffPerformance.date)
            .order_by(StaffPerformance.date)
        ).all()
        return [
            TrendPoint(
                date=day,
                total_orders=int(orders),
                total_sales=_num(sales),
                avg_rating=_rating(rating),
            )
            for day, orders, sales, rating in rows
        ]

    def by_role(self, days: int = Limits.PERFORMANCE_WINDOW_DAYS) -> list[RolePerformance]:
        """Totals grouped by staff role over the window, highest sales first."""
        total_sales = func.coalesce(func.sum(StaffPerformance.total_sales), 0)
        rows = self._db.execute(
            select(
                Staff.role,
                func.count(func.distinct(Staff.id)),
                func.coalesce(func.sum(StaffPerformance.orders_served), 0),
                total_sales,
                func.avg(StaffPerformance.customer_rating_avg),
                func.coalesce(func.sum(StaffPerformance.tips_earned), 0),
            )
            .join(Staff, StaffPerformance.staff_id == Staff.id)
            .where(StaffPerformance.date >= self._window_start(days))
            .group_by(Staff.role)
            .order_by(total_sales.desc(), Staff.role)
        ).all()
        return [
            RolePerformance(
                role=role,
                staff_count=int(staff_count),
                total_orders=int(orders),
                total_sales=_num(sales),
                avg_rating=_rating(rating),
                total_tips=_num(tips),
            )
            for role, staff_count, orders, sales, rating, tips in rows
        ]

    # =========================================================================
    # Initialization
    # =========================================================================

    def initialize_today(self) -> int:
        """
        Create a zeroed row for every active staff member without one today.

        Idempotent: a second call on the same day creates nothing.

        Returns:
            Number of rows created.
        """
        today = utc_today()
        existing = select(StaffPerformance.staff_id).where(StaffPerformance.date == today)
        missing = self._db.execute(
            select(Staff.id).where(Staff.is_active.is_(True), Staff.id.not_in(existing))
        ).scalars().all()

        for staff_id in missing:
            self._db.add(StaffPerformance(staff_id=staff_id, date=today))
        safe_commit(self._db)

        logger.info("Performance rows initialized", date=str(today), created=len(missing))
        return len(missing)
