"""
StaffPerformance Model: daily per-staff rollup rows.
"""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Date, ForeignKey, Integer, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin

if TYPE_CHECKING:
    from .staff import Staff


class StaffPerformance(TimestampMixin, Base):
    """
    One row per (staff_id, date). Counters start at zero and are filled
    in by whatever process records shifts and sales.
    """

    __tablename__ = "staff_performance"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    staff_id: Mapped[int] = mapped_column(Integer, ForeignKey("staff.id"), nullable=False, index=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, index=True)
    orders_served: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    total_sales: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0, nullable=False)
    tables_served: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    shift_duration_minutes: Mapped[Optional[int]] = mapped_column(Integer, default=0)
    customer_rating_avg: Mapped[Optional[Decimal]] = mapped_column(Numeric(3, 2))
    tips_earned: Mapped[Decimal] = mapped_column(Numeric(10, 2), default=0, nullable=False)

    __table_args__ = (
        UniqueConstraint("staff_id", "date", name="uq_staff_performance_day"),
    )

    staff: Mapped["Staff"] = relationship(back_populates="performance")
