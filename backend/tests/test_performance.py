"""
Tests for staff performance reporting.
"""

from datetime import timedelta
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from havens_api.models import StaffPerformance, utc_today
from havens_api.services.domain import PerformanceService


def _perf(db_session, staff, day, **values):
    row = StaffPerformance(staff_id=staff.id, date=day, **values)
    db_session.add(row)
    db_session.commit()
    return row


@pytest.fixture
def performance_rows(db_session, seed_waiter, seed_chef):
    today = utc_today()
    yesterday = today - timedelta(days=1)
    _perf(
        db_session, seed_waiter, today,
        orders_served=12, total_sales=Decimal("480.00"), tables_served=6,
        shift_duration_minutes=240, customer_rating_avg=Decimal("4.50"), tips_earned=Decimal("40.00"),
    )
    _perf(
        db_session, seed_chef, today,
        orders_served=30, total_sales=Decimal("0"), tables_served=0,
        shift_duration_minutes=0,
    )
    _perf(
        db_session, seed_waiter, yesterday,
        orders_served=8, total_sales=Decimal("300.00"), tables_served=4,
        shift_duration_minutes=300, customer_rating_avg=Decimal("4.00"),
    )
    return today, yesterday


class TestPerformanceService:
    """Test PerformanceService rollups."""

    def test_staff_rows_with_per_hour_rates(self, db_session, performance_rows, seed_waiter, seed_chef):
        """Per-hour rates come from the shift length; zero shifts give None."""
        today, _ = performance_rows
        rows = PerformanceService(db_session).staff_performance(days=1)
        by_staff = {r.staff_id: r for r in rows}

        waiter = by_staff[seed_waiter.id]
        assert waiter.date == today
        assert waiter.sales_per_hour == 120.0
        assert waiter.orders_per_hour == 3.0

        chef = by_staff[seed_chef.id]
        assert chef.sales_per_hour is None
        assert chef.orders_per_hour is None

    def test_window_includes_today(self, db_session, performance_rows):
        """days=2 covers today and yesterday."""
        rows = PerformanceService(db_session).staff_performance(days=2)
        assert len(rows) == 3

    def test_staff_history_newest_first(self, db_session, performance_rows, seed_waiter):
        """One member's rows come back newest first."""
        today, yesterday = performance_rows
        rows = PerformanceService(db_session).staff_history(seed_waiter.id)
        assert [r.date for r in rows] == [today, yesterday]

    def test_summary(self, db_session, performance_rows, seed_waiter):
        """Summary compares today with yesterday and ranks by sales."""
        summary = PerformanceService(db_session).summary()

        assert summary.today.active_staff == 2
        assert summary.today.total_orders_today == 42
        assert summary.today.total_sales_today == 480.0
        assert summary.today.avg_rating_today == 4.5
        assert summary.yesterday.total_orders_yesterday == 8
        assert summary.yesterday.total_sales_yesterday == 300.0
        assert summary.topPerformers[0].staff_id == seed_waiter.id

    def test_summary_empty(self, db_session):
        """No rows means zero totals and no performers."""
        summary = PerformanceService(db_session).summary()
        assert summary.today.total_orders_today == 0
        assert summary.today.avg_rating_today is None
        assert summary.topPerformers == []

    def test_trends_oldest_first(self, db_session, performance_rows):
        """Trend points are per date in ascending order."""
        today, yesterday = performance_rows
        points = PerformanceService(db_session).trends(days=7)
        assert [p.date for p in points] == [yesterday, today]
        assert points[1].total_orders == 42
        assert points[0].total_sales == 300.0

    def test_by_role(self, db_session, performance_rows):
        """Totals grouped by role, highest sales first."""
        roles = PerformanceService(db_session).by_role(days=7)
        assert [r.role for r in roles] == ["waiter", "chef"]
        waiter = roles[0]
        assert waiter.staff_count == 1
        assert waiter.total_orders == 20
        assert waiter.total_sales == 780.0
        assert waiter.total_tips == 40.0

    def test_initialize_today_is_idempotent(self, db_session, seed_admin, seed_waiter):
        """Rows are created once per active staff member per day."""
        service = PerformanceService(db_session)
        assert service.initialize_today() == 2
        assert service.initialize_today() == 0

        count = db_session.scalar(
            select(func.count()).select_from(StaffPerformance).where(StaffPerformance.date == utc_today())
        )
        assert count == 2

    def test_initialize_skips_inactive(self, db_session, staff_factory):
        """Deactivated staff get no row."""
        staff_factory("waiter", "WTR500", is_active=False)
        assert PerformanceService(db_session).initialize_today() == 0


class TestPerformanceEndpoints:
    """Test /api/performance."""

    def test_staff_endpoint(self, client, auth_headers, performance_rows):
        """Admins see per-staff rows."""
        response = client.get("/api/performance/staff?days=1", headers=auth_headers)
        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_staff_history_unknown(self, client, auth_headers):
        """Unknown staff id is 404."""
        response = client.get("/api/performance/staff/9999", headers=auth_headers)
        assert response.status_code == 404

    def test_summary_endpoint(self, client, auth_headers, performance_rows):
        """Summary has today, yesterday and topPerformers."""
        data = client.get("/api/performance/summary", headers=auth_headers).json()
        assert set(data) == {"today", "yesterday", "topPerformers"}

    def test_trends_and_by_role(self, client, auth_headers, performance_rows):
        """Trend and role rollups are served."""
        assert client.get("/api/performance/trends", headers=auth_headers).status_code == 200
        assert client.get("/api/performance/by-role", headers=auth_headers).status_code == 200

    def test_invalid_days(self, client, auth_headers):
        """days must be at least 1."""
        response = client.get("/api/performance/staff?days=0", headers=auth_headers)
        assert response.status_code == 400

    def test_initialize_endpoint(self, client, auth_headers):
        """Initialize reports how many rows it created."""
        response = client.post("/api/performance/initialize", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True, "created": 1}

    def test_waiter_cannot_view_analytics(self, client, waiter_headers):
        """Analytics need view_analytics."""
        response = client.get("/api/performance/summary", headers=waiter_headers)
        assert response.status_code == 403
