"""
Tests for staff management endpoints.
"""

from sqlalchemy import func, select

from havens_api.models import Staff, StaffPerformance, utc_today
from havens_api import seed as seeding
from havens_shared.config.settings import settings
from havens_shared.security.password import verify_password


def _new_staff(**overrides):
    body = {
        "employee_id": "WTR100",
        "first_name": "Nina",
        "last_name": "Nunez",
        "email": "nina@havens-test.com",
        "role": "waiter",
        "pin": "4455",
        "password": "pass1234",
    }
    body.update(overrides)
    return body


class TestStaffCreate:
    """Test POST /api/staff."""

    def test_create_staff(self, client, auth_headers, db_session):
        """Admin can create staff; the password is stored hashed."""
        response = client.post("/api/staff", json=_new_staff(), headers=auth_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True

        staff = db_session.get(Staff, data["id"])
        assert staff.password != "pass1234"
        assert verify_password("pass1234", staff.password)

    def test_create_staff_adds_todays_performance_row(self, client, auth_headers, db_session):
        """A zeroed performance row for today comes with every new staff member."""
        response = client.post("/api/staff", json=_new_staff(), headers=auth_headers)
        staff_id = response.json()["id"]

        perf = db_session.scalar(
            select(StaffPerformance).where(StaffPerformance.staff_id == staff_id)
        )
        assert perf is not None
        assert perf.date == utc_today()
        assert perf.orders_served == 0

    def test_create_without_password_rejected(self, client, auth_headers, db_session):
        """Missing password is a 400 and nothing is written."""
        before = db_session.scalar(select(func.count()).select_from(Staff))
        body = _new_staff()
        del body["password"]

        response = client.post("/api/staff", json=body, headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Password is required"}
        assert db_session.scalar(select(func.count()).select_from(Staff)) == before

    def test_over_long_password_rejected(self, client, auth_headers, db_session):
        """Passwords longer than bcrypt accepts are a 400 and nothing is written."""
        before = db_session.scalar(select(func.count()).select_from(Staff))

        response = client.post("/api/staff", json=_new_staff(password="y" * 100), headers=auth_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Password must be at most 72 bytes"}
        assert db_session.scalar(select(func.count()).select_from(Staff)) == before

    def test_duplicate_employee_id_rejected(self, client, auth_headers, seed_admin):
        """employee_id is unique."""
        response = client.post(
            "/api/staff",
            json=_new_staff(employee_id=seed_admin.employee_id),
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_invalid_role_rejected(self, client, auth_headers):
        """Role must be one of the known roles."""
        response = client.post("/api/staff", json=_new_staff(role="owner"), headers=auth_headers)
        assert response.status_code == 400

    def test_waiter_cannot_create_staff(self, client, waiter_headers):
        """Staff writes need manage_staff."""
        response = client.post("/api/staff", json=_new_staff(), headers=waiter_headers)
        assert response.status_code == 403
        assert response.json() == {"error": "Not authorized to manage staff"}

    def test_create_requires_auth(self, client):
        """No token, no write."""
        response = client.post("/api/staff", json=_new_staff())
        assert response.status_code == 401


class TestStaffRead:
    """Test GET /api/staff."""

    def test_list_ordered_by_last_name(self, client, auth_headers, staff_factory):
        """Active staff come back ordered by last name then first name."""
        staff_factory("waiter", "WTR010", first_name="Zed", last_name="Brown")
        staff_factory("waiter", "WTR011", first_name="Amy", last_name="Brown")

        response = client.get("/api/staff", headers=auth_headers)
        assert response.status_code == 200
        names = [(s["last_name"], s["first_name"]) for s in response.json()]
        assert names == sorted(names)

    def test_role_filter(self, client, waiter_headers, seed_chef):
        """?role narrows the listing."""
        response = client.get("/api/staff?role=chef", headers=waiter_headers)
        assert response.status_code == 200
        data = response.json()
        assert [s["id"] for s in data] == [seed_chef.id]

    def test_list_never_exposes_secrets(self, client, auth_headers):
        """Password and PIN are not part of the output."""
        response = client.get("/api/staff", headers=auth_headers)
        for staff in response.json():
            assert "password" not in staff
            assert "pin" not in staff

    def test_get_unknown_staff(self, client, auth_headers):
        """Unknown id is 404."""
        response = client.get("/api/staff/9999", headers=auth_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Staff 9999 not found"}


class TestStaffUpdateDelete:
    """Test PUT and DELETE /api/staff/{id}."""

    def test_update_without_password_keeps_hash(self, client, auth_headers, seed_waiter, db_session):
        """Omitting password leaves the stored hash alone."""
        old_hash = seed_waiter.password
        response = client.put(
            f"/api/staff/{seed_waiter.id}",
            json={"phone": "555-0100"},
            headers=auth_headers,
        )
        assert response.status_code == 200

        db_session.refresh(seed_waiter)
        assert seed_waiter.password == old_hash
        assert seed_waiter.phone == "555-0100"

    def test_update_with_password_rehashes(self, client, auth_headers, seed_waiter, db_session):
        """A new password replaces the hash."""
        client.put(
            f"/api/staff/{seed_waiter.id}",
            json={"password": "newpass99"},
            headers=auth_headers,
        )
        db_session.refresh(seed_waiter)
        assert verify_password("newpass99", seed_waiter.password)

    def test_update_with_over_long_password(self, client, auth_headers, seed_waiter, db_session):
        """An over-long new password is rejected and the old hash stays."""
        old_hash = seed_waiter.password
        response = client.put(
            f"/api/staff/{seed_waiter.id}",
            json={"password": "z" * 73},
            headers=auth_headers,
        )
        assert response.status_code == 400

        db_session.refresh(seed_waiter)
        assert seed_waiter.password == old_hash

    def test_update_unknown_staff(self, client, auth_headers):
        """Unknown id is 404."""
        response = client.put("/api/staff/9999", json={"phone": "1"}, headers=auth_headers)
        assert response.status_code == 404

    def test_soft_delete(self, client, auth_headers, seed_waiter, db_session):
        """Delete keeps the row but removes it from listings."""
        response = client.delete(f"/api/staff/{seed_waiter.id}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"success": True}

        db_session.refresh(seed_waiter)
        assert seed_waiter.is_active is False

        listed = client.get("/api/staff", headers=auth_headers).json()
        assert seed_waiter.id not in [s["id"] for s in listed]

        direct = client.get(f"/api/staff/{seed_waiter.id}", headers=auth_headers)
        assert direct.status_code == 200
        assert direct.json()["is_active"] is False


class TestSeedAdmin:
    """Test the first-start admin seed."""

    def test_seeds_admin_when_empty(self, db_session):
        """An empty staff table gets one admin with a hashed password."""
        admin = seeding.seed_admin(db_session)
        assert admin is not None
        assert admin.role == "admin"
        assert verify_password(settings.seed_admin_password, admin.password)
        assert db_session.scalar(
            select(func.count()).select_from(StaffPerformance).where(StaffPerformance.staff_id == admin.id)
        ) == 1

    def test_skips_when_staff_exist(self, db_session, seed_waiter):
        """Seeding never adds a second admin."""
        assert seeding.seed_admin(db_session) is None
        assert db_session.scalar(select(func.count()).select_from(Staff)) == 1
