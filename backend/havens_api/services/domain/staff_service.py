"""
Staff Service.

Handles the staff directory: CRUD with soft delete, password hashing,
email/password authentication and POS PIN verification.

Usage:
    from havens_api.services.domain import StaffService

    service = StaffService(db)
    staff = service.authenticate(email, password)
    waiters = service.list_active(role="waiter")
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from havens_api.models import Staff, StaffPerformance, utc_today
from havens_api.services.base_service import BaseCRUDService
from havens_shared.config.logging import get_logger, mask_email
from havens_shared.security.password import hash_password, verify_password, verify_pin
from havens_shared.utils.exceptions import (
    AuthenticationError,
    DuplicateEntityError,
    ValidationError,
)
from havens_shared.utils.schemas import StaffOutput

logger = get_logger(__name__)


class StaffService(BaseCRUDService[Staff, StaffOutput]):
    """
    Service for staff management.

    Business rules:
    - Password is required on create and always stored as a bcrypt hash
    - employee_id and email are unique
    - Soft delete preserves history in orders and performance rows
    - A zeroed performance row for today is created with each new staff member
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Staff,
            output_schema=StaffOutput,
            entity_name="Staff",
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_active(self, role: str | None = None) -> list[StaffOutput]:
        """Active staff ordered by last name, first name."""
        query = select(Staff).where(Staff.is_active.is_(True))
        if role:
            query = query.where(Staff.role == role)
        query = query.order_by(Staff.last_name, Staff.first_name)
        return [self.to_output(s) for s in self._db.execute(query).scalars().all()]

    def find_active_by_email(self, email: str) -> Staff | None:
        return self._db.scalar(
            select(Staff).where(Staff.email == email, Staff.is_active.is_(True))
        )

    # =========================================================================
    # Command Methods
    # =========================================================================

    def create(self, data: dict[str, Any]) -> StaffOutput:
        """
        Create a staff member and their zeroed performance row for today.

        Raises:
            ValidationError: If the password is missing or identifiers are taken.
        """
        self._validate_create(data)
        data = self._prepare_create(data)

        staff = Staff(**data)
        self._db.add(staff)
        self._db.flush()
        self._db.add(StaffPerformance(staff_id=staff.id, date=utc_today()))
        self._commit(staff, "create")

        logger.info(
            "Staff created",
            staff_id=staff.id,
            role=staff.role,
            email=mask_email(staff.email),
        )
        return self.to_output(staff)

    # =========================================================================
    # Authentication
    # =========================================================================

    def authenticate(self, email: str, password: str) -> StaffOutput:
        """
        Check an email/password pair against active staff.

        Unknown email and wrong password raise the same error so callers
        cannot tell which one failed.

        Raises:
            AuthenticationError: On any mismatch.
        """
        staff = self.find_active_by_email(email)
        if staff is None:
            raise AuthenticationError(reason="unknown_email", email=mask_email(email))

        if not verify_password(password, staff.password):
            raise AuthenticationError(reason="wrong_password", staff_id=staff.id)

        return self.to_output(staff)

    def verify_pin(self, staff_id: int, pin: str) -> StaffOutput:
        """
        Verify the POS PIN of an active staff member.

        Raises:
            AuthenticationError: Unknown or inactive staff, no PIN set, or PIN mismatch.
        """
        staff = self.get_entity(staff_id)
        if staff is None or not staff.is_active:
            raise AuthenticationError("Invalid PIN", reason="unknown_staff", staff_id=staff_id)

        if not verify_pin(pin, staff.pin):
            raise AuthenticationError("Invalid PIN", reason="pin_mismatch", staff_id=staff_id)

        return self.to_output(staff)

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        if not data.get("password"):
            raise ValidationError("Password is required", field="password")
        self._check_unique(data)

    def _validate_update(self, entity: Staff, data: dict[str, Any]) -> None:
        self._check_unique(data, exclude_id=entity.id)

    def _prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        data = dict(data)
        data["password"] = hash_password(data["password"])
        return data

    def _prepare_update(self, entity: Staff, data: dict[str, Any]) -> dict[str, Any]:
        data = dict(data)
        password = data.pop("password", None)
        # Absent password leaves the stored hash unchanged
        if password:
            data["password"] = hash_password(password)
        return data

    def _check_unique(self, data: dict[str, Any], exclude_id: int | None = None) -> None:
        for field_name in ("employee_id", "email"):
            value = data.get(field_name)
            if not value:
                continue
            query = select(Staff.id).where(getattr(Staff, field_name) == value)
            if exclude_id is not None:
                query = query.where(Staff.id != exclude_id)
            if self._db.scalar(query) is not None:
                raise DuplicateEntityError("Staff", value, field=field_name)
