"""
Seed data for first start.
Creates the default admin when the staff table is empty so somebody can
log in and create the rest of the team.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from havens_api.models import Staff, StaffPerformance, utc_today
from havens_shared.config.constants import Roles
from havens_shared.config.logging import get_logger, mask_email
from havens_shared.config.settings import settings
from havens_shared.infrastructure.db import safe_commit
from havens_shared.security.password import hash_password

logger = get_logger(__name__)


def seed_admin(db: Session) -> Staff | None:
    """
    Insert the default admin. Idempotent: does nothing once any staff exists.

    Returns:
        The created admin, or None when seeding was skipped.
    """
    if db.scalar(select(func.count()).select_from(Staff)):
        logger.info("Staff already present, skipping admin seed")
        return None

    admin = Staff(
        employee_id=settings.seed_admin_employee_id,
        first_name="System",
        last_name="Administrator",
        email=settings.seed_admin_email,
        role=Roles.ADMIN,
        password=hash_password(settings.seed_admin_password),
        is_active=True,
    )
    db.add(admin)
    db.flush()
    db.add(StaffPerformance(staff_id=admin.id, date=utc_today()))
    safe_commit(db)

    logger.info("Default admin seeded", staff_id=admin.id, email=mask_email(admin.email))
    return admin


def seed(db: Session) -> None:
    """Seed initial data."""
    seed_admin(db)
