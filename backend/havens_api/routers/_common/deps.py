"""
Request-scoped dependencies shared by routers.

The bearer token only says who is calling. The staff row is reloaded on
every request, so deactivation and role changes apply immediately.
"""

from collections.abc import Callable
from typing import Any

from fastapi import Depends
from sqlalchemy.orm import Session

from havens_api.models import Staff
from havens_shared.config.constants import has_permission
from havens_shared.infrastructure.db import get_db
from havens_shared.security.auth import token_claims
from havens_shared.utils.exceptions import AuthenticationError, ForbiddenError


def current_staff(
    claims: dict[str, Any] = Depends(token_claims),
    db: Session = Depends(get_db),
) -> Staff:
    """Active staff member behind the bearer token."""
    staff = db.get(Staff, int(claims["sub"]))
    if staff is None or not staff.is_active:
        raise AuthenticationError("Account is inactive or no longer exists", staff_id=claims["sub"])
    return staff


def require_permission(permission: str) -> Callable[..., Staff]:
    """
    Dependency factory gating an endpoint on a role capability.

    Usage:
        @router.post("/staff")
        def create_staff(staff: Staff = Depends(require_permission(Permissions.MANAGE_STAFF))):
            ...
    """

    def dependency(staff: Staff = Depends(current_staff)) -> Staff:
        if not has_permission(staff.role, permission):
            raise ForbiddenError(
                permission.replace("_", " "),
                role=staff.role,
                staff_id=staff.id,
            )
        return staff

    return dependency
