"""
Authentication router.
Handles login, logout, the current session and POS PIN verification.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from havens_api.models import Staff
from havens_api.routers._common import current_staff, require_permission
from havens_api.services.domain import StaffService
from havens_shared.config.constants import Permissions, role_dashboard
from havens_shared.config.logging import audit_auth_event
from havens_shared.infrastructure.db import get_db
from havens_shared.security.auth import sign_jwt
from havens_shared.security.rate_limit import limiter, LOGIN_RATE_LIMIT
from havens_shared.utils.exceptions import AuthenticationError
from havens_shared.utils.schemas import (
    LoginRequest,
    LoginResponse,
    LoginUser,
    PinVerifyRequest,
    StaffOutput,
    SuccessResponse,
)


router = APIRouter(prefix="/api", tags=["auth"])


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


@router.post("/login", response_model=LoginResponse)
@limiter.limit(LOGIN_RATE_LIMIT)
def login(request: Request, body: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    """
    Authenticate a staff member by email and password.

    Returns the session blob the dashboards keep ({email, staff}) plus a
    bearer token that privileged endpoints check server side.
    """
    try:
        staff = StaffService(db).authenticate(body.email, body.password)
    except AuthenticationError:
        audit_auth_event("LOGIN", email=body.email, success=False, ip_address=_client_ip(request))
        raise

    token = sign_jwt({"sub": str(staff.id), "role": staff.role, "email": staff.email})
    audit_auth_event("LOGIN", staff_id=staff.id, email=staff.email, ip_address=_client_ip(request))

    return LoginResponse(
        user=LoginUser(email=staff.email or body.email, staff=staff),
        access_token=token,
        dashboard=role_dashboard(staff.role),
    )


@router.post("/logout", response_model=SuccessResponse)
def logout(request: Request) -> SuccessResponse:
    """
    Log out. Tokens are stateless; the client discards its copy.
    """
    audit_auth_event("LOGOUT", ip_address=_client_ip(request))
    return SuccessResponse()


@router.get("/auth/me", response_model=StaffOutput)
def me(staff: Staff = Depends(current_staff)) -> StaffOutput:
    """Staff record behind the bearer token."""
    return StaffOutput.model_validate(staff)


@router.post("/verify-pin", response_model=StaffOutput)
def verify_pin(
    request: Request,
    body: PinVerifyRequest,
    db: Session = Depends(get_db),
    _: Staff = Depends(require_permission(Permissions.POS)),
) -> StaffOutput:
    """Confirm a waiter's PIN before the POS submits an order."""
    try:
        staff = StaffService(db).verify_pin(body.waiterId, body.pin)
    except AuthenticationError as e:
        audit_auth_event(
            "PIN_VERIFY",
            staff_id=body.waiterId,
            success=False,
            reason=e.detail,
            ip_address=_client_ip(request),
        )
        raise

    audit_auth_event("PIN_VERIFY", staff_id=staff.id, ip_address=_client_ip(request))
    return staff
