"""
Staff management endpoints.
Listing is open to any signed-in staff member (the POS loads waiters);
writes require the manage_staff permission.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from havens_api.models import Staff
from havens_api.routers._common import current_staff, require_permission
from havens_api.services.domain import StaffService
from havens_shared.config.constants import Permissions
from havens_shared.infrastructure.db import get_db
from havens_shared.utils.schemas import (
    CreatedResponse,
    Role,
    StaffCreate,
    StaffOutput,
    StaffUpdate,
    SuccessResponse,
)


router = APIRouter(prefix="/api/staff", tags=["staff"])

manage_staff = require_permission(Permissions.MANAGE_STAFF)


@router.get("", response_model=list[StaffOutput])
def list_staff(
    role: Role | None = None,
    db: Session = Depends(get_db),
    _: Staff = Depends(current_staff),
) -> list[StaffOutput]:
    """Active staff ordered by last name, first name. Optional role filter."""
    return StaffService(db).list_active(role=role)


@router.get("/{staff_id}", response_model=StaffOutput)
def get_staff(
    staff_id: int,
    db: Session = Depends(get_db),
    _: Staff = Depends(manage_staff),
) -> StaffOutput:
    """Direct lookup. Deactivated staff are still returned."""
    return StaffService(db).get_by_id(staff_id)


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_staff(
    body: StaffCreate,
    db: Session = Depends(get_db),
    _: Staff = Depends(manage_staff),
) -> CreatedResponse:
    """Create a staff member. Password is required and stored hashed."""
    staff = StaffService(db).create(body.model_dump())
    return CreatedResponse(id=staff.id)


@router.put("/{staff_id}", response_model=SuccessResponse)
def update_staff(
    staff_id: int,
    body: StaffUpdate,
    db: Session = Depends(get_db),
    _: Staff = Depends(manage_staff),
) -> SuccessResponse:
    """Update a staff member. An omitted password leaves it unchanged."""
    StaffService(db).update(staff_id, body.model_dump(exclude_unset=True))
    return SuccessResponse()


@router.delete("/{staff_id}", response_model=SuccessResponse)
def delete_staff(
    staff_id: int,
    db: Session = Depends(get_db),
    _: Staff = Depends(manage_staff),
) -> SuccessResponse:
    """Soft delete: the row stays, is_active becomes False."""
    StaffService(db).delete(staff_id)
    return SuccessResponse()
