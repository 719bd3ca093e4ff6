"""
Receptionist endpoints: reservations, waiting list and check-in.
Require manage_tables.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from havens_api.models import Staff
from havens_api.routers._common import require_permission
from havens_api.services.domain import ReceptionService
from havens_shared.config.constants import Permissions
from havens_shared.infrastructure.db import get_db
from havens_shared.utils.schemas import (
    CheckinOutput,
    CheckinRequest,
    ReceptionDashboard,
    ReservationCreate,
    ReservationOutput,
    SeatGuestRequest,
    TableOutput,
    WaitingGuestCreate,
    WaitingGuestOutput,
)


router = APIRouter(prefix="/api/receptionist", tags=["receptionist"])

front_desk = require_permission(Permissions.MANAGE_TABLES)


@router.get("/dashboard", response_model=ReceptionDashboard)
def dashboard(
    db: Session = Depends(get_db),
    _: Staff = Depends(front_desk),
) -> ReceptionDashboard:
    return ReceptionService(db).dashboard()


@router.get("/available-tables", response_model=list[TableOutput])
def available_tables(
    db: Session = Depends(get_db),
    _: Staff = Depends(front_desk),
) -> list[TableOutput]:
    return ReceptionService(db).available_tables()


@router.post("/reservation", response_model=ReservationOutput, status_code=status.HTTP_201_CREATED)
def create_reservation(
    body: ReservationCreate,
    db: Session = Depends(get_db),
    _: Staff = Depends(front_desk),
) -> ReservationOutput:
    return ReceptionService(db).create_reservation(body.model_dump())


@router.post("/waiting-guest", response_model=WaitingGuestOutput, status_code=status.HTTP_201_CREATED)
def add_waiting_guest(
    body: WaitingGuestCreate,
    db: Session = Depends(get_db),
    _: Staff = Depends(front_desk),
) -> WaitingGuestOutput:
    return ReceptionService(db).add_waiting_guest(body.model_dump())


@router.post("/checkin", response_model=CheckinOutput, status_code=status.HTTP_201_CREATED)
def check_in(
    body: CheckinRequest,
    db: Session = Depends(get_db),
    staff: Staff = Depends(front_desk),
) -> CheckinOutput:
    """Seat a guest: occupies the table and records the check-in atomically."""
    return ReceptionService(db).check_in(
        guest_name=body.guest_name,
        party_size=body.party_size,
        table_id=body.table_id,
        reservation_id=body.reservation_id,
        waiting_guest_id=body.waiting_guest_id,
        notes=body.notes,
        staff_id=staff.id,
    )


@router.post("/seat-guest", response_model=CheckinOutput, status_code=status.HTTP_201_CREATED)
def seat_guest(
    body: SeatGuestRequest,
    db: Session = Depends(get_db),
    staff: Staff = Depends(front_desk),
) -> CheckinOutput:
    """Seat a waiting-list guest at a table given by its number."""
    return ReceptionService(db).seat_waiting_guest(body.guestId, body.tableNumber, staff_id=staff.id)
