"""
Reception Service.

Reservations, the walk-in waiting list and the check-in workflow that
turns either of them into an occupied table plus a GuestCheckin record.

Check-in writes (claim table, insert check-in, mark origin seated) run
in one transaction on the request's session: either all of them commit
or none of them do.

Usage:
    from havens_api.services.domain import ReceptionService

    service = ReceptionService(db)
    checkin = service.check_in("Jane", 2, table_id, reservation_id=12)
    service.seat_waiting_guest(guest_id, "5")
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from havens_api.models import (
    GuestCheckin,
    Reservation,
    Table,
    WaitingGuest,
    day_range,
    utc_today,
    utcnow,
)
from havens_api.services.domain.table_service import TableService
from havens_shared.config.constants import ReservationStatus, WaitingStatus
from havens_shared.config.logging import reception_logger as logger
from havens_shared.infrastructure.db import safe_commit
from havens_shared.utils.exceptions import (
    AppException,
    DatabaseError,
    NotFoundError,
    TableOccupiedError,
    ValidationError,
)
from havens_shared.utils.schemas import (
    CheckinOutput,
    ReceptionDashboard,
    ReceptionStats,
    ReservationOutput,
    TableOutput,
    WaitingGuestOutput,
)


def _minutes_between(start: datetime, end: datetime) -> float:
    # SQLite hands back naive datetimes; compare wall-clock UTC values
    if (start.tzinfo is None) != (end.tzinfo is None):
        start = start.replace(tzinfo=None)
        end = end.replace(tzinfo=None)
    return (end - start).total_seconds() / 60


class ReceptionService:
    """
    Receptionist workflows.

    Business rules:
    - A table can only be claimed while it is free
    - A check-in links to at most one reservation or waiting-list entry
    - Only entries still in "waiting" status can be seated from the list
    """

    def __init__(self, db: Session):
        self._db = db
        self._tables = TableService(db)

    # =========================================================================
    # Reservations and waiting list
    # =========================================================================

    def create_reservation(self, data: dict[str, Any]) -> ReservationOutput:
        """Book a table for a future date. Status starts as confirmed."""
        table_id = data.get("table_id")
        if table_id is not None and self._db.get(Table, table_id) is None:
            raise ValidationError("Invalid table_id", field="table_id")

        reservation = Reservation(**data, status=ReservationStatus.CONFIRMED)
        self._db.add(reservation)
        safe_commit(self._db)
        self._db.refresh(reservation)

        logger.info(
            "Reservation created",
            reservation_id=reservation.id,
            party_size=reservation.party_size,
            reservation_date=str(reservation.reservation_date),
        )
        return ReservationOutput.model_validate(reservation)

    def add_waiting_guest(self, data: dict[str, Any]) -> WaitingGuestOutput:
        """Queue a walk-in guest."""
        guest = WaitingGuest(**data, status=WaitingStatus.WAITING, arrived_at=utcnow())
        self._db.add(guest)
        safe_commit(self._db)
        self._db.refresh(guest)

        logger.info("Guest added to waiting list", waiting_guest_id=guest.id, party_size=guest.party_size)
        return WaitingGuestOutput.model_validate(guest)

    def available_tables(self) -> list[TableOutput]:
        """Unoccupied tables in registry order."""
        return self._tables.list_all(only_available=True)

    # =========================================================================
    # Check-in workflow
    # =========================================================================

    def check_in(
        self,
        guest_name: str,
        party_size: int,
        table_id: int,
        reservation_id: int | None = None,
        waiting_guest_id: int | None = None,
        notes: str | None = None,
        staff_id: int | None = None,
    ) -> CheckinOutput:
        """
        Seat a guest at a table.

        Raises:
            ValidationError: Both a reservation and a waiting-list entry given.
            NotFoundError: Unknown table, a reservation that is not confirmed,
                or a waiting-list entry that is no longer waiting.
            ConflictError: The table is already occupied.
        """
        if reservation_id is not None and waiting_guest_id is not None:
            raise ValidationError(
                "A check-in links to a reservation or a waiting-list entry, not both",
                reservation_id=reservation_id,
                waiting_guest_id=waiting_guest_id,
            )
        if reservation_id is not None:
            self._require_confirmed_reservation(reservation_id)
        if waiting_guest_id is not None:
            self._require_waiting_guest(waiting_guest_id)

        table = self._db.get(Table, table_id)
        if table is None:
            raise NotFoundError("Table", table_id)
        if table.is_occupied:
            raise TableOccupiedError(table_id)

        checkin = self._run_seating(
            table=table,
            guest_name=guest_name,
            party_size=party_size,
            reservation_id=reservation_id,
            waiting_guest_id=waiting_guest_id,
            notes=notes,
            staff_id=staff_id,
        )
        return CheckinOutput.model_validate(checkin)

    def seat_waiting_guest(
        self,
        guest_id: int,
        table_number: str,
        staff_id: int | None = None,
    ) -> CheckinOutput:
        """
        Seat a waiting-list entry at a table given by its display number.

        Raises:
            NotFoundError: Entry missing or no longer waiting, or unknown table.
            ConflictError: The table is already occupied.
        """
        guest = self._require_waiting_guest(guest_id)

        table = self._tables.find_by_number(table_number)
        if table is None:
            raise NotFoundError("Table", table_number)
        if table.is_occupied:
            raise TableOccupiedError(table.id)

        checkin = self._run_seating(
            table=table,
            guest_name=guest.guest_name,
            party_size=guest.party_size,
            waiting_guest_id=guest.id,
            notes=guest.notes,
            staff_id=staff_id,
        )
        return CheckinOutput.model_validate(checkin)

    def _run_seating(self, table: Table, **kwargs: Any) -> GuestCheckin:
        """Run the seating writes as one transaction, rolling back on any failure."""
        try:
            checkin = self._seat(table, **kwargs)
            safe_commit(self._db)
        except AppException:
            self._db.rollback()
            raise
        except SQLAlchemyError as e:
            self._db.rollback()
            logger.error("Check-in failed", table_id=table.id, error=str(e))
            raise DatabaseError("check-in", table_id=table.id)

        self._db.refresh(checkin)
        logger.info(
            "Guest checked in",
            checkin_id=checkin.id,
            table_id=table.id,
            reservation_id=checkin.reservation_id,
            waiting_guest_id=checkin.waiting_guest_id,
            party_size=checkin.party_size,
        )
        return checkin

    def _seat(
        self,
        table: Table,
        guest_name: str,
        party_size: int,
        reservation_id: int | None = None,
        waiting_guest_id: int | None = None,
        notes: str | None = None,
        staff_id: int | None = None,
    ) -> GuestCheckin:
        # Conditional claim: loses cleanly to a concurrent check-in
        if not self._tables.claim(table.id):
            raise TableOccupiedError(table.id)

        now = utcnow()
        checkin = GuestCheckin(
            reservation_id=reservation_id,
            waiting_guest_id=waiting_guest_id,
            table_id=table.id,
            staff_id=staff_id,
            guest_name=guest_name,
            party_size=party_size,
            notes=notes,
            checked_in_at=now,
        )
        self._db.add(checkin)

        if reservation_id is not None:
            reservation = self._require_confirmed_reservation(reservation_id)
            reservation.status = ReservationStatus.SEATED
            reservation.table_id = table.id
            reservation.seated_at = now

        if waiting_guest_id is not None:
            guest = self._require_waiting_guest(waiting_guest_id)
            guest.status = WaitingStatus.SEATED
            guest.table_id = table.id
            guest.seated_at = now

        self._db.flush()
        return checkin

    def _require_confirmed_reservation(self, reservation_id: int) -> Reservation:
        # Only confirmed bookings can be seated; seated, cancelled and no-show are final
        reservation = self._db.get(Reservation, reservation_id)
        if reservation is None or reservation.status != ReservationStatus.CONFIRMED:
            raise NotFoundError("Reservation", reservation_id)
        return reservation

    def _require_waiting_guest(self, guest_id: int) -> WaitingGuest:
        guest = self._db.get(WaitingGuest, guest_id)
        if guest is None or guest.status != WaitingStatus.WAITING:
            raise NotFoundError("Waiting guest", guest_id)
        return guest

    # =========================================================================
    # Dashboard
    # =========================================================================

    def dashboard(self) -> ReceptionDashboard:
        """
        Front-desk overview.

        averageWaitTime is the mean minutes between arrival and seating for
        waiting-list guests seated today, 0 when nobody has been seated.
        """
        today = utc_today()
        start, end = day_range(today)

        total_tables = self._db.scalar(select(func.count()).select_from(Table)) or 0
        occupied_tables = self._db.scalar(
            select(func.count()).select_from(Table).where(Table.is_occupied.is_(True))
        ) or 0
        today_checkins = self._db.scalar(
            select(func.count())
            .select_from(GuestCheckin)
            .where(GuestCheckin.checked_in_at >= start, GuestCheckin.checked_in_at < end)
        ) or 0

        waiting = self._db.execute(
            select(WaitingGuest)
            .where(WaitingGuest.status == WaitingStatus.WAITING)
            .order_by(WaitingGuest.arrived_at, WaitingGuest.id)
        ).scalars().all()

        seated_today = self._db.execute(
            select(WaitingGuest).where(
                WaitingGuest.status == WaitingStatus.SEATED,
                WaitingGuest.seated_at >= start,
                WaitingGuest.seated_at < end,
            )
        ).scalars().all()
        waits = [_minutes_between(g.arrived_at, g.seated_at) for g in seated_today]
        average_wait = round(sum(waits) / len(waits)) if waits else 0

        reservations = self._db.execute(
            select(Reservation)
            .where(
                Reservation.reservation_date == today,
                Reservation.status == ReservationStatus.CONFIRMED,
            )
            .order_by(Reservation.reservation_time, Reservation.id)
        ).scalars().all()

        return ReceptionDashboard(
            stats=ReceptionStats(
                totalTables=total_tables,
                occupiedTables=occupied_tables,
                waitingGuests=len(waiting),
                todayCheckIns=today_checkins,
                averageWaitTime=average_wait,
            ),
            waitingGuests=[WaitingGuestOutput.model_validate(g) for g in waiting],
            reservations=[ReservationOutput.model_validate(r) for r in reservations],
        )
