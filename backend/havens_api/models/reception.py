"""
Reception Models: Reservation, WaitingGuest, GuestCheckin.
"""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, Integer, String, Text, Time
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, utcnow


class Reservation(TimestampMixin, Base):
    """
    A future booking.
    Status: confirmed -> seated (check-in), or cancelled / no_show.
    """

    __tablename__ = "reservations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    guest_name: Mapped[str] = mapped_column(Text, nullable=False)
    guest_phone: Mapped[Optional[str]] = mapped_column(String(50))
    guest_email: Mapped[Optional[str]] = mapped_column(String(255))
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    reservation_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    reservation_time: Mapped[time] = mapped_column(Time, nullable=False)
    status: Mapped[str] = mapped_column(String(20), default="confirmed", nullable=False, index=True)
    table_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("tables.id"))
    special_requests: Mapped[Optional[str]] = mapped_column(Text)
    seated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))


class WaitingGuest(Base):
    """
    Walk-in guest queued for the next free table.
    Status: waiting -> seated.
    """

    __tablename__ = "waiting_guests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    guest_name: Mapped[str] = mapped_column(Text, nullable=False)
    guest_phone: Mapped[Optional[str]] = mapped_column(String(50))
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    arrived_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    estimated_wait_minutes: Mapped[Optional[int]] = mapped_column(Integer)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(20), default="waiting", nullable=False, index=True)
    table_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("tables.id"))
    seated_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True))


class GuestCheckin(Base):
    """
    Durable record of seating a guest at a table.
    Links back to at most one reservation or waiting-list entry.
    """

    __tablename__ = "guest_checkins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    reservation_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("reservations.id"))
    waiting_guest_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("waiting_guests.id"))
    table_id: Mapped[int] = mapped_column(Integer, ForeignKey("tables.id"), nullable=False, index=True)
    staff_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("staff.id"))
    guest_name: Mapped[str] = mapped_column(Text, nullable=False)
    party_size: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)
    checked_in_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
