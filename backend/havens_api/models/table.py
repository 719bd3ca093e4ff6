"""
Table Model: physical dining tables grouped by room.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class Table(TimestampMixin, Base):
    """
    Physical table in the restaurant.

    is_occupied is written by order checkout and by the check-in workflow.
    Tables are never soft-deleted.
    """

    __tablename__ = "tables"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    table_number: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    room_name: Mapped[Optional[str]] = mapped_column(String(100))
    capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=4)
    qr_code_url: Mapped[Optional[str]] = mapped_column(Text)
    is_occupied: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("room_name", "table_number", name="uq_table_room_number"),
    )
