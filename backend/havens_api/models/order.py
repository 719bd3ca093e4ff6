"""
Order Models: Order, OrderItem, KitchenOrderStatus.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, utcnow

if TYPE_CHECKING:
    from .catalog import MenuItem
    from .staff import Staff
    from .table import Table


class Order(Base):
    """
    A checked-out order. Written once with its lines and never mutated;
    the kitchen tracks progress in KitchenOrderStatus.
    table_id is NULL for takeout.
    """

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    waiter_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("staff.id"), nullable=False, index=True
    )
    table_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("tables.id"), nullable=True, index=True
    )
    total_amount: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )

    waiter: Mapped["Staff"] = relationship()
    table: Mapped[Optional["Table"]] = relationship()
    items: Mapped[list["OrderItem"]] = relationship(
        back_populates="order", order_by="OrderItem.id"
    )
    kitchen_status: Mapped[Optional["KitchenOrderStatus"]] = relationship(
        back_populates="order", uselist=False
    )


class OrderItem(Base):
    """One line of an order. unit_price is a snapshot taken at checkout."""

    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("orders.id"), nullable=False, index=True
    )
    menu_item_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("menu_items.id"), nullable=False
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text)

    __table_args__ = (
        CheckConstraint("quantity > 0", name="chk_order_item_quantity_positive"),
    )

    order: Mapped["Order"] = relationship(back_populates="items")
    menu_item: Mapped["MenuItem"] = relationship()


class KitchenOrderStatus(Base):
    """
    Kitchen view of an order: status and priority.
    One row per order, created as pending at checkout.
    """

    __tablename__ = "kitchen_order_status"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    order_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("orders.id"), nullable=False, unique=True
    )
    # pending, preparing, ready, completed
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False, index=True)
    priority: Mapped[str] = mapped_column(String(10), default="normal", nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    order: Mapped["Order"] = relationship(back_populates="kitchen_status")
