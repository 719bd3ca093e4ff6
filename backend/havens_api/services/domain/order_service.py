"""
Order Service.

Checkout from the POS: writes the order, its lines and the pending
kitchen status row in one transaction. Also builds the waiter dashboard.

Usage:
    from havens_api.services.domain import OrderService

    service = OrderService(db)
    created = service.create_order(waiter_id, table_id, items)
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from havens_api.models import (
    KitchenOrderStatus,
    MenuItem,
    Order,
    OrderItem,
    Staff,
    StaffPerformance,
    Table,
    day_range,
    utc_today,
)
from havens_shared.config.constants import KitchenStatus, Limits, OrderPriority
from havens_shared.config.logging import get_logger
from havens_shared.infrastructure.db import safe_commit
from havens_shared.utils.exceptions import ValidationError
from havens_shared.utils.schemas import (
    OrderCreated,
    RecentOrder,
    WaiterDashboard,
    WaiterStats,
)

logger = get_logger(__name__)

CENT = Decimal("0.01")


def order_number(order_id: int) -> str:
    """Display number shown on kitchen tickets, e.g. ORD-007."""
    return f"ORD-{order_id:03d}"


class OrderService:
    """
    Order ledger.

    Business rules:
    - Orders are immutable once written; kitchen progress lives in
      KitchenOrderStatus
    - The total is recomputed from the lines, never taken from the client
    - Checkout at a table marks the table occupied
    """

    def __init__(self, db: Session):
        self._db = db

    # =========================================================================
    # Checkout
    # =========================================================================

    def create_order(
        self,
        waiter_id: int,
        table_id: int | None,
        items: list[dict[str, Any]],
        total_amount: float | None = None,
    ) -> OrderCreated:
        """
        Create an order with its lines.

        Raises:
            ValidationError: Unknown/inactive waiter, unknown table, empty
                order, or a line referencing an unavailable menu item.
        """
        waiter = self._db.get(Staff, waiter_id)
        if waiter is None or not waiter.is_active:
            raise ValidationError("Invalid waiter_id", field="waiter_id")

        table = None
        if table_id is not None:
            table = self._db.get(Table, table_id)
            if table is None:
                raise ValidationError("Invalid table_id", field="table_id")

        if not items:
            raise ValidationError("Order has no items", field="items")

        lines: list[OrderItem] = []
        total = Decimal("0")
        for line in items:
            menu_item = self._db.get(MenuItem, line["menu_item_id"])
            if menu_item is None or not menu_item.is_available:
                raise ValidationError(
                    f"Menu item {line['menu_item_id']} is not available",
                    field="items",
                )
            quantity = int(line["quantity"])
            if quantity < 1:
                raise ValidationError("Quantity must be at least 1", field="items")

            price = line.get("price")
            unit_price = Decimal(str(price)) if price is not None else Decimal(menu_item.price)
            unit_price = unit_price.quantize(CENT)
            total += unit_price * quantity
            lines.append(
                OrderItem(
                    menu_item_id=menu_item.id,
                    quantity=quantity,
                    unit_price=unit_price,
                    notes=line.get("notes"),
                )
            )

        total = total.quantize(CENT)
        if total_amount is not None and Decimal(str(total_amount)).quantize(CENT) != total:
            logger.warning(
                "Client order total differs from computed total",
                waiter_id=waiter_id,
                client_total=str(total_amount),
                computed_total=str(total),
            )

        order = Order(waiter_id=waiter.id, table_id=table_id, total_amount=total, items=lines)
        self._db.add(order)
        self._db.flush()
        self._db.add(
            KitchenOrderStatus(
                order_id=order.id,
                status=KitchenStatus.PENDING,
                priority=OrderPriority.NORMAL,
            )
        )
        if table is not None:
            table.is_occupied = True
        safe_commit(self._db)

        logger.info(
            "Order created",
            order_id=order.id,
            waiter_id=waiter.id,
            table_id=table_id,
            lines=len(lines),
            total=str(total),
        )
        return OrderCreated(id=order.id, order_number=order_number(order.id), total_amount=float(total))

    # =========================================================================
    # Waiter dashboard
    # =========================================================================

    def waiter_dashboard(self, staff_id: int) -> WaiterDashboard:
        """Today's figures for one waiter plus their most recent orders."""
        today = utc_today()
        start, end = day_range(today)

        todays = self._db.execute(
            select(Order.total_amount, KitchenOrderStatus.status)
            .outerjoin(KitchenOrderStatus, KitchenOrderStatus.order_id == Order.id)
            .where(
                Order.waiter_id == staff_id,
                Order.created_at >= start,
                Order.created_at < end,
            )
        ).all()

        sales = sum((Decimal(total) for total, _ in todays), Decimal("0"))
        count = len(todays)
        completed = sum(1 for _, status in todays if status == KitchenStatus.COMPLETED)

        rating = self._db.scalar(
            select(StaffPerformance.customer_rating_avg).where(
                StaffPerformance.staff_id == staff_id,
                StaffPerformance.date == today,
            )
        )

        recent = self._db.execute(
            select(Order)
            .options(selectinload(Order.table), selectinload(Order.kitchen_status))
            .where(Order.waiter_id == staff_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .limit(Limits.RECENT_ORDERS)
        ).scalars().all()

        return WaiterDashboard(
            stats=WaiterStats(
                todaySales=float(sales),
                ordersCount=count,
                averageOrderValue=round(float(sales) / count, 2) if count else 0.0,
                customerRating=float(rating) if rating is not None else None,
                activeOrders=count - completed,
                completedOrders=completed,
            ),
            recentOrders=[
                RecentOrder(
                    id=o.id,
                    order_number=order_number(o.id),
                    table_number=o.table.table_number if o.table else None,
                    total_amount=float(o.total_amount),
                    status=o.kitchen_status.status if o.kitchen_status else KitchenStatus.PENDING,
                    created_at=o.created_at,
                )
                for o in recent
            ],
        )
