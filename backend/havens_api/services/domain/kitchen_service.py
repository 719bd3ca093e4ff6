"""
Kitchen Service.

Kitchen display queue over submitted orders. Status moves forward only:
pending -> preparing -> ready -> completed.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from havens_api.models import KitchenOrderStatus, Order, OrderItem
from havens_api.services.domain.order_service import order_number
from havens_shared.config.constants import KitchenStatus, can_transition_kitchen
from havens_shared.config.logging import kitchen_logger as logger
from havens_shared.infrastructure.db import safe_commit
from havens_shared.utils.exceptions import InvalidTransitionError, NotFoundError
from havens_shared.utils.schemas import KitchenOrder, KitchenOrderItem


class KitchenService:
    """Kitchen order status tracking."""

    def __init__(self, db: Session):
        self._db = db

    def list_orders(self, status: str | None = None) -> list[KitchenOrder]:
        """
        Orders for the kitchen display, oldest first.

        Without a status filter, completed orders are left out.
        """
        query = (
            select(Order)
            .join(KitchenOrderStatus, KitchenOrderStatus.order_id == Order.id)
            .options(
                selectinload(Order.items).selectinload(OrderItem.menu_item),
                selectinload(Order.waiter),
                selectinload(Order.table),
                selectinload(Order.kitchen_status),
            )
        )
        if status:
            query = query.where(KitchenOrderStatus.status == status)
        else:
            query = query.where(KitchenOrderStatus.status.in_(KitchenStatus.ACTIVE))

        orders = self._db.execute(query.order_by(Order.created_at, Order.id)).scalars().all()
        return [self._to_output(o) for o in orders]

    def update_status(self, order_id: int, status: str) -> KitchenOrder:
        """
        Advance an order's kitchen status.

        Raises:
            NotFoundError: Unknown order.
            ValidationError: Backward or same-state transition.
        """
        row = self._db.scalar(
            select(KitchenOrderStatus).where(KitchenOrderStatus.order_id == order_id)
        )
        if row is None:
            raise NotFoundError("Order", order_id)

        if not can_transition_kitchen(row.status, status):
            raise InvalidTransitionError("order", row.status, status, order_id=order_id)

        previous = row.status
        row.status = status
        safe_commit(self._db)

        logger.info(
            "Kitchen status updated",
            order_id=order_id,
            from_status=previous,
            to_status=status,
        )
        order = self._db.get(Order, order_id)
        self._db.refresh(order)
        return self._to_output(order)

    def _to_output(self, order: Order) -> KitchenOrder:
        kitchen = order.kitchen_status
        return KitchenOrder(
            id=order.id,
            order_number=order_number(order.id),
            table_number=order.table.table_number if order.table else None,
            status=kitchen.status,
            priority=kitchen.priority,
            waiter_name=order.waiter.full_name,
            total_amount=float(order.total_amount),
            created_at=order.created_at,
            updated_at=kitchen.updated_at,
            items=[
                KitchenOrderItem(
                    id=line.id,
                    menu_item_id=line.menu_item_id,
                    menu_item_name=line.menu_item.name,
                    quantity=line.quantity,
                    special_instructions=line.notes,
                    preparation_time=line.menu_item.preparation_time,
                )
                for line in order.items
            ],
        )
