"""
Table Service.

Registry of physical tables and their occupancy flag.

Usage:
    from havens_api.services.domain import TableService

    service = TableService(db)
    tables = service.list_all()
    service.set_occupied(table_id, True)
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from havens_api.models import Table
from havens_api.services.base_service import BaseCRUDService
from havens_shared.config.logging import get_logger
from havens_shared.infrastructure.db import safe_commit
from havens_shared.utils.exceptions import DuplicateEntityError, NotFoundError
from havens_shared.utils.schemas import TableOutput

logger = get_logger(__name__)


class TableService(BaseCRUDService[Table, TableOutput]):
    """
    Service for table management.

    Business rules:
    - table_number is unique within a room
    - Occupancy can be toggled freely; open orders are not checked
    - Tables are never soft deleted
    """

    def __init__(self, db: Session):
        super().__init__(
            db=db,
            model=Table,
            output_schema=TableOutput,
            entity_name="Table",
        )

    # =========================================================================
    # Query Methods
    # =========================================================================

    def list_all(self, *, only_available: bool = False) -> list[TableOutput]:
        """All tables ordered by room, then number."""
        query = select(Table)
        if only_available:
            query = query.where(Table.is_occupied.is_(False))
        query = query.order_by(Table.room_name, Table.table_number)
        return [self.to_output(t) for t in self._db.execute(query).scalars().all()]

    def find_by_number(self, table_number: str) -> Table | None:
        """
        Resolve a table by its display number.

        Numbers are only unique within a room; the first match in
        registry order wins.
        """
        return self._db.scalar(
            select(Table)
            .where(Table.table_number == table_number)
            .order_by(Table.room_name, Table.id)
            .limit(1)
        )

    # =========================================================================
    # Command Methods
    # =========================================================================

    def set_occupied(self, table_id: int, is_occupied: bool) -> None:
        """
        Direct write of the occupancy flag.

        Raises:
            NotFoundError: If the table does not exist.
        """
        result = self._db.execute(
            update(Table).where(Table.id == table_id).values(is_occupied=is_occupied)
        )
        if result.rowcount == 0:
            self._db.rollback()
            raise NotFoundError(self._entity_name, table_id)
        safe_commit(self._db)
        logger.info("Table occupancy set", table_id=table_id, is_occupied=is_occupied)

    def claim(self, table_id: int) -> bool:
        """
        Mark a free table occupied without committing.

        The UPDATE only matches while is_occupied is false, so of two
        concurrent claims exactly one sees a row change. Returns False when
        the table was already taken.
        """
        result = self._db.execute(
            update(Table)
            .where(Table.id == table_id, Table.is_occupied.is_(False))
            .values(is_occupied=True)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1

    # =========================================================================
    # Validation Hooks
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        room_name = data.get("room_name")
        query = select(Table.id).where(Table.table_number == data["table_number"])
        if room_name is None:
            query = query.where(Table.room_name.is_(None))
        else:
            query = query.where(Table.room_name == room_name)
        if self._db.scalar(query) is not None:
            raise DuplicateEntityError("Table", data["table_number"], room_name=room_name)
