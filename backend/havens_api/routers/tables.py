"""
Table registry endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from havens_api.models import Staff
from havens_api.routers._common import require_permission
from havens_api.services.domain import TableService
from havens_shared.config.constants import Permissions
from havens_shared.infrastructure.db import get_db
from havens_shared.utils.schemas import (
    CreatedResponse,
    SuccessResponse,
    TableCreate,
    TableOutput,
    TableStatusUpdate,
)


router = APIRouter(prefix="/api/tables", tags=["tables"])

manage_tables = require_permission(Permissions.MANAGE_TABLES)


@router.get("", response_model=list[TableOutput])
def list_tables(db: Session = Depends(get_db)) -> list[TableOutput]:
    """All tables ordered by room, then number."""
    return TableService(db).list_all()


@router.post("", response_model=CreatedResponse, status_code=status.HTTP_201_CREATED)
def create_table(
    body: TableCreate,
    db: Session = Depends(get_db),
    _: Staff = Depends(manage_tables),
) -> CreatedResponse:
    """Create a table. Capacity must be between 1 and 20."""
    table = TableService(db).create(body.model_dump())
    return CreatedResponse(id=table.id)


@router.put("/{table_id}/status", response_model=SuccessResponse)
def set_table_status(
    table_id: int,
    body: TableStatusUpdate,
    db: Session = Depends(get_db),
    _: Staff = Depends(manage_tables),
) -> SuccessResponse:
    """Set the occupancy flag. Open orders are not checked."""
    TableService(db).set_occupied(table_id, body.is_occupied)
    return SuccessResponse()
