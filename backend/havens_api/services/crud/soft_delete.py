"""
Soft delete helpers shared by the catalog and staff services.

Rows are never removed: staff keep is_active, categories keep is_active,
menu items keep is_available. Each service names its flag.
"""

from typing import TypeVar

from sqlalchemy.orm import Session

from havens_api.models import Base
from havens_shared.config.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=Base)


def soft_delete(db: Session, entity: T, flag: str = "is_active") -> T:
    """
    Clear the entity's active flag and commit.

    Args:
        db: Database session
        entity: The entity to soft delete
        flag: Name of the boolean column that marks the row as live

    Returns:
        The soft-deleted entity

    Raises:
        Exception: Re-raises any exception after rollback
    """
    setattr(entity, flag, False)
    try:
        db.commit()
        db.refresh(entity)
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Entity soft deleted",
        entity=entity.__class__.__name__,
        entity_id=getattr(entity, "id", None),
    )
    return entity

