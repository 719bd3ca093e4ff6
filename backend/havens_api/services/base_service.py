"""
Base Service Classes.

Provides abstract base classes for application services that:
- Keep routers thin (Router -> Service -> Model)
- Convert entities to output DTOs
- Wrap commits so failures surface as DatabaseError

Usage:
    from havens_api.services.base_service import BaseCRUDService

    class CategoryService(BaseCRUDService[MenuCategory, CategoryOutput]):
        def __init__(self, db: Session):
            super().__init__(
                db=db,
                model=MenuCategory,
                output_schema=CategoryOutput,
                entity_name="Category",
            )
"""

from __future__ import annotations

from abc import ABC
from typing import Any, Generic, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from havens_api.models import Base
from havens_api.services.crud.soft_delete import soft_delete
from havens_shared.infrastructure.db import safe_commit
from havens_shared.config.logging import get_logger
from havens_shared.utils.exceptions import DatabaseError, NotFoundError

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=Base)
OutputT = TypeVar("OutputT", bound=BaseModel)


class BaseService(ABC, Generic[ModelT]):
    """
    Abstract base service for domain operations.

    Subclasses implement specific business logic while this class
    provides the session and model handles.
    """

    def __init__(self, db: Session, model: Type[ModelT]):
        self._db = db
        self._model = model

    @property
    def db(self) -> Session:
        """Database session."""
        return self._db


class BaseCRUDService(BaseService[ModelT], Generic[ModelT, OutputT]):
    """
    Base service for entities with CRUD operations and soft delete.

    Provides standard CRUD methods that can be overridden for
    custom business logic.
    """

    def __init__(
        self,
        db: Session,
        model: Type[ModelT],
        output_schema: Type[OutputT],
        entity_name: str,
        *,
        active_flag: str = "is_active",
    ):
        super().__init__(db, model)
        self._output_schema = output_schema
        self._entity_name = entity_name
        self._active_flag = active_flag

    @property
    def entity_name(self) -> str:
        """Human-readable entity name for messages."""
        return self._entity_name

    # =========================================================================
    # Read Operations
    # =========================================================================

    def get_entity(self, entity_id: int) -> ModelT | None:
        """Get raw entity by primary key, soft-deleted rows included."""
        return self._db.get(self._model, entity_id)

    def require_entity(self, entity_id: int) -> ModelT:
        """Get raw entity or raise NotFoundError."""
        entity = self.get_entity(entity_id)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    def get_by_id(self, entity_id: int) -> OutputT:
        """
        Direct lookup by id.

        Soft-deleted rows are still returned; only listings hide them.

        Raises:
            NotFoundError: If entity not found.
        """
        return self.to_output(self.require_entity(entity_id))

    def list_active(self, *order_by: Any) -> list[OutputT]:
        """List entities whose active flag is set."""
        flag = getattr(self._model, self._active_flag)
        query = select(self._model).where(flag.is_(True))
        if order_by:
            query = query.order_by(*order_by)
        entities = self._db.execute(query).scalars().all()
        return [self.to_output(e) for e in entities]

    # =========================================================================
    # Write Operations
    # =========================================================================

    def create(self, data: dict[str, Any]) -> OutputT:
        """
        Create new entity.

        Raises:
            ValidationError: If data is invalid.
            DatabaseError: If creation fails.
        """
        self._validate_create(data)
        data = self._prepare_create(data)

        entity = self._model(**data)
        self._db.add(entity)
        self._commit(entity, "create")

        logger.info(
            f"{self._entity_name} created",
            entity_id=getattr(entity, "id", None),
        )
        return self.to_output(entity)

    def update(self, entity_id: int, data: dict[str, Any]) -> OutputT:
        """
        Update existing entity with the given fields.

        Raises:
            NotFoundError: If entity not found.
            ValidationError: If data is invalid.
            DatabaseError: If update fails.
        """
        entity = self.require_entity(entity_id)

        self._validate_update(entity, data)
        data = self._prepare_update(entity, data)

        columns = self._model.__table__.columns
        for field_name, value in data.items():
            if not hasattr(entity, field_name):
                continue
            # Explicit nulls never clear required columns
            column = columns.get(field_name)
            if value is None and column is not None and not column.nullable:
                continue
            setattr(entity, field_name, value)

        self._commit(entity, "update")
        return self.to_output(entity)

    def delete(self, entity_id: int) -> None:
        """
        Soft delete entity. The row is kept.

        Raises:
            NotFoundError: If entity not found.
        """
        entity = self.require_entity(entity_id)
        soft_delete(self._db, entity, self._active_flag)

    # =========================================================================
    # Transformation
    # =========================================================================

    def to_output(self, entity: ModelT) -> OutputT:
        """
        Convert entity to output DTO.

        Override this method for custom transformation logic.
        """
        return self._output_schema.model_validate(entity)

    # =========================================================================
    # Hooks (override in subclasses)
    # =========================================================================

    def _validate_create(self, data: dict[str, Any]) -> None:
        """Validate data before create. Raise ValidationError on failure."""
        pass

    def _validate_update(self, entity: ModelT, data: dict[str, Any]) -> None:
        """Validate data before update. Raise ValidationError on failure."""
        pass

    def _prepare_create(self, data: dict[str, Any]) -> dict[str, Any]:
        """Transform validated create data into column values."""
        return data

    def _prepare_update(self, entity: ModelT, data: dict[str, Any]) -> dict[str, Any]:
        """Transform validated update data into column values."""
        return data

    # =========================================================================
    # Helpers
    # =========================================================================

    def _commit(self, entity: ModelT, operation: str) -> None:
        try:
            safe_commit(self._db)
            self._db.refresh(entity)
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to {operation} {self._entity_name}",
                error=str(e),
            )
            raise DatabaseError(f"{operation} {self._entity_name.lower()}")
