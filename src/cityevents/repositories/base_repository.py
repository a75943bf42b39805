"""
Generic async repository shared by CityRepository and EventRepository.

Repositories only `flush()`; the service layer decides when to `commit()`, so
one request maps to one transaction. Writes run inside `db_error_handler`
(IntegrityError -> app-level error, session rolled back); reads run inside
`_read_guard`, which turns driver failures into RepositoryError.

Log events are dotted names with structured `extra`:
    repo.create.success  {"model": "City", "id": 11, "duration_ms": 2}
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, Generic, Type, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from cityevents.database.base import Base
from cityevents.exceptions.base import InvalidFieldError, NotFoundError, RepositoryError
from cityevents.exceptions.mapper import db_error_handler
from cityevents.validators.exception_validators import (
    find_unknown_model_kwargs,
    get_required_columns,
    resolve_column_kwargs,
)

ModelType = TypeVar("ModelType", bound=Base)

logger = logging.getLogger(__name__)

# Integer primary keys are BIGINT at most; larger ids cannot name a row
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def is_storable_id(entity_id: int) -> bool:
    return MIN_ID <= entity_id <= MAX_ID


class BaseRepository(Generic[ModelType]):
    """
    CRUD over one mapped class with an integer `id` primary key.

    Type Parameters:
        ModelType: the ORM class (City, Event)
    """

    def __init__(self, model: Type[ModelType], db: AsyncSession):
        self.model = model
        self.db = db

    @property
    def model_name(self) -> str:
        return self.model.__name__

    @asynccontextmanager
    async def _read_guard(self, action: str, **context: Any):
        try:
            yield
        except RepositoryError:
            raise
        except Exception as exc:
            logger.error(
                "repo.%s.failed", action,
                extra={"model": self.model_name, **context, "error": str(exc)},
            )
            raise RepositoryError(f"Failed to {action.replace('_', ' ')} {self.model_name}") from exc

    # ---------------------------------------------------------------------------------------------
    # Writes
    # ---------------------------------------------------------------------------------------------

    def _validate_create_kwargs(self, kwargs: dict) -> None:
        unknown = find_unknown_model_kwargs(self.model, kwargs)
        if unknown:
            logger.info(
                "repo.create.invalid_fields",
                extra={"model": self.model_name, "invalid_fields": sorted(unknown)},
            )
            raise InvalidFieldError(
                f"Unknown field(s) for {self.model_name}: {', '.join(unknown)}", fields=unknown
            )

        provided = resolve_column_kwargs(self.model, kwargs)
        missing = [col for col in get_required_columns(self.model) if provided.get(col) is None]
        if missing:
            logger.info(
                "repo.create.missing_required",
                extra={"model": self.model_name, "missing_fields": sorted(missing)},
            )
            raise RepositoryError(
                f"Missing required field(s): {', '.join(missing)} for {self.model_name}",
                fields=missing,
            )

    async def create(self, **kwargs) -> ModelType:
        """
        Validate kwargs against the mapped columns, insert and flush.

        The returned entity has its storage-assigned `id`.

        Raises:
            InvalidFieldError: a kwarg is not a mapped attribute.
            RepositoryError: a NOT NULL column without default was not given.
            DuplicateError / IntegrityConflictError: mapped from the database.
        """
        logger.debug(
            "repo.create.start",
            extra={"model": self.model_name, "provided_keys": sorted(kwargs)},
        )
        self._validate_create_kwargs(kwargs)

        started = time.perf_counter()
        async with db_error_handler(self.db, self.model_name):
            entity = self.model(**kwargs)
            self.db.add(entity)
            await self.db.flush()
            await self.db.refresh(entity)

        logger.info(
            "repo.create.success",
            extra={
                "model": self.model_name,
                "id": entity.id,
                "duration_ms": int((time.perf_counter() - started) * 1000),
            },
        )
        return entity

    async def save(self, entity: ModelType) -> ModelType:
        """Flush pending changes on a loaded entity and reload its columns."""
        async with db_error_handler(self.db, self.model_name):
            self.db.add(entity)
            await self.db.flush()
            await self.db.refresh(entity)

        logger.debug("repo.save.success", extra={"model": self.model_name, "id": entity.id})
        return entity

    async def delete(self, entity_id: int) -> bool:
        """
        Remove the row with `entity_id`.

        Returns:
            True when a row was removed, False when no row had that id.

        Raises:
            IntegrityConflictError: another table still references the row.
        """
        if not is_storable_id(entity_id):
            logger.info("repo.delete.miss", extra={"model": self.model_name, "id": str(entity_id)})
            return False

        async with db_error_handler(self.db, self.model_name):
            result = await self.db.execute(
                delete(self.model).where(self.model.id == entity_id)
            )

        deleted = result.rowcount > 0
        if deleted:
            logger.debug("repo.delete.success", extra={"model": self.model_name, "id": entity_id})
        else:
            logger.info("repo.delete.miss", extra={"model": self.model_name, "id": entity_id})
        return deleted

    # ---------------------------------------------------------------------------------------------
    # Reads
    # ---------------------------------------------------------------------------------------------

    async def get_by_id(self, entity_id: int) -> ModelType | None:
        if not is_storable_id(entity_id):
            return None
        async with self._read_guard("retrieve", id=entity_id):
            result = await self.db.execute(
                select(self.model).where(self.model.id == entity_id)
            )
            return result.scalar_one_or_none()

    async def get_by_id_or_raise(self, entity_id: int) -> ModelType:
        entity = await self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.model_name} with ID {entity_id} not found")
        return entity

    async def get_all(self, order_by: str | None = None) -> list[ModelType]:
        """
        Every row, ascending by `order_by` when it names a mapped column.

        An unknown `order_by` is logged and the rows come back unordered.
        """
        query = select(self.model)
        if order_by:
            column = getattr(self.model, order_by, None)
            if column is None:
                logger.warning(
                    "repo.get_all.invalid_order_by",
                    extra={"model": self.model_name, "order_by": order_by},
                )
            else:
                query = query.order_by(column)

        async with self._read_guard("list", order_by=order_by):
            result = await self.db.execute(query)
            return list(result.scalars().all())

    async def exists(self, entity_id: int) -> bool:
        if not is_storable_id(entity_id):
            return False
        # selects the id column only
        async with self._read_guard("check", id=entity_id):
            found = await self.db.scalar(
                select(self.model.id).where(self.model.id == entity_id)
            )
        return found is not None

    async def count(self, **filters: Any) -> int:
        """Row count with optional equality filters, e.g. `count(city_id=1)`."""
        query = select(func.count(self.model.id))
        for field, value in filters.items():
            column = getattr(self.model, field, None)
            if column is not None and value is not None:
                query = query.where(column == value)

        async with self._read_guard("count", filters=filters):
            return await self.db.scalar(query) or 0
