"""
Turn database IntegrityErrors into app-level errors.

Repositories wrap their writes in `db_error_handler`; on failure the session is
rolled back and one of the errors from `exceptions.base` is raised instead.

    unique        -> DuplicateError (409)
    foreign key   -> IntegrityConflictError (400)
    not null      -> RepositoryError with `fields` (400)
    check/unknown -> RepositoryError (400)
"""

import logging
import re
from contextlib import asynccontextmanager

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .base import DuplicateError, IntegrityConflictError, RepositoryError
from .integrity_classifier import ViolationKind, classify_integrity_error

logger = logging.getLogger(__name__)

# Postgres: 'null value in column "name" of relation "cities" ...'
_PG_NOT_NULL = re.compile(r'null value in column "(?P<col>[^"]+)"', re.IGNORECASE)
# Postgres DETAIL: 'Key (city_id)=(99) is not present in table "cities".'
_PG_KEY = re.compile(r'key \((?P<cols>[^)]+)\)=', re.IGNORECASE)
# SQLite: 'UNIQUE constraint failed: cities.name' / 'NOT NULL constraint failed: events.url'
_SQLITE_FAILED = re.compile(r'(?:UNIQUE|NOT NULL) constraint failed: (?P<cols>.+)$', re.IGNORECASE)


def extract_columns_from_integrity(exc: IntegrityError) -> list[str] | None:
    """
    Column names named in the driver message, or None.

    SQLite foreign-key failures never name a column.
    """
    message = str(exc.orig) if exc.orig is not None else str(exc)

    match = _PG_NOT_NULL.search(message)
    if match:
        return [match.group("col")]

    match = _PG_KEY.search(message)
    if match:
        return [col.strip().strip('"') for col in match.group("cols").split(",")]

    match = _SQLITE_FAILED.search(message)
    if match:
        return [col.split(".")[-1].strip() for col in match.group("cols").split(",")]

    return None


def map_integrity_error(exc: IntegrityError, model_name: str | None = None) -> RepositoryError:
    """Build (but do not raise) the app-level error for `exc`."""
    kind, constraint = classify_integrity_error(exc)
    columns = extract_columns_from_integrity(exc)
    model = model_name or "Record"

    logger.info(
        "mapper.integrity_error",
        extra={"model": model, "kind": kind.value, "fields": columns, "constraint": constraint},
    )

    if kind is ViolationKind.UNIQUE:
        suffix = f" for field(s): {', '.join(columns)}" if columns else ""
        return DuplicateError(f"{model} already exists{suffix}", fields=columns, constraint=constraint)

    if kind is ViolationKind.FOREIGN_KEY:
        return IntegrityConflictError(fields=columns, constraint=constraint)

    if kind is ViolationKind.NOT_NULL:
        named = f": {', '.join(columns)}" if columns else ""
        return RepositoryError(
            f"Missing required field(s){named} for {model}", fields=columns, constraint=constraint
        )

    if kind is ViolationKind.CHECK:
        return RepositoryError(f"{model} violates a check constraint", constraint=constraint)

    return RepositoryError(f"{model} database integrity error", constraint=constraint)


def raise_mapped_integrity_error(exc: IntegrityError, model_name: str | None = None) -> None:
    raise map_integrity_error(exc, model_name) from exc


@asynccontextmanager
async def db_error_handler(db: AsyncSession, model_name: str | None = None):
    """
    Usage:
        async with db_error_handler(self.db, self.model_name):
            self.db.add(entity)
            await self.db.flush()

    Rolls back on any failure. App-level errors pass through unchanged;
    anything else becomes RepositoryError.
    """
    try:
        yield
    except IntegrityError as exc:
        await _safe_rollback(db, model_name)
        raise_mapped_integrity_error(exc, model_name)
    except RepositoryError:
        await _safe_rollback(db, model_name)
        raise
    except Exception as exc:
        await _safe_rollback(db, model_name)
        logger.exception("mapper.unexpected_error", extra={"model": model_name})
        raise RepositoryError(f"Failed to operate on {model_name or 'database'}") from exc


async def _safe_rollback(db: AsyncSession, model_name: str | None) -> None:
    try:
        await db.rollback()
    except Exception:
        logger.exception("mapper.rollback_failed", extra={"model": model_name})
