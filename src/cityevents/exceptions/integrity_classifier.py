"""
Classify a SQLAlchemy IntegrityError into the kind of constraint that failed.

Postgres drivers expose a SQLSTATE (`pgcode` on psycopg, `sqlstate` on the
asyncpg adapter) plus the constraint name; SQLite only gives a message such as
"FOREIGN KEY constraint failed", so it falls back to keyword matching.
"""

import enum
import logging

from sqlalchemy.exc import IntegrityError

logger = logging.getLogger(__name__)


class ViolationKind(str, enum.Enum):
    UNIQUE = "unique"
    NOT_NULL = "not_null"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"
    UNKNOWN = "unknown"


# https://www.postgresql.org/docs/current/errcodes-appendix.html
SQLSTATE_KINDS: dict[str, ViolationKind] = {
    "23505": ViolationKind.UNIQUE,
    "23502": ViolationKind.NOT_NULL,
    "23503": ViolationKind.FOREIGN_KEY,
    "23514": ViolationKind.CHECK,
}

# Lower-cased fragments, checked in order
MESSAGE_KEYWORDS: list[tuple[ViolationKind, tuple[str, ...]]] = [
    (ViolationKind.UNIQUE, ("unique constraint", "unique failed", "unique violation", "duplicate key")),
    (ViolationKind.NOT_NULL, ("not null constraint", "null value in column")),
    (ViolationKind.FOREIGN_KEY, ("foreign key constraint", "is not present in table", "is still referenced")),
    (ViolationKind.CHECK, ("check constraint",)),
]


def _sqlstate(orig) -> str | None:
    return getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)


def _constraint_name(orig) -> str | None:
    diag = getattr(orig, "diag", None)
    if diag is not None and getattr(diag, "constraint_name", None):
        return diag.constraint_name
    # asyncpg errors carry it directly
    return getattr(orig, "constraint_name", None)


def _kind_from_message(message: str) -> ViolationKind:
    normalized = message.lower()
    for kind, keywords in MESSAGE_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return kind
    return ViolationKind.UNKNOWN


def classify_integrity_error(exc: IntegrityError) -> tuple[ViolationKind, str | None]:
    """
    Returns:
        (kind, constraint name or None)
    """
    orig = exc.orig
    sqlstate = _sqlstate(orig)

    if sqlstate:
        kind = SQLSTATE_KINDS.get(sqlstate, ViolationKind.UNKNOWN)
        constraint = _constraint_name(orig)
        logger.debug(
            "integrity.sqlstate",
            extra={"sqlstate": sqlstate, "kind": kind.value, "constraint_name": constraint},
        )
        return kind, constraint

    message = str(orig) if orig is not None else str(exc)
    kind = _kind_from_message(message)
    if kind is ViolationKind.UNKNOWN:
        logger.warning("integrity.unknown_message", extra={"message_snippet": message[:200]})
    return kind, None
