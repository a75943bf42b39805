"""
App-level exceptions raised by repositories and services.

Every error carries a canonical `error_code`. The API layer never decides a
status itself: handlers answer with `exc.http_status()` and `exc.to_payload()`.

    code                 status
    not_found            404
    bad_request          400
    integrity_conflict   400
    duplicate            409
    invalid_field        422
    (anything else)      400
"""

from typing import Iterable

DEFAULT_STATUS = 400

ERROR_CODE_TO_STATUS: dict[str, int] = {
    "not_found": 404,
    "bad_request": 400,
    "integrity_conflict": 400,
    "duplicate": 409,
    "invalid_field": 422,
}


class RepositoryError(Exception):
    """
    Base for every error the service layer lets through to the API.

    - message: client-safe text, sent as `detail`
    - fields: names of the request fields involved (e.g. ["cityId"])
    - constraint: database constraint name, kept for logs and never sent to clients
    - error_code: canonical code; subclasses fix it, the base accepts any
    """

    error_code: str | None = None
    default_message = "Database operation failed"

    def __init__(
        self,
        message: str | None = None,
        *,
        fields: Iterable[str] | None = None,
        constraint: str | None = None,
        error_code: str | None = None,
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.fields = list(fields) if fields else None
        self.constraint = constraint
        if error_code is not None:
            self.error_code = error_code

    def __str__(self) -> str:
        details = []
        if self.fields:
            details.append(f"fields: {', '.join(self.fields)}")
        if self.constraint:
            details.append(f"constraint: {self.constraint}")
        if self.error_code:
            details.append(f"code: {self.error_code}")
        return f"{self.message} ({'; '.join(details)})" if details else self.message

    def to_payload(self) -> dict:
        """JSON body: {"detail": ..., "code": ..., "fields": [...]}; empty keys omitted."""
        payload: dict = {"detail": self.message}
        if self.error_code:
            payload["code"] = self.error_code
        if self.fields:
            payload["fields"] = list(self.fields)
        return payload

    def http_status(self) -> int:
        return ERROR_CODE_TO_STATUS.get(self.error_code or "", DEFAULT_STATUS)


class NotFoundError(RepositoryError):
    error_code = "not_found"
    default_message = "Resource not found"

    def __init__(self, message: str | None = None, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields)


class BadRequestError(RepositoryError):
    """A business rule rejected the request (e.g. deleting a city that still hosts events)."""

    error_code = "bad_request"
    default_message = "Bad request"

    def __init__(self, message: str | None = None, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields)


class IntegrityConflictError(RepositoryError):
    """The database refused a write on a foreign-key constraint."""

    error_code = "integrity_conflict"
    default_message = "Referential integrity failure"

    def __init__(self, message: str | None = None, *,
                 fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint)


class DuplicateError(RepositoryError):
    error_code = "duplicate"
    default_message = "Resource already exists"

    def __init__(self, message: str | None = None, *,
                 fields: Iterable[str] | None = None, constraint: str | None = None):
        super().__init__(message, fields=fields, constraint=constraint)


class InvalidFieldError(RepositoryError):
    """Unknown attribute names passed to a repository write."""

    error_code = "invalid_field"
    default_message = "Unknown field(s)"

    def __init__(self, message: str | None = None, *, fields: Iterable[str] | None = None):
        super().__init__(message, fields=fields)


__all__ = [
    "ERROR_CODE_TO_STATUS",
    "RepositoryError",
    "NotFoundError",
    "BadRequestError",
    "IntegrityConflictError",
    "DuplicateError",
    "InvalidFieldError",
]
