"""
Exception handlers mapping app-level errors to JSON responses.

Status and body come from the exception itself (`http_status()`,
`to_payload()`); handlers only pick the log level. Starlette resolves the
handler by walking the exception's MRO, so subclasses registered here take
precedence over the RepositoryError fallback.

    register_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cityevents.exceptions.base import (
    BadRequestError,
    DuplicateError,
    IntegrityConflictError,
    InvalidFieldError,
    NotFoundError,
    RepositoryError,
)

logger = logging.getLogger(__name__)


def _respond(request: Request, exc: RepositoryError, level: int) -> JSONResponse:
    logger.log(
        level,
        "api.error.%s", exc.error_code or "repository",
        extra={
            "method": request.method,
            "path": request.url.path,
            "error_fields": exc.fields,
            # constraint names stay in the logs
            "constraint": exc.constraint,
            "detail": exc.message,
        },
    )
    return JSONResponse(status_code=exc.http_status(), content=exc.to_payload())


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return _respond(request, exc, logging.INFO)


async def bad_request_handler(request: Request, exc: BadRequestError) -> JSONResponse:
    """400 for business-rule refusals such as deleting a city that still hosts events."""
    return _respond(request, exc, logging.INFO)


async def integrity_conflict_handler(request: Request, exc: IntegrityConflictError) -> JSONResponse:
    """400 for writes the database refused on a foreign key."""
    return _respond(request, exc, logging.WARNING)


async def duplicate_error_handler(request: Request, exc: DuplicateError) -> JSONResponse:
    return _respond(request, exc, logging.INFO)


async def invalid_field_handler(request: Request, exc: InvalidFieldError) -> JSONResponse:
    return _respond(request, exc, logging.INFO)


async def repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    return _respond(request, exc, logging.WARNING)


EXCEPTION_HANDLERS = (
    (NotFoundError, not_found_handler),
    (BadRequestError, bad_request_handler),
    (IntegrityConflictError, integrity_conflict_handler),
    (DuplicateError, duplicate_error_handler),
    (InvalidFieldError, invalid_field_handler),
    (RepositoryError, repository_error_handler),
)


def register_exception_handlers(app: FastAPI) -> None:
    for exc_class, handler in EXCEPTION_HANDLERS:
        app.add_exception_handler(exc_class, handler)
