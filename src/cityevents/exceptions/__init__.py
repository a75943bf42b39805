# cityevents/exceptions/
# ├── base.py                    # App-level errors (NotFoundError, BadRequestError, IntegrityConflictError, ...)
# ├── integrity_classifier.py    # classify a raw IntegrityError (unique / not-null / fk / check)
# └── mapper.py                  # turn the classification into an app-level error; db_error_handler

from .base import (
    RepositoryError,
    NotFoundError,
    DuplicateError,
    InvalidFieldError,
    BadRequestError,
    IntegrityConflictError,
)

__all__ = [
    "RepositoryError",
    "NotFoundError",
    "DuplicateError",
    "InvalidFieldError",
    "BadRequestError",
    "IntegrityConflictError",
]
