"""
Logging filters.

The request id lives in a contextvar set by RequestIDMiddleware; contextvars
follow a request across `await`s, so every record logged while serving it can
be stamped. Outside a request the id is "-".
"""

import contextvars
import logging
import re

NO_REQUEST_ID = "-"
REDACTED = "***REDACTED***"

_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Returns a token for reset_request_id()."""
    return _request_id.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id.reset(token)


def get_request_id() -> str | None:
    return _request_id.get()


class RequestIdFilter(logging.Filter):
    """
    Sets `record.request_id`: an explicit `extra={"request_id": ...}` wins,
    then the contextvar, then "-". Never drops a record.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = getattr(record, "request_id", None) or get_request_id() or NO_REQUEST_ID
        return True


# user:password@ inside connection URLs
_URL_CREDENTIALS = re.compile(r"(?P<scheme>[a-z0-9+]+://[^:/@\s]+:)[^@\s]+@", re.IGNORECASE)


class RedactFilter(logging.Filter):
    """
    Masks sensitive `extra=` values and passwords embedded in database URLs.
    """

    SENSITIVE = frozenset({
        "password", "postgres_password", "secret", "token",
        "authorization", "database_url", "database_url_override",
    })

    def filter(self, record: logging.LogRecord) -> bool:
        for key in [k for k in vars(record) if k.lower() in self.SENSITIVE]:
            setattr(record, key, REDACTED)

        if isinstance(record.msg, str) and "://" in record.msg:
            record.msg = _URL_CREDENTIALS.sub(rf"\g<scheme>{REDACTED}@", record.msg)
        return True
