"""
Build and apply the logging dictConfig.

    setup_logging(get_settings())

Handlers by mode:

    LOG_TO_STDOUT  LOG_DIR   handlers
    true           any       console, error_console
    false          unset     console, error_console
    false          set       console, file, error_file

`settings` only needs the LOG_* / ENV / ENABLE_SQL_LOGGING attributes, so tests
pass a SimpleNamespace.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

from cityevents.utils.logging import get_project_name

from .filters import RedactFilter, RequestIdFilter
from .formatters import ColorFormatter, JsonFormatter
from .handlers import (
    get_console_handler,
    get_error_console_handler,
    get_error_file_handler,
    get_file_handler,
)

DEFAULT_SERVICE_NAME = "cityevents"
TEXT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(request_id)s | %(message)s"


def _writes_files(settings) -> bool:
    return not settings.LOG_TO_STDOUT and bool(settings.LOG_DIR)


def _build_handlers(settings) -> dict[str, dict]:
    handlers = {"console": get_console_handler(settings)}
    if _writes_files(settings):
        handlers["file"] = get_file_handler(settings)
        handlers["error_file"] = get_error_file_handler(settings)
    else:
        handlers["error_console"] = get_error_console_handler(settings)
    return handlers


def _logger(level: str, handlers: list[str], propagate: bool = False) -> dict:
    return {"level": level, "handlers": handlers, "propagate": propagate}


def make_dict_config(settings) -> dict:
    handlers = _build_handlers(settings)
    all_handlers = list(handlers)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "()": ColorFormatter if settings.LOG_FORMAT == "text" else logging.Formatter,
                "format": TEXT_FORMAT,
            },
            "json": {
                "()": JsonFormatter,
                "env": settings.ENV,
                "service": get_project_name(default=DEFAULT_SERVICE_NAME),
            },
        },
        "filters": {
            "request_id": {"()": RequestIdFilter},
            "redact": {"()": RedactFilter},
        },
        "handlers": handlers,
        "loggers": {
            "": {"level": settings.LOG_LEVEL, "handlers": all_handlers},
            "uvicorn.error": _logger(settings.LOG_LEVEL, all_handlers),
            "uvicorn.access": _logger("INFO", ["console"]),
            # statements carry bound row values
            "sqlalchemy.engine": _logger(
                "DEBUG" if settings.ENABLE_SQL_LOGGING else "WARNING", ["console"]
            ),
        },
    }


def setup_logging(settings) -> None:
    """
    Apply the config. Creates LOG_DIR first when logging to files.

    A RequestIdFilter also goes on the root logger so records emitted directly
    on it always carry `request_id`.
    """
    if _writes_files(settings):
        Path(settings.LOG_DIR).mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(make_dict_config(settings))
    logging.getLogger().addFilter(RequestIdFilter())
