"""
Handler factories for logging.dictConfig.

Each function returns a handler *configuration dict* (not a handler instance);
builder.py registers them by name. All handlers carry the `request_id` and
`redact` filters.
"""

from pathlib import Path

LOG_FILTERS = ["request_id", "redact"]


def _formatter_name(settings) -> str:
    return "json" if settings.LOG_FORMAT == "json" else "standard"


def get_console_handler(settings) -> dict:
    """
    StreamHandler (stderr) at LOG_LEVEL, json or text depending on LOG_FORMAT.
    """
    return {
        "class": "logging.StreamHandler",
        "formatter": _formatter_name(settings),
        "level": settings.LOG_LEVEL,
        "filters": list(LOG_FILTERS),
    }


def _rotating_file(settings, filename: str, *, level: str, formatter: str) -> dict:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "formatter": formatter,
        "level": level,
        "filename": str(Path(settings.LOG_DIR) / filename),
        "maxBytes": settings.LOG_MAX_BYTES,
        "backupCount": settings.LOG_BACKUP_COUNT,
        "encoding": "utf-8",
        "filters": list(LOG_FILTERS),
    }


def get_file_handler(settings) -> dict:
    return _rotating_file(settings, "app.log", level=settings.LOG_LEVEL, formatter=_formatter_name(settings))


def get_error_file_handler(settings) -> dict:
    # error files stay structured regardless of LOG_FORMAT
    return _rotating_file(settings, "errors.log", level="ERROR", formatter="json")


def get_error_console_handler(settings) -> dict:
    return {
        "class": "logging.StreamHandler",
        "formatter": "json",
        "level": "ERROR",
        "filters": list(LOG_FILTERS),
    }
