"""
Formatters referenced from the dictConfig.

JsonFormatter writes one JSON object per line for log collectors; ColorFormatter
writes a single colored line for a developer console (LOG_FORMAT=text).
"""

import json
import logging
from typing import Any

from cityevents.utils.logging import get_project_version

PROJECT_VERSION = get_project_version()

# Attributes present on every LogRecord; anything else arrived through `extra=`
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _json_safe(value: Any) -> Any:
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


class JsonFormatter(logging.Formatter):
    """
    Fields: timestamp, level, logger, message, pathname, lineno, request_id,
    service, env, version, exc_info/stack_info when present, then every extra.
    Extras that JSON cannot encode are stringified.
    """

    def __init__(self, *, env: str | None = None, service: str = "cityevents", datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.env = env
        self.service = service

    def _base_fields(self, record: logging.LogRecord) -> dict[str, Any]:
        return {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "request_id": getattr(record, "request_id", "-"),
            "service": self.service,
            "env": self.env,
            "version": PROJECT_VERSION,
        }

    def format(self, record: logging.LogRecord) -> str:
        payload = self._base_fields(record)

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack_info"] = self.formatStack(record.stack_info)

        payload.update(
            (key, _json_safe(value))
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in payload and not key.startswith("_")
        )
        return json.dumps(payload, ensure_ascii=False, default=str)


class ColorFormatter(logging.Formatter):
    """TIMESTAMP | LEVEL | LOGGER | REQUEST_ID | MESSAGE, traceback on the following lines."""

    COLOR_CODES = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[1;41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        level = f"{self.COLOR_CODES.get(record.levelname, '')}{record.levelname:<8}{self.RESET}"
        columns = [
            self.formatTime(record, self.datefmt),
            level,
            f"{record.name:<30}",
            f"{getattr(record, 'request_id', '-'):<10}",
            record.getMessage(),
        ]
        line = " | ".join(columns)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line
