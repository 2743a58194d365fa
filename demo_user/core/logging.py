"""Logging configuration for demo-user-service.

One stdout handler, two renderings of a record:

  _ContainerFormatter: one readable line, e.g.
      2024-05-01T10:00:00.123+0000 INFO     demo_user.api.users  GET /users -> 200
    WARNING and above end with [file:line]; request context, when present,
    is appended as key=value pairs.

  _JsonFormatter: one JSON object per line for log aggregation
    (LOG_JSON=true), request context as top-level keys.

Request context (request_id, method, path, status_code, duration_ms) is put
on records by RequestContextMiddleware and its logging filter.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

_CONTEXT_FIELDS = ("request_id", "method", "path", "status_code", "duration_ms")

# Loggers that are chatty below WARNING; sqlalchemy.engine carries SQL echo.
_NOISY_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "httpcore",
    "httpx",
    "sqlalchemy.engine",
)

_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def _timestamp(formatter: logging.Formatter, record: logging.LogRecord) -> str:
    # ISO-8601 with milliseconds and numeric offset: 2024-05-01T10:00:00.123+0000
    base = formatter.formatTime(record, _DATEFMT)
    offset = formatter.formatTime(record, "%z")
    return f"{base}.{int(record.msecs):03d}{offset}"


def _context(record: logging.LogRecord) -> dict[str, Any]:
    fields = {key: getattr(record, key, None) for key in _CONTEXT_FIELDS}
    # The filter stamps "-" outside a request.
    return {k: v for k, v in fields.items() if v is not None and v != "-"}


class _ContainerFormatter(logging.Formatter):
    """Single-line formatter for container stdout."""

    def format(self, record: logging.LogRecord) -> str:
        line = (
            f"{_timestamp(self, record)} {record.levelname:<8} "
            f"{record.name}  {record.getMessage()}"
        )
        context = _context(record)
        if context:
            line += "  " + " ".join(f"{k}={v}" for k, v in context.items())
        if record.levelno >= logging.WARNING:
            line += f"  [{record.filename}:{record.lineno}]"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class _JsonFormatter(logging.Formatter):
    """JSON Lines formatter."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": _timestamp(self, record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def setup_logging(level_name: str, *, json_format: bool = False) -> None:
    """Send all logging to stdout at `level_name` (unknown names mean info)."""
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        level = logging.INFO

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JsonFormatter() if json_format else _ContainerFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers[:] = [handler]

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
