"""Structured request logging and its lookup from a request context."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

LOGGER_KEY = "filmoteka.logger"
_LOGGER_NAME = "filmoteka"

_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class NoLoggerError(LookupError):
    """Raised when a request context carries no logger."""

    def __init__(self) -> None:
        super().__init__("no logger in context")


class _JsonFormatter(logging.Formatter):
    """Formats records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "level": record.levelname.lower(),
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "caller": f"{record.module}:{record.lineno}",
            "msg": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _STANDARD_ATTRS:
                entry[key] = value
        if record.exc_info:
            entry["error"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


def init_logger() -> logging.LoggerAdapter:
    """Return a JSON logger writing at info level to standard error."""
    base = logging.getLogger(_LOGGER_NAME)
    if not base.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_JsonFormatter())
        base.addHandler(handler)
        base.setLevel(logging.INFO)
        base.propagate = False
    return logging.LoggerAdapter(base, {})


def get_logger_from_context(context: Mapping[str, Any]) -> logging.LoggerAdapter | logging.Logger:
    """Return the logger stored in ``context`` or raise NoLoggerError."""
    found = context.get(LOGGER_KEY)
    if not isinstance(found, (logging.Logger, logging.LoggerAdapter)):
        raise NoLoggerError()
    return found