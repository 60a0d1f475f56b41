"""JSON-lines logging for the minter console.

Every record becomes one JSON object with ``timestamp``, ``level``,
``message`` and ``component`` keys. Structured context is attached with
``extra={"extra_fields": {...}}`` and merged into the top level of the object.
Log lines go to stderr so they never interleave with operator prompts.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Optional, TextIO

DEFAULT_LEVEL = "WARNING"

_RECORD_ATTRS = frozenset(
    logging.makeLogRecord({}).__dict__
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Formats records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "component": record.name,
        }
        entry.update(self._context(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)

    @staticmethod
    def _context(record: logging.LogRecord) -> dict[str, Any]:
        context: dict[str, Any] = {}
        for key, value in vars(record).items():
            if key in _RECORD_ATTRS:
                continue
            if key == "extra_fields" and isinstance(value, dict):
                context.update(value)
            else:
                context[key] = value
        return context


def setup_logging(level: Optional[str] = None, stream: Optional[TextIO] = None):
    """Routes all logging through a single JSON handler on the root logger.

    Args:
        level: Log level name. Falls back to LOG_LEVEL, then WARNING.
        stream: Destination stream. Defaults to stderr.
    """
    root = logging.getLogger()
    root.setLevel((level or os.environ.get("LOG_LEVEL") or DEFAULT_LEVEL).upper())

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter())
    root.handlers[:] = [handler]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
