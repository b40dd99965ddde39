"""Structured Logging — JSON log lines for fetch/search traffic.

Invariants:
    - Every line carries timestamp, level, logger, service and message
    - Request-scoped fields (content_hash, content_type, index_name, ...) appear
      only when the record sets them; None values are dropped
    - setup_logging is idempotent: a second call replaces, never duplicates, its handler

Design Decisions:
    - stdlib logging with a custom Formatter, no logging framework dependency
    - httpx/httpcore capped at WARNING: one INFO line per store request would
      drown the gateway's own fetch/search lines
"""

import logging
import json
from datetime import datetime, timezone

SERVICE_NAME = "retrieval-gateway"

REQUEST_FIELDS = (
    "content_hash", "index_name", "content_type", "error_code", "path",
    "attempt", "page_number", "page_size",
)

_NOISY_LOGGERS = ("httpx", "httpcore")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def __init__(self, service: str = SERVICE_NAME, fields=REQUEST_FIELDS):
        super().__init__()
        self.service = service
        self.fields = tuple(fields)

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "message": record.getMessage(),
        }
        entry.update(
            (name, getattr(record, name)) for name in self.fields
            if getattr(record, name, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the gateway's root handler ("json" or plain "text" lines)."""
    global _handler
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))

    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    _handler = handler
    return handler
