"""Structured Logging — one log line per event, JSON in production, text locally.

Invariants:
    - Every line carries the record's own timestamp (UTC), level, logger and message
    - Request and pet context (EXTRA_FIELDS) is surfaced when the caller passed it
    - setup_logging is idempotent: repeated calls replace, never stack, its handler
    - uvicorn's own access log is muted; api/middleware.py writes the access line

Design Decisions:
    - Context travels as logging ``extra`` keys rather than a contextvar:
      the middleware and error handlers already hold the request
    - The text format appends request_id so local logs can still be correlated
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "request_id", "method", "path", "status_code", "duration_ms",
    "error_code", "pet_id", "limit", "oauth_stage", "event",
)

_HANDLER_NAME = "petstore"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def _context(record: logging.LogRecord) -> dict:
    return {
        key: record.__dict__[key]
        for key in EXTRA_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """Render a record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            entry["stack"] = self.formatStack(record.stack_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable lines with the request id appended when known."""

    def __init__(self):
        super().__init__(_TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        request_id = record.__dict__.get("request_id")
        return f"{line} [{request_id}]" if request_id else line


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Install the petstore handler on the root logger."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else TextFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
