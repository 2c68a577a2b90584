"""Structured Logging — JSON and key=value formatters, idempotent setup.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - Library context (queue_id, media_path, byte_range, ...) is surfaced only
      when the call site passed it through `extra=`
    - setup_logging owns exactly one root handler: calling it again (a second
      lifespan start, a test app restart) replaces that handler, never stacks
      another one

Design Decisions:
    - Formatters read the same LOG_CONTEXT_FIELDS tuple, so JSON and text
      output never disagree about which context is shown
    - aiosqlite and the SQLAlchemy engine are capped at WARNING: their DEBUG
      output is per-statement and drowns request logs
"""

import json
import logging
from datetime import datetime, timezone


LOG_CONTEXT_FIELDS: tuple[str, ...] = (
    "queue_id", "media_path", "action", "track_count", "byte_range",
    "error_code",
)

NOISY_LOGGERS: tuple[str, ...] = ("aiosqlite", "sqlalchemy.engine")

_HANDLER_NAME = "melodyhub"


def log_context(record: logging.LogRecord) -> dict:
    """Context fields set on this record, in LOG_CONTEXT_FIELDS order."""
    return {
        key: record.__dict__[key]
        for key in LOG_CONTEXT_FIELDS
        if record.__dict__.get(key) is not None
    }


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **log_context(record),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class ContextTextFormatter(logging.Formatter):
    """Human-readable lines with the context appended as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)s %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = log_context(record)
        if not context:
            return line
        pairs = " ".join(f"{key}={value!r}" for key, value in context.items())
        first, sep, rest = line.partition("\n")
        return f"{first} [{pairs}]{sep}{rest}"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the application's root handler."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == _HANDLER_NAME]:
        root.removeHandler(existing)
        existing.close()

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else ContextTextFormatter())
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
