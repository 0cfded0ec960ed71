"""Structured Logging — one JSON object per line, carrying pipeline context.

Invariants:
    - Every line has timestamp (record creation time, UTC), level, logger, message
    - Pipeline context passed via extra= (view_id, request_seq, record/row counts,
      source_url, export_format, error_code, path) is copied when not None
    - setup_logging is idempotent: calling it again replaces, never duplicates,
      the handler it installed
    - httpx/httpcore request chatter held at WARNING; the source client logs
      its own fetch outcome

Design Decisions:
    - stdlib logging + a small JSONFormatter, no logging dependency
    - "text" format for local runs, "json" for anything shipped to a collector
"""

import json
import logging
from datetime import datetime, timezone

CONTEXT_FIELDS = (
    "view_id", "request_seq", "record_count", "row_count",
    "source_url", "export_format", "error_code", "path",
)

_QUIET_LOGGERS = ("httpx", "httpcore")


class JSONFormatter(logging.Formatter):
    """Render a LogRecord as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update({
            key: getattr(record, key)
            for key in CONTEXT_FIELDS
            if getattr(record, key, None) is not None
        })
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


_handler: logging.Handler | None = None


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the application log handler on the root logger."""
    global _handler
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)

    _handler = logging.StreamHandler()
    if fmt == "json":
        _handler.setFormatter(JSONFormatter())
    else:
        _handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)-7s %(name)s: %(message)s",
        ))
    root.addHandler(_handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return _handler
