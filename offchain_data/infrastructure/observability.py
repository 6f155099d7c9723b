"""Structured Logging: JSON formatter and setup for replication runs.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Ledger position extras (block_number, transaction_id, namespace) surfaced when present
    - JSON format for log shipping, human-readable for local runs

Design Decisions:
    - JSONFormatter on the stdlib logging module: no extra dependency, full control
    - setup_logging called once by the CLI entry point
"""

import logging
import json
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "block_number", "transaction_id", "namespace", "error_code",
    "attempt", "writes", "stage",
)


class JSONFormatter(logging.Formatter):
    """Format logs as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure root logging; returns the installed handler."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
