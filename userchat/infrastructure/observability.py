"""Structured Logging — JSON formatter and setup for observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (operation, error_code, user_id, token counts) surfaced when present
    - Logs go to stderr: stdout belongs to the chat

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup from main
"""

import logging
import json
import sys
from datetime import datetime, timezone

_EXTRA_KEYS = (
    "operation", "error_code", "user_id", "attempt",
    "input_tokens", "output_tokens",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_KEYS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "WARNING", fmt: str = "text"):
    """Configure logging for the application."""
    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    # SDK transport chatter drowns the chat at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
