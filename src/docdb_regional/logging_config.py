"""Structured JSON logging configuration.

Emits one JSON object per log entry with timestamp, level, logger, and message.
Engine fields are attached through ``extra`` on the logging call: endpoint,
attempt, and status_code for request attempts, error_reason for failures.

SECURITY: Never logs master keys, signatures, or authorization headers.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone

# Patterns that should be redacted from log output
_SENSITIVE_PATTERNS = re.compile(
    r"(master.key|api.key|secret|password|token|sig(?:nature)?|authorization)"
    r"[\s]*[=:]\s*\S+",
    re.IGNORECASE,
)

_CONTEXT_FIELDS = ("endpoint", "attempt", "status_code")


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON with structured engine fields."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": self._sanitize(record.getMessage()),
        }

        for name in _CONTEXT_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        if hasattr(record, "error_reason"):
            entry["error_reason"] = self._sanitize(str(getattr(record, "error_reason")))

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self._sanitize(self.formatException(record.exc_info))

        return json.dumps(entry, default=str)

    @staticmethod
    def _sanitize(text: str) -> str:
        """Remove sensitive values from log text."""
        return _SENSITIVE_PATTERNS.sub("[REDACTED]", text)


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger with JSON formatting.

    Parameters
    ----------
    level:
        Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # Remove existing handlers to avoid duplicates
    root.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
