"""
Logging setup — plain text or newline-delimited JSON on stderr.

Usage::

    from utils.logging import configure_logging

    configure_logging("json", "DEBUG")
    logger.info("toggle ok", extra={"action": "toggle", "item_id": "42"})
"""

from __future__ import annotations

import json
import logging

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Extra fields copied into JSON records when present on the LogRecord.
EXTRA_KEYS = ("action", "item_id", "status", "duration_ms")


class JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_KEYS:
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


def configure_logging(log_format: str = "text", level: str | int = "INFO") -> logging.Handler:
    """Install a single stream handler on the root logger.

    Args:
        log_format: ``"json"`` for JSON lines, anything else for plain text.
        level: Root log level name or number.

    Returns:
        The installed handler.
    """
    handler = logging.StreamHandler()
    if log_format == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    logging.basicConfig(handlers=[handler], level=level, force=True)
    return handler
