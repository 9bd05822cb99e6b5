"""Logging setup.

Every record gets the current request id. In JSON mode each line is one
object; the ids and counters passed through ``extra=`` by the matching code
(brief, designer, match, provider, fallback reason, ...) become top-level keys
so log search can filter a single matching run.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from .request_id import get_request_id

EXTRA_FIELDS = (
    "brief_id",
    "client_id",
    "designer_id",
    "match_id",
    "phase",
    "provider",
    "reason",
    "candidates",
    "duration_ms",
    "latency_ms",
    "status_code",
    "method",
    "path",
    "error_type",
)

NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "httpx", "openai")


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Known ``extra=`` attributes of a record, with ids rendered as strings."""
    extras = {}
    for name in EXTRA_FIELDS:
        if not hasattr(record, name):
            continue
        value = getattr(record, name)
        extras[name] = value if value is None or isinstance(value, (int, float, bool)) else str(value)
    return extras


class RequestIDFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "request_id": getattr(record, "request_id", "no-request-id"),
            "message": record.getMessage(),
        }
        data.update(record_extras(record))
        if record.exc_info:
            data["error"] = str(record.exc_info[1])
            data["traceback"] = self.formatException(record.exc_info)
        return json.dumps(data)


class TextFormatter(logging.Formatter):
    """Human-readable lines for local development, extras as key=value."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)-7s [%(request_id)s] %(name)s: %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = record_extras(record)
        if extras:
            line += " " + " ".join(f"{k}={v}" for k, v in extras.items())
        return line


def configure_logging(level: str = "INFO", json_format: bool = True) -> None:
    """Install a single stdout handler on the root logger.

    Args:
        level: Log level name
        json_format: JSON lines when True, plain text otherwise
    """
    numeric_level = getattr(logging, level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(JSONFormatter() if json_format else TextFormatter())
    handler.addFilter(RequestIDFilter())

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
