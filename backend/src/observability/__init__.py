"""Logging, metrics, request correlation and health checks."""

from .health import HealthReport, HealthStatus, run_health_checks
from .logging_config import configure_logging, get_logger
from .middleware import RequestIDMiddleware
from .request_id import get_request_id, reset_request_id, set_request_id

__all__ = [
    "HealthReport",
    "HealthStatus",
    "run_health_checks",
    "configure_logging",
    "get_logger",
    "RequestIDMiddleware",
    "get_request_id",
    "reset_request_id",
    "set_request_id",
]
