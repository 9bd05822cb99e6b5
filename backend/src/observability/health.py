"""Health checks.

Three components are reported:
- database: ``SELECT 1`` round trip
- ai_provider: whether an API key is configured (no network call)
- designer_catalog: whether any designer can currently be matched

Only an unreachable database makes the service unhealthy. Running without an
AI key or with an empty pool still answers requests, so those degrade.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from domain.matching.catalog import MATCHABLE_AVAILABILITY
from models.designer import Designer
from .logging_config import get_logger

logger = get_logger(__name__)


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass
class ComponentHealth:
    status: HealthStatus
    message: Optional[str] = None
    latency_ms: Optional[float] = None


@dataclass
class HealthReport:
    """Aggregated result of all component checks."""
    components: Dict[str, ComponentHealth] = field(default_factory=dict)

    @property
    def status(self) -> HealthStatus:
        statuses = {c.status for c in self.components.values()}
        if HealthStatus.UNHEALTHY in statuses:
            return HealthStatus.UNHEALTHY
        if HealthStatus.DEGRADED in statuses:
            return HealthStatus.DEGRADED
        return HealthStatus.HEALTHY

    @property
    def http_status(self) -> int:
        return 503 if self.status == HealthStatus.UNHEALTHY else 200

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "components": {
                name: {
                    "status": c.status.value,
                    "message": c.message,
                    "latency_ms": c.latency_ms,
                }
                for name, c in self.components.items()
            },
        }


def check_database_health(db: Session) -> ComponentHealth:
    start = time.perf_counter()
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        return ComponentHealth(HealthStatus.UNHEALTHY, f"Database error: {str(e)}")
    latency_ms = round((time.perf_counter() - start) * 1000, 2)
    return ComponentHealth(HealthStatus.HEALTHY, "Database connection OK", latency_ms)


def check_ai_provider_health(api_key_configured: bool) -> ComponentHealth:
    if api_key_configured:
        return ComponentHealth(HealthStatus.HEALTHY, "AI provider configured")
    return ComponentHealth(HealthStatus.DEGRADED, "No AI API key, using rule-based scoring only")


def check_catalog_health(db: Session) -> ComponentHealth:
    """Count approved, verified designers that are available or busy."""
    stmt = select(func.count()).select_from(Designer).where(
        Designer.is_approved.is_(True),
        Designer.is_verified.is_(True),
        Designer.availability.in_([a.value for a in MATCHABLE_AVAILABILITY]),
    )
    try:
        matchable = db.execute(stmt).scalar_one()
    except SQLAlchemyError as e:
        logger.error(f"Designer catalog check failed: {e}")
        return ComponentHealth(HealthStatus.UNHEALTHY, "Designer catalog unreadable")
    if matchable == 0:
        return ComponentHealth(HealthStatus.DEGRADED, "No matchable designers")
    return ComponentHealth(HealthStatus.HEALTHY, f"{matchable} matchable designer(s)")


def run_health_checks(db: Session, api_key_configured: bool) -> HealthReport:
    report = HealthReport()
    report.components["database"] = check_database_health(db)
    report.components["ai_provider"] = check_ai_provider_health(api_key_configured)
    if report.components["database"].status != HealthStatus.UNHEALTHY:
        report.components["designer_catalog"] = check_catalog_health(db)
    return report
