"""Operational endpoints: Prometheus scrape target and health report."""

from fastapi import APIRouter, Depends, Response
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy.orm import Session

from config import get_settings
from database import get_db
from .health import run_health_checks

router = APIRouter(tags=["Observability"])


@router.get("/metrics", include_in_schema=False)
def metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


@router.get(
    "/health",
    summary="Component health",
    description="Database connectivity, AI provider configuration and designer pool size",
)
def health_check(db: Session = Depends(get_db)):
    """Answer 200 when healthy or degraded, 503 when the database is unreachable."""
    report = run_health_checks(db, api_key_configured=bool(get_settings().AI_API_KEY))
    return JSONResponse(content=report.to_dict(), status_code=report.http_status)
