"""Request correlation and access logging middleware."""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging_config import get_logger
from .metrics import http_request_duration_seconds
from .request_id import generate_request_id, reset_request_id, set_request_id

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Polled every few seconds; logging them drowns the access log
QUIET_PATHS = frozenset({"/health", "/metrics"})


def _route_template(request: Request) -> str:
    # Templates keep brief and match ids out of metric labels
    route = request.scope.get("route")
    return getattr(route, "path", "unmatched")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Bind a request id for the duration of the request.

    The id comes from the caller's X-Request-ID header when present. It is
    available to every log line through the context variable and is echoed
    back on the response. Request duration is recorded per route template.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        token = set_request_id(request_id)
        quiet = request.url.path in QUIET_PATHS
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"{request.method} {request.url.path} raised {type(e).__name__}",
                extra={"method": request.method, "path": request.url.path, "error_type": type(e).__name__},
                exc_info=True,
            )
            raise
        finally:
            reset_request_id(token)

        elapsed = time.perf_counter() - started
        http_request_duration_seconds.labels(
            method=request.method,
            route=_route_template(request),
            status_code=str(response.status_code),
        ).observe(elapsed)
        if not quiet:
            logger.info(
                f"{request.method} {request.url.path} -> {response.status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round(elapsed * 1000, 2),
                },
            )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
