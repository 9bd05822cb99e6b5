"""OneDesigner matching API.

Builds the FastAPI application: logging, request correlation, CORS, the
error body contract and the matching, feedback and observability routers.

Every error response has the shape ``{"error": <code>, "message": <text>}``;
validation failures add ``details``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from config import get_settings
from domain.matching.errors import MatchingError
from feedback.endpoints import router as feedback_router
from matching.router import router as matching_router
from observability.logging_config import configure_logging
from observability.middleware import RequestIDMiddleware
from observability.router import router as observability_router

settings = get_settings()

configure_logging(level=settings.LOG_LEVEL, json_format=settings.LOG_JSON)

logger = logging.getLogger(__name__)

API_NAME = "OneDesigner Matching API"
API_VERSION = "0.1.0"


def error_response(status_code: int, code: str, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": code, "message": message, **extra})


async def handle_matching_error(request: Request, exc: MatchingError) -> JSONResponse:
    # Client errors are expected traffic, only server-side failures are errors
    log = logger.error if exc.http_status >= 500 else logger.info
    log(
        f"{request.method} {request.url.path} failed: {exc.code}",
        extra={"status_code": exc.http_status},
    )
    return error_response(exc.http_status, exc.code, exc.message)


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(f"Rejected invalid request to {request.url.path}")
    # ctx may hold exception instances that are not JSON serializable
    details = [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]
    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "validation_error",
        "Request validation failed",
        details=details,
    )


async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "database_error",
        "A database error occurred. Please try again later.",
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled exception on {request.method} {request.url.path}", exc_info=exc)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "internal_error",
        "An unexpected error occurred. Please try again later.",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"{API_NAME} starting (env={settings.ENV}, ai_provider={settings.AI_PROVIDER}, "
        f"model={settings.AI_MODEL}, ai_enabled={bool(settings.AI_API_KEY)})"
    )
    yield
    logger.info(f"{API_NAME} stopped")


def create_app() -> FastAPI:
    """Assemble the application."""
    docs_enabled = settings.ENV != "production"

    application = FastAPI(
        title=API_NAME,
        description="Matches client project briefs with designers from the catalog",
        version=API_VERSION,
        docs_url="/docs" if docs_enabled else None,
        redoc_url=None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    application.add_middleware(RequestIDMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    application.add_exception_handler(MatchingError, handle_matching_error)
    application.add_exception_handler(RequestValidationError, handle_validation_error)
    application.add_exception_handler(SQLAlchemyError, handle_database_error)
    application.add_exception_handler(Exception, handle_unexpected_error)

    application.include_router(observability_router)
    application.include_router(matching_router)
    application.include_router(feedback_router)

    @application.get("/", include_in_schema=False)
    async def root() -> dict[str, Any]:
        return {
            "name": API_NAME,
            "version": API_VERSION,
            "status": "running",
            "docs": "/docs" if docs_enabled else None,
        }

    return application


app = create_app()


if __name__ == "__main__":
    import os

    import uvicorn

    uvicorn.run(
        "main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=settings.ENV == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )
