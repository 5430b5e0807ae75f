"""FastAPI server for the release notes dashboard"""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from releasenotes.api.middleware.rate_limit import RateLimitMiddleware
from releasenotes.api.middleware.security_headers import SecurityHeadersMiddleware
from releasenotes.api.routes.frontend import build_frontend_router
from releasenotes.api.routes.health import router as health_router
from releasenotes.api.routes.release_notes import router as release_notes_router
from releasenotes.api.routes.visitor_counter import router as visitor_counter_router
from releasenotes.config import (
    ALLOWED_ORIGINS,
    API_HOST,
    API_PORT,
    APP_VERSION,
    RATE_LIMIT_MAX_REQUESTS,
    RATE_LIMIT_WINDOW_SECONDS,
    SERVICE_NAME,
    STATIC_DIR,
    is_production,
    log_startup_configuration,
)
from releasenotes.observability.logging import get_logger
from releasenotes.observability.telemetry import counter, log_event
from releasenotes.utils.error_sanitizer import GENERIC_MESSAGES

logger = get_logger(__name__)

_STATUS_PHRASES = {
    404: "Not Found",
    405: "Method Not Allowed",
    429: "Too Many Requests",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors as {error, message}."""
    if exc.status_code >= 500:
        logger.error("HTTP %d on %s: %s", exc.status_code, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": _STATUS_PHRASES.get(exc.status_code, "Error"),
            "message": str(exc.detail),
        },
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Validation errors without leaking internal validation rules."""
    logger.warning("Validation error on %s: %s", request.url.path, exc.errors())
    counter("api.validation_errors")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Invalid Request",
            "message": "Invalid request parameters. Please check your request and try again.",
            "invalid_fields": [str(err["loc"][-1]) for err in exc.errors()],
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    counter("api.unhandled_errors")
    message = GENERIC_MESSAGES[500] if is_production() else str(exc) or GENERIC_MESSAGES[500]
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal Server Error", "message": message},
    )


def create_app(
    static_dir: Path = STATIC_DIR,
    allowed_origins: list[str] | None = None,
    rate_limit_max_requests: int = RATE_LIMIT_MAX_REQUESTS,
    rate_limit_window_seconds: int = RATE_LIMIT_WINDOW_SECONDS,
) -> FastAPI:
    """Build the API app: middleware, error handlers, routers, then the SPA fallback."""
    app = FastAPI(title=SERVICE_NAME, version=APP_VERSION)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.add_middleware(
        RateLimitMiddleware,
        max_requests=rate_limit_max_requests,
        window_seconds=rate_limit_window_seconds,
    )
    app.add_middleware(SecurityHeadersMiddleware, is_production=is_production())
    # Added last so CORS headers land on every response, 429s included
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins if allowed_origins is not None else ALLOWED_ORIGINS,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "X-Request-ID"],
    )

    app.include_router(health_router)
    app.include_router(release_notes_router)
    app.include_router(visitor_counter_router)
    # Catch-all routes; must stay last
    app.include_router(build_frontend_router(Path(static_dir)))

    return app


log_startup_configuration()
app = create_app()
log_event("api.startup", service=SERVICE_NAME, version=APP_VERSION)


def main() -> None:
    """Run the API with uvicorn."""
    import uvicorn

    uvicorn.run("releasenotes.api.app:app", host=API_HOST, port=API_PORT)
