"""FastAPI application entry point."""

from contextlib import asynccontextmanager
import re
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.routing import APIRoute
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy.exc import SQLAlchemyError
from structlog import contextvars

from localizard.api.main import api_router
from localizard.core.config import settings
from localizard.core.exceptions import AppException, StoreError
from localizard.core.logging import get_logger, setup_logging
from localizard.core.rate_limit import limiter

setup_logging()
logger = get_logger(__name__)

# Consumer reads: /projects/{project} and /projects/{project}/{locale}
CONSUMER_PATH = re.compile(rf"^{re.escape(settings.API_V1_STR)}/projects/[^/]+(/[^/]+)?/?$")


def custom_generate_unique_id(route: APIRoute) -> str:
    """Generate unique operation IDs for OpenAPI schema.

    Format: {tag}-{route_name}
    """
    if route.tags:
        return f"{route.tags[0]}-{route.name}"
    return route.name


def _field_errors(exc: RequestValidationError) -> dict[str, str]:
    """Collapse pydantic errors into {field: message}, first message per field."""
    fields: dict[str, str] = {}
    for error in exc.errors():
        loc = [
            str(part)
            for part in error.get("loc", ())
            if part not in ("body", "query", "path")
        ]
        field = ".".join(loc) or "body"
        fields.setdefault(field, error.get("msg", "Invalid value"))
    return fields


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(
        "application_startup",
        environment=settings.ENVIRONMENT,
        debug=settings.DEBUG,
    )
    yield
    logger.info("application_shutdown")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        docs_url=f"{settings.API_V1_STR}/docs",
        redoc_url=f"{settings.API_V1_STR}/redoc",
        lifespan=lifespan,
        generate_unique_id_function=custom_generate_unique_id,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.exception_handler(AppException)
    async def app_exception_handler(
        request: Request, exc: AppException
    ) -> JSONResponse:
        """Handle all AppException subclasses with consistent JSON format."""
        logger.warning(
            "app_exception",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            details=exc.details,
            path=str(request.url.path),
        )
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        fields = _field_errors(exc)
        logger.info(
            "request_validation_failed",
            path=str(request.url.path),
            fields=list(fields),
        )
        return JSONResponse(
            status_code=422,
            content={
                "error_code": "VALIDATION_ERROR",
                "message": "Request validation failed",
                "details": {"fields": fields},
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_exception_handler(
        request: Request, exc: SQLAlchemyError
    ) -> JSONResponse:
        """Database errors raised outside a unit of work."""
        logger.error(
            "store_failure",
            error_type=type(exc).__name__,
            path=str(request.url.path),
        )
        error = StoreError()
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add unique request ID to each request for tracing."""
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))
        contextvars.clear_contextvars()
        contextvars.bind_contextvars(request_id=request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.middleware("http")
    async def allow_any_origin_on_consumer_api(request: Request, call_next):
        """Let browsers read consumer responses, errors included, from any origin."""
        response = await call_next(request)
        if request.method in ("GET", "HEAD") and CONSUMER_PATH.match(request.url.path):
            response.headers.setdefault(
                "Access-Control-Allow-Origin", settings.PUBLIC_API_ALLOW_ORIGIN
            )
        return response

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        """Add security headers to all responses."""
        response = await call_next(request)

        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"

        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"

        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate"

        # HSTS for production (enforces HTTPS)
        if settings.ENVIRONMENT == "production":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains; preload"
            )

        return response

    if settings.all_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.all_cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            allow_headers=[
                "Authorization",
                "Content-Type",
                "X-Api-Key",
                "X-Request-ID",
                "Accept",
                "Origin",
            ],
            expose_headers=["X-Request-ID"],
        )
        logger.info("cors_configured", origins=settings.all_cors_origins)

    app.include_router(api_router, prefix=settings.API_V1_STR)

    return app


app = create_app()


@app.get("/health", tags=["health"])
async def root_health():
    """Root health check endpoint."""
    return {"status": "ok", "service": settings.PROJECT_NAME}
