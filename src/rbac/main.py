from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import FastAPI, HTTPException, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import RequestResponseEndpoint

from src.rbac.api.dependencies.caller import USER_EMAIL_HEADER, USER_ID_HEADER, SessionLookup
from src.rbac.api.errors import ServiceFailureError, error_response, failure_response
from src.rbac.api.v1.router import api_router
from src.rbac.core.config import get_settings
from src.rbac.core.db import dispose_engine, get_session
from src.rbac.core.errors import ErrorCode
from src.rbac.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from src.rbac.core.notifications import NotificationDispatcher

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}")

    yield

    logger.info("Closing connections...")
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "tenants", "description": "Tenant lifecycle"},
    {"name": "roles", "description": "System and custom roles with their permissions"},
    {"name": "members", "description": "Tenant memberships"},
    {"name": "invitations", "description": "Tenant invitation lifecycle"},
]


def _validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        errors.append(
            {
                "code": ErrorCode.VALIDATION_ERROR.value,
                "message": error.get("msg", "Invalid value"),
                "value": field or None,
            }
        )
    return errors


def create_app(
    session_lookup: SessionLookup | None = None,
    notification_dispatcher: NotificationDispatcher | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        session_lookup: Resolves the authenticated caller of a request.
            Defaults to trusting the gateway's identity headers.
        notification_dispatcher: Outbound channel for invitation notices.
            Defaults to email through Resend.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant role-based access control and invitation lifecycle",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
        lifespan=lifespan,
    )

    if session_lookup is not None:
        app.state.session_lookup = session_lookup
    app.state.notification_dispatcher = notification_dispatcher

    # Exception handlers to include request_id in error responses
    @app.exception_handler(ServiceFailureError)
    async def service_failure_handler(request: Request, exc: ServiceFailureError) -> JSONResponse:
        return failure_response(exc.failure)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return error_response(400, _validation_errors(exc))

    @app.exception_handler(StarletteHTTPException)
    async def starlette_http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "detail": exc.detail,
                "request_id": correlation_id.get(),
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            request_id=request_id,
            path=request.url.path,
            exc_info=exc,
        )
        return error_response(
            500,
            [{"code": ErrorCode.INTERNAL_ERROR.value, "message": "Internal server error"}],
        )

    # Add correlation ID middleware first (outermost middleware)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "X-Request-ID",
            USER_ID_HEADER,
            USER_EMAIL_HEADER,
        ],
    )

    # Add logging context middleware
    @app.middleware("http")
    async def logging_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Bind request_id to log context for all requests."""
        clear_request_context()
        bind_request_context(correlation_id.get())
        try:
            response = await call_next(request)
            return response
        finally:
            clear_request_context()

    app.include_router(api_router)

    @app.get("/health")
    async def health() -> JSONResponse:
        """Health check with database validation."""
        try:
            async with get_session() as session:
                await session.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Health check failed", error=str(e))
            return JSONResponse(
                content={"status": "unhealthy", "database": "unhealthy"}, status_code=503
            )
        return JSONResponse(content={"status": "healthy", "database": "healthy"})

    return app


app = create_app()
