"""
FastAPI application factory.
"""

import time
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from riskdash import __version__
from riskdash.core.config import ConfigManager, DashboardConfig
from riskdash.core.exceptions import (
    AcquisitionError,
    CredentialError,
    DashboardError,
    ErrorCode,
    UnknownIndicatorError,
    UnsupportedPeriodError,
)
from riskdash.core.logging import configure_logging, log_context, logger
from riskdash.core.services import ServiceContainer, build_services
from riskdash.web.models import ErrorResponse
from riskdash.web.routes import health_router, indicator_router, metrics_router, putcall_router
from riskdash.web.utils import get_request_id

REQUEST_ID_HEADER = "X-Request-ID"


def status_for(exc: DashboardError) -> int:
    """HTTP status for a domain error."""
    if isinstance(exc, UnknownIndicatorError):
        return 404
    if isinstance(exc, UnsupportedPeriodError):
        return 400
    if isinstance(exc, CredentialError):
        return 503
    if isinstance(exc, AcquisitionError):
        return 502
    return 500


def create_app(
    services: ServiceContainer | None = None,
    clock: Callable[[], date] | None = None,
    config: DashboardConfig | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        services: prebuilt services; built from configuration at startup when omitted
        clock: source of "today", defaults to :meth:`date.today`
        config: configuration used when building services
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        owned: ServiceContainer | None = None
        if services is None:
            app_config = config or ConfigManager().get_config()
            configure_logging(
                app_config.logging.level,
                file_output=bool(app_config.logging.file),
                file_path=app_config.logging.file,
            )
            owned = build_services(app_config)
            app.state.services = owned
        else:
            app.state.services = services
        app.state.start_time = time.monotonic()

        yield

        if owned is not None:
            await owned.aclose()

    app = FastAPI(
        title="riskdash",
        description="Financial risk indicators with causal rolling z-scores",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.clock = clock or date.today
    app.state.start_time = time.monotonic()
    if services is not None:
        app.state.services = services

    _setup_middleware(app)
    _setup_routes(app)
    _setup_exception_handlers(app)
    return app


def _setup_middleware(app: FastAPI) -> None:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def trace_requests(request: Request, call_next):
        with log_context(trace_id=request.headers.get(REQUEST_ID_HEADER), path=request.url.path) as trace_id:
            request.state.request_id = trace_id
            started = time.perf_counter()
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
            response.headers[REQUEST_ID_HEADER] = trace_id
            return response


def _setup_routes(app: FastAPI) -> None:
    app.include_router(health_router, prefix="/api", tags=["health"])
    app.include_router(putcall_router, prefix="/api", tags=["putcall"])
    app.include_router(indicator_router, prefix="/api", tags=["indicators"])
    app.include_router(metrics_router)


def _error_body(request: Request, error: str, message: str, details: dict | None) -> dict:
    return ErrorResponse(
        error=error,
        message=message,
        details=details,
        request_id=get_request_id(request),
    ).model_dump(mode="json")


def _setup_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DashboardError)
    async def dashboard_exception_handler(request: Request, exc: DashboardError) -> JSONResponse:
        status = status_for(exc)
        log = logger.bind(provider=exc.details.get("provider"), indicator=exc.details.get("indicator"))
        if status >= 500:
            log.error(f"{request.url.path} failed: {exc.message}")
        else:
            log.info(f"{request.url.path} rejected: {exc.message}")
        return JSONResponse(
            status_code=status,
            content=_error_body(request, exc.error_code, exc.message, exc.details),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, "HTTP_ERROR", str(exc.detail), {"status_code": exc.status_code}),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.url.path}")
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request, ErrorCode.INTERNAL_ERROR.value, "Internal server error", {"type": type(exc).__name__}
            ),
        )
