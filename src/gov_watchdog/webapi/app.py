"""FastAPI application for the government transparency dashboard API."""

import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from ..config.logging import bind_request_context, clear_request_context, get_logger
from ..config.settings import get_settings
from ..ormdb import dispose_engine
from ..seed import SeedSource, reseed
from ..utils.config import initialize_application
from .exceptions import setup_exception_handlers
from .routers import (
    admin_router,
    bills_router,
    health_router,
    legislators_router,
    lobbying_router,
    spending_router,
    summary_router,
)
from .sanitizer import InputSanitizerMiddleware

logger = get_logger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager: prepare the record store, seed it, clean up."""
    # Startup
    initialize_application()
    logger.info("Starting Government Watchdog API")

    if get_settings().seed_on_startup:
        result = reseed(SeedSource.ALL)
        if result.success:
            logger.info("Startup seed completed", counts=result.counts)
        else:
            logger.error("Startup seed failed", message=result.message, counts=result.counts)

    logger.info("Government Watchdog API started successfully")

    yield

    # Shutdown
    logger.info("Shutting down Government Watchdog API")
    dispose_engine()
    logger.info("Government Watchdog API shutdown completed")


async def add_request_id_middleware(request: Request, call_next):
    """Add unique request ID to each request for tracking."""
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id
    bind_request_context(request_id=request_id)

    logger.info(
        "Request started",
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        query_params=str(request.query_params),
        user_agent=request.headers.get("user-agent"),
        remote_addr=request.client.host if request.client else None,
    )

    try:
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        logger.info(
            "Request completed",
            request_id=request_id,
            status_code=response.status_code,
            method=request.method,
            path=request.url.path,
        )
        return response
    finally:
        clear_request_context()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Government Watchdog API",
        description="""
        Read-only access to public government records.

        ## Collections

        * **Legislators**: members of Congress and other office holders
        * **Bills**: legislation with status and sponsor
        * **Spending**: federal contract and grant awards
        * **Lobbying**: lobbying disclosure filings

        Every list endpoint accepts optional filters; unknown or unparsable
        filters are ignored rather than rejected.
        """,
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Add middleware for request tracking
    app.middleware("http")(add_request_id_middleware)

    # Sanitize query strings and JSON bodies before routing
    app.add_middleware(InputSanitizerMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(health_router, prefix=API_PREFIX, tags=["Health & Status"])
    app.include_router(legislators_router, prefix=API_PREFIX, tags=["Legislators"])
    app.include_router(bills_router, prefix=API_PREFIX, tags=["Bills"])
    app.include_router(spending_router, prefix=API_PREFIX, tags=["Spending"])
    app.include_router(lobbying_router, prefix=API_PREFIX, tags=["Lobbying"])
    app.include_router(summary_router, prefix=API_PREFIX, tags=["Summary"])
    app.include_router(admin_router, prefix=API_PREFIX, tags=["Administration"])

    logger.info("FastAPI application created")
    return app


# Create the app instance
app = create_app()
