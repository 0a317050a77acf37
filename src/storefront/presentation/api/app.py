"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers.

Routes:
    /api/auth/*       Registration and login (open)
    /api/products/*   Catalog and product emails (token required)
    /uploads/*        Uploaded product images (open)
    /health           Health check
"""

import logging
import sys
import time
from contextlib import asynccontextmanager
from functools import lru_cache
from pathlib import Path
from typing import AsyncGenerator

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from sqlalchemy.ext.asyncio import AsyncEngine

from storefront.infrastructure.email import SmtpMailTransport
from storefront.infrastructure.scheduling import ProductReportScheduler
from storefront.presentation.api.dependencies import (
    create_tables,
    get_current_user,
    get_engine,
    get_session_maker,
)
from storefront.presentation.api.exception_handlers import (
    setup_exception_handlers,
)
from storefront.presentation.api.routers import auth_router, products_router
from storefront_config.settings import Settings, get_settings


@lru_cache(maxsize=1)
def _configure_logging() -> None:
    """Configure application logging.

    Sets up logging for the storefront application with:
    - Console output with timestamps and module names
    - Configurable log level for storefront modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    settings = get_settings()
    log_level_str = settings.log_level.upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,  # Override any existing config
    )

    logging.getLogger("storefront").setLevel(log_level)
    logging.getLogger("storefront_auth").setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_PREFIX = "/api"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """User registration and login.

- Register with username, email and password
- Login to obtain a JWT access token (valid for 1 hour)
- Send the token as `Authorization: Bearer <token>` (or the bare token)
""",
    },
    {
        "name": "Products",
        "description": """Product catalog. All endpoints require a token.

- Create products with 1-5 images (JPEG, PNG, GIF; 5 MB each)
- List, update, delete and filter products
- Email a product's details, or the whole catalog
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


def _build_report_scheduler(settings: Settings) -> ProductReportScheduler:
    return ProductReportScheduler(
        session_maker=get_session_maker(),
        mail_transport=SmtpMailTransport(settings),
        interval_seconds=settings.report_interval_seconds,
        recipient=settings.report_recipient,
        subject=settings.report_subject,
    )


def _make_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan manager."""
        logger.info("Starting %s API v%s...", settings.app_name, API_VERSION)
        if settings.uses_insecure_jwt_secret:
            logger.warning(
                "JWT_SECRET_KEY is not set; tokens are signed with the insecure "
                "default key. Set JWT_SECRET_KEY before deploying.",
            )

        Path(settings.uploads_dir).mkdir(parents=True, exist_ok=True)
        engine = get_engine()
        await _init_database_schema(engine)

        scheduler = None
        if settings.report_enabled:
            scheduler = _build_report_scheduler(settings)
            scheduler.start()

        yield

        logger.info("Shutting down %s API...", settings.app_name)
        if scheduler is not None:
            await scheduler.stop()
        await engine.dispose()
        logger.info("Database connections closed")

    return lifespan


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    logger.info("Initializing database schema...")
    try:
        await create_tables(engine)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None

    logger.info("Database schema initialized successfully")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    _configure_logging()

    if settings is None:
        settings = get_settings()

    app_name = settings.app_name

    app = FastAPI(
        title=f"{app_name} API",
        description="Product catalog with JWT authentication and product emails.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=_make_lifespan(settings),
        openapi_tags=OPENAPI_TAGS,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("Request received: %s %s", request.method, request.url.path)
        started = time.perf_counter()
        response = await call_next(request)
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - started) * 1000,
        )
        return response

    setup_exception_handlers(app, expose_details=settings.api_expose_error_details)

    app.include_router(
        auth_router,
        prefix=f"{API_PREFIX}/auth",
        tags=["Authentication"],
    )
    app.include_router(
        products_router,
        prefix=f"{API_PREFIX}/products",
        tags=["Products"],
        dependencies=[Depends(get_current_user)],
    )

    app.mount(
        "/uploads",
        StaticFiles(directory=settings.uploads_dir, check_dir=False),
        name="uploads",
    )

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": API_VERSION,
        }

    @app.get("/", tags=["Info"])
    async def root() -> dict:
        """API root endpoint with version information."""
        return {
            "name": f"{app_name} API",
            "version": API_VERSION,
            "docs": "/docs" if settings.api_debug else None,
            "api_base": API_PREFIX,
            "endpoints": {
                "health": "/health",
                "auth": f"{API_PREFIX}/auth",
                "products": f"{API_PREFIX}/products",
                "uploads": "/uploads",
            },
        }

    return app
