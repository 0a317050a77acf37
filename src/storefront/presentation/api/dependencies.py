"""FastAPI dependency injection for the Storefront API.

Provides dependencies for:
- Database sessions
- Authentication (auth gate producing the UserContext)
- Service instances
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, AsyncGenerator

from fastapi import Depends
from fastapi.security import APIKeyHeader
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from storefront.application.context import UserContext
from storefront.application.ports import MailTransport
from storefront.application.services import (
    AuthenticationService,
    ProductNotificationService,
    ProductService,
)
from storefront.domain.shared import ErrorCode, UnauthorizedError
from storefront.infrastructure.email import SmtpMailTransport
from storefront.infrastructure.persistence.sqlalchemy.models import Base
from storefront.infrastructure.persistence.sqlalchemy.repositories import (
    ProductRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from storefront.infrastructure.storage import LocalImageStorage
from storefront.presentation.api.config import get_api_settings
from storefront_auth import JWTService, PasswordHashingService
from storefront_config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# The Authorization header carries either "Bearer <token>" or the raw token,
# so it is read as a plain header rather than through HTTPBearer.
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Access token, optionally prefixed with 'Bearer '",
)

SettingsDep = Annotated[Settings, Depends(get_api_settings)]


@lru_cache()
def get_database_url() -> str:
    """
    Get database URL from application settings.

    Returns
    -------
    Database URL string
    """
    url = get_settings().database_url

    # Ensure data directory exists for SQLite
    if url.startswith("sqlite"):
        db_path = url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return url


# -----------------------------------------------------------------------------
# Database Engine & Session (Singleton)
# -----------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """
    Get the shared async database engine (singleton).

    Returns
    -------
    AsyncEngine instance
    """
    return create_async_engine(
        get_database_url(),
        echo=False,
        pool_pre_ping=True,  # Verify connections before use
    )


@lru_cache(maxsize=1)
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Get the shared async session maker (singleton).

    Returns
    -------
    async_sessionmaker configured with the shared engine
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Yields
    ------
    AsyncSession for database operations
    """
    async with get_session_maker()() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Database Schema Management
# -----------------------------------------------------------------------------


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    engine = engine or get_engine()
    logger.info("Ensuring all database tables exist...")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database schema is up to date (missing tables created if needed)")


# -----------------------------------------------------------------------------
# Authentication Services
# -----------------------------------------------------------------------------


def get_jwt_service(settings: SettingsDep) -> JWTService:
    """Get JWT service configured with API settings."""
    return JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        access_token_expire_hours=settings.jwt_access_token_expire_hours,
    )


def get_password_service(settings: SettingsDep) -> PasswordHashingService:
    """Get password hashing service."""
    return PasswordHashingService(rounds=settings.password_hash_rounds)


async def get_authentication_service(
    session: DBSession,
    jwt_service: JWTService = Depends(get_jwt_service),
    password_service: PasswordHashingService = Depends(get_password_service),
) -> AuthenticationService:
    """Get authentication service with all dependencies."""
    return AuthenticationService(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=password_service,
        jwt_service=jwt_service,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]


# -----------------------------------------------------------------------------
# Auth Gate
# -----------------------------------------------------------------------------


async def get_current_user(
    authorization: str | None = Depends(authorization_header),
    jwt_service: JWTService = Depends(get_jwt_service),
) -> UserContext:
    """
    Auth gate: resolve the current user from the Authorization header.

    Parameters
    ----------
    authorization
        Header value, "Bearer <token>" or the bare token
    jwt_service
        JWT service for token verification

    Returns
    -------
    UserContext for the token's subject. The user record is not loaded.

    Raises
    ------
    UnauthorizedError
        401 if the header is missing or blank, or the token is invalid
        or expired
    """
    if authorization is None or not authorization.strip():
        raise UnauthorizedError(
            "Access denied. No token provided.",
            code=ErrorCode.AUTH_REQUIRED,
        )

    payload = jwt_service.verify(authorization.strip())
    if payload is None:
        logger.warning("Rejected request with invalid or expired token")
        raise UnauthorizedError("Invalid token", code=ErrorCode.INVALID_TOKEN)

    return UserContext.from_values(payload.user_id)


# Type alias for injected current user
CurrentUser = Annotated[UserContext, Depends(get_current_user)]


# -----------------------------------------------------------------------------
# Product Services
# -----------------------------------------------------------------------------


def get_image_storage(settings: SettingsDep) -> LocalImageStorage:
    return LocalImageStorage(
        uploads_dir=Path(settings.uploads_dir),
        max_files=settings.upload_max_files,
        max_file_size_bytes=settings.upload_max_file_size_bytes,
    )


async def get_product_service(
    session: DBSession,
    settings: SettingsDep,
    image_storage: LocalImageStorage = Depends(get_image_storage),
) -> ProductService:
    return ProductService(
        product_repository=ProductRepositorySQLAlchemy(session),
        image_storage=image_storage,
        public_base_url=settings.public_base_url,
    )


ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]


def get_mail_transport(settings: SettingsDep) -> MailTransport:
    """Get the SMTP mail transport (a no-op with a warning if SMTP is off)."""
    return SmtpMailTransport(settings)


async def get_notification_service(
    session: DBSession,
    settings: SettingsDep,
    mail_transport: MailTransport = Depends(get_mail_transport),
) -> ProductNotificationService:
    return ProductNotificationService(
        product_repository=ProductRepositorySQLAlchemy(session),
        mail_transport=mail_transport,
        report_recipient=settings.report_recipient,
        report_subject=settings.report_subject,
    )


NotificationService = Annotated[
    ProductNotificationService,
    Depends(get_notification_service),
]
