"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. STOREFRONT_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import SecretStr, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fallback signing secret used when JWT_SECRET_KEY is not configured.
# Tokens signed with it are forgeable; startup logs a warning when it is active.
INSECURE_DEFAULT_JWT_SECRET = "your_secret_key"  # NOQA: S105


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent
        if parent == Path("/app"):
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. STOREFRONT_ENV_FILE env var (full path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("STOREFRONT_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values

    The instance is treated as immutable after startup and is handed to the
    services that need it (token signing, mail transport, uploads, reports).
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Application
    app_name: str = "Storefront"

    # Security
    jwt_secret_key: SecretStr = SecretStr(INSECURE_DEFAULT_JWT_SECRET)
    jwt_access_token_expire_hours: int = 1
    password_hash_rounds: int = 10

    @field_validator("jwt_secret_key", mode="before")
    @classmethod
    def _validate_jwt_secret_key(cls, v: Any) -> Any:
        """Treat a blank secret (e.g. ``JWT_SECRET_KEY=``) as not configured."""
        raw = v.get_secret_value() if isinstance(v, SecretStr) else v
        if raw is None or not str(raw).strip():
            return SecretStr(INSECURE_DEFAULT_JWT_SECRET)
        return v

    # Database
    database_backend: Literal["sqlite", "postgresql"] = "sqlite"
    sqlite_path: str = "data/storefront.db"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr | None = None
    postgres_db: str = "storefront"

    # API (API_ prefix)
    api_host: str = "0.0.0.0"
    api_port: int = 5000
    api_debug: bool = False
    api_cors_origins: str = "http://localhost:5173"
    api_expose_error_details: bool = True

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> str:
        """Ensure cors_origins is stored as comma-separated string."""
        if isinstance(v, list):
            return ",".join(v)
        return str(v) if v else ""

    # Uploads
    uploads_dir: str = "uploads"
    upload_max_files: int = 5
    upload_max_file_size_mb: int = 5
    public_base_url: str = "http://localhost:5000"

    # SMTP (SMTP_ prefix)
    smtp_enabled: bool = False
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: SecretStr | None = None
    smtp_from_email: str = ""
    smtp_from_name: str = "Storefront"
    smtp_use_tls: bool = True
    smtp_starttls: bool = True

    # Scheduled product report (REPORT_ prefix)
    report_enabled: bool = True
    report_interval_seconds: int = 120
    report_recipient: str = "reports@example.com"
    report_subject: str = "Product Report using CRON"

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    # Computed properties
    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Construct the database URL from components."""
        if self.database_backend == "sqlite":
            return f"sqlite+aiosqlite:///{self.sqlite_path}"

        password = (
            self.postgres_password.get_secret_value()
            if self.postgres_password
            else ""
        )
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [o.strip() for o in self.api_cors_origins.split(",") if o.strip()]

    @property
    def upload_max_file_size_bytes(self) -> int:
        return self.upload_max_file_size_mb * 1024 * 1024

    @property
    def uses_insecure_jwt_secret(self) -> bool:
        """True when tokens are signed with the built-in fallback secret."""
        return self.jwt_secret_key.get_secret_value() == INSECURE_DEFAULT_JWT_SECRET

    @property
    def mail_sender(self) -> str:
        """The From header used for outgoing mail."""
        address = self.smtp_from_email or self.smtp_user
        if self.smtp_from_name:
            return f"{self.smtp_from_name} <{address}>"
        return address


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
