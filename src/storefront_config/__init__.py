"""Shared application configuration package."""

from .settings import (
    INSECURE_DEFAULT_JWT_SECRET,
    Settings,
    clear_settings_cache,
    get_config_dir,
    get_settings,
)

__all__ = [
    "INSECURE_DEFAULT_JWT_SECRET",
    "Settings",
    "clear_settings_cache",
    "get_config_dir",
    "get_settings",
]
