"""Storefront Auth - Generic authentication infrastructure.

This package provides authentication infrastructure that is independent
of the catalog domain. It handles:
- Password hashing (bcrypt)
- JWT token creation and verification

Architecture:
    storefront_auth/
    ├── services/           # Pure logic (password hashing, JWT)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from storefront_auth import PasswordHashingService, JWTService
"""

from storefront_auth.exceptions import (
    AuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    WeakPasswordError,
)
from storefront_auth.schemas import TokenPayload
from storefront_auth.services import (
    JWTService,
    PasswordHashingService,
    strip_bearer_prefix,
)

__all__ = [
    # Services
    "PasswordHashingService",
    "JWTService",
    "strip_bearer_prefix",
    # Schemas
    "TokenPayload",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
    "WeakPasswordError",
    "InvalidCredentialsError",
]
