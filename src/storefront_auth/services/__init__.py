"""Authentication services.

Provides password hashing and JWT token management.
"""

from storefront_auth.services.jwt_service import JWTService, strip_bearer_prefix
from storefront_auth.services.password_service import PasswordHashingService

__all__ = [
    "PasswordHashingService",
    "JWTService",
    "strip_bearer_prefix",
]
