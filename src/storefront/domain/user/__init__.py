"""User domain - manages user identity.

This domain handles:
- User aggregate (username, email, password hash)
- Email value object (validation, normalization)

Design notes:
- User ID is a random UUID4 generated at creation (opaque, unpredictable)
- Email is unique and indexed for lookups
- Repository interface defined here, implementation in infrastructure
"""

from storefront.domain.user.aggregates import User
from storefront.domain.user.exceptions import DuplicateUserError, InvalidEmailError
from storefront.domain.user.repositories import UserRepository
from storefront.domain.user.value_objects import Email

__all__ = [
    "DuplicateUserError",
    "Email",
    "InvalidEmailError",
    "User",
    "UserRepository",
]
