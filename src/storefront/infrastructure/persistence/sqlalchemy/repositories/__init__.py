"""SQLAlchemy repository implementations organized by bounded context."""

from storefront.infrastructure.persistence.sqlalchemy.repositories.product import (
    ProductRepositorySQLAlchemy,
)
from storefront.infrastructure.persistence.sqlalchemy.repositories.user import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "ProductRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
