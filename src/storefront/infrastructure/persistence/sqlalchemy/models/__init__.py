"""SQLAlchemy models for persistence layer."""

from storefront.infrastructure.persistence.sqlalchemy.models.base import Base
from storefront.infrastructure.persistence.sqlalchemy.models.product_model import (
    ProductModel,
)
from storefront.infrastructure.persistence.sqlalchemy.models.user_model import (
    UserModel,
)

__all__ = [
    "Base",
    "ProductModel",
    "UserModel",
]
