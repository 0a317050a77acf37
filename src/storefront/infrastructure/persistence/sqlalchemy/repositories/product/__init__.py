"""SQLAlchemy repository implementations for product domain."""

from storefront.infrastructure.persistence.sqlalchemy.repositories.product.product_repository import (  # NOQA: E501
    ProductRepositorySQLAlchemy,
)

__all__ = ["ProductRepositorySQLAlchemy"]
