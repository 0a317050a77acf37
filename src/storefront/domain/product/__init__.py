"""Product domain - the catalog.

This domain handles:
- Product aggregate (name, description, price, stock, image references)
- Product filter criteria
- Repository interface (implementation in infrastructure)
"""

from storefront.domain.product.aggregates import Product
from storefront.domain.product.exceptions import (
    ImageTooLargeError,
    InvalidDateError,
    InvalidImageError,
    InvalidPriceError,
    InvalidProductError,
    InvalidStockError,
    MissingProductFieldsError,
    NoImagesError,
    NoProductsFoundError,
    ProductNotFoundError,
    TooManyImagesError,
)
from storefront.domain.product.repositories import ProductRepository
from storefront.domain.product.value_objects import ProductFilter

__all__ = [
    "ImageTooLargeError",
    "InvalidDateError",
    "InvalidImageError",
    "InvalidPriceError",
    "InvalidProductError",
    "InvalidStockError",
    "MissingProductFieldsError",
    "NoImagesError",
    "NoProductsFoundError",
    "Product",
    "ProductFilter",
    "ProductNotFoundError",
    "ProductRepository",
    "TooManyImagesError",
]
