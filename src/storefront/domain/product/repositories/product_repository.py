"""Product repository interface."""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from storefront.domain.product.aggregates.product import Product
from storefront.domain.product.value_objects.product_filter import ProductFilter


class ProductRepository(ABC):
    """Repository interface for Product aggregates."""

    @abstractmethod
    async def find_by_id(self, product_id: UUID) -> Optional[Product]:
        """
        Find a product by its ID.

        Returns
        -------
        Product if found, None otherwise
        """

    @abstractmethod
    async def find_all(self) -> list[Product]:
        """Return every product, oldest first."""

    @abstractmethod
    async def find_matching(self, criteria: ProductFilter) -> list[Product]:
        """Return the products matching all given criteria, oldest first."""

    @abstractmethod
    async def save(self, product: Product) -> None:
        """
        Save or update a product.

        If the product exists (by ID), updates it.
        If the product doesn't exist, creates it.
        """

    @abstractmethod
    async def delete(self, product_id: UUID) -> bool:
        """
        Delete a product by ID.

        Returns
        -------
        True if a product was deleted, False if none matched
        """
