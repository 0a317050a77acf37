"""Product catalog service."""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from storefront.domain.product import (
    InvalidPriceError,
    InvalidStockError,
    MissingProductFieldsError,
    NoImagesError,
    NoProductsFoundError,
    Product,
    ProductFilter,
    ProductNotFoundError,
)

if TYPE_CHECKING:
    from storefront.application.ports import ImageStorage, ImageUpload
    from storefront.domain.product import ProductRepository

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("productname", "description", "price", "stock")


def parse_price(value: str | float) -> float:
    try:
        price = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidPriceError(value) from e
    if price != price or price < 0:  # NaN or negative
        raise InvalidPriceError(value)
    return price


def parse_stock(value: str | int) -> int:
    if isinstance(value, bool):
        raise InvalidStockError(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError as e:
        raise InvalidStockError(value) from e


def _basename(reference: str) -> str:
    return PurePosixPath(reference.replace("\\", "/")).name


class ProductService:
    """
    Application service for the product catalog.

    Handles create / list / update / delete / filter on top of the
    ProductRepository, and stores uploaded images through ImageStorage.
    """

    def __init__(
        self,
        product_repository: ProductRepository,
        image_storage: ImageStorage,
        public_base_url: str,
    ):
        self._product_repo = product_repository
        self._image_storage = image_storage
        self._public_base_url = public_base_url.rstrip("/")

    async def create_product(  # NOQA: PLR0913
        self,
        productname: Optional[str],
        description: Optional[str],
        price: Optional[str],
        stock: Optional[str],
        uploads: list[ImageUpload],
    ) -> Product:
        """
        Create a product from raw form values and uploaded images.

        Parameters
        ----------
        productname, description, price, stock
            Raw form values; None or empty means the field was not sent.
            Stock is only checked for presence, so "0" is accepted.
        uploads
            Images to attach (at least one)

        Returns
        -------
        The persisted Product

        Raises
        ------
        MissingProductFieldsError
            If a required field is missing
        NoImagesError
            If no image was uploaded
        """
        values = {
            "productname": productname,
            "description": description,
            "price": price,
            "stock": stock,
        }
        missing = [name for name in REQUIRED_FIELDS if values[name] in (None, "")]
        if missing:
            raise MissingProductFieldsError(missing)

        parsed_price = parse_price(price)
        parsed_stock = parse_stock(stock)

        if not uploads:
            raise NoImagesError

        images = await self._image_storage.store(uploads)
        product = Product.create(
            productname=productname,
            description=description,
            price=parsed_price,
            stock=parsed_stock,
            images=images,
        )
        await self._product_repo.save(product)

        logger.info("Product created: %s (%d images)", product.id, len(images))
        return product

    async def list_products(self) -> list[Product]:
        return await self._product_repo.find_all()

    async def update_product(  # NOQA: PLR0913
        self,
        product_id: UUID,
        existing_images: list[str],
        uploads: list[ImageUpload],
        productname: Optional[str] = None,
        description: Optional[str] = None,
        price: Optional[str | float] = None,
        stock: Optional[str | int] = None,
    ) -> Product:
        """
        Update a product.

        The new image list is ``existing_images`` followed by the newly
        stored uploads. It may not be empty; this is checked before the
        product is looked up. Scalar fields left as None keep their value.

        Raises
        ------
        NoImagesError
            If the resulting image list would be empty
        ProductNotFoundError
            If no product has the given id
        """
        if not existing_images and not uploads:
            raise NoImagesError

        product = await self._product_repo.find_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        parsed_price = parse_price(price) if price not in (None, "") else None
        parsed_stock = parse_stock(stock) if stock not in (None, "") else None

        new_images = await self._image_storage.store(uploads) if uploads else []
        product.update(
            images=[*existing_images, *new_images],
            productname=productname or None,
            description=description or None,
            price=parsed_price,
            stock=parsed_stock,
        )
        await self._product_repo.save(product)

        logger.info("Product updated: %s", product.id)
        return product

    async def delete_product(self, product_id: UUID) -> None:
        deleted = await self._product_repo.delete(product_id)
        if not deleted:
            raise ProductNotFoundError(product_id)
        logger.info("Product deleted: %s", product_id)

    async def filter_products(self, criteria: ProductFilter) -> list[Product]:
        """
        Return the products matching ``criteria``.

        Raises
        ------
        NoProductsFoundError
            If nothing matches
        """
        products = await self._product_repo.find_matching(criteria)
        if not products:
            raise NoProductsFoundError
        return products

    def image_urls(self, product: Product) -> list[str]:
        """Public URLs for a product's stored images."""
        return [
            f"{self._public_base_url}/uploads/{_basename(ref)}"
            for ref in product.images
        ]
