"""Unit tests for ProductService."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from storefront.application.ports import ImageStorage, ImageUpload
from storefront.application.services import ProductService
from storefront.domain.product import (
    InvalidPriceError,
    InvalidStockError,
    MissingProductFieldsError,
    NoImagesError,
    NoProductsFoundError,
    Product,
    ProductFilter,
    ProductNotFoundError,
    ProductRepository,
    TooManyImagesError,
)


def _upload(name: str = "photo.png") -> ImageUpload:
    return ImageUpload(filename=name, content_type="image/png", content=b"\x89PNG")


def _product(images: list[str] | None = None) -> Product:
    return Product.create(
        productname="Desk Lamp",
        description="LED lamp",
        price=29.9,
        stock=3,
        images=images if images is not None else ["uploads/1.png"],
    )


class TestCreateProduct:
    def setup_method(self):
        self.repo = AsyncMock(spec=ProductRepository)
        self.storage = AsyncMock(spec=ImageStorage)
        self.storage.store.side_effect = lambda uploads: [
            f"uploads/{i}.png" for i, _ in enumerate(uploads)
        ]
        self.service = ProductService(
            product_repository=self.repo,
            image_storage=self.storage,
            public_base_url="http://localhost:5000",
        )

    async def test_create_product(self):
        product = await self.service.create_product(
            productname="Desk Lamp",
            description="LED lamp",
            price="29.90",
            stock="3",
            uploads=[_upload(), _upload()],
        )

        assert product.price == 29.9
        assert product.stock == 3
        assert product.images == ["uploads/0.png", "uploads/1.png"]
        self.repo.save.assert_awaited_once_with(product)

    async def test_zero_stock_counts_as_present(self):
        product = await self.service.create_product(
            productname="Desk Lamp",
            description="LED lamp",
            price="1",
            stock="0",
            uploads=[_upload()],
        )

        assert product.stock == 0

    async def test_missing_fields_raise(self):
        with pytest.raises(MissingProductFieldsError) as exc_info:
            await self.service.create_product(
                productname="Desk Lamp",
                description="",
                price=None,
                stock="1",
                uploads=[_upload()],
            )

        assert exc_info.value.missing == ["description", "price"]
        self.storage.store.assert_not_awaited()

    async def test_no_images_raises(self):
        with pytest.raises(NoImagesError):
            await self.service.create_product(
                productname="Desk Lamp",
                description="LED lamp",
                price="1",
                stock="1",
                uploads=[],
            )

        self.repo.save.assert_not_awaited()

    async def test_storage_rejection_propagates(self):
        self.storage.store.side_effect = TooManyImagesError(5)

        with pytest.raises(TooManyImagesError):
            await self.service.create_product(
                productname="Desk Lamp",
                description="LED lamp",
                price="1",
                stock="1",
                uploads=[_upload() for _ in range(6)],
            )

        self.repo.save.assert_not_awaited()

    @pytest.mark.parametrize("price", ["abc", "-1", "nan"])
    async def test_invalid_price_raises(self, price):
        with pytest.raises(InvalidPriceError):
            await self.service.create_product(
                productname="Desk Lamp",
                description="LED lamp",
                price=price,
                stock="1",
                uploads=[_upload()],
            )

    async def test_invalid_stock_raises(self):
        with pytest.raises(InvalidStockError):
            await self.service.create_product(
                productname="Desk Lamp",
                description="LED lamp",
                price="1",
                stock="many",
                uploads=[_upload()],
            )


class TestUpdateProduct:
    def setup_method(self):
        self.repo = AsyncMock(spec=ProductRepository)
        self.storage = AsyncMock(spec=ImageStorage)
        self.storage.store.return_value = ["uploads/new.png"]
        self.service = ProductService(
            product_repository=self.repo,
            image_storage=self.storage,
            public_base_url="http://localhost:5000",
        )

    async def test_new_uploads_are_appended_to_existing(self):
        product = _product()
        self.repo.find_by_id.return_value = product

        updated = await self.service.update_product(
            product_id=product.id,
            existing_images=["uploads/1.png"],
            uploads=[_upload()],
        )

        assert updated.images == ["uploads/1.png", "uploads/new.png"]
        self.repo.save.assert_awaited_once_with(product)

    async def test_empty_image_list_raises_before_lookup(self):
        with pytest.raises(NoImagesError, match="At least one image is required"):
            await self.service.update_product(
                product_id=uuid4(),
                existing_images=[],
                uploads=[],
            )

        self.repo.find_by_id.assert_not_awaited()

    async def test_unknown_product_raises(self):
        self.repo.find_by_id.return_value = None

        with pytest.raises(ProductNotFoundError):
            await self.service.update_product(
                product_id=uuid4(),
                existing_images=["uploads/1.png"],
                uploads=[],
            )

        self.storage.store.assert_not_awaited()

    async def test_scalar_fields_are_parsed_and_applied(self):
        product = _product()
        self.repo.find_by_id.return_value = product

        updated = await self.service.update_product(
            product_id=product.id,
            existing_images=product.images,
            uploads=[],
            productname="Floor Lamp",
            price="49.5",
            stock="0",
        )

        assert updated.productname == "Floor Lamp"
        assert updated.price == 49.5
        assert updated.stock == 0
        assert updated.description == "LED lamp"


class TestDeleteAndQueries:
    def setup_method(self):
        self.repo = AsyncMock(spec=ProductRepository)
        self.service = ProductService(
            product_repository=self.repo,
            image_storage=AsyncMock(spec=ImageStorage),
            public_base_url="http://localhost:5000/",
        )

    async def test_delete_unknown_raises(self):
        self.repo.delete.return_value = False

        with pytest.raises(ProductNotFoundError, match="Product not found"):
            await self.service.delete_product(uuid4())

    async def test_delete_existing(self):
        self.repo.delete.return_value = True
        product_id = uuid4()

        await self.service.delete_product(product_id)

        self.repo.delete.assert_awaited_once_with(product_id)

    async def test_filter_without_matches_raises(self):
        self.repo.find_matching.return_value = []

        with pytest.raises(
            NoProductsFoundError,
            match="No products found matching the criteria",
        ):
            await self.service.filter_products(ProductFilter(stock=0))

    async def test_filter_returns_matches(self):
        product = _product()
        self.repo.find_matching.return_value = [product]

        assert await self.service.filter_products(ProductFilter()) == [product]

    def test_image_urls_use_basename(self):
        product = _product(images=["uploads/1.png", "uploads\\2.gif"])

        assert self.service.image_urls(product) == [
            "http://localhost:5000/uploads/1.png",
            "http://localhost:5000/uploads/2.gif",
        ]
