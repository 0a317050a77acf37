"""Unit tests for the Product aggregate."""

import pytest

from storefront.domain.product import (
    InvalidPriceError,
    InvalidStockError,
    NoImagesError,
    Product,
)


def _product(**overrides) -> Product:
    values = {
        "productname": "Desk Lamp",
        "description": "LED lamp",
        "price": 29.9,
        "stock": 3,
        "images": ["uploads/1.png"],
    }
    values.update(overrides)
    return Product.create(**values)


class TestProductCreate:
    def test_create_sets_fields(self):
        product = _product()

        assert product.productname == "Desk Lamp"
        assert product.price == 29.9
        assert product.stock == 3
        assert product.images == ["uploads/1.png"]
        assert product.created_at == product.updated_at

    def test_zero_stock_is_allowed(self):
        assert _product(stock=0).stock == 0

    def test_negative_price_raises(self):
        with pytest.raises(InvalidPriceError):
            _product(price=-1)

    def test_non_integer_stock_raises(self):
        with pytest.raises(InvalidStockError):
            _product(stock=1.5)

    def test_images_are_copied(self):
        images = ["uploads/1.png"]
        product = _product(images=images)

        images.append("uploads/2.png")
        product.images.append("uploads/3.png")

        assert product.images == ["uploads/1.png"]


class TestProductUpdate:
    def test_update_replaces_images(self):
        product = _product()

        product.update(images=["uploads/1.png", "uploads/2.png"])

        assert product.images == ["uploads/1.png", "uploads/2.png"]

    def test_update_keeps_fields_that_are_not_given(self):
        product = _product()

        product.update(images=product.images, price=10.0)

        assert product.price == 10.0
        assert product.productname == "Desk Lamp"
        assert product.description == "LED lamp"
        assert product.stock == 3

    def test_update_with_empty_images_raises(self):
        product = _product()

        with pytest.raises(NoImagesError, match="At least one image is required"):
            product.update(images=[])

    def test_update_bumps_updated_at_only(self):
        product = _product()
        created_at = product.created_at

        product.update(images=product.images, stock=0)

        assert product.created_at == created_at
        assert product.updated_at >= created_at
