"""Product domain exceptions."""

from typing import Any
from uuid import UUID

from storefront.domain.shared.exceptions import (
    EntityNotFoundError,
    ErrorCode,
    PayloadTooLargeError,
    ValidationError,
)


class MissingProductFieldsError(ValidationError):
    """A required product field was not supplied."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            "Missing required fields",
            code=ErrorCode.MISSING_FIELDS,
            details={"missing": missing},
        )


class InvalidPriceError(ValidationError):
    def __init__(self, value: Any) -> None:
        super().__init__(
            "Invalid price value",
            code=ErrorCode.INVALID_PRICE,
            details={"value": value},
        )


class InvalidStockError(ValidationError):
    def __init__(self, value: Any) -> None:
        super().__init__(
            "Invalid stock value",
            code=ErrorCode.INVALID_STOCK,
            details={"value": value},
        )


class InvalidDateError(ValidationError):
    def __init__(self, value: Any) -> None:
        super().__init__(
            "Invalid date format",
            code=ErrorCode.INVALID_DATE,
            details={"value": value},
        )


class NoImagesError(ValidationError):
    """A product ended up with an empty image list."""

    def __init__(self, message: str = "At least one image is required") -> None:
        super().__init__(message, code=ErrorCode.NO_IMAGES)


class TooManyImagesError(ValidationError):
    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(
            f"Too many images (max {limit})",
            code=ErrorCode.TOO_MANY_IMAGES,
            details={"limit": limit},
        )


class InvalidImageError(ValidationError):
    """Uploaded file is not an accepted image type."""

    def __init__(self, filename: str | None) -> None:
        super().__init__(
            "Only JPEG, JPG, PNG, and GIF are allowed.",
            code=ErrorCode.INVALID_IMAGE,
            details={"filename": filename},
        )


class ImageTooLargeError(PayloadTooLargeError):
    def __init__(self, filename: str | None, max_bytes: int) -> None:
        super().__init__(
            f"File too large (max {max_bytes // (1024 * 1024)}MB)",
            details={"filename": filename, "max_bytes": max_bytes},
        )


class InvalidProductError(ValidationError):
    """Product data handed to the notification service is incomplete."""

    def __init__(self, message: str = "Product data is incomplete or invalid.") -> None:
        super().__init__(message, code=ErrorCode.INVALID_PRODUCT)


class ProductNotFoundError(EntityNotFoundError):
    def __init__(self, product_id: UUID | str) -> None:
        self.product_id = product_id
        super().__init__(
            "Product not found",
            code=ErrorCode.PRODUCT_NOT_FOUND,
            details={"product_id": str(product_id)},
        )


class NoProductsFoundError(EntityNotFoundError):
    """A listing query came back empty where an empty result is an error."""

    def __init__(self, message: str = "No products found matching the criteria") -> None:
        super().__init__(message, code=ErrorCode.NO_PRODUCTS_FOUND)
