"""Product schemas for request/response models."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from storefront.application.services import ProductDetails
from storefront.domain.product import Product


class ProductResponse(BaseModel):
    """A catalog product as returned to clients."""

    id: UUID
    productname: str
    description: str
    price: float
    stock: int
    images: list[str]
    created_at: datetime = Field(..., serialization_alias="createdAt")
    updated_at: datetime = Field(..., serialization_alias="updatedAt")

    @classmethod
    def from_domain(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.id,
            productname=product.productname,
            description=product.description,
            price=product.price,
            stock=product.stock,
            images=product.images,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class ProductListItemResponse(ProductResponse):
    """A product with the public URLs of its images."""

    image_urls: list[str] = Field(default_factory=list, serialization_alias="imageUrls")


class ProductMutationResponse(BaseModel):
    message: str
    product: ProductResponse


class ProductPayload(BaseModel):
    """Product data sent with an email request.

    It is rendered as given and need not match a stored product.
    """

    productname: Optional[str] = None
    description: Optional[str] = None
    price: Any = None
    stock: Any = None
    images: list[str] = Field(default_factory=list)

    def to_details(self) -> ProductDetails:
        return ProductDetails(
            productname=self.productname,
            description=self.description,
            price=self.price,
            stock=self.stock,
            images=self.images,
        )


class SendProductEmailRequest(BaseModel):
    to: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    product: Optional[ProductPayload] = None
    attachment_file_paths: Optional[list[str]] = Field(
        None,
        alias="attachmentFilePaths",
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "to": "customer@example.com",
                "subject": "Your product",
                "product": {
                    "productname": "Desk Lamp",
                    "description": "LED, warm white",
                    "price": 29.9,
                    "stock": 12,
                    "images": ["uploads/1712345678901.png"],
                },
                "attachmentFilePaths": ["docs/manual.pdf"],
            },
        },
    )


class SendAllProductsEmailRequest(BaseModel):
    to: str = Field(..., min_length=1)
