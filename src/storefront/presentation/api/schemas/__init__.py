"""Pydantic schemas for API request/response models."""

from storefront.presentation.api.schemas.auth import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
)
from storefront.presentation.api.schemas.common import (
    ErrorResponse,
    HealthResponse,
    MessageResponse,
)
from storefront.presentation.api.schemas.products import (
    ProductListItemResponse,
    ProductMutationResponse,
    ProductPayload,
    ProductResponse,
    SendAllProductsEmailRequest,
    SendProductEmailRequest,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "ProductListItemResponse",
    "ProductMutationResponse",
    "ProductPayload",
    "ProductResponse",
    "RegisterRequest",
    "RegisterResponse",
    "SendAllProductsEmailRequest",
    "SendProductEmailRequest",
]
