"""Application layer services."""

from storefront.application.services.authentication_service import (
    AuthenticationService,
)
from storefront.application.services.product_notification_service import (
    ProductDetails,
    ProductNotificationService,
)
from storefront.application.services.product_service import ProductService

__all__ = [
    "AuthenticationService",
    "ProductDetails",
    "ProductNotificationService",
    "ProductService",
]
