from storefront.presentation.api.routers.auth import router as auth_router
from storefront.presentation.api.routers.products import router as products_router

__all__ = [
    "auth_router",
    "products_router",
]
