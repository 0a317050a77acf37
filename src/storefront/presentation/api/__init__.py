"""REST API presentation layer for Storefront.

Structure:
    api/
    ├── app.py          # FastAPI application factory
    ├── config.py       # API configuration
    ├── dependencies.py # Dependency injection and the auth gate
    ├── routers/        # API route handlers
    └── schemas/        # Pydantic request/response schemas
"""

from storefront.presentation.api.app import create_app

__all__ = ["create_app"]
