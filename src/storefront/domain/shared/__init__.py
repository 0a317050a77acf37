"""Shared domain primitives."""

from storefront.domain.shared.exceptions import (
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    InternalError,
    PayloadTooLargeError,
    SendFailureError,
    UnauthorizedError,
    ValidationError,
)
from storefront.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "InternalError",
    "PayloadTooLargeError",
    "SendFailureError",
    "UnauthorizedError",
    "ValidationError",
    "ensure_tz_aware",
    "utc_now",
]
