"""Shared domain exceptions and error codes.

This module defines the base exception hierarchy and error codes for the
entire domain layer. All domain exceptions should inherit from DomainException
to enable centralized exception handling in the presentation layer.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # Validation Errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MISSING_FIELDS = "MISSING_FIELDS"
    INVALID_PRICE = "INVALID_PRICE"
    INVALID_STOCK = "INVALID_STOCK"
    INVALID_DATE = "INVALID_DATE"
    NO_IMAGES = "NO_IMAGES"
    TOO_MANY_IMAGES = "TOO_MANY_IMAGES"
    INVALID_IMAGE = "INVALID_IMAGE"
    INVALID_PRODUCT = "INVALID_PRODUCT"

    # Authentication Errors
    DUPLICATE_USER = "DUPLICATE_USER"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    AUTH_REQUIRED = "AUTH_REQUIRED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Not Found Errors (404)
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    NO_PRODUCTS_FOUND = "NO_PRODUCTS_FOUND"

    # Payload Errors (413)
    FILE_TOO_LARGE = "FILE_TOO_LARGE"

    # External Service Errors (500)
    EMAIL_SEND_FAILED = "EMAIL_SEND_FAILED"

    # General Errors
    HTTP_ERROR = "HTTP_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base exception for all domain-related errors.

    This exception provides structured error information that can be
    used by the presentation layer to generate consistent API responses.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ValidationError(DomainException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class EntityNotFoundError(DomainException):
    """Raised when a requested entity cannot be found."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ENTITY_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class PayloadTooLargeError(DomainException):
    """Raised when an uploaded payload exceeds its size limit."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.FILE_TOO_LARGE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class InternalError(DomainException):
    """Raised when an unexpected failure has to be reported to the client.

    ``cause`` is the underlying exception. Its text is only reported when it
    actually carries a message.
    """

    def __init__(
        self,
        message: str = "Server error",
        cause: BaseException | None = None,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    ) -> None:
        details: dict[str, Any] = {}
        if cause is not None and str(cause):
            details["error"] = str(cause)
        super().__init__(message, code, details)
        self.cause = cause


class SendFailureError(DomainException):
    """Raised when the mail transport fails to deliver a message."""

    def __init__(
        self,
        message: str = "Error sending email",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.EMAIL_SEND_FAILED,
            details if details is not None else {"error": "Failed to send email."},
        )


class UnauthorizedError(DomainException):
    """Raised when a request lacks a usable access token."""

    def __init__(
        self,
        message: str = "Invalid token",
        code: ErrorCode = ErrorCode.INVALID_TOKEN,
    ) -> None:
        super().__init__(message, code)
