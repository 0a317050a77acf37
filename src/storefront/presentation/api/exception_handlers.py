"""Centralized exception handlers for the FastAPI application.

Domain exceptions, auth exceptions and framework errors are all mapped to
HTTP responses with one error format.

Error Response Format:
    {
        "message": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE",
        "details": "Underlying failure message (optional)"
    }

Usage:
    from storefront.presentation.api.exception_handlers import (
        setup_exception_handlers,
    )

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.domain.shared.exceptions import (
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    PayloadTooLargeError,
    ValidationError,
)
from storefront_auth import (
    AuthError,
    InvalidCredentialsError,
    InvalidTokenError,
    WeakPasswordError,
)

logger = logging.getLogger(__name__)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation errors
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.MISSING_FIELDS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PRICE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_STOCK: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_DATE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NO_IMAGES: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TOO_MANY_IMAGES: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_IMAGE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PRODUCT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.DUPLICATE_USER: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_400_BAD_REQUEST,
    # 401 Unauthorized - auth gate
    ErrorCode.AUTH_REQUIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.NO_PRODUCTS_FOUND: status.HTTP_404_NOT_FOUND,
    # 413 Payload Too Large
    ErrorCode.FILE_TOO_LARGE: status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
    # 500 Internal Server Error
    ErrorCode.EMAIL_SEND_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

HTTP_STATUS_TO_CODE: dict[int, ErrorCode] = {
    status.HTTP_401_UNAUTHORIZED: ErrorCode.AUTH_REQUIRED,
    status.HTTP_404_NOT_FOUND: ErrorCode.ENTITY_NOT_FOUND,
    status.HTTP_413_REQUEST_ENTITY_TOO_LARGE: ErrorCode.FILE_TOO_LARGE,
    status.HTTP_422_UNPROCESSABLE_ENTITY: ErrorCode.VALIDATION_ERROR,
}


def _get_status_for_exception(exc: DomainException) -> int:
    """Determine HTTP status code for a domain exception.

    Uses the error code mapping, with fallback based on exception type.
    """
    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, PayloadTooLargeError):
        return status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST

    return status.HTTP_400_BAD_REQUEST


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
    details: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content = {"message": message, "code": code}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def setup_exception_handlers(app: FastAPI, expose_details: bool = True) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    expose_details
        Whether the underlying failure message (``details["error"]`` of a
        domain exception) is included in responses
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all domain exceptions with structured response."""
        status_code = _get_status_for_exception(exc)

        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Server error on %s %s: %s (code=%s, details=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code.value,
                exc.details,
                exc_info=exc.__cause__,
            )
        else:
            logger.warning(
                "Domain exception on %s %s: %s (code=%s, details=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code.value,
                exc.details,
            )

        details = exc.details.get("error") if expose_details else None
        headers = (
            BEARER_CHALLENGE
            if status_code == status.HTTP_401_UNAUTHORIZED
            else None
        )
        return _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
            details=details,
            headers=headers,
        )

    @app.exception_handler(AuthError)
    async def auth_exception_handler(
        request: Request,
        exc: AuthError,
    ) -> JSONResponse:
        """Handle storefront_auth exceptions."""
        logger.warning(
            "Auth error on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
        )

        if isinstance(exc, InvalidCredentialsError):
            return _create_error_response(
                status_code=status.HTTP_400_BAD_REQUEST,
                message=exc.message,
                code=ErrorCode.INVALID_CREDENTIALS.value,
            )
        if isinstance(exc, WeakPasswordError):
            return _create_error_response(
                status_code=status.HTTP_400_BAD_REQUEST,
                message=exc.message,
                code=ErrorCode.VALIDATION_ERROR.value,
            )
        if isinstance(exc, InvalidTokenError):
            return _create_error_response(
                status_code=status.HTTP_401_UNAUTHORIZED,
                message="Invalid token",
                code=ErrorCode.INVALID_TOKEN.value,
                headers=BEARER_CHALLENGE,
            )

        return _create_error_response(
            status_code=status.HTTP_401_UNAUTHORIZED,
            message=exc.message,
            code=ErrorCode.AUTH_REQUIRED.value,
            headers=BEARER_CHALLENGE,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report malformed request bodies and parameters as 400."""
        errors = exc.errors()
        logger.warning(
            "Request validation failed on %s %s: %s",
            request.method,
            request.url.path,
            errors,
        )
        missing = [
            ".".join(str(part) for part in error["loc"][1:])
            for error in errors
            if error.get("type") == "missing"
        ]
        if missing and len(missing) == len(errors):
            message = f"Missing required fields: {', '.join(missing)}"
        else:
            message = "Invalid request"
        first = errors[0] if errors else None
        details = (
            f"{'.'.join(str(p) for p in first['loc'])}: {first['msg']}"
            if first and expose_details
            else None
        )
        return _create_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message=message,
            code=ErrorCode.VALIDATION_ERROR.value,
            details=details,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Normalize HTTPException bodies to the common error format."""
        code = HTTP_STATUS_TO_CODE.get(exc.status_code, ErrorCode.HTTP_ERROR)
        return _create_error_response(
            status_code=exc.status_code,
            message=str(exc.detail),
            code=code.value,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format."""
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="Server error",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
