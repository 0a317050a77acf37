"""User domain exceptions."""

from storefront.domain.shared.exceptions import ErrorCode, ValidationError


class InvalidEmailError(ValidationError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class DuplicateUserError(ValidationError):
    """Email already registered.

    Reported as a 400 with the same message whether it was caught by the
    pre-insert lookup or by the unique index on ``users.email``.
    """

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "User already exists",
            code=ErrorCode.DUPLICATE_USER,
            details={"email": email},
        )
