"""Authentication exceptions.

These exceptions are raised by the storefront_auth package and should be
caught and handled by the application layer (AuthenticationService) or the
API exception handlers.
"""


class AuthError(Exception):
    """Base exception for all authentication errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token is invalid, expired, or malformed."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class WeakPasswordError(AuthError):
    """Raised when a password doesn't meet requirements."""

    def __init__(self, message: str = "Password does not meet requirements"):
        super().__init__(message)


class InvalidCredentialsError(AuthError):
    """Raised when email or password is incorrect during login.

    Unknown email and wrong password raise the same error with the same
    message so callers cannot tell which one failed.
    """

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)
