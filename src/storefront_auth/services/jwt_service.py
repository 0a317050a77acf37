"""JWT token service.

Provides JWT token creation and verification for authentication.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from storefront_auth.exceptions import InvalidTokenError
from storefront_auth.schemas import TokenPayload

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class JWTService:
    """Service for JWT token creation and verification.

    Issues short-lived access tokens binding a user id (claim ``id``).
    There are no refresh tokens and no revocation: a token stays valid
    until it expires.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_access_token(user_id)
    >>> payload = service.verify_token(token)
    >>> print(payload.user_id)
    """

    DEFAULT_ACCESS_EXPIRE_HOURS = 1
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        access_token_expire_hours: int = DEFAULT_ACCESS_EXPIRE_HOURS,
        clock: Callable[[], datetime] = _utc_now,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        access_token_expire_hours
            Hours until an access token expires (default 1)
        clock
            Source of the issuance time. Tests pass a shifted clock to
            produce tokens that are already expired.
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._access_expire = timedelta(hours=access_token_expire_hours)
        self._clock = clock

    def create_access_token(
        self,
        user_id: UUID,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token for a user.

        Parameters
        ----------
        user_id
            The user's unique identifier
        expires_delta
            Custom expiration time (optional)

        Returns
        -------
        The encoded JWT token string
        """
        now = self._clock()
        expire = now + (expires_delta or self._access_expire)

        payload = {
            "id": str(user_id),
            "iat": now,
            "exp": expire,
        }

        logger.debug("Issuing access token for user %s", user_id)
        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode a JWT token.

        Parameters
        ----------
        token
            The JWT token string, with or without a ``Bearer `` prefix

        Returns
        -------
        TokenPayload containing the decoded data

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, or malformed
        """
        token = strip_bearer_prefix(token)

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": ["exp", "id"]},
            )

            user_id = UUID(str(payload["id"]))
            exp = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
            iat = payload.get("iat")
            issued_at = (
                datetime.fromtimestamp(iat, tz=timezone.utc) if iat is not None else exp
            )

            return TokenPayload(user_id=user_id, issued_at=issued_at, exp=exp)

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, ValueError, TypeError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

    def verify(self, token: str | None) -> TokenPayload | None:
        """Verify a token without raising.

        Returns
        -------
        The decoded payload, or None for a missing, malformed, badly
        signed or expired token.
        """
        if not token:
            return None
        try:
            return self.verify_token(token)
        except InvalidTokenError as e:
            logger.debug("Token rejected: %s", e.message)
            return None


def strip_bearer_prefix(value: str) -> str:
    """Remove a leading ``Bearer `` from an Authorization header value."""
    value = value.strip()
    if value.startswith(BEARER_PREFIX):
        return value[len(BEARER_PREFIX) :].strip()
    return value
