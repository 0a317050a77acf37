"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from storefront_auth.exceptions import InvalidTokenError
from storefront_auth.services import JWTService, strip_bearer_prefix


class TestJWTServiceInit:
    """Tests for JWTService initialization."""

    def test_init_with_valid_secret(self):
        """Test that service initializes with valid secret."""
        service = JWTService(secret_key="test-secret-key")
        assert service is not None

    def test_init_with_empty_secret_raises(self):
        """Test that empty secret raises ValueError."""
        with pytest.raises(ValueError, match="cannot be empty"):
            JWTService(secret_key="")


class TestAccessTokens:
    """Tests for access token creation and verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = JWTService(secret_key="test-secret-key-12345")
        self.user_id = uuid4()

    def test_create_access_token(self):
        token = self.service.create_access_token(user_id=self.user_id)

        assert isinstance(token, str)
        assert len(token) > 0

    def test_token_claims(self):
        """Token carries id, iat and exp with a one hour lifetime."""
        token = self.service.create_access_token(user_id=self.user_id)

        claims = jwt.decode(token, "test-secret-key-12345", algorithms=["HS256"])

        assert claims["id"] == str(self.user_id)
        assert claims["exp"] - claims["iat"] == 3600

    def test_verify_valid_access_token(self):
        token = self.service.create_access_token(user_id=self.user_id)

        payload = self.service.verify_token(token)

        assert payload.user_id == self.user_id
        assert not payload.is_expired()

    def test_verify_accepts_bearer_prefix(self):
        token = self.service.create_access_token(user_id=self.user_id)

        payload = self.service.verify_token(f"Bearer {token}")

        assert payload.user_id == self.user_id

    def test_verify_expired_token_raises(self):
        token = self.service.create_access_token(
            user_id=self.user_id,
            expires_delta=timedelta(seconds=-1),  # Already expired
        )

        with pytest.raises(InvalidTokenError, match="expired"):
            self.service.verify_token(token)

    def test_verify_wrong_secret_raises(self):
        other = JWTService(secret_key="another-secret")
        token = other.create_access_token(user_id=self.user_id)

        with pytest.raises(InvalidTokenError, match="Invalid token"):
            self.service.verify_token(token)

    def test_verify_garbage_raises(self):
        with pytest.raises(InvalidTokenError):
            self.service.verify_token("not.a.token")

    def test_verify_token_without_id_raises(self):
        token = jwt.encode(
            {"exp": datetime.now(tz=timezone.utc) + timedelta(hours=1)},
            "test-secret-key-12345",
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError):
            self.service.verify_token(token)

    def test_verify_token_with_non_uuid_id_raises(self):
        token = jwt.encode(
            {
                "id": "not-a-uuid",
                "exp": datetime.now(tz=timezone.utc) + timedelta(hours=1),
            },
            "test-secret-key-12345",
            algorithm="HS256",
        )

        with pytest.raises(InvalidTokenError, match="Malformed"):
            self.service.verify_token(token)


class TestLenientVerify:
    """Tests for verify(), which never raises."""

    def setup_method(self):
        self.service = JWTService(secret_key="test-secret-key-12345")
        self.user_id = uuid4()

    def test_returns_payload_for_valid_token(self):
        token = self.service.create_access_token(user_id=self.user_id)

        payload = self.service.verify(token)

        assert payload is not None
        assert payload.user_id == self.user_id

    @pytest.mark.parametrize("token", [None, "", "garbage", "Bearer garbage"])
    def test_returns_none_for_unusable_token(self, token):
        assert self.service.verify(token) is None


class TestTokenExpiryWithSimulatedClock:
    """A token admits within one hour of issuance and is rejected after."""

    def setup_method(self):
        self.user_id = uuid4()

    def _issued(self, ago: timedelta) -> str:
        issued_at = datetime.now(tz=timezone.utc) - ago
        issuer = JWTService(secret_key="clock-secret", clock=lambda: issued_at)
        return issuer.create_access_token(user_id=self.user_id)

    def test_token_valid_within_the_hour(self):
        service = JWTService(secret_key="clock-secret")
        token = self._issued(timedelta(minutes=59))

        payload = service.verify(token)

        assert payload is not None
        assert payload.user_id == self.user_id

    def test_token_rejected_after_the_hour(self):
        service = JWTService(secret_key="clock-secret")
        token = self._issued(timedelta(hours=1, minutes=1))

        assert service.verify(token) is None


class TestStripBearerPrefix:
    def test_strips_prefix(self):
        assert strip_bearer_prefix("Bearer abc") == "abc"

    def test_leaves_raw_token(self):
        assert strip_bearer_prefix("abc") == "abc"

    def test_strips_surrounding_whitespace(self):
        assert strip_bearer_prefix("  Bearer abc  ") == "abc"
