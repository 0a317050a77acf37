"""Pytest fixtures for API integration tests.

The app runs against a per-test SQLite database; mail goes to an in-memory
transport so tests can inspect what would have been sent.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from storefront.application.ports.mail import MailMessage, MailTransport
from storefront.infrastructure.persistence.sqlalchemy.models import Base
from storefront.presentation.api.app import API_PREFIX, create_app
from storefront.presentation.api.config import get_api_settings
from storefront.presentation.api.dependencies import (
    get_db_session,
    get_mail_transport,
)
from storefront_config.settings import Settings, get_settings

TEST_JWT_SECRET = "test-jwt-secret-for-testing-only-0123456789"

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
GIF_BYTES = b"GIF89a" + b"\x00" * 32


class RecordingMailTransport(MailTransport):
    """Keeps sent messages in memory."""

    def __init__(self):
        self.sent: list[MailMessage] = []
        self.fail_with: Exception | None = None

    async def send(self, message: MailMessage) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append(message)


@pytest.fixture
def api_prefix() -> str:
    return API_PREFIX


@pytest.fixture
def jwt_secret() -> str:
    return TEST_JWT_SECRET


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Test API settings with debug enabled and background jobs off."""
    return Settings(
        jwt_secret_key=SecretStr(TEST_JWT_SECRET),
        password_hash_rounds=4,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        uploads_dir=str(tmp_path / "uploads"),
        public_base_url="http://testserver",
        smtp_enabled=False,
        report_enabled=False,
    )


@pytest.fixture
def png_image() -> tuple[str, bytes, str]:
    return ("lamp.png", PNG_BYTES, "image/png")


@pytest.fixture
def gif_image() -> tuple[str, bytes, str]:
    return ("lamp.gif", GIF_BYTES, "image/gif")


@pytest.fixture
def mail_transport() -> RecordingMailTransport:
    return RecordingMailTransport()


def _setup_test_database(async_engine):
    """Create all tables in a fresh event loop, apart from TestClient's."""

    async def _setup():
        async with async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(_setup())
    finally:
        loop.close()


@pytest.fixture
def test_client(api_settings, async_engine, session_maker, mail_transport):
    """Create a test client wired to the test database and mail transport.

    The lifespan is not entered, so no scheduler is started and the global
    engine is never created.
    """
    _setup_test_database(async_engine)

    app = create_app(settings=api_settings)

    async def override_get_db_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_api_settings] = lambda: api_settings
    app.dependency_overrides[get_settings] = lambda: api_settings
    app.dependency_overrides[get_mail_transport] = lambda: mail_transport

    return TestClient(app)


@pytest.fixture
def registered_user_data() -> dict:
    return {
        "username": "jane",
        "email": "jane@example.com",
        "password": "SecurePassword123!",
    }


@pytest.fixture
def access_token(test_client, registered_user_data, api_prefix) -> str:
    response = test_client.post(
        f"{api_prefix}/auth/register",
        json=registered_user_data,
    )
    assert response.status_code == 201, (
        f"Registration failed: {response.status_code} - {response.text}"
    )
    return response.json()["token"]


@pytest.fixture
def auth_headers(access_token) -> dict:
    """Get auth headers for a registered user."""
    return {"Authorization": f"Bearer {access_token}"}


@pytest.fixture
def create_product(test_client, auth_headers, api_prefix):
    """Create a product through the API and return the response body."""

    def _create(
        productname: str = "Desk Lamp",
        description: str = "LED, warm white",
        price: str = "29.90",
        stock: str = "12",
        images: list[tuple[str, bytes, str]] | None = None,
    ) -> dict:
        files = [
            ("images", image)
            for image in (images or [("lamp.png", PNG_BYTES, "image/png")])
        ]
        response = test_client.post(
            f"{api_prefix}/products/create",
            headers=auth_headers,
            data={
                "productname": productname,
                "description": description,
                "price": price,
                "stock": stock,
            },
            files=files,
        )
        assert response.status_code == 201, response.text
        return response.json()["product"]

    return _create
