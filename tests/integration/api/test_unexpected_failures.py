"""Integration tests for how unexpected failures reach the client.

A failure that carries a message is reported in ``details``; one without a
message gets only the generic body.
"""

from unittest.mock import AsyncMock, Mock, patch

import pytest

from storefront.application.services import (
    ProductNotificationService,
    ProductService,
)
from storefront.infrastructure.persistence.sqlalchemy.repositories import (
    UserRepositorySQLAlchemy,
)
from storefront.presentation.api.dependencies import (
    get_notification_service,
    get_product_service,
)


@pytest.fixture
def failing_user_lookup():
    """Make every user lookup fail with the given exception."""

    def _fail(error: Exception):
        return patch.object(
            UserRepositorySQLAlchemy,
            "find_by_email",
            new_callable=AsyncMock,
            side_effect=error,
        )

    return _fail


@pytest.mark.integration
class TestAuthFailures:
    def test_register_failure_with_message_has_details(
        self,
        test_client,
        api_prefix,
        registered_user_data,
        failing_user_lookup,
    ):
        with failing_user_lookup(RuntimeError("db down")):
            response = test_client.post(
                f"{api_prefix}/auth/register",
                json=registered_user_data,
            )

        assert response.status_code == 500
        assert response.json() == {
            "message": "Server error",
            "code": "INTERNAL_ERROR",
            "details": "db down",
        }

    def test_register_failure_without_message_has_no_details(
        self,
        test_client,
        api_prefix,
        registered_user_data,
        failing_user_lookup,
    ):
        with failing_user_lookup(RuntimeError()):
            response = test_client.post(
                f"{api_prefix}/auth/register",
                json=registered_user_data,
            )

        assert response.status_code == 500
        assert response.json() == {"message": "Server error", "code": "INTERNAL_ERROR"}

    def test_login_failure_with_message_has_details(
        self,
        test_client,
        api_prefix,
        failing_user_lookup,
    ):
        with failing_user_lookup(RuntimeError("db down")):
            response = test_client.post(
                f"{api_prefix}/auth/login",
                json={"email": "jane@example.com", "password": "secret"},
            )

        assert response.status_code == 500
        assert response.json()["details"] == "db down"

    def test_login_failure_without_message_has_no_details(
        self,
        test_client,
        api_prefix,
        failing_user_lookup,
    ):
        with failing_user_lookup(RuntimeError()):
            response = test_client.post(
                f"{api_prefix}/auth/login",
                json={"email": "jane@example.com", "password": "secret"},
            )

        assert response.status_code == 500
        assert "details" not in response.json()


@pytest.mark.integration
class TestProductFailures:
    @pytest.fixture
    def product_service(self, test_client):
        service = Mock(spec=ProductService)
        test_client.app.dependency_overrides[get_product_service] = lambda: service
        return service

    @pytest.fixture
    def notification_service(self, test_client):
        service = Mock(spec=ProductNotificationService)
        test_client.app.dependency_overrides[get_notification_service] = (
            lambda: service
        )
        return service

    def test_list_failure_has_details(
        self,
        test_client,
        api_prefix,
        auth_headers,
        product_service,
    ):
        product_service.list_products = AsyncMock(side_effect=RuntimeError("db down"))

        response = test_client.get(f"{api_prefix}/products", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {
            "message": "Server error",
            "code": "INTERNAL_ERROR",
            "details": "db down",
        }

    def test_filter_failure_without_message_has_no_details(
        self,
        test_client,
        api_prefix,
        auth_headers,
        product_service,
    ):
        product_service.filter_products = AsyncMock(side_effect=RuntimeError())

        response = test_client.get(
            f"{api_prefix}/products/filter",
            headers=auth_headers,
            params={"productname": "lamp"},
        )

        assert response.status_code == 500
        assert response.json() == {"message": "Server error", "code": "INTERNAL_ERROR"}

    def test_delete_failure_has_details(
        self,
        test_client,
        api_prefix,
        auth_headers,
        product_service,
    ):
        product_service.delete_product = AsyncMock(side_effect=OSError("disk full"))

        response = test_client.delete(
            f"{api_prefix}/products/delete/00000000-0000-0000-0000-000000000001",
            headers=auth_headers,
        )

        assert response.status_code == 500
        assert response.json()["details"] == "disk full"

    def test_send_all_failure_has_details(
        self,
        test_client,
        api_prefix,
        auth_headers,
        notification_service,
    ):
        notification_service.send_all_products_report = AsyncMock(
            side_effect=RuntimeError("db down"),
        )

        response = test_client.post(
            f"{api_prefix}/products/send-emails-to-all",
            headers=auth_headers,
            json={"to": "owner@example.com"},
        )

        assert response.status_code == 500
        assert response.json()["details"] == "db down"
