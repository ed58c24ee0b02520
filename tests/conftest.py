"""
Shared pytest fixtures for all tests.

The API fixtures build a real application (routes, exception handlers,
dependency container, notification dispatcher, PDF renderer) and swap only
the persistence and mail transport for in-memory fakes.
"""

import os
from collections.abc import Generator
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from fieldfeed.api.dependencies import get_admin_repository
from fieldfeed.config.settings import Settings
from fieldfeed.core.app_factory import create_app
from fieldfeed.core.container import DependencyContainer
from fieldfeed.domains.orders.api.dependencies import get_order_repository
from fieldfeed.domains.orders.domain.entities import AdminAccount
from fieldfeed.services.token_service import TokenService

from tests.utils.fakes import (
    ADMIN_EMAIL,
    InMemoryAdminRepository,
    InMemoryOrderRepository,
    RecordingEmailSender,
    make_admin,
)

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"


# ============================================================================
# CONFIGURATION
# ============================================================================


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        ENVIRONMENT="test",
        DEBUG=False,
        JWT_SECRET_KEY="test-secret-key",
        ADMIN_EMAIL=ADMIN_EMAIL,
        EMAIL_USER="orders@fieldtofeed.com",
        INVOICE_TEMP_DIR=str(tmp_path / "invoices"),
        INVOICE_TAX_RATE=Decimal("0.18"),
        LOG_FORMAT="plain",
    )


# ============================================================================
# FAKES
# ============================================================================


@pytest.fixture
def admin() -> AdminAccount:
    return make_admin()


@pytest.fixture
def admin_repository(admin) -> InMemoryAdminRepository:
    return InMemoryAdminRepository(admin)


@pytest.fixture
def order_repository(admin_repository) -> InMemoryOrderRepository:
    return InMemoryOrderRepository(admins=admin_repository)


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


# ============================================================================
# APPLICATION FIXTURES
# ============================================================================


@pytest.fixture
def container(settings, email_sender) -> DependencyContainer:
    return DependencyContainer(settings, email_sender=email_sender)


@pytest.fixture
def app(settings, container, order_repository, admin_repository):
    application = create_app(settings, container)
    application.dependency_overrides[get_order_repository] = lambda: order_repository
    application.dependency_overrides[get_admin_repository] = lambda: admin_repository
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    """Test client running the application lifespan."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def token_service(settings) -> TokenService:
    return TokenService(settings)


@pytest.fixture
def auth_headers(token_service, admin) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_service.create_access_token(admin.id)}"}


@pytest.fixture
def drain(client, container):
    """Wait for the notifications spawned by previous requests."""

    def _drain() -> None:
        assert client.portal.call(container.get_task_runner().drain, 10.0)

    return _drain
