"""
Test Configuration and Fixtures

This module provides:
- Environment setup before application modules read settings
- In-memory storage reset between tests
- TestClient and auth cookie helpers for HTTP tests

Architecture:
- Unit tests (@pytest.mark.unit): AsyncMock repositories, no container
- Integration tests: in-memory adapters through the DI container, or
  SQLAlchemy repositories against a throwaway SQLite file
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are instantiated at import time (src.platform.config.core_setting)
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    os.environ['STORAGE_BACKEND'] = 'memory'
    os.environ['DB_AUTO_CREATE_TABLES'] = 'false'
    os.environ.setdefault('LEDGER_MAX_RETRIES', '5')
    os.environ.setdefault('LEDGER_RETRY_BACKOFF_SECONDS', '0')
    os.environ.setdefault('RESTOCK_ON_REJECT', 'false')

    # Create test log directory
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import Callable, Generator  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.config.di import container  # noqa: E402
from src.service.marketplace.domain.entity.user_entity import UserEntity, UserRole  # noqa: E402
from src.service.marketplace.driving_adapter.http_controller.auth.jwt_auth import (  # noqa: E402
    JwtAuth,
)
from test.util_constant import (  # noqa: E402
    ANOTHER_BUYER_ID,
    ANOTHER_FARMER_ID,
    TEST_BUYER_ID,
    TEST_FARMER_ID,
)


@pytest.fixture(autouse=True)
def reset_container() -> Generator[None, None, None]:
    """Fresh singletons (and an empty in-memory store) for every test."""
    container.reset_singletons()
    yield
    container.reset_singletons()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    from test.test_app import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def login_as() -> Callable[[TestClient, int, UserRole], None]:
    """Set the auth cookie on the client for the given user."""

    def _login(client: TestClient, user_id: int, role: UserRole) -> None:
        token = JwtAuth().create_jwt_token(
            UserEntity(id=user_id, role=role, name=f'user{user_id}', email=f'user{user_id}@test.com')
        )
        client.cookies.set(settings.AUTH_COOKIE_NAME, token)

    return _login


@pytest.fixture
def farmer() -> UserEntity:
    return UserEntity(id=TEST_FARMER_ID, role=UserRole.FARMER, name='Farmer One')


@pytest.fixture
def another_farmer() -> UserEntity:
    return UserEntity(id=ANOTHER_FARMER_ID, role=UserRole.FARMER, name='Farmer Two')


@pytest.fixture
def buyer() -> UserEntity:
    return UserEntity(id=TEST_BUYER_ID, role=UserRole.BUYER, name='Buyer One')


@pytest.fixture
def another_buyer() -> UserEntity:
    return UserEntity(id=ANOTHER_BUYER_ID, role=UserRole.BUYER, name='Buyer Two')
