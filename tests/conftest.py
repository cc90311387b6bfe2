"""
Name: Pytest Configuration and Shared Fixtures

Responsibilities:
  - Configure test environment (no .env, APP_ENV=test, in-memory storage)
  - Reset cached settings/container between tests
  - Provide repositories, codec and an app client for API tests

Collaborators:
  - pytest: Test framework
  - unittest.mock: Mocking library
  - task_api.container: composition root (reset between tests)

Notes:
  - Fixtures are auto-discovered by pytest
  - Use @pytest.fixture(scope="function") for per-test isolation
"""

import os
import sys
from datetime import timedelta
from pathlib import Path

import pytest

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from task_api.crosscutting import config as app_config  # noqa: E402

app_config.Settings.model_config["env_file"] = None

os.environ.setdefault("APP_ENV", "test")

from task_api.identity.auth_users import hash_password  # noqa: E402
from task_api.identity.token_codec import TokenCodec  # noqa: E402
from task_api.identity.users import ADMIN_ROLES, DEFAULT_ROLES, User  # noqa: E402
from task_api.infrastructure.repositories import (  # noqa: E402
    InMemoryTaskRepository,
    InMemoryUserRepository,
)

TEST_SECRET = "test-secret-0123456789-0123456789-abcdef"


def pytest_configure(config) -> None:
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
    config.addinivalue_line(
        "markers", "integration: Tests against a real PostgreSQL (RUN_INTEGRATION=1)"
    )


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """R: Each test gets fresh Settings + container singletons."""
    from task_api.container import reset_container

    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("LOG_JSON", "false")
    app_config.get_settings.cache_clear()
    reset_container()
    yield
    app_config.get_settings.cache_clear()
    reset_container()


# ============================================================================
# Identity Fixtures
# ============================================================================


@pytest.fixture
def token_codec() -> TokenCodec:
    """R: Codec with a 30 minute TTL and a test-only secret."""
    return TokenCodec(TEST_SECRET, timedelta(minutes=30))


# ============================================================================
# Repository Fixtures
# ============================================================================


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def task_repository(user_repository) -> InMemoryTaskRepository:
    return InMemoryTaskRepository(users=user_repository)


@pytest.fixture
def admin_user(user_repository) -> User:
    """R: admin/password with roles USER,ADMIN."""
    return user_repository.create_user(
        username="admin",
        email="admin@demo.com",
        password_hash=hash_password("password"),
        roles=ADMIN_ROLES,
    )


@pytest.fixture
def regular_user(user_repository) -> User:
    """R: user/password with role USER."""
    return user_repository.create_user(
        username="user",
        email="user@demo.com",
        password_hash=hash_password("password"),
        roles=DEFAULT_ROLES,
    )


# ============================================================================
# API Fixtures
# ============================================================================


@pytest.fixture
def client(monkeypatch):
    """
    R: TestClient over a fresh app seeded with the demo accounts.

    - admin/password (USER,ADMIN)
    - user/password (USER)
    """
    from fastapi.testclient import TestClient
    from task_api.api.main import create_app

    monkeypatch.setenv("DEV_SEED_DEMO", "true")
    app_config.get_settings.cache_clear()

    with TestClient(create_app(), raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def login_as(client):
    """R: Returns a callable username -> Authorization headers."""

    def _login(username: str, password: str = "password") -> dict[str, str]:
        response = client.post(
            "/api/auth/login", json={"username": username, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login


@pytest.fixture
def admin_headers(login_as) -> dict[str, str]:
    return login_as("admin")


@pytest.fixture
def user_headers(login_as) -> dict[str, str]:
    return login_as("user")
