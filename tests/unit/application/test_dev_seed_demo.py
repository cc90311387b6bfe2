"""
Tests for dev_seed_demo module.

Validates:
  - Disabled when config says so
  - Fail-fast in production
  - Creates demo accounts and tasks
  - Idempotent on a second run
"""

from unittest.mock import MagicMock

import pytest
from task_api.application.dev_seed_demo import ensure_dev_seed
from task_api.crosscutting.config import Settings

pytestmark = pytest.mark.unit


def _make_settings(**overrides):
    """Create Settings with sensible defaults for testing."""
    defaults = {
        "app_env": "development",
        "jwt_secret": "test-secret",
        "dev_seed_demo": True,
    }
    defaults.update(overrides)
    return Settings(**defaults)


def _dummy_hasher(password: str) -> str:
    return f"hashed:{password}"


def test_seed_disabled():
    users = MagicMock()
    tasks = MagicMock()

    ensure_dev_seed(
        _make_settings(dev_seed_demo=False),
        users=users,
        tasks=tasks,
        password_hasher=_dummy_hasher,
    )

    users.get_user_by_username.assert_not_called()
    users.create_user.assert_not_called()
    tasks.create_task.assert_not_called()


def test_seed_fails_fast_in_production():
    settings = _make_settings()
    # R: bypass the validator to simulate a misconfigured production process.
    settings.app_env = "production"

    with pytest.raises(RuntimeError, match="production"):
        ensure_dev_seed(
            settings,
            users=MagicMock(),
            tasks=MagicMock(),
            password_hasher=_dummy_hasher,
        )


def test_seed_creates_accounts_and_tasks(user_repository, task_repository):
    ensure_dev_seed(
        _make_settings(dev_seed_password="s3cret"),
        users=user_repository,
        tasks=task_repository,
        password_hasher=_dummy_hasher,
    )

    admin = user_repository.get_user_by_username("admin")
    user = user_repository.get_user_by_username("user")
    assert admin.email == "admin@demo.com"
    assert admin.roles == "USER,ADMIN"
    assert user.email == "user@demo.com"
    assert user.roles == "USER"
    assert admin.password_hash == "hashed:s3cret"

    seeded = task_repository.list_tasks(limit=10)
    assert len(seeded) == 3
    assert {t.assigned_to_username for t in seeded} == {"admin", "user", None}


def test_seed_is_idempotent(user_repository, task_repository):
    settings = _make_settings()

    for _ in range(2):
        ensure_dev_seed(
            settings,
            users=user_repository,
            tasks=task_repository,
            password_hasher=_dummy_hasher,
        )

    assert user_repository.count_users() == 2
    assert task_repository.count_tasks() == 3
