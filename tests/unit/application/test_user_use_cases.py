"""
Name: User Use Case Tests

Responsibilities:
  - List/Get users
  - Update email: any account, conflicts on taken email
  - Delete: unassigns tasks then removes the account
"""

import pytest
from task_api.application.usecases.users import (
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
    UserErrorCode,
)
from task_api.domain.entities import Task, TaskPriority, TaskStatus

pytestmark = pytest.mark.unit


@pytest.fixture
def update(user_repository) -> UpdateUserUseCase:
    return UpdateUserUseCase(user_repository=user_repository)


def test_list_and_get(user_repository, admin_user, regular_user):
    listed = ListUsersUseCase(user_repository=user_repository).execute(limit=1)
    got = GetUserUseCase(user_repository=user_repository).execute(regular_user.id)

    assert [u.username for u in listed.users] == ["admin", "user"]
    assert listed.total == 2
    assert got.user.email == "user@demo.com"


def test_get_missing_user(user_repository):
    result = GetUserUseCase(user_repository=user_repository).execute(5)

    assert result.error.code == UserErrorCode.NOT_FOUND
    assert result.error.resource_id == 5


def test_updates_email(update, regular_user):
    result = update.execute(regular_user.id, email="new@demo.com")

    assert result.error is None
    assert result.user.email == "new@demo.com"


def test_update_missing_user(update):
    result = update.execute(42, email="ghost@demo.com")

    assert result.error.code == UserErrorCode.NOT_FOUND
    assert result.error.resource_id == 42


def test_update_to_taken_email_conflicts(update, admin_user, regular_user):
    result = update.execute(regular_user.id, email="admin@demo.com")

    assert result.error.code == UserErrorCode.CONFLICT
    assert result.error.field == "email"


def test_update_same_email_is_noop(update, regular_user):
    result = update.execute(regular_user.id, email="user@demo.com")

    assert result.error is None
    assert result.user == regular_user


def test_delete_unassigns_tasks(user_repository, task_repository, regular_user):
    task = task_repository.create_task(
        Task(
            title="owned",
            status=TaskStatus.OPEN,
            priority=TaskPriority.LOW,
            assigned_to_id=regular_user.id,
        )
    )
    use_case = DeleteUserUseCase(
        user_repository=user_repository, task_repository=task_repository
    )

    result = use_case.execute(regular_user.id)

    assert result.deleted
    assert result.unassigned_tasks == 1
    assert user_repository.get_user_by_id(regular_user.id) is None
    assert task_repository.get_task(task.id).assigned_to_id is None


def test_delete_missing_user(user_repository, task_repository):
    use_case = DeleteUserUseCase(
        user_repository=user_repository, task_repository=task_repository
    )

    result = use_case.execute(123)

    assert not result.deleted
    assert result.error.code == UserErrorCode.NOT_FOUND


def test_list_without_limit_returns_all(user_repository, admin_user, regular_user):
    result = ListUsersUseCase(user_repository=user_repository).execute()

    assert [u.id for u in result.users] == [admin_user.id, regular_user.id]
    assert result.total == 2
