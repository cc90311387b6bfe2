"""
Input compartido por Create/Update Task + validación de invariantes.

La validación del DTO HTTP ya cubre estos casos; se repite acá para que
los use cases sean seguros aunque se invoquen sin pasar por la API.
"""

from __future__ import annotations

from dataclasses import dataclass

from ....domain.entities import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Task,
    TaskPriority,
    TaskStatus,
)
from ....domain.repositories import UserRepository
from .task_results import TaskError, TaskErrorCode, assignee_not_found


@dataclass(frozen=True)
class TaskInput:
    title: str
    status: TaskStatus
    priority: TaskPriority
    description: str | None = None
    assigned_to_id: int | None = None


def validate_task_input(input_data: TaskInput) -> TaskError | None:
    title = (input_data.title or "").strip()
    if not title:
        return _invalid("Title is required")
    if len(input_data.title) > TITLE_MAX_LENGTH:
        return _invalid(f"Title must not exceed {TITLE_MAX_LENGTH} characters")
    if (
        input_data.description is not None
        and len(input_data.description) > DESCRIPTION_MAX_LENGTH
    ):
        return _invalid(
            f"Description must not exceed {DESCRIPTION_MAX_LENGTH} characters"
        )
    return None


def resolve_assignee(
    users: UserRepository, assigned_to_id: int | None
) -> tuple[str | None, TaskError | None]:
    """Devuelve (username, error). Sin asignado => (None, None)."""
    if assigned_to_id is None:
        return None, None
    user = users.get_user_by_id(assigned_to_id)
    if user is None:
        return None, assignee_not_found(assigned_to_id)
    return user.username, None


def apply_input(task: Task, input_data: TaskInput, assignee_username: str | None) -> None:
    """Reemplazo completo de los campos mutables."""
    task.title = input_data.title
    task.description = input_data.description
    task.status = input_data.status
    task.priority = input_data.priority
    task.assign(input_data.assigned_to_id, assignee_username)


def _invalid(message: str) -> TaskError:
    return TaskError(code=TaskErrorCode.VALIDATION_ERROR, message=message)
