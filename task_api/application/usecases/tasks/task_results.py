"""
===============================================================================
TASK USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Responsibilities:
    - Definir TaskErrorCode (categorías estables, no mensajes).
    - Representar TaskError (code + message + recurso afectado).
    - Representar resultados:
        * TaskResult (single task)
        * TaskListResult (página + total)
        * DeleteTaskResult (command)

Collaborators:
    - domain.entities.Task
    - interfaces/api/http/error_mapping.py (TaskErrorCode -> HTTP)
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import Task


class TaskErrorCode(str, Enum):
    """
    - VALIDATION_ERROR: inputs inválidos.
    - NOT_FOUND: la tarea (o el usuario asignado) no existe; ver `resource`.
    """

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"


@dataclass(frozen=True)
class TaskError:
    code: TaskErrorCode
    message: str
    resource: str = "Task"
    resource_id: int | None = None


@dataclass
class TaskResult:
    task: Task | None = None
    error: TaskError | None = None


@dataclass
class TaskListResult:
    tasks: List[Task] = field(default_factory=list)
    total: int = 0
    error: TaskError | None = None


@dataclass
class DeleteTaskResult:
    deleted: bool
    error: TaskError | None = None


def task_not_found(task_id: int) -> TaskError:
    return TaskError(
        code=TaskErrorCode.NOT_FOUND,
        message=f"Task not found with id: {task_id}",
        resource="Task",
        resource_id=task_id,
    )


def assignee_not_found(user_id: int) -> TaskError:
    return TaskError(
        code=TaskErrorCode.NOT_FOUND,
        message=f"User not found with id: {user_id}",
        resource="User",
        resource_id=user_id,
    )
