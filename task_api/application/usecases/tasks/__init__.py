"""Task use cases (CRUD)."""

from .create_task import CreateTaskUseCase
from .delete_task import DeleteTaskUseCase
from .get_task import GetTaskUseCase
from .list_tasks import ListTasksUseCase
from .task_input import TaskInput
from .task_results import (
    DeleteTaskResult,
    TaskError,
    TaskErrorCode,
    TaskListResult,
    TaskResult,
)
from .update_task import UpdateTaskUseCase

__all__ = [
    "CreateTaskUseCase",
    "DeleteTaskUseCase",
    "GetTaskUseCase",
    "ListTasksUseCase",
    "UpdateTaskUseCase",
    "TaskInput",
    "TaskError",
    "TaskErrorCode",
    "TaskResult",
    "TaskListResult",
    "DeleteTaskResult",
]
