"""USE CASE: Get Task (por id; NOT_FOUND si no existe)."""

from __future__ import annotations

from ....domain.repositories import TaskRepository
from .task_results import TaskResult, task_not_found


class GetTaskUseCase:
    def __init__(self, task_repository: TaskRepository) -> None:
        self._tasks = task_repository

    def execute(self, task_id: int) -> TaskResult:
        task = self._tasks.get_task(task_id)
        if task is None:
            return TaskResult(error=task_not_found(task_id))
        return TaskResult(task=task)
