"""
USE CASE: Delete Task

Hard delete. La autorización (ADMIN) ya la resolvió AccessPolicy antes de
llegar acá; este caso de uso solo distingue existe / no existe.
"""

from __future__ import annotations

from ....crosscutting.logger import logger
from ....domain.repositories import TaskRepository
from .task_results import DeleteTaskResult, task_not_found


class DeleteTaskUseCase:
    def __init__(self, task_repository: TaskRepository) -> None:
        self._tasks = task_repository

    def execute(self, task_id: int) -> DeleteTaskResult:
        if not self._tasks.delete_task(task_id):
            return DeleteTaskResult(deleted=False, error=task_not_found(task_id))

        logger.info("Tarea eliminada", extra={"task_id": task_id})
        return DeleteTaskResult(deleted=True)
