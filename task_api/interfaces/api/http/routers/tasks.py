"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/tasks.py
===============================================================================

Class/Module:
    Task Router

Responsibilities:
    - Exponer CRUD HTTP de tareas bajo /api/tasks.
    - Convertir requests HTTP -> inputs de casos de uso.
    - Traducir TaskError -> RFC7807 (error_mapping).

Collaborators:
    - application.usecases.tasks (List/Get/Create/Update/Delete)
    - container (factories DI)
    - schemas.tasks (DTOs Pydantic)

Notas:
    - Autenticación y roles NO se chequean acá: los aplica la dependencia
      global enforce_access_policy antes de llegar al handler.
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Response, status

from task_api.application.usecases.tasks import (
    CreateTaskUseCase,
    DeleteTaskUseCase,
    GetTaskUseCase,
    ListTasksUseCase,
    TaskInput,
    UpdateTaskUseCase,
)
from task_api.container import (
    get_create_task_use_case,
    get_delete_task_use_case,
    get_get_task_use_case,
    get_list_tasks_use_case,
    get_update_task_use_case,
)
from task_api.crosscutting.pagination import paginate
from task_api.domain.entities import Task, TaskStatus

from ..dependencies import PageParams, page_params
from ..error_mapping import raise_task_error
from ..schemas.tasks import TaskPage, TaskRequest, TaskResponse

router = APIRouter(prefix="/tasks", tags=["tasks"])


# =============================================================================
# Helpers internos (puros / sin IO)
# =============================================================================


def _to_task_response(task: Task) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        priority=task.priority,
        assigned_to_id=task.assigned_to_id,
        assigned_to_username=task.assigned_to_username,
        created_at=task.created_at,
        updated_at=task.updated_at,
    )


def _to_task_input(req: TaskRequest) -> TaskInput:
    return TaskInput(
        title=req.title,
        description=req.description,
        status=req.status,
        priority=req.priority,
        assigned_to_id=req.assigned_to_id,
    )


def _list_page(
    use_case: ListTasksUseCase,
    page: PageParams,
    *,
    status_filter: TaskStatus | None = None,
    assigned_to_id: int | None = None,
) -> TaskPage:
    result = use_case.execute(
        limit=page.limit,
        offset=page.offset,
        status=status_filter,
        assigned_to_id=assigned_to_id,
    )
    items = [_to_task_response(t) for t in result.tasks]
    return paginate(items, page.limit, page.cursor, total=result.total)


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=TaskPage)
def list_tasks(
    status_filter: TaskStatus | None = Query(None, alias="status"),
    page: PageParams = Depends(page_params),
    use_case: ListTasksUseCase = Depends(get_list_tasks_use_case),
):
    """Lista tareas ordenadas por id (filtro opcional por status)."""
    return _list_page(use_case, page, status_filter=status_filter)


@router.get("/user/{user_id}", response_model=TaskPage)
def list_tasks_by_user(
    user_id: int,
    page: PageParams = Depends(page_params),
    use_case: ListTasksUseCase = Depends(get_list_tasks_use_case),
):
    """Tareas asignadas a un usuario (usuario inexistente => página vacía)."""
    return _list_page(use_case, page, assigned_to_id=user_id)


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    use_case: GetTaskUseCase = Depends(get_get_task_use_case),
):
    result = use_case.execute(task_id)
    if result.error is not None:
        raise_task_error(result.error)
    return _to_task_response(result.task)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    req: TaskRequest,
    use_case: CreateTaskUseCase = Depends(get_create_task_use_case),
):
    result = use_case.execute(_to_task_input(req))
    if result.error is not None:
        raise_task_error(result.error)
    return _to_task_response(result.task)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    req: TaskRequest,
    use_case: UpdateTaskUseCase = Depends(get_update_task_use_case),
):
    """Reemplazo completo; assignedToId=null desasigna."""
    result = use_case.execute(task_id, _to_task_input(req))
    if result.error is not None:
        raise_task_error(result.error)
    return _to_task_response(result.task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    use_case: DeleteTaskUseCase = Depends(get_delete_task_use_case),
):
    result = use_case.execute(task_id)
    if result.error is not None:
        raise_task_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
