"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/users.py
===============================================================================

Class/Module:
    User Router

Responsibilities:
    - Listar / obtener / actualizar email / borrar usuarios bajo /api/users.
    - Nunca exponer password_hash (UserResponse).

Collaborators:
    - application.usecases.users
    - schemas.users

Notas:
    - GET /api/users y DELETE requieren ADMIN (AccessPolicy).
    - GET /api/users sin `limit` devuelve la lista completa.
    - PUT solo requiere un token válido (AccessPolicy: AUTHENTICATED).
===============================================================================
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from task_api.application.usecases.users import (
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from task_api.container import (
    get_delete_user_use_case,
    get_get_user_use_case,
    get_list_users_use_case,
    get_update_user_use_case,
)
from task_api.crosscutting.pagination import paginate
from task_api.identity.users import User

from ..dependencies import PageParams, optional_page_params
from ..error_mapping import raise_user_error
from ..schemas.users import UpdateUserRequest, UserPage, UserResponse

router = APIRouter(prefix="/users", tags=["users"])


def to_user_response(user: User) -> UserResponse:
    """Convierte entidad de usuario a DTO de respuesta."""
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        roles=user.role_list(),
        created_at=user.created_at,
    )


@router.get("", response_model=UserPage)
def list_users(
    page: PageParams = Depends(optional_page_params),
    use_case: ListUsersUseCase = Depends(get_list_users_use_case),
):
    """Sin `limit` responde todas las cuentas en una sola página."""
    result = use_case.execute(limit=page.limit, offset=page.offset)
    items = [to_user_response(u) for u in result.users]
    limit = page.limit if page.limit is not None else len(items)
    return paginate(items, limit, page.cursor, total=result.total)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    use_case: GetUserUseCase = Depends(get_get_user_use_case),
):
    result = use_case.execute(user_id)
    if result.error is not None:
        raise_user_error(result.error)
    return to_user_response(result.user)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    req: UpdateUserRequest,
    use_case: UpdateUserUseCase = Depends(get_update_user_use_case),
):
    """Actualiza el email (único campo mutable)."""
    result = use_case.execute(user_id, email=req.email)
    if result.error is not None:
        raise_user_error(result.error)
    return to_user_response(result.user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    use_case: DeleteUserUseCase = Depends(get_delete_user_use_case),
):
    """Desasigna las tareas del usuario y lo elimina."""
    result = use_case.execute(user_id)
    if result.error is not None:
        raise_user_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
