"""
===============================================================================
TARJETA CRC — error_mapping.py (UseCase Error -> HTTP RFC7807)
===============================================================================

Responsabilidades:
  - Traducir códigos de error de casos de uso a HTTP Exceptions RFC7807.
  - Centralizar el mapeo para evitar duplicación en routers.
  - Mantener el dominio libre de HTTP.

Reglas:
  - Los use cases devuelven errores tipados (code + message [+ resource]).
  - La API traduce a RFC7807 (crosscutting.error_responses).
  - Duplicados (CONFLICT) responden 400 con el campo en conflicto.

Colaboradores:
  - application.usecases.{auth,tasks,users}
  - crosscutting.error_responses
===============================================================================
"""

from __future__ import annotations

from typing import NoReturn

from task_api.application.usecases.auth import AuthError, AuthErrorCode
from task_api.application.usecases.tasks import TaskError, TaskErrorCode
from task_api.application.usecases.users import UserError, UserErrorCode
from task_api.crosscutting.error_responses import (
    conflict,
    not_found,
    unauthorized,
    validation_error,
)


def raise_auth_error(error: AuthError) -> NoReturn:
    if error.code == AuthErrorCode.CONFLICT:
        raise conflict(error.message, field=error.field)
    if error.code == AuthErrorCode.INVALID_CREDENTIALS:
        raise unauthorized(error.message)
    raise validation_error(error.message)


def raise_task_error(error: TaskError) -> NoReturn:
    """
    Traduce TaskErrorCode -> HTTP.

    NOT_FOUND puede referirse a la tarea o al usuario asignado (`resource`).
    """
    if error.code == TaskErrorCode.NOT_FOUND:
        raise not_found(error.resource, str(error.resource_id or "unknown"))
    raise validation_error(error.message)


def raise_user_error(error: UserError) -> NoReturn:
    if error.code == UserErrorCode.NOT_FOUND:
        raise not_found("User", str(error.resource_id or "unknown"))
    if error.code == UserErrorCode.CONFLICT:
        raise conflict(error.message, field=error.field)
    raise validation_error(error.message)
