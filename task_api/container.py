"""
===============================================================================
TARJETA CRC — task_api/container.py (Composition Root / DI manual)
===============================================================================

Responsabilidades:
  - Componer dependencias (repositorios, codec, policy) siguiendo DIP.
  - Exponer factories para FastAPI (Depends).
  - Mantener singletons con caching (lru_cache).
  - Elegir el adapter de persistencia según STORAGE_BACKEND.

Colaboradores:
  - task_api.crosscutting.config.get_settings
  - task_api.domain.repositories.* (puertos)
  - task_api.infrastructure.repositories.* (implementaciones)
  - task_api.application.usecases.* (casos de uso)

Notas:
  - Este archivo NO contiene lógica de negocio.
  - Este archivo NO depende de FastAPI (solo expone factories).
===============================================================================
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache

from .application.usecases.auth import LoginUserUseCase, RegisterUserUseCase
from .application.usecases.tasks import (
    CreateTaskUseCase,
    DeleteTaskUseCase,
    GetTaskUseCase,
    ListTasksUseCase,
    UpdateTaskUseCase,
)
from .application.usecases.users import (
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from .crosscutting.config import get_settings
from .domain.repositories import TaskRepository, UserRepository
from .identity.access_policy import AccessPolicy, build_default_policy
from .identity.auth_users import hash_password, verify_password
from .identity.token_codec import TokenCodec
from .infrastructure.repositories import (
    InMemoryTaskRepository,
    InMemoryUserRepository,
    PostgresTaskRepository,
    PostgresUserRepository,
)

# =============================================================================
# Repositorios (singletons)
# =============================================================================


@lru_cache(maxsize=1)
def get_user_repository() -> UserRepository:
    """Credential store (in-memory por defecto; Postgres si STORAGE_BACKEND=postgres)."""
    if get_settings().uses_postgres():
        return PostgresUserRepository()
    return InMemoryUserRepository()


@lru_cache(maxsize=1)
def get_task_repository() -> TaskRepository:
    if get_settings().uses_postgres():
        return PostgresTaskRepository()
    return InMemoryTaskRepository(users=get_user_repository())


# =============================================================================
# Identidad
# =============================================================================


@lru_cache(maxsize=1)
def get_token_codec() -> TokenCodec:
    """Codec inmutable: clave y TTL se leen una sola vez."""
    settings = get_settings()
    return TokenCodec(
        secret=settings.jwt_secret,
        default_ttl=timedelta(minutes=settings.jwt_access_ttl_minutes),
    )


@lru_cache(maxsize=1)
def get_access_policy() -> AccessPolicy:
    return build_default_policy(
        metrics_require_auth=get_settings().metrics_require_auth
    )


# =============================================================================
# Casos de uso (baratos: se crean por request)
# =============================================================================


def get_register_user_use_case() -> RegisterUserUseCase:
    return RegisterUserUseCase(
        user_repository=get_user_repository(),
        token_codec=get_token_codec(),
        password_hasher=hash_password,
    )


def get_login_user_use_case() -> LoginUserUseCase:
    return LoginUserUseCase(
        user_repository=get_user_repository(),
        token_codec=get_token_codec(),
        password_verifier=verify_password,
    )


def get_list_tasks_use_case() -> ListTasksUseCase:
    return ListTasksUseCase(task_repository=get_task_repository())


def get_get_task_use_case() -> GetTaskUseCase:
    return GetTaskUseCase(task_repository=get_task_repository())


def get_create_task_use_case() -> CreateTaskUseCase:
    return CreateTaskUseCase(
        task_repository=get_task_repository(),
        user_repository=get_user_repository(),
    )


def get_update_task_use_case() -> UpdateTaskUseCase:
    return UpdateTaskUseCase(
        task_repository=get_task_repository(),
        user_repository=get_user_repository(),
    )


def get_delete_task_use_case() -> DeleteTaskUseCase:
    return DeleteTaskUseCase(task_repository=get_task_repository())


def get_list_users_use_case() -> ListUsersUseCase:
    return ListUsersUseCase(user_repository=get_user_repository())


def get_get_user_use_case() -> GetUserUseCase:
    return GetUserUseCase(user_repository=get_user_repository())


def get_update_user_use_case() -> UpdateUserUseCase:
    return UpdateUserUseCase(user_repository=get_user_repository())


def get_delete_user_use_case() -> DeleteUserUseCase:
    return DeleteUserUseCase(
        user_repository=get_user_repository(),
        task_repository=get_task_repository(),
    )


# =============================================================================
# Tests
# =============================================================================


def reset_container() -> None:
    """Limpia singletons (tests / cambio de Settings)."""
    for factory in (
        get_user_repository,
        get_task_repository,
        get_token_codec,
        get_access_policy,
    ):
        factory.cache_clear()
