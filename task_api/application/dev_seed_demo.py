"""
Name: Dev Seed Demo (non-production only)

Responsibilities:
  - Provision demo accounts (admin / user) and a few sample tasks
  - Enforce safety guard: never runs in production
  - Keep operations idempotent (safe to run on every startup)

Patterns:
  - Task orchestration (seed task)
  - Dependency Injection (repos + hasher injected)
  - Fail-fast guard (safety boundary)

CRC:
  Component: ensure_dev_seed
  Responsibilities:
    - Validate environment guard
    - Ensure demo users exist
    - Ensure sample tasks exist (only when the task store is empty)
  Collaborators:
    - users (UserRepository)
    - tasks (TaskRepository)
    - password_hasher
    - Settings (dev_seed_demo / dev_seed_password / app_env)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ..crosscutting.config import Settings
from ..crosscutting.logger import logger
from ..domain.entities import Task, TaskPriority, TaskStatus
from ..domain.repositories import TaskRepository, UserRepository
from ..identity.users import ADMIN_ROLES, DEFAULT_ROLES, User


@dataclass(frozen=True, slots=True)
class _SeedUserSpec:
    """R: Declarative user seed spec (no side effects)."""

    username: str
    email: str
    roles: str


@dataclass(frozen=True, slots=True)
class _SeedTaskSpec:
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    assignee: str | None


_DEMO_USERS: tuple[_SeedUserSpec, ...] = (
    _SeedUserSpec(username="admin", email="admin@demo.com", roles=ADMIN_ROLES),
    _SeedUserSpec(username="user", email="user@demo.com", roles=DEFAULT_ROLES),
)

_DEMO_TASKS: tuple[_SeedTaskSpec, ...] = (
    _SeedTaskSpec(
        title="Set up project",
        description="Bootstrap the repository and CI pipeline",
        status=TaskStatus.COMPLETED,
        priority=TaskPriority.HIGH,
        assignee="admin",
    ),
    _SeedTaskSpec(
        title="Write API documentation",
        description="Document every endpoint in the OpenAPI spec",
        status=TaskStatus.IN_PROGRESS,
        priority=TaskPriority.MEDIUM,
        assignee="user",
    ),
    _SeedTaskSpec(
        title="Review security settings",
        description="Rotate the signing key before going live",
        status=TaskStatus.OPEN,
        priority=TaskPriority.LOW,
        assignee=None,
    ),
)


def _assert_not_production(settings: Settings) -> None:
    if settings.is_production():
        raise RuntimeError(
            "FATAL: DEV_SEED_DEMO is enabled in production. "
            "Safety guard prevents seeding demo credentials."
        )


def _ensure_user(
    *,
    spec: _SeedUserSpec,
    users: UserRepository,
    password: str,
    password_hasher: Callable[[str], str],
) -> User:
    user = users.get_user_by_username(spec.username)
    if user:
        logger.info(
            "Dev seed demo: user already exists", extra={"username": spec.username}
        )
        return user

    user = users.create_user(
        username=spec.username,
        email=spec.email,
        password_hash=password_hasher(password),
        roles=spec.roles,
    )
    logger.info(
        "Dev seed demo: user created",
        extra={"username": spec.username, "roles": spec.roles},
    )
    return user


def _ensure_tasks(*, tasks: TaskRepository, accounts: dict[str, User]) -> None:
    # R: solo sobre un store vacío; no pisa datos reales.
    if tasks.count_tasks() > 0:
        logger.info("Dev seed demo: tasks already present, skipping")
        return

    for spec in _DEMO_TASKS:
        assignee = accounts.get(spec.assignee) if spec.assignee else None
        tasks.create_task(
            Task(
                title=spec.title,
                description=spec.description,
                status=spec.status,
                priority=spec.priority,
                assigned_to_id=assignee.id if assignee else None,
            )
        )
    logger.info("Dev seed demo: tasks created", extra={"count": len(_DEMO_TASKS)})


def ensure_dev_seed(
    settings: Settings,
    *,
    users: UserRepository,
    tasks: TaskRepository,
    password_hasher: Callable[[str], str],
) -> None:
    """
    R: Ensure the demo environment exists if configured.

    Creates:
      - admin (admin@demo.com, roles USER,ADMIN)
      - user (user@demo.com, roles USER)
      - sample tasks
    """
    if not settings.dev_seed_demo:
        return

    _assert_not_production(settings)

    logger.info("Dev seed demo: starting provisioning")

    accounts = {
        spec.username: _ensure_user(
            spec=spec,
            users=users,
            password=settings.dev_seed_password,
            password_hasher=password_hasher,
        )
        for spec in _DEMO_USERS
    }
    _ensure_tasks(tasks=tasks, accounts=accounts)

    logger.info("Dev seed demo: provisioning complete")
