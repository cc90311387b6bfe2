"""
===============================================================================
TARJETA CRC — domain/entities.py
===============================================================================

Módulo:
    Entidades del Dominio (Task)

Responsabilidades:
    - Definir la tarea y sus enums de estado/prioridad (sin infraestructura).
    - Brindar helpers mínimos para mantener invariantes simples.

Colaboradores:
    - domain.repositories: persisten/recuperan estas entidades.
    - application/usecases/tasks: construyen/consumen estas entidades.
    - interfaces/api/http/schemas/tasks.py: serializan DTOs basados en Task.

Principios:
    - Sin dependencias a DB/FastAPI.
    - La cuenta (User) vive en identity/users.py junto al resto de identidad.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


def _utcnow() -> datetime:
    """Fecha/hora UTC (helper interno)."""
    return datetime.now(timezone.utc)


TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000


class TaskStatus(str, Enum):
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


@dataclass
class Task:
    """
    Tarea del sistema.

    `id` es None hasta que el repositorio la persiste.
    `assigned_to_username` es de solo lectura: lo resuelve el store.
    """

    title: str
    status: TaskStatus
    priority: TaskPriority
    description: Optional[str] = None
    assigned_to_id: Optional[int] = None
    assigned_to_username: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_assigned(self) -> bool:
        return self.assigned_to_id is not None

    def assign(self, user_id: int | None, username: str | None = None) -> None:
        """Asigna (o desasigna con None) la tarea."""
        self.assigned_to_id = user_id
        self.assigned_to_username = username if user_id is not None else None

    def touch(self, *, at: datetime | None = None) -> None:
        """Marca created_at (si falta) y updated_at."""
        moment = at or _utcnow()
        if self.created_at is None:
            self.created_at = moment
        self.updated_at = moment
