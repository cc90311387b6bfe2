"""
===============================================================================
TARJETA CRC — schemas/tasks.py
===============================================================================

Módulo:
    Schemas HTTP para Tasks

Responsabilidades:
    - Validar TaskRequest (title requerido/no vacío, límites de longitud,
      status y priority requeridos).
    - Definir TaskResponse (incluye username del asignado, solo lectura).
    - Serializar en camelCase (assignedToId, createdAt, ...).

Colaboradores:
    - domain.entities (enums + límites)
===============================================================================
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from task_api.crosscutting.pagination import Page
from task_api.domain.entities import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    TaskPriority,
    TaskStatus,
)

from .common import CAMEL_CONFIG


# -----------------------------------------------------------------------------
# Requests
# -----------------------------------------------------------------------------
class TaskRequest(BaseModel):
    """Body de POST/PUT /api/tasks (reemplazo completo)."""

    model_config = CAMEL_CONFIG

    title: str = Field(..., max_length=TITLE_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    status: TaskStatus
    priority: TaskPriority
    assigned_to_id: int | None = Field(default=None, ge=1)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v


# -----------------------------------------------------------------------------
# Responses
# -----------------------------------------------------------------------------
class TaskResponse(BaseModel):
    model_config = CAMEL_CONFIG

    id: int
    title: str
    description: str | None = None
    status: TaskStatus
    priority: TaskPriority
    assigned_to_id: int | None = None
    assigned_to_username: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


TaskPage = Page[TaskResponse]
