"""
===============================================================================
TARJETA CRC — schemas/users.py
===============================================================================

Módulo:
    Schemas HTTP para Users

Responsabilidades:
    - UserResponse: vista pública de la cuenta (sin password_hash).
    - UpdateUserRequest: único campo mutable (email).
===============================================================================
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from task_api.crosscutting.pagination import Page

from .auth import EMAIL_MAX_LENGTH
from .common import CAMEL_CONFIG, normalize_email


class UpdateUserRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=EMAIL_MAX_LENGTH)

    @field_validator("email")
    @classmethod
    def normalizar_email(cls, v: str) -> str:
        return normalize_email(v)


class UserResponse(BaseModel):
    model_config = CAMEL_CONFIG

    id: int
    username: str
    email: str
    roles: list[str] = Field(default_factory=list)
    created_at: datetime | None = None


UserPage = Page[UserResponse]
