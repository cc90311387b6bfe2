"""
===============================================================================
MÓDULO: Excepciones internas tipadas
===============================================================================

TaskApiError lleva un `error_id` (uuid) que se loguea y se devuelve en la
respuesta, así un reporte del cliente se cruza con el log del servidor.

Colaboradores:
  - api/exception_handlers.py (TaskApiError -> 500, DatabaseError -> 503)
  - infrastructure/db/* y repositories/postgres/* (lanzan DatabaseError)
===============================================================================
"""

from __future__ import annotations

from uuid import uuid4


class TaskApiError(Exception):
    error_code: str = "TASK_API_ERROR"

    def __init__(self, message: str, *, original_error: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.error_id = str(uuid4())
        self.original_error = original_error


class DatabaseError(TaskApiError):
    """Conexión, query, timeout o pool no disponible."""

    error_code: str = "DATABASE_ERROR"
