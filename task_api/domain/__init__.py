"""
===============================================================================
TARJETA CRC — domain/__init__.py
===============================================================================

Módulo:
    Exportaciones de la Capa de Dominio (API pública del dominio)

Responsabilidades:
    - Centralizar exports para imports limpios en application/interfaces.
    - Mantener estable el “surface area” del dominio.

Colaboradores:
    - domain.entities: Task, TaskStatus, TaskPriority
    - domain.repositories: Puertos de persistencia (users, tasks)

Reglas:
    - Solo re-exporta contratos/entidades del dominio.
    - No importar infraestructura aquí.
===============================================================================
"""

from .entities import Task, TaskPriority, TaskStatus
from .repositories import DuplicateUserError, TaskRepository, UserRepository

__all__ = [
    # Entities
    "Task",
    "TaskStatus",
    "TaskPriority",
    # Repository Interfaces (Ports)
    "UserRepository",
    "TaskRepository",
    "DuplicateUserError",
]
