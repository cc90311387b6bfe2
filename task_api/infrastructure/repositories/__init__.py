"""
============================================================
TARJETA CRC
============================================================
Package: task_api.infrastructure.repositories

Responsibilities:
- Exponer implementaciones concretas de repositorios (Postgres e InMemory)
  en un único punto de importación.

Collaborators:
- container.py (elige adapter según STORAGE_BACKEND)
============================================================
"""

from .in_memory import InMemoryTaskRepository, InMemoryUserRepository
from .postgres import PostgresTaskRepository, PostgresUserRepository

__all__ = [
    "InMemoryUserRepository",
    "InMemoryTaskRepository",
    "PostgresUserRepository",
    "PostgresTaskRepository",
]
