"""
===============================================================================
TARJETA CRC — interfaces/api/http/routers/__init__.py
===============================================================================

Name:
    Routers Package (HTTP)

Responsibilities:
    - Exponer routers segmentados por contexto para ser incluidos por el
      router principal.

Collaborators:
    - routers.tasks
    - routers.users

Notas:
    - Este archivo NO define endpoints. Solo re-exporta routers.
===============================================================================
"""

from .tasks import router as tasks_router
from .users import router as users_router

__all__ = [
    "tasks_router",
    "users_router",
]
