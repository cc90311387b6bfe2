"""
In-Memory Repository Implementations.

Default storage for local development and unit tests.
Data is lost on process restart.
"""

from .task import InMemoryTaskRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryUserRepository",
    "InMemoryTaskRepository",
]
