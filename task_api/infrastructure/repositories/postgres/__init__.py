"""PostgreSQL repository implementations (psycopg 3 + psycopg_pool)."""

from .task import PostgresTaskRepository
from .user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresTaskRepository",
]
