"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/user.py
============================================================
Class: PostgresUserRepository

Responsibilities:
  - Cargar cuentas (por id / username / email) para auth y administración.
  - Crear cuentas y actualizar el email.
  - Ejecutar SQL parametrizado contra la tabla `users` (contrato con migraciones).
  - Traducir violaciones UNIQUE a DuplicateUserError(field).

Collaborators:
  - psycopg_pool.ConnectionPool
  - postgres/sql.py (ejecución + errores)
  - identity.users.User
  - domain.repositories.UserRepository / DuplicateUserError

Constraints / Notes:
  - Retorna None cuando no existe el recurso (no exception por “not found”).
  - SQL parametrizado siempre (nunca interpolar input de usuario).
  - Orden estable en listados: id ASC.
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from psycopg_pool import ConnectionPool

from ....domain.repositories import DuplicateUserError, UserRepository
from ....identity.users import User
from . import sql

# R: Lista explícita de columnas para mantener el contrato estable con migraciones.
_USER_COLUMNS = "id, username, email, password_hash, roles, created_at"

_CONSTRAINT_FIELDS = {
    "uq_users_username": "username",
    "uq_users_email": "email",
}


def _row_to_user(row: tuple) -> User:
    return User(
        id=row[0],
        username=row[1],
        email=row[2],
        password_hash=row[3],
        roles=row[4],
        created_at=row[5],
    )


def _duplicate(constraint_name: str | None) -> DuplicateUserError:
    return DuplicateUserError(_CONSTRAINT_FIELDS.get(constraint_name or "", "username"))


class PostgresUserRepository(UserRepository):
    """Repositorio de cuentas sobre PostgreSQL (pool inyectable para tests)."""

    def __init__(self, pool: ConnectionPool | None = None) -> None:
        self._pool = pool

    # =========================================================
    # Lecturas
    # =========================================================
    def _get_by(self, column: str, value: object) -> Optional[User]:
        # R: `column` lo controla el código, nunca el input.
        row = sql.execute(
            self._pool,
            query=f"SELECT {_USER_COLUMNS} FROM users WHERE {column} = %s",
            params=(value,),
            fetch="one",
            log_msg=f"PostgresUserRepository: get_user_by_{column} failed",
        )
        return _row_to_user(row) if row else None

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        return self._get_by("id", user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._get_by("username", username)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._get_by("email", email)

    def _exists(self, column: str, value: object) -> bool:
        row = sql.execute(
            self._pool,
            query=f"SELECT EXISTS (SELECT 1 FROM users WHERE {column} = %s)",
            params=(value,),
            fetch="one",
            log_msg=f"PostgresUserRepository: exists_by_{column} failed",
        )
        return bool(row and row[0])

    def exists_by_username(self, username: str) -> bool:
        return self._exists("username", username)

    def exists_by_email(self, email: str) -> bool:
        return self._exists("email", email)

    def list_users(self, *, limit: int, offset: int = 0) -> List[User]:
        if limit <= 0:
            return []
        rows = sql.execute(
            self._pool,
            query=f"""
                SELECT {_USER_COLUMNS}
                FROM users
                ORDER BY id ASC
                LIMIT %s OFFSET %s
            """,
            params=(limit, max(0, offset)),
            fetch="all",
            log_msg="PostgresUserRepository: list_users failed",
            log_extra={"limit": limit, "offset": offset},
        )
        return [_row_to_user(r) for r in rows]

    def count_users(self) -> int:
        row = sql.execute(
            self._pool,
            query="SELECT COUNT(*) FROM users",
            fetch="one",
            log_msg="PostgresUserRepository: count_users failed",
        )
        return int(row[0]) if row else 0

    # =========================================================
    # Escrituras
    # =========================================================
    def create_user(
        self, *, username: str, email: str, password_hash: str, roles: str
    ) -> User:
        row = sql.execute(
            self._pool,
            query=f"""
                INSERT INTO users (username, email, password_hash, roles)
                VALUES (%s, %s, %s, %s)
                RETURNING {_USER_COLUMNS}
            """,
            params=(username, email, password_hash, roles),
            fetch="one",
            log_msg="PostgresUserRepository: create_user failed",
            log_extra={"username": username},
            on_unique_violation=_duplicate,
        )
        return _row_to_user(row)

    def update_user_email(self, user_id: int, email: str) -> Optional[User]:
        row = sql.execute(
            self._pool,
            query=f"""
                UPDATE users
                SET email = %s
                WHERE id = %s
                RETURNING {_USER_COLUMNS}
            """,
            params=(email, user_id),
            fetch="one",
            log_msg="PostgresUserRepository: update_user_email failed",
            log_extra={"user_id": user_id},
            on_unique_violation=_duplicate,
        )
        return _row_to_user(row) if row else None

    def delete_user(self, user_id: int) -> bool:
        deleted = sql.execute(
            self._pool,
            query="DELETE FROM users WHERE id = %s",
            params=(user_id,),
            fetch="rowcount",
            log_msg="PostgresUserRepository: delete_user failed",
            log_extra={"user_id": user_id},
        )
        return deleted > 0

    def ping(self) -> bool:
        return sql.ping(self._pool)
