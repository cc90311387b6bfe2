"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/user.py
============================================================
Class: InMemoryUserRepository

Responsibilities:
  - Almacenar cuentas en memoria (default local / tests).
  - Garantizar unicidad de username y email (como las UNIQUE de Postgres).
  - Asignar ids secuenciales y created_at.

Collaborators:
  - identity.users.User
  - domain.repositories.UserRepository / DuplicateUserError

Constraints:
  - Thread-safe: check + insert ocurren bajo el mismo Lock.
  - User es inmutable (frozen): se reemplaza con dataclasses.replace.
============================================================
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, List, Optional

from ....domain.repositories import DuplicateUserError, UserRepository
from ....identity.users import User


class InMemoryUserRepository(UserRepository):
    """Repositorio in-memory, thread-safe, para cuentas."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._users: Dict[int, User] = {}
        self._next_id = 1

    # =========================================================
    # Helpers internos
    # =========================================================
    def _find(self, predicate) -> Optional[User]:
        # R: llamar con el lock tomado.
        for user in self._users.values():
            if predicate(user):
                return user
        return None

    def _email_owner(self, email: str) -> Optional[User]:
        return self._find(lambda u: u.email == email)

    # =========================================================
    # Lecturas
    # =========================================================
    def get_user_by_id(self, user_id: int) -> Optional[User]:
        with self._lock:
            return self._users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._lock:
            return self._find(lambda u: u.username == username)

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._lock:
            return self._email_owner(email)

    def exists_by_username(self, username: str) -> bool:
        return self.get_user_by_username(username) is not None

    def exists_by_email(self, email: str) -> bool:
        return self.get_user_by_email(email) is not None

    def list_users(self, *, limit: int, offset: int = 0) -> List[User]:
        with self._lock:
            ordered = sorted(self._users.values(), key=lambda u: u.id)
        return ordered[offset : offset + limit]

    def count_users(self) -> int:
        with self._lock:
            return len(self._users)

    # =========================================================
    # Escrituras
    # =========================================================
    def create_user(
        self, *, username: str, email: str, password_hash: str, roles: str
    ) -> User:
        with self._lock:
            if self._find(lambda u: u.username == username) is not None:
                raise DuplicateUserError("username")
            if self._email_owner(email) is not None:
                raise DuplicateUserError("email")

            user = User(
                id=self._next_id,
                username=username,
                email=email,
                password_hash=password_hash,
                roles=roles,
                created_at=datetime.now(timezone.utc),
            )
            self._users[user.id] = user
            self._next_id += 1
            return user

    def update_user_email(self, user_id: int, email: str) -> Optional[User]:
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            owner = self._email_owner(email)
            if owner is not None and owner.id != user_id:
                raise DuplicateUserError("email")

            updated = replace(current, email=email)
            self._users[user_id] = updated
            return updated

    def delete_user(self, user_id: int) -> bool:
        with self._lock:
            return self._users.pop(user_id, None) is not None

    def ping(self) -> bool:
        return True
