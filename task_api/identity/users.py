"""
===============================================================================
TARJETA CRC — identity/users.py
===============================================================================

Módulo:
    Modelos de Usuario e Identidad

Responsabilidades:
    - Definir el enum de roles (USER / ADMIN).
    - Definir el dataclass User (cuenta persistida).
    - Definir Identity: el principal asociado a un request autenticado.
    - Derivar authorities "ROLE_<rol>" a partir del string de roles guardado.

Colaboradores:
    - identity/identity_filter.py: construye Identity desde un User.
    - identity/access_policy.py: consulta Identity.has_role().
    - infrastructure/repositories/*/user.py: mapean filas -> User.

Notas:
    - Este módulo NO contiene lógica de negocio: solo “shapes” de datos.
    - password_hash nunca se serializa hacia afuera (ver schemas/users.py).
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Final

ROLE_PREFIX: Final[str] = "ROLE_"


class UserRole(str, Enum):
    """Roles soportados."""

    USER = "USER"
    ADMIN = "ADMIN"


DEFAULT_ROLES: Final[str] = UserRole.USER.value
ADMIN_ROLES: Final[str] = f"{UserRole.USER.value},{UserRole.ADMIN.value}"


@dataclass(frozen=True, slots=True)
class User:
    """Cuenta registrada. `roles` es una lista separada por comas ("USER,ADMIN")."""

    id: int
    username: str
    email: str
    password_hash: str
    roles: str = DEFAULT_ROLES
    created_at: datetime | None = None

    def role_list(self) -> list[str]:
        return [r.strip() for r in self.roles.split(",") if r.strip()]


def parse_authorities(roles: str) -> frozenset[str]:
    """
    "USER, ADMIN" -> {"ROLE_USER", "ROLE_ADMIN"}.

    R: cada rol se recorta y se prefija; vacíos se descartan.
    """
    return frozenset(
        f"{ROLE_PREFIX}{role.strip()}" for role in (roles or "").split(",") if role.strip()
    )


@dataclass(frozen=True, slots=True)
class Identity:
    """Principal del request (vive solo durante el request)."""

    user_id: int
    username: str
    authorities: frozenset[str]

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(
            user_id=user.id,
            username=user.username,
            authorities=parse_authorities(user.roles),
        )

    def has_role(self, role: UserRole | str) -> bool:
        name = role.value if isinstance(role, UserRole) else str(role)
        return f"{ROLE_PREFIX}{name}" in self.authorities

    @property
    def is_admin(self) -> bool:
        return self.has_role(UserRole.ADMIN)
