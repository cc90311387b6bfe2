"""
===============================================================================
TARJETA CRC — identity/access_policy.py
===============================================================================

Módulo:
    Authorization Gate (tabla de reglas por ruta)

Responsabilidades:
    - Declarar como DATOS qué requiere cada (método, template de ruta):
      PUBLIC, AUTHENTICATED o un rol.
    - Decidir ALLOW / UNAUTHENTICATED / FORBIDDEN para una Identity.
    - Default seguro: una ruta ausente de la tabla requiere autenticación.

Colaboradores:
    - identity/users.py: Identity.has_role() (chequea "ROLE_<rol>").
    - interfaces/api/http/dependencies.py: enforce_access_policy (Depends global).
    - api/main.py: marca operaciones públicas en OpenAPI.

Notas:
    - Las reglas se declaran con templates ("/api/tasks/{task_id}") y se
      compilan con compile_path de Starlette: la consulta acepta el template o
      el path concreto del request ("/api/tasks/7").
    - Un match exacto gana; si no, los templates con menos parámetros primero
      ("/api/tasks/user/{user_id}" antes que "/api/tasks/{task_id}").
    - HEAD se evalúa como GET.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Pattern

from starlette.routing import compile_path

from .users import Identity, UserRole


class RequirementKind(str, Enum):
    PUBLIC = "PUBLIC"
    AUTHENTICATED = "AUTHENTICATED"
    ROLE = "ROLE"


@dataclass(frozen=True, slots=True)
class Requirement:
    kind: RequirementKind
    role: UserRole | None = None

    @classmethod
    def has_role(cls, role: UserRole) -> "Requirement":
        return cls(kind=RequirementKind.ROLE, role=role)

    def __str__(self) -> str:
        if self.kind is RequirementKind.ROLE and self.role is not None:
            return f"ROLE_{self.role.value}"
        return self.kind.value


PUBLIC = Requirement(RequirementKind.PUBLIC)
AUTHENTICATED = Requirement(RequirementKind.AUTHENTICATED)
ADMIN = Requirement.has_role(UserRole.ADMIN)


class AccessDecision(str, Enum):
    ALLOW = "ALLOW"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    FORBIDDEN = "FORBIDDEN"


@dataclass(frozen=True, slots=True)
class AccessRule:
    method: str
    path: str
    requirement: Requirement


def _key(method: str, path: str) -> tuple[str, str]:
    verb = method.upper()
    if verb == "HEAD":
        verb = "GET"
    return verb, path


class AccessPolicy:
    """Tabla inmutable (método, ruta) -> Requirement."""

    def __init__(
        self,
        rules: Iterable[AccessRule],
        *,
        default: Requirement = AUTHENTICATED,
    ) -> None:
        table: dict[tuple[str, str], Requirement] = {}
        for rule in rules:
            table[_key(rule.method, rule.path)] = rule.requirement
        self._table = table
        self._default = default

        patterns: list[tuple[int, str, Pattern[str], Requirement]] = []
        for (verb, path), requirement in table.items():
            regex, _, convertors = compile_path(path)
            patterns.append((len(convertors), verb, regex, requirement))
        patterns.sort(key=lambda item: item[0])
        self._patterns = patterns

    @property
    def rules(self) -> list[AccessRule]:
        return [
            AccessRule(method=m, path=p, requirement=r)
            for (m, p), r in sorted(self._table.items())
        ]

    def requirement_for(self, method: str, path: str) -> Requirement:
        """`path` puede ser un template de la tabla o un path concreto."""
        key = _key(method, path)
        exact = self._table.get(key)
        if exact is not None:
            return exact

        verb, concrete = key
        for _, rule_verb, regex, requirement in self._patterns:
            if rule_verb == verb and regex.match(concrete):
                return requirement
        return self._default

    def is_public(self, method: str, path: str) -> bool:
        return self.requirement_for(method, path).kind is RequirementKind.PUBLIC

    def decide(
        self, method: str, path: str, identity: Identity | None
    ) -> AccessDecision:
        requirement = self.requirement_for(method, path)

        if requirement.kind is RequirementKind.PUBLIC:
            return AccessDecision.ALLOW
        if identity is None:
            return AccessDecision.UNAUTHENTICATED
        if requirement.kind is RequirementKind.AUTHENTICATED:
            return AccessDecision.ALLOW
        if requirement.role is not None and identity.has_role(requirement.role):
            return AccessDecision.ALLOW
        return AccessDecision.FORBIDDEN


# -----------------------------------------------------------------------------
# Tabla por defecto
# -----------------------------------------------------------------------------


def default_rules(*, metrics_require_auth: bool = False) -> list[AccessRule]:
    return [
        # Auth
        AccessRule("POST", "/api/auth/register", PUBLIC),
        AccessRule("POST", "/api/auth/login", PUBLIC),
        AccessRule("GET", "/api/auth/me", AUTHENTICATED),
        # Tasks
        AccessRule("GET", "/api/tasks", AUTHENTICATED),
        AccessRule("GET", "/api/tasks/{task_id}", AUTHENTICATED),
        AccessRule("GET", "/api/tasks/user/{user_id}", AUTHENTICATED),
        AccessRule("POST", "/api/tasks", AUTHENTICATED),
        AccessRule("PUT", "/api/tasks/{task_id}", AUTHENTICATED),
        AccessRule("DELETE", "/api/tasks/{task_id}", ADMIN),
        # Users
        AccessRule("GET", "/api/users", ADMIN),
        AccessRule("GET", "/api/users/{user_id}", AUTHENTICATED),
        AccessRule("PUT", "/api/users/{user_id}", AUTHENTICATED),
        AccessRule("DELETE", "/api/users/{user_id}", ADMIN),
        # Ops
        AccessRule("GET", "/healthz", PUBLIC),
        AccessRule("GET", "/readyz", PUBLIC),
        AccessRule("GET", "/metrics", ADMIN if metrics_require_auth else PUBLIC),
    ]


def build_default_policy(*, metrics_require_auth: bool = False) -> AccessPolicy:
    return AccessPolicy(default_rules(metrics_require_auth=metrics_require_auth))
