"""
===============================================================================
USER USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Códigos:
  - NOT_FOUND: la cuenta no existe.
  - CONFLICT: el email ya pertenece a otra cuenta (`field` = "email").
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....identity.users import User


class UserErrorCode(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class UserError:
    code: UserErrorCode
    message: str
    field: str | None = None
    resource_id: int | None = None


@dataclass
class UserResult:
    user: User | None = None
    error: UserError | None = None


@dataclass
class UserListResult:
    users: List[User] = field(default_factory=list)
    total: int = 0


@dataclass
class DeleteUserResult:
    deleted: bool
    unassigned_tasks: int = 0
    error: UserError | None = None


def user_not_found(user_id: int) -> UserError:
    return UserError(
        code=UserErrorCode.NOT_FOUND,
        message=f"User not found with id: {user_id}",
        resource_id=user_id,
    )
