"""
CRC — domain/repositories.py

Name
- Domain Repository Interfaces (Protocols)

Responsibilities
- Define persistence contracts for accounts and tasks (ports).
- Keep the application layer independent from infrastructure (PostgreSQL, in-memory).
- Enable dependency inversion and straightforward unit testing (mock/stub repositories).

Collaborators
- domain.entities: Task, TaskStatus
- identity.users: User
- infrastructure.repositories: postgres/*, in_memory/* implementations

Constraints
- Pure interfaces only: no side effects, no SQL.
- Implementations MUST match method signatures exactly.
- Ordering of list_* results is by id ascending.
"""

from typing import List, Optional, Protocol

from ..identity.users import User
from .entities import Task, TaskStatus


class DuplicateUserError(Exception):
    """
    R: Raised by a UserRepository when a unique constraint is violated.

    `field` is "username" or "email".
    """

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"duplicate {field}")


class UserRepository(Protocol):
    """
    R: Credential store: account persistence.

    Implementations must enforce unique username and unique email.
    """

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """R: Fetch account by id."""
        ...

    def get_user_by_username(self, username: str) -> Optional[User]:
        """R: Fetch account by exact username."""
        ...

    def get_user_by_email(self, email: str) -> Optional[User]:
        """R: Fetch account by exact email."""
        ...

    def exists_by_username(self, username: str) -> bool: ...

    def exists_by_email(self, email: str) -> bool: ...

    def list_users(self, *, limit: int, offset: int = 0) -> List[User]:
        """R: Page of accounts ordered by id."""
        ...

    def count_users(self) -> int: ...

    def create_user(
        self, *, username: str, email: str, password_hash: str, roles: str
    ) -> User:
        """
        R: Persist a new account and return it with id/created_at.

        Raises:
            DuplicateUserError: username or email already taken
        """
        ...

    def update_user_email(self, user_id: int, email: str) -> Optional[User]:
        """
        R: Change the email. Returns None when the account does not exist.

        Raises:
            DuplicateUserError: email already taken by another account
        """
        ...

    def delete_user(self, user_id: int) -> bool:
        """R: Hard delete. Returns False when nothing was deleted."""
        ...

    def ping(self) -> bool: ...


class TaskRepository(Protocol):
    """
    R: Task persistence.

    Implementations resolve `assigned_to_username` on every read.
    """

    def get_task(self, task_id: int) -> Optional[Task]: ...

    def list_tasks(
        self,
        *,
        limit: int,
        offset: int = 0,
        status: TaskStatus | None = None,
        assigned_to_id: int | None = None,
    ) -> List[Task]:
        """R: Page of tasks ordered by id, optionally filtered."""
        ...

    def count_tasks(
        self,
        *,
        status: TaskStatus | None = None,
        assigned_to_id: int | None = None,
    ) -> int: ...

    def create_task(self, task: Task) -> Task:
        """R: Persist a new task; the store assigns id and timestamps."""
        ...

    def update_task(self, task: Task) -> Optional[Task]:
        """
        R: Replace mutable fields of an existing task (by task.id).

        Returns None when the task does not exist.
        """
        ...

    def delete_task(self, task_id: int) -> bool:
        """R: Hard delete. Returns False when nothing was deleted."""
        ...

    def unassign_user_tasks(self, user_id: int) -> int:
        """R: Clear the assignee of every task assigned to user_id."""
        ...

    def ping(self) -> bool: ...
