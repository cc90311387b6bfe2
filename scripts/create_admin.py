"""
Name: Admin Bootstrap Script

Responsibilities:
  - Create the first admin account (idempotent by username)
  - Hash passwords with Argon2
  - Store the account in PostgreSQL
"""

from __future__ import annotations

import argparse
import getpass
import os
import sys

import psycopg

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from task_api.identity.auth_users import hash_password  # noqa: E402
from task_api.identity.users import ADMIN_ROLES, UserRole  # noqa: E402
from task_api.interfaces.api.http.schemas.auth import (  # noqa: E402
    PASSWORD_MAX_LENGTH,
    PASSWORD_MIN_LENGTH,
    USERNAME_MAX_LENGTH,
    USERNAME_MIN_LENGTH,
)
from task_api.interfaces.api.http.schemas.common import normalize_email  # noqa: E402


def _require_database_url() -> str:
    db_url = os.getenv("DATABASE_URL")
    if not db_url:
        raise SystemExit("DATABASE_URL is required to create a user.")
    return db_url


def _prompt_email() -> str:
    return _normalize_email(input("Email: "))


def _prompt_password() -> str:
    password = getpass.getpass("Password: ")
    if not password:
        raise SystemExit("Password is required.")
    confirm = getpass.getpass("Confirm password: ")
    if password != confirm:
        raise SystemExit("Passwords do not match.")
    return password


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    argv = sys.argv[1:] if argv is None else argv
    if argv and argv[0] == "--":
        argv = argv[1:]
    parser = argparse.ArgumentParser(
        description="Create the first admin user (idempotent)."
    )
    parser.add_argument("--username", required=True, help="Login name")
    parser.add_argument("--email", help="User email (will be normalized)")
    parser.add_argument(
        "--password",
        help="User password (omit to be prompted securely)",
    )
    parser.add_argument(
        "--role",
        default=UserRole.ADMIN.value,
        choices=[role.value for role in UserRole],
        help="User role (default: ADMIN)",
    )
    return parser.parse_args(argv)


def _normalize_username(username: str) -> str:
    normalized = username.strip()
    if not USERNAME_MIN_LENGTH <= len(normalized) <= USERNAME_MAX_LENGTH:
        raise SystemExit(
            f"Username must be between {USERNAME_MIN_LENGTH} and "
            f"{USERNAME_MAX_LENGTH} characters."
        )
    return normalized


def _normalize_email(email: str) -> str:
    try:
        return normalize_email(email)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc


def _check_password(password: str) -> str:
    if not PASSWORD_MIN_LENGTH <= len(password) <= PASSWORD_MAX_LENGTH:
        raise SystemExit(
            f"Password must be between {PASSWORD_MIN_LENGTH} and "
            f"{PASSWORD_MAX_LENGTH} characters."
        )
    return password


def _roles_for(role: str) -> str:
    return ADMIN_ROLES if role == UserRole.ADMIN.value else UserRole.USER.value


def _maybe_create_user(
    db_url: str, *, username: str, email: str, password: str, roles: str
) -> None:
    with psycopg.connect(db_url) as conn:
        with conn.cursor() as cur:
            cur.execute(
                "SELECT id, email, roles FROM users WHERE username = %s",
                (username,),
            )
            row = cur.fetchone()
            if row:
                print(
                    "User already exists: "
                    f"id={row[0]} username={username} email={row[1]} roles={row[2]}"
                )
                return

            password_hash = hash_password(password)
            cur.execute(
                """
                INSERT INTO users (username, email, password_hash, roles)
                VALUES (%s, %s, %s, %s)
                RETURNING id
                """,
                (username, email, password_hash, roles),
            )
            user_id = cur.fetchone()[0]
            conn.commit()
            print(f"Created user: id={user_id} username={username} roles={roles}")


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    db_url = _require_database_url()
    username = _normalize_username(args.username)
    email = _normalize_email(args.email) if args.email else _prompt_email()
    password = _check_password(args.password or _prompt_password())
    _maybe_create_user(
        db_url,
        username=username,
        email=email,
        password=password,
        roles=_roles_for(args.role),
    )


if __name__ == "__main__":
    main()
