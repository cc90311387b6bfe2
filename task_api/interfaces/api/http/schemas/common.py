"""Helpers de validación compartidos por los schemas HTTP."""

from __future__ import annotations

import re

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

# R: JSON en camelCase; los requests también aceptan snake_case.
CAMEL_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def normalize_email(value: str) -> str:
    email = value.strip().lower()
    if not _EMAIL_RE.match(email):
        raise ValueError("Email must be a valid address")
    return email
