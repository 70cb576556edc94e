"""Team Member Field Enforcement — validates team member field constraints.

Invariants:
    - All functions are PURE: no IO, no async, no DB (email syntax only, never DNS)
    - validate_* collect EVERY violation into a field -> [messages] map before raising
    - Email uniqueness is NOT checked here: it needs the store (see services/)

Design Decisions:
    - email-validator for address syntax: the same checker pydantic's EmailStr uses,
      so API-level and core-level notions of "valid email" never drift apart
"""

from email_validator import EmailNotValidError, validate_email

from taskboard.core.domain_types import (
    EMAIL_MAX_LENGTH, NAME_MAX_LENGTH, ROLE_MAX_LENGTH,
)
from taskboard.core.enforce_task import raise_field_errors


def check_name(name: str | None) -> str | None:
    if name is None or not name.strip():
        return "Name is required."
    if len(name) > NAME_MAX_LENGTH:
        return f"Name cannot exceed {NAME_MAX_LENGTH} characters."
    return None


def check_email(email: str | None) -> str | None:
    if email is None or not email.strip():
        return "Email is required."
    if len(email) > EMAIL_MAX_LENGTH:
        return f"Email cannot exceed {EMAIL_MAX_LENGTH} characters."
    if not is_valid_email(email):
        return "Email format is invalid."
    return None


def check_role(role: str | None) -> str | None:
    if role is not None and len(role) > ROLE_MAX_LENGTH:
        return f"Role cannot exceed {ROLE_MAX_LENGTH} characters."
    return None


def is_valid_email(email: str) -> bool:
    """Syntax-only address check."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_team_member_create(
    name: str | None, email: str | None, role: str | None = None,
) -> None:
    raise_field_errors("Team member validation failed.", {
        "Name": check_name(name),
        "Email": check_email(email),
        "Role": check_role(role),
    })


def validate_team_member_update(
    name: str | None = None,
    email: str | None = None,
    role: str | None = None,
) -> None:
    """Validate the fields present in a partial update."""
    checks: dict[str, str | None] = {}
    if name is not None:
        checks["Name"] = check_name(name)
    if email is not None:
        checks["Email"] = check_email(email)
    if role is not None:
        checks["Role"] = check_role(role)
    raise_field_errors("Team member validation failed.", checks)
