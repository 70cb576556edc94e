"""Task Field Enforcement — validates task field constraints.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - check_* return an error message on violation, None on success
    - validate_* collect EVERY violation into a field -> [messages] map before raising
    - Partial updates validate only the fields that are present (not None)

Design Decisions:
    - Field keys are the capitalized wire names (Title, Priority, ...) so clients
      can map errors back to form fields without translation
"""

from taskboard.core.domain_types import (
    DESCRIPTION_MAX_LENGTH, TITLE_MAX_LENGTH, TaskPriority, TaskStatus,
)
from taskboard.core.errors import ValidationError


# --- Field checks -------------------------------------------------------------

def check_title(title: str | None) -> str | None:
    if title is None or not title.strip():
        return "Title is required."
    if len(title) > TITLE_MAX_LENGTH:
        return f"Title cannot exceed {TITLE_MAX_LENGTH} characters."
    return None


def check_description(description: str | None) -> str | None:
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        return f"Description cannot exceed {DESCRIPTION_MAX_LENGTH} characters."
    return None


def check_priority(priority: int) -> str | None:
    if not TaskPriority.is_valid(priority):
        return "Invalid priority value."
    return None


def check_status(status: int) -> str | None:
    if not TaskStatus.is_valid(status):
        return "Invalid status value."
    return None


# --- Composite validators -----------------------------------------------------

def validate_task_create(
    title: str | None, priority: int, description: str | None = None,
) -> None:
    """Validate a new task; raises ValidationError listing every bad field."""
    raise_field_errors("Task validation failed.", {
        "Title": check_title(title),
        "Description": check_description(description),
        "Priority": check_priority(priority),
    })


def validate_task_update(
    title: str | None = None,
    description: str | None = None,
    status: int | None = None,
    priority: int | None = None,
) -> None:
    """Validate the fields present in a partial update."""
    checks: dict[str, str | None] = {}
    if title is not None:
        checks["Title"] = check_title(title)
    if description is not None:
        checks["Description"] = check_description(description)
    if status is not None:
        checks["Status"] = check_status(status)
    if priority is not None:
        checks["Priority"] = check_priority(priority)
    raise_field_errors("Task validation failed.", checks)


# --- Helper -------------------------------------------------------------------

def raise_field_errors(message: str, checks: dict[str, str | None]) -> None:
    errors = {name: [error] for name, error in checks.items() if error}
    if errors:
        raise ValidationError(message, errors)
