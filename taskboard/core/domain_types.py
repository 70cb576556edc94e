"""Domain Types — field limits and the status / priority enums.

Invariants:
    - TaskStatus / TaskPriority travel the wire as raw integers
    - A raw integer becomes an enum ONLY through parse() (explicit membership check)

Design Decisions:
    - IntEnum over str Enum: the wire representation is the integer value,
      the human-readable label is exposed separately for responses
"""

from enum import IntEnum

from taskboard.core.errors import ValidationError


# ─── Field Limits ────────────────────────────────────────────────

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 2000
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
ROLE_MAX_LENGTH = 100

DEFAULT_DUE_DAYS = 7
MAX_PAGE_SIZE = 100


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(IntEnum):
    """Task workflow states. Any state may move to any other state."""
    TODO = 0
    IN_PROGRESS = 1
    REVIEW = 2
    COMPLETED = 3
    BLOCKED = 4

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @classmethod
    def is_valid(cls, raw: int) -> bool:
        return _is_member(cls, raw)

    @classmethod
    def parse(cls, raw: int) -> "TaskStatus":
        """Membership-checked conversion from the wire integer."""
        if not cls.is_valid(raw):
            raise ValidationError("Invalid task status.")
        return cls(raw)


class TaskPriority(IntEnum):
    """Task priority. Higher value sorts first in task listings."""
    LOW = 0
    MEDIUM = 1
    HIGH = 2
    CRITICAL = 3

    @property
    def label(self) -> str:
        return _PRIORITY_LABELS[self]

    @classmethod
    def is_valid(cls, raw: int) -> bool:
        return _is_member(cls, raw)

    @classmethod
    def parse(cls, raw: int) -> "TaskPriority":
        """Membership-checked conversion from the wire integer."""
        if not cls.is_valid(raw):
            raise ValidationError("Invalid task priority.")
        return cls(raw)


_STATUS_LABELS = {
    TaskStatus.TODO: "Todo",
    TaskStatus.IN_PROGRESS: "InProgress",
    TaskStatus.REVIEW: "Review",
    TaskStatus.COMPLETED: "Completed",
    TaskStatus.BLOCKED: "Blocked",
}

_PRIORITY_LABELS = {
    TaskPriority.LOW: "Low",
    TaskPriority.MEDIUM: "Medium",
    TaskPriority.HIGH: "High",
    TaskPriority.CRITICAL: "Critical",
}


def _is_member(enum_cls: type[IntEnum], raw: object) -> bool:
    """Plain ints only: bool is an int subclass but never a wire value."""
    if not isinstance(raw, int) or isinstance(raw, bool):
        return False
    try:
        enum_cls(raw)
    except ValueError:
        return False
    return True
