"""Task Queries — filter and pagination value types shared by services and stores.

Invariants:
    - TaskFilter is a conjunction: every non-None predicate must hold, None = no constraint
    - TaskFilter.from_raw() is the only path from wire integers to typed predicates
    - page_number >= 1 and 1 <= page_size <= MAX_PAGE_SIZE, else ValidationError
    - total_pages = ceil(total_count / page_size), independent of the slice returned
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from taskboard.core.domain_types import MAX_PAGE_SIZE, TaskPriority, TaskStatus
from taskboard.core.errors import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class TaskFilter:
    """Optional equality predicates over status, priority and assignee."""
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    assignee_id: int | None = None

    @classmethod
    def from_raw(
        cls,
        status: int | None = None,
        priority: int | None = None,
        assignee_id: int | None = None,
    ) -> "TaskFilter":
        return cls(
            status=TaskStatus.parse(status) if status is not None else None,
            priority=TaskPriority.parse(priority) if priority is not None else None,
            assignee_id=assignee_id,
        )


@dataclass
class Page(Generic[T]):
    """One slice of an ordered result plus the size of the whole result."""
    items: list[T] = field(default_factory=list)
    total_count: int = 0
    page_number: int = 1
    page_size: int = 10

    @property
    def total_pages(self) -> int:
        return total_pages(self.total_count, self.page_size)

    @property
    def offset(self) -> int:
        return page_offset(self.page_number, self.page_size)


def check_page_bounds(page_number: int, page_size: int) -> None:
    """Reject out-of-range pagination parameters."""
    if page_number < 1 or page_size < 1 or page_size > MAX_PAGE_SIZE:
        raise ValidationError("Invalid pagination parameters.")


def page_offset(page_number: int, page_size: int) -> int:
    return (page_number - 1) * page_size


def total_pages(total_count: int, page_size: int) -> int:
    return (total_count + page_size - 1) // page_size
