"""Task Lifecycle — CRUD, transitions, assignment, filtering, search, pagination.

Invariants:
    - Validators run first (fail fast); no store write happens on a rejected request
    - assigned_to_id set through this service always references an existing member
    - completed_at is stamped on the FIRST entry into COMPLETED and never cleared
    - Every successful mutation stamps updated_at
    - Listings use the store's canonical ordering (priority DESC, due date ASC, id ASC)

Design Decisions:
    - Calls the TeamMemberStore directly (no indirection through the member service):
      assignment needs the member's is_active flag at call time
    - Status transitions are unrestricted, including leaving COMPLETED
    - The read-check-write in assign() is not guarded against a concurrent
      deactivate(); acceptable at small team scale, flagged rather than hardened
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from taskboard.core.domain_types import (
    DEFAULT_DUE_DAYS, TaskPriority, TaskStatus,
)
from taskboard.core.enforce_task import validate_task_create, validate_task_update
from taskboard.core.errors import (
    InvalidOperationError, ResourceNotFoundError, ValidationError,
)
from taskboard.core.queries import (
    Page, TaskFilter, check_page_bounds, page_offset,
)
from taskboard.core.records import AuditStamps, TaskRecord, TeamMemberRecord
from taskboard.core.repository_protocols import TaskStore, TeamMemberStore

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskLifecycleService:
    """Orchestrates every task operation exposed to the HTTP layer."""

    def __init__(
        self,
        tasks: TaskStore,
        members: TeamMemberStore,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.tasks = tasks
        self.members = members
        self.clock = clock

    # --- Reads ----------------------------------------------------------------

    async def get_by_id(self, task_id: int) -> TaskRecord:
        return await self._get_or_404(task_id)

    async def list(self, task_filter: TaskFilter | None = None) -> list[TaskRecord]:
        """Tasks matching every predicate of the filter."""
        task_filter = task_filter or TaskFilter()
        await self._check_filter_assignee(task_filter)
        return await self.tasks.filter(task_filter)

    async def paginate(
        self,
        page_number: int,
        page_size: int,
        task_filter: TaskFilter | None = None,
    ) -> Page[TaskRecord]:
        """One page of list(task_filter) plus the total match count."""
        check_page_bounds(page_number, page_size)
        task_filter = task_filter or TaskFilter()
        await self._check_filter_assignee(task_filter)
        items, total = await self.tasks.paginate(
            task_filter, page_offset(page_number, page_size), page_size,
        )
        return Page(
            items=items, total_count=total,
            page_number=page_number, page_size=page_size,
        )

    async def search(self, term: str | None) -> list[TaskRecord]:
        """Case-insensitive substring match on title or description."""
        if term is None or not term.strip():
            raise ValidationError("Search term cannot be empty.")
        return await self.tasks.search_by_text(term)

    async def list_by_status(self, status: int) -> list[TaskRecord]:
        return await self.tasks.by_status(TaskStatus.parse(status))

    async def list_by_priority(self, priority: int) -> list[TaskRecord]:
        return await self.tasks.by_priority(TaskPriority.parse(priority))

    async def list_by_assignee(self, member_id: int) -> list[TaskRecord]:
        await self._member_or_404(member_id)
        return await self.tasks.by_assignee(member_id)

    async def list_overdue(self) -> list[TaskRecord]:
        """Tasks past their due date that are not COMPLETED."""
        return await self.tasks.overdue(self.clock())

    # --- Writes ---------------------------------------------------------------

    async def create(
        self,
        title: str,
        description: str | None = None,
        priority: int = TaskPriority.MEDIUM,
        assigned_to_id: int | None = None,
        due_date: datetime | None = None,
    ) -> TaskRecord:
        validate_task_create(title, priority, description)
        if assigned_to_id is not None:
            await self._member_or_404(assigned_to_id)

        now = self.clock()
        task = TaskRecord(
            title=title,
            description=description,
            priority=TaskPriority(priority),
            assigned_to_id=assigned_to_id,
            due_date=due_date or now + timedelta(days=DEFAULT_DUE_DAYS),
            audit=AuditStamps(created_at=now),
        )
        created = await self.tasks.insert(task)
        logger.info(f"Task created: {created.title!r}", extra={"task_id": created.id})
        return created

    async def update(
        self,
        task_id: int,
        *,
        title: str | None = None,
        description: str | None = None,
        status: int | None = None,
        priority: int | None = None,
        assigned_to_id: int | None = None,
        due_date: datetime | None = None,
    ) -> TaskRecord:
        """Partial update: None means "leave unchanged"."""
        task = await self._get_or_404(task_id)
        validate_task_update(
            title=title, description=description, status=status, priority=priority,
        )
        if assigned_to_id is not None:
            await self._member_or_404(assigned_to_id)

        now = self.clock()
        if title is not None:
            task.title = title
        if description is not None:
            task.description = description
        if status is not None:
            task.change_status(TaskStatus(status), now)
        if priority is not None:
            task.priority = TaskPriority(priority)
        if assigned_to_id is not None:
            task.assigned_to_id = assigned_to_id
        if due_date is not None:
            task.due_date = due_date
        task.audit.touch(now)

        updated = await self.tasks.update(task)
        logger.info("Task updated", extra={"task_id": task_id})
        return updated

    async def delete(self, task_id: int) -> None:
        await self._get_or_404(task_id)
        await self.tasks.delete(task_id)
        logger.info("Task deleted", extra={"task_id": task_id})

    async def assign(self, task_id: int, member_id: int) -> TaskRecord:
        task = await self._get_or_404(task_id)
        member = await self._member_or_404(member_id)
        if not member.is_active:
            logger.warning(
                "Assignment to inactive member rejected",
                extra={"task_id": task_id, "member_id": member_id},
            )
            raise InvalidOperationError(
                "Cannot assign task to an inactive team member.",
            )

        task.assigned_to_id = member.id
        task.audit.touch(self.clock())
        assigned = await self.tasks.update(task)
        logger.info(
            "Task assigned", extra={"task_id": task_id, "member_id": member_id},
        )
        return assigned

    async def set_status(self, task_id: int, status: int) -> TaskRecord:
        new_status = TaskStatus.parse(status)
        task = await self._get_or_404(task_id)
        now = self.clock()
        task.change_status(new_status, now)
        task.audit.touch(now)
        logger.info(
            f"Task status -> {new_status.label}", extra={"task_id": task_id},
        )
        return await self.tasks.update(task)

    async def set_priority(self, task_id: int, priority: int) -> TaskRecord:
        new_priority = TaskPriority.parse(priority)
        task = await self._get_or_404(task_id)
        task.priority = new_priority
        task.audit.touch(self.clock())
        logger.info(
            f"Task priority -> {new_priority.label}", extra={"task_id": task_id},
        )
        return await self.tasks.update(task)

    # --- Helpers --------------------------------------------------------------

    async def _get_or_404(self, task_id: int) -> TaskRecord:
        task = await self.tasks.get_by_id(task_id)
        if task is None:
            raise ResourceNotFoundError("Task", task_id)
        return task

    async def _member_or_404(self, member_id: int) -> TeamMemberRecord:
        member = await self.members.get_by_id(member_id)
        if member is None:
            raise ResourceNotFoundError("TeamMember", member_id)
        return member

    async def _check_filter_assignee(self, task_filter: TaskFilter) -> None:
        if task_filter.assignee_id is not None:
            await self._member_or_404(task_filter.assignee_id)
