"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Every list-returning task query uses the canonical ordering:
      priority descending, due date ascending, insertion order (id) ascending
    - Stores never commit: one request = one transaction, committed by the caller

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      the lifecycle services await them around the pure validators
    - No referential cascades in the store contract: unassign-on-deactivate and
      block-on-delete are lifecycle-service rules
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from taskboard.core.domain_types import TaskPriority, TaskStatus
from taskboard.core.queries import TaskFilter
from taskboard.core.records import TaskRecord, TeamMemberRecord


class TaskStore(Protocol):
    """Contract for task persistence — implemented by shell."""
    async def get_by_id(self, task_id: int) -> TaskRecord | None: ...
    async def list(self) -> list[TaskRecord]: ...
    async def insert(self, task: TaskRecord) -> TaskRecord: ...
    async def update(self, task: TaskRecord) -> TaskRecord: ...
    async def delete(self, task_id: int) -> bool: ...

    async def by_status(self, status: TaskStatus) -> list[TaskRecord]: ...
    async def by_assignee(self, member_id: int) -> list[TaskRecord]: ...
    async def by_priority(self, priority: TaskPriority) -> list[TaskRecord]: ...
    async def overdue(self, now: datetime) -> list[TaskRecord]: ...
    async def search_by_text(self, term: str) -> list[TaskRecord]: ...
    async def filter(self, task_filter: TaskFilter) -> list[TaskRecord]: ...
    async def paginate(
        self, task_filter: TaskFilter, offset: int, limit: int,
    ) -> tuple[list[TaskRecord], int]: ...


class TeamMemberStore(Protocol):
    """Contract for team member persistence — implemented by shell."""
    async def get_by_id(self, member_id: int) -> TeamMemberRecord | None: ...
    async def list(self) -> list[TeamMemberRecord]: ...
    async def insert(self, member: TeamMemberRecord) -> TeamMemberRecord: ...
    async def update(self, member: TeamMemberRecord) -> TeamMemberRecord: ...
    async def delete(self, member_id: int) -> bool: ...

    async def get_by_email(self, email: str) -> TeamMemberRecord | None: ...
    async def list_active(self) -> list[TeamMemberRecord]: ...
    async def search_by_text(self, term: str) -> list[TeamMemberRecord]: ...
    async def get_with_incomplete_tasks(
        self, member_id: int,
    ) -> tuple[TeamMemberRecord, list[TaskRecord]] | None: ...
