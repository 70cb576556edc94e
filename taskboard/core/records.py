"""Domain Records — plain dataclasses the lifecycle services operate on.

Invariants:
    - Records are pure data: no IO, no ORM session attached
    - AuditStamps is embedded by composition in both records (no shared base class)
    - created_at is set once; updated_at stays None until the first mutation
    - TaskRecord.completed_at is stamped once, on first entry into COMPLETED, never cleared
    - TaskRecord.assignee is a read-only projection filled by the store, never persisted

Design Decisions:
    - Dataclasses over ORM rows in the core: services stay testable without a DB,
      stores own the row <-> record mapping (ADR: functional core, imperative shell)
    - assigned_to_id is a plain foreign-key value; cascade rules live in the services
"""

from dataclasses import dataclass, field
from datetime import datetime

from taskboard.core.domain_types import TaskPriority, TaskStatus


@dataclass
class AuditStamps:
    """Creation / modification timestamps shared by tasks and team members."""
    created_at: datetime
    updated_at: datetime | None = None

    def touch(self, now: datetime) -> None:
        self.updated_at = now


@dataclass(frozen=True)
class MemberSummary:
    """Assignee snapshot rendered inside task responses."""
    id: int
    name: str
    email: str
    role: str | None
    is_active: bool


@dataclass
class TaskRecord:
    """A trackable unit of work."""
    title: str
    due_date: datetime
    audit: AuditStamps
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to_id: int | None = None
    completed_at: datetime | None = None
    id: int | None = None
    assignee: MemberSummary | None = field(default=None, compare=False)

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def change_status(self, status: TaskStatus, now: datetime) -> None:
        """Any transition is allowed; entering COMPLETED stamps completed_at once."""
        self.status = status
        if status == TaskStatus.COMPLETED and self.completed_at is None:
            self.completed_at = now

    def unassign(self) -> None:
        self.assigned_to_id = None
        self.assignee = None


@dataclass
class TeamMemberRecord:
    """A person who may be assigned tasks."""
    name: str
    email: str
    audit: AuditStamps
    role: str | None = None
    is_active: bool = True
    id: int | None = None


@dataclass(frozen=True)
class TeamMemberDetail:
    """A member plus the number of assigned tasks that are not COMPLETED."""
    member: TeamMemberRecord
    task_count: int
