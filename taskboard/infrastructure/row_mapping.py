"""Row Mapping — converts ORM rows to core records and back.

Invariants:
    - Every datetime leaving the store is timezone-aware UTC
      (SQLite returns naive values; PostgreSQL returns aware ones)
    - Unknown integers in status/priority columns are a data fault, not a validation error
    - created_at is copied onto a row only when the row is new
"""

from datetime import datetime, timezone

from taskboard.core.domain_types import TaskPriority, TaskStatus
from taskboard.core.records import (
    AuditStamps, MemberSummary, TaskRecord, TeamMemberRecord,
)
from taskboard.models.task import Task
from taskboard.models.team_member import TeamMember


def as_utc(value: datetime | None) -> datetime | None:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_member_record(row: TeamMember) -> TeamMemberRecord:
    return TeamMemberRecord(
        id=row.id,
        name=row.name,
        email=row.email,
        role=row.role,
        is_active=row.is_active,
        audit=AuditStamps(
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        ),
    )


def to_member_summary(row: TeamMember | None) -> MemberSummary | None:
    if row is None:
        return None
    return MemberSummary(
        id=row.id, name=row.name, email=row.email,
        role=row.role, is_active=row.is_active,
    )


def to_task_record(row: Task, assignee: TeamMember | None = None) -> TaskRecord:
    return TaskRecord(
        id=row.id,
        title=row.title,
        description=row.description,
        status=TaskStatus(row.status),
        priority=TaskPriority(row.priority),
        assigned_to_id=row.assigned_to_id,
        due_date=as_utc(row.due_date),
        completed_at=as_utc(row.completed_at),
        audit=AuditStamps(
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        ),
        assignee=to_member_summary(assignee),
    )


def apply_task(row: Task, task: TaskRecord) -> Task:
    """Copy mutable task fields onto a row."""
    row.title = task.title
    row.description = task.description
    row.status = int(task.status)
    row.priority = int(task.priority)
    row.assigned_to_id = task.assigned_to_id
    row.due_date = task.due_date
    row.updated_at = task.audit.updated_at
    row.completed_at = task.completed_at
    if row.created_at is None:
        row.created_at = task.audit.created_at
    return row


def apply_member(row: TeamMember, member: TeamMemberRecord) -> TeamMember:
    """Copy mutable member fields onto a row."""
    row.name = member.name
    row.email = member.email
    row.role = member.role
    row.is_active = member.is_active
    row.updated_at = member.audit.updated_at
    if row.created_at is None:
        row.created_at = member.audit.created_at
    return row
