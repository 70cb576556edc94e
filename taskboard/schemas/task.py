"""Task Schemas — request/response models for /tasks endpoints.

Invariants:
    - status / priority arrive as raw integers and are range-checked by the service
    - status / priority leave as labels ("InProgress", "Critical")
    - TaskPageResponse.total_pages derives from total_count, not from len(items)
"""

from datetime import datetime

from pydantic import BaseModel

from taskboard.core.domain_types import TaskPriority
from taskboard.core.queries import Page
from taskboard.core.records import TaskRecord
from taskboard.schemas.team_member import TeamMemberResponse


class TaskCreate(BaseModel):
    title: str
    description: str | None = None
    priority: int = int(TaskPriority.MEDIUM)
    assigned_to_id: int | None = None
    due_date: datetime | None = None


class TaskUpdate(BaseModel):
    """Partial update — omitted or null fields are left unchanged."""
    title: str | None = None
    description: str | None = None
    status: int | None = None
    priority: int | None = None
    assigned_to_id: int | None = None
    due_date: datetime | None = None


class StatusUpdate(BaseModel):
    status: int


class PriorityUpdate(BaseModel):
    priority: int


class TaskResponse(BaseModel):
    id: int
    title: str
    description: str | None = None
    status: str
    priority: str
    assigned_to_id: int | None = None
    assigned_to: TeamMemberResponse | None = None
    due_date: datetime
    created_at: datetime
    updated_at: datetime | None = None
    completed_at: datetime | None = None

    @classmethod
    def from_record(cls, task: TaskRecord) -> "TaskResponse":
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status.label,
            priority=task.priority.label,
            assigned_to_id=task.assigned_to_id,
            assigned_to=(
                TeamMemberResponse.from_record(task.assignee)
                if task.assignee else None
            ),
            due_date=task.due_date,
            created_at=task.audit.created_at,
            updated_at=task.audit.updated_at,
            completed_at=task.completed_at,
        )


class TaskPageResponse(BaseModel):
    items: list[TaskResponse]
    total_count: int
    page_number: int
    page_size: int
    total_pages: int

    @classmethod
    def from_page(cls, page: Page[TaskRecord]) -> "TaskPageResponse":
        return cls(
            items=[TaskResponse.from_record(task) for task in page.items],
            total_count=page.total_count,
            page_number=page.page_number,
            page_size=page.page_size,
            total_pages=page.total_pages,
        )
