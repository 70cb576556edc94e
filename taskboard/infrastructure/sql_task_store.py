"""SQL Task Store — TaskStore implementation over an AsyncSession.

Invariants:
    - Implements core/repository_protocols.TaskStore
    - Writes flush but never commit (the request owns the transaction)
    - Every list query orders by priority DESC, due_date ASC, id ASC
    - Assignee summary read via explicit outer join, never via lazy loading

Design Decisions:
    - Filtering, search, and pagination pushed into SQL: counts and slices
      come from the database, not from Python-side list slicing
    - LIKE patterns built with autoescape: '%' and '_' in a search term match literally
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Select, and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.domain_types import TaskPriority, TaskStatus
from taskboard.core.errors import ResourceNotFoundError
from taskboard.core.queries import TaskFilter
from taskboard.core.records import TaskRecord
from taskboard.infrastructure.row_mapping import apply_task, to_task_record
from taskboard.models.task import Task
from taskboard.models.team_member import TeamMember

TASK_ORDERING = (Task.priority.desc(), Task.due_date.asc(), Task.id.asc())


def task_conditions(task_filter: TaskFilter) -> list:
    """Translate a TaskFilter into AND-combined SQL predicates."""
    conditions = []
    if task_filter.status is not None:
        conditions.append(Task.status == int(task_filter.status))
    if task_filter.priority is not None:
        conditions.append(Task.priority == int(task_filter.priority))
    if task_filter.assignee_id is not None:
        conditions.append(Task.assigned_to_id == task_filter.assignee_id)
    return conditions


def select_tasks() -> Select:
    """Base query: every task with its (optional) assignee row."""
    return select(Task, TeamMember).outerjoin(
        TeamMember, Task.assigned_to_id == TeamMember.id,
    )


class SqlTaskStore:
    """Task persistence backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, task_id: int) -> TaskRecord | None:
        tasks = await self._fetch(select_tasks().where(Task.id == task_id))
        return tasks[0] if tasks else None

    async def list(self) -> list[TaskRecord]:
        return await self._fetch(select_tasks().order_by(*TASK_ORDERING))

    async def insert(self, task: TaskRecord) -> TaskRecord:
        row = apply_task(Task(), task)
        self.db.add(row)
        await self.db.flush()
        task.id = row.id
        return await self.get_by_id(row.id)

    async def update(self, task: TaskRecord) -> TaskRecord:
        row = await self.db.get(Task, task.id)
        if row is None:
            raise ResourceNotFoundError("Task", task.id)
        apply_task(row, task)
        await self.db.flush()
        return await self.get_by_id(row.id)

    async def delete(self, task_id: int) -> bool:
        row = await self.db.get(Task, task_id)
        if row is None:
            return False
        await self.db.delete(row)
        await self.db.flush()
        return True

    # --- Query helpers --------------------------------------------------------

    async def by_status(self, status: TaskStatus) -> list[TaskRecord]:
        return await self.filter(TaskFilter(status=status))

    async def by_assignee(self, member_id: int) -> list[TaskRecord]:
        return await self.filter(TaskFilter(assignee_id=member_id))

    async def by_priority(self, priority: TaskPriority) -> list[TaskRecord]:
        return await self.filter(TaskFilter(priority=priority))

    async def overdue(self, now: datetime) -> list[TaskRecord]:
        return await self._fetch(
            select_tasks()
            .where(Task.due_date < now)
            .where(Task.status != int(TaskStatus.COMPLETED))
            .order_by(*TASK_ORDERING)
        )

    async def search_by_text(self, term: str) -> list[TaskRecord]:
        needle = term.lower()
        return await self._fetch(
            select_tasks()
            .where(or_(
                func.lower(Task.title).contains(needle, autoescape=True),
                and_(
                    Task.description.is_not(None),
                    func.lower(Task.description).contains(needle, autoescape=True),
                ),
            ))
            .order_by(*TASK_ORDERING)
        )

    async def filter(self, task_filter: TaskFilter) -> list[TaskRecord]:
        return await self._fetch(
            select_tasks()
            .where(*task_conditions(task_filter))
            .order_by(*TASK_ORDERING)
        )

    async def paginate(
        self, task_filter: TaskFilter, offset: int, limit: int,
    ) -> tuple[list[TaskRecord], int]:
        conditions = task_conditions(task_filter)
        total = await self.db.scalar(
            select(func.count()).select_from(Task).where(*conditions),
        )
        items = await self._fetch(
            select_tasks()
            .where(*conditions)
            .order_by(*TASK_ORDERING)
            .offset(offset)
            .limit(limit)
        )
        return items, total or 0

    async def _fetch(self, query: Select) -> list[TaskRecord]:
        result = await self.db.execute(query)
        return [to_task_record(task, member) for task, member in result.all()]
