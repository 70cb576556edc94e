"""SQL Team Member Store — TeamMemberStore implementation over an AsyncSession.

Invariants:
    - Implements core/repository_protocols.TeamMemberStore
    - Writes flush but never commit (the request owns the transaction)
    - Listings ordered by name, then id
    - get_by_email is an exact, case-sensitive match
    - delete() clears assigned_to_id on the member's tasks before removing the row,
      so no task ever references a deleted (or later reused) member id
"""

from __future__ import annotations

from sqlalchemy import Select, and_, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.core.domain_types import TaskStatus
from taskboard.core.errors import ResourceNotFoundError
from taskboard.core.records import TaskRecord, TeamMemberRecord
from taskboard.infrastructure.row_mapping import (
    apply_member, to_member_record, to_task_record,
)
from taskboard.infrastructure.sql_task_store import TASK_ORDERING
from taskboard.models.task import Task
from taskboard.models.team_member import TeamMember

MEMBER_ORDERING = (TeamMember.name.asc(), TeamMember.id.asc())


class SqlTeamMemberStore:
    """Team member persistence backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, member_id: int) -> TeamMemberRecord | None:
        row = await self.db.get(TeamMember, member_id)
        return to_member_record(row) if row else None

    async def list(self) -> list[TeamMemberRecord]:
        return await self._fetch(select(TeamMember).order_by(*MEMBER_ORDERING))

    async def insert(self, member: TeamMemberRecord) -> TeamMemberRecord:
        row = apply_member(TeamMember(), member)
        self.db.add(row)
        await self.db.flush()
        member.id = row.id
        return to_member_record(row)

    async def update(self, member: TeamMemberRecord) -> TeamMemberRecord:
        row = await self.db.get(TeamMember, member.id)
        if row is None:
            raise ResourceNotFoundError("TeamMember", member.id)
        apply_member(row, member)
        await self.db.flush()
        return to_member_record(row)

    async def delete(self, member_id: int) -> bool:
        row = await self.db.get(TeamMember, member_id)
        if row is None:
            return False
        await self.db.execute(
            update(Task)
            .where(Task.assigned_to_id == member_id)
            .values(assigned_to_id=None)
        )
        await self.db.delete(row)
        await self.db.flush()
        return True

    # --- Query helpers --------------------------------------------------------

    async def get_by_email(self, email: str) -> TeamMemberRecord | None:
        row = await self.db.scalar(
            select(TeamMember).where(TeamMember.email == email),
        )
        return to_member_record(row) if row else None

    async def list_active(self) -> list[TeamMemberRecord]:
        return await self._fetch(
            select(TeamMember)
            .where(TeamMember.is_active.is_(True))
            .order_by(*MEMBER_ORDERING)
        )

    async def search_by_text(self, term: str) -> list[TeamMemberRecord]:
        needle = term.lower()
        return await self._fetch(
            select(TeamMember)
            .where(or_(
                func.lower(TeamMember.name).contains(needle, autoescape=True),
                func.lower(TeamMember.email).contains(needle, autoescape=True),
                and_(
                    TeamMember.role.is_not(None),
                    func.lower(TeamMember.role).contains(needle, autoescape=True),
                ),
            ))
            .order_by(*MEMBER_ORDERING)
        )

    async def get_with_incomplete_tasks(
        self, member_id: int,
    ) -> tuple[TeamMemberRecord, list[TaskRecord]] | None:
        """Member plus every assigned task whose status is not COMPLETED."""
        row = await self.db.get(TeamMember, member_id)
        if row is None:
            return None
        result = await self.db.scalars(
            select(Task)
            .where(Task.assigned_to_id == member_id)
            .where(Task.status != int(TaskStatus.COMPLETED))
            .order_by(*TASK_ORDERING)
        )
        tasks = [to_task_record(task, row) for task in result.all()]
        return to_member_record(row), tasks

    async def _fetch(self, query: Select) -> list[TeamMemberRecord]:
        result = await self.db.scalars(query)
        return [to_member_record(row) for row in result.all()]
