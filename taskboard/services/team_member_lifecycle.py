"""Team Member Lifecycle — CRUD, activation state, and cascading effects on tasks.

Invariants:
    - Email is unique across members (exact, case-sensitive match)
    - deactivate() is the ONLY bulk-unassign path: every assigned, non-COMPLETED task
      loses its assignee and gets updated_at stamped, then the member goes inactive
    - update(is_active=False) toggles the flag directly, with NO cascade
    - delete() is blocked while any assigned task is not COMPLETED (no cascade on delete)

Design Decisions:
    - Calls the TaskStore directly: cascade and guard checks need the member's
      tasks at call time, not a second service round-trip
    - Cascade writes all go through the request's session, so they commit together
      with the member update or not at all
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from taskboard.core.enforce_team_member import (
    validate_team_member_create, validate_team_member_update,
)
from taskboard.core.errors import (
    InvalidOperationError, ResourceNotFoundError, ValidationError,
)
from taskboard.core.records import (
    AuditStamps, TeamMemberDetail, TeamMemberRecord,
)
from taskboard.core.repository_protocols import TaskStore, TeamMemberStore
from taskboard.services.task_lifecycle import utcnow

logger = logging.getLogger(__name__)

DUPLICATE_EMAIL_MESSAGE = "A team member with this email already exists."


class TeamMemberLifecycleService:
    """Orchestrates every team member operation exposed to the HTTP layer."""

    def __init__(
        self,
        members: TeamMemberStore,
        tasks: TaskStore,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.members = members
        self.tasks = tasks
        self.clock = clock

    # --- Reads ----------------------------------------------------------------

    async def get_by_id(self, member_id: int) -> TeamMemberRecord:
        return await self._get_or_404(member_id)

    async def get_detail(self, member_id: int) -> TeamMemberDetail:
        found = await self.members.get_with_incomplete_tasks(member_id)
        if found is None:
            raise ResourceNotFoundError("TeamMember", member_id)
        member, open_tasks = found
        return TeamMemberDetail(member=member, task_count=len(open_tasks))

    async def list(self) -> list[TeamMemberRecord]:
        return await self.members.list()

    async def list_active(self) -> list[TeamMemberRecord]:
        return await self.members.list_active()

    async def search(self, term: str | None) -> list[TeamMemberRecord]:
        """Case-insensitive substring match on name, email or role."""
        if term is None or not term.strip():
            raise ValidationError("Search term cannot be empty.")
        return await self.members.search_by_text(term)

    # --- Writes ---------------------------------------------------------------

    async def create(
        self, name: str, email: str, role: str | None = None,
    ) -> TeamMemberRecord:
        validate_team_member_create(name, email, role)
        await self._check_email_free(email)

        member = TeamMemberRecord(
            name=name, email=email, role=role, is_active=True,
            audit=AuditStamps(created_at=self.clock()),
        )
        created = await self.members.insert(member)
        logger.info(f"Team member created: {created.email}", extra={"member_id": created.id})
        return created

    async def update(
        self,
        member_id: int,
        *,
        name: str | None = None,
        email: str | None = None,
        role: str | None = None,
        is_active: bool | None = None,
    ) -> TeamMemberRecord:
        """Partial update: None means "leave unchanged". is_active never cascades."""
        member = await self._get_or_404(member_id)
        validate_team_member_update(name=name, email=email, role=role)
        if email is not None:
            await self._check_email_free(email, exclude_id=member_id)

        if name is not None:
            member.name = name
        if email is not None:
            member.email = email
        if role is not None:
            member.role = role
        if is_active is not None:
            member.is_active = is_active
        member.audit.touch(self.clock())

        updated = await self.members.update(member)
        logger.info("Team member updated", extra={"member_id": member_id})
        return updated

    async def deactivate(self, member_id: int) -> TeamMemberRecord:
        """Unassign the member's open tasks, then mark the member inactive."""
        member = await self._get_or_404(member_id)
        now = self.clock()

        assigned = await self.tasks.by_assignee(member_id)
        open_tasks = [task for task in assigned if not task.is_completed]
        for task in open_tasks:
            task.unassign()
            task.audit.touch(now)
            await self.tasks.update(task)

        member.is_active = False
        member.audit.touch(now)
        deactivated = await self.members.update(member)
        logger.info(
            "Team member deactivated",
            extra={"member_id": member_id, "count": len(open_tasks)},
        )
        return deactivated

    async def delete(self, member_id: int) -> None:
        await self._get_or_404(member_id)
        assigned = await self.tasks.by_assignee(member_id)
        if any(not task.is_completed for task in assigned):
            logger.warning(
                "Delete blocked: active tasks assigned",
                extra={"member_id": member_id},
            )
            raise InvalidOperationError(
                "Cannot delete a team member with active assigned tasks. "
                "Reassign or complete the tasks first.",
            )
        await self.members.delete(member_id)
        logger.info("Team member deleted", extra={"member_id": member_id})

    # --- Helpers --------------------------------------------------------------

    async def _get_or_404(self, member_id: int) -> TeamMemberRecord:
        member = await self.members.get_by_id(member_id)
        if member is None:
            raise ResourceNotFoundError("TeamMember", member_id)
        return member

    async def _check_email_free(
        self, email: str, exclude_id: int | None = None,
    ) -> None:
        existing = await self.members.get_by_email(email)
        if existing is not None and existing.id != exclude_id:
            raise ValidationError(
                DUPLICATE_EMAIL_MESSAGE, {"Email": [DUPLICATE_EMAIL_MESSAGE]},
            )
