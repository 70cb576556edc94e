"""Service Dependencies — FastAPI providers that wire stores into lifecycle services.

Invariants:
    - One AsyncSession per request, shared by both stores and both services
    - Services are rebuilt per request (they hold the request's session)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.infrastructure.database import get_db
from taskboard.infrastructure.sql_task_store import SqlTaskStore
from taskboard.infrastructure.sql_team_member_store import SqlTeamMemberStore
from taskboard.services.task_lifecycle import TaskLifecycleService
from taskboard.services.team_member_lifecycle import TeamMemberLifecycleService


def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskLifecycleService:
    return TaskLifecycleService(SqlTaskStore(db), SqlTeamMemberStore(db))


def get_team_member_service(
    db: AsyncSession = Depends(get_db),
) -> TeamMemberLifecycleService:
    return TeamMemberLifecycleService(SqlTeamMemberStore(db), SqlTaskStore(db))
