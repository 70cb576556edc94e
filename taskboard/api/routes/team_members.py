"""Team Member Routes — HTTP surface of the team member lifecycle.

Invariants:
    - Routes never contain business logic (delegate to TeamMemberLifecycleService)
    - Mutating routes commit once, after the service call succeeds
    - GET /{member_id} returns the detail view (with task_count)
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import get_task_service, get_team_member_service
from taskboard.infrastructure.database import get_db
from taskboard.schemas.task import TaskResponse
from taskboard.schemas.team_member import (
    TeamMemberCreate, TeamMemberDetailResponse, TeamMemberResponse,
    TeamMemberUpdate,
)
from taskboard.services.task_lifecycle import TaskLifecycleService
from taskboard.services.team_member_lifecycle import TeamMemberLifecycleService

router = APIRouter(prefix="/api/v1/team-members", tags=["team-members"])


@router.get("", response_model=list[TeamMemberResponse])
async def list_team_members(
    service: TeamMemberLifecycleService = Depends(get_team_member_service),
):
    return [TeamMemberResponse.from_record(m) for m in await service.list()]


@router.get("/active", response_model=list[TeamMemberResponse])
async def list_active_team_members(
    service: TeamMemberLifecycleService = Depends(get_team_member_service),
):
    return [TeamMemberResponse.from_record(m) for m in await service.list_active()]


@router.get("/search", response_model=list[TeamMemberResponse])
async def search_team_members(
    term: str = Query(""),
    service: TeamMemberLifecycleService = Depends(get_team_member_service),
):
    """Search name, email and role."""
    return [TeamMemberResponse.from_record(m) for m in await service.search(term)]


@router.get("/{member_id}", response_model=TeamMemberDetailResponse)
async def get_team_member(
    member_id: int,
    service: TeamMemberLifecycleService = Depends(get_team_member_service),
):
    return TeamMemberDetailResponse.from_detail(await service.get_detail(member_id))


@router.get("/{member_id}/tasks", response_model=list[TaskResponse])
async def list_team_member_tasks(
    member_id: int,
    tasks: TaskLifecycleService = Depends(get_task_service),
):
    """Every task assigned to the member, completed ones included."""
    return [TaskResponse.from_record(t) for t in await tasks.list_by_assignee(member_id)]


@router.post(
    "", response_model=TeamMemberResponse, status_code=status.HTTP_201_CREATED,
)
async def create_team_member(
    body: TeamMemberCreate,
    service: TeamMemberLifecycleService = Depends(get_team_member_service),
    db: AsyncSession = Depends(get_db),
):
    member = await service.create(**body.model_dump())
    await db.commit()
    return TeamMemberResponse.from_record(member)


@router.put("/{member_id}", response_model=TeamMemberResponse)
async def update_team_member(
    member_id: int,
    body: TeamMemberUpdate,
    service: TeamMemberLifecycleService = Depends(get_team_member_service),
    db: AsyncSession = Depends(get_db),
):
    """Partial update. Setting is_active here does NOT unassign tasks."""
    member = await service.update(member_id, **body.model_dump(exclude_none=True))
    await db.commit()
    return TeamMemberResponse.from_record(member)


@router.patch(
    "/{member_id}/deactivate", status_code=status.HTTP_204_NO_CONTENT,
)
async def deactivate_team_member(
    member_id: int,
    service: TeamMemberLifecycleService = Depends(get_team_member_service),
    db: AsyncSession = Depends(get_db),
):
    """Mark inactive and unassign every task that is not Completed."""
    await service.deactivate(member_id)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_team_member(
    member_id: int,
    service: TeamMemberLifecycleService = Depends(get_team_member_service),
    db: AsyncSession = Depends(get_db),
):
    """Blocked while any assigned task is not Completed."""
    await service.delete(member_id)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
