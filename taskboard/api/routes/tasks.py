"""Task Routes — HTTP surface of the task lifecycle.

Invariants:
    - Routes never contain business logic (delegate to TaskLifecycleService)
    - Mutating routes commit once, after the service call succeeds;
      a raised error leaves the request session uncommitted (nothing persisted)
    - Static paths (/all, /search, /overdue, /by-*) registered before /{task_id}

Design Decisions:
    - Query parameters are not range-constrained here: the service's ValidationError
      produces the same error envelope as every other business-rule failure
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.dependencies import get_task_service
from taskboard.config import get_settings
from taskboard.core.queries import TaskFilter
from taskboard.infrastructure.database import get_db
from taskboard.schemas.task import (
    PriorityUpdate, StatusUpdate, TaskCreate, TaskPageResponse,
    TaskResponse, TaskUpdate,
)
from taskboard.services.task_lifecycle import TaskLifecycleService

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])


@router.get("", response_model=TaskPageResponse)
async def list_tasks_paginated(
    status_filter: int | None = Query(None, alias="status"),
    priority: int | None = Query(None),
    assignee_id: int | None = Query(None),
    page_number: int = Query(1),
    page_size: int | None = Query(None),
    service: TaskLifecycleService = Depends(get_task_service),
):
    """Filtered tasks, one page at a time."""
    if page_size is None:
        page_size = get_settings().default_page_size
    task_filter = TaskFilter.from_raw(status_filter, priority, assignee_id)
    page = await service.paginate(page_number, page_size, task_filter)
    return TaskPageResponse.from_page(page)


@router.get("/all", response_model=list[TaskResponse])
async def list_tasks(
    status_filter: int | None = Query(None, alias="status"),
    priority: int | None = Query(None),
    assignee_id: int | None = Query(None),
    service: TaskLifecycleService = Depends(get_task_service),
):
    """Every task matching the filter, unpaginated."""
    task_filter = TaskFilter.from_raw(status_filter, priority, assignee_id)
    return [TaskResponse.from_record(t) for t in await service.list(task_filter)]


@router.get("/search", response_model=list[TaskResponse])
async def search_tasks(
    term: str = Query(""),
    service: TaskLifecycleService = Depends(get_task_service),
):
    """Search title and description."""
    return [TaskResponse.from_record(t) for t in await service.search(term)]


@router.get("/overdue", response_model=list[TaskResponse])
async def list_overdue_tasks(
    service: TaskLifecycleService = Depends(get_task_service),
):
    return [TaskResponse.from_record(t) for t in await service.list_overdue()]


@router.get("/by-status/{task_status}", response_model=list[TaskResponse])
async def list_tasks_by_status(
    task_status: int,
    service: TaskLifecycleService = Depends(get_task_service),
):
    tasks = await service.list_by_status(task_status)
    return [TaskResponse.from_record(t) for t in tasks]


@router.get("/by-priority/{priority}", response_model=list[TaskResponse])
async def list_tasks_by_priority(
    priority: int,
    service: TaskLifecycleService = Depends(get_task_service),
):
    tasks = await service.list_by_priority(priority)
    return [TaskResponse.from_record(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int, service: TaskLifecycleService = Depends(get_task_service),
):
    return TaskResponse.from_record(await service.get_by_id(task_id))


@router.post(
    "", response_model=TaskResponse, status_code=status.HTTP_201_CREATED,
)
async def create_task(
    body: TaskCreate,
    service: TaskLifecycleService = Depends(get_task_service),
    db: AsyncSession = Depends(get_db),
):
    """Create a task. Unassigned tasks default to due in 7 days."""
    task = await service.create(**body.model_dump())
    await db.commit()
    return TaskResponse.from_record(task)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    body: TaskUpdate,
    service: TaskLifecycleService = Depends(get_task_service),
    db: AsyncSession = Depends(get_db),
):
    """Partial update: omitted/null fields are left unchanged."""
    task = await service.update(task_id, **body.model_dump(exclude_none=True))
    await db.commit()
    return TaskResponse.from_record(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task_id: int,
    service: TaskLifecycleService = Depends(get_task_service),
    db: AsyncSession = Depends(get_db),
):
    await service.delete(task_id)
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{task_id}/assign/{member_id}", response_model=TaskResponse)
async def assign_task(
    task_id: int,
    member_id: int,
    service: TaskLifecycleService = Depends(get_task_service),
    db: AsyncSession = Depends(get_db),
):
    """Assign to an ACTIVE team member."""
    task = await service.assign(task_id, member_id)
    await db.commit()
    return TaskResponse.from_record(task)


@router.patch("/{task_id}/status", response_model=TaskResponse)
async def update_task_status(
    task_id: int,
    body: StatusUpdate,
    service: TaskLifecycleService = Depends(get_task_service),
    db: AsyncSession = Depends(get_db),
):
    """Status: 0=Todo, 1=InProgress, 2=Review, 3=Completed, 4=Blocked."""
    task = await service.set_status(task_id, body.status)
    await db.commit()
    return TaskResponse.from_record(task)


@router.patch("/{task_id}/priority", response_model=TaskResponse)
async def update_task_priority(
    task_id: int,
    body: PriorityUpdate,
    service: TaskLifecycleService = Depends(get_task_service),
    db: AsyncSession = Depends(get_db),
):
    """Priority: 0=Low, 1=Medium, 2=High, 3=Critical."""
    task = await service.set_priority(task_id, body.priority)
    await db.commit()
    return TaskResponse.from_record(task)
