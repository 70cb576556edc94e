"""Task lifecycle tests — service operations over the SQL stores.

Tests cover:
    - create: defaults, due date, assignee existence, validation before persistence
    - update: partial semantics, completed_at stamping, not-found ordering
    - assign: active/inactive members
    - set_status / set_priority: parsing and updated_at
    - list / paginate: conjunctive filtering, ordering, page arithmetic
    - search / overdue / per-dimension listings
"""

from datetime import timedelta

import pytest

from taskboard.core.domain_types import TaskPriority, TaskStatus
from taskboard.core.errors import (
    InvalidOperationError, ResourceNotFoundError, ValidationError,
)
from taskboard.core.queries import TaskFilter


# --- create -------------------------------------------------------------------

async def test_create_applies_defaults(task_service, clock):
    task = await task_service.create(title="Write docs")

    assert task.id is not None
    assert task.status == TaskStatus.TODO
    assert task.priority == TaskPriority.MEDIUM
    assert task.due_date == clock.now + timedelta(days=7)
    assert task.audit.created_at == clock.now
    assert task.audit.updated_at is None
    assert task.completed_at is None
    assert task.assignee is None


async def test_create_keeps_explicit_due_date(task_service, clock):
    due = clock.now + timedelta(days=2)
    task = await task_service.create(title="Soon", due_date=due)
    assert task.due_date == due


async def test_create_with_assignee_projects_summary(task_service, alice):
    task = await task_service.create(title="Review PR", assigned_to_id=alice.id)
    assert task.assigned_to_id == alice.id
    assert task.assignee.name == "Alice Moyo"
    assert task.assignee.email == "alice@example.com"


async def test_create_with_unknown_assignee_is_not_found(task_service):
    with pytest.raises(ResourceNotFoundError):
        await task_service.create(title="Orphan", assigned_to_id=999)
    assert await task_service.list() == []


async def test_create_with_empty_title_persists_nothing(task_service):
    with pytest.raises(ValidationError) as exc_info:
        await task_service.create(title="")
    assert "Title" in exc_info.value.errors
    assert await task_service.list() == []


async def test_create_rejects_unknown_priority(task_service):
    with pytest.raises(ValidationError) as exc_info:
        await task_service.create(title="Bad", priority=9)
    assert exc_info.value.errors == {"Priority": ["Invalid priority value."]}


# --- update -------------------------------------------------------------------

async def test_update_changes_only_given_fields(task_service, clock):
    task = await task_service.create(
        title="Draft", description="first pass", priority=TaskPriority.LOW,
    )
    clock.advance(hours=1)

    updated = await task_service.update(task.id, title="Final")

    assert updated.title == "Final"
    assert updated.description == "first pass"
    assert updated.priority == TaskPriority.LOW
    assert updated.audit.updated_at == clock.now


async def test_update_to_completed_stamps_completed_at(task_service, clock):
    task = await task_service.create(title="Finish")
    done_at = clock.advance(hours=3)

    updated = await task_service.update(task.id, status=TaskStatus.COMPLETED)

    assert updated.status == TaskStatus.COMPLETED
    assert updated.completed_at == done_at


async def test_update_unknown_task_is_not_found_before_validation(task_service):
    with pytest.raises(ResourceNotFoundError):
        await task_service.update(404, title="")


async def test_update_rejects_unknown_assignee(task_service):
    task = await task_service.create(title="Keep")
    with pytest.raises(ResourceNotFoundError):
        await task_service.update(task.id, assigned_to_id=77)
    assert (await task_service.get_by_id(task.id)).assigned_to_id is None


# --- delete -------------------------------------------------------------------

async def test_delete_removes_task(task_service):
    task = await task_service.create(title="Temp")
    await task_service.delete(task.id)
    with pytest.raises(ResourceNotFoundError):
        await task_service.get_by_id(task.id)


async def test_delete_unknown_task_is_not_found(task_service):
    with pytest.raises(ResourceNotFoundError):
        await task_service.delete(12345)


# --- assign -------------------------------------------------------------------

async def test_assign_to_active_member(task_service, alice, clock):
    task = await task_service.create(title="Ship")
    clock.advance(minutes=10)

    assigned = await task_service.assign(task.id, alice.id)

    assert assigned.assigned_to_id == alice.id
    assert assigned.assignee.id == alice.id
    assert assigned.audit.updated_at == clock.now


async def test_assign_to_inactive_member_is_rejected(task_service, member_service, alice, bob):
    task = await task_service.create(title="Ship", assigned_to_id=bob.id)
    await member_service.update(alice.id, is_active=False)

    with pytest.raises(InvalidOperationError, match="inactive"):
        await task_service.assign(task.id, alice.id)

    unchanged = await task_service.get_by_id(task.id)
    assert unchanged.assigned_to_id == bob.id
    assert unchanged.audit.updated_at is None


async def test_assign_unknown_member_is_not_found(task_service):
    task = await task_service.create(title="Ship")
    with pytest.raises(ResourceNotFoundError):
        await task_service.assign(task.id, 5)


async def test_assign_unknown_task_is_not_found(task_service, alice):
    with pytest.raises(ResourceNotFoundError):
        await task_service.assign(5, alice.id)


# --- set_status / set_priority ------------------------------------------------

async def test_completed_at_set_once_across_transitions(task_service, clock):
    task = await task_service.create(title="Cycle")
    first_done = clock.advance(hours=1)
    await task_service.set_status(task.id, TaskStatus.COMPLETED)
    clock.advance(hours=1)
    await task_service.set_status(task.id, TaskStatus.IN_PROGRESS)
    clock.advance(hours=1)
    again = await task_service.set_status(task.id, TaskStatus.COMPLETED)

    assert again.status == TaskStatus.COMPLETED
    assert again.completed_at == first_done
    assert again.audit.updated_at == clock.now


async def test_set_status_rejects_unknown_value(task_service):
    task = await task_service.create(title="Cycle")
    with pytest.raises(ValidationError):
        await task_service.set_status(task.id, 5)
    assert (await task_service.get_by_id(task.id)).status == TaskStatus.TODO


async def test_set_priority(task_service, clock):
    task = await task_service.create(title="Escalate")
    clock.advance(minutes=1)
    updated = await task_service.set_priority(task.id, TaskPriority.CRITICAL)
    assert updated.priority == TaskPriority.CRITICAL
    assert updated.audit.updated_at == clock.now


async def test_set_priority_on_missing_task(task_service):
    with pytest.raises(ResourceNotFoundError):
        await task_service.set_priority(99, TaskPriority.HIGH)


# --- list / filter ------------------------------------------------------------

async def test_list_orders_by_priority_then_due_date(task_service, clock):
    base = clock.now
    low = await task_service.create(title="low", priority=0, due_date=base + timedelta(days=1))
    late_high = await task_service.create(title="late high", priority=2, due_date=base + timedelta(days=5))
    early_high = await task_service.create(title="early high", priority=2, due_date=base + timedelta(days=2))
    critical = await task_service.create(title="critical", priority=3, due_date=base + timedelta(days=9))

    ordered = await task_service.list()

    assert [t.id for t in ordered] == [critical.id, early_high.id, late_high.id, low.id]


async def test_equal_keys_keep_insertion_order(task_service, clock):
    due = clock.now + timedelta(days=1)
    first = await task_service.create(title="a", due_date=due)
    second = await task_service.create(title="b", due_date=due)
    assert [t.id for t in await task_service.list()] == [first.id, second.id]


async def test_filter_is_conjunctive(task_service, alice, bob):
    match = await task_service.create(title="match", priority=2, assigned_to_id=alice.id)
    await task_service.set_status(match.id, TaskStatus.IN_PROGRESS)
    await task_service.create(title="wrong member", priority=2, assigned_to_id=bob.id)
    await task_service.create(title="wrong status", priority=2, assigned_to_id=alice.id)
    other = await task_service.create(title="wrong priority", priority=1, assigned_to_id=alice.id)
    await task_service.set_status(other.id, TaskStatus.IN_PROGRESS)

    found = await task_service.list(TaskFilter(
        status=TaskStatus.IN_PROGRESS, priority=TaskPriority.HIGH, assignee_id=alice.id,
    ))

    assert [t.id for t in found] == [match.id]


async def test_filter_by_unknown_assignee_is_not_found(task_service):
    with pytest.raises(ResourceNotFoundError):
        await task_service.list(TaskFilter(assignee_id=31))


async def test_list_by_status_and_priority(task_service):
    a = await task_service.create(title="a", priority=3)
    await task_service.create(title="b", priority=0)
    await task_service.set_status(a.id, TaskStatus.BLOCKED)

    assert [t.id for t in await task_service.list_by_status(TaskStatus.BLOCKED)] == [a.id]
    assert [t.id for t in await task_service.list_by_priority(3)] == [a.id]
    with pytest.raises(ValidationError):
        await task_service.list_by_status(8)


async def test_list_by_assignee(task_service, alice, bob):
    mine = await task_service.create(title="mine", assigned_to_id=alice.id)
    await task_service.create(title="theirs", assigned_to_id=bob.id)
    assert [t.id for t in await task_service.list_by_assignee(alice.id)] == [mine.id]
    with pytest.raises(ResourceNotFoundError):
        await task_service.list_by_assignee(404)


# --- paginate -----------------------------------------------------------------

async def _seed(task_service, clock, count):
    for i in range(count):
        await task_service.create(
            title=f"task {i:02d}", priority=i % 4,
            due_date=clock.now + timedelta(days=i % 5),
        )


async def test_last_page_is_partial(task_service, clock):
    await _seed(task_service, clock, 23)

    page = await task_service.paginate(3, 10)

    assert len(page.items) == 3
    assert page.total_count == 23
    assert page.total_pages == 3


async def test_pages_concatenate_to_full_listing(task_service, clock):
    await _seed(task_service, clock, 23)

    collected = []
    for number in (1, 2, 3):
        collected.extend((await task_service.paginate(number, 10)).items)

    assert [t.id for t in collected] == [t.id for t in await task_service.list()]


async def test_page_beyond_end_is_empty(task_service, clock):
    await _seed(task_service, clock, 4)
    page = await task_service.paginate(5, 10)
    assert page.items == []
    assert page.total_count == 4


async def test_paginate_counts_filtered_rows(task_service, clock):
    await _seed(task_service, clock, 12)
    page = await task_service.paginate(1, 2, TaskFilter(priority=TaskPriority.LOW))
    assert page.total_count == 3
    assert len(page.items) == 2
    assert all(t.priority == TaskPriority.LOW for t in page.items)


@pytest.mark.parametrize("page_number,page_size", [(0, 10), (1, 0), (1, 101)])
async def test_paginate_rejects_bad_bounds(task_service, page_number, page_size):
    with pytest.raises(ValidationError):
        await task_service.paginate(page_number, page_size)


# --- search / overdue ---------------------------------------------------------

async def test_search_matches_title_or_description_case_insensitively(task_service):
    by_title = await task_service.create(title="Deploy API")
    by_desc = await task_service.create(title="Other", description="call the api gateway")
    await task_service.create(title="Unrelated")

    found = await task_service.search("API")

    assert {t.id for t in found} == {by_title.id, by_desc.id}


async def test_search_treats_wildcards_literally(task_service):
    literal = await task_service.create(title="Raise to 100% coverage")
    await task_service.create(title="Raise to 1000 users")
    assert [t.id for t in await task_service.search("100%")] == [literal.id]


@pytest.mark.parametrize("term", ["", "   ", None])
async def test_search_rejects_blank_term(task_service, term):
    with pytest.raises(ValidationError, match="Search term cannot be empty"):
        await task_service.search(term)


async def test_overdue_excludes_completed_and_future(task_service, clock):
    past_open = await task_service.create(title="late", due_date=clock.now - timedelta(days=1))
    past_done = await task_service.create(title="done", due_date=clock.now - timedelta(days=1))
    await task_service.set_status(past_done.id, TaskStatus.COMPLETED)
    await task_service.create(title="future", due_date=clock.now + timedelta(days=1))

    assert [t.id for t in await task_service.list_overdue()] == [past_open.id]


async def test_task_becomes_overdue_as_clock_moves(task_service, clock):
    task = await task_service.create(title="default due")
    assert await task_service.list_overdue() == []
    clock.advance(days=8)
    assert [t.id for t in await task_service.list_overdue()] == [task.id]


async def test_paginate_with_unknown_assignee_is_not_found(task_service):
    with pytest.raises(ResourceNotFoundError):
        await task_service.paginate(1, 10, TaskFilter(assignee_id=404))
