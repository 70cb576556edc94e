"""Service test fixtures — SQL stores and lifecycle services over the test DB.

Invariants:
    - Both services share ONE session (same as a real request)
    - Both services share the FixedClock, so timestamps are predictable
"""

import pytest

from taskboard.infrastructure.sql_task_store import SqlTaskStore
from taskboard.infrastructure.sql_team_member_store import SqlTeamMemberStore
from taskboard.services.task_lifecycle import TaskLifecycleService
from taskboard.services.team_member_lifecycle import TeamMemberLifecycleService


@pytest.fixture
def task_store(test_db):
    return SqlTaskStore(test_db)


@pytest.fixture
def member_store(test_db):
    return SqlTeamMemberStore(test_db)


@pytest.fixture
def task_service(task_store, member_store, clock):
    return TaskLifecycleService(task_store, member_store, clock=clock)


@pytest.fixture
def member_service(member_store, task_store, clock):
    return TeamMemberLifecycleService(member_store, task_store, clock=clock)


@pytest.fixture
async def alice(member_service):
    return await member_service.create(
        name="Alice Moyo", email="alice@example.com", role="Backend Developer",
    )


@pytest.fixture
async def bob(member_service):
    return await member_service.create(
        name="Bob Nkosi", email="bob@example.com", role="QA Engineer",
    )
