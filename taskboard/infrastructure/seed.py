"""Demo Seed — inserts a small starter team and task list into an empty database.

Invariants:
    - Runs only when BOTH tables are empty (never touches existing data)
    - Goes through the lifecycle services, so seeded rows obey every validation rule
    - Commits once; a failure leaves the database empty
"""

import logging
from datetime import timedelta

from taskboard.core.domain_types import TaskPriority, TaskStatus
from taskboard.infrastructure.database import DatabaseSessionManager
from taskboard.infrastructure.sql_task_store import SqlTaskStore
from taskboard.infrastructure.sql_team_member_store import SqlTeamMemberStore
from taskboard.services.task_lifecycle import TaskLifecycleService, utcnow
from taskboard.services.team_member_lifecycle import TeamMemberLifecycleService

logger = logging.getLogger(__name__)

_DEMO_MEMBERS = [
    {"name": "Siba Daki", "email": "siba.d@test.com", "role": "Senior Developer"},
    {"name": "Joe Doe", "email": "joe.d@email.com", "role": "Junior Developer"},
]

# (title, description, status, priority, member index, due in days)
_DEMO_TASKS = [
    ("Assessment", "Complete the assessment.",
     TaskStatus.COMPLETED, TaskPriority.HIGH, 0, 10),
    ("Testing", "API test.",
     TaskStatus.IN_PROGRESS, TaskPriority.CRITICAL, 0, 12),
    ("Submission", "Submit the assessment on completion.",
     TaskStatus.IN_PROGRESS, TaskPriority.HIGH, 1, 15),
]


async def seed_demo_data(manager: DatabaseSessionManager) -> bool:
    """Insert demo members and tasks. Returns False when data already exists."""
    async with manager.session() as db:
        task_store, member_store = SqlTaskStore(db), SqlTeamMemberStore(db)
        if await member_store.list() or await task_store.list():
            logger.info("Seed skipped: database already has data")
            return False

        members = TeamMemberLifecycleService(member_store, task_store)
        tasks = TaskLifecycleService(task_store, member_store)

        created = [await members.create(**data) for data in _DEMO_MEMBERS]
        now = utcnow()
        for title, description, status, priority, owner, days in _DEMO_TASKS:
            task = await tasks.create(
                title=title,
                description=description,
                priority=priority,
                assigned_to_id=created[owner].id,
                due_date=now + timedelta(days=days),
            )
            if status != TaskStatus.TODO:
                await tasks.set_status(task.id, status)

        await db.commit()
        logger.info(
            "Seeded demo data",
            extra={"count": len(_DEMO_MEMBERS) + len(_DEMO_TASKS)},
        )
        return True
