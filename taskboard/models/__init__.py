"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - ORM rows never leave infrastructure/: stores map them to core records

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata knows every table before
      create_all() or alembic autogenerate runs
"""

from taskboard.models.team_member import TeamMember  # noqa: F401
from taskboard.models.task import Task  # noqa: F401
