"""Task ORM — persists a trackable unit of work.

Invariants:
    - id is an autoincrement integer primary key (store-assigned, immutable)
    - title is non-nullable, max 200 chars; description max 2000 chars
    - status / priority stored as their integer wire values
    - assigned_to_id is nullable; ON DELETE SET NULL keeps completed history from dangling

Design Decisions:
    - No ORM relationship to TeamMember: the assignee is read with an explicit
      outer join in the store, and every cascade rule lives in the lifecycle services
    - Indexes on status, priority, assigned_to_id, due_date: every list query filters
      or sorts on them
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.db.base import Base


class Task(Base):
    """Task row."""
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, index=True,
    )
    priority: Mapped[int] = mapped_column(
        Integer, nullable=False, default=1, index=True,
    )
    assigned_to_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("team_members.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    due_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
