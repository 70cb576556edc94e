"""Team Member Schemas — request/response models for /team-members endpoints."""

from pydantic import BaseModel

from taskboard.core.records import (
    MemberSummary, TeamMemberDetail, TeamMemberRecord,
)


class TeamMemberCreate(BaseModel):
    name: str
    email: str
    role: str | None = None


class TeamMemberUpdate(BaseModel):
    """Partial update — omitted or null fields are left unchanged."""
    name: str | None = None
    email: str | None = None
    role: str | None = None
    is_active: bool | None = None


class TeamMemberResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str | None = None
    is_active: bool

    @classmethod
    def from_record(cls, member: TeamMemberRecord | MemberSummary) -> "TeamMemberResponse":
        return cls(
            id=member.id, name=member.name, email=member.email,
            role=member.role, is_active=member.is_active,
        )


class TeamMemberDetailResponse(TeamMemberResponse):
    """Member plus the count of assigned tasks that are not Completed."""
    task_count: int

    @classmethod
    def from_detail(cls, detail: TeamMemberDetail) -> "TeamMemberDetailResponse":
        member = detail.member
        return cls(
            id=member.id, name=member.name, email=member.email,
            role=member.role, is_active=member.is_active,
            task_count=detail.task_count,
        )
