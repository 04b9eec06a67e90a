"""
Response schemas shared across routers.

JSON uses camelCase keys; request bodies accept either camelCase or
snake_case.
"""

from datetime import datetime, timezone
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


def naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert an aware datetime to naive UTC; naive values are taken as UTC."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def partial_changes(payload: BaseModel, required: Iterable[str] = ()) -> dict[str, Any]:
    """
    Fields the client actually sent, snake_case.

    Explicit nulls are dropped for ``required`` columns, which cannot be
    cleared.
    """
    required = set(required)
    changes = payload.model_dump(exclude_unset=True)
    return {key: value for key, value in changes.items() if value is not None or key not in required}


class UserRead(CamelModel):
    id: int
    username: str
    email: str
    full_name: str
    role: str
    position: Optional[str] = None
    profile_image: Optional[str] = None
    created_at: Optional[datetime] = None


class JobRead(CamelModel):
    id: int
    title: str
    description: str
    location: str
    salary: Optional[str] = None
    requirements: Optional[str] = None
    status: str
    user_id: int
    created_at: datetime


class CandidateRead(CamelModel):
    id: int
    user_id: Optional[int] = None
    full_name: str
    email: str
    phone: Optional[str] = None
    resume_url: Optional[str] = None
    education: Optional[str] = None
    experience: Optional[str] = None
    skills: list[str] = []
    stage: str
    notes: Optional[str] = None
    created_at: datetime

    @field_validator("skills", mode="before")
    @classmethod
    def default_skills(cls, v: Any) -> Any:
        return v or []


class ApplicationRead(CamelModel):
    id: int
    job_id: int
    user_id: int
    candidate_id: Optional[int] = None
    status: str
    cover_letter: Optional[str] = None
    applied_at: datetime
    updated_at: datetime


class InterviewRead(CamelModel):
    id: int
    application_id: int
    recruiter_id: int
    scheduled_at: datetime
    duration: int
    location: Optional[str] = None
    notes: Optional[str] = None
    status: str


class ActivityRead(CamelModel):
    id: int
    user_id: int
    type: str
    details: dict[str, Any]
    created_at: datetime


class DashboardStatsRead(CamelModel):
    active_jobs: int
    new_candidates: int
    scheduled_interviews: int
    hire_rate: float


class PipelineStatsRead(CamelModel):
    applied: int
    screening: int
    interview: int
    offer: int
    hired: int
