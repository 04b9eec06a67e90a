"""
Interviews API endpoints.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import Field, field_validator

from app.api.schemas import CamelModel, InterviewRead, naive_utc, partial_changes
from app.api.v1.auth import get_current_user, require_roles
from app.core.config import settings
from app.core.constants import RECRUITING_ROLES, InterviewStatus
from app.db.base import utcnow
from app.models import Application, User
from app.services import RelatedEntityNotFound, schedule_interview, update_interview
from app.storage import Storage, get_storage

router = APIRouter()


# ============== Pydantic Schemas ==============


class InterviewCreate(CamelModel):
    """Schema for scheduling an interview. ``recruiterId`` defaults to the caller."""

    application_id: int
    recruiter_id: Optional[int] = None
    scheduled_at: datetime
    duration: int = Field(gt=0)  # minutes
    location: Optional[str] = None
    notes: Optional[str] = None
    status: InterviewStatus = InterviewStatus.SCHEDULED

    @field_validator("scheduled_at")
    @classmethod
    def normalize_scheduled_at(cls, v: datetime) -> datetime:
        return naive_utc(v)


class InterviewUpdate(CamelModel):
    """Schema for rescheduling or changing the outcome of an interview."""

    scheduled_at: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, gt=0)
    location: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[InterviewStatus] = None

    @field_validator("scheduled_at")
    @classmethod
    def normalize_scheduled_at(cls, v: Optional[datetime]) -> Optional[datetime]:
        return naive_utc(v)


# ============== API Endpoints ==============


@router.get("", response_model=list[InterviewRead])
async def list_interviews(
    application_id: Optional[int] = Query(default=None, alias="applicationId"),
    upcoming: bool = Query(default=False),
    limit: int = Query(default=settings.UPCOMING_INTERVIEWS_LIMIT, ge=1, le=100),
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """
    List interviews for one application, or the next upcoming ones.

    Upcoming means still scheduled and strictly in the future, soonest first.
    Candidates may only list interviews of their own applications; the
    upcoming list is for recruiters and admins.
    """
    recruiting = current_user.role in {role.value for role in RECRUITING_ROLES}

    if application_id is not None:
        if not recruiting:
            application = storage.get(Application, application_id)
            if not application or application.user_id != current_user.id:
                raise HTTPException(
                    status_code=status.HTTP_403_FORBIDDEN,
                    detail="Access denied. You can only view interviews for your own applications.",
                )
        return storage.list_interviews(application_id)
    if upcoming:
        if not recruiting:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied. Admin or recruiter role required.",
            )
        return storage.list_upcoming_interviews(utcnow(), limit)

    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Please provide a query parameter (applicationId or upcoming)",
    )


@router.post("", response_model=InterviewRead, status_code=status.HTTP_201_CREATED)
async def post_interview(
    interview_data: InterviewCreate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_roles(*RECRUITING_ROLES)),
):
    """Schedule an interview for an application."""
    try:
        return schedule_interview(storage, interview_data.model_dump(), actor_id=current_user.id)
    except RelatedEntityNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{interview_id}", response_model=InterviewRead)
async def patch_interview(
    interview_id: int,
    interview_data: InterviewUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_roles(*RECRUITING_ROLES)),
):
    """Reschedule an interview or mark it completed / cancelled."""
    changes = partial_changes(interview_data, required={"scheduled_at", "duration", "status"})
    interview = update_interview(storage, interview_id, changes, actor_id=current_user.id)
    if not interview:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Interview not found",
        )
    return interview
