"""
Applications API endpoints.

Status changes go through the transition engine and are limited to
recruiters and admins.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.schemas import ApplicationRead, CamelModel
from app.api.v1.auth import get_current_user, require_roles
from app.core.constants import RECRUITING_ROLES, PipelineStage
from app.models import User
from app.services import RelatedEntityNotFound, create_application, transition_application_status
from app.storage import Storage, get_storage

router = APIRouter()


# ============== Pydantic Schemas ==============


class ApplicationCreate(CamelModel):
    """Schema for applying to a job."""

    job_id: int
    user_id: Optional[int] = None
    candidate_id: Optional[int] = None
    status: PipelineStage = PipelineStage.APPLIED
    cover_letter: Optional[str] = None


class ApplicationStatusUpdate(CamelModel):
    """Schema for moving an application through the pipeline."""

    status: PipelineStage


# ============== API Endpoints ==============


@router.get("", response_model=list[ApplicationRead])
async def list_applications(
    job_id: Optional[int] = Query(default=None, alias="jobId"),
    user_id: Optional[int] = Query(default=None, alias="userId"),
    candidate_id: Optional[int] = Query(default=None, alias="candidateId"),
    stage: Optional[PipelineStage] = Query(default=None),
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """
    List applications by exactly one filter: jobId, userId, candidateId or stage.

    Candidates may only list their own applications (``userId`` = self).
    """
    filters = {
        "job_id": job_id,
        "user_id": user_id,
        "candidate_id": candidate_id,
        "status": stage.value if stage else None,
    }
    given = {key: value for key, value in filters.items() if value is not None}
    if len(given) != 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please provide exactly one query parameter (jobId, userId, candidateId, or stage)",
        )

    if current_user.role not in {role.value for role in RECRUITING_ROLES}:
        if given.get("user_id") != current_user.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied. You can only list your own applications.",
            )

    return storage.list_applications(**given)


@router.post("", response_model=ApplicationRead, status_code=status.HTTP_201_CREATED)
async def post_application(
    application_data: ApplicationCreate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """
    Apply to a job.

    Candidates always apply as themselves at status ``applied``; recruiters
    may record an application on behalf of any user.
    """
    fields = application_data.model_dump()
    if current_user.role in {role.value for role in RECRUITING_ROLES}:
        if fields["user_id"] is None:
            fields["user_id"] = current_user.id
    else:
        fields["user_id"] = current_user.id
        fields["candidate_id"] = None
        fields["status"] = PipelineStage.APPLIED.value

    try:
        return create_application(storage, fields, actor_id=current_user.id)
    except RelatedEntityNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{application_id}/status", response_model=ApplicationRead)
async def patch_application_status(
    application_id: int,
    status_data: ApplicationStatusUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_roles(*RECRUITING_ROLES)),
):
    """
    Move an application to a new pipeline status.

    The linked candidate's stage is not changed.
    """
    application = transition_application_status(
        storage,
        application_id,
        status_data.status,
        actor_id=current_user.id,
    )
    if not application:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Application not found",
        )
    return application
