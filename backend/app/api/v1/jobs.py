"""
Jobs API endpoints.

Listing and detail views are public (job search); posting and editing need
a recruiter or admin.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import Field

from app.api.schemas import CamelModel, JobRead, partial_changes
from app.api.v1.auth import require_roles
from app.core.config import settings
from app.core.constants import RECRUITING_ROLES, JobStatus
from app.models import Job, User
from app.services import create_job, update_job
from app.storage import Storage, get_storage

router = APIRouter()


# ============== Pydantic Schemas ==============


class JobCreate(CamelModel):
    """Schema for posting a job. The owner is always the caller."""

    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    location: str = Field(min_length=1)
    salary: Optional[str] = None
    requirements: Optional[str] = None
    status: JobStatus = JobStatus.OPEN


class JobUpdate(CamelModel):
    """Schema for partial job updates."""

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = Field(default=None, min_length=1)
    salary: Optional[str] = None
    requirements: Optional[str] = None
    status: Optional[JobStatus] = None


# ============== API Endpoints ==============


@router.get("", response_model=list[JobRead])
async def list_jobs(storage: Storage = Depends(get_storage)):
    """List every job posting."""
    return storage.list_jobs()


@router.get("/recent", response_model=list[JobRead])
async def list_recent_jobs(
    limit: int = Query(default=settings.RECENT_JOBS_LIMIT, ge=1, le=100),
    storage: Storage = Depends(get_storage),
):
    """Newest job postings first."""
    return storage.list_recent_jobs(limit)


@router.get("/{job_id}", response_model=JobRead)
async def get_job(job_id: int, storage: Storage = Depends(get_storage)):
    job = storage.get(Job, job_id)
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job not found",
        )
    return job


@router.post("", response_model=JobRead, status_code=status.HTTP_201_CREATED)
async def post_job(
    job_data: JobCreate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_roles(*RECRUITING_ROLES)),
):
    """Post a new job owned by the current recruiter."""
    return create_job(storage, job_data.model_dump(), actor_id=current_user.id)


@router.patch("/{job_id}", response_model=JobRead)
async def patch_job(
    job_id: int,
    job_data: JobUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_roles(*RECRUITING_ROLES)),
):
    """Update job fields, including opening, pausing or closing it."""
    changes = partial_changes(job_data, required={"title", "description", "location", "status"})
    job = update_job(storage, job_id, changes, actor_id=current_user.id)
    if not job:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Job not found",
        )
    return job
