"""
Candidates API endpoints.

Recruiters and admins manage every candidate; a candidate user can read and
edit their own record but cannot move its stage.
"""

import json
import re
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import Field, field_validator

from app.api.schemas import CamelModel, CandidateRead, partial_changes
from app.api.v1.auth import EMAIL_PATTERN, get_current_user, require_roles
from app.core.constants import RECRUITING_ROLES, PipelineStage, UserRole
from app.models import Candidate, User
from app.services import DuplicateEntityError, RelatedEntityNotFound, create_candidate, update_candidate
from app.storage import Storage, get_storage

router = APIRouter()


# ============== Pydantic Schemas ==============


def _parse_skills(v: Any) -> Any:
    """Accept a list, a JSON-encoded list, or a comma-separated string."""
    if not isinstance(v, str):
        return v
    try:
        parsed = json.loads(v)
    except json.JSONDecodeError:
        parsed = None
    if isinstance(parsed, list):
        return parsed
    return [skill.strip() for skill in v.split(",") if skill.strip()]


class CandidateCreate(CamelModel):
    """Schema for creating a candidate. ``resumeUrl`` is an already-uploaded file."""

    full_name: str = Field(min_length=1)
    email: str
    phone: Optional[str] = None
    resume_url: Optional[str] = None
    education: Optional[str] = None
    experience: Optional[str] = None
    skills: list[str] = []
    stage: PipelineStage = PipelineStage.APPLIED
    notes: Optional[str] = None
    user_id: Optional[int] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError("Invalid email format")
        return v.lower()

    @field_validator("skills", mode="before")
    @classmethod
    def parse_skills(cls, v: Any) -> Any:
        return _parse_skills(v) or []


class CandidateUpdate(CamelModel):
    """Schema for partial candidate updates."""

    full_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    phone: Optional[str] = None
    resume_url: Optional[str] = None
    education: Optional[str] = None
    experience: Optional[str] = None
    skills: Optional[list[str]] = None
    stage: Optional[PipelineStage] = None
    notes: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not re.match(EMAIL_PATTERN, v):
            raise ValueError("Invalid email format")
        return v.lower() if v else v

    @field_validator("skills", mode="before")
    @classmethod
    def parse_skills(cls, v: Any) -> Any:
        return _parse_skills(v)


# ============== Helper Functions ==============


def _is_recruiting(user: User) -> bool:
    return user.role in {role.value for role in RECRUITING_ROLES}


def _get_candidate_or_404(storage: Storage, candidate_id: int) -> Candidate:
    candidate = storage.get(Candidate, candidate_id)
    if not candidate:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Candidate not found",
        )
    return candidate


def _ensure_can_access(candidate: Candidate, user: User) -> None:
    if not _is_recruiting(user) and candidate.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. You can only access your own candidate profile.",
        )


# ============== API Endpoints ==============


@router.get("", response_model=list[CandidateRead])
async def list_candidates(
    stage: Optional[PipelineStage] = Query(default=None),
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_roles(*RECRUITING_ROLES)),
):
    """List candidates, optionally only those at one stage."""
    return storage.list_candidates(stage=stage.value if stage else None)


@router.get("/me", response_model=CandidateRead)
async def get_my_candidate_profile(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """Get the candidate record linked to the current user."""
    candidate = storage.get_candidate_by_user_id(current_user.id)
    if not candidate:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Candidate profile not found",
        )
    return candidate


@router.get("/{candidate_id}", response_model=CandidateRead)
async def get_candidate(
    candidate_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    candidate = _get_candidate_or_404(storage, candidate_id)
    _ensure_can_access(candidate, current_user)
    return candidate


@router.post("", response_model=CandidateRead, status_code=status.HTTP_201_CREATED)
async def post_candidate(
    candidate_data: CandidateCreate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """
    Create a candidate.

    Recruiters may set any stage and link any user who has no candidate
    record yet. A candidate user creates their own record, which always
    starts at ``applied``.
    """
    fields = candidate_data.model_dump()
    if not _is_recruiting(current_user):
        if current_user.role != UserRole.CANDIDATE.value:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Access denied.",
            )
        if storage.get_candidate_by_user_id(current_user.id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Candidate profile already exists",
            )
        fields["user_id"] = current_user.id
        fields["stage"] = PipelineStage.APPLIED.value

    try:
        return create_candidate(storage, fields, actor_id=current_user.id)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except RelatedEntityNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/{candidate_id}", response_model=CandidateRead)
async def patch_candidate(
    candidate_id: int,
    candidate_data: CandidateUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """
    Update candidate fields.

    A ``stage`` change is recorded as ``candidate_stage_changed`` and is
    limited to recruiters and admins. The candidate's applications keep
    their own status.
    """
    candidate = _get_candidate_or_404(storage, candidate_id)
    _ensure_can_access(candidate, current_user)

    changes = partial_changes(candidate_data, required={"full_name", "email", "stage"})
    if "stage" in changes and not _is_recruiting(current_user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Access denied. Only recruiters can change a candidate's stage.",
        )

    try:
        return update_candidate(storage, candidate_id, changes, actor_id=current_user.id)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
