"""
Activity Recorder.

Every mutation of interest appends one immutable ``Activity`` row. The
payload of each row is one of the typed variants below, discriminated by the
``type`` tag, and is stored with camelCase keys so the feed can be rendered
without further mapping.
"""

from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union
import logging

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel

from app.db.base import utcnow
from app.models import Activity, Application, Job, User
from app.storage.base import Storage

logger = logging.getLogger("activities")

UNKNOWN_USER = "Unknown User"
UNKNOWN_JOB = "Unknown Job"


# ============== Payload Variants ==============


class ActivityDetails(BaseModel):
    """Base for activity payloads."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobCreated(ActivityDetails):
    type: Literal["job_created"] = "job_created"
    job_id: int
    job_title: str


class JobUpdated(ActivityDetails):
    type: Literal["job_updated"] = "job_updated"
    job_id: int
    job_title: str
    changed_fields: list[str]
    old_status: Optional[str] = None
    new_status: Optional[str] = None


class CandidateCreated(ActivityDetails):
    type: Literal["candidate_created"] = "candidate_created"
    candidate_id: int
    candidate_name: str


class CandidateStageChanged(ActivityDetails):
    type: Literal["candidate_stage_changed"] = "candidate_stage_changed"
    candidate_id: int
    candidate_name: str
    old_stage: str
    new_stage: str


class ApplicationCreated(ActivityDetails):
    type: Literal["application_created"] = "application_created"
    application_id: int
    user_id: int
    user_name: str
    job_id: int
    job_title: str


class ApplicationStatusChanged(ActivityDetails):
    type: Literal["application_status_changed"] = "application_status_changed"
    application_id: int
    user_id: int
    user_name: str
    job_id: int
    job_title: str
    old_status: str
    new_status: str


class InterviewScheduled(ActivityDetails):
    type: Literal["interview_scheduled"] = "interview_scheduled"
    interview_id: int
    application_id: int
    user_id: Optional[int] = None
    user_name: str
    job_id: Optional[int] = None
    job_title: str
    scheduled_at: datetime


class InterviewStatusChanged(ActivityDetails):
    type: Literal["interview_status_changed"] = "interview_status_changed"
    interview_id: int
    user_id: Optional[int] = None
    user_name: str
    old_status: str
    new_status: str


class UserRegistered(ActivityDetails):
    type: Literal["user_registered"] = "user_registered"
    user_id: int
    username: str
    role: str


class UserDeleted(ActivityDetails):
    type: Literal["user_deleted"] = "user_deleted"
    user_id: int
    username: str
    role: str


ActivityPayload = Annotated[
    Union[
        JobCreated,
        JobUpdated,
        CandidateCreated,
        CandidateStageChanged,
        ApplicationCreated,
        ApplicationStatusChanged,
        InterviewScheduled,
        InterviewStatusChanged,
        UserRegistered,
        UserDeleted,
    ],
    Field(discriminator="type"),
]

_payload_adapter = TypeAdapter(ActivityPayload)

ACTIVITY_TYPES = (
    "job_created",
    "job_updated",
    "candidate_created",
    "candidate_stage_changed",
    "application_created",
    "application_status_changed",
    "interview_scheduled",
    "interview_status_changed",
    "user_registered",
    "user_deleted",
)


# ============== Recorder ==============


def record_activity(storage: Storage, actor_id: int, details: ActivityDetails) -> Activity:
    """
    Append an activity performed by ``actor_id``.

    Runs inside the caller's unit of work when there is one, so a failure
    here undoes the mutation being recorded.
    """
    payload = details.model_dump(mode="json", by_alias=True, exclude={"type"})
    activity = Activity(
        user_id=actor_id,
        type=details.type,
        details=payload,
        created_at=utcnow(),
    )
    storage.save(activity)
    logger.debug(f"Recorded {details.type} by user {actor_id}")
    return activity


def get_recent_activities(storage: Storage, limit: int) -> list[Activity]:
    """Return the ``limit`` most recent activities, newest first."""
    return storage.list_activities(limit)


def load_activity_details(activity: Activity) -> ActivityDetails:
    """Validate a stored activity row back into its typed payload."""
    data: dict[str, Any] = dict(activity.details or {})
    data["type"] = activity.type
    return _payload_adapter.validate_python(data)


def application_context(storage: Storage, application: Application) -> dict[str, Any]:
    """
    Applicant name and job title for an application, resolved now.

    Copied into payloads by value, so later renames do not rewrite history.
    """
    user = storage.get(User, application.user_id)
    job = storage.get(Job, application.job_id)
    return {
        "user_id": application.user_id,
        "user_name": user.full_name if user and user.full_name else UNKNOWN_USER,
        "job_id": application.job_id,
        "job_title": job.title if job else UNKNOWN_JOB,
    }
