"""
Fixed vocabularies shared by models, services and API schemas.
"""

from enum import Enum


class UserRole(str, Enum):
    RECRUITER = "recruiter"
    CANDIDATE = "candidate"
    ADMIN = "admin"


class JobStatus(str, Enum):
    OPEN = "open"
    PAUSED = "paused"
    CLOSED = "closed"


class PipelineStage(str, Enum):
    """Hiring funnel position, used for both Candidate.stage and Application.status."""

    APPLIED = "applied"
    SCREENING = "screening"
    INTERVIEW = "interview"
    OFFER = "offer"
    HIRED = "hired"
    REJECTED = "rejected"


class InterviewStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


# Buckets reported by the pipeline view, in funnel order. Rejected is left out.
FORWARD_PIPELINE_STAGES = (
    PipelineStage.APPLIED,
    PipelineStage.SCREENING,
    PipelineStage.INTERVIEW,
    PipelineStage.OFFER,
    PipelineStage.HIRED,
)

RECRUITING_ROLES = (UserRole.RECRUITER, UserRole.ADMIN)
