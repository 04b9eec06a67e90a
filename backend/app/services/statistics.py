"""
Aggregate Statistics Engine.

Both views are recomputed from current entity state on every call.
"""

from datetime import datetime, timedelta
from typing import Optional

from app.core.config import settings
from app.core.constants import FORWARD_PIPELINE_STAGES, InterviewStatus, JobStatus, PipelineStage
from app.db.base import utcnow
from app.storage.base import Storage


def calculate_hire_rate(hired: int, total: int) -> float:
    """Percentage of applications hired, one decimal place; 0 with no applications."""
    if total <= 0:
        return 0
    return round(hired / total * 100, 1)


def get_pipeline_stats(storage: Storage) -> dict[str, int]:
    """
    Count applications per forward pipeline status.

    A plain partition, not a cumulative funnel. Rejected applications fall
    in no bucket.
    """
    counts = storage.count_applications_by_status()
    return {stage.value: counts.get(stage.value, 0) for stage in FORWARD_PIPELINE_STAGES}


def get_dashboard_stats(
    storage: Storage,
    now: Optional[datetime] = None,
    window_days: Optional[int] = None,
) -> dict[str, float]:
    """
    Headline numbers for the landing dashboard.

    - activeJobs: jobs currently open
    - newCandidates: candidates created in the trailing window
      (``NEW_CANDIDATE_WINDOW_DAYS`` unless overridden)
    - scheduledInterviews: scheduled interviews still in the future
    - hireRate: hired applications as a percentage of all applications
    """
    now = now or utcnow()
    if window_days is None:
        window_days = settings.NEW_CANDIDATE_WINDOW_DAYS

    total_applications = storage.count_applications()
    hired_applications = storage.count_applications(status=PipelineStage.HIRED.value)

    return {
        "activeJobs": storage.count_jobs(status=JobStatus.OPEN.value),
        "newCandidates": storage.count_candidates_created_since(now - timedelta(days=window_days)),
        "scheduledInterviews": storage.count_interviews(
            status=InterviewStatus.SCHEDULED.value,
            scheduled_after=now,
        ),
        "hireRate": calculate_hire_rate(hired_applications, total_applications),
    }
