"""
Dashboard API endpoints.

Headline numbers, pipeline counts and the recent activity feed for the
recruiter landing view. Every number is recomputed per request.
"""

import logging

from fastapi import APIRouter, Depends, Query

from app.api.schemas import ActivityRead, DashboardStatsRead, PipelineStatsRead
from app.api.v1.auth import require_roles
from app.core.config import settings
from app.core.constants import RECRUITING_ROLES
from app.models import User
from app.services import get_dashboard_stats, get_pipeline_stats, get_recent_activities
from app.storage import Storage, get_storage

logger = logging.getLogger("dashboard")

router = APIRouter()


@router.get("/dashboard/stats", response_model=DashboardStatsRead)
async def dashboard_stats(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_roles(*RECRUITING_ROLES)),
):
    """
    Get dashboard overview statistics.

    activeJobs, newCandidates (trailing NEW_CANDIDATE_WINDOW_DAYS),
    scheduledInterviews (future only) and hireRate (percent).
    """
    return get_dashboard_stats(storage)


@router.get("/pipeline/stats", response_model=PipelineStatsRead)
async def pipeline_stats(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_roles(*RECRUITING_ROLES)),
):
    """Applications per pipeline status; rejected applications are not counted."""
    return get_pipeline_stats(storage)


@router.get("/activities", response_model=list[ActivityRead])
async def recent_activities(
    limit: int = Query(default=settings.ACTIVITY_LIMIT, ge=1, le=100),
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(require_roles(*RECRUITING_ROLES)),
):
    """Most recent activities, newest first. Recruiters and admins only."""
    logger.debug(f"Fetching {limit} activities for user {current_user.id}")
    return get_recent_activities(storage, limit)
