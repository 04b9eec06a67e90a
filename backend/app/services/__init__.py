from app.services.activities import (
    get_recent_activities,
    load_activity_details,
    record_activity,
)
from app.services.transitions import (
    transition_application_status,
    transition_candidate_stage,
    transition_interview_status,
)
from app.services.statistics import calculate_hire_rate, get_dashboard_stats, get_pipeline_stats
from app.services.recruitment import (
    DuplicateEntityError,
    RelatedEntityNotFound,
    create_application,
    create_candidate,
    create_job,
    delete_user,
    register_user,
    schedule_interview,
    update_candidate,
    update_interview,
    update_job,
    update_profile,
)

__all__ = [
    "get_recent_activities",
    "load_activity_details",
    "record_activity",
    "transition_application_status",
    "transition_candidate_stage",
    "transition_interview_status",
    "calculate_hire_rate",
    "get_dashboard_stats",
    "get_pipeline_stats",
    "DuplicateEntityError",
    "RelatedEntityNotFound",
    "create_application",
    "create_candidate",
    "create_job",
    "delete_user",
    "register_user",
    "schedule_interview",
    "update_candidate",
    "update_interview",
    "update_job",
    "update_profile",
]
