"""
Stage/Status Transition Engine.

Applies pipeline moves to candidates, applications and interviews. Any value
of the vocabulary may follow any other (backward moves included); the engine
only guarantees that the write and its activity land together in one unit of
work, and that re-applying the current value records nothing.

Candidate.stage and Application.status are moved independently. Keeping a
candidate and their applications aligned is up to the caller.
"""

import logging
from typing import Optional, Union

from app.core.constants import InterviewStatus, PipelineStage
from app.db.base import utcnow
from app.models import Application, Candidate, Interview, User
from app.services.activities import (
    UNKNOWN_USER,
    ApplicationStatusChanged,
    CandidateStageChanged,
    InterviewStatusChanged,
    application_context,
    record_activity,
)
from app.storage.base import Storage

logger = logging.getLogger("transitions")


def transition_candidate_stage(
    storage: Storage,
    candidate_id: int,
    new_stage: Union[PipelineStage, str],
    actor_id: int,
) -> Optional[Candidate]:
    """
    Move a candidate to ``new_stage``.

    Returns the updated candidate, or None if it does not exist. Raises
    ValueError for a value outside the stage vocabulary.
    """
    new_stage = PipelineStage(new_stage).value

    with storage.unit_of_work():
        candidate = storage.get(Candidate, candidate_id)
        if not candidate:
            return None

        old_stage = candidate.stage
        candidate.stage = new_stage
        storage.save(candidate)

        if old_stage != new_stage:
            record_activity(
                storage,
                actor_id,
                CandidateStageChanged(
                    candidate_id=candidate.id,
                    candidate_name=candidate.full_name,
                    old_stage=old_stage,
                    new_stage=new_stage,
                ),
            )
            logger.info(f"Candidate {candidate_id} stage {old_stage} -> {new_stage} by user {actor_id}")

    return candidate


def transition_application_status(
    storage: Storage,
    application_id: int,
    new_status: Union[PipelineStage, str],
    actor_id: int,
) -> Optional[Application]:
    """
    Move an application to ``new_status``.

    The applicant name and job title in the recorded activity are looked up
    at transition time.
    """
    new_status = PipelineStage(new_status).value

    with storage.unit_of_work():
        application = storage.get(Application, application_id)
        if not application:
            return None

        old_status = application.status
        application.status = new_status
        application.updated_at = utcnow()
        storage.save(application)

        if old_status != new_status:
            record_activity(
                storage,
                actor_id,
                ApplicationStatusChanged(
                    application_id=application.id,
                    old_status=old_status,
                    new_status=new_status,
                    **application_context(storage, application),
                ),
            )
            logger.info(
                f"Application {application_id} status {old_status} -> {new_status} by user {actor_id}"
            )

    return application


def transition_interview_status(
    storage: Storage,
    interview_id: int,
    new_status: Union[InterviewStatus, str],
    actor_id: int,
) -> Optional[Interview]:
    """Mark an interview scheduled, completed or cancelled."""
    new_status = InterviewStatus(new_status).value

    with storage.unit_of_work():
        interview = storage.get(Interview, interview_id)
        if not interview:
            return None

        old_status = interview.status
        interview.status = new_status
        storage.save(interview)

        if old_status != new_status:
            application = storage.get(Application, interview.application_id)
            user = storage.get(User, application.user_id) if application else None
            record_activity(
                storage,
                actor_id,
                InterviewStatusChanged(
                    interview_id=interview.id,
                    user_id=user.id if user else None,
                    user_name=user.full_name if user else UNKNOWN_USER,
                    old_status=old_status,
                    new_status=new_status,
                ),
            )
            logger.info(f"Interview {interview_id} status {old_status} -> {new_status} by user {actor_id}")

    return interview
