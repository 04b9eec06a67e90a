"""
Recruitment mutation flows.

Each public function is one unit of work: the entity writes and the activity
they produce commit together. All of them take the id of the acting user
explicitly; nothing falls back to a default account.
"""

import logging
from typing import Any, Optional

from app.core.constants import InterviewStatus, JobStatus, PipelineStage, UserRole
from app.core.security import get_password_hash
from app.db.base import utcnow
from app.models import Application, Candidate, Interview, Job, User
from app.services.activities import (
    ApplicationCreated,
    CandidateCreated,
    InterviewScheduled,
    JobCreated,
    JobUpdated,
    UserDeleted,
    UserRegistered,
    application_context,
    record_activity,
)
from app.services.transitions import transition_candidate_stage, transition_interview_status
from app.storage.base import Storage

logger = logging.getLogger("recruitment")


class DuplicateEntityError(ValueError):
    """A unique field (username, email) is already taken."""


class RelatedEntityNotFound(LookupError):
    """A referenced entity (job, user, application) does not exist."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


def _apply_changes(entity: Any, changes: dict[str, Any]) -> list[str]:
    """Set changed attributes on ``entity`` and return their names."""
    changed = []
    for field, value in changes.items():
        if getattr(entity, field) != value:
            setattr(entity, field, value)
            changed.append(field)
    return changed


# ============== Users ==============


def register_user(
    storage: Storage,
    *,
    username: str,
    email: str,
    password: str,
    full_name: str,
    role: str = UserRole.CANDIDATE.value,
    position: Optional[str] = None,
    profile_image: Optional[str] = None,
) -> User:
    """
    Create a user account.

    Candidate accounts also get a candidate record: an existing record with
    the same email is linked to the new user, otherwise a fresh one is
    created at stage ``applied``.
    """
    role = UserRole(role).value

    with storage.unit_of_work():
        if storage.get_user_by_username(username):
            raise DuplicateEntityError("Username already taken")
        if storage.get_user_by_email(email):
            raise DuplicateEntityError("Email already registered")

        user = storage.save(
            User(
                username=username,
                email=email,
                hashed_password=get_password_hash(password),
                full_name=full_name,
                role=role,
                position=position,
                profile_image=profile_image,
                created_at=utcnow(),
            )
        )
        record_activity(
            storage,
            user.id,
            UserRegistered(user_id=user.id, username=user.username, role=user.role),
        )

        if role == UserRole.CANDIDATE.value:
            candidate = storage.get_candidate_by_email(email)
            if candidate and candidate.user_id is None:
                candidate.user_id = user.id
                storage.save(candidate)
            elif not candidate:
                candidate = storage.save(
                    Candidate(
                        user_id=user.id,
                        full_name=full_name,
                        email=email,
                        skills=[],
                        stage=PipelineStage.APPLIED.value,
                        created_at=utcnow(),
                    )
                )
                record_activity(
                    storage,
                    user.id,
                    CandidateCreated(candidate_id=candidate.id, candidate_name=candidate.full_name),
                )

    logger.info(f"Registered {role} account {user.username} (id={user.id})")
    return user


def update_profile(storage: Storage, user: User, changes: dict[str, Any]) -> User:
    """Update profile fields (name, email, position, image) of a user."""
    with storage.unit_of_work():
        new_email = changes.get("email")
        if new_email and new_email != user.email:
            existing = storage.get_user_by_email(new_email)
            if existing and existing.id != user.id:
                raise DuplicateEntityError("Email already registered")
        if _apply_changes(user, changes):
            storage.save(user)
    return user


def delete_user(storage: Storage, user_id: int, actor_id: int) -> bool:
    """
    Delete a user and everything they own, atomically.

    Returns False when the user does not exist.
    """
    with storage.unit_of_work():
        user = storage.get(User, user_id)
        if not user:
            return False
        username, role = user.username, user.role

        storage.delete_user_cascade(user_id)
        record_activity(
            storage,
            actor_id,
            UserDeleted(user_id=user_id, username=username, role=role),
        )

    logger.info(f"User {user_id} ({username}) deleted by user {actor_id}")
    return True


# ============== Jobs ==============


def create_job(storage: Storage, fields: dict[str, Any], actor_id: int) -> Job:
    """Post a job owned by ``actor_id``."""
    with storage.unit_of_work():
        job = storage.save(
            Job(
                title=fields["title"],
                description=fields["description"],
                location=fields["location"],
                salary=fields.get("salary"),
                requirements=fields.get("requirements"),
                status=JobStatus(fields.get("status") or JobStatus.OPEN).value,
                user_id=actor_id,
                created_at=utcnow(),
            )
        )
        record_activity(storage, actor_id, JobCreated(job_id=job.id, job_title=job.title))
    return job


def update_job(
    storage: Storage,
    job_id: int,
    changes: dict[str, Any],
    actor_id: int,
) -> Optional[Job]:
    """Apply a partial update to a job; records ``job_updated`` if anything changed."""
    if "status" in changes and changes["status"] is not None:
        changes = {**changes, "status": JobStatus(changes["status"]).value}

    with storage.unit_of_work():
        job = storage.get(Job, job_id)
        if not job:
            return None

        old_status = job.status
        changed = _apply_changes(job, changes)
        if changed:
            storage.save(job)
            status_changed = "status" in changed
            record_activity(
                storage,
                actor_id,
                JobUpdated(
                    job_id=job.id,
                    job_title=job.title,
                    changed_fields=changed,
                    old_status=old_status if status_changed else None,
                    new_status=job.status if status_changed else None,
                ),
            )
    return job


# ============== Candidates ==============


def create_candidate(storage: Storage, fields: dict[str, Any], actor_id: int) -> Candidate:
    """
    Create a candidate; stage defaults to ``applied``.

    A linked ``user_id`` must name an existing user without a candidate
    record of their own.
    """
    with storage.unit_of_work():
        if storage.get_candidate_by_email(fields["email"]):
            raise DuplicateEntityError("A candidate with this email already exists")

        user_id = fields.get("user_id")
        if user_id is not None:
            if not storage.get(User, user_id):
                raise RelatedEntityNotFound("User", user_id)
            if storage.get_candidate_by_user_id(user_id):
                raise DuplicateEntityError("This user already has a candidate profile")

        candidate = storage.save(
            Candidate(
                user_id=user_id,
                full_name=fields["full_name"],
                email=fields["email"],
                phone=fields.get("phone"),
                resume_url=fields.get("resume_url"),
                education=fields.get("education"),
                experience=fields.get("experience"),
                skills=list(fields.get("skills") or []),
                stage=PipelineStage(fields.get("stage") or PipelineStage.APPLIED).value,
                notes=fields.get("notes"),
                created_at=utcnow(),
            )
        )
        record_activity(
            storage,
            actor_id,
            CandidateCreated(candidate_id=candidate.id, candidate_name=candidate.full_name),
        )
    return candidate


def update_candidate(
    storage: Storage,
    candidate_id: int,
    changes: dict[str, Any],
    actor_id: int,
) -> Optional[Candidate]:
    """
    Apply a partial update to a candidate.

    A ``stage`` entry is routed through the transition engine; every other
    field is written directly.
    """
    changes = dict(changes)
    new_stage = changes.pop("stage", None)
    if "skills" in changes and changes["skills"] is not None:
        changes["skills"] = list(changes["skills"])

    with storage.unit_of_work():
        candidate = storage.get(Candidate, candidate_id)
        if not candidate:
            return None

        new_email = changes.get("email")
        if new_email and new_email != candidate.email:
            existing = storage.get_candidate_by_email(new_email)
            if existing and existing.id != candidate.id:
                raise DuplicateEntityError("A candidate with this email already exists")

        if _apply_changes(candidate, changes):
            storage.save(candidate)
        if new_stage is not None:
            transition_candidate_stage(storage, candidate_id, new_stage, actor_id)
    return candidate


# ============== Applications ==============


def create_application(storage: Storage, fields: dict[str, Any], actor_id: int) -> Application:
    """
    Apply ``fields["user_id"]`` to ``fields["job_id"]``.

    When no candidate id is given, the applicant's linked candidate record
    (if any) is attached.
    """
    with storage.unit_of_work():
        job_id = fields["job_id"]
        user_id = fields["user_id"]
        if not storage.get(Job, job_id):
            raise RelatedEntityNotFound("Job", job_id)
        if not storage.get(User, user_id):
            raise RelatedEntityNotFound("User", user_id)

        candidate_id = fields.get("candidate_id")
        if candidate_id is not None:
            if not storage.get(Candidate, candidate_id):
                raise RelatedEntityNotFound("Candidate", candidate_id)
        else:
            candidate = storage.get_candidate_by_user_id(user_id)
            candidate_id = candidate.id if candidate else None

        now = utcnow()
        application = storage.save(
            Application(
                job_id=job_id,
                user_id=user_id,
                candidate_id=candidate_id,
                status=PipelineStage(fields.get("status") or PipelineStage.APPLIED).value,
                cover_letter=fields.get("cover_letter"),
                applied_at=now,
                updated_at=now,
            )
        )
        record_activity(
            storage,
            actor_id,
            ApplicationCreated(
                application_id=application.id,
                **application_context(storage, application),
            ),
        )
    return application


# ============== Interviews ==============


def schedule_interview(storage: Storage, fields: dict[str, Any], actor_id: int) -> Interview:
    """Schedule an interview; the recruiter defaults to the acting user."""
    with storage.unit_of_work():
        application_id = fields["application_id"]
        application = storage.get(Application, application_id)
        if not application:
            raise RelatedEntityNotFound("Application", application_id)

        recruiter_id = fields.get("recruiter_id") or actor_id
        if not storage.get(User, recruiter_id):
            raise RelatedEntityNotFound("User", recruiter_id)

        interview = storage.save(
            Interview(
                application_id=application_id,
                recruiter_id=recruiter_id,
                scheduled_at=fields["scheduled_at"],
                duration=fields["duration"],
                location=fields.get("location"),
                notes=fields.get("notes"),
                status=InterviewStatus(fields.get("status") or InterviewStatus.SCHEDULED).value,
            )
        )
        record_activity(
            storage,
            actor_id,
            InterviewScheduled(
                interview_id=interview.id,
                application_id=application_id,
                scheduled_at=interview.scheduled_at,
                **application_context(storage, application),
            ),
        )
    return interview


def update_interview(
    storage: Storage,
    interview_id: int,
    changes: dict[str, Any],
    actor_id: int,
) -> Optional[Interview]:
    """Apply a partial update to an interview; status goes through the engine."""
    changes = dict(changes)
    new_status = changes.pop("status", None)

    with storage.unit_of_work():
        interview = storage.get(Interview, interview_id)
        if not interview:
            return None

        if _apply_changes(interview, changes):
            storage.save(interview)
        if new_status is not None:
            transition_interview_status(storage, interview_id, new_status, actor_id)
    return interview
