"""
SQLAlchemy-backed storage.

Used for the application database and, bound to an in-memory SQLite engine,
for the test suite.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional, TypeVar

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.constants import InterviewStatus
from app.models import Activity, Application, Candidate, Interview, Job, User
from app.storage.base import Storage

logger = logging.getLogger("storage")

T = TypeVar("T")


class DatabaseStorage(Storage):
    """Storage over a single SQLAlchemy session."""

    def __init__(self, session: Session) -> None:
        self._session = session
        self._depth = 0

    @property
    def session(self) -> Session:
        return self._session

    @contextmanager
    def unit_of_work(self) -> Iterator["DatabaseStorage"]:
        self._depth += 1
        try:
            yield self
            if self._depth == 1:
                self._session.commit()
        except Exception:
            if self._depth == 1:
                self._session.rollback()
            raise
        finally:
            self._depth -= 1

    def save(self, entity: T) -> T:
        self._session.add(entity)
        self._session.flush()
        return entity

    def get(self, model: type[T], entity_id: int) -> Optional[T]:
        return self._session.get(model, entity_id)

    # ============== Users ==============

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._session.query(User).filter(User.username == username).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._session.query(User).filter(User.email == email).first()

    def list_users(self, role: Optional[str] = None) -> list[User]:
        query = self._session.query(User)
        if role is not None:
            query = query.filter(User.role == role)
        return query.order_by(User.id).all()

    def delete_user_cascade(self, user_id: int) -> bool:
        user = self._session.get(User, user_id)
        if not user:
            return False

        job_ids = [row.id for row in self._session.query(Job.id).filter(Job.user_id == user_id)]
        candidate_ids = [
            row.id for row in self._session.query(Candidate.id).filter(Candidate.user_id == user_id)
        ]

        application_filters = [Application.user_id == user_id]
        if job_ids:
            application_filters.append(Application.job_id.in_(job_ids))
        if candidate_ids:
            application_filters.append(Application.candidate_id.in_(candidate_ids))
        application_ids = [
            row.id
            for row in self._session.query(Application.id).filter(or_(*application_filters))
        ]

        interview_filters = [Interview.recruiter_id == user_id]
        if application_ids:
            interview_filters.append(Interview.application_id.in_(application_ids))

        interviews_deleted = self._session.query(Interview).filter(or_(*interview_filters)).delete(
            synchronize_session="fetch"
        )
        applications_deleted = 0
        if application_ids:
            applications_deleted = self._session.query(Application).filter(
                Application.id.in_(application_ids)
            ).delete(synchronize_session="fetch")
        jobs_deleted = self._session.query(Job).filter(Job.user_id == user_id).delete(
            synchronize_session="fetch"
        )
        candidates_deleted = self._session.query(Candidate).filter(
            Candidate.user_id == user_id
        ).delete(synchronize_session="fetch")
        self._session.query(User).filter(User.id == user_id).delete(synchronize_session="fetch")
        self._session.flush()

        logger.info(
            f"Cascade-deleted user {user_id}: {jobs_deleted} jobs, "
            f"{applications_deleted} applications, {interviews_deleted} interviews, "
            f"{candidates_deleted} candidate records"
        )
        return True

    # ============== Jobs ==============

    def list_jobs(self) -> list[Job]:
        return self._session.query(Job).order_by(Job.id).all()

    def list_recent_jobs(self, limit: int) -> list[Job]:
        return (
            self._session.query(Job)
            .order_by(Job.created_at.desc(), Job.id.desc())
            .limit(limit)
            .all()
        )

    def count_jobs(self, status: Optional[str] = None) -> int:
        query = self._session.query(Job)
        if status is not None:
            query = query.filter(Job.status == status)
        return query.count()

    # ============== Candidates ==============

    def list_candidates(self, stage: Optional[str] = None) -> list[Candidate]:
        query = self._session.query(Candidate)
        if stage is not None:
            query = query.filter(Candidate.stage == stage)
        return query.order_by(Candidate.id).all()

    def get_candidate_by_user_id(self, user_id: int) -> Optional[Candidate]:
        return self._session.query(Candidate).filter(Candidate.user_id == user_id).first()

    def get_candidate_by_email(self, email: str) -> Optional[Candidate]:
        return self._session.query(Candidate).filter(Candidate.email == email).first()

    def count_candidates_created_since(self, since: datetime) -> int:
        return self._session.query(Candidate).filter(Candidate.created_at >= since).count()

    # ============== Applications ==============

    def list_applications(
        self,
        job_id: Optional[int] = None,
        user_id: Optional[int] = None,
        candidate_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[Application]:
        query = self._session.query(Application)
        if job_id is not None:
            query = query.filter(Application.job_id == job_id)
        if user_id is not None:
            query = query.filter(Application.user_id == user_id)
        if candidate_id is not None:
            query = query.filter(Application.candidate_id == candidate_id)
        if status is not None:
            query = query.filter(Application.status == status)
        return query.order_by(Application.id).all()

    def count_applications(self, status: Optional[str] = None) -> int:
        query = self._session.query(Application)
        if status is not None:
            query = query.filter(Application.status == status)
        return query.count()

    def count_applications_by_status(self) -> dict[str, int]:
        rows = (
            self._session.query(Application.status, func.count(Application.id))
            .group_by(Application.status)
            .all()
        )
        return {status: count for status, count in rows}

    # ============== Interviews ==============

    def list_interviews(self, application_id: int) -> list[Interview]:
        return (
            self._session.query(Interview)
            .filter(Interview.application_id == application_id)
            .order_by(Interview.scheduled_at)
            .all()
        )

    def list_upcoming_interviews(self, now: datetime, limit: int) -> list[Interview]:
        return (
            self._session.query(Interview)
            .filter(Interview.status == InterviewStatus.SCHEDULED.value, Interview.scheduled_at > now)
            .order_by(Interview.scheduled_at, Interview.id)
            .limit(limit)
            .all()
        )

    def count_interviews(
        self,
        status: Optional[str] = None,
        scheduled_after: Optional[datetime] = None,
    ) -> int:
        query = self._session.query(Interview)
        if status is not None:
            query = query.filter(Interview.status == status)
        if scheduled_after is not None:
            query = query.filter(Interview.scheduled_at > scheduled_after)
        return query.count()

    # ============== Activities ==============

    def list_activities(self, limit: int) -> list[Activity]:
        return (
            self._session.query(Activity)
            .order_by(Activity.created_at.desc(), Activity.id.desc())
            .limit(limit)
            .all()
        )
