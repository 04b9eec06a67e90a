"""
Storage abstraction for the recruitment entities.

Every persistence operation the services need goes through this interface,
so the services never touch a session directly. Multi-step mutations run
inside ``unit_of_work()``: all of their writes commit together or none do.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from datetime import datetime
from typing import Optional, TypeVar

from app.models import Activity, Application, Candidate, Interview, Job, User

T = TypeVar("T")


class Storage(ABC):
    """Abstract entity store: CRUD, listing, counting and cascading delete."""

    # -------------------------------------------------------------------------
    # Unit of work / generic CRUD
    # -------------------------------------------------------------------------

    @abstractmethod
    def unit_of_work(self) -> AbstractContextManager["Storage"]:
        """
        Transaction scope.

        Commits when the outermost scope exits cleanly and rolls back every
        write made inside it if any exception escapes. Nested scopes join the
        enclosing one.
        """

    @abstractmethod
    def save(self, entity: T) -> T:
        """Insert a new entity or persist changes to a loaded one; assigns ids."""

    @abstractmethod
    def get(self, model: type[T], entity_id: int) -> Optional[T]:
        """Fetch a single entity by primary key."""

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def list_users(self, role: Optional[str] = None) -> list[User]:
        pass

    @abstractmethod
    def delete_user_cascade(self, user_id: int) -> bool:
        """
        Remove a user together with everything they own.

        Deletes interviews they run as recruiter, their jobs, applications
        they made or that target their jobs, interviews on those
        applications, and their linked candidate record, then the user row.
        Activities are kept. Returns False if the user does not exist.
        """

    # -------------------------------------------------------------------------
    # Jobs
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_jobs(self) -> list[Job]:
        pass

    @abstractmethod
    def list_recent_jobs(self, limit: int) -> list[Job]:
        """Newest jobs first."""

    @abstractmethod
    def count_jobs(self, status: Optional[str] = None) -> int:
        pass

    # -------------------------------------------------------------------------
    # Candidates
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_candidates(self, stage: Optional[str] = None) -> list[Candidate]:
        pass

    @abstractmethod
    def get_candidate_by_user_id(self, user_id: int) -> Optional[Candidate]:
        pass

    @abstractmethod
    def get_candidate_by_email(self, email: str) -> Optional[Candidate]:
        pass

    @abstractmethod
    def count_candidates_created_since(self, since: datetime) -> int:
        pass

    # -------------------------------------------------------------------------
    # Applications
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_applications(
        self,
        job_id: Optional[int] = None,
        user_id: Optional[int] = None,
        candidate_id: Optional[int] = None,
        status: Optional[str] = None,
    ) -> list[Application]:
        """Applications matching every filter given."""

    @abstractmethod
    def count_applications(self, status: Optional[str] = None) -> int:
        pass

    @abstractmethod
    def count_applications_by_status(self) -> dict[str, int]:
        """Map of status value to number of applications currently in it."""

    # -------------------------------------------------------------------------
    # Interviews
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_interviews(self, application_id: int) -> list[Interview]:
        pass

    @abstractmethod
    def list_upcoming_interviews(self, now: datetime, limit: int) -> list[Interview]:
        """Scheduled interviews strictly after ``now``, soonest first."""

    @abstractmethod
    def count_interviews(
        self,
        status: Optional[str] = None,
        scheduled_after: Optional[datetime] = None,
    ) -> int:
        pass

    # -------------------------------------------------------------------------
    # Activities
    # -------------------------------------------------------------------------

    @abstractmethod
    def list_activities(self, limit: int) -> list[Activity]:
        """Most recent activities first."""
