"""
Shared test fixtures.

Points the app at an in-memory SQLite database before any app import, then
gives every test a freshly created schema, a storage bound to it, user
factories and an HTTP client.
"""

import os

# === Set environment BEFORE any app imports ===
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ADMIN_REGISTRATION_KEY"] = "test-admin-key"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from datetime import timedelta
from typing import Any, Callable, Optional

import pytest
from fastapi.testclient import TestClient

from app.core.security import create_access_token, get_password_hash
from app.db.base import Base, utcnow
from app.db.session import SessionLocal, engine
from app.main import app
from app.models import Application, Candidate, Interview, Job, User
from app.storage import DatabaseStorage

PASSWORD = "secret123"
PASSWORD_HASH = get_password_hash(PASSWORD)


@pytest.fixture(autouse=True)
def reset_database():
    """Fresh schema for every test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db_session():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def storage(db_session) -> DatabaseStorage:
    return DatabaseStorage(db_session)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


# ============== Factories ==============


@pytest.fixture
def make_user(storage) -> Callable[..., User]:
    def _make(username: str, role: str = "recruiter", full_name: Optional[str] = None) -> User:
        with storage.unit_of_work():
            return storage.save(
                User(
                    username=username,
                    email=f"{username}@example.com",
                    hashed_password=PASSWORD_HASH,
                    full_name=full_name or username.title(),
                    role=role,
                    created_at=utcnow(),
                )
            )

    return _make


@pytest.fixture
def recruiter(make_user) -> User:
    return make_user("sarah", role="recruiter", full_name="Sarah Johnson")


@pytest.fixture
def admin(make_user) -> User:
    return make_user("root", role="admin", full_name="Site Admin")


@pytest.fixture
def candidate_user(make_user) -> User:
    return make_user("michael", role="candidate", full_name="Michael Rodriguez")


@pytest.fixture
def make_job(storage) -> Callable[..., Job]:
    def _make(owner: User, title: str = "Backend Engineer", status: str = "open", **extra: Any) -> Job:
        with storage.unit_of_work():
            return storage.save(
                Job(
                    title=title,
                    description="Build and run APIs.",
                    location="Remote",
                    status=status,
                    user_id=owner.id,
                    created_at=extra.pop("created_at", utcnow()),
                    **extra,
                )
            )

    return _make


@pytest.fixture
def make_candidate(storage) -> Callable[..., Candidate]:
    def _make(
        full_name: str = "Emily Chen",
        stage: str = "applied",
        user: Optional[User] = None,
        created_at=None,
    ) -> Candidate:
        email = f"{full_name.lower().replace(' ', '.')}@example.com"
        with storage.unit_of_work():
            return storage.save(
                Candidate(
                    full_name=full_name,
                    email=email,
                    skills=["Python"],
                    stage=stage,
                    user_id=user.id if user else None,
                    created_at=created_at or utcnow(),
                )
            )

    return _make


@pytest.fixture
def make_application(storage) -> Callable[..., Application]:
    def _make(job: Job, user: User, status: str = "applied", candidate: Optional[Candidate] = None) -> Application:
        now = utcnow()
        with storage.unit_of_work():
            return storage.save(
                Application(
                    job_id=job.id,
                    user_id=user.id,
                    candidate_id=candidate.id if candidate else None,
                    status=status,
                    applied_at=now,
                    updated_at=now,
                )
            )

    return _make


@pytest.fixture
def make_interview(storage) -> Callable[..., Interview]:
    def _make(
        application: Application,
        recruiter: User,
        in_hours: float = 24,
        status: str = "scheduled",
    ) -> Interview:
        with storage.unit_of_work():
            return storage.save(
                Interview(
                    application_id=application.id,
                    recruiter_id=recruiter.id,
                    scheduled_at=utcnow() + timedelta(hours=in_hours),
                    duration=45,
                    status=status,
                )
            )

    return _make


# ============== Auth ==============


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.email, role=user.role)}"}


@pytest.fixture
def recruiter_headers(recruiter) -> dict[str, str]:
    return auth_headers(recruiter)


@pytest.fixture
def admin_headers(admin) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture
def candidate_headers(candidate_user) -> dict[str, str]:
    return auth_headers(candidate_user)


@pytest.fixture
def headers_for() -> Callable[[User], dict[str, str]]:
    return auth_headers
