"""
Tests for the activity recorder and its typed payloads.
"""

from datetime import datetime, timedelta

import pytest
from pydantic import ValidationError

from app.models import Activity
from app.services import get_recent_activities, load_activity_details, record_activity
from app.services.activities import (
    ACTIVITY_TYPES,
    ApplicationCreated,
    InterviewScheduled,
    JobCreated,
    JobUpdated,
    application_context,
)


class TestRecordActivity:
    def test_payload_is_stored_camel_case_without_type(self, storage, recruiter):
        with storage.unit_of_work():
            activity = record_activity(storage, recruiter.id, JobCreated(job_id=7, job_title="Designer"))

        assert activity.id is not None
        assert activity.type == "job_created"
        assert activity.user_id == recruiter.id
        assert activity.details == {"jobId": 7, "jobTitle": "Designer"}
        assert activity.created_at is not None

    def test_optional_fields_are_kept_as_null(self, storage, recruiter):
        with storage.unit_of_work():
            activity = record_activity(
                storage,
                recruiter.id,
                JobUpdated(job_id=1, job_title="QA", changed_fields=["title"]),
            )

        assert activity.details["changedFields"] == ["title"]
        assert activity.details["oldStatus"] is None
        assert activity.details["newStatus"] is None

    def test_datetimes_are_serialised(self, storage, recruiter):
        when = datetime(2030, 5, 1, 9, 30)
        details = InterviewScheduled(
            interview_id=1,
            application_id=2,
            user_id=3,
            user_name="Emily Chen",
            job_id=4,
            job_title="Product Manager",
            scheduled_at=when,
        )
        with storage.unit_of_work():
            activity = record_activity(storage, recruiter.id, details)

        assert activity.details["scheduledAt"] == "2030-05-01T09:30:00"
        assert load_activity_details(activity).scheduled_at == when

    def test_payload_requires_its_fields(self):
        with pytest.raises(ValidationError):
            ApplicationCreated(application_id=1, user_id=2, user_name="x", job_id=3)

    def test_variants_cover_every_type(self):
        from app.services.activities import ActivityDetails

        tags = {cls.model_fields["type"].default for cls in ActivityDetails.__subclasses__()}
        assert tags == set(ACTIVITY_TYPES)


class TestLoadActivityDetails:
    def test_round_trip_through_the_row(self, storage, recruiter):
        with storage.unit_of_work():
            activity = record_activity(storage, recruiter.id, JobCreated(job_id=3, job_title="SRE"))

        details = load_activity_details(activity)

        assert isinstance(details, JobCreated)
        assert details.job_id == 3

    def test_unknown_type_is_rejected(self):
        activity = Activity(user_id=1, type="job_archived", details={"jobId": 1})

        with pytest.raises(ValidationError):
            load_activity_details(activity)


class TestRecentActivities:
    def _record_at(self, storage, actor_id, job_id, created_at):
        with storage.unit_of_work():
            activity = record_activity(storage, actor_id, JobCreated(job_id=job_id, job_title=f"Job {job_id}"))
            activity.created_at = created_at
            storage.save(activity)
        return activity

    def test_newest_first_and_limited(self, storage, recruiter):
        base = datetime(2030, 1, 1)
        for offset in range(5):
            self._record_at(storage, recruiter.id, offset, base + timedelta(minutes=offset))

        recent = get_recent_activities(storage, limit=3)

        assert [a.details["jobId"] for a in recent] == [4, 3, 2]

    def test_ties_broken_by_insertion_order(self, storage, recruiter):
        same_time = datetime(2030, 1, 1)
        first = self._record_at(storage, recruiter.id, 1, same_time)
        second = self._record_at(storage, recruiter.id, 2, same_time)

        recent = get_recent_activities(storage, limit=10)

        assert [a.id for a in recent] == [second.id, first.id]

    def test_empty_feed(self, storage):
        assert get_recent_activities(storage, limit=10) == []


class TestApplicationContext:
    def test_resolves_names(self, storage, recruiter, candidate_user, make_job, make_application):
        job = make_job(recruiter, title="Data Engineer")
        application = make_application(job, candidate_user)

        assert application_context(storage, application) == {
            "user_id": candidate_user.id,
            "user_name": "Michael Rodriguez",
            "job_id": job.id,
            "job_title": "Data Engineer",
        }
