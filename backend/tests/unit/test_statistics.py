"""
Tests for dashboard and pipeline aggregates.
"""

from datetime import timedelta

import pytest

from app.db.base import utcnow
from app.services import (
    calculate_hire_rate,
    get_dashboard_stats,
    get_pipeline_stats,
    transition_application_status,
    update_job,
)


class TestHireRate:
    @pytest.mark.parametrize(
        "hired,total,expected",
        [
            (0, 0, 0),
            (0, 5, 0.0),
            (1, 1, 100.0),
            (1, 3, 33.3),
            (2, 3, 66.7),
            (1, 8, 12.5),
        ],
    )
    def test_rounded_to_one_decimal(self, hired, total, expected):
        assert calculate_hire_rate(hired, total) == expected


class TestPipelineStats:
    def test_empty_store_counts_zero_everywhere(self, storage):
        assert get_pipeline_stats(storage) == {
            "applied": 0,
            "screening": 0,
            "interview": 0,
            "offer": 0,
            "hired": 0,
        }

    def test_partition_excludes_rejected(
        self, storage, recruiter, make_user, make_job, make_application
    ):
        job = make_job(recruiter)
        statuses = ["applied", "applied", "screening", "offer", "hired", "rejected", "rejected"]
        for index, status in enumerate(statuses):
            make_application(job, make_user(f"applicant{index}", role="candidate"), status=status)

        stats = get_pipeline_stats(storage)

        assert stats == {"applied": 2, "screening": 1, "interview": 0, "offer": 1, "hired": 1}
        assert "rejected" not in stats
        assert sum(stats.values()) == len(statuses) - 2

    def test_reads_are_stable(self, storage, recruiter, candidate_user, make_job, make_application):
        make_application(make_job(recruiter), candidate_user, status="screening")

        assert get_pipeline_stats(storage) == get_pipeline_stats(storage)

    def test_hiring_moves_one_application_between_buckets(
        self, storage, recruiter, candidate_user, make_job, make_application
    ):
        application = make_application(make_job(recruiter, title="X"), candidate_user)

        transition_application_status(storage, application.id, "hired", actor_id=recruiter.id)

        stats = get_pipeline_stats(storage)
        assert stats["hired"] == 1
        assert stats["applied"] == 0


class TestDashboardStats:
    def test_empty_store(self, storage):
        assert get_dashboard_stats(storage) == {
            "activeJobs": 0,
            "newCandidates": 0,
            "scheduledInterviews": 0,
            "hireRate": 0,
        }

    def test_active_jobs_counts_open_only(self, storage, recruiter, make_job):
        make_job(recruiter, status="open")
        make_job(recruiter, status="open")
        make_job(recruiter, status="closed")
        make_job(recruiter, status="paused")

        assert get_dashboard_stats(storage)["activeJobs"] == 2

    def test_active_jobs_follows_status_updates(self, storage, recruiter, make_job):
        job = make_job(recruiter, status="open")
        assert get_dashboard_stats(storage)["activeJobs"] == 1

        update_job(storage, job.id, {"status": "closed"}, actor_id=recruiter.id)
        assert get_dashboard_stats(storage)["activeJobs"] == 0

        update_job(storage, job.id, {"status": "open"}, actor_id=recruiter.id)
        assert get_dashboard_stats(storage)["activeJobs"] == 1

    def test_new_candidates_uses_trailing_window(self, storage, make_candidate):
        now = utcnow()
        make_candidate("Fresh One", created_at=now - timedelta(days=1))
        make_candidate("Fresh Two", created_at=now - timedelta(days=29))
        make_candidate("Old Timer", created_at=now - timedelta(days=45))

        assert get_dashboard_stats(storage, now=now)["newCandidates"] == 2
        assert get_dashboard_stats(storage, now=now, window_days=60)["newCandidates"] == 3

    def test_scheduled_interviews_counts_future_scheduled_only(
        self, storage, recruiter, candidate_user, make_job, make_application, make_interview
    ):
        application = make_application(make_job(recruiter), candidate_user)
        make_interview(application, recruiter, in_hours=2)
        make_interview(application, recruiter, in_hours=48)
        make_interview(application, recruiter, in_hours=-3)
        make_interview(application, recruiter, in_hours=5, status="cancelled")
        make_interview(application, recruiter, in_hours=-1, status="completed")

        assert get_dashboard_stats(storage)["scheduledInterviews"] == 2

    def test_hire_rate(self, storage, recruiter, make_user, make_job, make_application):
        job = make_job(recruiter)
        for index, status in enumerate(["hired", "applied", "rejected"]):
            make_application(job, make_user(f"applicant{index}", role="candidate"), status=status)

        assert get_dashboard_stats(storage)["hireRate"] == 33.3
