"""
Tests for /api/candidates.
"""

import pytest

from app.models import Application

NEW_CANDIDATE = {
    "fullName": "Priya Shah",
    "email": "priya@example.com",
    "skills": ["Kotlin", "Android"],
}


class TestCreateCandidate:
    def test_stage_defaults_to_applied(self, client, recruiter_headers):
        response = client.post("/api/candidates", json=NEW_CANDIDATE, headers=recruiter_headers)

        assert response.status_code == 201
        body = response.json()
        assert body["stage"] == "applied"
        assert body["skills"] == ["Kotlin", "Android"]
        assert body["userId"] is None

    def test_recruiter_may_set_stage(self, client, recruiter_headers):
        response = client.post(
            "/api/candidates", json={**NEW_CANDIDATE, "stage": "screening"}, headers=recruiter_headers
        )

        assert response.json()["stage"] == "screening"

    @pytest.mark.parametrize(
        "skills,expected",
        [
            ("Go, Rust ,SQL", ["Go", "Rust", "SQL"]),
            ('["Go", "Rust"]', ["Go", "Rust"]),
            ("", []),
        ],
    )
    def test_skills_from_form_strings(self, client, recruiter_headers, skills, expected):
        response = client.post(
            "/api/candidates", json={**NEW_CANDIDATE, "skills": skills}, headers=recruiter_headers
        )

        assert response.status_code == 201
        assert response.json()["skills"] == expected

    def test_duplicate_email(self, client, recruiter_headers):
        client.post("/api/candidates", json=NEW_CANDIDATE, headers=recruiter_headers)

        response = client.post("/api/candidates", json=NEW_CANDIDATE, headers=recruiter_headers)

        assert response.status_code == 400

    def test_invalid_stage_is_400(self, client, recruiter_headers):
        response = client.post(
            "/api/candidates", json={**NEW_CANDIDATE, "stage": "promoted"}, headers=recruiter_headers
        )

        assert response.status_code == 400

    def test_candidate_creates_own_profile_at_applied(self, client, candidate_user, candidate_headers):
        response = client.post(
            "/api/candidates",
            json={**NEW_CANDIDATE, "stage": "hired", "userId": 12345},
            headers=candidate_headers,
        )

        assert response.status_code == 201
        assert response.json()["stage"] == "applied"
        assert response.json()["userId"] == candidate_user.id

    def test_candidate_cannot_create_a_second_profile(self, client, candidate_user, candidate_headers, make_candidate):
        make_candidate(user=candidate_user)

        response = client.post("/api/candidates", json=NEW_CANDIDATE, headers=candidate_headers)

        assert response.status_code == 400

    def test_link_to_unknown_user_is_404(self, client, recruiter_headers):
        response = client.post(
            "/api/candidates", json={**NEW_CANDIDATE, "userId": 999}, headers=recruiter_headers
        )

        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    def test_link_to_user_with_a_profile_is_400(
        self, client, candidate_user, recruiter_headers, make_candidate
    ):
        make_candidate(user=candidate_user)

        response = client.post(
            "/api/candidates", json={**NEW_CANDIDATE, "userId": candidate_user.id}, headers=recruiter_headers
        )

        assert response.status_code == 400
        assert response.json()["detail"] == "This user already has a candidate profile"

    def test_recruiter_links_user_without_profile(self, client, candidate_user, recruiter_headers):
        response = client.post(
            "/api/candidates", json={**NEW_CANDIDATE, "userId": candidate_user.id}, headers=recruiter_headers
        )

        assert response.status_code == 201
        assert response.json()["userId"] == candidate_user.id


class TestReadCandidates:
    def test_list_filtered_by_stage(self, client, recruiter_headers, make_candidate):
        make_candidate("Ann Lee", stage="offer")
        make_candidate("Bo Chan", stage="applied")

        response = client.get("/api/candidates", params={"stage": "offer"}, headers=recruiter_headers)

        assert [c["fullName"] for c in response.json()] == ["Ann Lee"]

    def test_list_all(self, client, recruiter_headers, make_candidate):
        make_candidate("Ann Lee")
        make_candidate("Bo Chan")

        response = client.get("/api/candidates", headers=recruiter_headers)

        assert len(response.json()) == 2

    def test_candidate_reads_own_record(self, client, candidate_user, candidate_headers, make_candidate):
        candidate = make_candidate(user=candidate_user)

        assert client.get("/api/candidates/me", headers=candidate_headers).json()["id"] == candidate.id
        assert client.get(f"/api/candidates/{candidate.id}", headers=candidate_headers).status_code == 200

    def test_candidate_cannot_read_others(self, client, candidate_headers, make_candidate):
        other = make_candidate("Someone Else")

        response = client.get(f"/api/candidates/{other.id}", headers=candidate_headers)

        assert response.status_code == 403

    def test_me_without_profile_is_404(self, client, recruiter_headers):
        response = client.get("/api/candidates/me", headers=recruiter_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Candidate profile not found"

    def test_missing_candidate_is_404(self, client, recruiter_headers):
        assert client.get("/api/candidates/31337", headers=recruiter_headers).status_code == 404


class TestUpdateCandidate:
    def test_stage_change_is_recorded(self, client, recruiter, recruiter_headers, make_candidate):
        candidate = make_candidate("Jessica Parker")

        response = client.patch(
            f"/api/candidates/{candidate.id}", json={"stage": "interview"}, headers=recruiter_headers
        )

        assert response.status_code == 200
        assert response.json()["stage"] == "interview"
        activity = client.get("/api/activities", headers=recruiter_headers).json()[0]
        assert activity["type"] == "candidate_stage_changed"
        assert activity["userId"] == recruiter.id
        assert activity["details"] == {
            "candidateId": candidate.id,
            "candidateName": "Jessica Parker",
            "oldStage": "applied",
            "newStage": "interview",
        }

    def test_same_stage_records_nothing(self, client, recruiter_headers, make_candidate):
        candidate = make_candidate(stage="offer")

        client.patch(f"/api/candidates/{candidate.id}", json={"stage": "offer"}, headers=recruiter_headers)

        assert client.get("/api/activities", headers=recruiter_headers).json() == []

    def test_stage_change_leaves_applications_alone(
        self, client, db_session, recruiter, candidate_user, recruiter_headers, make_job, make_candidate, make_application
    ):
        candidate = make_candidate(user=candidate_user)
        application = make_application(make_job(recruiter), candidate_user, candidate=candidate)

        client.patch(f"/api/candidates/{candidate.id}", json={"stage": "rejected"}, headers=recruiter_headers)

        db_session.expire_all()
        assert db_session.get(Application, application.id).status == "applied"

    def test_candidate_edits_own_fields(self, client, candidate_user, candidate_headers, make_candidate):
        candidate = make_candidate(user=candidate_user)

        response = client.patch(
            f"/api/candidates/{candidate.id}",
            json={"phone": "555-0100", "skills": "Python, Django"},
            headers=candidate_headers,
        )

        assert response.status_code == 200
        assert response.json()["phone"] == "555-0100"
        assert response.json()["skills"] == ["Python", "Django"]

    def test_candidate_cannot_move_own_stage(self, client, candidate_user, candidate_headers, make_candidate):
        candidate = make_candidate(user=candidate_user)

        response = client.patch(
            f"/api/candidates/{candidate.id}", json={"stage": "hired"}, headers=candidate_headers
        )

        assert response.status_code == 403

    def test_missing_candidate_is_404(self, client, recruiter_headers):
        response = client.patch("/api/candidates/999", json={"notes": "x"}, headers=recruiter_headers)

        assert response.status_code == 404
