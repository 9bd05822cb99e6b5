"""Integration tests for the match feedback API."""

from uuid import uuid4


class TestRecordFeedbackEndpoint:

    def test_records_feedback_and_returns_designer_metrics(self, client, make_designer, make_match):
        designer = make_designer(rating=4.0, total_projects=3, on_time_delivery_rate=None)
        match = make_match(designer=designer)

        response = client.post(
            f"/api/v1/matches/{match.id}/feedback",
            json={
                "accepted": True,
                "project_completed": True,
                "satisfaction": 5,
                "delivered_on_time": True,
                "comment": "Delivered a strong identity",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["match_id"] == str(match.id)
        assert data["accepted"] is True
        assert data["project_started"] is True
        assert data["designer"]["id"] == str(designer.id)
        assert data["designer"]["rating"] == 4.25
        assert data["designer"]["on_time_delivery_rate"] == 100.0
        assert data["designer"]["total_projects"] == 4

    def test_duplicate_feedback_conflicts(self, client, make_match):
        match = make_match()
        client.post(f"/api/v1/matches/{match.id}/feedback", json={"accepted": False})

        response = client.post(f"/api/v1/matches/{match.id}/feedback", json={"accepted": True})

        assert response.status_code == 409
        assert response.json()["error"] == "feedback_already_recorded"

    def test_unknown_match_is_404(self, client):
        response = client.post(f"/api/v1/matches/{uuid4()}/feedback", json={"accepted": True})

        assert response.status_code == 404
        assert response.json()["error"] == "match_not_found"

    def test_satisfaction_out_of_range_is_422(self, client, make_match):
        match = make_match()

        response = client.post(
            f"/api/v1/matches/{match.id}/feedback",
            json={"accepted": True, "project_completed": True, "satisfaction": 6},
        )

        assert response.status_code == 422
        assert response.json()["error"] == "validation_error"

    def test_completed_without_acceptance_is_422(self, client, make_match):
        match = make_match()

        response = client.post(
            f"/api/v1/matches/{match.id}/feedback",
            json={"accepted": False, "project_completed": True},
        )

        assert response.status_code == 422


class TestFeedbackSummaryEndpoint:

    def test_summary_reflects_recorded_feedback(self, client, make_match):
        for accepted in (True, False):
            match = make_match()
            client.post(f"/api/v1/matches/{match.id}/feedback", json={"accepted": accepted})

        response = client.get("/api/v1/feedback/summary")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["accepted"] == 1
        assert data["acceptance_rate"] == 50.0
        assert data["average_satisfaction"] is None
