"""Tests for the recommendation, feedback, profile and user endpoints"""

import pytest


def _feedback(user_id="alice", enhancement_type="skin_smoothing", satisfaction=0.9):
    return {
        "user_id": user_id,
        "enhancement_type": enhancement_type,
        "applied_intensity": 0.4,
        "satisfaction_score": satisfaction,
        "visual_improvement_rating": 0.8,
        "would_use_again": True,
    }


class TestProfileEndpoints:
    """Catalog browsing"""

    def test_list_profiles(self, client):
        response = client.get("/api/profiles")
        assert response.status_code == 200
        assert [profile["name"] for profile in response.json()] == ["Natural", "Glam", "HD", "Studio"]

    def test_get_profile(self, client):
        data = client.get("/api/profiles/studio").json()
        assert data["name"] == "Studio"
        assert data["applicability_conditions"][0]["factor"] == "face_quality"
        assert "background_blur" not in data["quick_enhancements"]
        assert "auto_enhance" in data["quick_enhancements"]

    def test_unknown_profile_404(self, client):
        response = client.get("/api/profiles/vintage")
        assert response.status_code == 404
        assert response.json()["error"] == "ProfileNotFoundException"


class TestRecommendationEndpoints:
    """POST /api/recommendations"""

    def test_natural_recommendations(self, client, analysis_payload):
        response = client.post("/api/recommendations", json={"analysis": analysis_payload, "profile": "Natural"})
        assert response.status_code == 200

        data = response.json()
        assert data["applicable"] is True
        assert data["personalized"] is False
        assert [rec["type"] for rec in data["recommendations"]] == [
            "auto_enhance", "brightness", "skin_smoothing", "eye_brightening",
        ]
        assert [rec["type"] for rec in data["top"]] == ["auto_enhance", "brightness", "skin_smoothing"]

    def test_top_n(self, client, analysis_payload):
        data = client.post(
            "/api/recommendations", json={"analysis": analysis_payload, "profile": "Glam", "top_n": 5}
        ).json()
        assert len(data["top"]) == 5
        assert len(data["recommendations"]) == 7

    def test_inapplicable_profile(self, client, analysis_payload):
        analysis_payload.pop("primary_face")
        data = client.post("/api/recommendations", json={"analysis": analysis_payload, "profile": "Studio"}).json()
        assert data["applicable"] is False
        assert data["recommendations"] == []
        assert data["top"] == []

    def test_personalized_after_feedback(self, client, analysis_payload):
        client.post("/api/feedback", json=_feedback())
        data = client.post(
            "/api/recommendations", json={"analysis": analysis_payload, "profile": "Natural", "user_id": "alice"}
        ).json()

        assert data["personalized"] is True
        skin = next(rec for rec in data["recommendations"] if rec["type"] == "skin_smoothing")
        assert skin["personalized"] is True
        assert skin["confidence"] == pytest.approx(0.96)
        assert skin["intensity"] == pytest.approx(0.37)

    def test_unknown_user_is_not_personalized(self, client, analysis_payload):
        data = client.post(
            "/api/recommendations", json={"analysis": analysis_payload, "user_id": "stranger"}
        ).json()
        assert data["profile"] == "Natural"
        assert data["personalized"] is False

    def test_out_of_range_analysis_422(self, client, analysis_payload):
        analysis_payload["image_quality"] = 1.5
        response = client.post("/api/recommendations", json={"analysis": analysis_payload})
        assert response.status_code == 422

    def test_unknown_profile_404(self, client, analysis_payload):
        response = client.post("/api/recommendations", json={"analysis": analysis_payload, "profile": "Vintage"})
        assert response.status_code == 404

    def test_applicable_profiles(self, client, analysis_payload):
        response = client.post("/api/recommendations/applicable-profiles", json={"analysis": analysis_payload})
        assert response.json()["profiles"] == ["Natural", "Glam", "HD", "Studio"]

        analysis_payload["image_quality"] = 0.3
        analysis_payload.pop("primary_face")
        response = client.post("/api/recommendations/applicable-profiles", json={"analysis": analysis_payload})
        assert response.json()["profiles"] == ["Natural", "Glam"]


class TestFeedbackEndpoint:
    """POST /api/feedback"""

    def test_submit_feedback(self, client):
        response = client.post("/api/feedback", json=_feedback())
        assert response.status_code == 200

        data = response.json()
        assert data["success"] is True
        assert data["enhancement_type"] == "skin_smoothing"
        assert data["preference_weight"] == pytest.approx(0.58)
        assert data["confidence_adjustment"] == pytest.approx(1.2)
        assert data["usage_count"] == 1
        assert data["history_size"] == 1

    def test_feedback_out_of_range_422(self, client):
        response = client.post("/api/feedback", json=_feedback(satisfaction=1.3))
        assert response.status_code == 422

    def test_feedback_unknown_type_422(self, client):
        response = client.post("/api/feedback", json=_feedback(enhancement_type="sepia"))
        assert response.status_code == 422

    def test_feedback_missing_fields_422(self, client):
        response = client.post("/api/feedback", json={"user_id": "alice"})
        assert response.status_code == 422


class TestUserEndpoints:
    """Learning summaries and custom profiles"""

    def test_learning_profile_404_before_feedback(self, client):
        response = client.get("/api/users/alice/learning")
        assert response.status_code == 404
        assert response.json()["error"] == "LearningProfileNotFoundException"

    def test_learning_profile_after_feedback(self, client):
        client.post("/api/feedback", json=_feedback())
        data = client.get("/api/users/alice/learning").json()
        assert data["usage_frequency"] == {"skin_smoothing": 1}
        assert data["most_preferred"] == ["skin_smoothing"]

    def test_set_age_category(self, client):
        response = client.put("/api/users/bob/age-category", json={"age_category": "senior"})
        assert response.status_code == 200
        assert response.json()["age_category"] == "senior"

    def test_custom_profile_lifecycle(self, client, analysis_payload):
        assert client.get("/api/users/alice/custom-profile").status_code == 404

        created = client.post(
            "/api/users/alice/custom-profile",
            json={"base_profile": "Natural", "analysis": analysis_payload, "name": "Everyday"},
        )
        assert created.status_code == 200
        assert created.json()["name"] == "Everyday"
        assert len(created.json()["enhancements"]) == 4

        feedback = client.post(
            "/api/users/alice/custom-profile/feedback",
            json={
                "satisfaction": 0.9,
                "naturalness": 0.7,
                "overall_rating": 0.8,
                "would_use_again": True,
                "enhancement_details": [{"type": "skin_smoothing", "intensity": 0.16}],
            },
        )
        assert feedback.status_code == 200
        assert feedback.json()["usage_count"] == 1
        assert feedback.json()["successful_combinations"] == [["skin_smoothing"]]

        data = client.get("/api/users/alice/custom-profile").json()
        skin = next(item for item in data["enhancements"] if item["type"] == "skin_smoothing")
        assert skin["intensity"] == pytest.approx(0.35)
        assert data["confidence"] == pytest.approx(0.56)

    def test_custom_profile_unknown_base_404(self, client, analysis_payload):
        response = client.post(
            "/api/users/alice/custom-profile", json={"base_profile": "Vintage", "analysis": analysis_payload}
        )
        assert response.status_code == 404

    def test_session_feedback_out_of_range_422(self, client):
        response = client.post(
            "/api/users/alice/custom-profile/feedback",
            json={"satisfaction": 2.0, "naturalness": 0.5, "overall_rating": 0.5},
        )
        assert response.status_code == 422
