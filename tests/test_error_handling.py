"""Tests for exception classes and their HTTP mapping"""

from unittest.mock import Mock

import pytest

from main import app
from core.dependencies import get_feedback_collector, get_profile_catalog
from core.exceptions import (
    ConfigurationException,
    EnhancementEngineException,
    InvalidFeedbackException,
    NotFoundException,
    PrerequisiteCycleException,
    ProfileNotFoundException,
    UnknownFactorException,
    ValidationException,
)


@pytest.fixture
def override():
    """Register dependency overrides for one test"""
    def _override(dependency, value):
        app.dependency_overrides[dependency] = lambda: value
    yield _override
    app.dependency_overrides.clear()


class TestExceptionHierarchy:
    """Exception classes carry readable messages"""

    def test_base_message(self):
        exc = EnhancementEngineException("boom")
        assert exc.message == "boom"
        assert str(exc) == "boom"

    def test_configuration_family(self):
        assert issubclass(UnknownFactorException, ConfigurationException)
        assert issubclass(PrerequisiteCycleException, ConfigurationException)
        assert "noise" in UnknownFactorException("noise").message

    def test_cycle_message_lists_path(self):
        exc = PrerequisiteCycleException(["contrast", "clarity", "contrast"])
        assert exc.message == "Prerequisite cycle detected: contrast -> clarity -> contrast"

    def test_validation_family(self):
        exc = InvalidFeedbackException("satisfaction_score", 1.5)
        assert isinstance(exc, ValidationException)
        assert "satisfaction_score" in exc.message
        assert "1.5" in exc.message

    def test_not_found_family(self):
        assert isinstance(ProfileNotFoundException("Vintage"), NotFoundException)


class TestHttpMapping:
    """Engine exceptions surface with the right status codes"""

    def test_validation_exception_maps_to_422(self, client, override):
        collector = Mock()
        collector.submit_enhancement_feedback.side_effect = InvalidFeedbackException("satisfaction_score", 1.5)
        override(get_feedback_collector, collector)

        response = client.post("/api/feedback", json={
            "user_id": "alice",
            "enhancement_type": "contrast",
            "applied_intensity": 0.3,
            "satisfaction_score": 0.5,
            "visual_improvement_rating": 0.5,
        })
        assert response.status_code == 422
        assert response.json()["error"] == "InvalidFeedbackException"
        assert "satisfaction_score" in response.json()["detail"]

    def test_not_found_exception_maps_to_404(self, client):
        response = client.get("/api/users/ghost/custom-profile")
        assert response.status_code == 404
        assert "ghost" in response.json()["detail"]

    def test_configuration_exception_maps_to_500(self, client, override):
        catalog = Mock()
        catalog.get.side_effect = UnknownFactorException("noise_level")
        override(get_profile_catalog, catalog)

        response = client.get("/api/profiles/natural")
        assert response.status_code == 500
        assert response.json()["error"] == "UnknownFactorException"
