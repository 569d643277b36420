"""Pytest configuration and fixtures for testing"""

import os

# Set environment variables BEFORE importing main
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "testing"
os.environ["ALLOWED_ORIGINS"] = "http://localhost:3000"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from main import app
from core.dependencies import reset_dependencies
from models.analysis import AnalysisSnapshot, FaceAnalysis
from models.enums import AgeCategory, EnhancementType
from models.learning import EnhancementFeedback, UserLearningProfile
from services.profile_catalog import build_default_catalog
from services.recommendation_engine import RecommendationEngine


# ========== Test Client Setup ==========
@pytest.fixture(scope="function")
def client():
    """Test client with fresh engine state per test"""
    reset_dependencies()
    with TestClient(app) as test_client:
        yield test_client
    reset_dependencies()


# ========== Engine Fixtures ==========
@pytest.fixture(scope="session")
def catalog():
    return build_default_catalog()


@pytest.fixture
def engine(catalog):
    return RecommendationEngine(catalog)


# ========== Analysis Snapshots ==========
def make_analysis(
    image_quality=0.8,
    lighting_quality=0.7,
    beauty_score=0.6,
    face_quality=0.75,
    skin_tone_confidence=0.8,
    age_category=AgeCategory.YOUNG_ADULT,
    with_face=True
):
    """Build an AnalysisSnapshot with sensible defaults"""
    face = None
    if with_face:
        face = FaceAnalysis(
            face_quality=face_quality,
            skin_tone_confidence=skin_tone_confidence,
            age_category=age_category,
        )
    return AnalysisSnapshot(
        image_quality=image_quality,
        lighting_quality=lighting_quality,
        beauty_score=beauty_score,
        primary_face=face,
    )


@pytest.fixture
def good_portrait():
    """Well-lit, sharp portrait of a young adult"""
    return make_analysis()


@pytest.fixture
def dark_low_quality_photo():
    """Dim, soft photo of a senior"""
    return make_analysis(
        image_quality=0.4,
        lighting_quality=0.3,
        face_quality=0.5,
        age_category=AgeCategory.SENIOR,
    )


@pytest.fixture
def landscape():
    """Good photo with no detected face"""
    return make_analysis(with_face=False)


@pytest.fixture
def analysis_payload():
    """JSON analysis body for the HTTP API"""
    return {
        "image_quality": 0.8,
        "lighting_quality": 0.7,
        "beauty_score": 0.6,
        "primary_face": {
            "face_quality": 0.75,
            "skin_tone_confidence": 0.8,
            "age_category": "young_adult",
        },
    }


# ========== Learning Fixtures ==========
def make_feedback(
    user_id="user_1",
    enhancement_type=EnhancementType.SKIN_SMOOTHING,
    satisfaction_score=0.9,
    applied_intensity=0.4,
    visual_improvement_rating=0.8,
    would_use_again=True
):
    return EnhancementFeedback(
        user_id=user_id,
        enhancement_type=enhancement_type,
        applied_intensity=applied_intensity,
        satisfaction_score=satisfaction_score,
        visual_improvement_rating=visual_improvement_rating,
        would_use_again=would_use_again,
    )


@pytest.fixture
def learning_profile():
    return UserLearningProfile(user_id="user_1")
