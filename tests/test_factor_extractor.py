"""Tests for factor extraction from analysis snapshots"""

import pytest

from conftest import make_analysis
from models.enums import AdaptiveFactor, AgeCategory
from models.learning import UserLearningProfile
from services.factor_extractor import FactorPurpose, extract_factor


class TestDirectFactors:
    """Factors read straight from the snapshot"""

    def test_image_quality(self):
        analysis = make_analysis(image_quality=0.42)
        assert extract_factor(AdaptiveFactor.IMAGE_QUALITY, analysis) == 0.42

    def test_lighting_quality(self):
        analysis = make_analysis(lighting_quality=0.33)
        assert extract_factor(AdaptiveFactor.LIGHTING_QUALITY, analysis) == 0.33

    def test_beauty_score(self):
        analysis = make_analysis(beauty_score=0.91)
        assert extract_factor(AdaptiveFactor.BEAUTY_SCORE, analysis) == 0.91

    def test_face_quality(self):
        analysis = make_analysis(face_quality=0.66)
        assert extract_factor(AdaptiveFactor.FACE_QUALITY, analysis) == 0.66

    def test_skin_quality_reads_skin_tone_confidence(self):
        analysis = make_analysis(skin_tone_confidence=0.7)
        assert extract_factor(AdaptiveFactor.SKIN_QUALITY, analysis) == 0.7


class TestMissingFaceDefaults:
    """Absent optional data falls back instead of raising"""

    def test_no_face_adjustment_defaults_to_neutral(self, landscape):
        assert extract_factor(AdaptiveFactor.FACE_QUALITY, landscape) == 0.5
        assert extract_factor(AdaptiveFactor.SKIN_QUALITY, landscape) == 0.5

    def test_no_face_applicability_defaults_to_zero(self, landscape):
        purpose = FactorPurpose.APPLICABILITY
        assert extract_factor(AdaptiveFactor.FACE_QUALITY, landscape, purpose=purpose) == 0.0
        assert extract_factor(AdaptiveFactor.SKIN_QUALITY, landscape, purpose=purpose) == 0.0

    def test_missing_skin_tone_with_face(self):
        analysis = make_analysis(skin_tone_confidence=None)
        assert extract_factor(AdaptiveFactor.SKIN_QUALITY, analysis) == 0.5


class TestAgeFactor:
    """Age bracket normalisation and fallbacks"""

    @pytest.mark.parametrize("category,expected", [
        (AgeCategory.CHILD, 0.1),
        (AgeCategory.TEENAGER, 0.3),
        (AgeCategory.YOUNG_ADULT, 0.5),
        (AgeCategory.ADULT, 0.7),
        (AgeCategory.SENIOR, 0.9),
    ])
    def test_age_mapping(self, category, expected):
        analysis = make_analysis(age_category=category)
        assert extract_factor(AdaptiveFactor.AGE, analysis) == expected

    def test_age_without_face_is_neutral(self, landscape):
        assert extract_factor(AdaptiveFactor.AGE, landscape) == 0.5

    def test_age_falls_back_to_declared_category(self, landscape):
        user = UserLearningProfile(user_id="u", age_category=AgeCategory.SENIOR)
        assert extract_factor(AdaptiveFactor.AGE, landscape, user) == 0.9

    def test_detected_age_wins_over_declared(self):
        analysis = make_analysis(age_category=AgeCategory.CHILD)
        user = UserLearningProfile(user_id="u", age_category=AgeCategory.SENIOR)
        assert extract_factor(AdaptiveFactor.AGE, analysis, user) == 0.1
