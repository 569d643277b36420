"""Tests for per-user learning profiles"""

import pytest

from conftest import make_feedback
from core.exceptions import InvalidFeedbackException
from models.enums import EnhancementType, FeedbackCategory
from models.learning import HISTORY_LIMIT, UserLearningProfile

T = EnhancementType


class TestFeedbackValidation:
    """Scores outside [0, 1] are rejected, never clamped"""

    @pytest.mark.parametrize("field", ["satisfaction_score", "applied_intensity", "visual_improvement_rating"])
    def test_out_of_range_rejected(self, field):
        with pytest.raises(InvalidFeedbackException) as exc_info:
            make_feedback(**{field: 1.2})
        assert exc_info.value.field == field

    def test_negative_rejected(self):
        with pytest.raises(InvalidFeedbackException):
            make_feedback(satisfaction_score=-0.1)

    @pytest.mark.parametrize("score,category", [
        (0.95, FeedbackCategory.EXCELLENT),
        (0.6, FeedbackCategory.GOOD),
        (0.45, FeedbackCategory.NEUTRAL),
        (0.2, FeedbackCategory.POOR),
        (0.1, FeedbackCategory.TERRIBLE),
    ])
    def test_feedback_category(self, score, category):
        assert make_feedback(satisfaction_score=score).feedback_category == category


class TestPreferenceUpdates:
    """Preference weight, usage and running average"""

    def test_single_positive_feedback(self, learning_profile):
        learning_profile.apply_feedback(make_feedback(satisfaction_score=0.9))
        assert learning_profile.get_preference_adjustment(T.SKIN_SMOOTHING) == pytest.approx(0.58)
        assert learning_profile.enhancement_usage_frequency[T.SKIN_SMOOTHING] == 1
        assert learning_profile.average_satisfaction_scores[T.SKIN_SMOOTHING] == pytest.approx(0.9)

    def test_running_average_is_exact_mean(self, learning_profile):
        for score in (0.9, 0.3, 0.6):
            learning_profile.apply_feedback(make_feedback(satisfaction_score=score))
        assert learning_profile.average_satisfaction_scores[T.SKIN_SMOOTHING] == pytest.approx(0.6)
        assert learning_profile.enhancement_usage_frequency[T.SKIN_SMOOTHING] == 3

    def test_weight_bounded_above(self, learning_profile):
        for _ in range(20):
            learning_profile.apply_feedback(make_feedback(satisfaction_score=1.0))
        assert learning_profile.get_preference_adjustment(T.SKIN_SMOOTHING) == 1.0

    def test_weight_bounded_below(self, learning_profile):
        for _ in range(20):
            learning_profile.apply_feedback(make_feedback(satisfaction_score=0.0))
        assert learning_profile.get_preference_adjustment(T.SKIN_SMOOTHING) == pytest.approx(0.1)

    def test_unrated_type_is_neutral(self, learning_profile):
        assert learning_profile.get_preference_adjustment(T.CONTRAST) == 0.5
        assert learning_profile.has_learned_weight(T.CONTRAST) is False

    def test_types_learn_independently(self, learning_profile):
        learning_profile.apply_feedback(make_feedback(enhancement_type=T.CONTRAST, satisfaction_score=0.0))
        learning_profile.apply_feedback(make_feedback(enhancement_type=T.CLARITY, satisfaction_score=1.0))
        assert learning_profile.get_preference_adjustment(T.CONTRAST) == pytest.approx(0.4)
        assert learning_profile.get_preference_adjustment(T.CLARITY) == pytest.approx(0.6)


class TestConfidenceAdjustment:
    """Bounded multiplier from usage and satisfaction"""

    def test_no_history_is_neutral(self, learning_profile):
        assert learning_profile.get_confidence_adjustment(T.CONTRAST) == 1.0

    def test_saturates_at_upper_bound(self, learning_profile):
        for _ in range(10):
            learning_profile.apply_feedback(make_feedback(satisfaction_score=1.0))
        # 1 + 0.3 + 0.2 clamps to 1.2
        assert learning_profile.get_confidence_adjustment(T.SKIN_SMOOTHING) == 1.2

    def test_neutral_satisfaction_only_counts_usage(self, learning_profile):
        for _ in range(3):
            learning_profile.apply_feedback(make_feedback(satisfaction_score=0.5))
        assert learning_profile.get_confidence_adjustment(T.SKIN_SMOOTHING) == pytest.approx(1.15)

    def test_always_within_bounds(self, learning_profile):
        for score in (0.0, 0.1, 0.0, 0.2, 0.0):
            learning_profile.apply_feedback(make_feedback(satisfaction_score=score))
            adjustment = learning_profile.get_confidence_adjustment(T.SKIN_SMOOTHING)
            assert 0.5 <= adjustment <= 1.2


class TestHistory:
    """Bounded satisfaction history"""

    def test_history_capped_with_oldest_evicted(self, learning_profile):
        feedbacks = [make_feedback(satisfaction_score=(i % 10) / 10) for i in range(HISTORY_LIMIT + 1)]
        for feedback in feedbacks:
            learning_profile.apply_feedback(feedback)

        assert len(learning_profile.satisfaction_history) == 50
        assert learning_profile.satisfaction_history[0].id == feedbacks[1].id
        assert learning_profile.satisfaction_history[-1].id == feedbacks[-1].id

    def test_aggregates_keep_counting_past_cap(self, learning_profile):
        for _ in range(HISTORY_LIMIT + 5):
            learning_profile.apply_feedback(make_feedback())
        assert learning_profile.enhancement_usage_frequency[T.SKIN_SMOOTHING] == 55


class TestSummaries:
    """Most/least preferred and serialisation"""

    def test_most_and_least_preferred(self):
        profile = UserLearningProfile(user_id="u")
        scores = {
            T.CONTRAST: 1.0, T.CLARITY: 0.9, T.WARMTH: 0.7, T.SATURATION: 0.5,
            T.BRIGHTNESS: 0.3, T.SHADOWS: 0.1, T.HIGHLIGHTS: 0.0,
        }
        for enhancement_type, score in scores.items():
            profile.apply_feedback(make_feedback(enhancement_type=enhancement_type, satisfaction_score=score))

        assert profile.most_preferred_enhancements == [T.CONTRAST, T.CLARITY, T.WARMTH, T.SATURATION, T.BRIGHTNESS]
        assert profile.least_preferred_enhancements == [T.HIGHLIGHTS, T.SHADOWS, T.BRIGHTNESS]

    def test_to_dict(self, learning_profile):
        learning_profile.apply_feedback(make_feedback(satisfaction_score=0.9))
        data = learning_profile.to_dict()
        assert data["user_id"] == "user_1"
        assert data["preference_weights"]["skin_smoothing"] == pytest.approx(0.58)
        assert data["history_size"] == 1
        assert data["most_preferred"] == ["skin_smoothing"]
