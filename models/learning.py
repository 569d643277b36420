"""
Per-user learning state

UserLearningProfile is mutated only through apply_feedback / update_preferences /
update_effectiveness_data. Callers that share a profile across threads go through
services.learning_store.UserLearningStore, which serializes writers per user.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

from core.exceptions import InvalidFeedbackException
from models.enums import AgeCategory, EnhancementType, FeedbackCategory

# Learning constants
HISTORY_LIMIT = 50
NEUTRAL_PREFERENCE = 0.5
NEUTRAL_SATISFACTION = 0.5
PREFERENCE_LEARNING_RATE = 0.2
PREFERENCE_MIN = 0.1
PREFERENCE_MAX = 1.0
USAGE_BONUS_PER_USE = 0.05
USAGE_BONUS_CAP = 0.3
SATISFACTION_BONUS_SCALE = 0.4
CONFIDENCE_ADJUSTMENT_MIN = 0.5
CONFIDENCE_ADJUSTMENT_MAX = 1.2


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def validate_unit_score(field_name: str, value: float) -> None:
    """Reject scores outside [0, 1] instead of clamping them"""
    if value is None or not 0.0 <= value <= 1.0:
        raise InvalidFeedbackException(field_name, value)


@dataclass(frozen=True)
class EnhancementFeedback:
    """User verdict on a single applied operation"""
    user_id: str
    enhancement_type: EnhancementType
    applied_intensity: float
    satisfaction_score: float
    visual_improvement_rating: float
    would_use_again: bool
    comments: Optional[str] = None
    image_analysis_id: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        validate_unit_score("applied_intensity", self.applied_intensity)
        validate_unit_score("satisfaction_score", self.satisfaction_score)
        validate_unit_score("visual_improvement_rating", self.visual_improvement_rating)

    @property
    def feedback_category(self) -> FeedbackCategory:
        return FeedbackCategory.for_score(self.satisfaction_score)


@dataclass
class UserLearningProfile:
    """Learned preferences of one user"""
    user_id: str
    preference_weights: Dict[EnhancementType, float] = field(default_factory=dict)
    satisfaction_history: List[EnhancementFeedback] = field(default_factory=list)
    enhancement_usage_frequency: Dict[EnhancementType, int] = field(default_factory=dict)
    average_satisfaction_scores: Dict[EnhancementType, float] = field(default_factory=dict)
    age_category: Optional[AgeCategory] = None   # self-declared, used when the photo has none
    last_updated: datetime = field(default_factory=_utcnow)

    # ========== Feedback Updates ==========
    def apply_feedback(self, feedback: EnhancementFeedback) -> None:
        """Fold one feedback event into weights, aggregates and history"""
        self.update_preferences(feedback)
        self.update_effectiveness_data(feedback)

    def update_preferences(self, feedback: EnhancementFeedback) -> None:
        """
        Update preference weight, usage count and running satisfaction average

        Args:
            feedback: Validated feedback for one operation
        """
        enhancement_type = feedback.enhancement_type

        current_weight = self.preference_weights.get(enhancement_type, NEUTRAL_PREFERENCE)
        adjustment = (feedback.satisfaction_score - 0.5) * PREFERENCE_LEARNING_RATE
        self.preference_weights[enhancement_type] = _clamp(
            current_weight + adjustment, PREFERENCE_MIN, PREFERENCE_MAX
        )

        count = self.enhancement_usage_frequency.get(enhancement_type, 0) + 1
        self.enhancement_usage_frequency[enhancement_type] = count

        # Exact incremental mean over every event for this type
        current_average = self.average_satisfaction_scores.get(enhancement_type, NEUTRAL_SATISFACTION)
        self.average_satisfaction_scores[enhancement_type] = (
            current_average * (count - 1) + feedback.satisfaction_score
        ) / count

        self.last_updated = _utcnow()

    def update_effectiveness_data(self, feedback: EnhancementFeedback) -> None:
        """Append to the bounded history, evicting the oldest entries"""
        self.satisfaction_history.append(feedback)
        while len(self.satisfaction_history) > HISTORY_LIMIT:
            self.satisfaction_history.pop(0)

    # ========== Adjustments Consumed by the Engine ==========
    def has_learned_weight(self, enhancement_type: EnhancementType) -> bool:
        return enhancement_type in self.preference_weights

    def get_preference_adjustment(self, enhancement_type: EnhancementType) -> float:
        return self.preference_weights.get(enhancement_type, NEUTRAL_PREFERENCE)

    def get_confidence_adjustment(self, enhancement_type: EnhancementType) -> float:
        """
        Bounded confidence multiplier from usage frequency and satisfaction

        Usage adds 0.05 per use up to 0.3; satisfaction adds up to +/-0.2.
        The result is clamped to [0.5, 1.2].
        """
        usage_count = self.enhancement_usage_frequency.get(enhancement_type, 0)
        satisfaction = self.average_satisfaction_scores.get(enhancement_type, NEUTRAL_SATISFACTION)

        usage_bonus = min(usage_count * USAGE_BONUS_PER_USE, USAGE_BONUS_CAP)
        satisfaction_bonus = (satisfaction - 0.5) * SATISFACTION_BONUS_SCALE

        return _clamp(
            1.0 + usage_bonus + satisfaction_bonus,
            CONFIDENCE_ADJUSTMENT_MIN,
            CONFIDENCE_ADJUSTMENT_MAX,
        )

    # ========== Summaries ==========
    @property
    def most_preferred_enhancements(self) -> List[EnhancementType]:
        ranked = sorted(self.preference_weights.items(), key=lambda item: item[1], reverse=True)
        return [enhancement_type for enhancement_type, _ in ranked[:5]]

    @property
    def least_preferred_enhancements(self) -> List[EnhancementType]:
        ranked = sorted(self.preference_weights.items(), key=lambda item: item[1])
        return [enhancement_type for enhancement_type, _ in ranked[:3]]

    def to_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "preference_weights": {k.value: v for k, v in self.preference_weights.items()},
            "usage_frequency": {k.value: v for k, v in self.enhancement_usage_frequency.items()},
            "average_satisfaction": {k.value: v for k, v in self.average_satisfaction_scores.items()},
            "confidence_adjustments": {
                k.value: self.get_confidence_adjustment(k) for k in self.enhancement_usage_frequency
            },
            "history_size": len(self.satisfaction_history),
            "most_preferred": [t.value for t in self.most_preferred_enhancements],
            "least_preferred": [t.value for t in self.least_preferred_enhancements],
            "age_category": self.age_category.value if self.age_category else None,
            "last_updated": self.last_updated.isoformat(),
        }
