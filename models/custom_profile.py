"""
User-trained custom enhancement profiles

A CustomEnhancementProfile is the one mutable profile variant. It is owned by a
single user and updated in place on every session feedback.
"""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from models.enums import EnhancementType
from models.learning import HISTORY_LIMIT, validate_unit_score

PREFERRED_INTENSITY_DEFAULT = 0.5
PREFERRED_INTENSITY_STEP = 0.1
PREFERRED_INTENSITY_MIN = 0.1
PREFERRED_INTENSITY_MAX = 0.9
CONFIDENCE_DECAY = 0.8
CONFIDENCE_FEEDBACK_WEIGHT = 0.2
SUCCESSFUL_COMBINATION_SCORE = 0.8
SUCCESSFUL_COMBINATION_LIMIT = 20


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Enhancement:
    """An operation applied at a concrete intensity"""
    type: EnhancementType
    intensity: float

    def to_dict(self) -> dict:
        return {"type": self.type.value, "intensity": self.intensity}


@dataclass(frozen=True)
class UserEnhancementFeedback:
    """User verdict on a whole enhancement session"""
    user_id: str
    satisfaction: float
    naturalness: float
    overall_rating: float
    would_use_again: bool
    enhancement_details: Tuple[Enhancement, ...] = ()
    enhancement_result_id: Optional[str] = None
    comments: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        validate_unit_score("satisfaction", self.satisfaction)
        validate_unit_score("naturalness", self.naturalness)
        validate_unit_score("overall_rating", self.overall_rating)
        for detail in self.enhancement_details:
            validate_unit_score(f"enhancement_details.{detail.type.value}", detail.intensity)


@dataclass
class CustomProfileLearningData:
    """Learned intensities and bounded session history"""
    preferred_intensities: Dict[EnhancementType, float] = field(default_factory=dict)
    feedback_history: List[UserEnhancementFeedback] = field(default_factory=list)
    successful_combinations: List[Tuple[EnhancementType, ...]] = field(default_factory=list)

    def process_feedback(self, feedback: UserEnhancementFeedback) -> None:
        self.feedback_history.append(feedback)
        while len(self.feedback_history) > HISTORY_LIMIT:
            self.feedback_history.pop(0)

        adjustment = (feedback.satisfaction - 0.5) * PREFERRED_INTENSITY_STEP
        for detail in feedback.enhancement_details:
            current = self.preferred_intensities.get(detail.type, PREFERRED_INTENSITY_DEFAULT)
            self.preferred_intensities[detail.type] = max(
                PREFERRED_INTENSITY_MIN, min(PREFERRED_INTENSITY_MAX, current + adjustment)
            )

        if (
            feedback.would_use_again
            and feedback.satisfaction >= SUCCESSFUL_COMBINATION_SCORE
            and feedback.enhancement_details
        ):
            combination = tuple(detail.type for detail in feedback.enhancement_details)
            if combination not in self.successful_combinations:
                self.successful_combinations.append(combination)
                if len(self.successful_combinations) > SUCCESSFUL_COMBINATION_LIMIT:
                    self.successful_combinations.pop(0)

    def adapt_enhancements(self, enhancements: List[Enhancement]) -> List[Enhancement]:
        """Blend each intensity 50/50 with its learned preference, if any"""
        adapted = []
        for enhancement in enhancements:
            preferred = self.preferred_intensities.get(enhancement.type)
            if preferred is None:
                adapted.append(enhancement)
            else:
                adapted.append(replace(enhancement, intensity=(enhancement.intensity + preferred) / 2.0))
        return adapted


@dataclass
class CustomEnhancementProfile:
    """Per-user profile trained from session feedback"""
    user_id: str
    name: str = "My Custom Style"
    base_profile: Optional[str] = None
    enhancements: List[Enhancement] = field(default_factory=list)
    confidence: float = 0.5
    usage_count: int = 0
    average_rating: float = 0.0
    learning_data: CustomProfileLearningData = field(default_factory=CustomProfileLearningData)
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=_utcnow)
    last_updated: datetime = field(default_factory=_utcnow)

    def update_from_feedback(self, feedback: UserEnhancementFeedback) -> None:
        """
        Fold one session feedback into rating, confidence and learned intensities

        average_rating is a lifetime running mean; confidence is an exponential
        blend (decay 0.8) so it tracks recent sessions faster.
        """
        previous_count = self.usage_count
        self.usage_count += 1
        self.average_rating = (
            self.average_rating * previous_count + feedback.overall_rating
        ) / self.usage_count

        feedback_score = (feedback.satisfaction + feedback.naturalness) / 2.0
        self.confidence = self.confidence * CONFIDENCE_DECAY + feedback_score * CONFIDENCE_FEEDBACK_WEIGHT

        self.learning_data.process_feedback(feedback)
        self.last_updated = _utcnow()

    def adapted_enhancements(self) -> List[Enhancement]:
        return self.learning_data.adapt_enhancements(self.enhancements)

    def to_dict(self, adapted: bool = True) -> dict:
        enhancements = self.adapted_enhancements() if adapted else self.enhancements
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "base_profile": self.base_profile,
            "enhancements": [enhancement.to_dict() for enhancement in enhancements],
            "confidence": self.confidence,
            "usage_count": self.usage_count,
            "average_rating": self.average_rating,
            "preferred_intensities": {
                k.value: v for k, v in self.learning_data.preferred_intensities.items()
            },
            "successful_combinations": [
                [t.value for t in combination] for combination in self.learning_data.successful_combinations
            ],
            "history_size": len(self.learning_data.feedback_history),
            "created_at": self.created_at.isoformat(),
            "last_updated": self.last_updated.isoformat(),
        }
