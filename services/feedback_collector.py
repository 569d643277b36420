"""
Feedback ingestion

Validates raw feedback values and routes them to the learning store and the
custom profile learner. Out-of-range scores are rejected, never clamped.
"""

import logging
import threading
from typing import Iterable, Optional, Tuple

from core.exceptions import InvalidFeedbackException
from core.logging import FEEDBACK_REJECTED, log_structured
from models.custom_profile import CustomEnhancementProfile, Enhancement, UserEnhancementFeedback
from models.enums import EnhancementType
from models.learning import EnhancementFeedback, UserLearningProfile
from services.custom_profile_learner import CustomProfileLearner
from services.learning_store import UserLearningStore

logger = logging.getLogger(__name__)


def _parse_type(value) -> EnhancementType:
    try:
        return EnhancementType(value)
    except ValueError:
        raise InvalidFeedbackException(
            "enhancement_type", value, message=f"Unknown enhancement type in feedback: {value}"
        )


class FeedbackCollector:
    """Feedback ingestion boundary"""

    def __init__(self, learning_store: UserLearningStore, custom_learner: CustomProfileLearner):
        self.learning_store = learning_store
        self.custom_learner = custom_learner
        self.accepted_count = 0
        self.rejected_count = 0
        self._counter_lock = threading.Lock()

    def submit_enhancement_feedback(
        self,
        user_id: str,
        enhancement_type,
        applied_intensity: float,
        satisfaction_score: float,
        visual_improvement_rating: float,
        would_use_again: bool,
        comments: Optional[str] = None,
        image_analysis_id: Optional[str] = None
    ) -> UserLearningProfile:
        """
        Record feedback on a single operation

        Returns:
            Snapshot of the user's updated learning profile

        Raises:
            InvalidFeedbackException: unknown type or score outside [0, 1]
        """
        try:
            feedback = EnhancementFeedback(
                user_id=user_id,
                enhancement_type=_parse_type(enhancement_type),
                applied_intensity=applied_intensity,
                satisfaction_score=satisfaction_score,
                visual_improvement_rating=visual_improvement_rating,
                would_use_again=would_use_again,
                comments=comments,
                image_analysis_id=image_analysis_id,
            )
        except InvalidFeedbackException as e:
            self._reject(user_id, e)
            raise

        self._accept()
        return self.learning_store.apply_feedback(feedback)

    def submit_session_feedback(
        self,
        user_id: str,
        satisfaction: float,
        naturalness: float,
        overall_rating: float,
        would_use_again: bool,
        enhancement_details: Iterable[Tuple[object, float]] = (),
        enhancement_result_id: Optional[str] = None,
        comments: Optional[str] = None
    ) -> CustomEnhancementProfile:
        """
        Record feedback on a whole enhancement session

        Args:
            enhancement_details: (type, intensity) pairs that were applied

        Returns:
            Snapshot of the user's updated custom profile
        """
        try:
            details = tuple(
                Enhancement(type=_parse_type(enhancement_type), intensity=intensity)
                for enhancement_type, intensity in enhancement_details
            )
            feedback = UserEnhancementFeedback(
                user_id=user_id,
                satisfaction=satisfaction,
                naturalness=naturalness,
                overall_rating=overall_rating,
                would_use_again=would_use_again,
                enhancement_details=details,
                enhancement_result_id=enhancement_result_id,
                comments=comments,
            )
        except InvalidFeedbackException as e:
            self._reject(user_id, e)
            raise

        self._accept()
        return self.custom_learner.update_from_feedback(feedback)

    def _accept(self) -> None:
        with self._counter_lock:
            self.accepted_count += 1

    def _reject(self, user_id: str, error: InvalidFeedbackException) -> None:
        with self._counter_lock:
            self.rejected_count += 1
        logger.warning(f"⚠️ Feedback rejected for {user_id}: {error.message}")
        log_structured(FEEDBACK_REJECTED, {
            "user_id": user_id,
            "field": error.field,
            "value": error.value,
        })
