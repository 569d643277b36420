"""
Custom profile learner

Builds per-user custom profiles from a base catalog profile and trains them
from session feedback. Like UserLearningStore, each user's record sits behind
its own lock so feedback for one user is applied in order.
"""

import copy
import logging
import threading
from typing import Dict, List, Optional

from core.exceptions import CustomProfileNotFoundException
from core.logging import CUSTOM_PROFILE_UPDATED, log_structured
from models.analysis import AnalysisSnapshot
from models.custom_profile import CustomEnhancementProfile, Enhancement, UserEnhancementFeedback
from models.learning import UserLearningProfile
from models.profile import EnhancementProfile
from services.intensity_calculator import compute_intensity
from services.recommendation_engine import resolve_selection

logger = logging.getLogger(__name__)


def base_enhancements(
    profile: EnhancementProfile,
    analysis: AnalysisSnapshot,
    user_profile: Optional[UserLearningProfile] = None
) -> List[Enhancement]:
    """Resolved operations of a profile at their adapted intensities, in processing order"""
    selected = resolve_selection(list(profile.enhancements))
    selected.sort(key=lambda config: (config.processing_order, -config.priority))
    return [
        Enhancement(type=config.type, intensity=compute_intensity(config, profile, analysis, user_profile))
        for config in selected
    ]


class CustomProfileLearner:
    """Owns and trains users' custom enhancement profiles"""

    def __init__(self):
        self._profiles: Dict[str, CustomEnhancementProfile] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, user_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[user_id] = lock
            return lock

    def build_profile(
        self,
        user_id: str,
        base_profile: EnhancementProfile,
        analysis: AnalysisSnapshot,
        user_profile: Optional[UserLearningProfile] = None,
        name: Optional[str] = None
    ) -> CustomEnhancementProfile:
        """
        Create or refresh a user's custom profile from a base profile

        The operation list is replaced; learned intensities, confidence, rating
        and usage carry over when the user already has a custom profile.

        Args:
            user_id: Owner
            base_profile: Catalog profile to start from
            analysis: Photo the profile is tuned on
            user_profile: Optional learning profile (factor fallbacks)
            name: Display name

        Returns:
            Snapshot of the stored custom profile
        """
        enhancements = base_enhancements(base_profile, analysis, user_profile)

        with self._lock_for(user_id):
            custom = self._profiles.get(user_id)
            if custom is None:
                custom = CustomEnhancementProfile(user_id=user_id)
                self._profiles[user_id] = custom
            custom.enhancements = enhancements
            custom.base_profile = base_profile.name
            if name:
                custom.name = name
            snapshot = copy.deepcopy(custom)

        logger.info(f"✅ Custom profile built for {user_id} from {base_profile.name}: {len(enhancements)} operations")
        return snapshot

    def update_from_feedback(self, feedback: UserEnhancementFeedback) -> CustomEnhancementProfile:
        """
        Apply one session feedback to the user's custom profile

        A user without a custom profile gets an empty one so that learned
        intensities are kept for the next build.
        """
        with self._lock_for(feedback.user_id):
            custom = self._profiles.get(feedback.user_id)
            if custom is None:
                custom = CustomEnhancementProfile(user_id=feedback.user_id)
                self._profiles[feedback.user_id] = custom
            custom.update_from_feedback(feedback)
            snapshot = copy.deepcopy(custom)

        log_structured(CUSTOM_PROFILE_UPDATED, {
            "user_id": feedback.user_id,
            "usage_count": snapshot.usage_count,
            "average_rating": snapshot.average_rating,
            "confidence": snapshot.confidence,
            "operations_rated": len(feedback.enhancement_details),
        })
        return snapshot

    def load(self, profile: CustomEnhancementProfile) -> None:
        """Hydrate a profile read by the persistence layer"""
        with self._lock_for(profile.user_id):
            self._profiles[profile.user_id] = copy.deepcopy(profile)

    def snapshot(self, user_id: str) -> Optional[CustomEnhancementProfile]:
        # Reads never register a lock; unknown users have none
        with self._registry_lock:
            lock = self._locks.get(user_id)
        if lock is None:
            return None
        with lock:
            custom = self._profiles.get(user_id)
            return copy.deepcopy(custom) if custom is not None else None

    def get(self, user_id: str) -> CustomEnhancementProfile:
        custom = self.snapshot(user_id)
        if custom is None:
            raise CustomProfileNotFoundException(user_id)
        return custom

    def adapted_enhancements(self, user_id: str) -> List[Enhancement]:
        """The user's operations with learned intensities blended in"""
        return self.get(user_id).adapted_enhancements()
