"""
Per-user learning profile store

Holds UserLearningProfile records in memory behind one lock per user, so
feedback for the same user is applied strictly one event at a time while
different users proceed in parallel. Readers get deep-copied snapshots.

Persistence is the caller's concern: hydrate with load() and persist the
snapshots returned by apply_feedback().
"""

import copy
import logging
import threading
from typing import Dict, List, Optional

from core.exceptions import LearningProfileNotFoundException
from core.logging import FEEDBACK_APPLIED, log_structured
from models.enums import AgeCategory
from models.learning import EnhancementFeedback, UserLearningProfile

logger = logging.getLogger(__name__)


class UserLearningStore:
    """Serialized-writer store of learning profiles"""

    def __init__(self):
        self._profiles: Dict[str, UserLearningProfile] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, user_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[user_id] = lock
            return lock

    def _get_or_create(self, user_id: str) -> UserLearningProfile:
        profile = self._profiles.get(user_id)
        if profile is None:
            profile = UserLearningProfile(user_id=user_id)
            self._profiles[user_id] = profile
            logger.info(f"🆕 Learning profile created: {user_id}")
        return profile

    # ========== Writes ==========
    def apply_feedback(self, feedback: EnhancementFeedback) -> UserLearningProfile:
        """
        Apply one feedback event for its user

        Args:
            feedback: Validated feedback

        Returns:
            Snapshot of the updated profile
        """
        with self._lock_for(feedback.user_id):
            profile = self._get_or_create(feedback.user_id)
            profile.apply_feedback(feedback)
            snapshot = copy.deepcopy(profile)

        log_structured(FEEDBACK_APPLIED, {
            "user_id": feedback.user_id,
            "enhancement_type": feedback.enhancement_type.value,
            "satisfaction_score": feedback.satisfaction_score,
            "applied_intensity": feedback.applied_intensity,
            "preference_weight": snapshot.get_preference_adjustment(feedback.enhancement_type),
            "history_size": len(snapshot.satisfaction_history),
        })
        return snapshot

    def apply_feedback_batch(self, feedbacks: List[EnhancementFeedback]) -> Dict[str, UserLearningProfile]:
        """Apply events in list order; returns the final snapshot per user"""
        snapshots = {}
        for feedback in feedbacks:
            snapshots[feedback.user_id] = self.apply_feedback(feedback)
        return snapshots

    def set_age_category(self, user_id: str, age_category: Optional[AgeCategory]) -> UserLearningProfile:
        with self._lock_for(user_id):
            profile = self._get_or_create(user_id)
            profile.age_category = age_category
            return copy.deepcopy(profile)

    def load(self, profile: UserLearningProfile) -> None:
        """Hydrate a profile read by the persistence layer"""
        with self._lock_for(profile.user_id):
            self._profiles[profile.user_id] = copy.deepcopy(profile)

    # ========== Reads ==========
    def snapshot(self, user_id: str) -> Optional[UserLearningProfile]:
        """Consistent copy of the user's profile, or None when unknown"""
        with self._registry_lock:
            lock = self._locks.get(user_id)
        if lock is None:
            return None
        with lock:
            profile = self._profiles.get(user_id)
            return copy.deepcopy(profile) if profile is not None else None

    def get(self, user_id: str) -> UserLearningProfile:
        profile = self.snapshot(user_id)
        if profile is None:
            raise LearningProfileNotFoundException(user_id)
        return profile

    def __contains__(self, user_id: str) -> bool:
        return user_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)
