"""Tests for the per-user learning store"""

import threading

import pytest

from conftest import make_feedback
from core.exceptions import LearningProfileNotFoundException
from models.enums import AgeCategory, EnhancementType
from models.learning import UserLearningProfile
from services.learning_store import UserLearningStore

T = EnhancementType


@pytest.fixture
def store():
    return UserLearningStore()


class TestStoreBasics:
    """Create, read and hydrate"""

    def test_unknown_user(self, store):
        assert store.snapshot("nobody") is None
        assert "nobody" not in store
        with pytest.raises(LearningProfileNotFoundException):
            store.get("nobody")

    def test_reads_for_unknown_users_allocate_nothing(self, store):
        for i in range(500):
            user_id = f"stranger_{i}"
            assert store.snapshot(user_id) is None
            assert user_id not in store
            with pytest.raises(LearningProfileNotFoundException):
                store.get(user_id)
        assert store._locks == {}
        assert len(store) == 0

    def test_feedback_creates_profile(self, store):
        snapshot = store.apply_feedback(make_feedback(user_id="alice"))
        assert snapshot.user_id == "alice"
        assert "alice" in store
        assert len(store) == 1

    def test_snapshots_are_copies(self, store):
        store.apply_feedback(make_feedback(user_id="alice"))
        snapshot = store.snapshot("alice")
        snapshot.preference_weights[T.CONTRAST] = 0.99
        assert T.CONTRAST not in store.get("alice").preference_weights

    def test_set_age_category(self, store):
        snapshot = store.set_age_category("bob", AgeCategory.ADULT)
        assert snapshot.age_category == AgeCategory.ADULT
        assert store.get("bob").age_category == AgeCategory.ADULT

    def test_load_hydrates_profile(self, store):
        profile = UserLearningProfile(user_id="carol", preference_weights={T.WARMTH: 0.8})
        store.load(profile)
        assert store.get("carol").get_preference_adjustment(T.WARMTH) == 0.8

    def test_batch_applies_in_order(self, store):
        feedbacks = [
            make_feedback(user_id="alice", satisfaction_score=1.0),
            make_feedback(user_id="bob", satisfaction_score=0.0),
            make_feedback(user_id="alice", satisfaction_score=1.0),
        ]
        snapshots = store.apply_feedback_batch(feedbacks)
        assert snapshots["alice"].enhancement_usage_frequency[T.SKIN_SMOOTHING] == 2
        assert snapshots["bob"].get_preference_adjustment(T.SKIN_SMOOTHING) == pytest.approx(0.4)


class TestConcurrency:
    """Writers for one user are serialized"""

    def test_concurrent_feedback_for_one_user(self, store):
        per_thread = 25
        threads = [
            threading.Thread(
                target=lambda: [store.apply_feedback(make_feedback(user_id="shared")) for _ in range(per_thread)]
            )
            for _ in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        profile = store.get("shared")
        assert profile.enhancement_usage_frequency[T.SKIN_SMOOTHING] == 8 * per_thread
        assert len(profile.satisfaction_history) == 50
        assert profile.get_preference_adjustment(T.SKIN_SMOOTHING) == 1.0

    def test_concurrent_feedback_for_many_users(self, store):
        def submit(user_id):
            for _ in range(10):
                store.apply_feedback(make_feedback(user_id=user_id, satisfaction_score=0.5))

        threads = [threading.Thread(target=submit, args=(f"user_{i}",)) for i in range(6)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(store) == 6
        for i in range(6):
            assert store.get(f"user_{i}").enhancement_usage_frequency[T.SKIN_SMOOTHING] == 10
