"""Dependency injection providers for FastAPI"""

from functools import lru_cache

from core.logging import logger
from services.custom_profile_learner import CustomProfileLearner
from services.feedback_collector import FeedbackCollector
from services.learning_store import UserLearningStore
from services.profile_catalog import ProfileCatalog, build_default_catalog
from services.recommendation_engine import RecommendationEngine


# ========== Dependency Providers (for FastAPI Depends) ==========
@lru_cache()
def get_profile_catalog() -> ProfileCatalog:
    """Catalog built once from the static profile table"""
    logger.info("🔧 Loading enhancement profile catalog...")
    return build_default_catalog()


@lru_cache()
def get_recommendation_engine() -> RecommendationEngine:
    return RecommendationEngine(get_profile_catalog())


@lru_cache()
def get_learning_store() -> UserLearningStore:
    return UserLearningStore()


@lru_cache()
def get_custom_profile_learner() -> CustomProfileLearner:
    return CustomProfileLearner()


@lru_cache()
def get_feedback_collector() -> FeedbackCollector:
    return FeedbackCollector(get_learning_store(), get_custom_profile_learner())


def reset_dependencies() -> None:
    """Drop cached instances (tests and admin reloads)"""
    get_profile_catalog.cache_clear()
    get_recommendation_engine.cache_clear()
    get_learning_store.cache_clear()
    get_custom_profile_learner.cache_clear()
    get_feedback_collector.cache_clear()
