"""Services module for Glow Engine"""

from services.profile_catalog import ProfileCatalog
from services.recommendation_engine import RecommendationEngine
from services.learning_store import UserLearningStore
from services.custom_profile_learner import CustomProfileLearner
from services.feedback_collector import FeedbackCollector

__all__ = [
    "ProfileCatalog",
    "RecommendationEngine",
    "UserLearningStore",
    "CustomProfileLearner",
    "FeedbackCollector",
]
