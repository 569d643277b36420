# models/__init__.py
"""
Glow Engine - domain records

Analysis snapshots, enhancement profiles, learning profiles and the closed
vocabularies they are built from.
"""

from .analysis import AnalysisSnapshot, FaceAnalysis
from .enums import AdaptiveFactor, AgeCategory, ComparisonOperator, EnhancementType
from .learning import EnhancementFeedback, UserLearningProfile
from .profile import EnhancementConfiguration, EnhancementProfile

__all__ = [
    "AnalysisSnapshot",
    "FaceAnalysis",
    "AdaptiveFactor",
    "AgeCategory",
    "ComparisonOperator",
    "EnhancementType",
    "EnhancementFeedback",
    "UserLearningProfile",
    "EnhancementConfiguration",
    "EnhancementProfile",
]
