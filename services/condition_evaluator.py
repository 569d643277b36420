"""Comparison of extracted factor values against thresholds"""

from typing import Optional

from core.exceptions import UnknownComparisonOperatorException
from models.analysis import AnalysisSnapshot
from models.enums import ComparisonOperator
from models.learning import UserLearningProfile
from models.profile import ApplicabilityCondition, EnhancementProfile
from services.factor_extractor import FactorPurpose, extract_factor

EQUALITY_TOLERANCE = 0.01


def evaluate_condition(operator: ComparisonOperator, value: float, threshold: float) -> bool:
    """Evaluate `value <operator> threshold`"""
    if operator == ComparisonOperator.GREATER_THAN:
        return value > threshold
    elif operator == ComparisonOperator.LESS_THAN:
        return value < threshold
    elif operator == ComparisonOperator.EQUAL_TO:
        return abs(value - threshold) < EQUALITY_TOLERANCE
    elif operator == ComparisonOperator.GREATER_OR_EQUAL:
        return value >= threshold
    elif operator == ComparisonOperator.LESS_OR_EQUAL:
        return value <= threshold

    raise UnknownComparisonOperatorException(str(operator))


def is_condition_met(
    condition: ApplicabilityCondition,
    analysis: AnalysisSnapshot,
    user_profile: Optional[UserLearningProfile] = None
) -> bool:
    value = extract_factor(condition.factor, analysis, user_profile, FactorPurpose.APPLICABILITY)
    return evaluate_condition(condition.condition, value, condition.threshold)


def is_applicable(
    profile: EnhancementProfile,
    analysis: AnalysisSnapshot,
    user_profile: Optional[UserLearningProfile] = None
) -> bool:
    """True when every applicability condition holds (vacuously true when none)"""
    return all(
        is_condition_met(condition, analysis, user_profile)
        for condition in profile.applicability_conditions
    )
