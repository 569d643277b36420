"""
Adaptive intensity calculation

intensity = base_intensity * profile.intensity_multiplier * m_1 * ... * m_k

Adjustments are applied in declaration order with no intermediate clamping; the
running product is clamped once, to the profile's bounds (or [0, 1]).
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from models.analysis import AnalysisSnapshot
from models.enums import EnhancementType
from models.learning import UserLearningProfile
from models.profile import AdaptiveAdjustment, EnhancementConfiguration, EnhancementProfile
from services.condition_evaluator import evaluate_condition
from services.factor_extractor import NEUTRAL_FACTOR_VALUE, FactorPurpose, extract_factor


@dataclass(frozen=True)
class AppliedAdjustment:
    """Trace of one adjustment's effect, used for reasoning text"""
    adjustment: AdaptiveAdjustment
    factor_value: float
    multiplier: float
    triggered: bool


def adjustment_multiplier(
    adjustment: AdaptiveAdjustment,
    analysis: AnalysisSnapshot,
    user_profile: Optional[UserLearningProfile] = None
) -> AppliedAdjustment:
    """Effective multiplier of one adjustment for this analysis"""
    value = extract_factor(adjustment.factor, analysis, user_profile, FactorPurpose.ADJUSTMENT)

    if adjustment.is_gated:
        triggered = evaluate_condition(adjustment.condition, value, adjustment.threshold)
        multiplier = adjustment.multiplier if triggered else 1.0
        return AppliedAdjustment(adjustment, value, multiplier, triggered)

    # Continuous scaling
    multiplier = 1.0 + value * (adjustment.multiplier - 1.0)
    return AppliedAdjustment(adjustment, value, multiplier, True)


def compute_intensity_with_trace(
    config: EnhancementConfiguration,
    profile: EnhancementProfile,
    analysis: AnalysisSnapshot,
    user_profile: Optional[UserLearningProfile] = None
) -> Tuple[float, List[AppliedAdjustment]]:
    intensity = config.base_intensity * profile.intensity_multiplier
    trace = []

    for adjustment in config.adaptive_adjustments:
        applied = adjustment_multiplier(adjustment, analysis, user_profile)
        intensity *= applied.multiplier
        trace.append(applied)

    low, high = profile.intensity_bounds
    return max(low, min(high, intensity)), trace


def compute_intensity(
    config: EnhancementConfiguration,
    profile: EnhancementProfile,
    analysis: AnalysisSnapshot,
    user_profile: Optional[UserLearningProfile] = None
) -> float:
    """
    Final bounded intensity for one operation

    Args:
        config: Operation configuration
        profile: Owning profile (multiplier and bounds)
        analysis: Photo analysis snapshot
        user_profile: Optional learning profile (factor fallbacks)

    Returns:
        Intensity within the profile bounds
    """
    intensity, _ = compute_intensity_with_trace(config, profile, analysis, user_profile)
    return intensity


def adapted_intensity(
    profile: EnhancementProfile,
    enhancement_type: EnhancementType,
    analysis: AnalysisSnapshot,
    user_profile: Optional[UserLearningProfile] = None
) -> float:
    """Intensity for a type by lookup; neutral 0.5 when the profile lacks it"""
    config = profile.configuration_for(enhancement_type)
    if config is None:
        return NEUTRAL_FACTOR_VALUE
    return compute_intensity(config, profile, analysis, user_profile)
