"""Enhancement profile records (immutable catalog entries)"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Optional, Tuple

from models.enums import (
    AdaptiveFactor,
    ComparisonOperator,
    EnhancementMode,
    EnhancementType,
    TargetAudience,
)


@dataclass(frozen=True)
class AdaptiveAdjustment:
    """
    Multiplier applied to an operation's intensity

    With a threshold the multiplier is gated by the comparison; without one it
    is scaled linearly by the factor value: 1 + value * (multiplier - 1).
    """
    factor: AdaptiveFactor
    multiplier: float
    threshold: Optional[float] = None
    condition: ComparisonOperator = ComparisonOperator.GREATER_THAN

    @property
    def is_gated(self) -> bool:
        return self.threshold is not None


@dataclass(frozen=True)
class ApplicabilityCondition:
    """Hard gate on whether a profile is considered at all"""
    factor: AdaptiveFactor
    threshold: float
    condition: ComparisonOperator


@dataclass(frozen=True)
class EnhancementConfiguration:
    """One operation inside a profile"""
    type: EnhancementType
    base_intensity: float
    priority: int = 50
    adaptive_adjustments: Tuple[AdaptiveAdjustment, ...] = ()
    is_quick_processing: bool = False
    processing_order: int = 0
    prerequisites: FrozenSet[EnhancementType] = frozenset()
    conflicts_with: FrozenSet[EnhancementType] = frozenset()


@dataclass(frozen=True)
class EnhancementProfile:
    """Named bundle of enhancement configurations"""
    name: str
    mode: EnhancementMode
    enhancements: Tuple[EnhancementConfiguration, ...]
    description: str = ""
    intensity_multiplier: float = 1.0
    applicability_conditions: Tuple[ApplicabilityCondition, ...] = ()
    target_audience: TargetAudience = TargetAudience.GENERAL
    estimated_improvements: Dict[str, float] = field(default_factory=dict, hash=False, compare=False)
    average_processing_time: float = 2.0
    minimum_intensity: Optional[float] = None
    maximum_intensity: Optional[float] = None

    @property
    def id(self) -> str:
        return self.name.lower()

    @property
    def intensity_bounds(self) -> Tuple[float, float]:
        """Declared clamp range, [0, 1] when the profile declares none"""
        low = 0.0 if self.minimum_intensity is None else self.minimum_intensity
        high = 1.0 if self.maximum_intensity is None else self.maximum_intensity
        return low, high

    def configuration_for(self, enhancement_type: EnhancementType) -> Optional[EnhancementConfiguration]:
        for config in self.enhancements:
            if config.type == enhancement_type:
                return config
        return None

    def quick_enhancements(self) -> Tuple[EnhancementConfiguration, ...]:
        """Configurations cheap enough for a live preview"""
        return tuple(config for config in self.enhancements if config.is_quick_processing)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "mode": self.mode.value,
            "intensity_multiplier": self.intensity_multiplier,
            "target_audience": self.target_audience.value,
            "average_processing_time": self.average_processing_time,
            "estimated_improvements": dict(self.estimated_improvements),
            "applicability_conditions": [
                {
                    "factor": condition.factor.value,
                    "threshold": condition.threshold,
                    "condition": condition.condition.value,
                }
                for condition in self.applicability_conditions
            ],
            "enhancements": [
                {
                    "type": config.type.value,
                    "base_intensity": config.base_intensity,
                    "priority": config.priority,
                    "processing_order": config.processing_order,
                    "is_quick_processing": config.is_quick_processing,
                    "prerequisites": sorted(item.value for item in config.prerequisites),
                    "conflicts_with": sorted(item.value for item in config.conflicts_with),
                    "adaptive_adjustments": [
                        {
                            "factor": adjustment.factor.value,
                            "multiplier": adjustment.multiplier,
                            "threshold": adjustment.threshold,
                            "condition": adjustment.condition.value,
                        }
                        for adjustment in config.adaptive_adjustments
                    ],
                }
                for config in self.enhancements
            ],
        }
