"""
Template-based recommendation reasoning

Builds a short explanation for each recommended operation from the profile,
the adjustments that fired and any learned personalisation. Output is
deterministic for a given input so that recommendations stay reproducible.
"""

import logging
from typing import Dict, List, Optional

from models.enums import AdaptiveFactor, EnhancementType
from services.intensity_calculator import AppliedAdjustment

logger = logging.getLogger(__name__)


class ReasonGenerator:
    """Template-based reasoning generator"""

    # ========== Per-operation base sentences ==========
    OPERATION_TEMPLATES: Dict[EnhancementType, str] = {
        EnhancementType.AUTO_ENHANCE: "{profile} starts with a balanced auto-enhance pass",
        EnhancementType.BRIGHTNESS: "{profile} lifts overall brightness",
        EnhancementType.CONTRAST: "{profile} adds contrast for depth",
        EnhancementType.SATURATION: "{profile} boosts color vibrancy",
        EnhancementType.CLARITY: "{profile} sharpens fine detail",
        EnhancementType.SKIN_SMOOTHING: "{profile} evens out skin texture",
        EnhancementType.EYE_BRIGHTENING: "{profile} brightens the eyes",
        EnhancementType.TEETH_WHITENING: "{profile} whitens the smile",
        EnhancementType.LIP_ENHANCEMENT: "{profile} defines the lips",
        EnhancementType.BACKGROUND_BLUR: "{profile} separates subject from background",
    }
    DEFAULT_TEMPLATE = "{profile} applies {operation}"

    # ========== Factor phrases for fired adjustments ==========
    FACTOR_PHRASES: Dict[AdaptiveFactor, str] = {
        AdaptiveFactor.IMAGE_QUALITY: "image quality",
        AdaptiveFactor.LIGHTING_QUALITY: "lighting",
        AdaptiveFactor.FACE_QUALITY: "face quality",
        AdaptiveFactor.SKIN_QUALITY: "skin analysis",
        AdaptiveFactor.BEAUTY_SCORE: "beauty score",
        AdaptiveFactor.AGE: "age",
    }

    def generate(
        self,
        enhancement_type: EnhancementType,
        profile_name: str,
        adjustments: List[AppliedAdjustment],
        personalized: bool = False,
        preference_weight: Optional[float] = None
    ) -> str:
        """
        Build the reasoning sentence

        Args:
            enhancement_type: Recommended operation
            profile_name: Profile the operation came from
            adjustments: Trace from the intensity calculation
            personalized: Whether learned preferences were blended in
            preference_weight: Learned preference weight, when personalized

        Returns:
            Reasoning text
        """
        template = self.OPERATION_TEMPLATES.get(enhancement_type, self.DEFAULT_TEMPLATE)
        parts = [template.format(profile=profile_name, operation=enhancement_type.display_name.lower())]

        for applied in adjustments:
            if not applied.adjustment.is_gated or not applied.triggered:
                continue
            phrase = self.FACTOR_PHRASES[applied.adjustment.factor]
            direction = "increased" if applied.multiplier > 1.0 else "reduced"
            parts.append(
                f"intensity {direction} x{applied.multiplier:g} because {phrase} "
                f"{applied.adjustment.condition.symbol} {applied.adjustment.threshold:g}"
            )

        if personalized and preference_weight is not None:
            parts.append(f"tuned to your past feedback (preference {preference_weight:.2f})")

        return "; ".join(parts)


# ========== Shared instance ==========
_generator_instance = None


def get_reason_generator() -> ReasonGenerator:
    global _generator_instance

    if _generator_instance is None:
        _generator_instance = ReasonGenerator()
        logger.info("✅ Reason generator ready")

    return _generator_instance
