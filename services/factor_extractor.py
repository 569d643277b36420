"""
Factor extraction

Maps an AdaptiveFactor onto a scalar read from an analysis snapshot. Never
raises for missing optional data: an absent face or skin-tone reading falls
back to a documented default.

Missing-data defaults:
    face_quality / skin_quality   0.5 for adjustments, 0.0 for applicability gates
    age                           user's declared age category, else 0.5
"""

from enum import Enum
from typing import Optional

from core.exceptions import UnknownFactorException
from models.analysis import AnalysisSnapshot
from models.enums import AGE_NORMALIZED_VALUES, AdaptiveFactor
from models.learning import UserLearningProfile

NEUTRAL_FACTOR_VALUE = 0.5


class FactorPurpose(str, Enum):
    """Why a factor is read; decides the fallback for missing face data"""
    ADJUSTMENT = "adjustment"
    APPLICABILITY = "applicability"


MISSING_FACE_DEFAULTS = {
    FactorPurpose.ADJUSTMENT: NEUTRAL_FACTOR_VALUE,
    FactorPurpose.APPLICABILITY: 0.0,
}


def extract_factor(
    factor: AdaptiveFactor,
    analysis: AnalysisSnapshot,
    user_profile: Optional[UserLearningProfile] = None,
    purpose: FactorPurpose = FactorPurpose.ADJUSTMENT
) -> float:
    """
    Read one factor from the analysis

    Args:
        factor: Factor to read
        analysis: Photo analysis snapshot
        user_profile: Optional learning profile (age fallback)
        purpose: Adjustment or applicability gate

    Returns:
        Factor value in [0, 1]
    """
    face = analysis.primary_face
    missing_face = MISSING_FACE_DEFAULTS[purpose]

    if factor == AdaptiveFactor.IMAGE_QUALITY:
        return analysis.image_quality
    elif factor == AdaptiveFactor.LIGHTING_QUALITY:
        return analysis.lighting_quality
    elif factor == AdaptiveFactor.FACE_QUALITY:
        return face.face_quality if face is not None else missing_face
    elif factor == AdaptiveFactor.SKIN_QUALITY:
        if face is None or face.skin_tone_confidence is None:
            return missing_face
        return face.skin_tone_confidence
    elif factor == AdaptiveFactor.BEAUTY_SCORE:
        return analysis.beauty_score
    elif factor == AdaptiveFactor.AGE:
        if face is not None and face.age_category is not None:
            return AGE_NORMALIZED_VALUES[face.age_category]
        if user_profile is not None and user_profile.age_category is not None:
            return AGE_NORMALIZED_VALUES[user_profile.age_category]
        return NEUTRAL_FACTOR_VALUE

    raise UnknownFactorException(str(factor))
