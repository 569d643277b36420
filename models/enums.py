"""Closed vocabularies shared by the engine, the catalog and the API"""

from enum import Enum


class EnhancementType(str, Enum):
    """Enhancement operation identifiers"""
    # Basic adjustments
    BRIGHTNESS = "brightness"
    CONTRAST = "contrast"
    SATURATION = "saturation"
    EXPOSURE = "exposure"
    HIGHLIGHTS = "highlights"
    SHADOWS = "shadows"
    CLARITY = "clarity"
    WARMTH = "warmth"

    # Beauty enhancements
    SKIN_SMOOTHING = "skin_smoothing"
    SKIN_TONE = "skin_tone"
    BLEMISH_REMOVAL = "blemish_removal"
    EYE_BRIGHTENING = "eye_brightening"
    TEETH_WHITENING = "teeth_whitening"
    LIP_ENHANCEMENT = "lip_enhancement"
    FACE_SLIMMING = "face_slimming"
    EYE_ENLARGEMENT = "eye_enlargement"

    # AI-powered enhancements
    AUTO_ENHANCE = "auto_enhance"
    PORTRAIT_MODE = "portrait_mode"
    BACKGROUND_BLUR = "background_blur"
    SMART_FILTERS = "smart_filters"
    AGE_REDUCTION = "age_reduction"
    MAKEUP_APPLICATION = "makeup_application"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


class AdaptiveFactor(str, Enum):
    """Analysis signals that conditions and adjustments can read"""
    IMAGE_QUALITY = "image_quality"
    LIGHTING_QUALITY = "lighting_quality"
    FACE_QUALITY = "face_quality"
    SKIN_QUALITY = "skin_quality"
    BEAUTY_SCORE = "beauty_score"
    AGE = "age"


class ComparisonOperator(str, Enum):
    """Comparison operators for conditions"""
    GREATER_THAN = "gt"
    LESS_THAN = "lt"
    EQUAL_TO = "eq"
    GREATER_OR_EQUAL = "gte"
    LESS_OR_EQUAL = "lte"

    @property
    def symbol(self) -> str:
        return {
            ComparisonOperator.GREATER_THAN: ">",
            ComparisonOperator.LESS_THAN: "<",
            ComparisonOperator.EQUAL_TO: "≈",
            ComparisonOperator.GREATER_OR_EQUAL: ">=",
            ComparisonOperator.LESS_OR_EQUAL: "<=",
        }[self]


class AgeCategory(str, Enum):
    """Age bracket reported by the face analysis"""
    CHILD = "child"
    TEENAGER = "teenager"
    YOUNG_ADULT = "young_adult"
    ADULT = "adult"
    SENIOR = "senior"


# Fixed age bracket -> [0.1, 0.9] mapping used by the age factor
AGE_NORMALIZED_VALUES = {
    AgeCategory.CHILD: 0.1,
    AgeCategory.TEENAGER: 0.3,
    AgeCategory.YOUNG_ADULT: 0.5,
    AgeCategory.ADULT: 0.7,
    AgeCategory.SENIOR: 0.9,
}


class EnhancementMode(str, Enum):
    """One-tap enhancement modes"""
    NATURAL = "natural"
    GLAM = "glam"
    HD = "hd"
    STUDIO = "studio"
    CUSTOM = "custom"


class TargetAudience(str, Enum):
    """Audience a profile is tuned for"""
    GENERAL = "general"
    PROFESSIONAL = "professional"
    SOCIAL = "social"
    ARTISTIC = "artistic"
    COMMERCIAL = "commercial"


class RecommendationPriority(str, Enum):
    """Priority bands exposed on recommendations"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def weight(self) -> float:
        return PRIORITY_WEIGHTS[self]

    @classmethod
    def from_config_priority(cls, priority: int) -> "RecommendationPriority":
        """Map an integer configuration priority onto a band"""
        if priority >= 95:
            return cls.CRITICAL
        if priority >= 85:
            return cls.HIGH
        if priority >= 70:
            return cls.MEDIUM
        return cls.LOW


PRIORITY_WEIGHTS = {
    RecommendationPriority.LOW: 0.5,
    RecommendationPriority.MEDIUM: 0.7,
    RecommendationPriority.HIGH: 0.9,
    RecommendationPriority.CRITICAL: 1.0,
}


class ImpactLevel(str, Enum):
    """Expected visual impact of an operation at a given intensity"""
    SUBTLE = "subtle"
    MODERATE = "moderate"
    DRAMATIC = "dramatic"
    TRANSFORMATIVE = "transformative"

    @classmethod
    def for_intensity(cls, intensity: float) -> "ImpactLevel":
        if intensity >= 0.8:
            return cls.TRANSFORMATIVE
        if intensity >= 0.6:
            return cls.DRAMATIC
        if intensity >= 0.3:
            return cls.MODERATE
        return cls.SUBTLE


class FeedbackCategory(str, Enum):
    """Bucketed satisfaction levels"""
    EXCELLENT = "excellent"
    GOOD = "good"
    NEUTRAL = "neutral"
    POOR = "poor"
    TERRIBLE = "terrible"

    @classmethod
    def for_score(cls, score: float) -> "FeedbackCategory":
        if score >= 0.8:
            return cls.EXCELLENT
        if score >= 0.6:
            return cls.GOOD
        if score >= 0.4:
            return cls.NEUTRAL
        if score >= 0.2:
            return cls.POOR
        return cls.TERRIBLE
