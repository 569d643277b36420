"""
Upstream photo analysis snapshot

The computer-vision pipeline produces these records; the engine only reads them.
"""

from dataclasses import dataclass
from typing import Optional

from core.exceptions import InvalidAnalysisException
from models.enums import AgeCategory


def _check_unit_interval(field_name: str, value: Optional[float]) -> None:
    if value is None:
        return
    if not 0.0 <= value <= 1.0:
        raise InvalidAnalysisException(field_name, value)


@dataclass(frozen=True)
class FaceAnalysis:
    """Primary detected face"""
    face_quality: float                            # overall face quality (0.0 ~ 1.0)
    skin_tone_confidence: Optional[float] = None   # skin tone classifier confidence
    age_category: Optional[AgeCategory] = None

    def __post_init__(self):
        _check_unit_interval("face_quality", self.face_quality)
        _check_unit_interval("skin_tone_confidence", self.skin_tone_confidence)


@dataclass(frozen=True)
class AnalysisSnapshot:
    """Structured analysis of one photo"""
    image_quality: float
    lighting_quality: float
    beauty_score: float
    primary_face: Optional[FaceAnalysis] = None
    scene_type: Optional[str] = None

    def __post_init__(self):
        _check_unit_interval("image_quality", self.image_quality)
        _check_unit_interval("lighting_quality", self.lighting_quality)
        _check_unit_interval("beauty_score", self.beauty_score)

    @property
    def has_face(self) -> bool:
        return self.primary_face is not None

    def to_dict(self) -> dict:
        """Convert to dict (for logging)"""
        face = None
        if self.primary_face is not None:
            face = {
                "face_quality": self.primary_face.face_quality,
                "skin_tone_confidence": self.primary_face.skin_tone_confidence,
                "age_category": self.primary_face.age_category.value if self.primary_face.age_category else None,
            }
        return {
            "image_quality": self.image_quality,
            "lighting_quality": self.lighting_quality,
            "beauty_score": self.beauty_score,
            "primary_face": face,
            "scene_type": self.scene_type,
        }
