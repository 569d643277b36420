"""FastAPI request/response Pydantic models"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from models.analysis import AnalysisSnapshot, FaceAnalysis
from models.enums import AgeCategory, EnhancementType


# ========== Analysis Input ==========
class FaceAnalysisModel(BaseModel):
    """Primary detected face"""
    face_quality: float = Field(..., ge=0.0, le=1.0, description="Overall face quality score")
    skin_tone_confidence: Optional[float] = Field(default=None, ge=0.0, le=1.0, description="Skin tone classifier confidence")
    age_category: Optional[AgeCategory] = Field(default=None, description="Detected age bracket")


class AnalysisModel(BaseModel):
    """Photo analysis snapshot produced by the vision pipeline"""
    image_quality: float = Field(..., ge=0.0, le=1.0)
    lighting_quality: float = Field(..., ge=0.0, le=1.0)
    beauty_score: float = Field(..., ge=0.0, le=1.0)
    primary_face: Optional[FaceAnalysisModel] = None
    scene_type: Optional[str] = None

    def to_snapshot(self) -> AnalysisSnapshot:
        face = None
        if self.primary_face is not None:
            face = FaceAnalysis(
                face_quality=self.primary_face.face_quality,
                skin_tone_confidence=self.primary_face.skin_tone_confidence,
                age_category=self.primary_face.age_category,
            )
        return AnalysisSnapshot(
            image_quality=self.image_quality,
            lighting_quality=self.lighting_quality,
            beauty_score=self.beauty_score,
            primary_face=face,
            scene_type=self.scene_type,
        )


# ========== Recommendations ==========
class RecommendationRequest(BaseModel):
    """Recommendation request"""
    analysis: AnalysisModel
    profile: str = Field(default="Natural", description="Catalog profile name")
    user_id: Optional[str] = Field(default=None, description="Personalise with this user's learning profile")
    top_n: Optional[int] = Field(default=None, ge=1, le=20, description="Size of the ranked shortlist")


class RecommendationItem(BaseModel):
    """One recommended operation"""
    type: EnhancementType
    confidence: float
    intensity: float
    reasoning: str
    priority: str
    processing_order: int
    ranking_score: float
    effectiveness_score: float
    impact: str
    personalized: bool


class RecommendationResponse(BaseModel):
    """Recommendation response"""
    profile: str
    applicable: bool
    personalized: bool
    recommendations: List[RecommendationItem]  # processing order
    top: List[RecommendationItem]              # ranked by confidence x priority weight


class ApplicableProfilesRequest(BaseModel):
    analysis: AnalysisModel
    user_id: Optional[str] = None


class ApplicableProfilesResponse(BaseModel):
    profiles: List[str]


# ========== Feedback ==========
class FeedbackRequest(BaseModel):
    """Feedback on a single applied operation"""
    user_id: str = Field(..., min_length=1)
    enhancement_type: EnhancementType
    applied_intensity: float = Field(..., ge=0.0, le=1.0)
    satisfaction_score: float = Field(..., ge=0.0, le=1.0)
    visual_improvement_rating: float = Field(..., ge=0.0, le=1.0)
    would_use_again: bool = False
    comments: Optional[str] = None
    image_analysis_id: Optional[str] = None


class FeedbackResponse(BaseModel):
    """Feedback submission response"""
    success: bool
    message: str
    user_id: str
    enhancement_type: EnhancementType
    preference_weight: float
    confidence_adjustment: float
    usage_count: int
    history_size: int


class EnhancementDetailModel(BaseModel):
    type: EnhancementType
    intensity: float = Field(..., ge=0.0, le=1.0)


class SessionFeedbackRequest(BaseModel):
    """Feedback on a whole enhancement session"""
    satisfaction: float = Field(..., ge=0.0, le=1.0)
    naturalness: float = Field(..., ge=0.0, le=1.0)
    overall_rating: float = Field(..., ge=0.0, le=1.0)
    would_use_again: bool = False
    enhancement_details: List[EnhancementDetailModel] = Field(default_factory=list)
    enhancement_result_id: Optional[str] = None
    comments: Optional[str] = None


# ========== Custom Profiles ==========
class CustomProfileRequest(BaseModel):
    """Create or refresh a user's custom profile"""
    base_profile: str = Field(default="Natural")
    analysis: AnalysisModel
    name: Optional[str] = None


class EnhancementModel(BaseModel):
    type: EnhancementType
    intensity: float


class CustomProfileResponse(BaseModel):
    id: str
    user_id: str
    name: str
    base_profile: Optional[str]
    enhancements: List[EnhancementModel]
    confidence: float
    usage_count: int
    average_rating: float
    preferred_intensities: Dict[str, float]
    successful_combinations: List[List[str]]
    history_size: int


class AgeCategoryRequest(BaseModel):
    age_category: Optional[AgeCategory] = None
