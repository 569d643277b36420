"""Feedback submission endpoints"""

from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config.settings import settings
from core.dependencies import get_feedback_collector
from core.logging import logger
from api.dependencies import FeedbackRequest, FeedbackResponse
from services.feedback_collector import FeedbackCollector


router = APIRouter()

# Rate limiter
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


@router.post("/feedback", response_model=FeedbackResponse)
@limiter.limit(settings.FEEDBACK_RATE_LIMIT)
async def submit_feedback(
    request: Request,
    feedback_data: FeedbackRequest,
    collector: FeedbackCollector = Depends(get_feedback_collector)
) -> FeedbackResponse:
    """
    Per-operation feedback submission endpoint

    Args:
        request: Starlette Request (for SlowAPI rate limiting)
        feedback_data: FeedbackRequest model with:
            - user_id: str
            - enhancement_type: EnhancementType
            - applied_intensity, satisfaction_score, visual_improvement_rating: float in [0, 1]
            - would_use_again: bool

    Returns:
        FeedbackResponse with the user's updated learning state for that operation

    Raises:
        InvalidFeedbackException: 422 for out-of-range values
    """
    profile = collector.submit_enhancement_feedback(
        user_id=feedback_data.user_id,
        enhancement_type=feedback_data.enhancement_type,
        applied_intensity=feedback_data.applied_intensity,
        satisfaction_score=feedback_data.satisfaction_score,
        visual_improvement_rating=feedback_data.visual_improvement_rating,
        would_use_again=feedback_data.would_use_again,
        comments=feedback_data.comments,
        image_analysis_id=feedback_data.image_analysis_id,
    )

    enhancement_type = feedback_data.enhancement_type
    logger.info(
        f"✅ Feedback saved: user={feedback_data.user_id}, "
        f"type={enhancement_type.value}, satisfaction={feedback_data.satisfaction_score}"
    )

    return FeedbackResponse(
        success=True,
        message="Feedback recorded",
        user_id=feedback_data.user_id,
        enhancement_type=enhancement_type,
        preference_weight=profile.get_preference_adjustment(enhancement_type),
        confidence_adjustment=profile.get_confidence_adjustment(enhancement_type),
        usage_count=profile.enhancement_usage_frequency.get(enhancement_type, 0),
        history_size=len(profile.satisfaction_history),
    )
