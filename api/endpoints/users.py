"""Per-user learning and custom profile endpoints"""

from typing import Any, Dict
from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config.settings import settings
from core.dependencies import (
    get_custom_profile_learner,
    get_feedback_collector,
    get_learning_store,
    get_profile_catalog,
)
from core.logging import logger
from api.dependencies import (
    AgeCategoryRequest,
    CustomProfileRequest,
    CustomProfileResponse,
    SessionFeedbackRequest,
)
from services.custom_profile_learner import CustomProfileLearner
from services.feedback_collector import FeedbackCollector
from services.learning_store import UserLearningStore
from services.profile_catalog import ProfileCatalog


router = APIRouter()

# Rate limiter
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


# ========== Learning Profile ==========
@router.get("/users/{user_id}/learning")
async def get_learning_profile(
    user_id: str,
    learning_store: UserLearningStore = Depends(get_learning_store)
) -> Dict[str, Any]:
    """
    Learned preference summary for a user

    Raises:
        LearningProfileNotFoundException: 404 if the user has given no feedback yet
    """
    return learning_store.get(user_id).to_dict()


@router.put("/users/{user_id}/age-category")
async def set_age_category(
    user_id: str,
    payload: AgeCategoryRequest,
    learning_store: UserLearningStore = Depends(get_learning_store)
) -> Dict[str, Any]:
    """Store the user's self-declared age bracket (used when a photo has none)"""
    return learning_store.set_age_category(user_id, payload.age_category).to_dict()


# ========== Custom Profile ==========
@router.post("/users/{user_id}/custom-profile", response_model=CustomProfileResponse)
@limiter.limit(settings.RECOMMEND_RATE_LIMIT)
async def build_custom_profile(
    request: Request,
    user_id: str,
    payload: CustomProfileRequest,
    catalog: ProfileCatalog = Depends(get_profile_catalog),
    learner: CustomProfileLearner = Depends(get_custom_profile_learner),
    learning_store: UserLearningStore = Depends(get_learning_store)
) -> CustomProfileResponse:
    """
    Create or refresh the user's custom profile from a catalog profile

    Raises:
        ProfileNotFoundException: 404 if the base profile is unknown
    """
    base_profile = catalog.get(payload.base_profile)
    custom = learner.build_profile(
        user_id=user_id,
        base_profile=base_profile,
        analysis=payload.analysis.to_snapshot(),
        user_profile=learning_store.snapshot(user_id),
        name=payload.name,
    )
    return CustomProfileResponse(**custom.to_dict())


@router.get("/users/{user_id}/custom-profile", response_model=CustomProfileResponse)
async def get_custom_profile(
    user_id: str,
    learner: CustomProfileLearner = Depends(get_custom_profile_learner)
) -> CustomProfileResponse:
    """
    The user's custom profile with learned intensities blended in

    Raises:
        CustomProfileNotFoundException: 404 if none exists
    """
    return CustomProfileResponse(**learner.get(user_id).to_dict())


@router.post("/users/{user_id}/custom-profile/feedback", response_model=CustomProfileResponse)
@limiter.limit(settings.FEEDBACK_RATE_LIMIT)
async def submit_session_feedback(
    request: Request,
    user_id: str,
    payload: SessionFeedbackRequest,
    collector: FeedbackCollector = Depends(get_feedback_collector)
) -> CustomProfileResponse:
    """Session-level feedback that trains the user's custom profile"""
    custom = collector.submit_session_feedback(
        user_id=user_id,
        satisfaction=payload.satisfaction,
        naturalness=payload.naturalness,
        overall_rating=payload.overall_rating,
        would_use_again=payload.would_use_again,
        enhancement_details=[(detail.type, detail.intensity) for detail in payload.enhancement_details],
        enhancement_result_id=payload.enhancement_result_id,
        comments=payload.comments,
    )
    logger.info(f"✅ Session feedback saved: user={user_id}, usage_count={custom.usage_count}")
    return CustomProfileResponse(**custom.to_dict())
