"""Recommendation endpoints"""

from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config.settings import settings
from core.dependencies import get_learning_store, get_recommendation_engine
from core.logging import RECOMMENDATION_GENERATED, log_structured
from api.dependencies import (
    ApplicableProfilesRequest,
    ApplicableProfilesResponse,
    RecommendationItem,
    RecommendationRequest,
    RecommendationResponse,
)
from services.condition_evaluator import is_applicable
from services.learning_store import UserLearningStore
from services.recommendation_engine import RecommendationEngine, top_recommendations


router = APIRouter()

# Rate limiter
limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


@router.post("/recommendations", response_model=RecommendationResponse)
@limiter.limit(settings.RECOMMEND_RATE_LIMIT)
async def recommend(
    request: Request,
    payload: RecommendationRequest,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
    learning_store: UserLearningStore = Depends(get_learning_store)
) -> RecommendationResponse:
    """
    Recommend enhancement operations for one analysed photo

    Args:
        request: Starlette Request (for SlowAPI rate limiting)
        payload: RecommendationRequest with analysis, profile name, optional user_id and top_n

    Returns:
        RecommendationResponse with operations in processing order and a ranked shortlist

    Raises:
        ProfileNotFoundException: 404 if the profile is not in the catalog
    """
    profile = engine.catalog.get(payload.profile)
    analysis = payload.analysis.to_snapshot()

    user_profile = None
    if payload.user_id:
        user_profile = learning_store.snapshot(payload.user_id)

    recommendations = engine.recommend(analysis, profile, user_profile)
    top_n = payload.top_n or settings.DEFAULT_TOP_N
    top = top_recommendations(recommendations, top_n)

    log_structured(RECOMMENDATION_GENERATED, {
        "profile": profile.name,
        "user_id": payload.user_id,
        "personalized": user_profile is not None,
        "count": len(recommendations),
        "top": [rec.type.value for rec in top],
    })

    return RecommendationResponse(
        profile=profile.name,
        applicable=is_applicable(profile, analysis, user_profile),
        personalized=user_profile is not None,
        recommendations=[RecommendationItem(**rec.to_dict()) for rec in recommendations],
        top=[RecommendationItem(**rec.to_dict()) for rec in top],
    )


@router.post("/recommendations/applicable-profiles", response_model=ApplicableProfilesResponse)
@limiter.limit(settings.RECOMMEND_RATE_LIMIT)
async def applicable_profiles(
    request: Request,
    payload: ApplicableProfilesRequest,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
    learning_store: UserLearningStore = Depends(get_learning_store)
) -> ApplicableProfilesResponse:
    """Catalog profiles whose applicability gates pass for this analysis"""
    user_profile = None
    if payload.user_id:
        user_profile = learning_store.snapshot(payload.user_id)

    profiles = engine.catalog.applicable_profiles(payload.analysis.to_snapshot(), user_profile)
    return ApplicableProfilesResponse(profiles=[profile.name for profile in profiles])
