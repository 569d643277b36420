"""
Enhancement recommendation engine

Turns an analysis snapshot and an enhancement profile into an ordered list of
recommendations, optionally personalised with a user's learning profile.

Pipeline:
    1. applicability gate (inapplicable profile -> empty list)
    2. adaptive intensity per configured operation
    3. prerequisite / conflict resolution (priority desc, declaration order,
       one deferred pass for late prerequisites)
    4. personalisation (confidence adjustment, 50/50 intensity blend)
    5. output in processing order; ranking by confidence x priority weight

The engine holds no mutable state and is safe to share across threads. Pass a
snapshot of the learning profile (UserLearningStore.snapshot) rather than a
record another thread may be updating.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from models.analysis import AnalysisSnapshot
from models.enums import EnhancementType, ImpactLevel, RecommendationPriority
from models.learning import UserLearningProfile
from models.profile import EnhancementConfiguration, EnhancementProfile
from services.condition_evaluator import is_applicable
from services.intensity_calculator import compute_intensity_with_trace
from services.profile_catalog import ProfileCatalog
from services.reason_generator import ReasonGenerator, get_reason_generator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Recommendation:
    """One recommended operation"""
    type: EnhancementType
    confidence: float
    intensity: float
    reasoning: str
    priority: RecommendationPriority
    config_priority: int
    processing_order: int
    personalized: bool = False

    @property
    def ranking_score(self) -> float:
        return self.confidence * self.priority.weight

    @property
    def effectiveness_score(self) -> float:
        return self.confidence * self.intensity * self.priority.weight

    @property
    def impact(self) -> ImpactLevel:
        return ImpactLevel.for_intensity(self.intensity)

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "confidence": round(self.confidence, 4),
            "intensity": round(self.intensity, 4),
            "reasoning": self.reasoning,
            "priority": self.priority.value,
            "processing_order": self.processing_order,
            "ranking_score": round(self.ranking_score, 4),
            "effectiveness_score": round(self.effectiveness_score, 4),
            "impact": self.impact.value,
            "personalized": self.personalized,
        }


def resolve_selection(configs: List[EnhancementConfiguration]) -> List[EnhancementConfiguration]:
    """
    Select operations honouring prerequisites and conflicts

    Candidates are visited by priority (desc), then declaration order. A
    candidate whose prerequisites are not yet selected is deferred to a single
    second pass and dropped if still unresolved there. A candidate that
    conflicts with an already selected operation, in either direction, is
    dropped. Cyclic prerequisites therefore drop every operation on the cycle.
    """
    ordered = sorted(enumerate(configs), key=lambda item: (-item[1].priority, item[0]))

    selected: List[EnhancementConfiguration] = []
    selected_types = set()
    deferred: List[EnhancementConfiguration] = []

    def blocked(config: EnhancementConfiguration) -> bool:
        if config.type in selected_types:
            return True
        if config.conflicts_with & selected_types:
            return True
        return any(config.type in chosen.conflicts_with for chosen in selected)

    for _, config in ordered:
        if blocked(config):
            logger.debug(f"Dropping {config.type.value}: conflicts with selection")
            continue
        if not config.prerequisites <= selected_types:
            deferred.append(config)
            continue
        selected.append(config)
        selected_types.add(config.type)

    for config in deferred:
        if blocked(config) or not config.prerequisites <= selected_types:
            logger.debug(f"Dropping {config.type.value}: unresolved prerequisites or conflict")
            continue
        selected.append(config)
        selected_types.add(config.type)

    return selected


def rank_recommendations(recommendations: List[Recommendation]) -> List[Recommendation]:
    """Order by confidence x priority weight (desc), stable on ties"""
    return sorted(recommendations, key=lambda rec: rec.ranking_score, reverse=True)


def top_recommendations(recommendations: List[Recommendation], n: int) -> List[Recommendation]:
    return rank_recommendations(recommendations)[:max(n, 0)]


class RecommendationEngine:
    """Stateless recommendation engine bound to a profile catalog"""

    def __init__(self, catalog: ProfileCatalog, reason_generator: Optional[ReasonGenerator] = None):
        self.catalog = catalog
        self.reason_generator = reason_generator or get_reason_generator()

    def recommend(
        self,
        analysis: AnalysisSnapshot,
        profile: EnhancementProfile,
        user_profile: Optional[UserLearningProfile] = None
    ) -> List[Recommendation]:
        """
        Recommend operations for one photo

        Args:
            analysis: Photo analysis snapshot
            profile: Enhancement profile to draw operations from
            user_profile: Optional learning profile snapshot for personalisation

        Returns:
            Recommendations in processing order (empty when the profile does not apply)
        """
        if not is_applicable(profile, analysis, user_profile):
            return []

        declaration_index: Dict[EnhancementType, int] = {}
        for index, config in enumerate(profile.enhancements):
            declaration_index.setdefault(config.type, index)

        recommendations = []
        for config in resolve_selection(list(profile.enhancements)):
            intensity, trace = compute_intensity_with_trace(config, profile, analysis, user_profile)
            confidence = max(0.0, min(1.0, config.priority / 100.0))

            personalized = False
            preference_weight = None
            if user_profile is not None:
                confidence = min(1.0, confidence * user_profile.get_confidence_adjustment(config.type))
                if user_profile.has_learned_weight(config.type):
                    preference_weight = user_profile.get_preference_adjustment(config.type)
                    low, high = profile.intensity_bounds
                    intensity = max(low, min(high, (intensity + preference_weight) / 2.0))
                    personalized = True

            recommendations.append(Recommendation(
                type=config.type,
                confidence=confidence,
                intensity=intensity,
                reasoning=self.reason_generator.generate(
                    config.type, profile.name, trace, personalized, preference_weight
                ),
                priority=RecommendationPriority.from_config_priority(config.priority),
                config_priority=config.priority,
                processing_order=config.processing_order,
                personalized=personalized,
            ))

        recommendations.sort(
            key=lambda rec: (rec.processing_order, -rec.config_priority, declaration_index[rec.type])
        )
        return recommendations

    def recommend_for(
        self,
        analysis: AnalysisSnapshot,
        profile_name: str,
        user_profile: Optional[UserLearningProfile] = None
    ) -> List[Recommendation]:
        """recommend() with a catalog lookup by profile name"""
        return self.recommend(analysis, self.catalog.get(profile_name), user_profile)

    def top(
        self,
        analysis: AnalysisSnapshot,
        profile: EnhancementProfile,
        user_profile: Optional[UserLearningProfile] = None,
        n: int = 3
    ) -> List[Recommendation]:
        return top_recommendations(self.recommend(analysis, profile, user_profile), n)
