"""
Enhancement profile catalog

An immutable, explicitly constructed registry of enhancement profiles. Profiles
are validated when the catalog is built: unknown tags and prerequisite cycles
are configuration errors and never reach recommendation time.
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from core.exceptions import (
    ConfigurationException,
    DuplicateProfileException,
    PrerequisiteCycleException,
    ProfileNotFoundException,
    UnknownComparisonOperatorException,
    UnknownEnhancementTypeException,
    UnknownFactorException,
)
from core.logging import PROFILE_REGISTERED, log_structured
from models.analysis import AnalysisSnapshot
from models.enums import (
    AdaptiveFactor,
    ComparisonOperator,
    EnhancementMode,
    EnhancementType,
    TargetAudience,
)
from models.learning import UserLearningProfile
from models.profile import (
    AdaptiveAdjustment,
    ApplicabilityCondition,
    EnhancementConfiguration,
    EnhancementProfile,
)
from services.condition_evaluator import is_applicable

logger = logging.getLogger(__name__)


# ========== Tag Parsing ==========

def _parse_enhancement_type(value: Any) -> EnhancementType:
    if isinstance(value, EnhancementType):
        return value
    try:
        return EnhancementType(value)
    except ValueError:
        raise UnknownEnhancementTypeException(str(value))


def _parse_factor(value: Any) -> AdaptiveFactor:
    if isinstance(value, AdaptiveFactor):
        return value
    try:
        return AdaptiveFactor(value)
    except ValueError:
        raise UnknownFactorException(str(value))


def _parse_operator(value: Any) -> ComparisonOperator:
    if isinstance(value, ComparisonOperator):
        return value
    try:
        return ComparisonOperator(value)
    except ValueError:
        raise UnknownComparisonOperatorException(str(value))


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _parse_enum(enum_cls, value: Any, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ConfigurationException(f"Invalid {field_name}: {value}")


def profile_from_dict(data: Mapping[str, Any]) -> EnhancementProfile:
    """
    Build an EnhancementProfile from a plain mapping with string tags

    Raises:
        ConfigurationException: on unknown tags, missing keys or malformed numbers
    """
    try:
        enhancements = tuple(
            EnhancementConfiguration(
                type=_parse_enhancement_type(item["type"]),
                base_intensity=float(item["base_intensity"]),
                priority=int(item.get("priority", 50)),
                adaptive_adjustments=tuple(
                    AdaptiveAdjustment(
                        factor=_parse_factor(adj["factor"]),
                        multiplier=float(adj["multiplier"]),
                        threshold=None if adj.get("threshold") is None else float(adj["threshold"]),
                        condition=_parse_operator(adj.get("condition", ComparisonOperator.GREATER_THAN)),
                    )
                    for adj in item.get("adaptive_adjustments", [])
                ),
                is_quick_processing=bool(item.get("is_quick_processing", False)),
                processing_order=int(item.get("processing_order", 0)),
                prerequisites=frozenset(_parse_enhancement_type(p) for p in item.get("prerequisites", [])),
                conflicts_with=frozenset(_parse_enhancement_type(c) for c in item.get("conflicts_with", [])),
            )
            for item in data.get("enhancements", [])
        )

        conditions = tuple(
            ApplicabilityCondition(
                factor=_parse_factor(cond["factor"]),
                threshold=float(cond["threshold"]),
                condition=_parse_operator(cond["condition"]),
            )
            for cond in data.get("applicability_conditions", [])
        )

        return EnhancementProfile(
            name=data["name"],
            mode=_parse_enum(EnhancementMode, data.get("mode", "custom"), "mode"),
            enhancements=enhancements,
            description=data.get("description", ""),
            intensity_multiplier=float(data.get("intensity_multiplier", 1.0)),
            applicability_conditions=conditions,
            target_audience=_parse_enum(TargetAudience, data.get("target_audience", "general"), "target_audience"),
            estimated_improvements=dict(data.get("estimated_improvements", {})),
            average_processing_time=float(data.get("average_processing_time", 2.0)),
            minimum_intensity=_optional_float(data.get("minimum_intensity")),
            maximum_intensity=_optional_float(data.get("maximum_intensity")),
        )
    except KeyError as e:
        raise ConfigurationException(f"Missing profile key: {e}")
    except (ValueError, TypeError) as e:
        raise ConfigurationException(f"Invalid value in profile {data.get('name', '?')!r}: {e}")


# ========== Validation ==========

def find_prerequisite_cycle(profile: EnhancementProfile) -> Optional[List[EnhancementType]]:
    """Return one prerequisite cycle within the profile, or None"""
    graph: Dict[EnhancementType, List[EnhancementType]] = {
        config.type: sorted(config.prerequisites, key=lambda t: t.value) for config in profile.enhancements
    }
    visiting, done = set(), set()
    path: List[EnhancementType] = []

    def visit(node: EnhancementType) -> Optional[List[EnhancementType]]:
        if node in done:
            return None
        if node in visiting:
            return path[path.index(node):] + [node]
        visiting.add(node)
        path.append(node)
        for prerequisite in graph.get(node, []):
            cycle = visit(prerequisite)
            if cycle:
                return cycle
        path.pop()
        visiting.discard(node)
        done.add(node)
        return None

    for config in profile.enhancements:
        cycle = visit(config.type)
        if cycle:
            return cycle
    return None


def validate_profile(profile: EnhancementProfile) -> None:
    """
    Reject a profile before it is registered

    Raises:
        UnknownEnhancementTypeException: operation/prerequisite/conflict tag outside the vocabulary
        UnknownFactorException / UnknownComparisonOperatorException: bad rule tags
        PrerequisiteCycleException: prerequisites form a cycle
        ConfigurationException: out-of-range numeric constants
    """
    if profile.intensity_multiplier <= 0:
        raise ConfigurationException(
            f"Profile '{profile.name}' intensity_multiplier must be positive, got {profile.intensity_multiplier}"
        )
    low, high = profile.intensity_bounds
    if not 0.0 <= low <= high <= 1.0:
        raise ConfigurationException(f"Profile '{profile.name}' has invalid intensity bounds [{low}, {high}]")

    for condition in profile.applicability_conditions:
        _parse_factor(condition.factor)
        _parse_operator(condition.condition)

    for config in profile.enhancements:
        _parse_enhancement_type(config.type)
        for tag in config.prerequisites | config.conflicts_with:
            _parse_enhancement_type(tag)
        if not 0.0 <= config.base_intensity <= 1.0:
            raise ConfigurationException(
                f"Profile '{profile.name}' {config.type.value} base_intensity must be within [0, 1]"
            )
        for adjustment in config.adaptive_adjustments:
            _parse_factor(adjustment.factor)
            _parse_operator(adjustment.condition)

    cycle = find_prerequisite_cycle(profile)
    if cycle:
        raise PrerequisiteCycleException([t.value for t in cycle])


# ========== Catalog ==========

class ProfileCatalog:
    """Immutable registry of validated enhancement profiles"""

    def __init__(self, profiles: Iterable[EnhancementProfile]):
        registry: Dict[str, EnhancementProfile] = {}
        for profile in profiles:
            validate_profile(profile)
            if profile.id in registry:
                raise DuplicateProfileException(profile.name)
            registry[profile.id] = profile
            log_structured(PROFILE_REGISTERED, {
                "profile": profile.name,
                "operations": len(profile.enhancements),
            })
        self._profiles: Mapping[str, EnhancementProfile] = MappingProxyType(registry)
        logger.info(f"✅ Enhancement profile catalog ready: {len(registry)} profiles")

    @classmethod
    def from_config(cls, table: Iterable[Mapping[str, Any]]) -> "ProfileCatalog":
        return cls(profile_from_dict(entry) for entry in table)

    def get(self, name: str) -> EnhancementProfile:
        profile = self._profiles.get(name.lower())
        if profile is None:
            raise ProfileNotFoundException(name)
        return profile

    def names(self) -> List[str]:
        return [profile.name for profile in self._profiles.values()]

    def profiles(self) -> List[EnhancementProfile]:
        return list(self._profiles.values())

    def applicable_profiles(
        self,
        analysis: AnalysisSnapshot,
        user_profile: Optional[UserLearningProfile] = None
    ) -> List[EnhancementProfile]:
        """Profiles passing their applicability gates, in registration order"""
        return [
            profile for profile in self._profiles.values()
            if is_applicable(profile, analysis, user_profile)
        ]

    def __contains__(self, name: str) -> bool:
        return name.lower() in self._profiles

    def __iter__(self) -> Iterator[EnhancementProfile]:
        return iter(self._profiles.values())

    def __len__(self) -> int:
        return len(self._profiles)


def build_default_catalog() -> ProfileCatalog:
    """Catalog with the Natural, Glam, HD and Studio profiles"""
    from config.enhancement_profiles import DEFAULT_PROFILES
    return ProfileCatalog.from_config(DEFAULT_PROFILES)
