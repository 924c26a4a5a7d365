# services/profile_engine/profiles.py
# Profile matching: nearest-centroid classification of the seven-dimension
# vector against the primary profiles, then against the matched profile's
# sub-profiles, plus the narrative artefacts derived from the result.

import logging
import math
from typing import Any, Dict, List, Optional, Tuple

from .answers import get_array_answer, get_string_answer, is_clergy, resolve_role
from .config import scoring_settings
from .definitions import (
    BLIND_SPOT_FALLBACK,
    BLIND_SPOT_RULES,
    GROWTH_AREA_RULES,
    INSIGHT_RULES,
    SUB_PROFILE_BONUS_POINTS,
    SUB_PROFILE_BONUS_RULES,
    SUB_PROFILE_NARRATIVE_THRESHOLD,
    TENSION_RULES,
    UNIQUE_ASPECT_FALLBACK,
    UNIQUE_ASPECT_RULES,
    BonusContext,
)
from .dimensions import calculate_all_dimensions
from .loader import get_profile_catalog
from .models import (
    DIMENSION_NAMES,
    AdvancedInsight,
    EnhancedProfileData,
    GrowthArea,
    ProfileCatalog,
    ProfileConfigurationError,
    ProfileDefinition,
    ProfileInterpretation,
    ProfileMatch,
    ProfileSpectrum,
    RespondentRole,
    SecondaryProfileSummary,
    SevenDimensions,
    SubProfileDefinition,
    SubProfileMatch,
    TensionPoint,
)
from .stats import clamp, round_half_up

logger = logging.getLogger(__name__)

# Distance used when a centroid carries no weight at all
MAX_DISTANCE = 10.0

EMPHASIS_RANGES: Dict[str, Tuple[float, float]] = {
    "high": (4.0, 5.0),
    "moderate": (2.5, 3.5),
    "low": (1.0, 2.0),
}
EMPHASIS_WEIGHT_FACTOR = 2.0

Ranges = Dict[str, Tuple[float, float]]
Weights = Dict[str, float]


# --- Distance and score ---

def _range_distance(value: float, low: float, high: float) -> float:
    if value < low:
        return low - value
    if value > high:
        return value - high
    return 0.0


def calculate_weighted_distance(values: Dict[str, float], ranges: Ranges, weights: Weights) -> float:
    """
    Weighted mean distance of each dimension value to its ideal range.

    A value inside its range contributes nothing, so a respondent can match a
    profile perfectly without sitting on a single point.
    """
    total_distance = 0.0
    total_weight = 0.0
    for dimension in DIMENSION_NAMES:
        low, high = ranges[dimension]
        weight = weights[dimension]
        total_distance += _range_distance(values[dimension], low, high) * weight
        total_weight += weight
    if total_weight <= 0:
        return MAX_DISTANCE
    return total_distance / total_weight


def distance_to_match_score(distance: float, decay: Optional[float] = None) -> int:
    """Exponential decay: distance 0 is 100, distance 2 is about 37 with the default decay."""
    if decay is None:
        decay = scoring_settings.match_decay
    return int(round_half_up(clamp(100 * math.exp(-decay * distance), 0, 100)))


# --- Stage 1: primary profiles ---

def calculate_all_profile_matches(
    dimensions: SevenDimensions,
    catalog: Optional[ProfileCatalog] = None,
) -> List[ProfileMatch]:
    """
    Scores every primary profile, best first.

    Scores are independent similarities, not shares of a whole. Equal scores
    keep catalogue declaration order; distance is reported but never ranks.
    """
    catalog = catalog or get_profile_catalog()
    values = dimensions.value_map()

    ranked = []
    for index, profile in enumerate(catalog.profiles):
        distance = round_half_up(
            calculate_weighted_distance(values, profile.ideal_dimensions, profile.weights), 4
        )
        match = ProfileMatch(
            profile=profile.id,
            match_score=distance_to_match_score(distance),
            distance=distance,
        )
        ranked.append((-match.match_score, index, match))

    ranked.sort(key=lambda item: item[:2])
    return [item[2] for item in ranked]


def select_runner_ups(
    all_matches: List[ProfileMatch],
    threshold: Optional[float] = None,
) -> Tuple[Optional[ProfileMatch], Optional[ProfileMatch]]:
    """
    Secondary and tertiary matches, each kept only while it stays within
    ``threshold`` points of the primary. No tertiary without a secondary.
    """
    if threshold is None:
        threshold = scoring_settings.secondary_gap_threshold
    if len(all_matches) < 2:
        return None, None

    primary = all_matches[0]
    if primary.match_score - all_matches[1].match_score >= threshold:
        return None, None
    secondary = all_matches[1]

    tertiary = None
    if len(all_matches) > 2 and primary.match_score - all_matches[2].match_score < threshold:
        tertiary = all_matches[2]
    return secondary, tertiary


# --- Stage 2: sub-profiles ---

def build_sub_profile_centroid(parent: ProfileDefinition, sub_profile: SubProfileDefinition) -> Tuple[Ranges, Weights]:
    """
    The parent's centroid, narrowed on the sub-profile's emphasized
    dimensions: their range becomes the emphasis band and their weight doubles.
    """
    ranges = dict(parent.ideal_dimensions)
    weights = dict(parent.weights)
    for pattern in sub_profile.ideal_pattern:
        ranges[pattern.dimension] = EMPHASIS_RANGES[pattern.emphasis]
        weights[pattern.dimension] = parent.weights[pattern.dimension] * EMPHASIS_WEIGHT_FACTOR
    return ranges, weights


def _bonus_context(values: Dict[str, float], answers: Any) -> BonusContext:
    return BonusContext(
        values=values,
        is_clergy=is_clergy(answers),
        interests=tuple(get_array_answer(answers, "futur_domaines_interet")),
        future_risk=get_string_answer(answers, "theo_risque_futur"),
        training_wish=get_string_answer(answers, "futur_formation_souhait"),
    )


def calculate_sub_profile_bonus(sub_profile_id: str, context: BonusContext) -> float:
    """Answer-pattern bonus points for one sub-profile (0 when it has no criteria)."""
    return sum(points for condition, points in SUB_PROFILE_BONUS_RULES.get(sub_profile_id, []) if condition(context))


def determine_sub_profile(
    primary_profile: str,
    dimensions: SevenDimensions,
    answers: Any,
    catalog: Optional[ProfileCatalog] = None,
) -> SubProfileMatch:
    """Best-matching child of ``primary_profile``; the first declared child wins ties."""
    catalog = catalog or get_profile_catalog()
    parent = catalog.profile(primary_profile)
    values = dimensions.value_map()
    context = _bonus_context(values, answers)

    best_score = -1
    best_child = None
    for child in catalog.children_of(primary_profile):
        ranges, weights = build_sub_profile_centroid(parent, child)
        score = distance_to_match_score(calculate_weighted_distance(values, ranges, weights))
        bonus = calculate_sub_profile_bonus(child.id, context)
        score = min(100, score + int(round_half_up(bonus * SUB_PROFILE_BONUS_POINTS)))
        if score > best_score:
            best_score = score
            best_child = child

    if best_child is None:
        raise ProfileConfigurationError(f"Profile '{primary_profile}' has no sub-profiles")

    return SubProfileMatch(
        sub_profile=best_child.id,
        match_score=best_score,
        description=best_child.description,
    )


# --- Interpretation, insights, tensions, growth areas ---

def generate_interpretation(
    dimensions: SevenDimensions,
    primary: ProfileMatch,
    secondary: Optional[ProfileMatch],
    sub_profile: SubProfileMatch,
    catalog: Optional[ProfileCatalog] = None,
) -> ProfileInterpretation:
    catalog = catalog or get_profile_catalog()
    primary_def = catalog.profile(primary.profile)
    sub_def = catalog.sub_profile(sub_profile.sub_profile)
    values = dimensions.value_map()

    headline = primary_def.title
    if secondary is not None:
        headline += f" avec des tendances {catalog.profile(secondary.profile).title.split(' ')[0]}"

    narrative = ".".join(primary_def.full_description.split(".")[:2]) + "."
    if sub_profile.match_score >= SUB_PROFILE_NARRATIVE_THRESHOLD:
        narrative += f" Plus spécifiquement, {sub_def.description[:1].lower()}{sub_def.description[1:]}"

    unique_aspects = [text for condition, text in UNIQUE_ASPECT_RULES if condition(values)]
    blind_spots = [text for condition, text in BLIND_SPOT_RULES if condition(values)]

    return ProfileInterpretation(
        headline=headline,
        narrative=narrative,
        unique_aspects=unique_aspects or [UNIQUE_ASPECT_FALLBACK],
        blind_spots=blind_spots or [BLIND_SPOT_FALLBACK],
        strengths=[primary_def.core_motivation, *sub_def.distinguishing_traits[:2]],
    )


def generate_advanced_insights(
    dimensions: SevenDimensions,
    role: RespondentRole,
    limit: Optional[int] = None,
) -> List[AdvancedInsight]:
    """Threshold and role rules that fire, highest priority first, capped."""
    if limit is None:
        limit = scoring_settings.max_insights
    values = dimensions.value_map()
    insights = [
        AdvancedInsight(
            category=rule["category"],
            icon=rule["icon"],
            title=rule["title"],
            message=rule["message"],
            priority=rule["priority"],
        )
        for rule in INSIGHT_RULES
        if rule["when"](values, role)
    ]
    insights.sort(key=lambda insight: -insight.priority)
    return insights[:limit]


def identify_tensions(
    dimensions: SevenDimensions,
    primary: ProfileMatch,
    catalog: Optional[ProfileCatalog] = None,
    limit: Optional[int] = None,
) -> List[TensionPoint]:
    """
    Dimension pairs pulling in opposite directions. Pairs the primary
    profile does not expect (a dimension outside its ideal range) come first.
    """
    catalog = catalog or get_profile_catalog()
    if limit is None:
        limit = scoring_settings.max_tensions
    values = dimensions.value_map()
    ideal = catalog.profile(primary.profile).ideal_dimensions

    def unexpected(rule: Dict) -> bool:
        return any(
            _range_distance(values[dim], *ideal[dim]) > 0
            for dim in (rule["dimension1"], rule["dimension2"])
        )

    fired = [rule for rule in TENSION_RULES if rule["when"](values)]
    fired.sort(key=lambda rule: 0 if unexpected(rule) else 1)
    return [
        TensionPoint(
            dimension1=rule["dimension1"],
            dimension2=rule["dimension2"],
            description=rule["description"],
            suggestion=rule["suggestion"],
        )
        for rule in fired[:limit]
    ]


def identify_growth_areas(dimensions: SevenDimensions, limit: Optional[int] = None) -> List[GrowthArea]:
    if limit is None:
        limit = scoring_settings.max_growth_areas
    values = dimensions.value_map()
    areas = [
        GrowthArea(
            area=rule["area"],
            current_state=rule["current_state"],
            potential_growth=rule["potential_growth"],
            actionable_step=rule["actionable_step"],
            priority=rule["priority"],
        )
        for rule in GROWTH_AREA_RULES
        if rule["when"](values)
    ]
    areas.sort(key=lambda area: -area.priority)
    return areas[:limit]


# --- Entry points ---

def build_profile_spectrum(
    dimensions: SevenDimensions,
    answers: Any,
    catalog: Optional[ProfileCatalog] = None,
) -> ProfileSpectrum:
    """
    Matching stage on already computed dimensions. ``answers`` is only read
    for the role and the sub-profile answer-pattern bonuses.
    """
    catalog = catalog or get_profile_catalog()
    all_matches = calculate_all_profile_matches(dimensions, catalog)
    if not all_matches:
        raise ProfileConfigurationError("No profile matches computed: the profile catalogue is empty")

    primary = all_matches[0]
    secondary, tertiary = select_runner_ups(all_matches)
    sub_profile = determine_sub_profile(primary.profile, dimensions, answers, catalog)

    logger.debug(
        "Primary profile matched",
        extra={
            "primary": primary.profile,
            "match_score": primary.match_score,
            "secondary": secondary.profile if secondary else None,
            "sub_profile": sub_profile.sub_profile,
        },
    )

    return ProfileSpectrum(
        primary=primary,
        secondary=secondary,
        tertiary=tertiary,
        all_matches=all_matches,
        sub_profile=sub_profile,
        dimensions=dimensions,
        interpretation=generate_interpretation(dimensions, primary, secondary, sub_profile, catalog),
        insights=generate_advanced_insights(dimensions, resolve_role(answers)),
        tensions=identify_tensions(dimensions, primary, catalog),
        growth_areas=identify_growth_areas(dimensions),
    )


def calculate_profile_spectrum(answers: Any) -> ProfileSpectrum:
    """
    Scores a respondent end to end: seven dimensions, ranked profile matches,
    sub-profile and the narrative artefacts.

    Never raises on respondent input; raises ProfileConfigurationError only
    when the static catalogue is unusable.
    """
    return build_profile_spectrum(calculate_all_dimensions(answers), answers)


def get_simple_profile(answers: Any) -> str:
    """Primary profile id only."""
    return calculate_profile_spectrum(answers).primary.profile


def get_enhanced_profile_data(answers: Any) -> EnhancedProfileData:
    """Flattened display view of the spectrum used by the result pages."""
    catalog = get_profile_catalog()
    spectrum = calculate_profile_spectrum(answers)
    primary_def = catalog.profile(spectrum.primary.profile)
    sub_def = catalog.sub_profile(spectrum.sub_profile.sub_profile)

    secondary_profile = None
    if spectrum.secondary is not None:
        secondary_profile = SecondaryProfileSummary(
            profile=spectrum.secondary.profile,
            title=catalog.profile(spectrum.secondary.profile).title,
            match_percentage=spectrum.secondary.match_score,
        )

    return EnhancedProfileData(
        profile=spectrum.primary.profile,
        title=f"{primary_def.title} - {sub_def.title}",
        emoji=f"{primary_def.emoji}{sub_def.emoji}",
        description=spectrum.interpretation.narrative,
        match_percentage=spectrum.primary.match_score,
        secondary_profile=secondary_profile,
        dimensions=spectrum.dimensions,
        strengths=spectrum.interpretation.strengths,
        blind_spots=spectrum.interpretation.blind_spots,
        insights=spectrum.insights,
        tensions=spectrum.tensions,
        growth_areas=spectrum.growth_areas,
    )
