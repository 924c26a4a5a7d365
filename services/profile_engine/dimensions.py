# services/profile_engine/dimensions.py
# The seven dimension calculators.
#
# Every calculator follows the same path: gather (score, weight) pairs from the
# answered questions relevant to its dimension, take the weighted average,
# deflate it for social desirability bias, then rank it against the
# dimension's population parameters.
#
# Question weights are expert-chosen from face validity, not derived from
# factor analysis; only religiosity (CRS-5) rests on a validated instrument.

import logging
from typing import Any, List, Optional, Tuple

from . import score_maps as maps
from .answers import (
    get_array_answer,
    get_matrix_answer,
    get_scale_answer,
    get_string_answer,
    is_empty,
    resolve_role,
)
from .bias import adjust_score_for_bias, calculate_social_desirability_score, get_bias_confidence_multiplier
from .config import scoring_settings
from .loader import get_profile_catalog
from .models import DimensionScore, PopulationParams, RespondentRole, SevenDimensions
from .stats import calculate_percentile, calculate_weighted_average, clamp, round_half_up

logger = logging.getLogger(__name__)

CRS_QUESTIONS = (
    "crs_intellect",
    "crs_ideology",
    "crs_public_practice",
    "crs_private_practice",
    "crs_experience",
)

ScoredItems = List[Tuple[float, float]]


def _add(items: ScoredItems, score: Optional[float], weight: float) -> None:
    if score is not None:
        items.append((score, weight))


def get_population_params(dimension: str) -> PopulationParams:
    """Catalogue population parameters, unless recalibrated through settings."""
    override = scoring_settings.population_overrides.get(dimension)
    if override is not None:
        return PopulationParams(mean=override.mean, std_dev=override.std_dev, note="override")
    return get_profile_catalog().dimension(dimension).population


def _build_score(
    dimension: str,
    items: ScoredItems,
    answers: Any,
    bias_score: Optional[float],
) -> DimensionScore:
    definition = get_profile_catalog().dimension(dimension)
    population = get_population_params(dimension)

    if not items:
        # Nothing to measure, so nothing to deflate either.
        value = definition.neutral_default
        return DimensionScore(
            value=value,
            confidence=0.0,
            percentile=calculate_percentile(value, population.mean, population.std_dev),
        )

    raw_value = calculate_weighted_average([s for s, _ in items], [w for _, w in items])
    if bias_score is None:
        bias_score = calculate_social_desirability_score(answers)
    value = clamp(adjust_score_for_bias(raw_value, bias_score, definition.bias_sensitivity), 1.0, 5.0)

    coverage = min(1.0, len(items) / definition.expected_items)
    confidence = round_half_up(coverage * get_bias_confidence_multiplier(bias_score), 2)

    return DimensionScore(
        value=value,
        confidence=confidence,
        percentile=calculate_percentile(value, population.mean, population.std_dev),
    )


def _role(answers: Any, role: Optional[RespondentRole]) -> RespondentRole:
    return role if role is not None else resolve_role(answers)


# --- Dimension 1: religiosity (CRS-5) ---

def calculate_religiosity_dimension(
    answers: Any,
    role: Optional[RespondentRole] = None,
    bias_score: Optional[float] = None,
) -> DimensionScore:
    """Centrality of religiosity: plain mean of the five CRS-5 items."""
    items: ScoredItems = []
    for question_id in CRS_QUESTIONS:
        _add(items, maps.lookup_score(maps.CRS_SCORE_MAP, get_string_answer(answers, question_id)), 1.0)
    return _build_score("religiosity", items, answers, bias_score)


# --- Dimension 2: AI openness ---

def _sermon_delegation_score(answers: Any) -> Optional[float]:
    """
    Normalises the min_pred_nature matrix (delegation level 0-3 per sermon
    task) to the 1-5 scale, weighting tasks by theological sensitivity.
    """
    matrix = get_matrix_answer(answers, "min_pred_nature")
    delegated = 0.0
    max_possible = 0.0
    for task, weight in maps.SERMON_TASK_WEIGHTS.items():
        if task not in matrix:
            continue
        delegated += clamp(matrix[task], 0, maps.MAX_DELEGATION_LEVEL) * weight
        max_possible += maps.MAX_DELEGATION_LEVEL * weight
    if max_possible == 0:
        return None
    return 1 + (delegated / max_possible) * 4


def calculate_ai_openness_dimension(
    answers: Any,
    role: Optional[RespondentRole] = None,
    bias_score: Optional[float] = None,
) -> DimensionScore:
    role = _role(answers, role)
    items: ScoredItems = []

    frequency = get_string_answer(answers, "ctrl_ia_frequence")
    _add(items, maps.lookup_score(maps.AI_FREQUENCY_SCORES, frequency), 2)
    _add(items, get_scale_answer(answers, "ctrl_ia_confort"), 2)

    contexts = get_array_answer(answers, "ctrl_ia_contextes")
    if frequency == "jamais":
        _add(items, 1.0, 1.5)
    elif contexts:
        _add(items, min(5.0, 1 + len(contexts) * 0.7), 1.5)

    _add(items, maps.lookup_score(maps.DIGITAL_ATTITUDE_SCORES, get_string_answer(answers, "digital_attitude_generale")), 0.8)

    if role is RespondentRole.CLERGY:
        _add(items, maps.lookup_score(maps.MINISTRY_USAGE_SCORES, get_string_answer(answers, "min_pred_usage")), 1.5)
        _add(items, maps.lookup_score(maps.CARE_EMAIL_SCORES, get_string_answer(answers, "min_care_email")), 1)
        _add(items, get_scale_answer(answers, "min_admin_burden"), 0.8)
        # Actual delegation behaviour, so weighted above the self-assessments
        _add(items, _sermon_delegation_score(answers), 1.5)
    elif role is RespondentRole.LAYPERSON:
        _add(items, maps.lookup_score(maps.LAIC_PRIERE_SCORES, get_string_answer(answers, "laic_substitution_priere")), 1.2)
        _add(items, maps.lookup_score(maps.LAIC_CONSEIL_SCORES, get_string_answer(answers, "laic_conseil_spirituel")), 1.2)

    return _build_score("ai_openness", items, answers, bias_score)


# --- Dimension 3: sacred boundary ---

def calculate_sacred_boundary_dimension(
    answers: Any,
    role: Optional[RespondentRole] = None,
    bias_score: Optional[float] = None,
) -> DimensionScore:
    """
    Resistance to AI in sacred and spiritual contexts specifically, as opposed
    to AI use in general.
    """
    role = _role(answers, role)
    items: ScoredItems = []

    frequency = get_string_answer(answers, "ctrl_ia_frequence")
    contexts = get_array_answer(answers, "ctrl_ia_contextes")
    uses_ai_generally = bool(frequency) and frequency != "jamais"
    uses_ai_spiritually = "spirituel" in contexts

    # Uses AI, but keeps it out of spiritual life: the clearest boundary signal
    if uses_ai_generally and not uses_ai_spiritually:
        _add(items, 4.5, 1.5)
    elif uses_ai_spiritually:
        _add(items, 2.0, 1.5)
    elif frequency == "jamais" or contexts:
        # Not an AI user, so the boundary is less tested
        _add(items, 3.0, 0.8)

    _add(items, maps.lookup_score(maps.INSPIRATION_BOUNDARY_SCORES, get_string_answer(answers, "theo_inspiration")), 1.5)

    liturgy_acceptance = get_scale_answer(answers, "theo_liturgie_ia")
    if liturgy_acceptance is not None:
        _add(items, 6 - liturgy_acceptance, 2)

    protected_activities = get_array_answer(answers, "theo_activites_sacrees")
    if "aucune" in protected_activities:
        _add(items, 1.0, 2)
    elif protected_activities:
        _add(items, min(5.0, 1 + len(protected_activities) * 0.9), 2)

    _add(items, maps.lookup_score(maps.HUMAN_MEDIATION_SCORES, get_string_answer(answers, "theo_mediation_humaine")), 1.8)

    if role is RespondentRole.CLERGY:
        # Discomfort when preaching with AI reads as a boundary
        _add(items, get_scale_answer(answers, "min_pred_sentiment"), 1.2)

        preaching_usage = get_string_answer(answers, "min_pred_usage")
        if preaching_usage == "jamais":
            _add(items, 5.0, 1)
        elif preaching_usage == "systematique":
            _add(items, 1.5, 1)

        if get_string_answer(answers, "min_care_email") == "non_jamais":
            _add(items, 5.0, 0.8)

        # Delegating the writing itself is the most sensitive act
        matrix = get_matrix_answer(answers, "min_pred_nature")
        if "redaction" in matrix:
            delegation = clamp(matrix["redaction"], 0, maps.MAX_DELEGATION_LEVEL)
            _add(items, 5 - delegation * 4 / maps.MAX_DELEGATION_LEVEL, 1.5)

    elif role is RespondentRole.LAYPERSON:
        prayer = get_string_answer(answers, "laic_substitution_priere")
        if prayer == "non":
            _add(items, 4.5, 1)
        elif prayer:
            _add(items, 2.0, 1)

        counsel = get_string_answer(answers, "laic_conseil_spirituel")
        if counsel == "jamais":
            _add(items, 5.0, 1)
        elif counsel == "deja_fait":
            _add(items, 1.0, 1)

    return _build_score("sacred_boundary", items, answers, bias_score)


# --- Dimension 4: ethical concern ---

def calculate_ethical_concern_dimension(
    answers: Any,
    role: Optional[RespondentRole] = None,
    bias_score: Optional[float] = None,
) -> DimensionScore:
    role = _role(answers, role)
    items: ScoredItems = []

    _add(items, maps.lookup_score(maps.FUTURE_RISK_SCORES, get_string_answer(answers, "theo_risque_futur")), 2)
    _add(items, maps.lookup_score(maps.PERCEIVED_UTILITY_CONCERN_SCORES, get_string_answer(answers, "theo_utilite_percue")), 1.5)
    _add(items, maps.lookup_score(maps.REPLACEMENT_ANXIETY_CONCERN_SCORES, get_string_answer(answers, "psych_anxiete_remplacement")), 1.5)
    _add(items, maps.lookup_score(maps.OPACITY_CONCERN_SCORES, get_string_answer(answers, "psych_aias_opacity")), 1.5)

    if role is RespondentRole.CLERGY:
        _add(items, get_scale_answer(answers, "min_pred_sentiment"), 1.2)

    _add(items, maps.lookup_score(maps.IMAGO_DEI_CONCERN_SCORES, get_string_answer(answers, "psych_imago_dei")), 1.3)

    return _build_score("ethical_concern", items, answers, bias_score)


# --- Dimension 5: psychological perception ---

def calculate_psychological_perception_dimension(
    answers: Any,
    role: Optional[RespondentRole] = None,
    bias_score: Optional[float] = None,
) -> DimensionScore:
    """How the respondent perceives AI's nature and its relation to humanity."""
    items: ScoredItems = []

    _add(items, maps.lookup_score(maps.GODSPEED_NATURE_SCORES, get_string_answer(answers, "psych_godspeed_nature")), 2)
    # Explicit consciousness attribution weighs most
    _add(items, maps.lookup_score(maps.GODSPEED_CONSCIENCE_SCORES, get_string_answer(answers, "psych_godspeed_conscience")), 2.5)
    _add(items, maps.lookup_score(maps.IMAGO_DEI_PERCEPTION_SCORES, get_string_answer(answers, "psych_imago_dei")), 1.8)
    _add(items, maps.lookup_score(maps.REPLACEMENT_ANXIETY_PERCEPTION_SCORES, get_string_answer(answers, "psych_anxiete_remplacement")), 1.5)
    _add(items, maps.lookup_score(maps.INSPIRATION_PERCEPTION_SCORES, get_string_answer(answers, "theo_inspiration")), 1.3)

    return _build_score("psychological_perception", items, answers, bias_score)


# --- Dimension 6: community influence ---

def calculate_community_influence_dimension(
    answers: Any,
    role: Optional[RespondentRole] = None,
    bias_score: Optional[float] = None,
) -> DimensionScore:
    items: ScoredItems = []

    _add(items, maps.lookup_score(maps.OFFICIAL_POSITION_SCORES, get_string_answer(answers, "communaute_position_officielle")), 1.5)
    _add(items, maps.lookup_score(maps.COMMUNITY_DISCUSSION_SCORES, get_string_answer(answers, "communaute_discussions")), 2)
    # Knowing how peers feel, in either direction, signals community ties
    _add(items, maps.lookup_score(maps.PEER_PERCEPTION_SCORES, get_string_answer(answers, "communaute_perception_pairs")), 1.5)

    orientation = get_string_answer(answers, "theo_orientation")
    if orientation in ("traditionaliste", "progressiste"):
        _add(items, 3.5, 0.8)
    elif orientation == "ne_sait_pas":
        _add(items, 2.0, 0.8)

    status = get_string_answer(answers, "profil_statut")
    if status in ("laic_engagé", "clerge", "religieux"):
        _add(items, 4.0, 1)
    elif status == "curieux":
        _add(items, 2.0, 1)

    _add(items, maps.lookup_score(maps.COMMUNITY_SIZE_SCORES, get_string_answer(answers, "profil_taille_communaute")), 0.7)

    return _build_score("community_influence", items, answers, bias_score)


# --- Dimension 7: future orientation ---

def calculate_future_orientation_dimension(
    answers: Any,
    role: Optional[RespondentRole] = None,
    bias_score: Optional[float] = None,
) -> DimensionScore:
    items: ScoredItems = []

    _add(items, maps.lookup_score(maps.USAGE_INTENTION_SCORES, get_string_answer(answers, "futur_intention_usage")), 2)
    _add(items, maps.lookup_score(maps.TRAINING_WISH_SCORES, get_string_answer(answers, "futur_formation_souhait")), 2)

    interests = get_array_answer(answers, "futur_domaines_interet")
    if "aucun" in interests:
        _add(items, 1.0, 1.5)
    elif interests:
        _add(items, min(5.0, 1 + len(interests) * 0.6), 1.5)

    _add(items, maps.lookup_score(maps.FREQUENCY_TRAJECTORY_SCORES, get_string_answer(answers, "ctrl_ia_frequence")), 1)
    _add(items, maps.lookup_score(maps.AGE_ORIENTATION_SCORES, get_string_answer(answers, "profil_age")), 0.6)
    _add(items, maps.lookup_score(maps.DIGITAL_ATTITUDE_TRAJECTORY_SCORES, get_string_answer(answers, "digital_attitude_generale")), 0.8)

    return _build_score("future_orientation", items, answers, bias_score)


def calculate_all_dimensions(answers: Any) -> SevenDimensions:
    """
    Scores all seven dimensions. Always returns a complete object, falling
    back to neutral defaults for dimensions with no usable answers.
    """
    if is_empty(answers):
        logger.warning("Scoring an empty answer map; every dimension falls back to its neutral default")

    role = resolve_role(answers)
    return SevenDimensions(
        religiosity=calculate_religiosity_dimension(answers, role),
        ai_openness=calculate_ai_openness_dimension(answers, role),
        sacred_boundary=calculate_sacred_boundary_dimension(answers, role),
        ethical_concern=calculate_ethical_concern_dimension(answers, role),
        psychological_perception=calculate_psychological_perception_dimension(answers, role),
        community_influence=calculate_community_influence_dimension(answers, role),
        future_orientation=calculate_future_orientation_dimension(answers, role),
    )
