# services/profile_engine/legacy.py
# Views kept for the first version of the result pages, which predate the
# seven-dimension model. Everything here is derived from the current engine
# except the general/spiritual usage scores, which keep their own simple
# averages so that historical resistance indices stay comparable.

import math
from typing import Any, Dict, List, Literal

from .answers import get_array_answer, get_raw_answer, get_scale_answer, get_string_answer
from .dimensions import calculate_ai_openness_dimension, calculate_religiosity_dimension
from .loader import get_profile_catalog
from .models import CamelModel, SevenDimensions, SubProfileDefinition
from .profiles import calculate_profile_spectrum, get_simple_profile
from .stats import clamp, round_half_up, round_to_tenth

LegacyInsightCategory = Literal["spirituality", "technology", "ethics", "community"]

RELIGIOSITY_LABELS: Dict[str, str] = {
    "non_religieux": "Peu religieux",
    "peu_religieux": "Modérément religieux",
    "religieux": "Religieux",
    "tres_religieux": "Hautement religieux",
}

AI_ADOPTION_LABELS: Dict[str, str] = {
    "resistant": "Résistant",
    "prudent": "Prudent",
    "ouvert": "Ouvert",
    "enthousiaste": "Enthousiaste",
}

THEOLOGICAL_LABELS: Dict[str, str] = {
    "traditionaliste": "Traditionaliste",
    "modere": "Modéré",
    "progressiste": "Progressiste",
    "ne_sait_pas": "Non défini",
}

RESISTANCE_LABELS: Dict[str, str] = {
    "aucune": "Aucune résistance spécifique",
    "faible": "Légère réserve",
    "moderee": "Résistance modérée",
    "forte": "Forte résistance au spirituel",
}

# Legacy comparison populations: (mean, std_dev)
COMPARISON_POPULATIONS = {
    "religiosity": (3.5, 0.8),
    "ai_adoption": (2.8, 0.8),
}

GENERAL_FREQUENCY_SCORES = {"jamais": 1, "essaye": 2, "occasionnel": 3, "regulier": 4, "quotidien": 5}
PREACHING_USAGE_SCORES = {"jamais": 1, "rare": 2, "regulier": 4, "systematique": 5}
CARE_SCORES = {"non_jamais": 1, "oui_brouillon": 3, "oui_souvent": 5}
PRAYER_SCORES = {"non": 1, "oui_bof": 3, "oui": 5}
COUNSEL_SCORES = {"jamais": 1, "complement": 3, "oui_possible": 4, "deja_fait": 5}

LEGACY_CATEGORIES = {
    "spiritual": "spirituality",
    "technological": "technology",
    "ethical": "ethics",
}
LEGACY_INSIGHT_LIMIT = 3


class PersonalizedInsight(CamelModel):
    category: LegacyInsightCategory
    icon: str
    title: str
    message: str


def calculate_crs5_score(answers: Any) -> float:
    return calculate_religiosity_dimension(answers).value


def calculate_ai_adoption_score(answers: Any) -> float:
    return calculate_ai_openness_dimension(answers).value


def get_religiosity_level(score: float) -> str:
    if score < 2:
        return "non_religieux"
    if score < 3:
        return "peu_religieux"
    if score < 4:
        return "religieux"
    return "tres_religieux"


def get_ai_adoption_level(score: float) -> str:
    if score < 2:
        return "resistant"
    if score < 3:
        return "prudent"
    if score < 4:
        return "ouvert"
    return "enthousiaste"


def get_theological_orientation(answers: Any) -> str:
    """The declared orientation, ``ne_sait_pas`` when unanswered."""
    return get_string_answer(answers, "theo_orientation") or "ne_sait_pas"


def get_spiritual_ai_profile(answers: Any) -> str:
    return get_simple_profile(answers)


def get_profile_data(profile_id: str) -> Dict[str, str]:
    """Compact card for one primary profile: title, emoji, description, strength, challenge."""
    profile = get_profile_catalog().profile(profile_id)
    return {
        "title": profile.title,
        "emoji": profile.emoji,
        "description": profile.short_description,
        "strength": profile.core_motivation,
        "challenge": profile.challenge,
    }


def _mean_or_floor(scores: List[float]) -> float:
    if not scores:
        return 1.0
    return round_to_tenth(sum(scores) / len(scores))


def calculate_general_ai_score(answers: Any) -> float:
    """Baseline AI usage (1-5): frequency, comfort and breadth of contexts."""
    scores = []

    frequency = GENERAL_FREQUENCY_SCORES.get(get_string_answer(answers, "ctrl_ia_frequence"))
    if frequency is not None:
        scores.append(frequency)

    comfort = get_scale_answer(answers, "ctrl_ia_confort")
    if comfort is not None:
        scores.append(comfort)

    if isinstance(get_raw_answer(answers, "ctrl_ia_contextes"), (list, tuple)):
        scores.append(min(5, 1 + len(get_array_answer(answers, "ctrl_ia_contextes"))))

    return _mean_or_floor(scores)


def calculate_spiritual_ai_score(answers: Any) -> float:
    """AI usage in spiritual settings (1-5), across clergy and lay items."""
    scores = []
    for key, score_map in (
        ("min_pred_usage", PREACHING_USAGE_SCORES),
        ("min_care_email", CARE_SCORES),
        ("laic_substitution_priere", PRAYER_SCORES),
        ("laic_conseil_spirituel", COUNSEL_SCORES),
    ):
        score = score_map.get(get_string_answer(answers, key))
        if score is not None:
            scores.append(score)

    if isinstance(get_raw_answer(answers, "ctrl_ia_contextes"), (list, tuple)):
        scores.append(5 if "spirituel" in get_array_answer(answers, "ctrl_ia_contextes") else 1)

    return _mean_or_floor(scores)


def calculate_spiritual_resistance_index(answers: Any) -> float:
    """
    General minus spiritual AI usage, from -4 to +4. Positive values mean the
    respondent uses AI but keeps it away from spiritual life.
    """
    return round_to_tenth(calculate_general_ai_score(answers) - calculate_spiritual_ai_score(answers))


def get_resistance_level(index: float) -> str:
    if index <= 0:
        return "aucune"
    if index < 1:
        return "faible"
    if index < 2:
        return "moderee"
    return "forte"


def get_percentile_comparison(score: float, comparison_type: str) -> int:
    """Smooth tanh-based rank against the legacy comparison populations, clamped to [1, 99]."""
    mean, std_dev = COMPARISON_POPULATIONS.get(comparison_type, COMPARISON_POPULATIONS["ai_adoption"])
    z_score = (score - mean) / std_dev
    percentile = int(round_half_up(50 * (1 + math.tanh(z_score * 0.8))))
    return int(clamp(percentile, 1, 99))


def generate_insights(answers: Any) -> List[PersonalizedInsight]:
    spectrum = calculate_profile_spectrum(answers)
    return [
        PersonalizedInsight(
            category=LEGACY_CATEGORIES.get(insight.category, "community"),
            icon=insight.icon,
            title=insight.title,
            message=insight.message,
        )
        for insight in spectrum.insights[:LEGACY_INSIGHT_LIMIT]
    ]


def get_sub_profile_data(sub_profile_id: str) -> SubProfileDefinition:
    return get_profile_catalog().sub_profile(sub_profile_id)


def get_dimension_scores(answers: Any) -> SevenDimensions:
    return calculate_profile_spectrum(answers).dimensions
