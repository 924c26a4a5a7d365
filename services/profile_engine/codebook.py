# services/profile_engine/codebook.py
# Methodology codebook: a self-describing export of every scoring parameter,
# for publication alongside the survey data.

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .bias import ADJUSTMENT_THRESHOLD, MAX_DEFLATION, MC_TARGETS
from .config import scoring_settings
from .dimensions import get_population_params
from .loader import get_profile_catalog

BIAS_INSTRUMENT = "Marlowe-Crowne Social Desirability Scale - Short Form C"
BIAS_CITATION = (
    "Crowne, D. P., & Marlowe, D. (1960). A new scale of social desirability independent "
    "of psychopathology. Journal of Consulting Psychology, 24(4), 349-354."
)

BIAS_ITEM_DESCRIPTIONS = {
    "ctrl_mc_1": "Claims to not need encouragement (false claim of independence)",
    "ctrl_mc_2": "Claims to never intensely dislike anyone (saintly claim)",
    "ctrl_mc_3": "Claims to never rebel against authority (perfect rationality)",
    "ctrl_mc_4": "Claims to always be courteous (perfect manners)",
    "ctrl_mc_5": "Claims to never take advantage of anyone (moral perfection)",
}

BIAS_CONFIDENCE_RANGES = {
    "low": {"range": [0, 3], "confidence": 1.0},
    "moderate": {"range": [4, 6], "confidence": 0.9},
    "high": {"range": [7, 8], "confidence": 0.8},
    "very_high": {"range": [9, 10], "confidence": 0.7},
}

LIMITATIONS = [
    "Population parameters are provisional estimates requiring empirical validation (N>=500)",
    "5 of 7 dimensions use exploratory constructs without factor analysis validation",
    "Profile matching thresholds are expert-chosen, not empirically derived",
    "Question weights are based on face validity, not confirmatory factor analysis",
    "Sample is self-selected (not representative of general Christian population)",
]


def _algorithm_parameters() -> List[Dict[str, Any]]:
    return [
        {
            "name": "EXPONENTIAL_DECAY",
            "description": "Distance to match score conversion: score = 100 * exp(-distance * DECAY)",
            "value": scoring_settings.match_decay,
            "empirically_validated": False,
        },
        {
            "name": "SECONDARY_PROFILE_GAP",
            "description": "Maximum gap (points) to the primary for a secondary or tertiary profile to be reported",
            "value": scoring_settings.secondary_gap_threshold,
            "empirically_validated": False,
        },
        {
            "name": "BIAS_ADJUSTMENT_THRESHOLD",
            "description": "Minimum bias score to trigger score adjustment",
            "value": ADJUSTMENT_THRESHOLD,
            "empirically_validated": False,
        },
        {
            "name": "MAX_BIAS_DEFLATION",
            "description": "Maximum points deducted from a dimension score due to bias",
            "value": MAX_DEFLATION,
            "empirically_validated": False,
        },
    ]


def export_codebook(export_date: Optional[str] = None) -> Dict[str, Any]:
    """
    Returns the codebook as a JSON-serialisable dict.

    Population parameters reflect any configured overrides, so the export
    always documents the parameters actually used for scoring.
    """
    catalog = get_profile_catalog()

    dimensions = {}
    for definition in catalog.dimensions:
        entry = definition.model_dump(mode="json", exclude={"population"})
        entry["population"] = get_population_params(definition.id).model_dump(mode="json")
        dimensions[definition.id] = entry

    profiles = {
        profile.id: {
            "title": profile.title,
            "title_en": profile.title_en,
            "ideal_dimensions": {dim: list(bounds) for dim, bounds in profile.ideal_dimensions.items()},
            "weights": dict(profile.weights),
            "sub_profiles": [
                {
                    "id": child.id,
                    "title": child.title,
                    "ideal_pattern": [p.model_dump(mode="json") for p in child.ideal_pattern],
                }
                for child in catalog.children_of(profile.id)
            ],
        }
        for profile in catalog.profiles
    }

    return {
        "metadata": {
            "export_date": export_date or datetime.now(timezone.utc).isoformat(),
            "catalog_version": catalog.version,
            "description": "Complete scoring methodology codebook for the AI & faith survey",
            "limitations": LIMITATIONS,
        },
        "dimensions": dimensions,
        "profiles": profiles,
        "bias_detection": {
            "instrument": BIAS_INSTRUMENT,
            "citation": BIAS_CITATION,
            "items": [
                {
                    "question_id": question_id,
                    "high_bias_answer": target,
                    "description": BIAS_ITEM_DESCRIPTIONS[question_id],
                }
                for question_id, target in MC_TARGETS.items()
            ],
            "scoring": {
                "formula": "(bias_points / answered_count) * 10, neutral 5 when no item is answered",
                "ranges": BIAS_CONFIDENCE_RANGES,
            },
            "dimension_sensitivities": {d.id: d.bias_sensitivity for d in catalog.dimensions},
        },
        "algorithm_parameters": _algorithm_parameters(),
    }


def export_codebook_as_json(export_date: Optional[str] = None, indent: int = 2) -> str:
    return json.dumps(export_codebook(export_date), indent=indent, ensure_ascii=False)
