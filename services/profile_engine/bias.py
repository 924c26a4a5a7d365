# services/profile_engine/bias.py
# Social desirability bias detection (Marlowe-Crowne Short Form C) and the
# deflation it applies to self-reported dimension scores.

from typing import Any, Dict

from .answers import get_raw_answer
from .stats import round_to_tenth

# Answer token that signals socially desirable over-claiming for each item.
MC_TARGETS: Dict[str, str] = {
    "ctrl_mc_1": "false",  # "Hard to work without encouragement": claims independence
    "ctrl_mc_2": "true",   # "Never intensely disliked anyone": claims saintliness
    "ctrl_mc_3": "false",  # "Sometimes rebel against authority": claims perfect rationality
    "ctrl_mc_4": "true",   # "Always courteous": claims perfect manners
    "ctrl_mc_5": "false",  # "Taken advantage of someone": claims moral perfection
}

NEUTRAL_BIAS_SCORE = 5.0
ADJUSTMENT_THRESHOLD = 4.0
MAX_DEFLATION = 1.0


def calculate_social_desirability_score(answers: Any) -> float:
    """
    Bias score on a 0-10 scale: share of answered calibration items given in
    their over-claiming direction.

    Only string answers count as answered. With no calibration item answered
    the score is the neutral 5: missing data is not evidence of honesty.
    """
    bias_points = 0
    answered = 0
    for question_id, target in MC_TARGETS.items():
        answer = get_raw_answer(answers, question_id)
        if not isinstance(answer, str):
            continue
        answered += 1
        if answer == target:
            bias_points += 1

    if answered == 0:
        return NEUTRAL_BIAS_SCORE
    return bias_points / answered * 10


def get_bias_confidence_multiplier(bias_score: float) -> float:
    if bias_score <= 3:
        return 1.0
    if bias_score <= 6:
        return 0.9
    if bias_score <= 8:
        return 0.8
    return 0.7


def adjust_score_for_bias(raw_score: float, bias_score: float, sensitivity: float) -> float:
    """
    Deflates a raw dimension score in proportion to bias and sensitivity.

    Self-report inflation is modelled as the only bias direction, so scores
    are only ever lowered, never raised, and never below 1.
    """
    if bias_score <= ADJUSTMENT_THRESHOLD:
        return raw_score

    bias_factor = (bias_score - ADJUSTMENT_THRESHOLD) / (10 - ADJUSTMENT_THRESHOLD)
    adjustment = bias_factor * sensitivity * MAX_DEFLATION
    return max(1.0, round_to_tenth(raw_score - adjustment))
