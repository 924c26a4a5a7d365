# services/profile_engine/stats.py
# Numeric helpers shared by the dimension calculators and the bias corrector.

import math
from typing import Sequence

# Abramowitz & Stegun, Handbook of Mathematical Functions, formula 7.1.26
_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911


def round_half_up(value: float, decimals: int = 0) -> float:
    """
    Rounds halves away from zero for positive values.

    Built-in ``round`` uses banker's rounding, which would make 2.25 -> 2.2
    and shift scores near category thresholds.
    """
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def round_to_tenth(value: float) -> float:
    return round_half_up(value, 1)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def calculate_weighted_average(scores: Sequence[float], weights: Sequence[float]) -> float:
    """
    Weighted mean of parallel score/weight sequences, rounded to one decimal.

    Returns 0 for empty or mismatched input and for a zero total weight.
    """
    if not scores or len(scores) != len(weights):
        return 0.0
    total_weight = sum(weights)
    if total_weight == 0:
        return 0.0
    weighted_sum = sum(score * weight for score, weight in zip(scores, weights))
    return round_to_tenth(weighted_sum / total_weight)


def normal_cdf(z: float) -> float:
    """Standard normal CDF via the A&S erf approximation (max error 1.5e-7)."""
    sign = -1.0 if z < 0 else 1.0
    abs_z = abs(z) / math.sqrt(2.0)
    t = 1.0 / (1.0 + _P * abs_z)
    y = 1.0 - (((((_A5 * t + _A4) * t) + _A3) * t + _A2) * t + _A1) * t * math.exp(-abs_z * abs_z)
    return 0.5 * (1.0 + sign * y)


def calculate_percentile(score: float, mean: float, std_dev: float) -> int:
    """
    Percentile rank of ``score`` against a normal population, clamped to [1, 99].

    A zero standard deviation carries no information and yields 50.
    """
    if std_dev == 0:
        return 50
    z_score = (score - mean) / std_dev
    percentile = int(round_half_up(normal_cdf(z_score) * 100))
    return max(1, min(99, percentile))
