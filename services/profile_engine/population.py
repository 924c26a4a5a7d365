# services/profile_engine/population.py
# Population-level aggregation of scored respondents for the admin dashboard.

import logging
from typing import Any, Dict, Iterable, List

import numpy as np
import pandas as pd
from pydantic import BaseModel, Field

from .answers import resolve_role
from .bias import calculate_social_desirability_score
from .dimensions import calculate_all_dimensions
from .models import DIMENSION_NAMES
from .profiles import build_profile_spectrum
from .stats import round_half_up

logger = logging.getLogger(__name__)

# Upper edges of the first four histogram bins; the fifth is open-ended
HISTOGRAM_EDGES = [1.5, 2.5, 3.5, 4.5]
HISTOGRAM_LABELS = ["1", "2", "3", "4", "5"]


class DimensionDistribution(BaseModel):
    mean: float
    std_dev: float
    median: float
    histogram: Dict[str, int]


class PopulationSummary(BaseModel):
    respondents: int = Field(..., ge=0)
    primary_profiles: Dict[str, int] = Field(default_factory=dict)
    sub_profiles: Dict[str, int] = Field(default_factory=dict)
    roles: Dict[str, int] = Field(default_factory=dict)
    dimensions: Dict[str, DimensionDistribution] = Field(default_factory=dict)
    religiosity_ai_correlation: float = 0.0
    mean_bias_score: float = 0.0


def score_population(answer_sets: Iterable[Any]) -> pd.DataFrame:
    """
    Scores every answer set. One row per respondent with the primary and
    sub-profile, the primary match score, role, bias score and the seven
    dimension values.
    """
    rows: List[Dict[str, Any]] = []
    for answers in answer_sets:
        dimensions = calculate_all_dimensions(answers)
        spectrum = build_profile_spectrum(dimensions, answers)
        row = {
            "primary": spectrum.primary.profile,
            "match_score": spectrum.primary.match_score,
            "sub_profile": spectrum.sub_profile.sub_profile,
            "role": resolve_role(answers).value,
            "bias_score": calculate_social_desirability_score(answers),
        }
        row.update(dimensions.value_map())
        rows.append(row)

    columns = ["primary", "match_score", "sub_profile", "role", "bias_score", *DIMENSION_NAMES]
    return pd.DataFrame(rows, columns=columns)


def pearson_correlation(x: pd.Series, y: pd.Series) -> float:
    """Pearson r rounded to two decimals; 0 when either series has no variance."""
    x_values = x.to_numpy(dtype=float)
    y_values = y.to_numpy(dtype=float)
    if len(x_values) < 2:
        return 0.0
    x_dev = x_values - x_values.mean()
    y_dev = y_values - y_values.mean()
    denominator = np.sqrt((x_dev ** 2).sum() * (y_dev ** 2).sum())
    if denominator == 0:
        return 0.0
    return round_half_up(float((x_dev * y_dev).sum() / denominator), 2)


def describe_dimension(values: pd.Series) -> DimensionDistribution:
    bins = np.digitize(values.to_numpy(dtype=float), HISTOGRAM_EDGES)
    counts = np.bincount(bins, minlength=len(HISTOGRAM_LABELS))
    return DimensionDistribution(
        mean=round_half_up(float(values.mean()), 2),
        # Population standard deviation, not the sample one
        std_dev=round_half_up(float(values.std(ddof=0)), 2),
        median=float(values.median()),
        histogram={label: int(count) for label, count in zip(HISTOGRAM_LABELS, counts)},
    )


def summarize_population(frame: pd.DataFrame) -> PopulationSummary:
    if frame.empty:
        return PopulationSummary(respondents=0)

    summary = PopulationSummary(
        respondents=len(frame),
        primary_profiles={k: int(v) for k, v in frame["primary"].value_counts().items()},
        sub_profiles={k: int(v) for k, v in frame["sub_profile"].value_counts().items()},
        roles={k: int(v) for k, v in frame["role"].value_counts().items()},
        dimensions={name: describe_dimension(frame[name]) for name in DIMENSION_NAMES},
        religiosity_ai_correlation=pearson_correlation(frame["religiosity"], frame["ai_openness"]),
        mean_bias_score=round_half_up(float(frame["bias_score"].mean()), 2),
    )
    return summary


def aggregate_population(answer_sets: Iterable[Any]) -> PopulationSummary:
    """Scores and summarises a batch of respondents."""
    summary = summarize_population(score_population(answer_sets))
    logger.info(
        "Population aggregated",
        extra={
            "respondents": summary.respondents,
            "primary_profiles": summary.primary_profiles,
            "religiosity_ai_correlation": summary.religiosity_ai_correlation,
        },
    )
    return summary
