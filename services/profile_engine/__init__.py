"""
Scoring and profiling engine for the AI & faith survey.

Maps raw survey answers to seven bias-corrected dimension scores, then
matches them against eight primary profiles and their sub-profiles.
"""

from .bias import (
    adjust_score_for_bias,
    calculate_social_desirability_score,
    get_bias_confidence_multiplier,
)
from .dimensions import (
    calculate_ai_openness_dimension,
    calculate_all_dimensions,
    calculate_community_influence_dimension,
    calculate_ethical_concern_dimension,
    calculate_future_orientation_dimension,
    calculate_psychological_perception_dimension,
    calculate_religiosity_dimension,
    calculate_sacred_boundary_dimension,
)
from .loader import get_profile_catalog
from .models import (
    DIMENSION_NAMES,
    DimensionScore,
    ProfileConfigurationError,
    ProfileMatch,
    ProfileSpectrum,
    RespondentRole,
    SevenDimensions,
    SubProfileMatch,
)
from .profiles import (
    build_profile_spectrum,
    calculate_profile_spectrum,
    get_enhanced_profile_data,
    get_simple_profile,
)

__all__ = [
    "DIMENSION_NAMES",
    "DimensionScore",
    "ProfileConfigurationError",
    "ProfileMatch",
    "ProfileSpectrum",
    "RespondentRole",
    "SevenDimensions",
    "SubProfileMatch",
    "adjust_score_for_bias",
    "build_profile_spectrum",
    "calculate_ai_openness_dimension",
    "calculate_all_dimensions",
    "calculate_community_influence_dimension",
    "calculate_ethical_concern_dimension",
    "calculate_future_orientation_dimension",
    "calculate_profile_spectrum",
    "calculate_psychological_perception_dimension",
    "calculate_religiosity_dimension",
    "calculate_sacred_boundary_dimension",
    "calculate_social_desirability_score",
    "get_bias_confidence_multiplier",
    "get_enhanced_profile_data",
    "get_profile_catalog",
    "get_simple_profile",
]
