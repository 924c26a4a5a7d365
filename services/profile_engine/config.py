from typing import Dict, Optional
import os

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()


class PopulationOverride(BaseModel):
    mean: float
    std_dev: float = Field(..., ge=0.0)


class ScoringSettings(BaseSettings):
    # Alternate YAML catalogue; None means the file shipped with the package
    catalog_path: Optional[str] = None

    # matchScore = round(100 * exp(-match_decay * distance))
    match_decay: float = Field(0.5, gt=0.0)
    # A secondary (and tertiary) profile is only reported when within this many points of the primary
    secondary_gap_threshold: float = Field(10.0, ge=0.0)

    max_insights: int = Field(4, ge=1)
    max_tensions: int = Field(3, ge=1)
    max_growth_areas: int = Field(3, ge=1)

    # Recalibrated population parameters, e.g.
    # SCORING_POPULATION_OVERRIDES='{"religiosity": {"mean": 3.6, "std_dev": 1.0}}'
    population_overrides: Dict[str, PopulationOverride] = Field(default_factory=dict)

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix='SCORING_')


# Instantiate settings
scoring_settings = ScoringSettings()


if __name__ == "__main__":
    # For checking the configuration loading
    print("Scoring Configuration:")
    print(f"  Catalogue: {scoring_settings.catalog_path or '(packaged)'}")
    print(f"  Match decay: {scoring_settings.match_decay}")
    print(f"  Secondary gap threshold: {scoring_settings.secondary_gap_threshold}")
    print(f"  Caps (insights/tensions/growth): {scoring_settings.max_insights}/"
          f"{scoring_settings.max_tensions}/{scoring_settings.max_growth_areas}")
    print(f"  Population overrides: {list(scoring_settings.population_overrides) or 'none'}")
    print("\nTo override, set environment variables like SCORING_MATCH_DECAY, SCORING_SECONDARY_GAP_THRESHOLD, SCORING_POPULATION_OVERRIDES.")
