import pytest
from pydantic import ValidationError

from services.profile_engine.config import PopulationOverride, ScoringSettings, scoring_settings
from services.profile_engine.dimensions import (
    calculate_all_dimensions,
    calculate_religiosity_dimension,
    get_population_params,
)
from services.profile_engine.profiles import (
    calculate_all_profile_matches,
    distance_to_match_score,
    select_runner_ups,
)


def test_defaults(monkeypatch):
    for name in ("SCORING_MATCH_DECAY", "SCORING_SECONDARY_GAP_THRESHOLD", "SCORING_CATALOG_PATH"):
        monkeypatch.delenv(name, raising=False)
    settings = ScoringSettings()
    assert settings.catalog_path is None
    assert settings.match_decay == 0.5
    assert settings.secondary_gap_threshold == 10.0
    assert (settings.max_insights, settings.max_tensions, settings.max_growth_areas) == (4, 3, 3)
    assert settings.population_overrides == {}


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SCORING_MATCH_DECAY", "1.0")
    monkeypatch.setenv("SCORING_MAX_INSIGHTS", "2")
    monkeypatch.setenv("SCORING_POPULATION_OVERRIDES", '{"religiosity": {"mean": 3.0, "std_dev": 1.0}}')
    settings = ScoringSettings()
    assert settings.match_decay == 1.0
    assert settings.max_insights == 2
    assert settings.population_overrides["religiosity"].mean == 3.0


def test_invalid_decay_rejected(monkeypatch):
    monkeypatch.setenv("SCORING_MATCH_DECAY", "0")
    with pytest.raises(ValidationError):
        ScoringSettings()


def test_decay_setting_drives_match_score(monkeypatch):
    monkeypatch.setattr(scoring_settings, "match_decay", 1.0)
    assert distance_to_match_score(2.0) == 14


def test_population_override(monkeypatch, base_answers):
    overrides = {"religiosity": PopulationOverride(mean=3.0, std_dev=1.0)}
    monkeypatch.setattr(scoring_settings, "population_overrides", overrides)

    params = get_population_params("religiosity")
    assert (params.mean, params.std_dev, params.note) == (3.0, 1.0, "override")
    assert calculate_religiosity_dimension(base_answers).percentile == 50
    # Other dimensions keep the catalogue parameters
    assert get_population_params("ai_openness").mean == 2.4


def test_gap_threshold_setting(monkeypatch, pionnier_answers):
    matches = calculate_all_profile_matches(calculate_all_dimensions(pionnier_answers))
    monkeypatch.setattr(scoring_settings, "secondary_gap_threshold", 1.0)
    assert select_runner_ups(matches) == (None, None)
