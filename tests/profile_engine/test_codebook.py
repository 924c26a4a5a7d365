import json

import pytest

from services.profile_engine.bias import MC_TARGETS
from services.profile_engine.codebook import export_codebook, export_codebook_as_json
from services.profile_engine.models import DIMENSION_NAMES

EXPORT_DATE = "2025-01-15T00:00:00+00:00"


@pytest.fixture(scope="module")
def codebook():
    return export_codebook(EXPORT_DATE)


def test_top_level_sections(codebook):
    assert set(codebook) == {"metadata", "dimensions", "profiles", "bias_detection", "algorithm_parameters"}
    assert codebook["metadata"]["export_date"] == EXPORT_DATE
    assert codebook["metadata"]["catalog_version"] == "1.0.0"
    assert codebook["metadata"]["limitations"]


def test_dimensions_section(codebook):
    assert list(codebook["dimensions"]) == list(DIMENSION_NAMES)
    religiosity = codebook["dimensions"]["religiosity"]
    assert religiosity["validation_status"] == "validated"
    assert religiosity["bias_sensitivity"] == 0.8
    assert religiosity["population"]["mean"] == 3.8
    assert religiosity["population"]["std_dev"] == 0.9


def test_profiles_section(codebook):
    assert len(codebook["profiles"]) == 8
    gardien = codebook["profiles"]["gardien_tradition"]
    assert gardien["ideal_dimensions"]["religiosity"] == [4.0, 5.0]
    assert gardien["weights"]["ai_openness"] == 1.5
    assert [s["id"] for s in gardien["sub_profiles"]] == ["protecteur_sacre", "sage_prudent", "berger_communautaire"]
    assert gardien["sub_profiles"][0]["ideal_pattern"][0] == {"dimension": "sacred_boundary", "emphasis": "high"}


def test_bias_section(codebook):
    bias = codebook["bias_detection"]
    assert [item["question_id"] for item in bias["items"]] == list(MC_TARGETS)
    assert [item["high_bias_answer"] for item in bias["items"]] == list(MC_TARGETS.values())
    assert bias["dimension_sensitivities"]["ai_openness"] == 0.2
    assert set(bias["scoring"]["ranges"]) == {"low", "moderate", "high", "very_high"}


def test_algorithm_parameters(codebook):
    params = {p["name"]: p["value"] for p in codebook["algorithm_parameters"]}
    assert params == {
        "EXPONENTIAL_DECAY": 0.5,
        "SECONDARY_PROFILE_GAP": 10.0,
        "BIAS_ADJUSTMENT_THRESHOLD": 4.0,
        "MAX_BIAS_DEFLATION": 1.0,
    }


def test_export_date_defaults_to_now():
    assert export_codebook()["metadata"]["export_date"]


def test_json_export_keeps_accents():
    text = export_codebook_as_json(EXPORT_DATE)
    parsed = json.loads(text)
    assert parsed["profiles"]["prudent_eclaire"]["title"] == "Prudent Éclairé"
    assert "Prudent Éclairé" in text
