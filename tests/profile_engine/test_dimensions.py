import pytest

from services.profile_engine.dimensions import (
    calculate_ai_openness_dimension,
    calculate_all_dimensions,
    calculate_religiosity_dimension,
    calculate_sacred_boundary_dimension,
)
from services.profile_engine.models import DIMENSION_NAMES, RespondentRole

EXPECTED_VALUES = {
    "gardien_answers": (5.0, 1.1, 4.8, 3.6, 2.7, 3.8, 1.4),
    "pionnier_answers": (4.0, 4.7, 1.4, 2.1, 3.2, 2.9, 4.6),
    "progressiste_answers": (4.0, 2.9, 3.8, 4.0, 3.8, 2.6, 3.3),
    "explorateur_answers": (2.0, 2.8, 3.2, 2.7, 3.0, 1.8, 3.2),
    "innovateur_answers": (5.0, 4.7, 2.4, 3.1, 3.1, 2.8, 4.4),
    "equilibriste_answers": (3.0, 2.9, 3.2, 3.1, 3.1, 2.8, 2.8),
}


@pytest.mark.parametrize("fixture_name", list(EXPECTED_VALUES))
def test_archetype_dimension_values(fixture_name, request):
    dimensions = calculate_all_dimensions(request.getfixturevalue(fixture_name))
    values = dimensions.value_map()
    for name, expected in zip(DIMENSION_NAMES, EXPECTED_VALUES[fixture_name]):
        assert values[name] == pytest.approx(expected), name


def test_empty_answers_fall_back_to_neutral(empty_answers):
    dimensions = calculate_all_dimensions(empty_answers)
    for name in DIMENSION_NAMES:
        score = getattr(dimensions, name)
        assert score.value == 3.0
        assert score.confidence == 0.0
        assert 1 <= score.percentile <= 99


@pytest.mark.parametrize("answers", [None, "garbage", 17, ["a"]])
def test_malformed_input_never_raises(answers):
    dimensions = calculate_all_dimensions(answers)
    assert all(v == 3.0 for v in dimensions.value_map().values())


def test_values_and_percentiles_stay_in_range(extreme_high_answers, extreme_low_answers):
    for answers in (extreme_high_answers, extreme_low_answers):
        dimensions = calculate_all_dimensions(answers)
        for name in DIMENSION_NAMES:
            score = getattr(dimensions, name)
            assert 1.0 <= score.value <= 5.0
            assert 0.0 <= score.confidence <= 1.0
            assert 1 <= score.percentile <= 99


def test_religiosity_is_crs5_mean(base_answers, extreme_high_answers, extreme_low_answers):
    assert calculate_religiosity_dimension(base_answers).value == 3.0
    assert calculate_religiosity_dimension(extreme_high_answers).value == 5.0
    assert calculate_religiosity_dimension(extreme_low_answers).value == 1.0


def test_religiosity_percentile_tracks_value(gardien_answers, explorateur_answers):
    high = calculate_religiosity_dimension(gardien_answers)
    low = calculate_religiosity_dimension(explorateur_answers)
    assert high.percentile > 50 > low.percentile


def test_confidence_reflects_coverage(gardien_answers, minimal_answers):
    assert calculate_religiosity_dimension(gardien_answers).confidence == 1.0
    # Four of five expected AI items answered
    assert calculate_ai_openness_dimension(gardien_answers).confidence == 0.8
    # Frequency alone, with the neutral bias of an unanswered calibration block
    assert calculate_ai_openness_dimension(minimal_answers).confidence == 0.18


def test_unknown_token_scores_midpoint():
    score = calculate_religiosity_dimension({"crs_intellect": "une_reponse_inconnue"}, bias_score=0)
    assert score.value == 3.0
    assert score.confidence == 0.2


def test_high_bias_deflates_every_dimension(high_bias_answers, low_bias_answers):
    high = calculate_all_dimensions(high_bias_answers)
    low = calculate_all_dimensions(low_bias_answers)
    for name in DIMENSION_NAMES:
        assert getattr(high, name).value < getattr(low, name).value, name
    assert high.religiosity.value == 2.2
    assert high.religiosity.confidence == 0.7


def test_explicit_bias_score_overrides_answers(base_answers):
    assert calculate_religiosity_dimension(base_answers, bias_score=10).value == 2.2
    assert calculate_religiosity_dimension(base_answers, bias_score=0).value == 3.0


def test_clergy_items_feed_ai_openness(clergy_answers, clergy_no_ai_answers):
    with_ai = calculate_ai_openness_dimension(clergy_answers)
    without_ai = calculate_ai_openness_dimension(clergy_no_ai_answers)
    assert with_ai.confidence == 1.0
    assert with_ai.value > without_ai.value


def test_role_override_skips_clergy_items(clergy_answers, base_answers):
    as_lay = calculate_ai_openness_dimension(clergy_answers, role=RespondentRole.LAYPERSON)
    assert as_lay.value == calculate_ai_openness_dimension(base_answers).value


def test_sermon_delegation_raises_openness_and_lowers_boundary(clergy_answers):
    delegated = dict(clergy_answers, min_pred_nature={"plan": 3, "exegese": 3, "redaction": 3})
    untouched = dict(clergy_answers, min_pred_nature={"plan": 0, "exegese": 0, "redaction": 0})
    assert calculate_ai_openness_dimension(delegated).value > calculate_ai_openness_dimension(untouched).value
    assert calculate_sacred_boundary_dimension(delegated).value < calculate_sacred_boundary_dimension(untouched).value


def test_spiritual_ai_use_lowers_sacred_boundary(base_answers, pionnier_answers):
    assert calculate_sacred_boundary_dimension(pionnier_answers).value < 2.0
    assert calculate_sacred_boundary_dimension(base_answers).value > 3.0


def test_lay_refusals_raise_sacred_boundary(layperson_no_spiritual_ai_answers, base_answers):
    refusing = calculate_sacred_boundary_dimension(layperson_no_spiritual_ai_answers)
    assert refusing.value > calculate_sacred_boundary_dimension(base_answers).value


def test_camel_case_dump(base_answers):
    dumped = calculate_all_dimensions(base_answers).model_dump(by_alias=True)
    assert set(dumped) == {
        "religiosity", "aiOpenness", "sacredBoundary", "ethicalConcern",
        "psychologicalPerception", "communityInfluence", "futureOrientation",
    }
    assert set(dumped["aiOpenness"]) == {"value", "confidence", "percentile"}
