import pytest

from services.profile_engine.bias import (
    MC_TARGETS,
    NEUTRAL_BIAS_SCORE,
    adjust_score_for_bias,
    calculate_social_desirability_score,
    get_bias_confidence_multiplier,
)


def test_no_bias(low_bias_answers):
    assert calculate_social_desirability_score(low_bias_answers) == 0


def test_maximum_bias(high_bias_answers):
    assert calculate_social_desirability_score(high_bias_answers) == 10


def test_partial_answers_are_scored_on_answered_items():
    answers = {"ctrl_mc_1": "false", "ctrl_mc_2": "false"}
    assert calculate_social_desirability_score(answers) == 5


def test_unanswered_calibration_is_neutral(empty_answers):
    assert calculate_social_desirability_score(empty_answers) == NEUTRAL_BIAS_SCORE


def test_non_string_answers_are_ignored():
    answers = {question_id: True for question_id in MC_TARGETS}
    assert calculate_social_desirability_score(answers) == NEUTRAL_BIAS_SCORE


@pytest.mark.parametrize("bias, multiplier", [
    (0, 1.0),
    (3, 1.0),
    (4, 0.9),
    (6, 0.9),
    (8, 0.8),
    (10, 0.7),
])
def test_confidence_multiplier(bias, multiplier):
    assert get_bias_confidence_multiplier(bias) == multiplier


def test_no_adjustment_at_or_below_threshold():
    assert adjust_score_for_bias(4.2, 4.0, 0.8) == 4.2
    assert adjust_score_for_bias(4.2, 0.0, 0.8) == 4.2


def test_adjustment_scales_with_bias_and_sensitivity():
    assert adjust_score_for_bias(4.0, 10.0, 0.8) == 3.2
    assert adjust_score_for_bias(4.0, 7.0, 0.8) == 3.6
    assert adjust_score_for_bias(4.0, 10.0, 0.0) == 4.0


def test_adjustment_only_deflates_and_never_below_one():
    assert adjust_score_for_bias(1.2, 10.0, 1.0) == 1.0
    for bias in range(11):
        assert adjust_score_for_bias(3.0, bias, 0.5) <= 3.0


@pytest.mark.parametrize("raw, sensitivity", [(5.0, 0.8), (4.0, 0.2), (2.5, 0.7), (1.5, 1.0)])
def test_adjustment_is_non_increasing_in_bias(raw, sensitivity):
    adjusted = [adjust_score_for_bias(raw, bias / 2, sensitivity) for bias in range(8, 21)]
    assert all(later <= earlier for earlier, later in zip(adjusted, adjusted[1:]))
    assert adjusted[0] == raw
