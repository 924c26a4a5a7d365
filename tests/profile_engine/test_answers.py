import json
import math

import pytest

from services.profile_engine.answers import (
    clergy_uses_ai,
    get_array_answer,
    get_matrix_answer,
    get_number_answer,
    get_raw_answer,
    get_scale_answer,
    get_string_answer,
    is_clergy,
    is_empty,
    is_layperson,
    resolve_role,
)
from services.profile_engine.models import RespondentRole
from services.profile_engine.profiles import calculate_profile_spectrum


@pytest.mark.parametrize("answers", [None, "not a map", 42, ["a", "b"]])
def test_accessors_tolerate_non_mapping_input(answers):
    assert get_raw_answer(answers, "x") is None
    assert get_string_answer(answers, "x") == ""
    assert get_number_answer(answers, "x") is None
    assert get_array_answer(answers, "x") == []
    assert get_matrix_answer(answers, "x") == {}
    assert resolve_role(answers) is RespondentRole.UNKNOWN
    assert is_empty(answers)


def test_string_answer_rejects_other_types():
    answers = {"a": "oui", "b": 3, "c": ["oui"], "d": None}
    assert get_string_answer(answers, "a") == "oui"
    assert get_string_answer(answers, "b") == ""
    assert get_string_answer(answers, "c") == ""
    assert get_string_answer(answers, "d") == ""
    assert get_string_answer(answers, "missing") == ""


def test_number_answer_rejects_booleans_and_non_finite():
    answers = {"int": 4, "float": 2.5, "bool": True, "nan": math.nan, "inf": math.inf, "str": "4"}
    assert get_number_answer(answers, "int") == 4.0
    assert get_number_answer(answers, "float") == 2.5
    assert get_number_answer(answers, "bool") is None
    assert get_number_answer(answers, "nan") is None
    assert get_number_answer(answers, "inf") is None
    assert get_number_answer(answers, "str") is None


def test_scale_answer_is_clamped():
    answers = {"low": -3, "high": 12, "mid": 3}
    assert get_scale_answer(answers, "low") == 1.0
    assert get_scale_answer(answers, "high") == 5.0
    assert get_scale_answer(answers, "mid") == 3.0
    assert get_scale_answer(answers, "missing") is None


def test_array_answer_drops_non_string_members():
    answers = {"mixed": ["travail", 3, None, "spirituel"], "scalar": "travail", "tuple": ("a", "b")}
    assert get_array_answer(answers, "mixed") == ["travail", "spirituel"]
    assert get_array_answer(answers, "scalar") == []
    assert get_array_answer(answers, "tuple") == ["a", "b"]


def test_matrix_answer_drops_malformed_rows():
    answers = {"m": {"redaction": 2, "recherche": "beaucoup", "structure": True, "illustrations": 1.5, "x": math.nan}}
    assert get_matrix_answer(answers, "m") == {"redaction": 2.0, "illustrations": 1.5}
    assert get_matrix_answer({"m": [1, 2]}, "m") == {}


def test_integers_beyond_float_range_are_dropped():
    huge = json.loads("1" + "0" * 400)
    assert get_number_answer({"ctrl_ia_confort": huge}, "ctrl_ia_confort") is None
    assert get_scale_answer({"ctrl_ia_confort": 10**400}, "ctrl_ia_confort") is None
    matrix = {"redaction": 10**400, "plan": 2}
    assert get_matrix_answer({"min_pred_nature": matrix}, "min_pred_nature") == {"plan": 2.0}


def test_huge_integers_do_not_break_the_spectrum(clergy_answers):
    spectrum = calculate_profile_spectrum(json.loads('{"ctrl_ia_confort": 1' + "0" * 400 + "}"))
    assert spectrum.primary is not None

    answers = dict(clergy_answers, min_pred_nature={"redaction": 10**400})
    spectrum = calculate_profile_spectrum(answers)
    assert 1.0 <= spectrum.dimensions.ai_openness.value <= 5.0


@pytest.mark.parametrize("status, role", [
    ("clerge", RespondentRole.CLERGY),
    ("religieux", RespondentRole.CLERGY),
    ("laic_engagé", RespondentRole.LAYPERSON),
    ("laic_pratiquant", RespondentRole.LAYPERSON),
    ("curieux", RespondentRole.LAYPERSON),
    ("", RespondentRole.UNKNOWN),
])
def test_resolve_role(status, role):
    assert resolve_role({"profil_statut": status}) is role


def test_role_predicates_are_exclusive():
    assert is_clergy({"profil_statut": "clerge"})
    assert not is_layperson({"profil_statut": "clerge"})
    assert is_layperson({"profil_statut": "curieux"})
    assert not is_clergy({})
    assert not is_layperson({})


def test_clergy_uses_ai():
    assert clergy_uses_ai({"profil_statut": "clerge", "min_pred_usage": "rare"})
    assert not clergy_uses_ai({"profil_statut": "clerge", "min_pred_usage": "jamais"})
    assert not clergy_uses_ai({"profil_statut": "clerge"})
    assert not clergy_uses_ai({"profil_statut": "laic_engagé", "min_pred_usage": "regulier"})


def test_is_empty():
    assert is_empty({})
    assert not is_empty({"profil_statut": "clerge"})
