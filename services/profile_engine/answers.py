# services/profile_engine/answers.py
# Safe, typed access to the loosely-typed survey answer map.
#
# The answer map comes straight from the survey front-end and is never
# validated upstream, so none of these helpers may raise.

import math
from collections.abc import Mapping
from typing import Any, Dict, List, Optional

from .models import RespondentRole


CLERGY_STATUSES = frozenset({"clerge", "religieux"})
STATUS_KEY = "profil_statut"


def get_raw_answer(answers: Any, key: str) -> Any:
    """The untyped answer value, or None when absent or ``answers`` is not a mapping."""
    if not isinstance(answers, Mapping):
        return None
    return answers.get(key)


def get_string_answer(answers: Any, key: str) -> str:
    """Returns the answer as a string, or ``""`` when absent or not a string."""
    value = get_raw_answer(answers, key)
    return value if isinstance(value, str) else ""


def _as_finite_float(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        # ints beyond the float range, e.g. a long digit string from json.loads
        return None
    return number if math.isfinite(number) else None


def get_number_answer(answers: Any, key: str) -> Optional[float]:
    """
    Returns a numeric answer, or None when absent.

    Booleans, NaN, infinities and integers too large for a float are
    rejected: they are never legitimate slider values and would poison a
    weighted average.
    """
    return _as_finite_float(get_raw_answer(answers, key))


def get_scale_answer(answers: Any, key: str, low: float = 1.0, high: float = 5.0) -> Optional[float]:
    """Numeric answer clamped to the ``[low, high]`` scale range."""
    value = get_number_answer(answers, key)
    if value is None:
        return None
    return max(low, min(high, value))


def get_array_answer(answers: Any, key: str) -> List[str]:
    """Multi-select answer; non-string members are dropped."""
    value = get_raw_answer(answers, key)
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, str)]


def get_matrix_answer(answers: Any, key: str) -> Dict[str, float]:
    """Matrix answer as ``{row_id: number}``; malformed rows are dropped."""
    value = get_raw_answer(answers, key)
    if not isinstance(value, Mapping):
        return {}
    matrix = {}
    for row, cell in value.items():
        number = _as_finite_float(cell)
        if number is not None:
            matrix[str(row)] = number
    return matrix


def is_clergy(answers: Any) -> bool:
    return get_string_answer(answers, STATUS_KEY) in CLERGY_STATUSES


def is_layperson(answers: Any) -> bool:
    """Any declared status outside the clergy set."""
    status = get_string_answer(answers, STATUS_KEY)
    return bool(status) and status not in CLERGY_STATUSES


def clergy_uses_ai(answers: Any) -> bool:
    """True when a clergy respondent uses AI to prepare preaching."""
    usage = get_string_answer(answers, "min_pred_usage")
    return is_clergy(answers) and usage not in ("", "jamais")


def resolve_role(answers: Any) -> RespondentRole:
    if is_clergy(answers):
        return RespondentRole.CLERGY
    if is_layperson(answers):
        return RespondentRole.LAYPERSON
    return RespondentRole.UNKNOWN


def is_empty(answers: Any) -> bool:
    return not isinstance(answers, Mapping) or len(answers) == 0
