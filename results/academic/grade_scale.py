from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Tuple

from results.services.shared.errors import ContractViolation

PASS_SCORE = Decimal("50")
MIN_SCORE = Decimal("0")
MAX_SCORE = Decimal("100")

# (letter, arabic label, inclusive lower bound, grade points), highest band first.
DEFAULT_GRADE_SCALE: List[Tuple[str, str, Decimal, Decimal]] = [
    ("A", "ممتاز", Decimal("90"), Decimal("4.0")),
    ("B", "جيد جداً", Decimal("80"), Decimal("3.0")),
    ("C", "جيد", Decimal("70"), Decimal("2.0")),
    ("D", "مقبول", Decimal("60"), Decimal("1.0")),
    ("F", "ضعيف", Decimal("0"), Decimal("0.0")),
]


@dataclass(frozen=True)
class GradeResolution:
    score: Decimal
    letter_grade: str
    grade_points: Decimal
    passed: bool


def to_score(value: Any) -> Decimal:
    """Coerce a stored total score (int, str, float or Decimal) to a finite Decimal."""
    if isinstance(value, bool) or value is None:
        raise ContractViolation(f"score must be numeric, got {value!r}")
    if isinstance(value, Decimal):
        score = value
    else:
        try:
            score = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ContractViolation(f"score must be numeric, got {value!r}") from None
    if not score.is_finite():
        raise ContractViolation(f"score must be finite, got {value!r}")
    return score


def _checked(score: Any) -> Decimal:
    s = to_score(score)
    if s < MIN_SCORE or s > MAX_SCORE:
        raise ContractViolation(f"score must be between {MIN_SCORE} and {MAX_SCORE}, got {s}")
    return s


def _band(s: Decimal) -> Tuple[str, str, Decimal, Decimal]:
    for band in DEFAULT_GRADE_SCALE:
        if s >= band[2]:
            return band
    return DEFAULT_GRADE_SCALE[-1]


def resolve_grade(score: Any) -> GradeResolution:
    s = _checked(score)
    letter, _label_ar, _low, points = _band(s)
    return GradeResolution(
        score=s,
        letter_grade=letter,
        grade_points=points,
        passed=s >= PASS_SCORE,
    )


def grade_points(score: Any) -> Decimal:
    return _band(_checked(score))[3]


def is_passing(score: Any) -> bool:
    return _checked(score) >= PASS_SCORE


def get_grading_scale() -> List[Dict[str, Any]]:
    """Band table for display, highest band first, with inclusive min/max."""
    rows: List[Dict[str, Any]] = []
    upper = MAX_SCORE
    for idx, (letter, label_ar, low, points) in enumerate(DEFAULT_GRADE_SCALE):
        rows.append(
            {
                "letter": letter,
                "letterAr": label_ar,
                "min": low,
                "max": upper,
                "points": points,
                "upperInclusive": idx == 0,
            }
        )
        upper = low
    return rows


def min_score_for_letter(letter: str) -> Decimal | None:
    wanted = str(letter or "").strip().upper()
    for band_letter, _label_ar, low, _points in DEFAULT_GRADE_SCALE:
        if band_letter == wanted:
            return low
    return None
