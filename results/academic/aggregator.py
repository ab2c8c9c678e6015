"""
Per-semester aggregation.

GPA is the unit-weighted mean of grade points, computed in Decimal and
quantized to 4 places with ROUND_HALF_UP (half away from zero; scores are never
negative). Classification and status tables are evaluated top-down and the
first matching row wins.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import List, Sequence, Tuple

from results.services.shared.errors import ContractViolation

from .grade_scale import grade_points
from .types import (
    Classification,
    CourseResultRow,
    SemesterRef,
    SemesterStatus,
    SemesterSummary,
    SemesterTotals,
)

GPA_QUANTUM = Decimal("0.0001")

CLASSIFICATION_THRESHOLDS: List[Tuple[Decimal, Classification]] = [
    (Decimal("3.5"), Classification.EXCELLENT),
    (Decimal("2.5"), Classification.VERY_GOOD),
    (Decimal("2.0"), Classification.GOOD),
]

# Failed courses allowed before a semester counts as failed.
MAX_DEFICIENT_COURSES = 2

DEFAULT_LEVEL = 1

ORDINALS_AR = [
    "الأول", "الثاني", "الثالث", "الرابع", "الخامس",
    "السادس", "السابع", "الثامن", "التاسع", "العاشر",
]
ORDINALS_EN = [
    "First", "Second", "Third", "Fourth", "Fifth",
    "Sixth", "Seventh", "Eighth", "Ninth", "Tenth",
]


def round_gpa(value: Decimal) -> Decimal:
    return value.quantize(GPA_QUANTUM, rounding=ROUND_HALF_UP)


def weighted_gpa(rows: Sequence[CourseResultRow]) -> Decimal:
    total_units = sum(row.units for row in rows)
    if total_units <= 0:
        return round_gpa(Decimal("0"))
    weighted = sum((grade_points(row.score) * row.units for row in rows), Decimal("0"))
    return round_gpa(weighted / Decimal(total_units))


def classify_gpa(gpa: Decimal) -> Classification:
    for threshold, classification in CLASSIFICATION_THRESHOLDS:
        if gpa >= threshold:
            return classification
    return Classification.ACCEPTABLE


def determine_status(incomplete_courses: int) -> SemesterStatus:
    if incomplete_courses < 0:
        raise ContractViolation(f"incomplete course count cannot be negative: {incomplete_courses}")
    if incomplete_courses == 0:
        return SemesterStatus.PASSED
    if incomplete_courses <= MAX_DEFICIENT_COURSES:
        return SemesterStatus.PASSED_WITH_DEFICIENCY
    return SemesterStatus.FAILED


def infer_current_level(rows: Sequence[CourseResultRow]) -> int:
    # Highest course level taken in the semester; not an average.
    levels = [row.level for row in rows if row.level > 0]
    return max(levels) if levels else DEFAULT_LEVEL


def level_name(level: int, lang: str = "en") -> str:
    if isinstance(level, bool) or not isinstance(level, int) or level < 1:
        raise ContractViolation(f"semester level must be a positive integer, got {level!r}")
    if lang == "ar":
        if level <= len(ORDINALS_AR):
            return f"الفصل الدراسي {ORDINALS_AR[level - 1]}"
        return f"الفصل الدراسي {level}"
    if level <= len(ORDINALS_EN):
        return f"{ORDINALS_EN[level - 1]} Semester"
    return f"Semester Level {level}"


def _validate_rows(rows: Sequence[CourseResultRow]) -> None:
    if not rows:
        raise ContractViolation("cannot aggregate a semester without course rows")
    for row in rows:
        if not isinstance(row, CourseResultRow):
            raise ContractViolation(f"expected CourseResultRow, got {type(row).__name__}")
        if isinstance(row.units, bool) or not isinstance(row.units, int) or row.units < 1:
            raise ContractViolation(f"units of {row.course_code} must be a positive integer, got {row.units!r}")
        if isinstance(row.level, bool) or not isinstance(row.level, int) or row.level < 0:
            raise ContractViolation(f"level of {row.course_code} must be >= 0, got {row.level!r}")


def aggregate_semester(rows: Sequence[CourseResultRow], semester: SemesterRef) -> SemesterSummary:
    if not isinstance(semester, SemesterRef):
        raise ContractViolation("semester metadata must be a SemesterRef")
    _validate_rows(rows)

    total_units = sum(row.units for row in rows)
    passed_units = sum(row.units for row in rows if row.passed)
    incomplete = sum(1 for row in rows if not row.passed)
    gpa = weighted_gpa(rows)
    current_level = infer_current_level(rows)

    return SemesterSummary(
        semester_id=semester.semester_id,
        name_ar=semester.name_ar,
        name_en=semester.name_en,
        year=semester.year,
        term=semester.term,
        start_date=semester.start_date,
        courses=tuple(rows),
        current_level=current_level,
        level_name_ar=level_name(current_level, "ar"),
        level_name_en=level_name(current_level, "en"),
        summary=SemesterTotals(
            total_units=total_units,
            completed_units=passed_units,
            passed_units=passed_units,
            incomplete_courses=incomplete,
            gpa=gpa,
            classification=classify_gpa(gpa),
            status=determine_status(incomplete),
        ),
    )
