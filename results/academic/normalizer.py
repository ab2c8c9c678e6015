from __future__ import annotations

from typing import Optional

from results.services.shared.errors import ContractViolation

from .grade_scale import resolve_grade, to_score
from .types import CourseResultRow, Enrollment, GradeAbsent, GradePresent


def normalize_enrollment(enrollment: Enrollment) -> Optional[CourseResultRow]:
    """
    Turn one enrollment into a course-result row.

    Returns None when the enrollment has no grade or the grade is not
    published yet; such enrollments are left out of every total.
    """
    if not isinstance(enrollment, Enrollment):
        raise ContractViolation(f"expected Enrollment, got {type(enrollment).__name__}")

    grade = enrollment.grade
    if isinstance(grade, GradeAbsent):
        return None
    if not isinstance(grade, GradePresent):
        raise ContractViolation(f"unknown grade variant {type(grade).__name__}")
    if grade.is_published is not True:
        return None

    unit = enrollment.course_unit
    resolved = resolve_grade(to_score(grade.total_score))
    return CourseResultRow(
        course_code=unit.code,
        units=unit.units,
        level=unit.course_level,
        score=resolved.score,
        passed=resolved.passed,
        letter_grade=resolved.letter_grade,
        grade_points=resolved.grade_points,
        course_name_ar=unit.name_ar,
        course_name_en=unit.name_en,
    )
