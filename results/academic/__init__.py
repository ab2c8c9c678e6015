"""Academic domain modules for grade resolution and results aggregation."""

from .grade_scale import (
    PASS_SCORE,
    resolve_grade,
    grade_points,
    is_passing,
    get_grading_scale,
    min_score_for_letter,
)
from .normalizer import normalize_enrollment
from .aggregator import (
    aggregate_semester,
    classify_gpa,
    determine_status,
    infer_current_level,
    level_name,
)
from .compiler import build_standing, compile_student_results
from .types import (
    ABSENT,
    AcademicStanding,
    Classification,
    CourseResultRow,
    CourseUnitRef,
    Enrollment,
    GradeAbsent,
    GradePresent,
    SemesterRef,
    SemesterStatus,
    SemesterSummary,
    StudentResults,
)

__all__ = [
    "PASS_SCORE",
    "resolve_grade",
    "grade_points",
    "is_passing",
    "get_grading_scale",
    "min_score_for_letter",
    "normalize_enrollment",
    "aggregate_semester",
    "classify_gpa",
    "determine_status",
    "infer_current_level",
    "level_name",
    "build_standing",
    "compile_student_results",
    "ABSENT",
    "AcademicStanding",
    "Classification",
    "CourseResultRow",
    "CourseUnitRef",
    "Enrollment",
    "GradeAbsent",
    "GradePresent",
    "SemesterRef",
    "SemesterStatus",
    "SemesterSummary",
    "StudentResults",
]
