"""
Value objects flowing through the results engine.

Input records (CourseUnitRef, SemesterRef, GradePresent/GradeAbsent, Enrollment)
validate themselves on construction. Output records (CourseResultRow,
SemesterSummary, StudentResults, ...) are frozen and built fresh for every
computation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Iterator, Optional, Tuple, Union

from results.services.shared.errors import ContractViolation


class Classification(Enum):
    EXCELLENT = "Excellent"
    VERY_GOOD = "VeryGood"
    GOOD = "Good"
    ACCEPTABLE = "Acceptable"

    @property
    def label_ar(self) -> str:
        return _CLASSIFICATION_AR[self]


class SemesterStatus(Enum):
    PASSED = "Passed"
    PASSED_WITH_DEFICIENCY = "PassedWithDeficiency"
    FAILED = "Failed"

    @property
    def label_ar(self) -> str:
        return _STATUS_AR[self]


_CLASSIFICATION_AR = {
    Classification.EXCELLENT: "ممتاز",
    Classification.VERY_GOOD: "جيد جداً",
    Classification.GOOD: "جيد",
    Classification.ACCEPTABLE: "مقبول",
}

_STATUS_AR = {
    SemesterStatus.PASSED: "ناجح",
    SemesterStatus.PASSED_WITH_DEFICIENCY: "ناجح بمواد",
    SemesterStatus.FAILED: "راسب",
}


def _require_int(value, name: str, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ContractViolation(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ContractViolation(f"{name} must be >= {minimum}, got {value}")
    return value


# =============================================================================
# INPUT RECORDS
# =============================================================================

@dataclass(frozen=True)
class CourseUnitRef:
    code: str
    units: int
    course_level: int = 0
    name_ar: str = ""
    name_en: str = ""

    def __post_init__(self):
        if not str(self.code or "").strip():
            raise ContractViolation("course unit code is required")
        _require_int(self.units, f"units of {self.code}", 1)
        _require_int(self.course_level, f"course level of {self.code}", 0)


@dataclass(frozen=True)
class SemesterRef:
    semester_id: str
    name_ar: str
    name_en: str
    year: int
    term: str
    start_date: Optional[date] = None

    def __post_init__(self):
        if not str(self.semester_id or "").strip():
            raise ContractViolation("semester id is required")
        _require_int(self.year, f"year of semester {self.semester_id}", 0)
        if self.start_date is not None and not isinstance(self.start_date, date):
            raise ContractViolation(f"start date of semester {self.semester_id} must be a date")


@dataclass(frozen=True)
class GradePresent:
    """A grade record attached to an enrollment. total_score is coerced later."""

    total_score: object
    is_published: bool = False

    def __post_init__(self):
        if not isinstance(self.is_published, bool):
            raise ContractViolation(f"grade publish flag must be a boolean, got {self.is_published!r}")


class GradeAbsent:
    """No grade has been recorded for the enrollment yet."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __reduce__(self):
        return (GradeAbsent, ())


ABSENT = GradeAbsent()

Grade = Union[GradePresent, GradeAbsent]


@dataclass(frozen=True)
class Enrollment:
    course_unit: CourseUnitRef
    semester: SemesterRef
    grade: Grade = ABSENT

    def __post_init__(self):
        if not isinstance(self.course_unit, CourseUnitRef):
            raise ContractViolation("enrollment.course_unit must be a CourseUnitRef")
        if not isinstance(self.semester, SemesterRef):
            raise ContractViolation("enrollment.semester must be a SemesterRef")
        if not isinstance(self.grade, (GradePresent, GradeAbsent)):
            raise ContractViolation("enrollment.grade must be GradePresent or ABSENT")


# =============================================================================
# DERIVED RECORDS
# =============================================================================

@dataclass(frozen=True)
class CourseResultRow:
    course_code: str
    units: int
    level: int
    score: Decimal
    passed: bool
    letter_grade: str = ""
    grade_points: Decimal = Decimal("0.0")
    course_name_ar: str = ""
    course_name_en: str = ""


@dataclass(frozen=True)
class SemesterTotals:
    total_units: int
    completed_units: int
    passed_units: int
    incomplete_courses: int
    gpa: Decimal
    classification: Classification
    status: SemesterStatus


@dataclass(frozen=True)
class SemesterSummary:
    semester_id: str
    name_ar: str
    name_en: str
    year: int
    term: str
    start_date: Optional[date]
    courses: Tuple[CourseResultRow, ...]
    current_level: int
    level_name_ar: str
    level_name_en: str
    summary: SemesterTotals


@dataclass(frozen=True)
class SemesterGpa:
    semester_id: str
    name_ar: str
    name_en: str
    year: int
    term: str
    gpa: Decimal
    units: int


@dataclass(frozen=True)
class AcademicStanding:
    cumulative_gpa: Decimal
    total_units: int
    passed_units: int
    failed_courses: int
    course_count: int
    classification: Classification
    status: SemesterStatus
    semester_gpas: Tuple[SemesterGpa, ...] = ()


@dataclass(frozen=True)
class StudentResults:
    """Chronological semester summaries of one student plus the overall standing."""

    student_id: str
    semesters: Tuple[SemesterSummary, ...]
    standing: AcademicStanding

    def __len__(self) -> int:
        return len(self.semesters)

    def __iter__(self) -> Iterator[SemesterSummary]:
        return iter(self.semesters)

    def __getitem__(self, index):
        return self.semesters[index]

    def find_semester(self, semester_id: str) -> Optional[SemesterSummary]:
        for semester in self.semesters:
            if semester.semester_id == semester_id:
                return semester
        return None
