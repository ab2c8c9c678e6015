from __future__ import annotations

import threading
from datetime import date
from typing import Dict, List, Optional

from results.academic.types import (
    ABSENT,
    CourseResultRow,
    CourseUnitRef,
    Enrollment,
    GradePresent,
    SemesterRef,
)
from results.academic.grade_scale import resolve_grade

FALL_2024 = SemesterRef(
    semester_id="sem-fall-2024",
    name_ar="الفصل الأول 2024",
    name_en="Fall 2024",
    year=2024,
    term="FALL",
    start_date=date(2024, 9, 1),
)

SPRING_2025 = SemesterRef(
    semester_id="sem-spring-2025",
    name_ar="الفصل الثاني 2025",
    name_en="Spring 2025",
    year=2025,
    term="SPRING",
    start_date=date(2025, 2, 1),
)


def enrollment(
    code: str,
    units: int,
    score=None,
    *,
    semester: SemesterRef = FALL_2024,
    level: int = 1,
    published: bool = True,
) -> Enrollment:
    grade = ABSENT if score is None else GradePresent(total_score=score, is_published=published)
    return Enrollment(
        course_unit=CourseUnitRef(code=code, units=units, course_level=level, name_en=f"Course {code}"),
        semester=semester,
        grade=grade,
    )


def row(code: str, units: int, score, level: int = 1) -> CourseResultRow:
    resolved = resolve_grade(score)
    return CourseResultRow(
        course_code=code,
        units=units,
        level=level,
        score=resolved.score,
        passed=resolved.passed,
        letter_grade=resolved.letter_grade,
        grade_points=resolved.grade_points,
    )


def two_semester_history() -> List[Enrollment]:
    """Fall 2024: three published + one unpublished course. Spring 2025: two published."""
    return [
        enrollment("CS101", 3, 95, semester=FALL_2024, level=1),
        enrollment("MA101", 4, 65, semester=FALL_2024, level=1),
        enrollment("PH101", 3, 45, semester=FALL_2024, level=2),
        enrollment("EN101", 2, 88, semester=FALL_2024, level=1, published=False),
        enrollment("CS201", 3, 82, semester=SPRING_2025, level=2),
        enrollment("MA201", 3, 71, semester=SPRING_2025, level=3),
    ]


class CountingSource:
    """Enrollment source that counts calls and can block until released."""

    def __init__(self, records: Optional[Dict[str, List[Enrollment]]] = None, block: bool = False):
        self.records = dict(records or {})
        self.calls = 0
        self.started = threading.Event()
        self.release = threading.Event()
        if not block:
            self.release.set()
        self._lock = threading.Lock()

    def list_enrollments(self, student_id: str) -> List[Enrollment]:
        with self._lock:
            self.calls += 1
        self.started.set()
        self.release.wait(5)
        return list(self.records.get(student_id, []))
