from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from results.services.shared.errors import ContractViolation

from .aggregator import aggregate_semester, classify_gpa, weighted_gpa
from .normalizer import normalize_enrollment
from .types import (
    AcademicStanding,
    CourseResultRow,
    Enrollment,
    SemesterGpa,
    SemesterRef,
    SemesterStatus,
    SemesterSummary,
    StudentResults,
)

logger = logging.getLogger(__name__)

# Overall standing fails from this many failed courses on.
STANDING_FAIL_COUNT = 3


class _SemesterBuckets:
    """Rows grouped by semester id, keeping the first-seen order of ids."""

    def __init__(self) -> None:
        self.order: List[str] = []
        self.index: Dict[str, int] = {}
        self.semesters: List[SemesterRef] = []
        self.rows: List[List[CourseResultRow]] = []

    def slot(self, semester: SemesterRef) -> int:
        pos = self.index.get(semester.semester_id)
        if pos is None:
            pos = len(self.order)
            self.index[semester.semester_id] = pos
            self.order.append(semester.semester_id)
            self.semesters.append(semester)
            self.rows.append([])
        elif self.semesters[pos] != semester:
            raise ContractViolation(f"conflicting metadata for semester {semester.semester_id}")
        return pos

    def add(self, semester: SemesterRef, row: Optional[CourseResultRow]) -> None:
        pos = self.slot(semester)
        if row is not None:
            self.rows[pos].append(row)


def _chronological(summaries: List[SemesterSummary]) -> List[SemesterSummary]:
    # Stable: equal dates keep first-seen order, undated semesters go last.
    return sorted(
        summaries,
        key=lambda s: (s.start_date is None, s.start_date or date.min),
    )


def build_standing(semesters: Sequence[SemesterSummary]) -> AcademicStanding:
    rows = [row for semester in semesters for row in semester.courses]
    failed = sum(1 for row in rows if not row.passed)
    passed_count = len(rows) - failed
    cumulative = weighted_gpa(rows)

    if not rows:
        status = SemesterStatus.PASSED
    elif passed_count == 0 or failed >= STANDING_FAIL_COUNT:
        status = SemesterStatus.FAILED
    elif failed > 0:
        status = SemesterStatus.PASSED_WITH_DEFICIENCY
    else:
        status = SemesterStatus.PASSED

    return AcademicStanding(
        cumulative_gpa=cumulative,
        total_units=sum(row.units for row in rows),
        passed_units=sum(row.units for row in rows if row.passed),
        failed_courses=failed,
        course_count=len(rows),
        classification=classify_gpa(cumulative),
        status=status,
        semester_gpas=tuple(
            SemesterGpa(
                semester_id=s.semester_id,
                name_ar=s.name_ar,
                name_en=s.name_en,
                year=s.year,
                term=s.term,
                gpa=s.summary.gpa,
                units=s.summary.total_units,
            )
            for s in semesters
        ),
    )


def compile_student_results(enrollments: Iterable[Enrollment], student_id: str = "") -> StudentResults:
    buckets = _SemesterBuckets()
    for enrollment in enrollments or []:
        row = normalize_enrollment(enrollment)
        buckets.add(enrollment.semester, row)

    summaries: List[SemesterSummary] = []
    skipped = 0
    for pos in range(len(buckets.order)):
        rows = buckets.rows[pos]
        if not rows:
            skipped += 1
            continue
        summaries.append(aggregate_semester(rows, buckets.semesters[pos]))

    ordered = _chronological(summaries)
    if skipped:
        logger.debug(
            "results_compile_skipped_unpublished student_id=%s semesters=%s",
            student_id,
            skipped,
        )
    return StudentResults(
        student_id=str(student_id or ""),
        semesters=tuple(ordered),
        standing=build_standing(ordered),
    )
