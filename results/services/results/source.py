from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Mapping, Protocol

from django.utils.dateparse import parse_date, parse_datetime

from results.academic.types import (
    ABSENT,
    CourseUnitRef,
    Enrollment,
    GradePresent,
    SemesterRef,
)
from results.services.shared.errors import ContractViolation


class EnrollmentSource(Protocol):
    def list_enrollments(self, student_id: str) -> Iterable[Enrollment]:
        ...


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ContractViolation(f"{name} must be an integer, got {value!r}")
    try:
        return int(str(value).strip())
    except Exception:
        raise ContractViolation(f"{name} must be an integer, got {value!r}") from None


def _as_date(value: Any, name: str) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        parsed_dt = parse_datetime(text)
        if parsed_dt is not None:
            return parsed_dt.date()
        parsed = parse_date(text)
    except ValueError:
        parsed = None
    if parsed is None:
        raise ContractViolation(f"{name} is not a valid date: {value!r}")
    return parsed


def _section(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    section = payload.get(key)
    if not isinstance(section, Mapping):
        raise ContractViolation(f"enrollment.{key} is required")
    return section


def enrollment_from_payload(payload: Mapping[str, Any]) -> Enrollment:
    """
    Build an Enrollment from the camelCase export shape:

        {"courseUnit": {"code", "units", "courseLevel", "nameAr", "nameEn"},
         "semester": {"id", "nameAr", "nameEn", "year", "term", "startDate"},
         "grade": {"totalScore", "isPublished"} | null}
    """
    if not isinstance(payload, Mapping):
        raise ContractViolation("enrollment payload must be an object")

    unit = _section(payload, "courseUnit")
    sem = _section(payload, "semester")
    code = str(unit.get("code") or "").strip()
    semester_id = str(sem.get("id") or "").strip()

    course_unit = CourseUnitRef(
        code=code,
        units=_as_int(unit.get("units"), f"units of {code or '?'}"),
        course_level=_as_int(unit.get("courseLevel") or 0, f"course level of {code or '?'}"),
        name_ar=str(unit.get("nameAr") or ""),
        name_en=str(unit.get("nameEn") or ""),
    )
    semester = SemesterRef(
        semester_id=semester_id,
        name_ar=str(sem.get("nameAr") or ""),
        name_en=str(sem.get("nameEn") or ""),
        year=_as_int(sem.get("year"), f"year of semester {semester_id or '?'}"),
        term=str(sem.get("term") or ""),
        start_date=_as_date(sem.get("startDate"), f"start date of semester {semester_id or '?'}"),
    )

    raw_grade = payload.get("grade")
    if raw_grade is None:
        grade = ABSENT
    elif isinstance(raw_grade, Mapping):
        is_published = raw_grade.get("isPublished", False)
        if not isinstance(is_published, bool):
            raise ContractViolation(
                f"grade.isPublished of {code or '?'} must be true or false, got {is_published!r}"
            )
        grade = GradePresent(total_score=raw_grade.get("totalScore"), is_published=is_published)
    else:
        raise ContractViolation("enrollment.grade must be an object or null")

    return Enrollment(course_unit=course_unit, semester=semester, grade=grade)


class InMemoryEnrollmentSource:
    """Enrollment source backed by a plain dict of student id -> enrollments."""

    def __init__(self, records: Mapping[str, Iterable[Enrollment]] | None = None):
        self._records: Dict[str, List[Enrollment]] = {
            str(sid): list(items) for sid, items in (records or {}).items()
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Iterable[Mapping[str, Any]]]) -> "InMemoryEnrollmentSource":
        if not isinstance(payload, Mapping):
            raise ContractViolation("enrollment export must map student ids to enrollment lists")
        return cls(
            {
                str(sid): [enrollment_from_payload(item) for item in (items or [])]
                for sid, items in payload.items()
            }
        )

    def put(self, student_id: str, enrollments: Iterable[Enrollment]) -> None:
        self._records[str(student_id)] = list(enrollments)

    def student_ids(self) -> List[str]:
        return list(self._records.keys())

    def list_enrollments(self, student_id: str) -> List[Enrollment]:
        return list(self._records.get(str(student_id), []))
