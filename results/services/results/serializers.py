from __future__ import annotations

from typing import Any, Dict, List

from results.academic.types import (
    AcademicStanding,
    CourseResultRow,
    SemesterSummary,
    StudentResults,
)
from results.services.shared.dto import (
    CourseRowPayload,
    SemesterPayload,
    StandingPayload,
)


def serialize_course_row(row: CourseResultRow) -> CourseRowPayload:
    return {
        "courseCode": row.course_code,
        "courseNameAr": row.course_name_ar,
        "courseNameEn": row.course_name_en,
        "units": row.units,
        "level": row.level,
        "totalScore": row.score,
        "letterGrade": row.letter_grade,
        "gradePoints": row.grade_points,
        "passed": row.passed,
    }


def serialize_semester(semester: SemesterSummary) -> SemesterPayload:
    totals = semester.summary
    return {
        "semesterId": semester.semester_id,
        "semesterNameAr": semester.name_ar,
        "semesterNameEn": semester.name_en,
        "year": semester.year,
        "term": semester.term,
        "startDate": semester.start_date.isoformat() if semester.start_date else None,
        "currentLevel": semester.current_level,
        "levelNameAr": semester.level_name_ar,
        "levelNameEn": semester.level_name_en,
        "courses": [serialize_course_row(row) for row in semester.courses],
        "summary": {
            "totalUnits": totals.total_units,
            "completedUnits": totals.completed_units,
            "passedUnits": totals.passed_units,
            "incompleteCourses": totals.incomplete_courses,
            "gpa": totals.gpa,
            "classification": totals.classification.value,
            "classificationAr": totals.classification.label_ar,
            "status": totals.status.value,
            "statusAr": totals.status.label_ar,
        },
    }


def serialize_standing(standing: AcademicStanding) -> StandingPayload:
    return {
        "cumulativeGPA": standing.cumulative_gpa,
        "totalCredits": standing.total_units,
        "passedCredits": standing.passed_units,
        "failedCourses": standing.failed_courses,
        "courseCount": standing.course_count,
        "classification": standing.classification.value,
        "classificationAr": standing.classification.label_ar,
        "status": standing.status.value,
        "statusAr": standing.status.label_ar,
        "semesterGPAs": [
            {
                "semesterId": s.semester_id,
                "semester": s.name_ar,
                "semesterEn": s.name_en,
                "year": s.year,
                "term": s.term,
                "gpa": s.gpa,
                "credits": s.units,
            }
            for s in standing.semester_gpas
        ],
    }


def serialize_student_results(results: StudentResults) -> Dict[str, Any]:
    semesters: List[SemesterPayload] = [serialize_semester(s) for s in results.semesters]
    return {
        "studentId": results.student_id,
        "semesters": semesters,
        "standing": serialize_standing(results.standing),
    }
