from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, TypedDict


class CourseRowPayload(TypedDict):
    courseCode: str
    courseNameAr: str
    courseNameEn: str
    units: int
    level: int
    totalScore: Decimal
    letterGrade: str
    gradePoints: Decimal
    passed: bool


class SemesterTotalsPayload(TypedDict):
    totalUnits: int
    completedUnits: int
    passedUnits: int
    incompleteCourses: int
    gpa: Decimal
    classification: str
    classificationAr: str
    status: str
    statusAr: str


class SemesterPayload(TypedDict):
    semesterId: str
    semesterNameAr: str
    semesterNameEn: str
    year: int
    term: str
    startDate: Optional[str]
    currentLevel: int
    levelNameAr: str
    levelNameEn: str
    courses: List[CourseRowPayload]
    summary: SemesterTotalsPayload


class SemesterGpaPayload(TypedDict):
    semesterId: str
    semester: str
    semesterEn: str
    year: int
    term: str
    gpa: Decimal
    credits: int


class StandingPayload(TypedDict):
    cumulativeGPA: Decimal
    totalCredits: int
    passedCredits: int
    failedCourses: int
    courseCount: int
    classification: str
    classificationAr: str
    status: str
    statusAr: str
    semesterGPAs: List[SemesterGpaPayload]
