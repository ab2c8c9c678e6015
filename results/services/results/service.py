from __future__ import annotations

from typing import Any, Dict

from django.core.cache import caches
from django.utils import timezone

from results.academic.grade_scale import get_grading_scale
from results.academic.types import SemesterSummary, StudentResults
from results.services.shared.errors import ResultsNotFound
from results.settings import ResultsSettings, get_results_settings

from .coordinator import ResultsCacheCoordinator
from .serializers import serialize_semester, serialize_standing, serialize_student_results
from .source import EnrollmentSource


def build_results_coordinator(
    source: EnrollmentSource,
    settings: ResultsSettings | None = None,
    cache: Any = None,
) -> ResultsCacheCoordinator:
    """Construct the process-wide coordinator; the caller owns it and must close() it."""
    cfg = settings or get_results_settings()
    store = cache if cache is not None else caches[cfg.cache_alias]
    return ResultsCacheCoordinator(
        source,
        store,
        ttl_seconds=cfg.cache_ttl_s,
        key_prefix=cfg.cache_key_prefix,
        wait_timeout_s=cfg.wait_timeout_s,
        max_workers=cfg.max_workers,
    )


def get_student_results(coordinator: ResultsCacheCoordinator, student_id: str) -> StudentResults:
    return coordinator.get_results(student_id)


def get_semester_results(
    coordinator: ResultsCacheCoordinator,
    student_id: str,
    semester_id: str,
) -> SemesterSummary:
    results = coordinator.get_results(student_id)
    semester = results.find_semester(str(semester_id or "").strip())
    if semester is None:
        raise ResultsNotFound(f"No results found for semester {semester_id}")
    return semester


def get_gpa_summary(coordinator: ResultsCacheCoordinator, student_id: str) -> Dict[str, Any]:
    results = coordinator.get_results(student_id)
    payload: Dict[str, Any] = dict(serialize_standing(results.standing))
    payload["gradingScale"] = get_grading_scale()
    return payload


def get_transcript(coordinator: ResultsCacheCoordinator, student_id: str) -> Dict[str, Any]:
    results = coordinator.get_results(student_id)
    standing = serialize_standing(results.standing)
    return {
        "studentId": results.student_id,
        "academicRecord": [serialize_semester(s) for s in results.semesters],
        "summary": {
            "cumulativeGPA": standing["cumulativeGPA"],
            "totalCredits": standing["totalCredits"],
            "classification": standing["classification"],
            "classificationAr": standing["classificationAr"],
            "status": standing["status"],
            "statusAr": standing["statusAr"],
        },
        "generatedAt": timezone.now().isoformat(),
    }


def get_results_payload(coordinator: ResultsCacheCoordinator, student_id: str) -> Dict[str, Any]:
    return serialize_student_results(coordinator.get_results(student_id))
