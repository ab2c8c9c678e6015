"""Read path (cached results) and write-side invalidation hook for student results."""

from .coordinator import ResultsCacheCoordinator, invalidate_cached_results, results_cache_key
from .source import EnrollmentSource, InMemoryEnrollmentSource, enrollment_from_payload
from .service import (
    build_results_coordinator,
    get_gpa_summary,
    get_results_payload,
    get_semester_results,
    get_student_results,
    get_transcript,
)

__all__ = [
    "ResultsCacheCoordinator",
    "invalidate_cached_results",
    "results_cache_key",
    "EnrollmentSource",
    "InMemoryEnrollmentSource",
    "enrollment_from_payload",
    "build_results_coordinator",
    "get_gpa_summary",
    "get_results_payload",
    "get_semester_results",
    "get_student_results",
    "get_transcript",
]
