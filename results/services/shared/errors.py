from __future__ import annotations

from typing import Any, Dict


class ServiceError(Exception):
    """Base class for service-layer errors."""

    code = "service_error"
    http_status = 500

    def to_payload(self) -> Dict[str, Any]:
        return {
            "status": "error",
            "error_code": self.code,
            "error": str(self) or self.code,
        }


class ValidationError(ServiceError):
    """Raised when input payload is invalid."""

    code = "validation_error"
    http_status = 400


class ContractViolation(ValidationError):
    """Raised when records handed to the engine break its input contract."""

    code = "contract_violation"
    http_status = 422


class ResultsNotFound(ServiceError):
    """Raised when a requested semester has no published results."""

    code = "results_not_found"
    http_status = 404


class ExternalDependencyError(ServiceError):
    """Raised when external dependency (enrollment store/cache) fails."""

    code = "external_dependency_error"
    http_status = 503


class ComputationFailed(ExternalDependencyError):
    """Raised when results could not be fetched, compiled or cached."""

    code = "computation_failed"
    http_status = 503


class ResultsTimeout(ComputationFailed):
    """Raised to a caller that stopped waiting on an in-flight computation."""

    code = "computation_timeout"
    http_status = 504
