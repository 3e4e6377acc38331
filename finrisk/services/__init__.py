"""Service-layer orchestration modules."""

from finrisk.services.assessment_service import AssessmentService

__all__ = [
    "AssessmentService",
]
