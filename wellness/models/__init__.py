"""SQLAlchemy models."""

from wellness.models.assessment import Assessment, AssessmentDomain, AssessmentStatus

__all__ = [
    "Assessment",
    "AssessmentDomain",
    "AssessmentStatus",
]
