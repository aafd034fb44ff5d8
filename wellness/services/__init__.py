"""Business logic services."""

from wellness.services.assessments import (
    AssessmentNotFoundError,
    AssessmentService,
    AssessmentWorkflowError,
    ProgramStats,
)
from wellness.services.scoring import ScoreResult, ScoringService

__all__ = [
    "AssessmentNotFoundError",
    "AssessmentService",
    "AssessmentWorkflowError",
    "ProgramStats",
    "ScoreResult",
    "ScoringService",
]
