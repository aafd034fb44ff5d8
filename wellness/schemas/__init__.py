"""Pydantic schemas for request/response validation."""

from wellness.schemas.assessment import (
    AssessmentRead,
    AssessmentStatusUpdate,
    DomainCatalog,
    MentalAssessmentSubmit,
    ProgramStatsRead,
    ScorePreview,
    SeverityRead,
    SleepAssessmentSubmit,
)
from wellness.schemas.mental import MentalAnswers
from wellness.schemas.sleep import SleepAnswers

__all__ = [
    "AssessmentRead",
    "AssessmentStatusUpdate",
    "DomainCatalog",
    "MentalAnswers",
    "MentalAssessmentSubmit",
    "ProgramStatsRead",
    "ScorePreview",
    "SeverityRead",
    "SleepAnswers",
    "SleepAssessmentSubmit",
]
