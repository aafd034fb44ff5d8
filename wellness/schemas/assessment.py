"""Assessment request and response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from wellness.models.assessment import AssessmentDomain, AssessmentStatus
from wellness.schemas.mental import MentalAnswers
from wellness.schemas.sleep import SleepAnswers


class SeverityRead(BaseModel):
    """A severity band."""

    min: int
    max: int
    label: str
    display_class: str
    description: str | None = None

    model_config = {"from_attributes": True}


class ScorePreview(BaseModel):
    """Live score for a (possibly partial) answer set. Nothing is stored."""

    domain: AssessmentDomain
    score: int
    max_score: int
    severity: SeverityRead
    phenotype: str | None
    phenotype_label: str | None
    phenotype_description: str | None

    model_config = {"from_attributes": True}


class SleepAssessmentSubmit(BaseModel):
    """Schema for submitting a completed sleep assessment."""

    client_id: str = Field(..., min_length=1, max_length=36)
    answers: SleepAnswers


class MentalAssessmentSubmit(BaseModel):
    """Schema for submitting a completed mental performance assessment."""

    client_id: str = Field(..., min_length=1, max_length=36)
    answers: MentalAnswers


class AssessmentStatusUpdate(BaseModel):
    """Schema for a staff review status change."""

    status: AssessmentStatus
    changed_by: str | None = Field(None, max_length=36)


class AssessmentRead(BaseModel):
    """Schema for reading a submitted assessment."""

    id: str
    client_id: str
    domain: AssessmentDomain
    answers: dict
    score: int
    max_score: int
    severity_label: str
    phenotype: str | None
    program_tier: str
    status: AssessmentStatus
    ruleset_version: str | None
    ruleset_hash: str | None
    created_at: datetime
    updated_at: datetime | None

    model_config = {"from_attributes": True}


class CatalogEntry(BaseModel):
    """A phenotype or program tier with its display text."""

    value: str
    label: str
    description: str


class DomainCatalog(BaseModel):
    """Display tables for one assessment domain."""

    domain: AssessmentDomain
    max_score: int
    severity_levels: list[SeverityRead]
    phenotypes: list[CatalogEntry]
    program_tiers: list[CatalogEntry]
    ruleset_version: str


class ProgramStatsRead(BaseModel):
    """Program dashboard figures for one domain."""

    domain: AssessmentDomain
    total_assessments: int
    total_clients: int
    active_clients: int
    average_score: float
    by_phenotype: dict[str, int]
    by_tier: dict[str, int]
    by_status: dict[str, int]

    model_config = {"from_attributes": True}
