"""Assessment model for submitted sleep and mental performance intakes."""

from enum import Enum

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from wellness.db.base import Base, TimestampMixin


class AssessmentDomain(str, Enum):
    """Assessment types."""

    SLEEP = "sleep"
    MENTAL = "mental"


class AssessmentStatus(str, Enum):
    """Assessment review workflow status."""

    PENDING = "pending"  # Submitted by the client, awaiting coach review
    IN_PROGRESS = "in_progress"  # Coach is working through it
    COMPLETED = "completed"  # Coach has finished the intake review
    REVIEWED = "reviewed"  # Signed off; final


class Assessment(Base, TimestampMixin):
    """A submitted assessment.

    Answers, score and phenotype are fixed at submission. Only the
    review status changes afterwards.
    """

    __tablename__ = "assessments"

    client_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
    )
    domain: Mapped[AssessmentDomain] = mapped_column(
        String(20),
        nullable=False,
        index=True,
    )
    # Validated answer set, unanswered fields omitted
    answers: Mapped[dict] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
    )
    score: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    max_score: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )
    severity_label: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    phenotype: Mapped[str | None] = mapped_column(
        String(50),
        nullable=True,
        index=True,
    )
    program_tier: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
    )
    status: Mapped[AssessmentStatus] = mapped_column(
        String(20),
        default=AssessmentStatus.PENDING,
        nullable=False,
        index=True,
    )
    # Phenotype ruleset provenance
    ruleset_version: Mapped[str | None] = mapped_column(
        String(20),
        nullable=True,
    )
    ruleset_hash: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Assessment {self.domain}={self.score} ({self.status})>"
