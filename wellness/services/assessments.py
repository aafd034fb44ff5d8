"""Assessment submission and review service.

Handles the assessment lifecycle: an answer set is scored and stored
once, on submission. Afterwards only the review status can change,
following ALLOWED_TRANSITIONS.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from pydantic import BaseModel
from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from wellness.core.logging import audit_logger
from wellness.models.assessment import Assessment, AssessmentDomain, AssessmentStatus
from wellness.services.scoring import ScoringService

logger = logging.getLogger(__name__)


class AssessmentNotFoundError(Exception):
    """Raised when an assessment is not found."""
    pass


class AssessmentWorkflowError(Exception):
    """Raised when a status transition is not allowed."""
    pass


@dataclass
class ProgramStats:
    """Aggregate figures for one domain's coaching program."""

    domain: AssessmentDomain
    total_assessments: int = 0
    total_clients: int = 0
    # Clients with at least one assessment not yet signed off
    active_clients: int = 0
    average_score: float = 0.0
    by_phenotype: dict[str, int] = field(default_factory=dict)
    by_tier: dict[str, int] = field(default_factory=dict)
    by_status: dict[str, int] = field(default_factory=dict)


# Reviewed is final; everything else may move forward or between
# in_progress and completed.
ALLOWED_TRANSITIONS: dict[AssessmentStatus, frozenset[AssessmentStatus]] = {
    AssessmentStatus.PENDING: frozenset({
        AssessmentStatus.IN_PROGRESS,
        AssessmentStatus.COMPLETED,
        AssessmentStatus.REVIEWED,
    }),
    AssessmentStatus.IN_PROGRESS: frozenset({
        AssessmentStatus.COMPLETED,
        AssessmentStatus.REVIEWED,
    }),
    AssessmentStatus.COMPLETED: frozenset({
        AssessmentStatus.IN_PROGRESS,
        AssessmentStatus.REVIEWED,
    }),
    AssessmentStatus.REVIEWED: frozenset(),
}


class AssessmentService:
    """Service for submitting and reviewing assessments."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def submit(
        self,
        domain: AssessmentDomain,
        client_id: str,
        answers: BaseModel | Mapping[str, Any],
    ) -> Assessment:
        """Score an answer set and store it as a pending assessment.

        Args:
            domain: Assessment domain
            client_id: Owning client profile id
            answers: Final answer set (validated if given as a mapping)

        Returns:
            The stored assessment

        Raises:
            ValueError: If answers is a model for a different domain
            pydantic.ValidationError: If a mapping fails validation
        """
        scorer = ScoringService.get_scorer(domain)
        answers = scorer.validate_answers(answers)
        result = scorer.calculate(answers)

        assessment = Assessment(
            client_id=client_id,
            domain=domain.value,
            answers=answers.model_dump(mode="json", exclude_none=True),
            score=result.score,
            max_score=result.max_score,
            severity_label=result.severity.label,
            phenotype=result.phenotype,
            program_tier=scorer.default_tier,
            status=AssessmentStatus.PENDING.value,
            ruleset_version=result.ruleset_version,
            ruleset_hash=result.ruleset_hash,
        )
        self.session.add(assessment)
        await self.session.commit()
        await self.session.refresh(assessment)

        audit_logger.log(
            action="assessment.submitted",
            actor_type="client",
            actor_id=client_id,
            assessment_id=assessment.id,
            metadata={
                "domain": domain.value,
                "score": result.score,
                "phenotype": result.phenotype,
                "rule_id": result.rule_id,
            },
            client_id=client_id,
            domain=domain.value,
        )
        return assessment

    async def get(self, domain: AssessmentDomain, assessment_id: str) -> Assessment:
        """Get an assessment by id within a domain."""
        result = await self.session.execute(
            select(Assessment).where(
                Assessment.id == assessment_id,
                Assessment.domain == domain.value,
            )
        )
        assessment = result.scalar_one_or_none()
        if not assessment:
            raise AssessmentNotFoundError(f"Assessment {assessment_id} not found")
        return assessment

    async def list_assessments(
        self,
        domain: AssessmentDomain,
        client_id: Optional[str] = None,
        status: Optional[AssessmentStatus] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Assessment]:
        """List assessments for a domain, newest first."""
        query = select(Assessment).where(Assessment.domain == domain.value)
        if client_id:
            query = query.where(Assessment.client_id == client_id)
        if status:
            query = query.where(Assessment.status == status.value)

        result = await self.session.execute(
            query.order_by(Assessment.created_at.desc()).offset(offset).limit(limit)
        )
        return list(result.scalars().all())

    async def update_status(
        self,
        domain: AssessmentDomain,
        assessment_id: str,
        new_status: AssessmentStatus,
        changed_by: Optional[str] = None,
    ) -> Assessment:
        """Change an assessment's review status.

        Setting the current status again is a no-op.

        Raises:
            AssessmentNotFoundError: If the assessment does not exist
            AssessmentWorkflowError: If the transition is not allowed
        """
        assessment = await self.get(domain, assessment_id)
        current = AssessmentStatus(assessment.status)

        if new_status == current:
            return assessment

        if new_status not in ALLOWED_TRANSITIONS[current]:
            raise AssessmentWorkflowError(
                f"Cannot change status from {current.value} to {new_status.value}"
            )

        assessment.status = new_status.value
        await self.session.commit()
        await self.session.refresh(assessment)

        audit_logger.log(
            action="assessment.status_changed",
            actor_type="staff",
            actor_id=changed_by,
            assessment_id=assessment.id,
            metadata={"from": current.value, "to": new_status.value},
            client_id=assessment.client_id,
            domain=domain.value,
        )
        logger.info(
            f"Assessment {assessment.id} moved from {current.value} to {new_status.value}"
        )
        return assessment

    async def stats(self, domain: AssessmentDomain) -> ProgramStats:
        """Aggregate counts and the average score for a domain.

        Assessments without a phenotype are left out of by_phenotype.
        """
        in_domain = Assessment.domain == domain.value

        totals = await self.session.execute(
            select(
                func.count(Assessment.id),
                func.count(distinct(Assessment.client_id)),
                func.avg(Assessment.score),
            ).where(in_domain)
        )
        total, clients, average = totals.one()

        active = await self.session.scalar(
            select(func.count(distinct(Assessment.client_id))).where(
                in_domain,
                Assessment.status != AssessmentStatus.REVIEWED.value,
            )
        )

        return ProgramStats(
            domain=domain,
            total_assessments=total,
            total_clients=clients,
            active_clients=active or 0,
            average_score=round(float(average), 1) if average is not None else 0.0,
            by_phenotype=await self._count_by(Assessment.phenotype, in_domain),
            by_tier=await self._count_by(Assessment.program_tier, in_domain),
            by_status=await self._count_by(Assessment.status, in_domain),
        )

    async def _count_by(self, column: Any, *criteria: Any) -> dict[str, int]:
        result = await self.session.execute(
            select(column, func.count(Assessment.id))
            .where(*criteria, column.is_not(None))
            .group_by(column)
        )
        return {key: count for key, count in result.all()}
