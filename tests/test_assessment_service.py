"""Tests for assessment submission and the review workflow."""

import logging

import pytest
from pydantic import ValidationError

from wellness.models.assessment import Assessment, AssessmentDomain, AssessmentStatus
from wellness.schemas.sleep import SleepAnswers
from wellness.services.assessments import (
    AssessmentNotFoundError,
    AssessmentService,
    AssessmentWorkflowError,
)


class TestSubmit:
    """Tests for assessment submission."""

    async def test_submit_scores_and_stores(
        self, assessment_service: AssessmentService, full_sleep_answers: dict
    ) -> None:
        """Submission stores the score, band and phenotype as pending."""
        assessment = await assessment_service.submit(
            AssessmentDomain.SLEEP, "client-1", full_sleep_answers
        )

        assert assessment.id is not None
        assert assessment.domain == "sleep"
        assert assessment.score == 12
        assert assessment.max_score == 24
        assert assessment.severity_label == "Subthreshold insomnia"
        assert assessment.phenotype == "stress_dominant"
        assert assessment.program_tier == "foundational"
        assert assessment.status == "pending"
        assert assessment.ruleset_version == "1.0.0"
        assert len(assessment.ruleset_hash) == 64

    def test_status_default_is_set_by_the_model(self) -> None:
        """Pending comes from the ORM default; the column has no server default."""
        column = Assessment.__table__.c.status

        assert column.server_default is None
        assert column.default.arg == AssessmentStatus.PENDING
        assert column.nullable is False

    async def test_submit_stores_only_answered_fields(
        self, assessment_service: AssessmentService
    ) -> None:
        """Unanswered fields are not stored."""
        assessment = await assessment_service.submit(
            AssessmentDomain.MENTAL, "client-2", {"brain_fog": 1}
        )

        assert assessment.answers == {"brain_fog": 1}
        assert assessment.phenotype is None
        assert assessment.severity_label == "Optimal"
        assert assessment.program_tier == "cognitive_foundations"

    async def test_submit_rejects_invalid_answers(
        self, assessment_service: AssessmentService
    ) -> None:
        """Invalid answers are never stored."""
        with pytest.raises(ValidationError):
            await assessment_service.submit(
                AssessmentDomain.SLEEP, "client-1", {"stress_level": 42}
            )

    async def test_submit_rejects_other_domain_answers(
        self, assessment_service: AssessmentService
    ) -> None:
        """Sleep answers cannot be stored as a mental assessment."""
        with pytest.raises(ValueError, match="not a mental answer set"):
            await assessment_service.submit(
                AssessmentDomain.MENTAL, "client-1", SleepAnswers(stress_level=5)
            )

        stored = await assessment_service.list_assessments(AssessmentDomain.MENTAL)
        assert stored == []

    async def test_submit_writes_audit_log(
        self,
        assessment_service: AssessmentService,
        full_mental_answers: dict,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Submissions are audit logged."""
        with caplog.at_level(logging.INFO, logger="audit"):
            assessment = await assessment_service.submit(
                AssessmentDomain.MENTAL, "client-3", full_mental_answers
            )

        assert f"entity=assessment:{assessment.id}" in caplog.text
        assert "action=assessment.submitted" in caplog.text
        assert caplog.records[-1].client_id == "client-3"
        assert caplog.records[-1].domain == "mental"


class TestQueries:
    """Tests for reading assessments back."""

    async def test_get(
        self, assessment_service: AssessmentService, sleep_assessment: Assessment
    ) -> None:
        """An assessment can be fetched by id."""
        fetched = await assessment_service.get(AssessmentDomain.SLEEP, sleep_assessment.id)

        assert fetched.id == sleep_assessment.id

    async def test_get_wrong_domain(
        self, assessment_service: AssessmentService, sleep_assessment: Assessment
    ) -> None:
        """A sleep assessment is not visible under the mental domain."""
        with pytest.raises(AssessmentNotFoundError):
            await assessment_service.get(AssessmentDomain.MENTAL, sleep_assessment.id)

    async def test_get_missing(self, assessment_service: AssessmentService) -> None:
        """Unknown ids raise AssessmentNotFoundError."""
        with pytest.raises(AssessmentNotFoundError, match="not found"):
            await assessment_service.get(AssessmentDomain.SLEEP, "missing")

    async def test_list_filters(
        self,
        assessment_service: AssessmentService,
        sleep_assessment: Assessment,
        full_sleep_answers: dict,
        full_mental_answers: dict,
    ) -> None:
        """Listing filters by domain, client and status."""
        other = await assessment_service.submit(
            AssessmentDomain.SLEEP, "client-2", full_sleep_answers
        )
        await assessment_service.submit(
            AssessmentDomain.MENTAL, "client-1", full_mental_answers
        )
        await assessment_service.update_status(
            AssessmentDomain.SLEEP, other.id, AssessmentStatus.IN_PROGRESS
        )

        sleep_all = await assessment_service.list_assessments(AssessmentDomain.SLEEP)
        assert {a.id for a in sleep_all} == {sleep_assessment.id, other.id}

        by_client = await assessment_service.list_assessments(
            AssessmentDomain.SLEEP, client_id="client-1"
        )
        assert [a.id for a in by_client] == [sleep_assessment.id]

        in_progress = await assessment_service.list_assessments(
            AssessmentDomain.SLEEP, status=AssessmentStatus.IN_PROGRESS
        )
        assert [a.id for a in in_progress] == [other.id]

        limited = await assessment_service.list_assessments(AssessmentDomain.SLEEP, limit=1)
        assert len(limited) == 1


class TestStatusWorkflow:
    """Tests for review status transitions."""

    @pytest.mark.parametrize(
        "path",
        [
            [AssessmentStatus.IN_PROGRESS, AssessmentStatus.COMPLETED, AssessmentStatus.REVIEWED],
            [AssessmentStatus.COMPLETED, AssessmentStatus.IN_PROGRESS],
            [AssessmentStatus.REVIEWED],
        ],
    )
    async def test_allowed_paths(
        self,
        assessment_service: AssessmentService,
        sleep_assessment: Assessment,
        path: list[AssessmentStatus],
    ) -> None:
        """Allowed transitions update the status."""
        for new_status in path:
            updated = await assessment_service.update_status(
                AssessmentDomain.SLEEP, sleep_assessment.id, new_status
            )
            assert updated.status == new_status.value

    async def test_reviewed_is_final(
        self,
        assessment_service: AssessmentService,
        reviewed_sleep_assessment: Assessment,
    ) -> None:
        """Nothing moves a reviewed assessment."""
        with pytest.raises(AssessmentWorkflowError, match="reviewed to in_progress"):
            await assessment_service.update_status(
                AssessmentDomain.SLEEP,
                reviewed_sleep_assessment.id,
                AssessmentStatus.IN_PROGRESS,
            )

    async def test_cannot_return_to_pending(
        self, assessment_service: AssessmentService, sleep_assessment: Assessment
    ) -> None:
        """Pending is only ever the initial status."""
        await assessment_service.update_status(
            AssessmentDomain.SLEEP, sleep_assessment.id, AssessmentStatus.IN_PROGRESS
        )

        with pytest.raises(AssessmentWorkflowError):
            await assessment_service.update_status(
                AssessmentDomain.SLEEP, sleep_assessment.id, AssessmentStatus.PENDING
            )

    async def test_same_status_is_noop(
        self, assessment_service: AssessmentService, reviewed_sleep_assessment: Assessment
    ) -> None:
        """Re-setting the current status succeeds without change."""
        updated = await assessment_service.update_status(
            AssessmentDomain.SLEEP,
            reviewed_sleep_assessment.id,
            AssessmentStatus.REVIEWED,
        )

        assert updated.status == "reviewed"

    async def test_status_change_keeps_scoring(
        self, assessment_service: AssessmentService, sleep_assessment: Assessment
    ) -> None:
        """Only the status changes; stored scoring is untouched."""
        updated = await assessment_service.update_status(
            AssessmentDomain.SLEEP, sleep_assessment.id, AssessmentStatus.COMPLETED
        )

        assert updated.score == 12
        assert updated.phenotype == "stress_dominant"
        assert updated.answers == sleep_assessment.answers
        assert updated.updated_at is not None

    async def test_status_change_is_audited(
        self,
        assessment_service: AssessmentService,
        sleep_assessment: Assessment,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Status changes log who made them."""
        with caplog.at_level(logging.INFO, logger="audit"):
            await assessment_service.update_status(
                AssessmentDomain.SLEEP,
                sleep_assessment.id,
                AssessmentStatus.IN_PROGRESS,
                changed_by="coach-7",
            )

        assert "actor=staff:coach-7" in caplog.text
        assert "'from': 'pending', 'to': 'in_progress'" in caplog.text

    async def test_missing_assessment(self, assessment_service: AssessmentService) -> None:
        """Status updates on unknown ids raise AssessmentNotFoundError."""
        with pytest.raises(AssessmentNotFoundError):
            await assessment_service.update_status(
                AssessmentDomain.MENTAL, "missing", AssessmentStatus.REVIEWED
            )


class TestProgramStats:
    """Tests for per-domain program statistics."""

    async def test_empty_domain(self, assessment_service: AssessmentService) -> None:
        """A domain with no assessments reports zeros."""
        stats = await assessment_service.stats(AssessmentDomain.SLEEP)

        assert stats.domain == AssessmentDomain.SLEEP
        assert stats.total_assessments == 0
        assert stats.total_clients == 0
        assert stats.active_clients == 0
        assert stats.average_score == 0.0
        assert stats.by_phenotype == {}
        assert stats.by_tier == {}

    async def test_counts_and_average(
        self,
        assessment_service: AssessmentService,
        full_sleep_answers: dict,
        full_mental_answers: dict,
    ) -> None:
        """Counts group by phenotype, tier and status within one domain."""
        first = await assessment_service.submit(
            AssessmentDomain.SLEEP, "client-1", full_sleep_answers
        )
        await assessment_service.submit(
            AssessmentDomain.SLEEP, "client-1", {"stress_level": 4, "waking_too_early": 4}
        )
        await assessment_service.submit(
            AssessmentDomain.SLEEP, "client-2", {"difficulty_falling_asleep": 1}
        )
        await assessment_service.submit(
            AssessmentDomain.MENTAL, "client-3", full_mental_answers
        )
        await assessment_service.update_status(
            AssessmentDomain.SLEEP, first.id, AssessmentStatus.REVIEWED
        )

        stats = await assessment_service.stats(AssessmentDomain.SLEEP)

        assert stats.total_assessments == 3
        assert stats.total_clients == 2
        assert stats.active_clients == 2
        # Scores 12, 4 and 1
        assert stats.average_score == 5.7
        assert stats.by_phenotype == {"stress_dominant": 1, "fragmented": 1}
        assert stats.by_tier == {"foundational": 3}
        assert stats.by_status == {"reviewed": 1, "pending": 2}

    async def test_active_clients_exclude_fully_reviewed(
        self,
        assessment_service: AssessmentService,
        reviewed_sleep_assessment: Assessment,
    ) -> None:
        """A client whose only assessment is reviewed is not active."""
        stats = await assessment_service.stats(AssessmentDomain.SLEEP)

        assert stats.total_clients == 1
        assert stats.active_clients == 0
