"""Sleep assessment endpoints."""

from fastapi import APIRouter, HTTPException, Query, status

from wellness.api.deps import Assessments
from wellness.models.assessment import AssessmentDomain, AssessmentStatus
from wellness.schemas.assessment import (
    AssessmentRead,
    AssessmentStatusUpdate,
    DomainCatalog,
    ProgramStatsRead,
    ScorePreview,
    SleepAssessmentSubmit,
)
from wellness.schemas.sleep import SleepAnswers
from wellness.services.assessments import AssessmentNotFoundError, AssessmentWorkflowError
from wellness.services.scoring import SleepScorer

router = APIRouter()

DOMAIN = AssessmentDomain.SLEEP


@router.post(
    "/preview",
    response_model=ScorePreview,
    status_code=status.HTTP_200_OK,
    summary="Preview sleep score",
    description="Score a partial sleep answer set without storing it",
)
async def preview_sleep_score(answers: SleepAnswers) -> ScorePreview:
    """Return the live ISI score, severity band and phenotype."""
    return ScorePreview.model_validate(SleepScorer.calculate(answers))


@router.get(
    "/phenotypes",
    response_model=DomainCatalog,
    summary="Sleep display tables",
    description="Severity bands, phenotypes and program tiers for display",
)
async def get_sleep_catalog() -> DomainCatalog:
    """Return the sleep domain display tables."""
    return DomainCatalog.model_validate(SleepScorer.catalog())


@router.get(
    "/stats",
    response_model=ProgramStatsRead,
    summary="Sleep program stats",
    description="Assessment, client, phenotype, tier and status counts with the average score",
)
async def get_sleep_program_stats(service: Assessments) -> ProgramStatsRead:
    return ProgramStatsRead.model_validate(await service.stats(DOMAIN))


@router.post(
    "",
    response_model=AssessmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit sleep assessment",
)
async def submit_sleep_assessment(
    body: SleepAssessmentSubmit,
    service: Assessments,
) -> AssessmentRead:
    """Score and store a completed sleep assessment as pending review."""
    assessment = await service.submit(DOMAIN, body.client_id, body.answers)
    return AssessmentRead.model_validate(assessment)


@router.get(
    "",
    response_model=list[AssessmentRead],
    summary="List sleep assessments",
)
async def list_sleep_assessments(
    service: Assessments,
    client_id: str | None = Query(None, description="Filter by client"),
    status_filter: AssessmentStatus | None = Query(None, alias="status"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> list[AssessmentRead]:
    """List sleep assessments, newest first."""
    assessments = await service.list_assessments(
        DOMAIN,
        client_id=client_id,
        status=status_filter,
        limit=limit,
        offset=offset,
    )
    return [AssessmentRead.model_validate(a) for a in assessments]


@router.get(
    "/{assessment_id}",
    response_model=AssessmentRead,
    summary="Get sleep assessment",
)
async def get_sleep_assessment(assessment_id: str, service: Assessments) -> AssessmentRead:
    """Get a single sleep assessment."""
    try:
        assessment = await service.get(DOMAIN, assessment_id)
    except AssessmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return AssessmentRead.model_validate(assessment)


@router.patch(
    "/{assessment_id}/status",
    response_model=AssessmentRead,
    summary="Update sleep assessment review status",
    description="Staff only. Answers, score and phenotype cannot be changed.",
)
async def update_sleep_assessment_status(
    assessment_id: str,
    body: AssessmentStatusUpdate,
    service: Assessments,
) -> AssessmentRead:
    """Move a sleep assessment through the review workflow."""
    try:
        assessment = await service.update_status(
            DOMAIN, assessment_id, body.status, changed_by=body.changed_by
        )
    except AssessmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AssessmentWorkflowError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return AssessmentRead.model_validate(assessment)
