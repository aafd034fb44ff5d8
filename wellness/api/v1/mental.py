"""Mental performance assessment endpoints."""

from fastapi import APIRouter, HTTPException, Query, status

from wellness.api.deps import Assessments
from wellness.models.assessment import AssessmentDomain, AssessmentStatus
from wellness.schemas.assessment import (
    AssessmentRead,
    AssessmentStatusUpdate,
    DomainCatalog,
    ProgramStatsRead,
    ScorePreview,
    MentalAssessmentSubmit,
)
from wellness.schemas.mental import MentalAnswers
from wellness.services.assessments import AssessmentNotFoundError, AssessmentWorkflowError
from wellness.services.scoring import MentalScorer

router = APIRouter()

DOMAIN = AssessmentDomain.MENTAL


@router.post(
    "/preview",
    response_model=ScorePreview,
    status_code=status.HTTP_200_OK,
    summary="Preview cognitive score",
    description="Score a partial mental performance answer set without storing it",
)
async def preview_mental_score(answers: MentalAnswers) -> ScorePreview:
    """Return the live cognitive function score, severity band and phenotype."""
    return ScorePreview.model_validate(MentalScorer.calculate(answers))


@router.get(
    "/phenotypes",
    response_model=DomainCatalog,
    summary="Mental performance display tables",
    description="Severity bands, phenotypes and program tiers for display",
)
async def get_mental_catalog() -> DomainCatalog:
    """Return the mental performance domain display tables."""
    return DomainCatalog.model_validate(MentalScorer.catalog())


@router.get(
    "/stats",
    response_model=ProgramStatsRead,
    summary="Mental performance program stats",
    description="Assessment, client, phenotype, tier and status counts with the average score",
)
async def get_mental_program_stats(service: Assessments) -> ProgramStatsRead:
    return ProgramStatsRead.model_validate(await service.stats(DOMAIN))


@router.post(
    "",
    response_model=AssessmentRead,
    status_code=status.HTTP_201_CREATED,
    summary="Submit mental performance assessment",
)
async def submit_mental_assessment(
    body: MentalAssessmentSubmit,
    service: Assessments,
) -> AssessmentRead:
    """Score and store a completed mental performance assessment as pending review."""
    assessment = await service.submit(DOMAIN, body.client_id, body.answers)
    return AssessmentRead.model_validate(assessment)


@router.get(
    "",
    response_model=list[AssessmentRead],
    summary="List mental performance assessments",
)
async def list_mental_assessments(
    service: Assessments,
    client_id: str | None = Query(None, description="Filter by client"),
    status_filter: AssessmentStatus | None = Query(None, alias="status"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
) -> list[AssessmentRead]:
    """List mental performance assessments, newest first."""
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
    summary="Get mental performance assessment",
)
async def get_mental_assessment(assessment_id: str, service: Assessments) -> AssessmentRead:
    """Get a single mental performance assessment."""
    try:
        assessment = await service.get(DOMAIN, assessment_id)
    except AssessmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return AssessmentRead.model_validate(assessment)


@router.patch(
    "/{assessment_id}/status",
    response_model=AssessmentRead,
    summary="Update mental performance assessment review status",
    description="Staff only. Answers, score and phenotype cannot be changed.",
)
async def update_mental_assessment_status(
    assessment_id: str,
    body: AssessmentStatusUpdate,
    service: Assessments,
) -> AssessmentRead:
    """Move a mental performance assessment through the review workflow."""
    try:
        assessment = await service.update_status(
            DOMAIN, assessment_id, body.status, changed_by=body.changed_by
        )
    except AssessmentNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except AssessmentWorkflowError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return AssessmentRead.model_validate(assessment)
