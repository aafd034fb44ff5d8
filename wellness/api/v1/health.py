"""Liveness and readiness probes."""

import logging

import yaml
from fastapi import APIRouter, HTTPException, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from wellness.api.deps import DbSession
from wellness.rules.engine import mental_ruleset, sleep_ruleset
from wellness.rules.models import RulesetError

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    status: str


class ReadinessResponse(HealthResponse):
    rulesets: dict[str, str]


@router.get("", response_model=HealthResponse, summary="Liveness probe")
async def health_check() -> HealthResponse:
    """The process is up and serving requests."""
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="503 until the database answers and both phenotype rulesets parse",
)
async def readiness_check(session: DbSession) -> ReadinessResponse:
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning(f"Readiness check failed, database unreachable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable",
        )

    try:
        rulesets = {r.id: r.version for r in (sleep_ruleset(), mental_ruleset())}
    except (OSError, yaml.YAMLError, RulesetError) as e:
        logger.warning(f"Readiness check failed, ruleset not loadable: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Phenotype rulesets unavailable",
        )

    return ReadinessResponse(status="ok", rulesets=rulesets)
