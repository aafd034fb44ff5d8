"""FastAPI dependency injection utilities."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from wellness.db.session import get_db
from wellness.services.assessments import AssessmentService

# Type alias for common dependencies
DbSession = Annotated[AsyncSession, Depends(get_db)]


def get_assessment_service(session: DbSession) -> AssessmentService:
    """Build an assessment service bound to the request session."""
    return AssessmentService(session)


Assessments = Annotated[AssessmentService, Depends(get_assessment_service)]
