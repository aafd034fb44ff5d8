"""API v1 router aggregating all endpoints."""

from fastapi import APIRouter

from wellness.api.v1 import health, mental, sleep

api_router = APIRouter()

# Health check
api_router.include_router(
    health.router,
    prefix="/health",
    tags=["health"],
)

# Sleep assessments
api_router.include_router(
    sleep.router,
    prefix="/assessments/sleep",
    tags=["sleep"],
)

# Mental performance assessments
api_router.include_router(
    mental.router,
    prefix="/assessments/mental",
    tags=["mental"],
)
