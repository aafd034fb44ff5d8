"""Pytest configuration and fixtures."""

import os

# Must be set before the application settings are first imported
os.environ.setdefault("ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import StaticPool
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from wellness.db.base import Base
from wellness.db.session import get_db
from wellness.main import app
from wellness.models.assessment import Assessment, AssessmentDomain, AssessmentStatus
from wellness.services.assessments import AssessmentService


# Use SQLite for testing (simpler than spinning up postgres)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def async_engine():
    """Create async test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def async_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create async database session for tests."""
    async_session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with async_session_maker() as session:
        yield session


@pytest_asyncio.fixture(scope="function")
async def client(async_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create API test client with overridden dependencies."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield async_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def assessment_service(async_session: AsyncSession) -> AssessmentService:
    """Assessment service bound to the test session."""
    return AssessmentService(async_session)


@pytest.fixture
def full_sleep_answers() -> dict:
    """A complete sleep intake with a high-stress, slow-onset pattern."""
    return {
        "difficulty_falling_asleep": 3,
        "difficulty_staying_asleep": 2,
        "waking_too_early": 1,
        "sleep_satisfaction": 2,
        "sleep_interference_daily": 2,
        "sleep_distress": 2,
        "average_bedtime": "23:30",
        "average_wake_time": "06:45",
        "caffeine_intake": "3-4 cups",
        "last_caffeine_time": "16:00",
        "screen_time_before_bed": 60,
        "exercise_timing": "evening",
        "stress_level": 8,
        "bedroom_temperature": "warm",
        "light_exposure": "some_light",
        "noise_level": "quiet",
        "primary_sleep_goals": "Fall asleep faster",
    }


@pytest.fixture
def full_mental_answers() -> dict:
    """A complete mental performance intake where memory dominates."""
    return {
        "focus_difficulty": 1,
        "memory_issues": 3,
        "mental_fatigue": 2,
        "brain_fog": 1,
        "processing_speed": 1,
        "stress_level": 4,
        "anxiety_frequency": 1,
        "mood_stability": 7,
        "emotional_resilience": 7,
        "morning_mental_clarity": 6,
        "afternoon_energy_dip": 5,
        "motivation_level": 6,
        "task_completion_ability": 7,
        "caffeine_dependency": "moderate",
        "screen_time_hours": 7.5,
        "exercise_frequency": "1-2x",
        "meditation_practice": False,
        "nutrition_quality": 6,
        "work_type": "Software engineer",
    }


@pytest_asyncio.fixture
async def sleep_assessment(
    assessment_service: AssessmentService, full_sleep_answers: dict
) -> Assessment:
    """A submitted, pending sleep assessment."""
    return await assessment_service.submit(
        AssessmentDomain.SLEEP, "client-1", full_sleep_answers
    )


@pytest_asyncio.fixture
async def reviewed_sleep_assessment(
    assessment_service: AssessmentService, sleep_assessment: Assessment
) -> Assessment:
    """A sleep assessment that has been signed off."""
    return await assessment_service.update_status(
        AssessmentDomain.SLEEP,
        sleep_assessment.id,
        AssessmentStatus.REVIEWED,
        changed_by="coach-1",
    )
