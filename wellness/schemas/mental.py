"""Mental performance assessment answer set schema."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

CognitiveRating = Annotated[int, Field(ge=0, le=4)]
Slider = Annotated[int, Field(ge=0, le=10)]


class MentalAnswers(BaseModel):
    """Answers to the mental performance intake form.

    Cognitive items are rated 0 (no difficulty) to 4 (severe difficulty).
    Sliders run 0-10; for mood stability, emotional resilience and
    morning mental clarity higher is better.
    """

    model_config = ConfigDict(extra="forbid")

    # Cognitive function
    focus_difficulty: CognitiveRating | None = None
    memory_issues: CognitiveRating | None = None
    mental_fatigue: CognitiveRating | None = None
    brain_fog: CognitiveRating | None = None
    processing_speed: CognitiveRating | None = None

    # Stress and emotional regulation
    stress_level: Slider | None = None
    anxiety_frequency: int | None = Field(None, ge=0, le=4)  # Never .. Very often
    mood_stability: Slider | None = None
    emotional_resilience: Slider | None = None

    # Energy and motivation
    morning_mental_clarity: Slider | None = None
    afternoon_energy_dip: Slider | None = None
    motivation_level: Slider | None = None
    task_completion_ability: Slider | None = None

    # Lifestyle
    caffeine_dependency: Literal["none", "low", "moderate", "high", "dependent"] | None = None
    screen_time_hours: float | None = Field(None, ge=0, le=24)
    exercise_frequency: Literal["none", "1-2x", "3-4x", "5+x"] | None = None
    meditation_practice: bool | None = None
    nutrition_quality: Slider | None = None

    # Work and goals
    work_type: str | None = Field(None, max_length=500)
    peak_performance_hours: str | None = Field(None, max_length=200)
    cognitive_demands: str | None = Field(None, max_length=2000)
    primary_mental_goals: str | None = Field(None, max_length=2000)
