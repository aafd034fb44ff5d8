"""Sleep assessment answer set schema."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

IsiRating = Annotated[int, Field(ge=0, le=4)]
TimeOfDay = Annotated[str, Field(pattern=r"^([01]\d|2[0-3]):[0-5]\d$")]


class SleepAnswers(BaseModel):
    """Answers to the sleep intake form.

    Every field is optional so a partially completed form can be scored.
    ISI items are rated 0 (none) to 4 (very severe).
    """

    model_config = ConfigDict(extra="forbid")

    # ISI-inspired questions
    difficulty_falling_asleep: IsiRating | None = None
    difficulty_staying_asleep: IsiRating | None = None
    waking_too_early: IsiRating | None = None
    sleep_satisfaction: IsiRating | None = None
    sleep_interference_daily: IsiRating | None = None
    sleep_distress: IsiRating | None = None

    # Sleep schedule
    average_bedtime: TimeOfDay | None = None
    average_wake_time: TimeOfDay | None = None

    # Lifestyle factors
    caffeine_intake: Literal["none", "1-2 cups", "3-4 cups", "5+ cups"] | None = None
    last_caffeine_time: TimeOfDay | None = None
    screen_time_before_bed: int | None = Field(None, ge=0, le=180)
    exercise_timing: Literal[
        "morning", "afternoon", "evening", "late_evening", "no_exercise"
    ] | None = None
    stress_level: int | None = Field(None, ge=1, le=10)

    # Environment
    bedroom_temperature: Literal["too_cold", "cool", "optimal", "warm", "too_warm"] | None = None
    light_exposure: Literal["complete_darkness", "minimal", "some_light", "significant"] | None = None
    noise_level: Literal["quiet", "some_noise", "noisy", "white_noise"] | None = None
    sleep_environment_notes: str | None = Field(None, max_length=2000)

    # Current aids and goals
    current_sleep_aids: str | None = Field(None, max_length=2000)
    medications: str | None = Field(None, max_length=2000)
    primary_sleep_goals: str | None = Field(None, max_length=2000)
