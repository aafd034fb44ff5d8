"""Mental performance assessment scoring module.

Five cognitive function items are rated 0-4 (higher = more difficulty):
focus difficulty, memory issues, mental fatigue, brain fog and
processing speed. Total score ranges 0-20.

Severity bands:
- 0-4: Optimal
- 5-8: Mild
- 9-12: Moderate
- 13-16: Significant
- 17-20: Severe

The phenotype is the dominant of five derived signals (see
phenotype_signals), assigned by the ordered rules in the mental
phenotype ruleset. When signals tie, the rule listed first wins.
"""

from enum import Enum
from typing import Any, Mapping, Optional

from wellness.rules.engine import classify_mental
from wellness.scoring.bands import SeverityLevel, find_severity


class MentalPhenotype(str, Enum):
    """Mental performance phenotype classification."""

    FOCUS_DEFICIT = "focus_deficit"
    MEMORY_CHALLENGED = "memory_challenged"
    STRESS_REACTIVE = "stress_reactive"
    ENERGY_DEPLETED = "energy_depleted"
    MOOD_FLUCTUATING = "mood_fluctuating"


class MentalProgramTier(str, Enum):
    """Mental performance coaching program tiers."""

    COGNITIVE_FOUNDATIONS = "cognitive_foundations"
    PERFORMANCE_OPTIMIZATION = "performance_optimization"
    ELITE_COGNITION = "elite_cognition"


COGNITIVE_ITEMS = (
    "focus_difficulty",
    "memory_issues",
    "mental_fatigue",
    "brain_fog",
    "processing_speed",
)

MAX_ITEM_SCORE = 4
MAX_COGNITIVE_SCORE = len(COGNITIVE_ITEMS) * MAX_ITEM_SCORE

COGNITIVE_SEVERITY_LEVELS = (
    SeverityLevel(0, 4, "Optimal", "text-green-600", "Excellent cognitive function"),
    SeverityLevel(5, 8, "Mild", "text-yellow-600", "Minor cognitive challenges"),
    SeverityLevel(9, 12, "Moderate", "text-orange-600", "Noticeable cognitive difficulties"),
    SeverityLevel(13, 16, "Significant", "text-red-500", "Significant cognitive impairment"),
    SeverityLevel(17, 20, "Severe", "text-red-700", "Severe cognitive dysfunction"),
)

MENTAL_PHENOTYPE_LABELS = {
    MentalPhenotype.FOCUS_DEFICIT: "Focus Deficit",
    MentalPhenotype.MEMORY_CHALLENGED: "Memory Challenged",
    MentalPhenotype.STRESS_REACTIVE: "Stress Reactive",
    MentalPhenotype.ENERGY_DEPLETED: "Energy Depleted",
    MentalPhenotype.MOOD_FLUCTUATING: "Mood Fluctuating",
}

MENTAL_PHENOTYPE_DESCRIPTIONS = {
    MentalPhenotype.FOCUS_DEFICIT: "Difficulty sustaining attention and concentration on tasks",
    MentalPhenotype.MEMORY_CHALLENGED: "Struggles with short-term memory and recall",
    MentalPhenotype.STRESS_REACTIVE: "Heightened stress response affecting cognitive function",
    MentalPhenotype.ENERGY_DEPLETED: "Mental fatigue and low cognitive energy throughout the day",
    MentalPhenotype.MOOD_FLUCTUATING: "Emotional variability impacting mental performance",
}

MENTAL_TIER_LABELS = {
    MentalProgramTier.COGNITIVE_FOUNDATIONS: "Cognitive Foundations",
    MentalProgramTier.PERFORMANCE_OPTIMIZATION: "Performance Optimization",
    MentalProgramTier.ELITE_COGNITION: "Elite Cognition",
}

MENTAL_TIER_DESCRIPTIONS = {
    MentalProgramTier.COGNITIVE_FOUNDATIONS: "Build baseline cognitive health and mental clarity",
    MentalProgramTier.PERFORMANCE_OPTIMIZATION: "Enhance focus, memory, and stress resilience",
    MentalProgramTier.ELITE_COGNITION: "Peak mental performance and flow state mastery",
}


def calculate_cognitive_score(answers: Mapping[str, Any]) -> int:
    """Sum the cognitive function items; missing items contribute 0."""
    total = 0
    for item in COGNITIVE_ITEMS:
        value = answers.get(item)
        if value is not None:
            total += value
    return total


def get_cognitive_severity(score: int) -> SeverityLevel:
    """Determine the cognitive severity band for a score."""
    return find_severity(COGNITIVE_SEVERITY_LEVELS, score)


def _value(answers: Mapping[str, Any], field: str, default: float) -> float:
    value = answers.get(field)
    return default if value is None else value


def phenotype_signals(answers: Mapping[str, Any]) -> dict[str, float]:
    """Compute the per-phenotype signal strengths.

    Unanswered 0-4 items count as 0 and unanswered 0-10 "higher is
    better" sliders count as 10, so an empty answer set has no signal.
    """
    focus = _value(answers, "focus_difficulty", 0) + _value(answers, "brain_fog", 0)
    memory = _value(answers, "memory_issues", 0) * 2
    stress = _value(answers, "stress_level", 0) / 2 + _value(answers, "anxiety_frequency", 0)
    energy = (
        _value(answers, "mental_fatigue", 0)
        + (10 - _value(answers, "morning_mental_clarity", 10)) / 2
    )
    mood = (
        (10 - _value(answers, "mood_stability", 10)) / 2
        + (10 - _value(answers, "emotional_resilience", 10)) / 2
    )

    # Order matters: it is the tie-break order of the ruleset.
    return {
        MentalPhenotype.FOCUS_DEFICIT.value: focus,
        MentalPhenotype.MEMORY_CHALLENGED.value: memory,
        MentalPhenotype.STRESS_REACTIVE.value: stress,
        MentalPhenotype.ENERGY_DEPLETED.value: energy,
        MentalPhenotype.MOOD_FLUCTUATING.value: mood,
    }


def mental_facts(answers: Mapping[str, Any]) -> dict[str, Any]:
    """Build the facts the mental phenotype rules are evaluated against."""
    signals = phenotype_signals(answers)
    dominant_score = max(signals.values())
    return {
        "signals": signals,
        "dominant_score": dominant_score,
        "dominant": [name for name, score in signals.items() if score == dominant_score],
    }


def determine_mental_phenotype(answers: Mapping[str, Any]) -> Optional[MentalPhenotype]:
    """Classify the mental performance phenotype.

    Returns None when no signal reaches the ruleset's threshold.
    """
    label = classify_mental(mental_facts(answers))
    return MentalPhenotype(label) if label else None
