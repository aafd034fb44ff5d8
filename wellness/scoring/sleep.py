"""ISI-style sleep assessment scoring module.

Six Insomnia Severity Index items are rated 0-4:
- 0 = None
- 1 = Mild
- 2 = Moderate
- 3 = Severe
- 4 = Very Severe

Items are summed as they are answered, so the score can be shown live
while the intake form is still being filled in. With all six items the
total ranges 0-24.

Severity bands:
- 0-7: No clinically significant insomnia
- 8-14: Subthreshold insomnia
- 15-21: Clinical insomnia (moderate)
- 22-28: Clinical insomnia (severe)

The sleep phenotype is assigned by the ordered rules in the sleep
phenotype ruleset; see determine_sleep_phenotype.
"""

from enum import Enum
from typing import Any, Mapping, Optional

from wellness.rules.engine import classify_sleep
from wellness.scoring.bands import SeverityLevel, find_severity


class SleepPhenotype(str, Enum):
    """Sleep phenotype classification."""

    STRESS_DOMINANT = "stress_dominant"
    CIRCADIAN_SHIFTED = "circadian_shifted"
    FRAGMENTED = "fragmented"
    SHORT_DURATION = "short_duration"
    RECOVERY_DEFICIENT = "recovery_deficient"


class SleepProgramTier(str, Enum):
    """Sleep coaching program tiers."""

    FOUNDATIONAL = "foundational"
    ADVANCED = "advanced"
    ELITE = "elite"


ISI_ITEMS = (
    "difficulty_falling_asleep",
    "difficulty_staying_asleep",
    "waking_too_early",
    "sleep_satisfaction",      # Higher = less satisfied
    "sleep_interference_daily",
    "sleep_distress",
)

MAX_ITEM_SCORE = 4
MAX_ISI_SCORE = len(ISI_ITEMS) * MAX_ITEM_SCORE

ISI_SEVERITY_LEVELS = (
    SeverityLevel(0, 7, "No clinically significant insomnia", "text-green-600"),
    SeverityLevel(8, 14, "Subthreshold insomnia", "text-yellow-600"),
    SeverityLevel(15, 21, "Clinical insomnia (moderate)", "text-orange-600"),
    SeverityLevel(22, 28, "Clinical insomnia (severe)", "text-red-600"),
)

SLEEP_PHENOTYPE_LABELS = {
    SleepPhenotype.STRESS_DOMINANT: "Stress-Dominant Sleeper",
    SleepPhenotype.CIRCADIAN_SHIFTED: "Circadian-Shifted Sleeper",
    SleepPhenotype.FRAGMENTED: "Fragmented Sleeper",
    SleepPhenotype.SHORT_DURATION: "Short-Duration Sleeper",
    SleepPhenotype.RECOVERY_DEFICIENT: "Recovery-Deficient Sleeper",
}

SLEEP_PHENOTYPE_DESCRIPTIONS = {
    SleepPhenotype.STRESS_DOMINANT: "Racing mind, difficulty unwinding, stress-driven insomnia patterns",
    SleepPhenotype.CIRCADIAN_SHIFTED: "Misaligned sleep schedule, difficulty with consistent timing",
    SleepPhenotype.FRAGMENTED: "Multiple night awakenings, disrupted sleep architecture",
    SleepPhenotype.SHORT_DURATION: "Insufficient total sleep time despite opportunity",
    SleepPhenotype.RECOVERY_DEFICIENT: "Poor recovery metrics despite adequate sleep duration",
}

SLEEP_TIER_LABELS = {
    SleepProgramTier.FOUNDATIONAL: "Sleep Reset Protocol",
    SleepProgramTier.ADVANCED: "Circadian Optimization Program",
    SleepProgramTier.ELITE: "NeuroRecovery & Sleep Performance System",
}

SLEEP_TIER_DESCRIPTIONS = {
    SleepProgramTier.FOUNDATIONAL: "Stabilization, routine establishment, and baseline recovery optimization",
    SleepProgramTier.ADVANCED: "Hormonal rhythm optimization, deep sleep enhancement, and consistency training",
    SleepProgramTier.ELITE: "Nervous system regulation, REM/deep sleep maximization, and elite recovery protocols",
}


def calculate_isi_score(answers: Mapping[str, Any]) -> int:
    """Sum the ISI items that have been answered.

    Missing or None items contribute 0. Values are not range-checked
    here; that happens when the answer set is validated.
    """
    total = 0
    for item in ISI_ITEMS:
        value = answers.get(item)
        if value is not None:
            total += value
    return total


def get_isi_severity(score: int) -> SeverityLevel:
    """Determine the ISI severity band for a score."""
    return find_severity(ISI_SEVERITY_LEVELS, score)


def sleep_facts(answers: Mapping[str, Any]) -> dict[str, Any]:
    """Build the facts the sleep phenotype rules are evaluated against.

    Unanswered ratings are treated as 0, except stress_level which stays
    None so the rules can tell "not reported yet" apart from a rating.
    """
    facts = {item: answers.get(item) or 0 for item in ISI_ITEMS}
    facts["stress_level"] = answers.get("stress_level")
    return {"answers": facts}


def determine_sleep_phenotype(answers: Mapping[str, Any]) -> Optional[SleepPhenotype]:
    """Classify the sleep phenotype, or None until stress has been reported."""
    label = classify_sleep(sleep_facts(answers))
    return SleepPhenotype(label) if label else None
