"""Scoring modules for the sleep and mental performance assessments."""

from wellness.scoring.bands import SeverityLevel, find_severity
from wellness.scoring.mental import (
    MentalPhenotype,
    calculate_cognitive_score,
    determine_mental_phenotype,
    get_cognitive_severity,
)
from wellness.scoring.sleep import (
    SleepPhenotype,
    calculate_isi_score,
    determine_sleep_phenotype,
    get_isi_severity,
)

__all__ = [
    "SeverityLevel",
    "find_severity",
    "SleepPhenotype",
    "calculate_isi_score",
    "get_isi_severity",
    "determine_sleep_phenotype",
    "MentalPhenotype",
    "calculate_cognitive_score",
    "get_cognitive_severity",
    "determine_mental_phenotype",
]
