"""Severity band tables shared by the assessment scorers."""

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class SeverityLevel:
    """One band of a severity table, inclusive on both ends."""
    min: int
    max: int
    label: str
    display_class: str
    description: Optional[str] = None

    def contains(self, score: int) -> bool:
        return self.min <= score <= self.max


def find_severity(levels: Sequence[SeverityLevel], score: int) -> SeverityLevel:
    """Return the first band whose range contains the score.

    Raises:
        ValueError: If no band covers the score. The band tables are
            expected to cover every score a scorer can produce, so this
            indicates a broken table rather than bad user input.
    """
    for level in levels:
        if level.contains(score):
            return level
    raise ValueError(f"No severity band covers score {score}")
