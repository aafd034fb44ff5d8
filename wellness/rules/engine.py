"""Deterministic first-match phenotype rules engine.

Rules are evaluated in the order the ruleset lists them and the first
rule whose conditions hold assigns the phenotype. When nothing matches
the result is None: there is not enough signal yet, which is a normal
outcome rather than an error.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Optional

from wellness.core.config import settings
from wellness.rules.loader import default_loader
from wellness.rules.models import PhenotypeRule, PhenotypeRuleset


@dataclass
class PhenotypeDecision:
    """Result of evaluating a phenotype ruleset."""

    phenotype: Optional[str]
    rule_id: Optional[str]
    explanation: Optional[str]
    ruleset_id: str
    ruleset_version: str
    ruleset_hash: Optional[str]


def first_match(
    rules: Iterable[PhenotypeRule],
    facts: dict[str, Any],
) -> Optional[PhenotypeRule]:
    """Return the first rule whose conditions hold, or None."""
    for rule in rules:
        if rule.evaluate(facts):
            return rule
    return None


def evaluate(ruleset: PhenotypeRuleset, facts: dict[str, Any]) -> PhenotypeDecision:
    """Evaluate facts against a ruleset and explain the outcome."""
    rule = first_match(ruleset.rules, facts)

    return PhenotypeDecision(
        phenotype=rule.phenotype if rule else None,
        rule_id=rule.id if rule else None,
        explanation=rule.get_explanation(facts) if rule else None,
        ruleset_id=ruleset.id,
        ruleset_version=ruleset.version,
        ruleset_hash=ruleset.content_hash,
    )


def sleep_ruleset() -> PhenotypeRuleset:
    """Get the configured sleep phenotype ruleset."""
    return default_loader.load(settings.sleep_ruleset)


def mental_ruleset() -> PhenotypeRuleset:
    """Get the configured mental performance phenotype ruleset."""
    return default_loader.load(settings.mental_ruleset)


def classify_sleep(facts: dict[str, Any]) -> Optional[str]:
    """Assign a sleep phenotype label from sleep facts."""
    rule = first_match(sleep_ruleset().rules, facts)
    return rule.phenotype if rule else None


def classify_mental(facts: dict[str, Any]) -> Optional[str]:
    """Assign a mental performance phenotype label from mental facts."""
    rule = first_match(mental_ruleset().rules, facts)
    return rule.phenotype if rule else None
