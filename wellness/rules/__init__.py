"""Deterministic phenotype rules engine.

Phenotype rule tables live in versioned YAML rulesets and are evaluated
first-match-wins. No AI/ML is used for classification.
"""

from wellness.rules.engine import (
    PhenotypeDecision,
    classify_mental,
    classify_sleep,
    evaluate,
    first_match,
)
from wellness.rules.loader import RulesetLoader, compute_ruleset_hash, load_ruleset
from wellness.rules.models import PhenotypeRule, PhenotypeRuleset, RulesetError

__all__ = [
    "RulesetLoader",
    "load_ruleset",
    "compute_ruleset_hash",
    "PhenotypeRule",
    "PhenotypeRuleset",
    "RulesetError",
    "PhenotypeDecision",
    "first_match",
    "evaluate",
    "classify_sleep",
    "classify_mental",
]
