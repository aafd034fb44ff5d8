"""Phenotype rule and ruleset data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union


class RulesetError(ValueError):
    """Raised when a ruleset definition is malformed."""


class ConditionOperator(str, Enum):
    """Operators for rule conditions."""
    EQUALS = "=="
    NOT_EQUALS = "!="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUAL = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUAL = "<="
    IN = "in"
    CONTAINS = "contains"


@dataclass(frozen=True)
class Condition:
    """A single condition comparing one fact to a value."""
    fact: str
    operator: ConditionOperator
    value: Any = None

    def evaluate(self, facts: dict) -> bool:
        """Evaluate this condition against the facts."""
        actual = _get_fact_value(facts, self.fact)
        op = self.operator
        expected = self.value

        # Missing facts only satisfy an explicit "== null"
        if actual is None:
            return op == ConditionOperator.EQUALS and expected is None

        try:
            if op == ConditionOperator.EQUALS:
                return actual == expected
            elif op == ConditionOperator.NOT_EQUALS:
                return actual != expected
            elif op == ConditionOperator.GREATER_THAN:
                return actual > expected
            elif op == ConditionOperator.GREATER_THAN_OR_EQUAL:
                return actual >= expected
            elif op == ConditionOperator.LESS_THAN:
                return actual < expected
            elif op == ConditionOperator.LESS_THAN_OR_EQUAL:
                return actual <= expected
            elif op == ConditionOperator.IN:
                return actual in expected if isinstance(expected, (list, tuple)) else False
            elif op == ConditionOperator.CONTAINS:
                return expected in actual if isinstance(actual, (str, list, tuple)) else False
        except TypeError:
            return False

        return False

    def describe(self) -> str:
        return f"{self.fact} {self.operator.value} {self.value}"


@dataclass(frozen=True)
class ConditionGroup:
    """Conditions combined with AND ("all") or OR ("any") logic."""
    mode: str
    conditions: tuple[Union[Condition, "ConditionGroup"], ...]

    def evaluate(self, facts: dict) -> bool:
        results = (condition.evaluate(facts) for condition in self.conditions)
        if self.mode == "all":
            return all(results)
        return any(results)

    def describe(self) -> str:
        joiner = " and " if self.mode == "all" else " or "
        return "(" + joiner.join(c.describe() for c in self.conditions) + ")"


@dataclass(frozen=True)
class PhenotypeRule:
    """A rule assigning a phenotype when its conditions hold."""
    id: str
    phenotype: str
    when: ConditionGroup
    description: str = ""

    def evaluate(self, facts: dict) -> bool:
        return self.when.evaluate(facts)

    def get_explanation(self, facts: dict) -> str:
        """Generate explanation for why this rule matched."""
        return f"Rule '{self.id}' assigned {self.phenotype}: {self.when.describe()}"


@dataclass(frozen=True)
class PhenotypeRuleset:
    """A versioned, ordered phenotype rule table.

    Rules are evaluated in the order they are listed.
    """
    id: str
    version: str
    description: str
    phenotypes: tuple[str, ...]
    rules: tuple[PhenotypeRule, ...] = field(default_factory=tuple)
    content_hash: Optional[str] = field(default=None, compare=False)

    @classmethod
    def from_dict(cls, data: dict, content_hash: Optional[str] = None) -> "PhenotypeRuleset":
        """Create a ruleset from its parsed YAML representation.

        Raises:
            RulesetError: If a required field is missing or a block has the
                wrong shape, the ruleset has no rules, repeats a rule id,
                uses an unknown operator or assigns an undeclared phenotype.
        """
        for key in ("id", "version"):
            if data.get(key) is None:
                raise RulesetError(f"Ruleset is missing required field {key!r}")
        ruleset_id = data["id"]

        phenotypes = tuple(data.get("phenotypes") or [])
        rules_data = data.get("rules") or []
        if not isinstance(rules_data, list) or not rules_data:
            raise RulesetError(f"Ruleset {ruleset_id} has no rules")

        rules = []
        seen_ids: set[str] = set()
        for index, rule_data in enumerate(rules_data):
            if not isinstance(rule_data, dict):
                raise RulesetError(f"Ruleset {ruleset_id} rule #{index} is not a mapping")
            rule_id = rule_data.get("id")
            if rule_id is None:
                raise RulesetError(f"Ruleset {ruleset_id} rule #{index} has no id")
            if rule_id in seen_ids:
                raise RulesetError(f"Duplicate rule id: {rule_id}")
            seen_ids.add(rule_id)

            phenotype = rule_data.get("phenotype")
            if phenotype is None:
                raise RulesetError(f"Rule {rule_id} has no phenotype")
            if phenotype not in phenotypes:
                raise RulesetError(
                    f"Rule {rule_id} assigns undeclared phenotype {phenotype!r}"
                )

            rules.append(PhenotypeRule(
                id=rule_id,
                phenotype=phenotype,
                when=_parse_group(rule_data.get("when") or {}, rule_id),
                description=rule_data.get("description", ""),
            ))

        return cls(
            id=ruleset_id,
            version=str(data["version"]),
            description=data.get("description", ""),
            phenotypes=phenotypes,
            rules=tuple(rules),
            content_hash=content_hash,
        )


def _parse_group(when: Any, rule_id: str) -> ConditionGroup:
    if not isinstance(when, dict):
        raise RulesetError(f"Rule {rule_id} has a condition block that is not a mapping")
    if "all" in when:
        mode = "all"
    elif "any" in when:
        mode = "any"
    else:
        raise RulesetError(f"Rule {rule_id} needs an 'all' or 'any' block")

    items = when[mode] or []
    if not isinstance(items, list):
        raise RulesetError(f"Rule {rule_id} '{mode}' block must be a list")

    conditions: list[Union[Condition, ConditionGroup]] = []
    for item in items:
        if not isinstance(item, dict):
            raise RulesetError(f"Rule {rule_id} has a condition that is not a mapping: {item!r}")
        if "all" in item or "any" in item:
            conditions.append(_parse_group(item, rule_id))
            continue
        if "fact" not in item:
            raise RulesetError(f"Rule {rule_id} has a condition without a fact")
        try:
            operator = ConditionOperator(item.get("op", "=="))
        except ValueError:
            raise RulesetError(
                f"Rule {rule_id} uses unknown operator {item.get('op')!r}"
            ) from None
        conditions.append(Condition(
            fact=item["fact"],
            operator=operator,
            value=item.get("value"),
        ))

    return ConditionGroup(mode=mode, conditions=tuple(conditions))


def _get_fact_value(data: dict, path: str) -> Any:
    """Get value from nested dict using dot notation."""
    current: Any = data
    for key in path.split("."):
        if isinstance(current, dict):
            current = current.get(key)
        else:
            return None
        if current is None:
            return None
    return current
