"""Assessment scoring service.

Combines the score calculator, severity band lookup and phenotype
classifier for each assessment domain:
- Sleep: ISI-style insomnia score (0-24) and sleep phenotype
- Mental performance: cognitive function score (0-20) and mental phenotype

Used both for the live preview while a form is being filled in and at
submission, so the two can never disagree.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Optional

from pydantic import BaseModel

from wellness.models.assessment import AssessmentDomain
from wellness.rules.engine import evaluate, mental_ruleset, sleep_ruleset
from wellness.rules.models import PhenotypeRuleset
from wellness.schemas.mental import MentalAnswers
from wellness.schemas.sleep import SleepAnswers
from wellness.scoring import mental, sleep
from wellness.scoring.bands import SeverityLevel


@dataclass
class ScoreResult:
    """Result of scoring an answer set."""

    domain: AssessmentDomain
    score: int
    max_score: int
    severity: SeverityLevel
    phenotype: Optional[str]
    phenotype_label: Optional[str]
    phenotype_description: Optional[str]
    rule_id: Optional[str]
    ruleset_version: str
    ruleset_hash: Optional[str]


class DomainScorer:
    """Wires one domain's scoring functions and display tables together."""

    domain: AssessmentDomain
    answers_schema: type[BaseModel]
    phenotype_enum: type[Enum]
    max_score: int
    severity_levels: tuple[SeverityLevel, ...]
    phenotype_labels: Mapping[Any, str]
    phenotype_descriptions: Mapping[Any, str]
    tier_labels: Mapping[Any, str]
    tier_descriptions: Mapping[Any, str]
    default_tier: str

    calculate_score: Callable[[Mapping[str, Any]], int]
    get_severity: Callable[[int], SeverityLevel]
    build_facts: Callable[[Mapping[str, Any]], dict[str, Any]]
    ruleset: Callable[[], PhenotypeRuleset]

    @classmethod
    def validate_answers(cls, answers: BaseModel | Mapping[str, Any]) -> BaseModel:
        """Return answers as this domain's schema, validating mappings.

        Raises:
            ValueError: If answers is a model for a different domain
            pydantic.ValidationError: If a mapping fails validation
        """
        if isinstance(answers, cls.answers_schema):
            return answers
        if isinstance(answers, BaseModel):
            raise ValueError(
                f"{type(answers).__name__} is not a {cls.domain.value} answer set"
            )
        return cls.answers_schema.model_validate(answers)

    @classmethod
    def calculate(cls, answers: BaseModel) -> ScoreResult:
        """Score a validated answer set.

        Args:
            answers: Answer set for this domain, possibly partial

        Returns:
            ScoreResult with score, severity band and phenotype
        """
        data = answers.model_dump()
        score = cls.calculate_score(data)
        decision = evaluate(cls.ruleset(), cls.build_facts(data))

        phenotype = decision.phenotype
        # Display tables are keyed by enum member, not by raw label
        key = cls.phenotype_enum(phenotype) if phenotype else None
        return ScoreResult(
            domain=cls.domain,
            score=score,
            max_score=cls.max_score,
            severity=cls.get_severity(score),
            phenotype=phenotype,
            phenotype_label=cls.phenotype_labels.get(key) if key else None,
            phenotype_description=cls.phenotype_descriptions.get(key) if key else None,
            rule_id=decision.rule_id,
            ruleset_version=decision.ruleset_version,
            ruleset_hash=decision.ruleset_hash,
        )

    @classmethod
    def catalog(cls) -> dict[str, Any]:
        """Display tables for the domain: bands, phenotypes and program tiers."""
        return {
            "domain": cls.domain,
            "max_score": cls.max_score,
            "severity_levels": [asdict(level) for level in cls.severity_levels],
            "phenotypes": [
                {
                    "value": phenotype.value,
                    "label": cls.phenotype_labels[phenotype],
                    "description": cls.phenotype_descriptions[phenotype],
                }
                for phenotype in cls.phenotype_enum
            ],
            "program_tiers": [
                {
                    "value": tier.value,
                    "label": label,
                    "description": cls.tier_descriptions[tier],
                }
                for tier, label in cls.tier_labels.items()
            ],
            "ruleset_version": cls.ruleset().version,
        }


class SleepScorer(DomainScorer):
    """Sleep (ISI) assessment scorer."""

    domain = AssessmentDomain.SLEEP
    answers_schema = SleepAnswers
    phenotype_enum = sleep.SleepPhenotype
    max_score = sleep.MAX_ISI_SCORE
    severity_levels = sleep.ISI_SEVERITY_LEVELS
    phenotype_labels = sleep.SLEEP_PHENOTYPE_LABELS
    phenotype_descriptions = sleep.SLEEP_PHENOTYPE_DESCRIPTIONS
    tier_labels = sleep.SLEEP_TIER_LABELS
    tier_descriptions = sleep.SLEEP_TIER_DESCRIPTIONS
    default_tier = sleep.SleepProgramTier.FOUNDATIONAL.value

    calculate_score = staticmethod(sleep.calculate_isi_score)
    get_severity = staticmethod(sleep.get_isi_severity)
    build_facts = staticmethod(sleep.sleep_facts)
    ruleset = staticmethod(sleep_ruleset)


class MentalScorer(DomainScorer):
    """Mental performance (cognitive function) assessment scorer."""

    domain = AssessmentDomain.MENTAL
    answers_schema = MentalAnswers
    phenotype_enum = mental.MentalPhenotype
    max_score = mental.MAX_COGNITIVE_SCORE
    severity_levels = mental.COGNITIVE_SEVERITY_LEVELS
    phenotype_labels = mental.MENTAL_PHENOTYPE_LABELS
    phenotype_descriptions = mental.MENTAL_PHENOTYPE_DESCRIPTIONS
    tier_labels = mental.MENTAL_TIER_LABELS
    tier_descriptions = mental.MENTAL_TIER_DESCRIPTIONS
    default_tier = mental.MentalProgramTier.COGNITIVE_FOUNDATIONS.value

    calculate_score = staticmethod(mental.calculate_cognitive_score)
    get_severity = staticmethod(mental.get_cognitive_severity)
    build_facts = staticmethod(mental.mental_facts)
    ruleset = staticmethod(mental_ruleset)


class ScoringService:
    """Service for scoring assessments by domain."""

    SCORERS: dict[AssessmentDomain, type[DomainScorer]] = {
        AssessmentDomain.SLEEP: SleepScorer,
        AssessmentDomain.MENTAL: MentalScorer,
    }

    @classmethod
    def get_scorer(cls, domain: AssessmentDomain) -> type[DomainScorer]:
        """Get the scorer for a domain.

        Raises:
            ValueError: If the domain is not supported
        """
        scorer = cls.SCORERS.get(domain)
        if not scorer:
            raise ValueError(f"Unsupported assessment domain: {domain}")
        return scorer

    @classmethod
    def calculate(
        cls,
        domain: AssessmentDomain,
        answers: BaseModel | Mapping[str, Any],
    ) -> ScoreResult:
        """Score an answer set, validating it first if given as a mapping.

        Raises:
            ValueError: If answers is a model for a different domain
            pydantic.ValidationError: If a mapping fails validation
        """
        scorer = cls.get_scorer(domain)
        return scorer.calculate(scorer.validate_answers(answers))
