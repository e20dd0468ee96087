"""
HealthRisk Rule Evaluator

A domain is a declarative table of (predicate, penalty, label) rules.
One generic reducer evaluates every table:

    score = clamp(ceiling - sum(penalty for matching rules), floor, 100)

Predicates receive the normalized AnswerSet only. An absent field never
matches (see normalize.py for the two exceptions: age and bmi).
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence

from .models import DomainScore, RiskLevel

Predicate = Callable[[Mapping[str, Any]], bool]

LOW_RISK_THRESHOLD = 80
MODERATE_RISK_THRESHOLD = 60


@dataclass(frozen=True)
class Rule:
    """A single weighted risk rule."""
    predicate: Predicate
    penalty: int
    label: str


@dataclass(frozen=True)
class RuleTable:
    """Ordered rules for one domain plus its ceiling and floor."""
    domain: str
    rules: Sequence[Rule]
    ceiling: int = 100
    floor: int = 20


# ---------------------------------------------------------------------------
# Predicate builders
# ---------------------------------------------------------------------------

def answer_is(key: str, *values: str) -> Predicate:
    """Match when answers[key] equals one of `values`."""
    allowed = frozenset(values)

    def _match(answers: Mapping[str, Any]) -> bool:
        return answers.get(key) in allowed

    return _match


def answer_startswith(key: str, prefix: str) -> Predicate:
    def _match(answers: Mapping[str, Any]) -> bool:
        value = answers.get(key)
        return isinstance(value, str) and value.startswith(prefix)

    return _match


def number_above(key: str, threshold: float) -> Predicate:
    """Strictly greater than; absent or non-numeric never matches."""

    def _match(answers: Mapping[str, Any]) -> bool:
        value = answers.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return False
        return value > threshold

    return _match


def absent(key: str) -> Predicate:
    def _match(answers: Mapping[str, Any]) -> bool:
        return answers.get(key) is None

    return _match


def all_of(*predicates: Predicate) -> Predicate:
    def _match(answers: Mapping[str, Any]) -> bool:
        return all(p(answers) for p in predicates)

    return _match


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------

def classify_risk_level(score: int) -> RiskLevel:
    if score >= LOW_RISK_THRESHOLD:
        return RiskLevel.LOW
    if score >= MODERATE_RISK_THRESHOLD:
        return RiskLevel.MODERATE
    return RiskLevel.HIGH


def evaluate(
    table: RuleTable,
    answers: Mapping[str, Any],
    ceiling: Optional[int] = None,
    extra_factors: Sequence[str] = (),
) -> DomainScore:
    """
    Evaluate a rule table against normalized answers.

    `ceiling` overrides the table ceiling for domains whose starting point
    depends on the answers (Demographics). `extra_factors` are labels that
    carry no penalty but are reported as risk factors.
    """
    score = table.ceiling if ceiling is None else ceiling
    factors: List[str] = list(extra_factors)

    for rule in table.rules:
        if rule.predicate(answers):
            score -= rule.penalty
            factors.append(rule.label)

    score = max(table.floor, min(100, score))
    return DomainScore(
        name=table.domain,
        score=score,
        factor_count=len(factors),
        risk_level=classify_risk_level(score),
        risk_factors=factors,
    )
