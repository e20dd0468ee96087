"""
HealthRisk Composite Aggregator

Two-tier aggregate over the six domain scores:
- controllable   = mean(Lifestyle, Hormonal Factors, Physical Characteristics)
- uncontrollable = mean(Demographics, Family History & Genetics, Medical History)
- total          = mean(controllable, uncontrollable)

All means are rounded half up, never banker's rounding.
"""

import logging
import math
from typing import Any, Iterable, Mapping, Sequence

from .models import (
    CONTROLLABLE_DOMAINS,
    UNCONTROLLABLE_DOMAINS,
    CompositeReport,
    DomainScore,
    RiskLevel,
    UserProfile,
)
from .domains import CANCER_PATIENT, CANCER_SURVIVOR

logger = logging.getLogger(__name__)

TEENAGER_MAX_AGE = 20
POSTMENOPAUSAL_MIN_AGE = 55


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _mean(values: Iterable[int]) -> float:
    values = list(values)
    return sum(values) / len(values)


def classify_risk_category(total_health_score: int) -> RiskLevel:
    """
    Category from the total health score.

    The last two branches both return HIGH. Scores of 60 and above read as
    high risk even though the domain-level scale calls them moderate/low;
    this mirrors the published rule set and is kept as-is.
    """
    if total_health_score < 20:
        return RiskLevel.LOW
    if total_health_score < 40:
        return RiskLevel.MODERATE
    if total_health_score < 60:
        return RiskLevel.HIGH
    return RiskLevel.HIGH


def determine_user_profile(answers: Mapping[str, Any]) -> UserProfile:
    cancer_history = answers.get("cancer_history")
    if cancer_history == CANCER_PATIENT:
        return UserProfile.CURRENT_PATIENT
    if cancer_history == CANCER_SURVIVOR:
        return UserProfile.SURVIVOR

    age = answers.get("age", 30)
    if age < TEENAGER_MAX_AGE:
        return UserProfile.TEENAGER
    menopause = answers.get("menopause")
    if age > POSTMENOPAUSAL_MIN_AGE or (isinstance(menopause, str) and menopause.startswith("Yes")):
        return UserProfile.POSTMENOPAUSAL
    return UserProfile.PREMENOPAUSAL


def aggregate(domain_scores: Sequence[DomainScore], answers: Mapping[str, Any]) -> CompositeReport:
    """Build the CompositeReport from all six domain scores."""
    by_name = {d.name: d.score for d in domain_scores}
    missing = [d.value for d in CONTROLLABLE_DOMAINS + UNCONTROLLABLE_DOMAINS if d.value not in by_name]
    if missing:
        raise ValueError(f"Missing domain scores: {missing}")

    controllable = round_half_up(_mean(by_name[d.value] for d in CONTROLLABLE_DOMAINS))
    uncontrollable = round_half_up(_mean(by_name[d.value] for d in UNCONTROLLABLE_DOMAINS))
    total = round_half_up((controllable + uncontrollable) / 2)

    composite = CompositeReport(
        controllable_score=controllable,
        uncontrollable_score=uncontrollable,
        total_health_score=total,
        risk_category=classify_risk_category(total),
        user_profile=determine_user_profile(answers),
    )
    logger.debug(
        f"[AGGREGATE] controllable={controllable} uncontrollable={uncontrollable} "
        f"total={total} category={composite.risk_category.value}"
    )
    return composite
