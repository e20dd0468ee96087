"""
HealthRisk Assessment Data Models

Internal, immutable result structures passed between pipeline stages.
Everything here is derived from an AnswerSet and never mutated afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping


AnswerSet = Mapping[str, Any]


class RiskLevel(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class UserProfile(str, Enum):
    TEENAGER = "teenager"
    PREMENOPAUSAL = "premenopausal"
    POSTMENOPAUSAL = "postmenopausal"
    CURRENT_PATIENT = "current_patient"
    SURVIVOR = "survivor"


class Domain(str, Enum):
    DEMOGRAPHICS = "Demographics"
    FAMILY_HISTORY = "Family History & Genetics"
    LIFESTYLE = "Lifestyle"
    MEDICAL_HISTORY = "Medical History"
    HORMONAL = "Hormonal Factors"
    PHYSICAL = "Physical Characteristics"


# Report ordering of the six domains
DOMAIN_ORDER: List[Domain] = [
    Domain.DEMOGRAPHICS,
    Domain.FAMILY_HISTORY,
    Domain.LIFESTYLE,
    Domain.MEDICAL_HISTORY,
    Domain.HORMONAL,
    Domain.PHYSICAL,
]

CONTROLLABLE_DOMAINS = (Domain.LIFESTYLE, Domain.HORMONAL, Domain.PHYSICAL)
UNCONTROLLABLE_DOMAINS = (Domain.DEMOGRAPHICS, Domain.FAMILY_HISTORY, Domain.MEDICAL_HISTORY)


class FindingCode(str, Enum):
    """Detected risk patterns, declared in selection priority order."""
    FAMILY_HISTORY = "FAMILY_HISTORY"
    LOW_EXERCISE = "LOW_EXERCISE"
    ALCOHOL_HIGH = "ALCOHOL_HIGH"
    DENSE_BREAST = "DENSE_BREAST"
    HIGH_STRESS = "HIGH_STRESS"
    POOR_DIET = "POOR_DIET"
    POOR_SLEEP = "POOR_SLEEP"
    OVERDUE_SCREENING = "OVERDUE_SCREENING"


FINDING_PRIORITY: List[FindingCode] = list(FindingCode)


@dataclass(frozen=True)
class DomainScore:
    """Score for one risk domain."""
    name: str
    score: int
    factor_count: int
    risk_level: RiskLevel
    risk_factors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "score": self.score,
            "factorCount": self.factor_count,
            "riskLevel": self.risk_level.value,
            "riskFactors": list(self.risk_factors),
        }


@dataclass(frozen=True)
class CompositeReport:
    """Two-tier aggregate over the six domain scores."""
    controllable_score: int
    uncontrollable_score: int
    total_health_score: int
    risk_category: RiskLevel
    user_profile: UserProfile


@dataclass(frozen=True)
class EvidenceFactor:
    """One literature-derived risk contributor."""
    factor_id: str
    factor: str
    percentage: int
    description: str
    modifiable: bool

    def to_dict(self) -> Dict[str, str]:
        key = "riskReduction" if self.modifiable else "riskIncrease"
        return {
            "factor": self.factor,
            key: f"{self.percentage}%",
            "description": self.description,
        }


@dataclass(frozen=True)
class LifetimeRisk:
    current_risk: str
    baseline: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "currentRisk": self.current_risk,
            "baseline": self.baseline,
            "message": self.message,
        }


@dataclass(frozen=True)
class EvidenceBasedRisk:
    unmodifiable: Dict[str, EvidenceFactor]
    modifiable: Dict[str, EvidenceFactor]
    unmodifiable_risk_total: int
    modifiable_reduction_potential: int
    lifetime_risk: LifetimeRisk

    def to_dict(self) -> Dict[str, Any]:
        return {
            "riskFactors": {
                "unmodifiable": {k: v.to_dict() for k, v in self.unmodifiable.items()},
                "modifiable": {k: v.to_dict() for k, v in self.modifiable.items()},
            },
            "lifetimeRisk": self.lifetime_risk.to_dict(),
            "modifiableReduction": self.modifiable_reduction_potential,
            "unmodifiableRisk": self.unmodifiable_risk_total,
        }


@dataclass(frozen=True)
class Insights:
    """Selected static content for the active findings."""
    active_findings: List[FindingCode]
    evidence_badges: List[Dict[str, Any]]
    pain_points: List[Dict[str, Any]]
    urgency: Dict[str, Any]
    improvement_potential: Dict[str, Any]
    expert_videos: List[Dict[str, Any]]
    daily_tips: List[Dict[str, str]]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "active_findings": [f.value for f in self.active_findings],
            "evidence_badges": self.evidence_badges,
            "pain_points": self.pain_points,
            "urgency": self.urgency,
            "improvement_potential": self.improvement_potential,
            "expert_videos": self.expert_videos,
            "daily_tips": self.daily_tips,
        }
