"""
HealthRisk Assessment Engine

Pure scoring and report generation for one questionnaire response.
"""

from .models import (
    AnswerSet,
    RiskLevel,
    UserProfile,
    Domain,
    FindingCode,
    DomainScore,
    CompositeReport,
    EvidenceBasedRisk,
    Insights,
)
from .normalize import normalize_answers
from .domains import score_all_domains
from .aggregate import aggregate, classify_risk_category, determine_user_profile
from .evidence import model_evidence_based_risk
from .insights import detect_findings, select_insights
from .report import assemble_report
from .narrative import HttpNarrativeService, NarrativeUnavailable, get_narrative_service
from .pipeline import AssessmentResult, assess, build_report, run_assessment, score_answers
from .questionnaire import QUESTIONNAIRE_SCHEMA

__all__ = [
    "AnswerSet",
    "RiskLevel",
    "UserProfile",
    "Domain",
    "FindingCode",
    "DomainScore",
    "CompositeReport",
    "EvidenceBasedRisk",
    "Insights",
    "normalize_answers",
    "score_all_domains",
    "aggregate",
    "classify_risk_category",
    "determine_user_profile",
    "model_evidence_based_risk",
    "detect_findings",
    "select_insights",
    "assemble_report",
    "HttpNarrativeService",
    "NarrativeUnavailable",
    "get_narrative_service",
    "AssessmentResult",
    "assess",
    "build_report",
    "run_assessment",
    "score_answers",
    "QUESTIONNAIRE_SCHEMA",
]
