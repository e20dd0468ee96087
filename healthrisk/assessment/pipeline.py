"""
HealthRisk Assessment Pipeline

Normalize -> score domains -> aggregate -> evidence model -> insights -> report.

Everything up to the report is a pure function of the raw answers. The only
I/O is the optional narrative call in run_assessment, and its failures are
recovered with the template narrative.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from .models import CompositeReport, DomainScore, EvidenceBasedRisk, Insights
from .normalize import normalize_answers
from .domains import score_all_domains
from .aggregate import aggregate
from .evidence import model_evidence_based_risk
from .insights import select_insights
from .report import assemble_report
from .narrative import NarrativeUnavailable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssessmentResult:
    """All intermediate results for one answer set."""
    answers: Dict[str, Any]
    domain_scores: List[DomainScore]
    composite: CompositeReport
    evidence: EvidenceBasedRisk
    insights: Insights


def score_answers(raw_answers: Mapping[str, Any]) -> AssessmentResult:
    answers = normalize_answers(raw_answers)
    domain_scores = score_all_domains(answers)
    return AssessmentResult(
        answers=answers,
        domain_scores=domain_scores,
        composite=aggregate(domain_scores, answers),
        evidence=model_evidence_based_risk(answers, answers["age"]),
        insights=select_insights(answers),
    )


def build_report(result: AssessmentResult, narrative_text: Optional[str] = None) -> Dict[str, Any]:
    return assemble_report(
        result.domain_scores,
        result.composite,
        result.evidence,
        result.insights,
        narrative_text=narrative_text,
    )


def assess(raw_answers: Mapping[str, Any]) -> Dict[str, Any]:
    """Synchronous report with the template narrative."""
    return build_report(score_answers(raw_answers))


async def run_assessment(raw_answers: Mapping[str, Any], narrative_service=None) -> Dict[str, Any]:
    """
    Full pipeline including the optional narrative collaborator.

    `narrative_service` is any object with
    `async generate_narrative(answers, domain_scores) -> str`.
    """
    result = score_answers(raw_answers)

    narrative_text = None
    if narrative_service is not None:
        try:
            text = await narrative_service.generate_narrative(result.answers, result.domain_scores)
            if isinstance(text, str):
                narrative_text = text
            else:
                logger.warning(f"[FALLBACK] Narrative service returned {type(text).__name__}, using template")
        except NarrativeUnavailable as e:
            logger.warning(f"[FALLBACK] Narrative unavailable, using template: {e}")
        except Exception as e:
            logger.error(f"[FALLBACK] Narrative service failed, using template: {type(e).__name__}: {e}")

    return build_report(result, narrative_text=narrative_text)
