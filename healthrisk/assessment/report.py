"""
HealthRisk Report Assembler

Pure merge of domain scores, composite, evidence model, insights and an
optional narrative into the report document served by the API.

Template content (recommendations, daily plan, section summaries, coaching
focus, follow-up timeline) is selected by risk category and domain scores.
"""

from typing import Any, Dict, List, Optional, Sequence

from ..config import RULESET_VERSION
from ..shared.disclaimer import build_disclaimer
from .models import CompositeReport, Domain, DomainScore, EvidenceBasedRisk, Insights

MAX_COACHING_FOCUS = 5
COACHING_FOCUS_THRESHOLD = 70
DAILY_PLAN_EXERCISE_THRESHOLD = 70

NARRATIVE_SOURCE_SERVICE = "service"
NARRATIVE_SOURCE_TEMPLATE = "template"


# ============================================
# RECOMMENDATIONS
# ============================================

BASE_RECOMMENDATIONS = [
    "Schedule annual check-ups with your healthcare provider",
    "Perform monthly self-examinations",
    "Maintain a healthy lifestyle with regular exercise",
]

CATEGORY_RECOMMENDATIONS = {
    "high": [
        "Immediate consultation with breast health specialist",
        "Consider genetic counseling and testing",
        "More frequent screening as recommended by your doctor",
        "Lifestyle modifications to reduce risk factors",
    ],
    "moderate": [
        "Regular screening every 6-12 months",
        "Focus on modifiable risk factors",
        "Consider preventive measures",
    ],
    "low": [
        "Continue current healthy practices",
        "Annual mammograms starting at age 40",
        "Regular self-examinations",
    ],
}


def generate_recommendations(risk_category: str) -> List[str]:
    return CATEGORY_RECOMMENDATIONS[risk_category] + BASE_RECOMMENDATIONS


# ============================================
# DAILY PLAN
# ============================================

def _find_domain(domain_scores: Sequence[DomainScore], domain: Domain) -> Optional[DomainScore]:
    for d in domain_scores:
        if d.name == domain.value:
            return d
    return None


def generate_daily_plan(risk_category: str, domain_scores: Sequence[DomainScore]) -> Dict[str, Any]:
    lifestyle = _find_domain(domain_scores, Domain.LIFESTYLE)
    has_exercise = lifestyle is not None and lifestyle.score > DAILY_PLAN_EXERCISE_THRESHOLD
    has_stress = lifestyle is not None and any("stress" in f.lower() for f in lifestyle.risk_factors)
    high = risk_category == "high"

    return {
        "morning": (
            "Start with 10 minutes of meditation, take recommended supplements, "
            "enjoy antioxidant-rich breakfast with berries and green tea"
            if high else
            "Start with 5 minutes of breathing exercises, take vitamin D supplement, "
            "enjoy a nutritious breakfast rich in antioxidants"
        ),
        "afternoon": (
            "45-minute moderate exercise session, stay hydrated, include leafy greens and lean protein in lunch"
            if has_exercise else
            "30-minute walk or moderate exercise, stay hydrated, include leafy greens in lunch"
        ),
        "evening": (
            "Light stretching or yoga, practice stress-reduction techniques, "
            "herbal tea for relaxation, limit screen time"
            if has_stress else
            "Light stretching or yoga, limit screen time before bed, herbal tea for relaxation"
        ),
        "weekly": {
            "exercise_goals": (
                "200 minutes moderate activity or 100 minutes vigorous activity"
                if high else
                "150 minutes moderate activity or 75 minutes vigorous activity"
            ),
            "nutrition_focus": "5-7 servings fruits and vegetables daily, limit processed foods",
            "stress_management": (
                "Practice mindfulness or meditation 5x per week"
                if has_stress else
                "Practice mindfulness or meditation 3x per week"
            ),
        },
        "supplements": (
            [
                "Vitamin D3 (2000-4000 IU daily)",
                "Omega-3 fatty acids (2000mg daily)",
                "Folate (800mcg daily)",
                "Curcumin (500mg daily)",
                "Green tea extract (500mg daily)",
            ]
            if high else
            [
                "Vitamin D3 (1000-2000 IU daily)",
                "Omega-3 fatty acids (1000mg daily)",
                "Folate (400mcg daily)",
            ]
        ),
    }


# ============================================
# PROFILE / SECTION SUMMARIES
# ============================================

PROFILE_DESCRIPTIONS = {
    "teenager": "Young women with developing breast tissue. Focus on establishing healthy habits early.",
    "premenopausal": "Women of reproductive age. Regular monitoring and healthy lifestyle are key.",
    "postmenopausal": "Women past reproductive age. Hormonal changes require increased vigilance.",
    "current_patient": "Individuals currently undergoing treatment. Specialized care and support needed.",
    "survivor": "Breast cancer survivors. Ongoing monitoring and risk reduction strategies.",
}


def generate_profile_description(user_profile: str) -> str:
    return PROFILE_DESCRIPTIONS.get(user_profile, "Individual with personalized risk profile.")


# (score >= 80, score >= 60, below 60)
SECTION_SUMMARIES: Dict[str, tuple] = {
    Domain.DEMOGRAPHICS.value: (
        "Your demographic factors are favorable for breast health. Age and ethnicity place you in a lower baseline risk category.",
        "Some demographic factors may slightly increase your baseline risk. Regular monitoring is recommended.",
        "Your demographic profile indicates higher baseline risk. More frequent screening and preventive measures are important.",
    ),
    Domain.FAMILY_HISTORY.value: (
        "No significant family history of breast or ovarian cancer identified. Your genetic risk appears low.",
        "Some family history factors may increase your risk. Consider genetic counseling for personalized assessment.",
        "Significant family history or genetic factors identified. Genetic counseling and specialized screening are strongly recommended.",
    ),
    Domain.LIFESTYLE.value: (
        "Excellent lifestyle factors including regular exercise, healthy diet, and stress management. Continue these protective behaviors.",
        "Some lifestyle factors could be improved. Focus on modifiable risk factors to reduce your overall risk.",
        "Several lifestyle factors need attention. Significant improvements in diet, exercise, and stress management can substantially reduce your risk.",
    ),
    Domain.MEDICAL_HISTORY.value: (
        "No significant breast-related medical history reported. Continue routine screening and self-examinations.",
        "Some past medical findings call for closer follow-up. Keep your screening schedule consistent.",
        "Your medical history calls for specialist follow-up. Work with your care team on a personalized monitoring plan.",
    ),
    Domain.HORMONAL.value: (
        "Your reproductive history and hormonal factors are within normal parameters. Continue monitoring any changes.",
        "Some reproductive factors may influence your risk. Regular monitoring and lifestyle modifications can help.",
        "Several reproductive and hormonal factors increase your risk. Consult with your healthcare provider about preventive strategies.",
    ),
    Domain.PHYSICAL.value: (
        "Your physical characteristics are within healthy ranges. Keep up your current habits.",
        "Some physical factors such as weight or breast density add to your risk. Ask about the right screening method for you.",
        "Several physical factors increase your risk. Weight management and supplemental screening are worth discussing with your doctor.",
    ),
}


def _summary_for(domain_score: DomainScore) -> str:
    favorable, moderate, concerning = SECTION_SUMMARIES[domain_score.name]
    if domain_score.score >= 80:
        return favorable
    if domain_score.score >= 60:
        return moderate
    return concerning


def generate_section_summaries(domain_scores: Sequence[DomainScore]) -> Dict[str, str]:
    return {d.name: _summary_for(d) for d in domain_scores}


# ============================================
# COACHING / FOLLOW-UP
# ============================================

CATEGORY_COACHING_FOCUS = {
    "high": [
        "Immediate risk reduction strategies and medical consultation",
        "Genetic counseling and specialized screening protocols",
        "Comprehensive lifestyle modifications",
    ],
    "moderate": [
        "Targeted risk factor reduction",
        "Enhanced screening and monitoring",
        "Preventive lifestyle improvements",
    ],
    "low": [
        "Maintain current healthy practices",
        "Establish consistent screening routine",
        "Continue preventive lifestyle habits",
    ],
}


def generate_coaching_focus(risk_category: str, domain_scores: Sequence[DomainScore]) -> List[str]:
    focus = list(CATEGORY_COACHING_FOCUS[risk_category])
    for d in domain_scores:
        if d.score < COACHING_FOCUS_THRESHOLD:
            focus.append(f"Improve {d.name.lower()} factors")
    return focus[:MAX_COACHING_FOCUS]


FOLLOW_UP_TIMELINES = {
    "high": {
        "1_week": "Schedule immediate consultation with breast health specialist",
        "1_month": "Complete recommended diagnostic tests and genetic counseling",
        "3_months": "Follow-up with specialist and establish monitoring protocol",
        "6_months": "Re-evaluate risk factors and adjust prevention strategies",
        "ongoing": "Regular monitoring and lifestyle maintenance",
    },
    "moderate": {
        "1_month": "Schedule consultation with primary care physician",
        "3_months": "Complete recommended screening and establish routine",
        "6_months": "Re-evaluate risk factors and prevention strategies",
        "1_year": "Annual comprehensive assessment",
        "ongoing": "Regular screening and lifestyle maintenance",
    },
    "low": {
        "1_month": "Schedule routine check-up to discuss assessment results",
        "3_months": "Re-evaluate stress management and lifestyle goals",
        "6_months": "Review health goals and assess progress",
        "1_year": "Complete follow-up assessment",
        "ongoing": "Continue monthly self-examinations and healthy practices",
    },
}


def generate_follow_up_timeline(risk_category: str) -> Dict[str, str]:
    return dict(FOLLOW_UP_TIMELINES[risk_category])


# ============================================
# NARRATIVE
# ============================================

def template_narrative(
    composite: CompositeReport,
    domain_scores: Sequence[DomainScore],
    evidence: EvidenceBasedRisk,
) -> str:
    """Deterministic narrative used whenever the narrative service is unavailable."""
    parts = [
        f"Your overall health score is {composite.total_health_score} out of 100, "
        f"placing you in the {composite.risk_category.value} risk category.",
        f"Your controllable score is {composite.controllable_score} and your "
        f"uncontrollable score is {composite.uncontrollable_score}.",
    ]

    needs_attention = [d for d in domain_scores if d.score < 80]
    if needs_attention:
        for d in needs_attention:
            parts.append(f"{d.name}: {_summary_for(d)}")
    else:
        parts.append("All six areas of your assessment look favorable.")

    if evidence.modifiable_reduction_potential > 0:
        parts.append(
            f"Changing the habits flagged in this report could lower your relative risk "
            f"by up to {evidence.modifiable_reduction_potential}%."
        )
    return " ".join(parts)


# ============================================
# ASSEMBLY
# ============================================

def assemble_report(
    domain_scores: Sequence[DomainScore],
    composite: CompositeReport,
    evidence: EvidenceBasedRisk,
    insights: Insights,
    narrative_text: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the report document.

    Pure: identical inputs produce an identical dict. When `narrative_text`
    is None the template narrative is used.
    """
    category = composite.risk_category.value
    profile = composite.user_profile.value
    daily_plan = generate_daily_plan(category, domain_scores)

    if narrative_text:
        narrative = {"source": NARRATIVE_SOURCE_SERVICE, "text": narrative_text}
    else:
        narrative = {
            "source": NARRATIVE_SOURCE_TEMPLATE,
            "text": template_narrative(composite, domain_scores, evidence),
        }

    insights_dict = insights.to_dict()
    insights_dict.pop("active_findings")

    return {
        "riskScore": str(composite.total_health_score),
        "riskCategory": category,
        "userProfile": profile,
        "riskFactors": [f for d in domain_scores for f in d.risk_factors],
        "recommendations": generate_recommendations(category),
        "dailyPlan": daily_plan,
        "reportData": {
            "summary": {
                "totalHealthScore": str(composite.total_health_score),
                "controllableHealthScore": str(composite.controllable_score),
                "uncontrollableHealthScore": str(composite.uncontrollable_score),
                "overallRiskCategory": category,
                "userProfile": profile,
                "profileDescription": generate_profile_description(profile),
                "totalSections": len(domain_scores),
            },
            "sectionAnalysis": {
                "sectionScores": {
                    d.name: {"score": d.score, "factors": list(d.risk_factors)}
                    for d in domain_scores
                },
                "sectionSummaries": generate_section_summaries(domain_scores),
                "sectionBreakdown": [d.to_dict() for d in domain_scores],
            },
            "evidenceBasedRisk": evidence.to_dict(),
            "personalizedPlan": {
                "dailyPlan": daily_plan,
                "coachingFocus": generate_coaching_focus(category, domain_scores),
                "followUpTimeline": generate_follow_up_timeline(category),
            },
            "narrative": narrative,
        },
        "insights": insights_dict,
        "disclaimer": build_disclaimer(profile),
        "rulesetVersion": RULESET_VERSION,
    }
