"""
HealthRisk Evidence-Based Risk Modeler

Maps recognized answers to literature-derived relative risk figures.

- Unmodifiable factors carry a relative risk INCREASE (percent over baseline).
- Modifiable factors carry the REDUCTION achievable by changing the behavior.

The unmodifiable total is an uncapped sum and selects a lifetime-risk tier.
The modifiable total is capped at MAX_MODIFIABLE_REDUCTION.

These figures are educational summaries of published cohort data. They are
added, not multiplied, and must not be read as a fitted model.
"""

from typing import Any, Dict, List, Mapping, Optional, Tuple

from .models import EvidenceBasedRisk, EvidenceFactor, LifetimeRisk
from .domains import (
    DENSE_TISSUE,
    FAMILY_BOTH,
    FAMILY_FIRST_DEGREE,
    FAMILY_SECOND_DEGREE,
    HIGH_ALCOHOL,
    SEDENTARY,
    CHRONIC_HIGH_STRESS,
    WESTERN_DIET,
)

MAX_MODIFIABLE_REDUCTION = 250
BASELINE_LIFETIME_RISK = "12%"

# (exclusive lower bound on unmodifiable total, lifetime risk, message)
LIFETIME_RISK_TIERS: List[Tuple[int, str, str]] = [
    (500, "65%", "Your inherited and biological factors place you in a very high risk group. "
                 "Specialist follow-up and enhanced screening are strongly advised."),
    (200, "35%", "Your risk is substantially above average. "
                 "Discuss enhanced screening options with your doctor."),
    (100, "20%", "Your risk is above average. Regular screening and risk reduction matter."),
    (50, "16%", "Your risk is slightly above average. Healthy habits can offset part of it."),
]
BASELINE_MESSAGE = "Your risk is close to the average lifetime risk for women."


def _factor(factor_id: str, factor: str, percentage: int, description: str, modifiable: bool) -> EvidenceFactor:
    return EvidenceFactor(
        factor_id=factor_id,
        factor=factor,
        percentage=percentage,
        description=description,
        modifiable=modifiable,
    )


# ============================================
# UNMODIFIABLE FACTORS
# ============================================

def _unmodifiable_factors(answers: Mapping[str, Any], age: int) -> List[EvidenceFactor]:
    factors: List[EvidenceFactor] = []

    if answers.get("brca_test") == "BRCA1/2":
        factors.append(_factor(
            "brca_mutation", "BRCA1/2 genetic mutation", 500,
            "Carriers face a 45-72% lifetime risk compared with about 12% on average.", False))

    family = answers.get("family_history")
    if family in (FAMILY_FIRST_DEGREE, FAMILY_BOTH):
        factors.append(_factor(
            "family_history_first_degree", "First-degree family history", 100,
            "A mother, sister or daughter with breast cancer roughly doubles risk.", False))
    elif family == FAMILY_SECOND_DEGREE:
        factors.append(_factor(
            "family_history_second_degree", "Second-degree family history", 50,
            "An aunt, grandmother or niece with breast cancer moderately increases risk.", False))

    if age >= 50:
        factors.append(_factor(
            "age_50_plus", "Age 50 or older", 50,
            "Most breast cancers are diagnosed after age 50.", False))
    elif age >= 40:
        factors.append(_factor(
            "age_40_49", "Age 40-49", 25,
            "Risk begins to rise noticeably in the forties.", False))

    if answers.get("dense_breast") == DENSE_TISSUE:
        factors.append(_factor(
            "dense_breast", "Dense breast tissue", 100,
            "Extremely dense tissue is linked to about twice the risk and can hide tumors on mammograms.", False))

    benign = answers.get("benign_condition")
    if isinstance(benign, str) and benign.startswith("Yes"):
        if "Atypical" in benign or "LCIS" in benign:
            factors.append(_factor(
                "atypical_hyperplasia", "Atypical hyperplasia or LCIS", 300,
                "These high-risk lesions increase risk about four-fold.", False))
        else:
            factors.append(_factor(
                "benign_condition", "Benign breast condition", 50,
                "Some proliferative benign conditions modestly increase risk.", False))

    if answers.get("menstrual_age") == "Before 12 years old":
        factors.append(_factor(
            "early_menarche", "Early first period (before 12)", 20,
            "Longer lifetime estrogen exposure slightly increases risk.", False))

    if answers.get("menopause") == "Yes, at age 55 or older":
        factors.append(_factor(
            "late_menopause", "Late menopause (55 or older)", 30,
            "Each additional year of menstruation adds to estrogen exposure.", False))

    if answers.get("pregnancy_age") == "Age 30 or older":
        factors.append(_factor(
            "late_first_pregnancy", "First pregnancy at 30 or older", 30,
            "A later first full-term pregnancy is associated with higher risk.", False))

    if answers.get("chest_radiation") == "Yes":
        factors.append(_factor(
            "chest_radiation", "Chest radiation before age 30", 200,
            "Radiation to the chest at a young age substantially increases risk.", False))

    return factors


# ============================================
# MODIFIABLE FACTORS
# ============================================

def _modifiable_factors(answers: Mapping[str, Any]) -> List[EvidenceFactor]:
    factors: List[EvidenceFactor] = []

    alcohol = answers.get("alcohol")
    if alcohol == HIGH_ALCOHOL:
        factors.append(_factor(
            "alcohol", "Reduce alcohol (2+ drinks daily)", 25,
            "Each daily drink adds about 7-10% risk; cutting back removes most of it.", True))
    elif alcohol == "1 drink":
        factors.append(_factor(
            "alcohol", "Reduce alcohol (1 drink daily)", 10,
            "Even one drink a day raises risk slightly.", True))

    exercise = answers.get("exercise")
    if exercise == SEDENTARY:
        factors.append(_factor(
            "exercise", "Start regular exercise", 20,
            "150 minutes of moderate activity weekly lowers risk by up to 20%.", True))
    elif exercise == "Yes, occasional light exercise":
        factors.append(_factor(
            "exercise", "Increase exercise intensity", 10,
            "Moving from light to moderate activity adds further protection.", True))

    if answers.get("smoke") == "Yes":
        factors.append(_factor(
            "smoking", "Quit smoking", 30,
            "Smoking, especially started young, is linked to higher breast cancer risk.", True))

    weight_factor = _weight_factor(answers)
    if weight_factor is not None:
        factors.append(weight_factor)

    diet = answers.get("western_diet")
    if diet == WESTERN_DIET:
        factors.append(_factor(
            "diet", "Shift to a Mediterranean-style diet", 18,
            "Plant-rich diets with olive oil are linked to lower risk.", True))
    elif isinstance(diet, str) and diet.startswith("Yes, mixed"):
        factors.append(_factor(
            "diet", "Reduce processed foods", 9,
            "Cutting processed meat and refined foods adds modest protection.", True))

    stress = answers.get("chronic_stress")
    if stress == CHRONIC_HIGH_STRESS:
        factors.append(_factor(
            "stress", "Manage chronic stress", 12,
            "Chronic stress disrupts hormones and sleep; daily practice helps.", True))
    elif stress == "Yes, occasional moderate stress":
        factors.append(_factor(
            "stress", "Build stress resilience", 6,
            "Regular relaxation practice keeps moderate stress in check.", True))

    hrt = answers.get("hrt")
    if hrt in ("Yes", "Yes, less than 5 years"):
        factors.append(_factor(
            "hrt", "Review hormone therapy with your doctor", 20,
            "Combined hormone therapy increases risk; it falls after stopping.", True))

    if answers.get("oral_contraceptives") == "Yes, currently using":
        factors.append(_factor(
            "oral_contraceptives", "Review hormonal contraception", 7,
            "Current use slightly raises risk; it returns to baseline after stopping.", True))

    if answers.get("sugar_diet") == "Yes, high sugar diet":
        factors.append(_factor(
            "sugar", "Cut added sugar", 10,
            "High sugar intake drives insulin and weight gain.", True))

    if answers.get("night_shift") == "Yes":
        factors.append(_factor(
            "night_shift", "Protect your sleep rhythm", 9,
            "Night shift work disrupts melatonin; consistent sleep helps.", True))

    return factors


def _weight_factor(answers: Mapping[str, Any]) -> Optional[EvidenceFactor]:
    bmi = answers.get("bmi")
    if bmi is not None:
        obese = bmi >= 30
        overweight = bmi > 25
    else:
        status = answers.get("weight_status")
        obese = status == "Obese"
        overweight = status == "Overweight"

    if obese:
        return _factor(
            "weight", "Reach a healthy weight", 22,
            "Obesity after menopause raises risk through extra estrogen from fat tissue.", True)
    if overweight:
        return _factor(
            "weight", "Reduce excess weight", 11,
            "Even modest weight loss lowers post-menopausal risk.", True)
    return None


# ============================================
# MODEL
# ============================================

def lifetime_risk_for(unmodifiable_total: int) -> LifetimeRisk:
    for lower_bound, current_risk, message in LIFETIME_RISK_TIERS:
        if unmodifiable_total > lower_bound:
            return LifetimeRisk(current_risk=current_risk, baseline=BASELINE_LIFETIME_RISK, message=message)
    return LifetimeRisk(
        current_risk=BASELINE_LIFETIME_RISK,
        baseline=BASELINE_LIFETIME_RISK,
        message=BASELINE_MESSAGE,
    )


def model_evidence_based_risk(answers: Mapping[str, Any], age: int) -> EvidenceBasedRisk:
    """
    Build the evidence-based risk breakdown from normalized answers.

    Each factor id appears at most once per side.
    """
    unmodifiable: Dict[str, EvidenceFactor] = {f.factor_id: f for f in _unmodifiable_factors(answers, age)}
    modifiable: Dict[str, EvidenceFactor] = {f.factor_id: f for f in _modifiable_factors(answers)}

    unmodifiable_total = sum(f.percentage for f in unmodifiable.values())
    reduction = min(MAX_MODIFIABLE_REDUCTION, sum(f.percentage for f in modifiable.values()))

    return EvidenceBasedRisk(
        unmodifiable=unmodifiable,
        modifiable=modifiable,
        unmodifiable_risk_total=unmodifiable_total,
        modifiable_reduction_potential=reduction,
        lifetime_risk=lifetime_risk_for(unmodifiable_total),
    )
