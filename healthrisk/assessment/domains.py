"""
HealthRisk Domain Scoring Functions

Six independent scorers, one rule table each. Weights and thresholds are
part of the versioned rule set (config.RULESET_VERSION); changing any of
them changes report output for identical answers.

FLOORS (LOCKED):
- Family History & Genetics clamps at 15, every other domain at 20.
"""

from typing import Any, Callable, Dict, List, Mapping, Tuple

from .models import Domain, DomainScore, DOMAIN_ORDER
from .rules import (
    Rule,
    RuleTable,
    absent,
    all_of,
    answer_is,
    answer_startswith,
    evaluate,
    number_above,
)


# ============================================
# ANSWER LABELS
# ============================================

FAMILY_FIRST_DEGREE = "Yes, I have first-degree relative with BC"
FAMILY_SECOND_DEGREE = "Yes, I have second-degree relative with BC"
FAMILY_BOTH = "Yes, I have both first-degree relative and second-degree relative with BC"

CANCER_PATIENT = "Yes, I am a Breast Cancer Patient currently undergoing treatment"
CANCER_SURVIVOR = "Yes, I am a Breast Cancer Survivor taking medication to lower the risk of recurrence"

SEDENTARY = "No, little or no regular exercise"
HIGH_ALCOHOL = "2 or more drinks"
CHRONIC_HIGH_STRESS = "Yes, chronic high stress"
WESTERN_DIET = "Yes, Western diet"
DENSE_TISSUE = "Yes, I have dense breast tissue"


# ============================================
# DEMOGRAPHICS
# ============================================

# (upper age bound exclusive, ceiling, factor label or None)
AGE_BRACKETS: List[Tuple[int, int, Any]] = [
    (40, 90, None),
    (50, 80, "Age 40-49 (risk begins to rise)"),
    (60, 70, "Age 50-59 (increased risk)"),
    (70, 60, "Age 60-69 (high age-related risk)"),
]
OLDEST_BRACKET = (50, "Age 70 or older (highest age-related risk)")

ETHNICITY_FACTORS: Dict[str, str] = {
    "White (non-Hispanic)": "White (non-Hispanic) ethnicity (higher overall incidence)",
    "Black": "Black ethnicity (higher risk of early, aggressive subtypes)",
    "Ashkenazi Jewish": "Ashkenazi Jewish ethnicity (higher BRCA carrier rate)",
}

DEMOGRAPHICS_TABLE = RuleTable(domain=Domain.DEMOGRAPHICS.value, rules=(), ceiling=90, floor=20)


def age_bracket(age: int) -> Tuple[int, Any]:
    """Return (ceiling, factor label) for an age."""
    for upper, ceiling, label in AGE_BRACKETS:
        if age < upper:
            return ceiling, label
    return OLDEST_BRACKET


def score_demographics(answers: Mapping[str, Any]) -> DomainScore:
    ceiling, age_label = age_bracket(answers["age"])
    factors = []
    if age_label:
        factors.append(age_label)
    ethnicity_label = ETHNICITY_FACTORS.get(answers.get("ethnicity"))
    if ethnicity_label is None and answers.get("ashkenazi_ancestry") == "Yes":
        ethnicity_label = ETHNICITY_FACTORS["Ashkenazi Jewish"]
    if ethnicity_label:
        factors.append(ethnicity_label)
    return evaluate(DEMOGRAPHICS_TABLE, answers, ceiling=ceiling, extra_factors=factors)


# ============================================
# FAMILY HISTORY & GENETICS
# ============================================

FAMILY_HISTORY_TABLE = RuleTable(
    domain=Domain.FAMILY_HISTORY.value,
    ceiling=95,
    floor=15,
    rules=(
        Rule(answer_is("brca_test", "BRCA1/2"), 40, "Confirmed BRCA1/2 genetic mutation"),
        Rule(answer_is("family_history", FAMILY_FIRST_DEGREE, FAMILY_BOTH), 25,
             "First-degree relative with breast cancer"),
        Rule(answer_is("family_history", FAMILY_SECOND_DEGREE, FAMILY_BOTH), 10,
             "Second-degree relative with breast cancer"),
        Rule(answer_is("early_onset_relative", "Yes"), 10, "Relative diagnosed before age 50"),
        Rule(answer_is("ashkenazi_ancestry", "Yes"), 5, "Ashkenazi Jewish ancestry"),
        Rule(answer_is("male_relative_bc", "Yes"), 5, "Male relative with breast cancer"),
    ),
)


def score_family_history(answers: Mapping[str, Any]) -> DomainScore:
    return evaluate(FAMILY_HISTORY_TABLE, answers)


# ============================================
# LIFESTYLE
# ============================================

LIFESTYLE_TABLE = RuleTable(
    domain=Domain.LIFESTYLE.value,
    rules=(
        Rule(answer_is("smoke", "Yes"), 15, "Current smoker"),
        Rule(answer_is("alcohol", HIGH_ALCOHOL), 20, "Heavy alcohol consumption (2+ drinks daily)"),
        Rule(answer_is("exercise", SEDENTARY), 25, "Sedentary lifestyle"),
        Rule(answer_is("western_diet", WESTERN_DIET), 10, "Western diet pattern"),
        Rule(answer_is("chronic_stress", CHRONIC_HIGH_STRESS), 15, "Chronic high stress"),
    ),
)


def score_lifestyle(answers: Mapping[str, Any]) -> DomainScore:
    return evaluate(LIFESTYLE_TABLE, answers)


# ============================================
# MEDICAL HISTORY
# ============================================

MEDICAL_HISTORY_TABLE = RuleTable(
    domain=Domain.MEDICAL_HISTORY.value,
    rules=(
        Rule(answer_is("cancer_history", CANCER_PATIENT), 40, "Currently undergoing breast cancer treatment"),
        Rule(answer_is("cancer_history", CANCER_SURVIVOR), 25, "Breast cancer survivor"),
        Rule(answer_startswith("benign_condition", "Yes"), 15, "History of benign breast condition"),
        Rule(answer_is("chest_radiation", "Yes"), 20, "Prior chest radiation therapy"),
        Rule(answer_is("breast_biopsy", "Yes"), 10, "Prior breast biopsy"),
    ),
)


def score_medical_history(answers: Mapping[str, Any]) -> DomainScore:
    return evaluate(MEDICAL_HISTORY_TABLE, answers)


# ============================================
# HORMONAL FACTORS
# ============================================

HORMONAL_TABLE = RuleTable(
    domain=Domain.HORMONAL.value,
    rules=(
        Rule(answer_is("hrt", "Yes"), 20, "Combined hormone therapy for more than 5 years"),
        Rule(answer_is("hrt", "Yes, less than 5 years"), 10, "Combined hormone therapy for less than 5 years"),
        Rule(answer_is("oral_contraceptives", "Yes, currently using"), 15, "Current hormonal contraception use"),
        Rule(answer_is("oral_contraceptives", "Yes, used in the past"), 5, "Past hormonal contraception use"),
        Rule(answer_is("menopause", "Yes, at age 55 or older"), 10, "Late menopause (55 or older)"),
        Rule(answer_is("menstrual_age", "Before 12 years old"), 10, "Early menarche (before age 12)"),
        Rule(answer_is("pregnancy_age", "Age 30 or older"), 10, "First full-term pregnancy at 30 or older"),
        Rule(answer_is("breastfeeding", "No"), 5, "Never breastfed"),
    ),
)


def score_hormonal(answers: Mapping[str, Any]) -> DomainScore:
    return evaluate(HORMONAL_TABLE, answers)


# ============================================
# PHYSICAL CHARACTERISTICS
# ============================================

PHYSICAL_TABLE = RuleTable(
    domain=Domain.PHYSICAL.value,
    rules=(
        Rule(answer_is("dense_breast", DENSE_TISSUE), 15, "Dense breast tissue"),
        Rule(number_above("bmi", 25), 10, "BMI above healthy range (over 25)"),
        Rule(number_above("bmi", 30), 10, "BMI in obese range (over 30)"),
        # Self-reported category only counts when BMI could not be computed
        Rule(all_of(absent("bmi"), answer_is("weight_status", "Overweight")), 10, "Self-reported overweight"),
        Rule(all_of(absent("bmi"), answer_is("weight_status", "Obese")), 20, "Self-reported obesity"),
    ),
)


def score_physical(answers: Mapping[str, Any]) -> DomainScore:
    return evaluate(PHYSICAL_TABLE, answers)


# ============================================
# REGISTRY
# ============================================

DOMAIN_SCORERS: Dict[Domain, Callable[[Mapping[str, Any]], DomainScore]] = {
    Domain.DEMOGRAPHICS: score_demographics,
    Domain.FAMILY_HISTORY: score_family_history,
    Domain.LIFESTYLE: score_lifestyle,
    Domain.MEDICAL_HISTORY: score_medical_history,
    Domain.HORMONAL: score_hormonal,
    Domain.PHYSICAL: score_physical,
}

DOMAIN_FLOORS: Dict[Domain, int] = {
    Domain.DEMOGRAPHICS: DEMOGRAPHICS_TABLE.floor,
    Domain.FAMILY_HISTORY: FAMILY_HISTORY_TABLE.floor,
    Domain.LIFESTYLE: LIFESTYLE_TABLE.floor,
    Domain.MEDICAL_HISTORY: MEDICAL_HISTORY_TABLE.floor,
    Domain.HORMONAL: HORMONAL_TABLE.floor,
    Domain.PHYSICAL: PHYSICAL_TABLE.floor,
}


def score_all_domains(answers: Mapping[str, Any]) -> List[DomainScore]:
    """Score every domain, in report order. `answers` must be normalized."""
    return [DOMAIN_SCORERS[domain](answers) for domain in DOMAIN_ORDER]
