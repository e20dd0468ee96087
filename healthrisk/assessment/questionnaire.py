"""
HealthRisk Questionnaire Schema
Version 1.0.0

Defines the versioned question vocabulary for frontend forms. Option values
are the exact answer labels the scoring rules compare against, so this
schema and the rule tables must change together.
"""

from typing import Any, Dict, FrozenSet, List

from ..config import RULESET_VERSION
from .domains import (
    CANCER_PATIENT,
    CANCER_SURVIVOR,
    CHRONIC_HIGH_STRESS,
    DENSE_TISSUE,
    FAMILY_BOTH,
    FAMILY_FIRST_DEGREE,
    FAMILY_SECOND_DEGREE,
    HIGH_ALCOHOL,
    SEDENTARY,
    WESTERN_DIET,
)


def _options(*labels: str) -> List[Dict[str, str]]:
    return [{"value": label, "label": label} for label in labels]


_YES_NO = ("Yes", "No")


QUESTIONNAIRE_SCHEMA: Dict[str, Any] = {
    "version": "1.0.0",
    "rulesetVersion": RULESET_VERSION,
    "description": "Breast health risk questionnaire",
    "questions": [
        # ===== DEMOGRAPHICS =====
        {
            "id": "age",
            "category": "demographics",
            "question": "What is your age?",
            "type": "number",
            "min": 20,
            "max": 80,
            "required": True,
        },
        {
            "id": "country",
            "category": "demographics",
            "question": "Which country do you live in?",
            "type": "select",
            "options": _options("United States", "Canada", "United Kingdom", "Australia", "Other"),
            "required": False,
        },
        {
            "id": "ethnicity",
            "category": "demographics",
            "question": "What is your ethnicity?",
            "type": "select",
            "options": _options("White (non-Hispanic)", "Black", "Asian", "Hispanic/Latino", "American Indian"),
            "required": False,
        },

        # ===== FAMILY HISTORY & GENETICS =====
        {
            "id": "family_history",
            "category": "family_history",
            "question": "Do you have a family history of breast cancer?",
            "type": "select",
            "options": _options(
                FAMILY_FIRST_DEGREE,
                FAMILY_SECOND_DEGREE,
                FAMILY_BOTH,
                "No, I do not have any relative with BC",
            ),
            "required": True,
        },
        {
            "id": "brca_test",
            "category": "family_history",
            "question": "Have you had a genetic test for BRCA1/2 mutations?",
            "type": "select",
            "options": _options("BRCA1/2", "No condition", "Not tested"),
            "required": False,
        },
        {
            "id": "early_onset_relative",
            "category": "family_history",
            "question": "Was any relative diagnosed with breast cancer before age 50?",
            "type": "select",
            "options": _options(*_YES_NO),
            "required": False,
        },
        {
            "id": "ashkenazi_ancestry",
            "category": "family_history",
            "question": "Do you have Ashkenazi Jewish ancestry?",
            "type": "select",
            "options": _options(*_YES_NO),
            "required": False,
        },
        {
            "id": "male_relative_bc",
            "category": "family_history",
            "question": "Has a male relative been diagnosed with breast cancer?",
            "type": "select",
            "options": _options(*_YES_NO),
            "required": False,
        },

        # ===== HORMONAL FACTORS =====
        {
            "id": "menstrual_age",
            "category": "hormonal",
            "question": "How old were you at your first period?",
            "type": "select",
            "options": _options("Before 12 years old", "12 years old or later"),
            "required": False,
        },
        {
            "id": "pregnancy_age",
            "category": "hormonal",
            "question": "How old were you at your first full-term pregnancy?",
            "type": "select",
            "options": _options("Never had a full-term pregnancy", "Age 30 or older", "Age 25-29", "Before age 25"),
            "required": False,
        },
        {
            "id": "breastfeeding",
            "category": "hormonal",
            "question": "Have you ever breastfed?",
            "type": "select",
            "options": _options(*_YES_NO),
            "required": False,
        },
        {
            "id": "oral_contraceptives",
            "category": "hormonal",
            "question": "Have you used hormonal contraception?",
            "type": "select",
            "options": _options("Yes, currently using", "Yes, used in the past", "No, never used"),
            "required": False,
        },
        {
            "id": "menopause",
            "category": "hormonal",
            "question": "Have you gone through menopause?",
            "type": "select",
            "options": _options("Yes, at age 55 or older", "Yes, before age 55", "Not yet"),
            "required": False,
        },
        {
            "id": "hrt",
            "category": "hormonal",
            "question": "Have you used combined hormone replacement therapy for more than 5 years?",
            "type": "select",
            "options": _options("Yes", "Yes, less than 5 years", "No"),
            "required": False,
        },

        # ===== PHYSICAL CHARACTERISTICS =====
        {
            "id": "weight",
            "category": "physical",
            "question": "What is your weight in kilograms?",
            "type": "number",
            "min": 25,
            "max": 300,
            "required": False,
        },
        {
            "id": "height",
            "category": "physical",
            "question": "What is your height in meters?",
            "type": "number",
            "min": 1.0,
            "max": 2.5,
            "required": False,
        },
        {
            "id": "weight_status",
            "category": "physical",
            "question": "How would you describe your weight?",
            "type": "select",
            "options": _options("Normal", "Overweight", "Obese"),
            "required": False,
        },
        {
            "id": "dense_breast",
            "category": "physical",
            "question": "Have you been told you have dense breast tissue?",
            "type": "select",
            "options": _options(DENSE_TISSUE, "No, I do not have dense breast tissue", "I don't know"),
            "required": False,
        },

        # ===== SCREENING =====
        {
            "id": "mammogram_frequency",
            "category": "screening",
            "question": "How often do you have a mammogram?",
            "type": "select",
            "options": _options("Annually", "Biennially", "Irregularly", "Never"),
            "required": False,
        },
        {
            "id": "last_screening",
            "category": "screening",
            "question": "When was your last breast screening?",
            "type": "select",
            "options": _options("Within the last year", "1-2 years ago", ">2 years ago", "Never"),
            "required": False,
        },

        # ===== MEDICAL HISTORY =====
        {
            "id": "benign_condition",
            "category": "medical_history",
            "question": "Have you been diagnosed with a benign breast condition?",
            "type": "select",
            "options": _options(
                "Yes, Atypical Hyperplasia (ADH/ALH)",
                "Yes, LCIS",
                "Yes, complex/complicated cysts",
                "Yes, other benign condition (fibroadenoma, simple cysts)",
                "No benign breast conditions",
            ),
            "required": False,
        },
        {
            "id": "cancer_history",
            "category": "medical_history",
            "question": "Have you been diagnosed with breast cancer?",
            "type": "select",
            "options": _options(CANCER_PATIENT, CANCER_SURVIVOR, "No diagnosed breast conditions"),
            "required": True,
        },
        {
            "id": "chest_radiation",
            "category": "medical_history",
            "question": "Did you receive radiation therapy to the chest before age 30?",
            "type": "select",
            "options": _options(*_YES_NO),
            "required": False,
        },
        {
            "id": "breast_biopsy",
            "category": "medical_history",
            "question": "Have you had a breast biopsy?",
            "type": "select",
            "options": _options(*_YES_NO),
            "required": False,
        },

        # ===== LIFESTYLE =====
        {
            "id": "western_diet",
            "category": "lifestyle",
            "question": "Do you follow a Western diet (processed foods, red meat, refined grains)?",
            "type": "select",
            "options": _options(
                WESTERN_DIET,
                "Yes, mixed diet (Western and non-Western)",
                "No, mostly non-Western diet",
            ),
            "required": False,
        },
        {
            "id": "smoke",
            "category": "lifestyle",
            "question": "Do you currently smoke?",
            "type": "select",
            "options": _options(*_YES_NO),
            "required": False,
        },
        {
            "id": "alcohol",
            "category": "lifestyle",
            "question": "How many alcoholic drinks do you have per day on average?",
            "type": "select",
            "options": _options(HIGH_ALCOHOL, "1 drink", "None"),
            "required": False,
        },
        {
            "id": "night_shift",
            "category": "lifestyle",
            "question": "Do you regularly work night shifts?",
            "type": "select",
            "options": _options(*_YES_NO),
            "required": False,
        },
        {
            "id": "chronic_stress",
            "category": "lifestyle",
            "question": "Do you experience chronic stress?",
            "type": "select",
            "options": _options(
                CHRONIC_HIGH_STRESS,
                "Yes, occasional moderate stress",
                "No, low or no chronic stress",
            ),
            "required": False,
        },
        {
            "id": "sugar_diet",
            "category": "lifestyle",
            "question": "How much added sugar is in your diet?",
            "type": "select",
            "options": _options(
                "Yes, high sugar diet",
                "Yes, moderate sugar diet",
                "No, low or no added sugar diet",
            ),
            "required": False,
        },
        {
            "id": "exercise",
            "category": "lifestyle",
            "question": "Do you exercise regularly?",
            "type": "select",
            "options": _options(
                "Yes, regular moderate to vigorous exercise",
                "Yes, occasional light exercise",
                SEDENTARY,
            ),
            "required": False,
        },
        {
            "id": "sleep_quality",
            "category": "lifestyle",
            "question": "How would you rate your sleep quality?",
            "type": "select",
            "options": _options("Good", "Fair", "Poor"),
            "required": False,
        },
    ],
}

QUESTION_KEYS: FrozenSet[str] = frozenset(q["id"] for q in QUESTIONNAIRE_SCHEMA["questions"])
