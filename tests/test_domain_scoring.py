"""
HealthRisk Domain Scoring - Regression Tests
============================================
Test Categories:
1. Per-domain penalties and labels
2. Floors and ceilings
3. Missing-field policy
4. Monotonicity and determinism
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from healthrisk.assessment.models import Domain, RiskLevel
from healthrisk.assessment.normalize import normalize_answers
from healthrisk.assessment.rules import classify_risk_level
from healthrisk.assessment.domains import (
    CANCER_PATIENT,
    CANCER_SURVIVOR,
    DOMAIN_FLOORS,
    FAMILY_BOTH,
    FAMILY_FIRST_DEGREE,
    FAMILY_SECOND_DEGREE,
    score_all_domains,
    score_demographics,
    score_family_history,
    score_hormonal,
    score_lifestyle,
    score_medical_history,
    score_physical,
)


# ============================================================
# FIXTURES
# ============================================================

def n(**answers):
    """Normalized answers from keyword arguments."""
    return normalize_answers(answers)


@pytest.fixture
def worst_case():
    return n(
        age="75",
        ethnicity="White (non-Hispanic)",
        brca_test="BRCA1/2",
        family_history=FAMILY_BOTH,
        early_onset_relative="Yes",
        ashkenazi_ancestry="Yes",
        male_relative_bc="Yes",
        smoke="Yes",
        alcohol="2 or more drinks",
        exercise="No, little or no regular exercise",
        western_diet="Yes, Western diet",
        chronic_stress="Yes, chronic high stress",
        cancer_history=CANCER_PATIENT,
        benign_condition="Yes, LCIS",
        chest_radiation="Yes",
        breast_biopsy="Yes",
        hrt="Yes",
        oral_contraceptives="Yes, currently using",
        menopause="Yes, at age 55 or older",
        menstrual_age="Before 12 years old",
        pregnancy_age="Age 30 or older",
        breastfeeding="No",
        dense_breast="Yes, I have dense breast tissue",
        weight="110",
        height="1.6",
    )


# ============================================================
# TEST: RISK LEVEL CLASSIFICATION
# ============================================================

class TestRiskLevel:
    """Tests for classify_risk_level(score)"""

    def test_thresholds(self):
        assert classify_risk_level(100) == RiskLevel.LOW
        assert classify_risk_level(80) == RiskLevel.LOW
        assert classify_risk_level(79) == RiskLevel.MODERATE
        assert classify_risk_level(60) == RiskLevel.MODERATE
        assert classify_risk_level(59) == RiskLevel.HIGH
        assert classify_risk_level(15) == RiskLevel.HIGH


# ============================================================
# TEST: DEMOGRAPHICS
# ============================================================

class TestDemographics:

    @pytest.mark.parametrize("age,expected", [
        ("25", 90), ("39", 90), ("40", 80), ("49", 80),
        ("50", 70), ("59", 70), ("60", 60), ("69", 60), ("70", 50), ("85", 50),
    ])
    def test_ceiling_by_age_bracket(self, age, expected):
        assert score_demographics(n(age=age)).score == expected

    def test_missing_age_defaults_to_30(self):
        result = score_demographics(n())
        assert result.score == 90
        assert result.risk_factors == []

    def test_age_label_from_40(self):
        result = score_demographics(n(age="45"))
        assert result.factor_count == 1
        assert "Age 40-49" in result.risk_factors[0]

    def test_ethnicity_label(self):
        result = score_demographics(n(age="30", ethnicity="Black"))
        assert result.score == 90
        assert result.factor_count == 1

    def test_ashkenazi_ancestry_label(self):
        result = score_demographics(n(age="30", ashkenazi_ancestry="Yes"))
        assert any("Ashkenazi" in f for f in result.risk_factors)

    def test_unlisted_ethnicity_no_label(self):
        assert score_demographics(n(ethnicity="Asian")).factor_count == 0


# ============================================================
# TEST: FAMILY HISTORY & GENETICS
# ============================================================

class TestFamilyHistory:

    def test_no_history_is_ceiling(self):
        assert score_family_history(n()).score == 95

    def test_first_degree(self):
        assert score_family_history(n(family_history=FAMILY_FIRST_DEGREE)).score == 70

    def test_second_degree(self):
        assert score_family_history(n(family_history=FAMILY_SECOND_DEGREE)).score == 85

    def test_both_matches_first_and_second(self):
        result = score_family_history(n(family_history=FAMILY_BOTH))
        assert result.score == 60
        assert result.factor_count == 2

    def test_brca(self):
        result = score_family_history(n(brca_test="BRCA1/2"))
        assert result.score == 55
        assert result.risk_level == RiskLevel.HIGH

    def test_floor_is_15(self, worst_case):
        # 95 - 40 - 25 - 10 - 10 - 5 - 5 = 0 -> clamped
        result = score_family_history(worst_case)
        assert result.score == 15
        assert result.factor_count == 6


# ============================================================
# TEST: LIFESTYLE
# ============================================================

class TestLifestyle:

    def test_clean_lifestyle(self):
        result = score_lifestyle(n(smoke="No", alcohol="None", exercise="Yes, regular moderate to vigorous exercise"))
        assert result.score == 100
        assert result.risk_level == RiskLevel.LOW

    def test_smoking_lowers_by_exactly_15(self):
        base = {"alcohol": "1 drink", "exercise": "Yes, occasional light exercise"}
        without = score_lifestyle(n(smoke="No", **base)).score
        with_smoke = score_lifestyle(n(smoke="Yes", **base)).score
        assert without - with_smoke == 15

    def test_all_penalties(self, worst_case):
        # 100 - 15 - 20 - 25 - 10 - 15 = 15 -> floor 20
        assert score_lifestyle(worst_case).score == 20

    def test_partial(self):
        result = score_lifestyle(n(exercise="No, little or no regular exercise", chronic_stress="Yes, chronic high stress"))
        assert result.score == 60
        assert result.risk_level == RiskLevel.MODERATE
        assert "Chronic high stress" in result.risk_factors


# ============================================================
# TEST: MEDICAL HISTORY
# ============================================================

class TestMedicalHistory:

    def test_current_patient(self):
        assert score_medical_history(n(cancer_history=CANCER_PATIENT)).score == 60

    def test_survivor(self):
        assert score_medical_history(n(cancer_history=CANCER_SURVIVOR)).score == 75

    def test_any_benign_condition(self):
        assert score_medical_history(n(benign_condition="Yes, complex/complicated cysts")).score == 85
        assert score_medical_history(n(benign_condition="No benign breast conditions")).score == 100

    def test_floor(self, worst_case):
        # 100 - 40 - 15 - 20 - 10 = 15 -> 20
        assert score_medical_history(worst_case).score == 20


# ============================================================
# TEST: HORMONAL FACTORS
# ============================================================

class TestHormonal:

    def test_long_hrt(self):
        assert score_hormonal(n(hrt="Yes")).score == 80

    def test_short_hrt(self):
        assert score_hormonal(n(hrt="Yes, less than 5 years")).score == 90

    def test_contraception(self):
        assert score_hormonal(n(oral_contraceptives="Yes, currently using")).score == 85
        assert score_hormonal(n(oral_contraceptives="Yes, used in the past")).score == 95

    def test_all_penalties(self, worst_case):
        # 100 - 20 - 15 - 10 - 10 - 10 - 5 = 30
        result = score_hormonal(worst_case)
        assert result.score == 30
        assert result.factor_count == 6


# ============================================================
# TEST: PHYSICAL CHARACTERISTICS
# ============================================================

class TestPhysical:

    def test_healthy_bmi(self):
        assert score_physical(n(weight="60", height="1.7")).score == 100

    def test_overweight_bmi(self):
        # 72 / 1.6^2 = 28.1
        assert score_physical(n(weight="72", height="1.6")).score == 90

    def test_obese_bmi_stacks(self):
        # 90 / 1.6^2 = 35.2
        assert score_physical(n(weight="90", height="1.6")).score == 80

    def test_bmi_exactly_25_not_penalized(self):
        # 64 / 1.6^2 = 25.0
        assert score_physical(n(weight="64", height="1.6")).score == 100

    def test_self_reported_only_without_bmi(self):
        assert score_physical(n(weight_status="Obese")).score == 80
        assert score_physical(n(weight_status="Overweight")).score == 90

    def test_self_reported_ignored_with_bmi(self):
        assert score_physical(n(weight_status="Obese", weight="60", height="1.7")).score == 100

    def test_dense_and_obese(self, worst_case):
        # 100 - 15 - 10 - 10 = 65
        assert score_physical(worst_case).score == 65


# ============================================================
# TEST: ALL DOMAINS
# ============================================================

class TestAllDomains:

    def test_order_and_count(self):
        scores = score_all_domains(n())
        assert [s.name for s in scores] == [
            Domain.DEMOGRAPHICS.value,
            Domain.FAMILY_HISTORY.value,
            Domain.LIFESTYLE.value,
            Domain.MEDICAL_HISTORY.value,
            Domain.HORMONAL.value,
            Domain.PHYSICAL.value,
        ]

    def test_empty_answers_neutral(self):
        scores = {s.name: s.score for s in score_all_domains(n())}
        assert scores == {
            "Demographics": 90,
            "Family History & Genetics": 95,
            "Lifestyle": 100,
            "Medical History": 100,
            "Hormonal Factors": 100,
            "Physical Characteristics": 100,
        }

    def test_bounds(self, worst_case):
        for domain_score in score_all_domains(worst_case):
            floor = DOMAIN_FLOORS[Domain(domain_score.name)]
            assert floor <= domain_score.score <= 100
            assert domain_score.factor_count == len(domain_score.risk_factors)

    def test_deterministic(self, worst_case):
        assert score_all_domains(worst_case) == score_all_domains(worst_case)

    def test_unknown_labels_ignored(self):
        scores = score_all_domains(n(smoke="Sometimes", alcohol="lots", family_history="Maybe"))
        assert {s.name: s.score for s in scores}["Lifestyle"] == 100
