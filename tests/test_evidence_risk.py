"""
Tests for the Evidence-Based Risk Modeler
Covers factor emission, totals, the reduction cap and lifetime-risk tiers.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from healthrisk.assessment.evidence import (
    BASELINE_LIFETIME_RISK,
    MAX_MODIFIABLE_REDUCTION,
    lifetime_risk_for,
    model_evidence_based_risk,
)
from healthrisk.assessment.domains import FAMILY_FIRST_DEGREE, FAMILY_SECOND_DEGREE
from healthrisk.assessment.normalize import normalize_answers


def model(**answers):
    normalized = normalize_answers(answers)
    return model_evidence_based_risk(normalized, normalized["age"])


class TestUnmodifiableFactors:

    def test_empty_answers(self):
        risk = model()
        assert risk.unmodifiable == {}
        assert risk.modifiable == {}
        assert risk.unmodifiable_risk_total == 0
        assert risk.lifetime_risk.current_risk == "12%"

    def test_brca_dominates(self):
        risk = model(brca_test="BRCA1/2")
        assert risk.unmodifiable["brca_mutation"].percentage == 500
        assert risk.unmodifiable_risk_total == 500
        # 500 is not > 500
        assert risk.lifetime_risk.current_risk == "35%"

    def test_total_is_uncapped_sum(self):
        risk = model(
            age="55",
            brca_test="BRCA1/2",
            family_history=FAMILY_FIRST_DEGREE,
            chest_radiation="Yes",
            benign_condition="Yes, Atypical Hyperplasia (ADH/ALH)",
        )
        assert risk.unmodifiable_risk_total == 500 + 100 + 50 + 200 + 300
        assert risk.lifetime_risk.current_risk == "65%"

    def test_second_degree_family(self):
        risk = model(family_history=FAMILY_SECOND_DEGREE)
        assert "family_history_second_degree" in risk.unmodifiable
        assert "family_history_first_degree" not in risk.unmodifiable

    def test_age_brackets(self):
        assert "age_40_49" in model(age="45").unmodifiable
        assert "age_50_plus" in model(age="50").unmodifiable
        assert model(age="39").unmodifiable == {}

    def test_other_benign_condition(self):
        risk = model(benign_condition="Yes, complex/complicated cysts")
        assert risk.unmodifiable["benign_condition"].percentage == 50

    def test_serialized_shape(self):
        entry = model(dense_breast="Yes, I have dense breast tissue").to_dict()["riskFactors"]["unmodifiable"]["dense_breast"]
        assert entry["riskIncrease"] == "100%"
        assert set(entry) == {"factor", "riskIncrease", "description"}


class TestModifiableFactors:

    def test_alcohol_levels(self):
        assert model(alcohol="2 or more drinks").modifiable["alcohol"].percentage == 25
        assert model(alcohol="1 drink").modifiable["alcohol"].percentage == 10
        assert "alcohol" not in model(alcohol="None").modifiable

    def test_weight_from_bmi(self):
        assert model(weight="95", height="1.6").modifiable["weight"].percentage == 22
        assert model(weight="72", height="1.6").modifiable["weight"].percentage == 11

    def test_weight_from_self_report_without_bmi(self):
        assert model(weight_status="Obese").modifiable["weight"].percentage == 22

    def test_reduction_sum(self):
        risk = model(smoke="Yes", exercise="No, little or no regular exercise", night_shift="Yes")
        assert risk.modifiable_reduction_potential == 30 + 20 + 9

    def test_reduction_within_cap(self):
        risk = model(
            alcohol="2 or more drinks",
            exercise="No, little or no regular exercise",
            smoke="Yes",
            weight="110",
            height="1.6",
            western_diet="Yes, Western diet",
            chronic_stress="Yes, chronic high stress",
            hrt="Yes",
            oral_contraceptives="Yes, currently using",
            sugar_diet="Yes, high sugar diet",
            night_shift="Yes",
        )
        assert risk.modifiable_reduction_potential <= MAX_MODIFIABLE_REDUCTION
        assert risk.modifiable_reduction_potential == 173

    def test_serialized_key(self):
        entry = model(smoke="Yes").to_dict()["riskFactors"]["modifiable"]["smoking"]
        assert entry["riskReduction"] == "30%"


class TestLifetimeRiskTiers:

    @pytest.mark.parametrize("total,expected", [
        (0, "12%"), (50, "12%"), (51, "16%"), (100, "16%"), (101, "20%"),
        (200, "20%"), (201, "35%"), (500, "35%"), (501, "65%"),
    ])
    def test_tiers(self, total, expected):
        risk = lifetime_risk_for(total)
        assert risk.current_risk == expected
        assert risk.baseline == BASELINE_LIFETIME_RISK == "12%"
        assert risk.message
