"""
Tests for the Composite Aggregator
Covers rounding, category boundaries and user profile selection.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from healthrisk.assessment.aggregate import (
    aggregate,
    classify_risk_category,
    determine_user_profile,
    round_half_up,
)
from healthrisk.assessment.domains import CANCER_PATIENT, CANCER_SURVIVOR, score_all_domains
from healthrisk.assessment.models import DomainScore, RiskLevel, UserProfile
from healthrisk.assessment.normalize import normalize_answers
from healthrisk.assessment.rules import classify_risk_level


def make_scores(demo, family, lifestyle, medical, hormonal, physical):
    values = [
        ("Demographics", demo),
        ("Family History & Genetics", family),
        ("Lifestyle", lifestyle),
        ("Medical History", medical),
        ("Hormonal Factors", hormonal),
        ("Physical Characteristics", physical),
    ]
    return [
        DomainScore(name=name, score=score, factor_count=0, risk_level=classify_risk_level(score))
        for name, score in values
    ]


class TestRoundHalfUp:

    def test_half_rounds_up(self):
        assert round_half_up(82.5) == 83
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3

    def test_below_half_rounds_down(self):
        assert round_half_up(82.4) == 82


class TestClassifyRiskCategory:
    """Boundaries 19,20,39,40,59,60 -> low, moderate, moderate, high, high, high"""

    @pytest.mark.parametrize("total,expected", [
        (0, RiskLevel.LOW),
        (19, RiskLevel.LOW),
        (20, RiskLevel.MODERATE),
        (39, RiskLevel.MODERATE),
        (40, RiskLevel.HIGH),
        (59, RiskLevel.HIGH),
        (60, RiskLevel.HIGH),
        (100, RiskLevel.HIGH),
    ])
    def test_boundaries(self, total, expected):
        assert classify_risk_category(total) == expected


class TestAggregate:

    def test_means(self):
        composite = aggregate(make_scores(90, 95, 100, 100, 100, 100), {"age": 30})
        # uncontrollable = (90 + 95 + 100) / 3 = 95
        assert composite.uncontrollable_score == 95
        assert composite.controllable_score == 100
        # (100 + 95) / 2 = 97.5 -> 98
        assert composite.total_health_score == 98

    def test_controllable_rounding(self):
        composite = aggregate(make_scores(90, 95, 75, 100, 80, 90), {"age": 30})
        # (75 + 80 + 90) / 3 = 81.67 -> 82
        assert composite.controllable_score == 82

    def test_total_within_bounds(self):
        composite = aggregate(make_scores(20, 15, 20, 20, 20, 20), {"age": 30})
        assert 0 <= composite.total_health_score <= 100
        # (18.33 -> 18, 20) -> 19
        assert composite.total_health_score == 19
        assert composite.risk_category == RiskLevel.LOW

    def test_missing_domain_raises(self):
        with pytest.raises(ValueError):
            aggregate(make_scores(90, 95, 100, 100, 100, 100)[:5], {"age": 30})

    def test_from_real_scores(self):
        answers = normalize_answers({"age": "42"})
        composite = aggregate(score_all_domains(answers), answers)
        # uncontrollable (80+95+100)/3 = 91.67 -> 92, controllable 100, total 96
        assert composite.uncontrollable_score == 92
        assert composite.total_health_score == 96
        assert composite.user_profile == UserProfile.PREMENOPAUSAL


class TestUserProfile:

    def test_current_patient_wins(self):
        assert determine_user_profile({"age": 17, "cancer_history": CANCER_PATIENT}) == UserProfile.CURRENT_PATIENT

    def test_survivor(self):
        assert determine_user_profile({"age": 60, "cancer_history": CANCER_SURVIVOR}) == UserProfile.SURVIVOR

    def test_teenager(self):
        assert determine_user_profile({"age": 19}) == UserProfile.TEENAGER

    def test_postmenopausal_by_age(self):
        assert determine_user_profile({"age": 56}) == UserProfile.POSTMENOPAUSAL
        assert determine_user_profile({"age": 55}) == UserProfile.PREMENOPAUSAL

    def test_postmenopausal_by_menopause_answer(self):
        assert determine_user_profile({"age": 50, "menopause": "Yes, before age 55"}) == UserProfile.POSTMENOPAUSAL
        assert determine_user_profile({"age": 50, "menopause": "Not yet"}) == UserProfile.PREMENOPAUSAL
