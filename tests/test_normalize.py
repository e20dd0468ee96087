"""
Tests for Answer Normalization
Covers age defaulting, BMI derivation and input immutability.
"""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from healthrisk.assessment.normalize import (
    DEFAULT_AGE,
    compute_bmi,
    normalize_answers,
    parse_age,
)


class TestParseAge:
    """Tests for parse_age(value)"""

    def test_numeric_string(self):
        assert parse_age("42") == 42

    def test_integer(self):
        assert parse_age(55) == 55

    def test_float_truncates(self):
        assert parse_age(44.9) == 44

    def test_missing_defaults_to_30(self):
        assert parse_age(None) == DEFAULT_AGE == 30

    def test_unparsable_defaults_to_30(self):
        assert parse_age("forty") == 30
        assert parse_age("") == 30
        assert parse_age("   ") == 30

    def test_bool_is_not_an_age(self):
        assert parse_age(True) == 30


class TestComputeBmi:
    """Tests for compute_bmi(weight, height)"""

    def test_normal_bmi(self):
        # 70 / 1.75^2 = 22.857...
        assert compute_bmi(70, 1.75) == 22.9

    def test_string_inputs(self):
        assert compute_bmi("90", "1.6") == 35.2

    def test_missing_height(self):
        assert compute_bmi(70, None) is None

    def test_non_positive_values(self):
        assert compute_bmi(0, 1.7) is None
        assert compute_bmi(70, 0) is None
        assert compute_bmi(-70, 1.7) is None

    def test_garbage_input(self):
        assert compute_bmi("heavy", 1.7) is None

    def test_nan_rejected(self):
        assert compute_bmi(float("nan"), 1.7) is None


class TestNormalizeAnswers:
    """Tests for normalize_answers(raw)"""

    def test_does_not_mutate_input(self):
        raw = {"age": "45", "weight": "80", "height": "1.6"}
        snapshot = dict(raw)
        normalized = normalize_answers(raw)
        assert raw == snapshot
        assert normalized is not raw

    def test_age_always_present(self):
        assert normalize_answers({})["age"] == 30

    def test_obesity_flag_from_bmi(self):
        normalized = normalize_answers({"weight": 95, "height": 1.6})
        assert normalized["bmi"] == 37.1
        assert normalized["obesity"] == "Yes"

    def test_not_obese(self):
        normalized = normalize_answers({"weight": 60, "height": 1.7})
        assert normalized["obesity"] == "No"

    def test_obesity_boundary_is_inclusive(self):
        # 76.8 / 1.6^2 = 30.0
        normalized = normalize_answers({"weight": 76.8, "height": 1.6})
        assert normalized["bmi"] == 30.0
        assert normalized["obesity"] == "Yes"

    def test_no_bmi_without_both_inputs(self):
        normalized = normalize_answers({"weight": 70})
        assert "bmi" not in normalized
        assert "obesity" not in normalized

    def test_caller_supplied_bmi_is_ignored(self):
        normalized = normalize_answers({"bmi": 45, "obesity": "Yes"})
        assert "bmi" not in normalized
        assert "obesity" not in normalized

    def test_blank_strings_dropped(self):
        normalized = normalize_answers({"smoke": "  ", "alcohol": None, "exercise": "Yes, occasional light exercise"})
        assert "smoke" not in normalized
        assert "alcohol" not in normalized
        assert normalized["exercise"] == "Yes, occasional light exercise"

    def test_deterministic(self):
        raw = {"age": "50", "weight": "70", "height": "1.65", "smoke": "Yes"}
        assert normalize_answers(raw) == normalize_answers(raw)
