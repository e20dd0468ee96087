"""
HealthRisk Answer Normalization

The only place raw answers are interpreted. Produces a new, fully-defaulted
AnswerSet consumed by every scoring stage.

DEFAULT POLICY:
- age: parsed to int, defaults to 30 when absent or unparsable
- bmi: weight(kg) / height(m)^2, computed only when both are positive numbers
- obesity: "Yes" iff computed bmi >= 30, "No" otherwise, absent without bmi
- every other field: passed through; absent means "rule does not match"
"""

import math
from typing import Any, Dict, Mapping, Optional

DEFAULT_AGE = 30
OBESITY_BMI = 30.0


def _parse_number(value: Any) -> Optional[float]:
    """Parse a numeric answer. Returns None for absent/blank/non-numeric input."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_age(value: Any) -> int:
    number = _parse_number(value)
    if number is None:
        return DEFAULT_AGE
    return int(number)


def compute_bmi(weight: Any, height: Any) -> Optional[float]:
    """BMI rounded to one decimal, or None if either input is missing."""
    w = _parse_number(weight)
    h = _parse_number(height)
    if w is None or h is None or w <= 0 or h <= 0:
        return None
    return round(w / (h * h), 1)


def normalize_answers(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Build the normalized AnswerSet.

    Never mutates `raw`. Blank strings are dropped so that they behave
    exactly like missing keys in every rule.
    """
    normalized: Dict[str, Any] = {}
    for key, value in raw.items():
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        if value is None:
            continue
        normalized[key] = value

    normalized["age"] = parse_age(raw.get("age"))

    # Derived fields are recomputed, never trusted from the caller
    normalized.pop("bmi", None)
    normalized.pop("obesity", None)
    bmi = compute_bmi(raw.get("weight"), raw.get("height"))
    if bmi is not None:
        normalized["bmi"] = bmi
        normalized["obesity"] = "Yes" if bmi >= OBESITY_BMI else "No"

    return normalized
