"""
HealthRisk Report Disclaimer
Locked copy attached to every generated report.

RULES (LOCKED):
1. The disclaimer is versioned; any wording change bumps DISCLAIMER_VERSION.
2. Reports for current patients and survivors get the care-team addendum.
"""

from typing import Dict

DISCLAIMER_VERSION = "disclaimer_v1.0"

NOT_MEDICAL_ADVICE = (
    "This assessment is not medical advice and is not a diagnosis. "
    "Scores come from a fixed educational rule set, not a clinically "
    "validated prediction model. Discuss any concern with a healthcare provider."
)

CARE_TEAM_ADDENDUM = (
    "You reported a current or past breast cancer diagnosis. "
    "Follow your oncology care team's guidance over anything in this report."
)


def build_disclaimer(user_profile: str) -> Dict[str, str]:
    """
    Return the disclaimer block for a report.

    Example:
        >>> build_disclaimer("premenopausal")["text"].startswith("This assessment")
        True
    """
    text = NOT_MEDICAL_ADVICE
    if user_profile in ("current_patient", "survivor"):
        text = f"{NOT_MEDICAL_ADVICE} {CARE_TEAM_ADDENDUM}"
    return {"text": text, "version": DISCLAIMER_VERSION}
