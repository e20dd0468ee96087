"""
HealthRisk Insight/Finding Selector

Detects finding codes from normalized answers and selects static content:
- evidence badges: first 3 active findings
- pain points: first 2 active findings that have pain-point content
- urgency: additive score, urgent when > URGENT_THRESHOLD
- improvement potential: capped at content.IMPROVEMENT_CAP
- quick wins, expert videos, daily tips: max 3 each

Selection is deterministic: findings are always walked in FINDING_PRIORITY
order and content lists in declaration order.
"""

from typing import Any, Dict, List, Mapping, Optional, Sequence

from .models import FINDING_PRIORITY, FindingCode, Insights
from .content import (
    DAILY_TIPS,
    DEFAULT_QUICK_WINS,
    EVIDENCE_BADGES,
    EXPERT_VIDEOS,
    FINDING_CATEGORIES,
    GENERAL_CATEGORIES,
    IMPROVEMENT_AREAS,
    IMPROVEMENT_CAP,
    IMPROVEMENT_ORDER,
    PAIN_POINTS,
    QUICK_WIN_DAYS,
    QUICK_WIN_META,
)
from .domains import CHRONIC_HIGH_STRESS, DENSE_TISSUE, HIGH_ALCOHOL, SEDENTARY, WESTERN_DIET

MAX_EVIDENCE_BADGES = 3
MAX_PAIN_POINTS = 2
MAX_QUICK_WINS = 3
MAX_EXPERT_VIDEOS = 3
MAX_DAILY_TIPS = 3

URGENT_THRESHOLD = 50
SCREENING_AGE = 40
OVERDUE_SCREENING_ANSWERS = ("Never", ">2 years ago")
OVERDUE_FREQUENCY_ANSWERS = ("Irregularly", "Never")


# ============================================
# FINDING DETECTION
# ============================================

def _starts_with_yes(value: Any) -> bool:
    return isinstance(value, str) and value.startswith("Yes")


def is_screening_overdue(answers: Mapping[str, Any]) -> bool:
    """
    Overdue from 40 onwards. `last_screening` wins when answered; otherwise
    the mammogram frequency question decides. With neither answered the
    screening is treated as overdue.
    """
    if answers.get("age", 30) < SCREENING_AGE:
        return False
    last = answers.get("last_screening")
    if last is not None:
        return last in OVERDUE_SCREENING_ANSWERS
    frequency = answers.get("mammogram_frequency")
    if frequency is not None:
        return frequency in OVERDUE_FREQUENCY_ANSWERS
    return True


_FINDING_TRIGGERS = {
    FindingCode.FAMILY_HISTORY: lambda a: (
        _starts_with_yes(a.get("family_history")) or a.get("brca_test") == "BRCA1/2"
    ),
    FindingCode.LOW_EXERCISE: lambda a: a.get("exercise") == SEDENTARY,
    FindingCode.ALCOHOL_HIGH: lambda a: a.get("alcohol") == HIGH_ALCOHOL,
    FindingCode.DENSE_BREAST: lambda a: a.get("dense_breast") == DENSE_TISSUE,
    FindingCode.HIGH_STRESS: lambda a: a.get("chronic_stress") == CHRONIC_HIGH_STRESS,
    FindingCode.POOR_DIET: lambda a: (
        a.get("western_diet") == WESTERN_DIET or a.get("sugar_diet") == "Yes, high sugar diet"
    ),
    FindingCode.POOR_SLEEP: lambda a: a.get("night_shift") == "Yes" or a.get("sleep_quality") == "Poor",
    FindingCode.OVERDUE_SCREENING: is_screening_overdue,
}


def detect_findings(answers: Mapping[str, Any]) -> List[FindingCode]:
    """Active finding codes in priority order."""
    return [code for code in FINDING_PRIORITY if _FINDING_TRIGGERS[code](answers)]


# ============================================
# URGENCY
# ============================================

def _overdue_months(answers: Mapping[str, Any]) -> Optional[int]:
    """
    Months since the last screening, only known for ">2 years ago".

    "Never", an irregular frequency or a missing answer are still overdue,
    but there is no previous screening to count from, so this is None and
    the UI shows the overdue finding without a month count.
    """
    if answers.get("last_screening") == ">2 years ago":
        return 24
    return None


def compute_urgency(answers: Mapping[str, Any], findings: Sequence[FindingCode]) -> Dict[str, Any]:
    score = 0
    if FindingCode.OVERDUE_SCREENING in findings:
        score += 40
    if FindingCode.FAMILY_HISTORY in findings:
        score += 30
    if len(findings) >= 3:
        score += 20
    if answers.get("age", 30) > 45:
        score += 10

    urgent = score > URGENT_THRESHOLD

    if FindingCode.OVERDUE_SCREENING in findings:
        primary_concern = "Schedule your overdue screening"
    elif FindingCode.FAMILY_HISTORY in findings:
        primary_concern = "Discuss your family history with a doctor"
    elif findings:
        primary_concern = "Start with small lifestyle changes"
    else:
        primary_concern = "Keep up your healthy habits"

    return {
        "has_urgent_issues": urgent,
        "urgency_score": score,
        "overdue_months": _overdue_months(answers),
        "primary_concern": primary_concern,
        "timeline_message": (
            "Consider scheduling health appointments soon"
            if urgent else "Build healthy habits at your own pace"
        ),
        "next_7_days": build_quick_wins(findings),
    }


def build_quick_wins(findings: Sequence[FindingCode]) -> List[Dict[str, str]]:
    """Micro-actions of active findings, padded from the default list."""
    actions: List[Dict[str, str]] = []
    for code in findings:
        pain = PAIN_POINTS.get(code)
        if pain is None:
            continue
        actions.append({"action": pain["micro_action"], **QUICK_WIN_META[code]})

    for default in DEFAULT_QUICK_WINS:
        if len(actions) >= MAX_QUICK_WINS:
            break
        if all(a["action"] != default["action"] for a in actions):
            actions.append(dict(default))

    return [
        {"day": day, **action}
        for day, action in zip(QUICK_WIN_DAYS, actions[:MAX_QUICK_WINS])
    ]


# ============================================
# IMPROVEMENT POTENTIAL
# ============================================

def compute_improvement_potential(findings: Sequence[FindingCode]) -> Dict[str, Any]:
    improvements = []
    raw_total = 0
    for code in IMPROVEMENT_ORDER:
        if code not in findings:
            continue
        area = IMPROVEMENT_AREAS[code]
        raw_total += area["points"]
        improvements.append({
            "area": area["area"],
            "potential": f"+{area['points']} points",
            "action": area["action"],
            "timeframe": area["timeframe"],
        })

    total = min(IMPROVEMENT_CAP, raw_total)
    if total >= 25:
        message = "Significant improvement possible"
    elif total > 0:
        message = "Some improvement possible"
    else:
        message = "You're already doing the key things right"

    return {"total_potential": total, "message": message, "improvements": improvements}


# ============================================
# EXPERT CONTENT
# ============================================

def relevant_categories(findings: Sequence[FindingCode]) -> List[str]:
    categories: List[str] = []
    for code in findings:
        for category in FINDING_CATEGORIES[code]:
            if category not in categories:
                categories.append(category)
    return categories or list(GENERAL_CATEGORIES)


def select_expert_videos(categories: Sequence[str]) -> List[Dict[str, Any]]:
    selected: List[Dict[str, Any]] = []
    for category in categories:
        for video in EXPERT_VIDEOS:
            if video["category"] == category and video not in selected:
                selected.append(video)
                break
        if len(selected) >= MAX_EXPERT_VIDEOS:
            break
    return [dict(v) for v in selected]


def select_daily_tips(categories: Sequence[str]) -> List[Dict[str, str]]:
    """One tip per relevant category, padded in declaration order."""
    tips: List[Dict[str, str]] = []
    for category in categories:
        for tip in DAILY_TIPS:
            if tip["category"] == category and tip not in tips:
                tips.append(tip)
                break
        if len(tips) >= MAX_DAILY_TIPS:
            break

    for tip in DAILY_TIPS:
        if len(tips) >= MAX_DAILY_TIPS:
            break
        if tip not in tips:
            tips.append(tip)

    return [dict(t) for t in tips]


# ============================================
# SELECTION
# ============================================

def select_insights(answers: Mapping[str, Any], findings: Optional[Sequence[FindingCode]] = None) -> Insights:
    if findings is None:
        findings = detect_findings(answers)
    findings = list(findings)

    badges = [
        {"code": code.value, **EVIDENCE_BADGES[code]}
        for code in findings[:MAX_EVIDENCE_BADGES]
    ]

    pain_points = []
    for code in findings:
        if len(pain_points) >= MAX_PAIN_POINTS:
            break
        pain = PAIN_POINTS.get(code)
        if pain is not None:
            entry = {"code": code.value, **pain}
            if entry.get("expert_video") is None:
                entry.pop("expert_video", None)
            else:
                entry["expert_video"] = dict(entry["expert_video"])
            pain_points.append(entry)

    categories = relevant_categories(findings)

    return Insights(
        active_findings=findings,
        evidence_badges=badges,
        pain_points=pain_points,
        urgency=compute_urgency(answers, findings),
        improvement_potential=compute_improvement_potential(findings),
        expert_videos=select_expert_videos(categories),
        daily_tips=select_daily_tips(categories),
    )
