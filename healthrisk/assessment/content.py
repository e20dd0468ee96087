"""
HealthRisk Insight Content Dictionary
Version 1.0.0

This module contains:
1. EVIDENCE_BADGES: research summary per finding code
2. PAIN_POINTS: common struggle + micro-action per finding code (optional)
3. FINDING_CATEGORIES: expert-content relevance categories per finding code
4. EXPERT_VIDEOS / DAILY_TIPS: category-tagged static content
5. IMPROVEMENT_AREAS / DEFAULT_QUICK_WINS: action-plan building blocks

Principle: content is static and keyed by finding code. Selection order and
limits live in insights.py; nothing here depends on the answers.
"""

from typing import Any, Dict, List
from urllib.parse import quote_plus

from .models import FindingCode


def _video_url(title: str) -> str:
    return f"https://www.youtube.com/results?search_query={quote_plus(title)}"


# ============================================================================
# EVIDENCE BADGES
# ============================================================================

EVIDENCE_BADGES: Dict[FindingCode, Dict[str, str]] = {
    FindingCode.FAMILY_HISTORY: {
        "label": "Family history increases your risk",
        "evidence_text": "Large studies show family history doubles your chances of breast health issues",
        "source": "Studies following 50,302 women across 30 countries",
        "strength": "Strong evidence",
        "what_it_means": "Your genetics play a role, but lifestyle choices still matter most",
        "hope_message": "You can take steps your family members didn't know about",
    },
    FindingCode.LOW_EXERCISE: {
        "label": "Not getting enough exercise raises risk",
        "evidence_text": "Women who walk 150 minutes per week reduce their risk by 20-25%",
        "source": "Meta-analysis of 47 studies worldwide",
        "strength": "Strong evidence",
        "what_it_means": "Your body needs movement to stay healthy and fight disease",
        "hope_message": "Even 20 minutes of walking 3 times a week makes a difference",
    },
    FindingCode.ALCOHOL_HIGH: {
        "label": "Drinking alcohol increases risk",
        "evidence_text": "Each daily drink increases breast cancer risk by 7-10%",
        "source": "Research following 1.2 million women",
        "strength": "Strong evidence",
        "what_it_means": "Alcohol affects hormones and damages cells over time",
        "hope_message": "Cutting back to 3-4 drinks per week significantly reduces risk",
    },
    FindingCode.DENSE_BREAST: {
        "label": "Dense breast tissue needs closer screening",
        "evidence_text": "Extremely dense tissue is linked to up to twice the risk and can mask tumors on mammograms",
        "source": "Breast Cancer Surveillance Consortium data on over 1 million screenings",
        "strength": "Strong evidence",
        "what_it_means": "A standard mammogram may not show everything for you",
        "hope_message": "Supplemental ultrasound or MRI screening closes most of the gap",
    },
    FindingCode.HIGH_STRESS: {
        "label": "Chronic stress affects your health",
        "evidence_text": "Long-term stress disrupts hormones, sleep and immune function",
        "source": "Review of psychoneuroimmunology studies",
        "strength": "Moderate evidence",
        "what_it_means": "Stress makes every other healthy habit harder to keep",
        "hope_message": "Ten minutes of daily relaxation practice measurably lowers stress hormones",
    },
    FindingCode.POOR_DIET: {
        "label": "Diet quality influences risk",
        "evidence_text": "Mediterranean-style eating is linked to up to 40% lower risk in a randomized trial",
        "source": "PREDIMED randomized trial, 4,282 women",
        "strength": "Good evidence",
        "what_it_means": "Processed food and added sugar feed inflammation and weight gain",
        "hope_message": "Small swaps at one meal a day add up quickly",
    },
    FindingCode.POOR_SLEEP: {
        "label": "Disrupted sleep is linked to higher risk",
        "evidence_text": "Long-term night shift work is associated with higher breast cancer risk",
        "source": "International Agency for Research on Cancer review",
        "strength": "Moderate evidence",
        "what_it_means": "Light at night lowers melatonin, which helps regulate hormones",
        "hope_message": "A dark, consistent sleep routine restores much of the rhythm",
    },
    FindingCode.OVERDUE_SCREENING: {
        "label": "Regular screening saves lives",
        "evidence_text": "Screening mammography reduces breast cancer deaths by 20-40% in women over 40",
        "source": "Trials and programs covering over 600,000 women",
        "strength": "Strong evidence",
        "what_it_means": "Finding changes early gives you the most treatment options",
        "hope_message": "One phone call today puts you back on track",
    },
}


# ============================================================================
# PAIN POINTS
# FAMILY_HISTORY and DENSE_BREAST have no behavioral pain point.
# ============================================================================

PAIN_POINTS: Dict[FindingCode, Dict[str, Any]] = {
    FindingCode.LOW_EXERCISE: {
        "pain": "I don't have time for long workouts",
        "micro_action": "Take a 10-minute walk during lunch break",
        "talk_track": "Even small amounts of movement add up to big health benefits",
        "expert_video": {
            "title": "The Power of 10-Minute Movement",
            "expert": "Dr. Kerry Courneya",
            "url": _video_url("The Power of 10-Minute Movement"),
            "duration": "12:30",
        },
    },
    FindingCode.ALCOHOL_HIGH: {
        "pain": "I use wine to relax after stressful days",
        "micro_action": "Replace one drink per week with herbal tea",
        "talk_track": "Finding new ways to unwind protects your health without sacrificing relaxation",
        "expert_video": {
            "title": "Healthy Ways to Manage Stress",
            "expert": "Dr. Sara Lazar",
            "url": _video_url("Healthy Ways to Manage Stress"),
            "duration": "16:45",
        },
    },
    FindingCode.HIGH_STRESS: {
        "pain": "I never get a moment to myself",
        "micro_action": "Practice deep breathing for 3 minutes before bed",
        "talk_track": "Short, regular pauses calm your nervous system more than rare long breaks",
        "expert_video": {
            "title": "How to Make Stress Your Friend",
            "expert": "Dr. Kelly McGonigal",
            "url": _video_url("How to Make Stress Your Friend"),
            "duration": "14:28",
        },
    },
    FindingCode.POOR_DIET: {
        "pain": "Healthy food takes too long to prepare",
        "micro_action": "Add a handful of berries or vegetables to one meal today",
        "talk_track": "Adding good food is easier than cutting everything you enjoy",
        "expert_video": {
            "title": "The Truth About Food and Disease Prevention",
            "expert": "Dr. David Katz",
            "url": _video_url("The Truth About Food and Disease Prevention"),
            "duration": "18:30",
        },
    },
    FindingCode.POOR_SLEEP: {
        "pain": "My schedule makes regular sleep impossible",
        "micro_action": "Keep your bedroom fully dark and screens off 30 minutes before sleep",
        "talk_track": "Protecting darkness helps your body's rhythm even on irregular schedules",
        "expert_video": {
            "title": "Sleep Is Your Superpower",
            "expert": "Dr. Matt Walker",
            "url": _video_url("Sleep Is Your Superpower"),
            "duration": "19:18",
        },
    },
    FindingCode.OVERDUE_SCREENING: {
        "pain": "I keep putting off my mammogram",
        "micro_action": "Call to schedule your mammogram",
        "talk_track": "Booking is the hardest step; the appointment itself takes under an hour",
        "expert_video": None,
    },
}

# Quick-win scoring for the micro-action of each finding
QUICK_WIN_META: Dict[FindingCode, Dict[str, str]] = {
    FindingCode.LOW_EXERCISE: {"points": "+2", "difficulty": "Easy"},
    FindingCode.ALCOHOL_HIGH: {"points": "+2", "difficulty": "Easy"},
    FindingCode.HIGH_STRESS: {"points": "+1", "difficulty": "Easy"},
    FindingCode.POOR_DIET: {"points": "+1", "difficulty": "Easy"},
    FindingCode.POOR_SLEEP: {"points": "+1", "difficulty": "Moderate"},
    FindingCode.OVERDUE_SCREENING: {"points": "+5", "difficulty": "Important"},
}

QUICK_WIN_DAYS: List[str] = ["Today", "Tomorrow", "This week"]

DEFAULT_QUICK_WINS: List[Dict[str, str]] = [
    {"action": "Take a 10-minute walk", "points": "+2", "difficulty": "Easy"},
    {"action": "Add berries to breakfast", "points": "+1", "difficulty": "Easy"},
    {"action": "Do a monthly breast self-exam", "points": "+3", "difficulty": "Easy"},
]


# ============================================================================
# EXPERT CONTENT
# ============================================================================

FINDING_CATEGORIES: Dict[FindingCode, List[str]] = {
    FindingCode.FAMILY_HISTORY: ["genetics", "screening"],
    FindingCode.LOW_EXERCISE: ["exercise"],
    FindingCode.ALCOHOL_HIGH: ["alcohol", "stress"],
    FindingCode.DENSE_BREAST: ["screening"],
    FindingCode.HIGH_STRESS: ["stress"],
    FindingCode.POOR_DIET: ["nutrition"],
    FindingCode.POOR_SLEEP: ["sleep"],
    FindingCode.OVERDUE_SCREENING: ["screening"],
}

# Used when no finding is active
GENERAL_CATEGORIES: List[str] = ["nutrition", "exercise", "stress"]

EXPERT_VIDEOS: List[Dict[str, Any]] = [
    {
        "category": "nutrition",
        "expert": "Dr. David Katz",
        "title": "The Truth About Food and Disease Prevention",
        "video_url": _video_url("The Truth About Food and Disease Prevention"),
        "ted_talk": True,
        "duration": "18:30",
    },
    {
        "category": "exercise",
        "expert": "Dr. Kerry Courneya",
        "title": "The Power of 10-Minute Movement",
        "video_url": _video_url("The Power of 10-Minute Movement"),
        "ted_talk": False,
        "duration": "12:30",
    },
    {
        "category": "stress",
        "expert": "Dr. Kelly McGonigal",
        "title": "How to Make Stress Your Friend",
        "video_url": _video_url("How to Make Stress Your Friend"),
        "ted_talk": True,
        "duration": "14:28",
    },
    {
        "category": "alcohol",
        "expert": "Dr. Sara Lazar",
        "title": "Healthy Ways to Manage Stress",
        "video_url": _video_url("Healthy Ways to Manage Stress"),
        "ted_talk": False,
        "duration": "16:45",
    },
    {
        "category": "sleep",
        "expert": "Dr. Matt Walker",
        "title": "Sleep Is Your Superpower",
        "video_url": _video_url("Sleep Is Your Superpower"),
        "ted_talk": True,
        "duration": "19:18",
    },
    {
        "category": "genetics",
        "expert": "Dr. Mary-Claire King",
        "title": "Understanding Inherited Breast Cancer Risk",
        "video_url": _video_url("Understanding Inherited Breast Cancer Risk"),
        "ted_talk": False,
        "duration": "15:10",
    },
    {
        "category": "screening",
        "expert": "Dr. Deborah Rhodes",
        "title": "A Better Tool for Finding Tumors in Dense Breasts",
        "video_url": _video_url("A Better Tool for Finding Tumors in Dense Breasts"),
        "ted_talk": True,
        "duration": "13:52",
    },
]

DAILY_TIPS: List[Dict[str, str]] = [
    {"tip": "Drink green tea instead of coffee today", "category": "nutrition"},
    {"tip": "Take the stairs instead of the elevator", "category": "exercise"},
    {"tip": "Practice deep breathing for 3 minutes", "category": "stress"},
    {"tip": "Choose sparkling water with lime instead of a drink tonight", "category": "alcohol"},
    {"tip": "Go to bed at the same time as yesterday", "category": "sleep"},
    {"tip": "Write down which relatives had cancer and at what age", "category": "genetics"},
    {"tip": "Put your next screening date in your calendar", "category": "screening"},
    {"tip": "Fill half your plate with vegetables at dinner", "category": "nutrition"},
    {"tip": "Stand up and stretch every hour", "category": "exercise"},
]


# ============================================================================
# IMPROVEMENT POTENTIAL
# ============================================================================

IMPROVEMENT_CAP = 35

IMPROVEMENT_AREAS: Dict[FindingCode, Dict[str, Any]] = {
    FindingCode.LOW_EXERCISE: {
        "area": "Exercise",
        "points": 15,
        "action": "Start walking 150 minutes per week",
        "timeframe": "3-6 months",
    },
    FindingCode.POOR_DIET: {
        "area": "Nutrition",
        "points": 12,
        "action": "Switch to Mediterranean-style eating",
        "timeframe": "2-4 months",
    },
    FindingCode.HIGH_STRESS: {
        "area": "Stress Management",
        "points": 10,
        "action": "Practice 10 minutes of mindfulness daily",
        "timeframe": "1-3 months",
    },
    FindingCode.ALCOHOL_HIGH: {
        "area": "Alcohol Reduction",
        "points": 8,
        "action": "Reduce to 3-4 drinks per week",
        "timeframe": "1-2 months",
    },
}

# Order in which improvement areas are listed
IMPROVEMENT_ORDER: List[FindingCode] = [
    FindingCode.LOW_EXERCISE,
    FindingCode.POOR_DIET,
    FindingCode.HIGH_STRESS,
    FindingCode.ALCOHOL_HIGH,
]
