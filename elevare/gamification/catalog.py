"""
Achievement Catalog

Known achievement kinds, the activity family each code belongs to, and the
default achievement set every user starts with.

Achievement-specific behaviour (difficulty, reasons, suggestions, targets) is
dispatched on AchievementKind rather than on raw code strings. Codes we don't
recognise map to AchievementKind.UNKNOWN and get the documented fallbacks.
"""

from enum import Enum
from typing import Dict, List, Optional

from elevare.models.achievement import Achievement, AchievementCategory


class AchievementKind(str, Enum):
    """Every achievement code the engine knows about"""
    FIRST_TASK = "first_task"
    TASKS_10 = "tasks_10"
    TASKS_100 = "tasks_100"
    FIRST_REFLECTION = "first_reflection"
    REFLECTIONS_10 = "reflections_10"
    REFLECTIONS_100 = "reflections_100"
    STREAK_3 = "streak_3"
    STREAK_7 = "streak_7"
    STREAK_30 = "streak_30"
    NIGHT_OWL = "night_owl"
    EARLY_BIRD = "early_bird"
    UNKNOWN = "unknown"

    @classmethod
    def from_code(cls, code: str) -> "AchievementKind":
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


class ActivityFamily(str, Enum):
    """Which user activity drives an achievement, derived from the code prefix"""
    TASKS = "tasks"
    REFLECTIONS = "reflections"
    STREAK = "streak"
    TIME_OF_DAY = "time_of_day"
    OTHER = "other"


# Codes are matched by prefix, so e.g. a future "tasks_50" still counts as a
# task achievement even though it has no dedicated AchievementKind.
# first_task and first_reflection match no prefix and fall into OTHER.
_FAMILY_PREFIXES = (
    ("tasks", ActivityFamily.TASKS),
    ("streak", ActivityFamily.STREAK),
    ("reflections", ActivityFamily.REFLECTIONS),
)


def activity_family(code: str) -> ActivityFamily:
    """Activity family for an achievement code"""
    kind = AchievementKind.from_code(code)
    if kind in (AchievementKind.NIGHT_OWL, AchievementKind.EARLY_BIRD):
        return ActivityFamily.TIME_OF_DAY

    for prefix, family in _FAMILY_PREFIXES:
        if code.startswith(prefix):
            return family

    return ActivityFamily.OTHER


# Numeric target per known achievement
ACHIEVEMENT_TARGETS: Dict[AchievementKind, int] = {
    AchievementKind.FIRST_TASK: 1,
    AchievementKind.TASKS_10: 10,
    AchievementKind.TASKS_100: 100,
    AchievementKind.FIRST_REFLECTION: 1,
    AchievementKind.REFLECTIONS_10: 10,
    AchievementKind.REFLECTIONS_100: 100,
    AchievementKind.STREAK_3: 3,
    AchievementKind.STREAK_7: 7,
    AchievementKind.STREAK_30: 30,
    # Time-of-day achievements are a single event
    AchievementKind.NIGHT_OWL: 1,
    AchievementKind.EARLY_BIRD: 1,
}


def target_for(code: str) -> Optional[int]:
    """Default numeric target for a code, None for codes we don't know"""
    return ACHIEVEMENT_TARGETS.get(AchievementKind.from_code(code))


CONDITION_TEXT: Dict[AchievementKind, str] = {
    AchievementKind.FIRST_TASK: "Complete your first task",
    AchievementKind.TASKS_10: "Complete 10 tasks",
    AchievementKind.TASKS_100: "Complete 100 tasks",
    AchievementKind.FIRST_REFLECTION: "Write your first reflection",
    AchievementKind.REFLECTIONS_10: "Write 10 reflections",
    AchievementKind.REFLECTIONS_100: "Write 100 reflections",
    AchievementKind.STREAK_3: "Maintain a 3-day streak",
    AchievementKind.STREAK_7: "Maintain a 7-day streak",
    AchievementKind.STREAK_30: "Maintain a 30-day streak",
    AchievementKind.NIGHT_OWL: "Complete a task between 00:00–04:59",
    AchievementKind.EARLY_BIRD: "Complete a task before 07:00",
}


def condition_text_for(code: str) -> Optional[str]:
    return CONDITION_TEXT.get(AchievementKind.from_code(code))


DEFAULT_ACHIEVEMENTS: List[Dict[str, str]] = [
    # Task based
    {
        "code": "first_task",
        "title": "First Step",
        "description": "Complete your first task.",
        "icon": "🥇",
        "category": AchievementCategory.TASK.value,
    },
    {
        "code": "tasks_10",
        "title": "Getting Things Done",
        "description": "Complete 10 tasks.",
        "icon": "✅",
        "category": AchievementCategory.TASK.value,
    },
    {
        "code": "tasks_100",
        "title": "Task Master",
        "description": "Complete 100 tasks.",
        "icon": "🏆",
        "category": AchievementCategory.TASK.value,
    },
    # Streak based
    {
        "code": "streak_3",
        "title": "Consistency Builder",
        "description": "Maintain a 3-day streak.",
        "icon": "📅",
        "category": AchievementCategory.STREAK.value,
    },
    {
        "code": "streak_7",
        "title": "Weekly Warrior",
        "description": "Maintain a 7-day streak.",
        "icon": "🔥",
        "category": AchievementCategory.STREAK.value,
    },
    {
        "code": "streak_30",
        "title": "Monthly Machine",
        "description": "Maintain a 30-day streak.",
        "icon": "⚡",
        "category": AchievementCategory.STREAK.value,
    },
    # Reflection based
    {
        "code": "first_reflection",
        "title": "Deep Thinker",
        "description": "Write your first reflection.",
        "icon": "📝",
        "category": AchievementCategory.REFLECTION.value,
    },
    {
        "code": "reflections_10",
        "title": "Reflective Mind",
        "description": "Write 10 reflections.",
        "icon": "💭",
        "category": AchievementCategory.REFLECTION.value,
    },
    {
        "code": "reflections_100",
        "title": "Wise Sage",
        "description": "Write 100 reflections.",
        "icon": "📚",
        "category": AchievementCategory.REFLECTION.value,
    },
    # Time of day
    {
        "code": "night_owl",
        "title": "Night Owl",
        "description": "Complete a task after midnight.",
        "icon": "🌙",
        "category": AchievementCategory.OTHER.value,
    },
    {
        "code": "early_bird",
        "title": "Early Bird",
        "description": "Complete a task before 7 AM.",
        "icon": "☀️",
        "category": AchievementCategory.OTHER.value,
    },
]


def default_catalog() -> List[Achievement]:
    """Default achievement set, ids equal to codes"""
    return [Achievement(id=data["code"], **data) for data in DEFAULT_ACHIEVEMENTS]


def default_thresholds() -> Dict[str, int]:
    """Current numeric targets keyed by achievement code"""
    return {kind.value: target for kind, target in ACHIEVEMENT_TARGETS.items()}
