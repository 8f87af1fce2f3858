"""
Achievement Scoring

Assigns each locked achievement a priority score from four additive factors:
- Progress (0-40): closer to completion = higher score
- Difficulty (0-30): easier achievements score higher to encourage quick wins
- Category (0-20): TASK > STREAK > REFLECTION > OTHER
- Momentum (0-10): alignment with what the user is currently doing, plus an
  urgency bonus when the achievement is within two steps of unlocking

The caps sum to exactly 100, so every score lies in 0-100.
"""

from dataclasses import dataclass
from typing import Dict, Optional
import logging

from elevare.gamification.catalog import AchievementKind, ActivityFamily, activity_family
from elevare.models.achievement import (
    AchievementCategory,
    AchievementProgress,
    AchievementWithProgress,
    Priority,
    UserStats,
)
from elevare.utils.rounding import round_half_up

logger = logging.getLogger(__name__)

PROGRESS_CAP = 40
PROGRESS_WEIGHT = 0.4
MOMENTUM_CAP = 10
MOMENTUM_ACTIVITY_BONUS = 5
MOMENTUM_URGENCY_BONUS = 5
NEAR_COMPLETION_REMAINING = 2

HIGH_PRIORITY_SCORE = 70
MEDIUM_PRIORITY_SCORE = 40

DIFFICULTY_SCORES: Dict[AchievementKind, int] = {
    # Very easy
    AchievementKind.FIRST_TASK: 30,
    AchievementKind.FIRST_REFLECTION: 30,

    # Easy
    AchievementKind.TASKS_10: 25,
    AchievementKind.REFLECTIONS_10: 25,
    AchievementKind.STREAK_3: 25,

    # Medium
    AchievementKind.STREAK_7: 20,
    AchievementKind.NIGHT_OWL: 20,
    AchievementKind.EARLY_BIRD: 20,

    # Hard
    AchievementKind.TASKS_100: 15,
    AchievementKind.REFLECTIONS_100: 15,
    AchievementKind.STREAK_30: 15,
}
DEFAULT_DIFFICULTY_SCORE = 15

CATEGORY_SCORES: Dict[str, int] = {
    AchievementCategory.TASK.value: 20,
    AchievementCategory.STREAK.value: 15,
    AchievementCategory.REFLECTION.value: 10,
    AchievementCategory.OTHER.value: 5,
}
DEFAULT_CATEGORY_SCORE = 5


@dataclass(frozen=True)
class ScoreBreakdown:
    """Individual sub-scores for one achievement"""
    progress: float
    difficulty: int
    category: int
    momentum: int

    @property
    def total(self) -> int:
        return round_half_up(self.progress + self.difficulty + self.category + self.momentum)


def get_progress_score(progress: AchievementProgress) -> float:
    """Progress sub-score, 0 when there is no numeric target"""
    if not progress.has_target:
        return 0.0
    return min(PROGRESS_CAP, progress.current / progress.target * 100 * PROGRESS_WEIGHT)


def get_difficulty_score(code: str) -> int:
    return DIFFICULTY_SCORES.get(AchievementKind.from_code(code), DEFAULT_DIFFICULTY_SCORE)


def get_category_score(category) -> int:
    # Accept both AchievementCategory members and raw strings
    category = getattr(category, "value", category)
    return CATEGORY_SCORES.get(category, DEFAULT_CATEGORY_SCORE)


def is_near_completion(progress: AchievementProgress) -> bool:
    """True when a numeric target is at most two steps away"""
    remaining = progress.remaining
    return remaining is not None and remaining <= NEAR_COMPLETION_REMAINING


def is_active_in_family(code: str, stats: UserStats) -> bool:
    """Whether the user currently has activity in the achievement's family"""
    family = activity_family(code)
    if family == ActivityFamily.TASKS:
        return stats.tasks_completed > 0
    if family == ActivityFamily.STREAK:
        return stats.streak_count > 0
    if family == ActivityFamily.REFLECTIONS:
        return stats.reflections_written > 0
    return False


def get_momentum_score(item: AchievementWithProgress, stats: Optional[UserStats]) -> int:
    """
    Momentum sub-score

    +5 when the user is already active in the achievement's family, +5 when
    the achievement is nearly complete, capped at 10. Zero without stats.
    """
    if stats is None:
        return 0

    momentum = 0
    if is_active_in_family(item.code, stats):
        momentum += MOMENTUM_ACTIVITY_BONUS
    if is_near_completion(item.progress):
        momentum += MOMENTUM_URGENCY_BONUS

    return min(MOMENTUM_CAP, momentum)


def score_breakdown(item: AchievementWithProgress, stats: Optional[UserStats] = None) -> ScoreBreakdown:
    return ScoreBreakdown(
        progress=get_progress_score(item.progress),
        difficulty=get_difficulty_score(item.code),
        category=get_category_score(item.category),
        momentum=get_momentum_score(item, stats),
    )


def calculate_achievement_score(item: AchievementWithProgress, stats: Optional[UserStats] = None) -> int:
    """
    Calculate the priority score for one achievement

    Args:
        item: Achievement with the user's progress toward it
        stats: Aggregate user stats; momentum is 0 when omitted

    Returns:
        Integer score in 0-100
    """
    breakdown = score_breakdown(item, stats)
    logger.debug(f"Scored {item.code}: {breakdown} -> {breakdown.total}")
    return breakdown.total


def determine_priority(score: int) -> Priority:
    """Map a score onto its fixed priority tier"""
    if score >= HIGH_PRIORITY_SCORE:
        return Priority.HIGH
    if score >= MEDIUM_PRIORITY_SCORE:
        return Priority.MEDIUM
    return Priority.LOW
