"""
Next Best Achievement

Scores every locked achievement and picks the single one the user should
focus on next, together with a human-readable reason and an actionable
suggestion.

Ranking is by score (highest first); equal scores are ordered by achievement
code, then id, so the result never depends on input order.
"""

from typing import List, Optional, Sequence
import logging

from elevare.gamification.catalog import AchievementKind, ActivityFamily, activity_family
from elevare.gamification.scoring import (
    calculate_achievement_score,
    determine_priority,
    is_near_completion,
)
from elevare.models.achievement import AchievementWithProgress, ScoredAchievement, UserStats

logger = logging.getLogger(__name__)


def select_next_best(
    achievements: Sequence[AchievementWithProgress],
    stats: Optional[UserStats] = None
) -> Optional[ScoredAchievement]:
    """
    Determine the next best achievement based on user progress

    Args:
        achievements: All achievements with the user's progress
        stats: Aggregate user stats (tasks completed, streak, etc.)

    Returns:
        The highest scoring locked achievement, or None when everything is
        already unlocked
    """
    ranked = rank_achievements(achievements, stats)

    if not ranked:
        logger.debug("All achievements unlocked, nothing to recommend")
        return None

    best = ranked[0]
    logger.info(
        f"Next best achievement: {best.achievement.code} "
        f"(score={best.score}, priority={best.priority.value})"
    )
    return best


def rank_achievements(
    achievements: Sequence[AchievementWithProgress],
    stats: Optional[UserStats] = None
) -> List[ScoredAchievement]:
    """All locked achievements in recommendation order"""
    locked = [item for item in achievements if not item.progress.unlocked]
    ranked = []
    for item in locked:
        score = calculate_achievement_score(item, stats)
        ranked.append(ScoredAchievement(
            achievement=item.to_achievement(),
            progress=item.progress,
            score=score,
            priority=determine_priority(score),
            reason=get_reason(item, stats),
            suggestion=generate_suggestion(item),
        ))

    ranked.sort(key=lambda s: (-s.score, s.achievement.code, s.achievement.id))
    return ranked


def get_reason(item: AchievementWithProgress, stats: Optional[UserStats] = None) -> str:
    """Why this achievement was selected; first matching rule wins"""
    code = item.code
    kind = AchievementKind.from_code(code)

    if is_near_completion(item.progress):
        return f"Almost there! Just {item.progress.remaining} more to unlock."

    if stats is not None:
        if kind == AchievementKind.FIRST_TASK and stats.tasks_completed == 0:
            return "Perfect starting point - complete your first task to get started!"

        if kind == AchievementKind.FIRST_REFLECTION and stats.reflections_written == 0:
            return "Great for building self-awareness - write your first reflection."

        if code.startswith(AchievementKind.STREAK_3.value) and stats.streak_count == 0:
            return "Build momentum with a 3-day streak - consistency is key!"

        if code.startswith(AchievementKind.TASKS_10.value) and stats.tasks_completed < 10:
            return "You're making progress! Keep completing tasks to reach 10."

    return "This achievement aligns well with your current activity patterns."


def generate_suggestion(item: AchievementWithProgress) -> str:
    """Actionable advice for unlocking the achievement"""
    kind = AchievementKind.from_code(item.code)
    family = activity_family(item.code)

    if kind == AchievementKind.NIGHT_OWL:
        return "Try completing a task between midnight and 5 AM to unlock this achievement."
    if kind == AchievementKind.EARLY_BIRD:
        return "Complete a task before 7 AM to unlock this achievement."

    if family == ActivityFamily.TASKS:
        remaining = item.progress.remaining or 0
        if remaining > 0:
            return (
                f"Break down your remaining {remaining} tasks into smaller, manageable chunks. "
                "Try completing 1-2 tasks per day."
            )

    elif family == ActivityFamily.STREAK:
        return (
            "Set a daily reminder to complete at least one task. "
            "Consistency is more important than perfection."
        )

    elif family == ActivityFamily.REFLECTIONS:
        return (
            "Schedule 10-15 minutes daily for reflection. Use prompts like "
            "\"What went well today?\" or \"What would I do differently?\""
        )

    return "Focus on building consistent daily habits to unlock this achievement."
