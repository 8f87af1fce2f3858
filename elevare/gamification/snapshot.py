"""
Progress Snapshot Builder

Turns raw user counters plus the set of unlocked achievement ids into
per-achievement progress, the input shape the scoring engine expects.

Counter per code:
- tasks* and first_task: completed tasks
- reflections* and first_reflection: reflections written
- streak*: current streak
- night_owl / early_bird: 1 once unlocked, 0 otherwise (target 1)
"""

from datetime import datetime
from typing import List, Mapping, Optional, Sequence
import logging

from elevare.gamification.catalog import (
    AchievementKind,
    ActivityFamily,
    activity_family,
    condition_text_for,
    target_for,
)
from elevare.models.achievement import (
    Achievement,
    AchievementProgress,
    AchievementWithProgress,
    UserStats,
)

logger = logging.getLogger(__name__)


def current_for(code: str, stats: UserStats, unlocked: bool = False) -> int:
    """Current counter value for an achievement code"""
    kind = AchievementKind.from_code(code)
    family = activity_family(code)

    if family == ActivityFamily.TASKS or kind == AchievementKind.FIRST_TASK:
        return stats.tasks_completed
    if family == ActivityFamily.REFLECTIONS or kind == AchievementKind.FIRST_REFLECTION:
        return stats.reflections_written
    if family == ActivityFamily.STREAK:
        return stats.streak_count
    if family == ActivityFamily.TIME_OF_DAY and unlocked:
        return 1
    return 0


def build_progress(
    achievement: Achievement,
    stats: UserStats,
    unlocked_at: Optional[datetime] = None,
    unlocked: bool = False
) -> AchievementProgress:
    """Progress for one achievement"""
    return AchievementProgress(
        target=target_for(achievement.code),
        current=current_for(achievement.code, stats, unlocked),
        unlocked=unlocked,
        unlocked_at=unlocked_at,
        condition_text=condition_text_for(achievement.code),
    )


def build_achievement_progress(
    achievements: Sequence[Achievement],
    stats: UserStats,
    unlocked: Mapping[str, Optional[datetime]]
) -> List[AchievementWithProgress]:
    """
    Join achievements with the user's progress

    Args:
        achievements: Achievement catalog
        stats: Aggregate user stats
        unlocked: achievement id -> unlock time for every unlocked achievement

    Returns:
        AchievementWithProgress list in catalog order
    """
    result = []
    for achievement in achievements:
        is_unlocked = achievement.id in unlocked
        progress = build_progress(
            achievement,
            stats,
            unlocked_at=unlocked.get(achievement.id),
            unlocked=is_unlocked,
        )
        result.append(AchievementWithProgress(**achievement.model_dump(), progress=progress))

    logger.debug(f"Built progress for {len(result)} achievements ({len(unlocked)} unlocked)")
    return result
