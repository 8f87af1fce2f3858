"""
Unlock Condition Checks

Evaluates which locked achievements a user has already earned from their
aggregate counters. Counter achievements unlock once the counter reaches the
catalog target; the time-of-day ones look at the hour of the latest task
completion, in that timestamp's own timezone.
"""

from typing import List, Mapping, Sequence
import logging

from elevare.gamification.catalog import AchievementKind, target_for
from elevare.gamification.snapshot import current_for
from elevare.models.achievement import Achievement, UserStats

logger = logging.getLogger(__name__)

# Exclusive upper bounds on the completion hour
NIGHT_OWL_END_HOUR = 5
EARLY_BIRD_END_HOUR = 7


def is_condition_met(code: str, stats: UserStats) -> bool:
    """Whether the stats satisfy the unlock condition for a code"""
    kind = AchievementKind.from_code(code)

    if kind in (AchievementKind.NIGHT_OWL, AchievementKind.EARLY_BIRD):
        if stats.latest_completion_at is None:
            return False
        hour = stats.latest_completion_at.hour
        if kind == AchievementKind.NIGHT_OWL:
            return 0 <= hour < NIGHT_OWL_END_HOUR
        return hour < EARLY_BIRD_END_HOUR

    # Unknown codes have no target and never unlock on their own
    target = target_for(code)
    if target is None:
        return False
    return current_for(code, stats) >= target


def check_unlocks(
    achievements: Sequence[Achievement],
    stats: UserStats,
    unlocked: Mapping[str, object]
) -> List[Achievement]:
    """
    Find achievements that are earned but not yet recorded as unlocked

    Args:
        achievements: Achievement catalog
        stats: Aggregate user stats
        unlocked: Ids of achievements already unlocked (values ignored)

    Returns:
        Newly earned achievements in catalog order
    """
    earned = [
        achievement for achievement in achievements
        if achievement.id not in unlocked and is_condition_met(achievement.code, stats)
    ]

    if earned:
        logger.debug(f"Unlock conditions met: {[achievement.code for achievement in earned]}")
    return earned
