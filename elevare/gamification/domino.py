"""
Domino Effect Analysis

Finds the achievements that start a chain: unlocking the first step of a
category makes every later step in that category reachable. Detection is
purely "has the user done this activity at all" - there is no partial-chain
detection.
"""

from typing import Callable, List, NamedTuple, Sequence
import logging

from elevare.models.achievement import AchievementWithProgress, DominoEffect, UserStats

logger = logging.getLogger(__name__)


class _Chain(NamedTuple):
    trigger: str
    unlocks: List[str]
    description: str
    counter: Callable[[UserStats], int]


ACHIEVEMENT_CHAINS = (
    _Chain(
        trigger="first_task",
        unlocks=["tasks_10", "tasks_100"],
        description="Completing your first task starts the task achievement chain",
        counter=lambda stats: stats.tasks_completed,
    ),
    _Chain(
        trigger="first_reflection",
        unlocks=["reflections_10", "reflections_100"],
        description="Writing your first reflection starts the reflection achievement chain",
        counter=lambda stats: stats.reflections_written,
    ),
    _Chain(
        trigger="streak_3",
        unlocks=["streak_7", "streak_30"],
        description="Building a 3-day streak starts the streak achievement chain",
        counter=lambda stats: stats.streak_count,
    ),
)


def analyze_domino_effects(
    locked_achievements: Sequence[AchievementWithProgress],
    stats: UserStats
) -> List[DominoEffect]:
    """
    Detect achievement chains the user hasn't started yet

    Args:
        locked_achievements: The user's locked achievements (kept for callers
            that pass the full locked set; chain detection only needs stats)
        stats: Aggregate user stats

    Returns:
        One DominoEffect per chain whose activity counter is exactly 0
    """
    effects = [
        DominoEffect(trigger=chain.trigger, unlocks=list(chain.unlocks), description=chain.description)
        for chain in ACHIEVEMENT_CHAINS
        if chain.counter(stats) == 0
    ]

    logger.debug(
        f"Domino analysis over {len(locked_achievements)} locked achievements: "
        f"{[effect.trigger for effect in effects]}"
    )
    return effects


def has_domino_bonus(code: str, effects: Sequence[DominoEffect]) -> bool:
    """Whether an achievement sits downstream of a detected trigger"""
    return any(code in effect.unlocks for effect in effects)
