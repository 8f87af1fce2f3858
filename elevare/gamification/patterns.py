"""Behavioural pattern tags for supplementary display (not used for ranking)"""
from typing import List, Optional
import logging

from elevare.models.achievement import PatternTag, UserStats

logger = logging.getLogger(__name__)

# Counter value at which each pattern reaches full strength
TASK_FOCUS_FULL = 10
REFLECTION_FOCUS_FULL = 5
CONSISTENCY_FULL = 7


def _strength(count: int, full: int) -> float:
    return min(100.0, count / full * 100)


def analyze_patterns(stats: Optional[UserStats]) -> List[PatternTag]:
    """
    Classify aggregate stats into qualitative tags

    Tags are not mutually exclusive; a user with no activity gets none.
    """
    if stats is None:
        return []

    patterns = []

    if stats.tasks_completed > 0:
        patterns.append(PatternTag(
            type="task_focused",
            strength=_strength(stats.tasks_completed, TASK_FOCUS_FULL),
            description="User is actively completing tasks",
        ))

    if stats.reflections_written > 0:
        patterns.append(PatternTag(
            type="reflection_focused",
            strength=_strength(stats.reflections_written, REFLECTION_FOCUS_FULL),
            description="User is engaging in self-reflection",
        ))

    if stats.streak_count > 0:
        patterns.append(PatternTag(
            type="consistent",
            strength=_strength(stats.streak_count, CONSISTENCY_FULL),
            description="User maintains consistent daily activity",
        ))

    return patterns
