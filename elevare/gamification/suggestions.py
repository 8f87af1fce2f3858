"""
Achievement Suggestions

Bundles everything the suggestions view needs in one pass:
- next_best: top locked achievement, ranked by progress + difficulty +
  category plus a domino bonus for achievements downstream of an unstarted
  chain
- domino_effects: chains the user hasn't started
- patterns: behavioural tags
- recommendations: quick wins, pattern matches and beginner nudges
"""

from typing import List, Optional, Sequence
import logging

from elevare.gamification.catalog import AchievementKind
from elevare.gamification.domino import analyze_domino_effects, has_domino_bonus
from elevare.gamification.patterns import analyze_patterns
from elevare.gamification.scoring import (
    DEFAULT_DIFFICULTY_SCORE,
    DIFFICULTY_SCORES,
    get_category_score,
    get_progress_score,
)
from elevare.models.achievement import (
    AchievementSuggestions,
    AchievementWithProgress,
    DominoEffect,
    PatternTag,
    Priority,
    RankedAchievement,
    Recommendation,
    UserStats,
)
from elevare.utils.rounding import round_half_up

logger = logging.getLogger(__name__)

DOMINO_BONUS = 10
PATTERN_MATCH_MIN_STRENGTH = 50

# Same tiers as the scorer, but the time-of-day achievements fall back to the
# default here
SUGGESTION_DIFFICULTY_SCORES = {
    kind: score for kind, score in DIFFICULTY_SCORES.items()
    if kind not in (AchievementKind.NIGHT_OWL, AchievementKind.EARLY_BIRD)
}


def get_suggestion_difficulty_score(code: str) -> int:
    return SUGGESTION_DIFFICULTY_SCORES.get(AchievementKind.from_code(code), DEFAULT_DIFFICULTY_SCORE)


def generate_achievement_suggestions(
    achievements: Sequence[AchievementWithProgress],
    stats: UserStats
) -> AchievementSuggestions:
    """
    Generate the suggestion bundle for one user

    Args:
        achievements: All achievements with progress
        stats: Aggregate user stats

    Returns:
        AchievementSuggestions; empty when every achievement is unlocked
    """
    locked = [item for item in achievements if not item.progress.unlocked]

    if not locked:
        return AchievementSuggestions()

    domino_effects = analyze_domino_effects(locked, stats)
    patterns = analyze_patterns(stats)
    recommendations = generate_recommendations(locked, stats, patterns)
    next_best = find_next_best_achievement(locked, domino_effects)

    logger.info(
        f"Suggestions: next_best={next_best.code if next_best else None}, "
        f"{len(domino_effects)} domino effect(s), {len(patterns)} pattern(s), "
        f"{len(recommendations)} recommendation(s)"
    )

    return AchievementSuggestions(
        next_best=next_best,
        domino_effects=domino_effects,
        patterns=patterns,
        recommendations=recommendations,
    )


def find_next_best_achievement(
    locked: Sequence[AchievementWithProgress],
    domino_effects: Sequence[DominoEffect]
) -> Optional[RankedAchievement]:
    """Rank locked achievements with the domino bonus in place of momentum"""
    if not locked:
        return None

    ranked = []
    for item in locked:
        score = (
            get_progress_score(item.progress)
            + get_suggestion_difficulty_score(item.code)
            + get_category_score(item.category)
        )
        if has_domino_bonus(item.code, domino_effects):
            score += DOMINO_BONUS
        ranked.append(RankedAchievement(**item.model_dump(), score=round_half_up(score)))

    ranked.sort(key=lambda r: (-r.score, r.code, r.id))
    return ranked[0]


def generate_recommendations(
    locked: Sequence[AchievementWithProgress],
    stats: UserStats,
    patterns: Sequence[PatternTag]
) -> List[Recommendation]:
    """Specific recommendations based on progress and patterns"""
    recommendations = []

    # Quick wins (close to completion but not yet there)
    quick_wins = [
        item for item in locked
        if item.progress.remaining is not None and 0 < item.progress.remaining <= 2
    ]
    if quick_wins:
        quick_win = quick_wins[0]
        recommendations.append(Recommendation(
            type="quick_win",
            achievement=quick_win,
            reason=f"Only {quick_win.progress.remaining} more to unlock!",
            priority=Priority.HIGH,
        ))

    # Already completing tasks, keep the momentum going
    task_pattern = next((p for p in patterns if p.type == "task_focused"), None)
    if task_pattern and task_pattern.strength > PATTERN_MATCH_MIN_STRENGTH:
        task_achievement = next((item for item in locked if item.code.startswith("tasks")), None)
        if task_achievement:
            recommendations.append(Recommendation(
                type="pattern_match",
                achievement=task_achievement,
                reason="You're already completing tasks - keep the momentum going!",
                priority=Priority.MEDIUM,
            ))

    # Brand new users
    if stats.tasks_completed == 0:
        first_task = next((item for item in locked if item.code == "first_task"), None)
        if first_task:
            recommendations.append(Recommendation(
                type="beginner",
                achievement=first_task,
                reason="Start your journey by completing your first task",
                priority=Priority.HIGH,
            ))

    return recommendations
