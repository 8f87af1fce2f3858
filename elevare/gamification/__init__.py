"""
Achievement recommendation engine for Elevare

Pure functions over an in-memory snapshot of a user's progress:
- Achievement scoring and next best selection
- Domino effect (achievement chain) detection
- Behavioural pattern tags
- Dynamic threshold adjustment
"""

from elevare.gamification.scoring import calculate_achievement_score, determine_priority, score_breakdown
from elevare.gamification.next_best import select_next_best, rank_achievements
from elevare.gamification.domino import analyze_domino_effects
from elevare.gamification.patterns import analyze_patterns
from elevare.gamification.suggestions import generate_achievement_suggestions
from elevare.gamification.snapshot import build_achievement_progress
from elevare.gamification.unlocks import check_unlocks
from elevare.gamification.thresholds import (
    analyze_and_adjust_thresholds,
    validate_adjustments,
    calculate_user_behavior,
    get_dynamic_threshold_adjustments,
)

__all__ = [
    "calculate_achievement_score",
    "determine_priority",
    "score_breakdown",
    "select_next_best",
    "rank_achievements",
    "analyze_domino_effects",
    "analyze_patterns",
    "generate_achievement_suggestions",
    "build_achievement_progress",
    "check_unlocks",
    "analyze_and_adjust_thresholds",
    "validate_adjustments",
    "calculate_user_behavior",
    "get_dynamic_threshold_adjustments",
]
