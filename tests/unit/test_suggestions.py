"""Unit tests for the suggestion bundle (elevare/gamification/suggestions.py)"""
from elevare.gamification.catalog import default_catalog
from elevare.gamification.snapshot import build_achievement_progress
from elevare.gamification.suggestions import (
    find_next_best_achievement,
    generate_achievement_suggestions,
    generate_recommendations,
    get_suggestion_difficulty_score,
)
from elevare.gamification.scoring import get_difficulty_score
from elevare.gamification.domino import analyze_domino_effects
from elevare.gamification.patterns import analyze_patterns
from elevare.models.achievement import Priority, UserStats


def test_empty_bundle_when_everything_unlocked(achievement_factory, active_user_stats):
    """Test an exhausted catalog returns an empty bundle"""
    achievements = [achievement_factory("first_task", target=1, current=1, unlocked=True)]

    result = generate_achievement_suggestions(achievements, active_user_stats)

    assert result.next_best is None
    assert result.domino_effects == []
    assert result.patterns == []
    assert result.recommendations == []


def test_new_user_bundle(new_user_stats):
    """Test the full bundle for a brand new user over the default catalog"""
    achievements = build_achievement_progress(default_catalog(), new_user_stats, {})

    result = generate_achievement_suggestions(achievements, new_user_stats)

    # first_task: progress 0 + difficulty 30 + category 20, no domino bonus
    # tasks_10: 0 + 25 + 20 + 10 domino bonus = 55
    assert result.next_best.code == "tasks_10"
    assert result.next_best.score == 55
    assert len(result.domino_effects) == 3
    assert result.patterns == []

    types = [r.type for r in result.recommendations]
    assert types == ["quick_win", "beginner"]
    assert result.recommendations[0].achievement.code == "first_task"
    assert result.recommendations[0].reason == "Only 1 more to unlock!"
    assert result.recommendations[1].priority == Priority.HIGH


def test_domino_bonus_only_for_downstream(achievement_factory, new_user_stats):
    """Test the domino bonus lifts downstream achievements over their trigger"""
    locked = [
        achievement_factory("streak_3", category="STREAK", target=3),
        achievement_factory("streak_7", category="STREAK", target=7),
    ]
    effects = analyze_domino_effects(locked, new_user_stats)

    best = find_next_best_achievement(locked, effects)

    # streak_3: 25 + 15 = 40, streak_7: 20 + 15 + 10 = 45
    assert best.code == "streak_7"
    assert best.score == 45


def test_find_next_best_empty():
    """Test no locked achievements gives None"""
    assert find_next_best_achievement([], []) is None


def test_pattern_match_recommendation(achievement_factory):
    """Test strong task focus recommends the first locked task achievement"""
    stats = UserStats(tasks_completed=6)
    locked = [
        achievement_factory("streak_3", category="STREAK", target=3),
        achievement_factory("tasks_10", target=10, current=6),
        achievement_factory("tasks_100", target=100, current=6),
    ]

    recommendations = generate_recommendations(locked, stats, analyze_patterns(stats))

    assert len(recommendations) == 1
    assert recommendations[0].type == "pattern_match"
    assert recommendations[0].achievement.code == "tasks_10"
    assert recommendations[0].priority == Priority.MEDIUM


def test_weak_task_focus_has_no_pattern_match(achievement_factory):
    """Test a task focus of exactly 50 is not enough"""
    stats = UserStats(tasks_completed=5)
    locked = [achievement_factory("tasks_10", target=10, current=5)]

    assert generate_recommendations(locked, stats, analyze_patterns(stats)) == []


def test_quick_win_ignores_completed_counters(achievement_factory, active_user_stats):
    """Test a locked achievement already at its target is not a quick win"""
    locked = [achievement_factory("reflections_10", category="REFLECTION", target=3, current=3)]

    assert generate_recommendations(locked, active_user_stats, []) == []


def test_time_of_day_difficulty_falls_back_in_bundle():
    """Test night_owl/early_bird use the default difficulty in the bundle ranking"""
    assert get_suggestion_difficulty_score("night_owl") == 15
    assert get_suggestion_difficulty_score("early_bird") == 15
    assert get_suggestion_difficulty_score("streak_7") == 20
    # The main scorer keeps them in the medium tier
    assert get_difficulty_score("night_owl") == 20


def test_time_of_day_bundle_score(achievement_factory):
    night_owl = achievement_factory("night_owl", category="OTHER", target=1)

    ranked = find_next_best_achievement([night_owl], [])

    # progress 0 + difficulty 15 + category 5
    assert ranked.score == 20
