"""Unit tests for achievement models"""
import pytest
from pydantic import ValidationError

from elevare.models.achievement import (
    AchievementProgress,
    AchievementSuggestions,
    PatternTag,
    ThresholdAdjustment,
    UserStats,
)


class TestAchievementProgress:
    """Tests for derived progress properties"""

    def test_numeric_target(self):
        progress = AchievementProgress(target=10, current=4)

        assert progress.has_target is True
        assert progress.percentage == pytest.approx(40.0)
        assert progress.remaining == 6

    def test_no_target(self):
        progress = AchievementProgress(target=None, current=3)

        assert progress.has_target is False
        assert progress.percentage == 0.0
        assert progress.remaining is None

    def test_zero_target_is_non_numeric(self):
        assert AchievementProgress(target=0).remaining is None

    def test_overshoot(self):
        """Test percentage caps at 100 while remaining goes negative"""
        progress = AchievementProgress(target=3, current=5)

        assert progress.percentage == 100.0
        assert progress.remaining == -2

    def test_negative_current_rejected(self):
        with pytest.raises(ValidationError):
            AchievementProgress(target=10, current=-1)


def test_user_stats_reject_negative_counters():
    with pytest.raises(ValidationError):
        UserStats(tasks_completed=-1)


def test_pattern_strength_bounds():
    with pytest.raises(ValidationError):
        PatternTag(type="consistent", strength=120, description="too strong")


def test_threshold_adjustment_confidence_bounds():
    with pytest.raises(ValidationError):
        ThresholdAdjustment(
            achievement_code="tasks_10",
            original_threshold=10,
            adjusted_threshold=5,
            adjustment_reason="test",
            confidence=1.2,
        )


def test_relative_change_with_zero_original():
    adjustment = ThresholdAdjustment(
        achievement_code="tasks_0",
        original_threshold=0,
        adjusted_threshold=5,
        adjustment_reason="test",
        confidence=0.9,
    )
    assert adjustment.relative_change == 0.0


def test_empty_suggestions():
    suggestions = AchievementSuggestions()

    assert suggestions.next_best is None
    assert suggestions.domino_effects == []
    assert suggestions.recommendations == []
