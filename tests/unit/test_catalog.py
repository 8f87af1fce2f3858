"""Unit tests for the achievement catalog"""
import pytest

from elevare.gamification.catalog import (
    AchievementKind,
    ActivityFamily,
    activity_family,
    condition_text_for,
    default_catalog,
    default_thresholds,
    target_for,
)


@pytest.mark.parametrize("code,family", [
    ("tasks_10", ActivityFamily.TASKS),
    ("tasks_50", ActivityFamily.TASKS),
    ("streak_30", ActivityFamily.STREAK),
    ("reflections_100", ActivityFamily.REFLECTIONS),
    ("night_owl", ActivityFamily.TIME_OF_DAY),
    ("early_bird", ActivityFamily.TIME_OF_DAY),
    ("first_task", ActivityFamily.OTHER),
    ("first_reflection", ActivityFamily.OTHER),
    ("mystery", ActivityFamily.OTHER),
])
def test_activity_family(code, family):
    assert activity_family(code) == family


def test_unknown_code_maps_to_unknown_kind():
    assert AchievementKind.from_code("tasks_50") == AchievementKind.UNKNOWN
    assert AchievementKind.from_code("streak_7") == AchievementKind.STREAK_7


def test_targets():
    assert target_for("first_task") == 1
    assert target_for("streak_30") == 30
    assert target_for("night_owl") == 1
    assert target_for("tasks_50") is None


def test_condition_text():
    assert condition_text_for("reflections_10") == "Write 10 reflections"
    assert condition_text_for("mystery") is None


def test_default_catalog():
    """Test every seeded achievement has a known kind and a target"""
    catalog = default_catalog()

    assert len(catalog) == 11
    assert len({a.code for a in catalog}) == 11
    for achievement in catalog:
        assert achievement.id == achievement.code
        assert AchievementKind.from_code(achievement.code) != AchievementKind.UNKNOWN
        assert target_for(achievement.code) is not None


def test_default_thresholds_is_a_fresh_copy():
    thresholds = default_thresholds()
    thresholds["tasks_10"] = 5

    assert default_thresholds()["tasks_10"] == 10
