"""Global test fixtures and utilities for elevare tests"""
import pytest
from datetime import datetime, timezone

from elevare.gamification.catalog import default_catalog
from elevare.gamification.store import InMemoryAchievementStore
from elevare.models.achievement import AchievementProgress, AchievementWithProgress, UserStats


# ============================================================================
# Builders
# ============================================================================

def make_achievement(
    code,
    category="TASK",
    target=None,
    current=0,
    unlocked=False,
    achievement_id=None,
    **kwargs
):
    """Build an AchievementWithProgress with sensible defaults"""
    return AchievementWithProgress(
        id=achievement_id or code,
        code=code,
        title=kwargs.pop("title", code.replace("_", " ").title()),
        description=kwargs.pop("description", f"Unlock {code}"),
        icon=kwargs.pop("icon", None),
        category=category,
        progress=AchievementProgress(target=target, current=current, unlocked=unlocked, **kwargs),
    )


@pytest.fixture
def achievement_factory():
    """Factory fixture wrapping make_achievement"""
    return make_achievement


# ============================================================================
# User Fixtures
# ============================================================================

@pytest.fixture
def test_user_id():
    """Standard test user ID"""
    return "user-123"


@pytest.fixture
def new_user_stats():
    """A user who hasn't done anything yet"""
    return UserStats(tasks_completed=0, reflections_written=0, streak_count=0, longest_streak=0)


@pytest.fixture
def active_user_stats():
    """A user with some activity in every family"""
    return UserStats(tasks_completed=9, reflections_written=3, streak_count=2, longest_streak=4)


# ============================================================================
# Time Fixtures
# ============================================================================

@pytest.fixture
def frozen_now():
    """Fixed reference time for account age calculations"""
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


# ============================================================================
# Store Fixtures
# ============================================================================

@pytest.fixture
def catalog():
    """Default achievement catalog"""
    return default_catalog()


@pytest.fixture
def store(test_user_id):
    """In-memory store with one registered user"""
    store = InMemoryAchievementStore()
    store.register_user(test_user_id, registered_at=datetime(2024, 5, 1, tzinfo=timezone.utc))
    return store
