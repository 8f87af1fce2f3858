"""
In-memory achievement store

Holds the achievement catalog and per-user counters/unlocks in process
memory. Nothing is persisted. Create one store and pass it to the services
that need it; there is no module-level instance.

Implements the SnapshotProvider protocol used by AchievementService, so a
database-backed provider can replace it without touching the service.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence
import logging

from elevare.gamification.catalog import default_catalog
from elevare.gamification.unlocks import check_unlocks
from elevare.models.achievement import Achievement, UserStats

logger = logging.getLogger(__name__)


class InMemoryAchievementStore:
    """In-memory snapshot provider"""

    def __init__(self, achievements: Optional[Sequence[Achievement]] = None):
        self._achievements: List[Achievement] = list(achievements) if achievements is not None else default_catalog()
        self._user_stats: Dict[str, UserStats] = {}
        self._unlocked: Dict[str, Dict[str, datetime]] = {}
        self._registered_at: Dict[str, datetime] = {}
        self._active_days: Dict[str, int] = {}

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def register_user(self, user_id: str, registered_at: Optional[datetime] = None) -> None:
        """Register a user with zeroed stats (no-op for known users)"""
        if user_id in self._user_stats:
            return
        self._user_stats[user_id] = UserStats()
        self._unlocked[user_id] = {}
        self._registered_at[user_id] = registered_at or datetime.now(timezone.utc)
        self._active_days[user_id] = 0
        logger.debug(f"Registered user {user_id}")

    def save_user_stats(self, user_id: str, stats: UserStats, active_days: Optional[int] = None) -> None:
        self.register_user(user_id)
        self._user_stats[user_id] = stats
        if active_days is not None:
            self._active_days[user_id] = active_days

    def unlock_achievement(self, user_id: str, achievement_id: str, unlocked_at: Optional[datetime] = None) -> bool:
        """
        Record an unlock

        Unlocks are one-way: unlocking again keeps the original timestamp.

        Returns:
            True if this call unlocked the achievement, False if it already was
        """
        self.register_user(user_id)
        user_unlocks = self._unlocked[user_id]
        if achievement_id in user_unlocks:
            return False

        user_unlocks[achievement_id] = unlocked_at or datetime.now(timezone.utc)
        logger.info(f"User {user_id} unlocked achievement {achievement_id}")
        return True

    async def check_and_unlock(self, user_id: str) -> List[Achievement]:
        """
        Unlock every achievement the user's current stats have earned

        Returns:
            Achievements unlocked by this call
        """
        stats = self._user_stats.get(user_id)
        if stats is None:
            return []

        achievements = await self.get_achievements()
        earned = check_unlocks(achievements, stats, self._unlocked[user_id])

        newly_unlocked = [
            achievement for achievement in earned
            if self.unlock_achievement(user_id, achievement.id)
        ]
        return newly_unlocked

    # ------------------------------------------------------------------
    # SnapshotProvider
    # ------------------------------------------------------------------

    def has_user(self, user_id: str) -> bool:
        return user_id in self._user_stats

    async def get_achievements(self) -> List[Achievement]:
        return list(self._achievements)

    async def get_user_stats(self, user_id: str) -> Optional[UserStats]:
        return self._user_stats.get(user_id)

    async def get_unlocked(self, user_id: str) -> Dict[str, datetime]:
        """achievement id -> unlock time"""
        return dict(self._unlocked.get(user_id, {}))

    async def get_registration_date(self, user_id: str) -> Optional[datetime]:
        return self._registered_at.get(user_id)

    async def get_active_days(self, user_id: str) -> int:
        return self._active_days.get(user_id, 0)
