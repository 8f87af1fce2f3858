"""
AchievementService - Achievement recommendation orchestration

Fetches a fresh snapshot from the provider on every call and runs the pure
scoring engine over it. Achievements the stats have already earned are
unlocked first so they never show up as recommendations. The service holds
no per-user state; snapshot freshness is the provider's concern.
"""

import logging
from datetime import datetime
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from elevare.exceptions import RecordNotFoundError, wrap_provider_exception
from elevare.gamification.catalog import default_thresholds
from elevare.gamification.next_best import select_next_best
from elevare.gamification.snapshot import build_achievement_progress
from elevare.gamification.suggestions import generate_achievement_suggestions
from elevare.gamification.thresholds import calculate_user_behavior, get_dynamic_threshold_adjustments
from elevare.models.achievement import (
    Achievement,
    AchievementSuggestions,
    AchievementWithProgress,
    RawActivityData,
    ScoredAchievement,
    ThresholdAdjustment,
    UserStats,
)

logger = logging.getLogger(__name__)


class SnapshotProvider(Protocol):
    """Achievements and user progress, plus recording of earned unlocks"""

    async def get_achievements(self) -> List[Achievement]: ...

    async def get_user_stats(self, user_id: str) -> Optional[UserStats]: ...

    async def get_unlocked(self, user_id: str) -> Dict[str, datetime]: ...

    async def get_registration_date(self, user_id: str) -> Optional[datetime]: ...

    async def get_active_days(self, user_id: str) -> int: ...

    async def check_and_unlock(self, user_id: str) -> List[Achievement]: ...


class AchievementService:
    """
    Service for achievement recommendations.

    Responsibilities:
    - Loading the per-request snapshot (catalog, stats, unlocks)
    - Next best achievement selection
    - Suggestion bundle (domino effects, patterns, recommendations)
    - Dynamic threshold proposals
    """

    def __init__(self, provider: SnapshotProvider):
        """
        Initialize AchievementService.

        Args:
            provider: Snapshot provider (database-backed or in-memory)
        """
        self.provider = provider
        logger.debug("AchievementService initialized")

    async def get_next_best(self, user_id: str) -> Optional[ScoredAchievement]:
        """
        Next best achievement for a user.

        Returns:
            ScoredAchievement, or None when everything is unlocked

        Raises:
            RecordNotFoundError: Unknown user
            DataError: Provider failure
        """
        achievements, stats = await self._load_snapshot(user_id, operation="get_next_best")
        return select_next_best(achievements, stats)

    async def get_suggestions(self, user_id: str) -> AchievementSuggestions:
        """
        Full suggestion bundle for a user.

        Raises:
            RecordNotFoundError: Unknown user
            DataError: Provider failure
        """
        achievements, stats = await self._load_snapshot(user_id, operation="get_suggestions")
        return generate_achievement_suggestions(achievements, stats)

    async def get_threshold_adjustments(
        self,
        user_id: str,
        current_thresholds: Optional[Mapping[str, int]] = None,
        now: Optional[datetime] = None
    ) -> List[ThresholdAdjustment]:
        """
        Proposed target changes for a user.

        Args:
            user_id: User identifier
            current_thresholds: Targets per code (defaults to catalog targets)
            now: Reference time for account age

        Raises:
            RecordNotFoundError: Unknown user
            DataError: Provider failure
        """
        operation = "get_threshold_adjustments"
        stats = await self._load_stats(user_id, operation)

        try:
            registered_at = await self.provider.get_registration_date(user_id)
            active_days = await self.provider.get_active_days(user_id)
        except Exception as e:
            raise wrap_provider_exception(e, operation=operation, user_id=user_id)

        if registered_at is None:
            raise RecordNotFoundError(
                f"No registration date for user {user_id}",
                record_type="User",
                record_id=user_id,
                user_id=user_id,
                operation=operation
            )

        reference_time = now or datetime.now(registered_at.tzinfo)
        raw = RawActivityData(
            tasks_completed=stats.tasks_completed,
            reflections_written=stats.reflections_written,
            streak_count=stats.streak_count,
            longest_streak=stats.longest_streak,
            last_active_date=stats.latest_completion_at or reference_time,
            registration_date=registered_at,
            total_days=active_days,
        )
        behavior = calculate_user_behavior(raw, now=now)
        thresholds = current_thresholds if current_thresholds is not None else default_thresholds()

        return get_dynamic_threshold_adjustments(behavior, thresholds)

    async def _load_stats(self, user_id: str, operation: str) -> UserStats:
        try:
            stats = await self.provider.get_user_stats(user_id)
        except Exception as e:
            raise wrap_provider_exception(e, operation=operation, user_id=user_id)

        if stats is None:
            raise RecordNotFoundError(
                f"No stats for user {user_id}",
                record_type="User",
                record_id=user_id,
                user_id=user_id,
                operation=operation
            )
        return stats

    async def _load_snapshot(
        self,
        user_id: str,
        operation: str
    ) -> Tuple[Sequence[AchievementWithProgress], UserStats]:
        stats = await self._load_stats(user_id, operation)

        try:
            # Record anything the current stats have earned before ranking
            newly_unlocked = await self.provider.check_and_unlock(user_id)
            achievements = await self.provider.get_achievements()
            unlocked = await self.provider.get_unlocked(user_id)
        except Exception as e:
            raise wrap_provider_exception(e, operation=operation, user_id=user_id)

        if newly_unlocked:
            logger.info(f"Unlocked {[a.code for a in newly_unlocked]} for user {user_id}")

        return build_achievement_progress(achievements, stats, unlocked), stats
