"""
Service Layer Package

Services sit between the calling layer (HTTP handlers, CLI) and the snapshot
providers that read user data.

- AchievementService: next best achievement, suggestion bundle, threshold proposals
"""

from elevare.services.achievement_service import AchievementService, SnapshotProvider

__all__ = [
    "AchievementService",
    "SnapshotProvider",
]
