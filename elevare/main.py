"""
Command-line entry point

Loads a JSON snapshot of one user's progress and prints the next best
achievement plus the suggestion bundle as JSON.

    python -m elevare.main snapshot.json

Snapshot format:
    {
        "stats": {"tasks_completed": 4, "reflections_written": 0,
                  "streak_count": 2, "longest_streak": 3},
        "unlocked": {"first_task": "2024-05-01T08:00:00+00:00"},
        "achievements": [...]   # optional, defaults to the built-in catalog
    }
"""
import asyncio
import json
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from elevare.config import validate_config, LOG_LEVEL
from elevare.exceptions import ElevareError, ValidationError
from elevare.gamification.store import InMemoryAchievementStore
from elevare.models.achievement import Achievement, UserStats
from elevare.services.achievement_service import AchievementService

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
)

logger = logging.getLogger(__name__)

CLI_USER_ID = "cli"


def load_snapshot(path: Path) -> InMemoryAchievementStore:
    """
    Build an in-memory store holding the snapshot for a single user

    Raises:
        ValidationError: File missing, not JSON, or not a valid snapshot
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ValidationError(f"Cannot read snapshot: {e}", field="path", value=str(path), cause=e)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Snapshot is not valid JSON: {e}", field="path", value=str(path), cause=e)

    if not isinstance(data, dict):
        raise ValidationError("Snapshot must be a JSON object", field="snapshot")

    try:
        achievements: Optional[List[Achievement]] = None
        if "achievements" in data:
            achievements = [Achievement(**item) for item in data["achievements"]]
        stats = UserStats(**data.get("stats", {}))
    except (PydanticValidationError, TypeError) as e:
        raise ValidationError(f"Invalid snapshot: {e}", field="snapshot", cause=e)

    store = InMemoryAchievementStore(achievements)
    store.save_user_stats(CLI_USER_ID, stats)

    unlocked = data.get("unlocked", {})
    if isinstance(unlocked, list):
        unlocked = {achievement_id: None for achievement_id in unlocked}
    if not isinstance(unlocked, dict):
        raise ValidationError("'unlocked' must be an object or a list of ids", field="unlocked")
    for achievement_id, unlocked_at in unlocked.items():
        store.unlock_achievement(CLI_USER_ID, achievement_id, _parse_datetime(unlocked_at))

    return store


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid unlock time {value!r}", field="unlocked", value=value, cause=e)


async def run(path: Path) -> Dict[str, Any]:
    """Compute recommendations for the snapshot at path"""
    store = load_snapshot(path)
    service = AchievementService(store)

    next_best = await service.get_next_best(CLI_USER_ID)
    suggestions = await service.get_suggestions(CLI_USER_ID)

    return {
        "next_best": next_best.model_dump(mode="json") if next_best else None,
        "suggestions": suggestions.model_dump(mode="json"),
    }


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point"""
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) != 1:
        print("usage: python -m elevare.main SNAPSHOT.json", file=sys.stderr)
        return 2

    try:
        validate_config()
        result = asyncio.run(run(Path(argv[0])))
    except ValidationError as e:
        print(e.user_message, file=sys.stderr)
        return 2
    except ElevareError as e:
        print(e.user_message, file=sys.stderr)
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
