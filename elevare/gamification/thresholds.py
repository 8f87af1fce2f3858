"""
Dynamic Threshold Adjustment

Analyzes longitudinal user behaviour and proposes new numeric targets for
achievements that look too hard (struggling users) or too easy (very active
users). Nothing is applied here; callers decide what to do with the proposals.

Rule families, dispatched on the code prefix:
- tasks_*: low daily task rate + low completion rate -> reduce (x0.5 for
  accounts younger than a week, x0.7 otherwise); very active long-standing
  users -> increase x1.2
- streak_*: longest streak under half the target on a 2+ week old account ->
  reduce x0.6 (floor 2); longest streak well above the target -> increase x1.3
- reflections_*: rare reflection writers -> reduce x0.4; prolific writers ->
  increase x1.4

Every proposal passes through one gate, is_meaningful_adjustment(): the new
target must be >= 1, the confidence >= ADJUSTMENT_MIN_CONFIDENCE and the
relative change >= ADJUSTMENT_MIN_RELATIVE_CHANGE.
"""

from datetime import datetime, timezone
from typing import Dict, List, Mapping, NamedTuple, Optional
import logging

from elevare import config
from elevare.gamification.catalog import ActivityFamily
from elevare.models.achievement import RawActivityData, ThresholdAdjustment, UserBehaviorData
from elevare.utils.rounding import round_half_up

logger = logging.getLogger(__name__)

# Targets at or below this are already easy enough
MIN_ADJUSTABLE_THRESHOLD = 3

# Smoothing constant for the estimated completion rate
COMPLETION_RATE_PRIOR = 10


class _Candidate(NamedTuple):
    threshold: int
    reason: str
    confidence: float


def analyze_and_adjust_thresholds(
    behavior: UserBehaviorData,
    current_thresholds: Mapping[str, int]
) -> List[ThresholdAdjustment]:
    """
    Analyze user behaviour and suggest threshold adjustments

    Args:
        behavior: Current user behaviour data
        current_thresholds: Current numeric target per achievement code

    Returns:
        Proposed adjustments, most confident first (ties by code)
    """
    adjustments = []

    for code, threshold in current_thresholds.items():
        adjustment = _analyze_achievement_threshold(code, threshold, behavior)
        if adjustment:
            adjustments.append(adjustment)

    adjustments.sort(key=lambda a: (-a.confidence, a.achievement_code))

    if adjustments:
        logger.info(
            f"Proposed {len(adjustments)} threshold adjustment(s): "
            f"{', '.join(f'{a.achievement_code} {a.original_threshold}->{a.adjusted_threshold}' for a in adjustments)}"
        )
    return adjustments


def _analyze_achievement_threshold(
    code: str,
    threshold: int,
    behavior: UserBehaviorData
) -> Optional[ThresholdAdjustment]:
    if threshold <= MIN_ADJUSTABLE_THRESHOLD:
        return None

    family = _threshold_family(code)
    if family == ActivityFamily.TASKS:
        candidate = _adjust_task_threshold(threshold, behavior)
    elif family == ActivityFamily.STREAK:
        candidate = _adjust_streak_threshold(threshold, behavior)
    elif family == ActivityFamily.REFLECTIONS:
        candidate = _adjust_reflection_threshold(threshold, behavior)
    else:
        candidate = None

    if candidate is None:
        return None

    adjustment = ThresholdAdjustment(
        achievement_code=code,
        original_threshold=threshold,
        adjusted_threshold=candidate.threshold,
        adjustment_reason=candidate.reason,
        confidence=candidate.confidence,
    )

    if not is_meaningful_adjustment(adjustment):
        logger.debug(
            f"Dropped adjustment for {code}: {threshold}->{candidate.threshold} "
            f"(confidence={candidate.confidence})"
        )
        return None

    return adjustment


def _threshold_family(code: str) -> ActivityFamily:
    # Threshold rules only apply to counter codes with an explicit underscore
    # prefix, so first_task/first_reflection never match
    if code.startswith("tasks_"):
        return ActivityFamily.TASKS
    if code.startswith("streak_"):
        return ActivityFamily.STREAK
    if code.startswith("reflections_"):
        return ActivityFamily.REFLECTIONS
    return ActivityFamily.OTHER


def _adjust_task_threshold(threshold: int, behavior: UserBehaviorData) -> Optional[_Candidate]:
    """Adjust task-based achievement thresholds"""
    tasks_per_day = behavior.average_tasks_per_day
    completion_rate = behavior.completion_rate

    # Struggling with task completion
    if tasks_per_day < 0.5 and completion_rate < 0.3:
        # New users get more help
        factor = 0.5 if behavior.account_age < 7 else 0.7
        new_threshold = max(1, round_half_up(threshold * factor))
        return _Candidate(
            threshold=new_threshold,
            reason=(
                f"Reduced threshold from {threshold} to {new_threshold} based on low task "
                f"completion rate ({completion_rate * 100:.1f}%)"
            ),
            confidence=0.8,
        )

    # Highly active, raise the bar to keep it engaging
    if tasks_per_day > 2 and completion_rate > 0.8 and behavior.account_age > 30:
        new_threshold = round_half_up(threshold * 1.2)
        return _Candidate(
            threshold=new_threshold,
            reason=(
                f"Increased threshold from {threshold} to {new_threshold} to maintain engagement "
                f"for active user ({tasks_per_day:.1f} tasks/day)"
            ),
            confidence=0.6,
        )

    return None


def _adjust_streak_threshold(threshold: int, behavior: UserBehaviorData) -> Optional[_Candidate]:
    """Adjust streak-based achievement thresholds"""
    longest = behavior.longest_streak

    # Never came close to a streak of this length
    if longest < threshold * 0.5 and behavior.account_age > 14:
        new_threshold = max(2, round_half_up(threshold * 0.6))
        return _Candidate(
            threshold=new_threshold,
            reason=(
                f"Reduced streak threshold from {threshold} to {new_threshold} to help build "
                f"momentum (longest streak: {longest} days)"
            ),
            confidence=0.7,
        )

    if longest > threshold * 1.5 and behavior.average_tasks_per_day > 1:
        new_threshold = round_half_up(threshold * 1.3)
        return _Candidate(
            threshold=new_threshold,
            reason=(
                f"Increased streak threshold from {threshold} to {new_threshold} for consistent "
                f"user (longest streak: {longest} days)"
            ),
            confidence=0.6,
        )

    return None


def _adjust_reflection_threshold(threshold: int, behavior: UserBehaviorData) -> Optional[_Candidate]:
    """Adjust reflection-based achievement thresholds"""
    per_week = behavior.average_reflections_per_week
    written = behavior.reflections_written

    if per_week < 0.5 and written < threshold * 0.3:
        new_threshold = max(1, round_half_up(threshold * 0.4))
        return _Candidate(
            threshold=new_threshold,
            reason=(
                f"Reduced reflection threshold from {threshold} to {new_threshold} to encourage "
                f"reflection practice ({per_week:.1f} reflections/week)"
            ),
            confidence=0.8,
        )

    if per_week > 3 and written > threshold * 0.8:
        new_threshold = round_half_up(threshold * 1.4)
        return _Candidate(
            threshold=new_threshold,
            reason=(
                f"Increased reflection threshold from {threshold} to {new_threshold} for "
                f"reflective user ({per_week:.1f} reflections/week)"
            ),
            confidence=0.7,
        )

    return None


def is_meaningful_adjustment(adjustment: ThresholdAdjustment) -> bool:
    """Single gate every proposed adjustment must pass"""
    if adjustment.adjusted_threshold < 1:
        return False
    if adjustment.confidence < config.ADJUSTMENT_MIN_CONFIDENCE:
        return False
    return adjustment.relative_change >= config.ADJUSTMENT_MIN_RELATIVE_CHANGE


def validate_adjustments(adjustments: List[ThresholdAdjustment]) -> List[ThresholdAdjustment]:
    """
    Validate threshold adjustments before applying

    Drops anything below a target of 1, under-confident, or too small to
    matter. Order is preserved.
    """
    valid = [a for a in adjustments if is_meaningful_adjustment(a)]

    if len(valid) != len(adjustments):
        logger.debug(f"Validation dropped {len(adjustments) - len(valid)} adjustment(s)")
    return valid


def get_dynamic_threshold_adjustments(
    behavior: UserBehaviorData,
    current_thresholds: Mapping[str, int]
) -> List[ThresholdAdjustment]:
    """Analyze and validate in one step"""
    return validate_adjustments(analyze_and_adjust_thresholds(behavior, current_thresholds))


def calculate_user_behavior(raw: RawActivityData, now: Optional[datetime] = None) -> UserBehaviorData:
    """
    Derive behaviour metrics from raw counters

    completion_rate is an estimate, tasks / (tasks + 10): there is no count of
    attempted tasks, and the constant discounts small samples.

    Args:
        raw: Raw counters plus registration date and number of active days
        now: Reference time for account age (defaults to the current UTC time)
    """
    now = now or datetime.now(timezone.utc)
    registered = raw.registration_date
    # Compare naive with naive, aware with aware
    if registered.tzinfo is None and now.tzinfo is not None:
        registered = registered.replace(tzinfo=timezone.utc)
    elif registered.tzinfo is not None and now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    account_age = max(1, int((now - registered).total_seconds() // 86400))
    active_days = max(1, raw.total_days)
    tasks = raw.tasks_completed

    if tasks > 0:
        completion_rate = min(1.0, tasks / (tasks + COMPLETION_RATE_PRIOR))
    else:
        completion_rate = 0.0

    return UserBehaviorData(
        tasks_completed=tasks,
        reflections_written=raw.reflections_written,
        streak_count=raw.streak_count,
        longest_streak=raw.longest_streak,
        average_tasks_per_day=tasks / active_days,
        average_reflections_per_week=raw.reflections_written / active_days * 7,
        completion_rate=completion_rate,
        last_active_date=raw.last_active_date,
        account_age=account_age,
    )


def thresholds_from_adjustments(
    current_thresholds: Mapping[str, int],
    adjustments: List[ThresholdAdjustment]
) -> Dict[str, int]:
    """New threshold map with the adjustments applied (input left untouched)"""
    updated = dict(current_thresholds)
    for adjustment in adjustments:
        updated[adjustment.achievement_code] = adjustment.adjusted_threshold
    return updated
