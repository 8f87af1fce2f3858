"""Achievement models for recommendation and threshold analysis"""
from enum import Enum
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class AchievementCategory(str, Enum):
    """Achievement categories"""
    TASK = "TASK"
    STREAK = "STREAK"
    REFLECTION = "REFLECTION"
    OTHER = "OTHER"


class Priority(str, Enum):
    """Priority tier derived from an achievement score"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Achievement(BaseModel):
    """Achievement definition"""
    id: str
    code: str
    title: str
    description: str
    icon: Optional[str] = None
    # Plain string so that unrecognised categories still reach the scorer
    category: str = AchievementCategory.OTHER.value


class AchievementProgress(BaseModel):
    """A user's progress toward one achievement"""
    target: Optional[int] = Field(None, ge=0)  # None/0 for non-numeric achievements
    current: int = Field(0, ge=0)
    unlocked: bool = False
    unlocked_at: Optional[datetime] = None
    condition_text: Optional[str] = None

    @property
    def has_target(self) -> bool:
        return bool(self.target and self.target > 0)

    @property
    def percentage(self) -> float:
        """Progress toward target, 0-100"""
        if not self.has_target:
            return 0.0
        return min(100.0, self.current / self.target * 100)

    @property
    def remaining(self) -> Optional[int]:
        """How many more are needed, None when there is no numeric target"""
        if not self.has_target:
            return None
        return self.target - self.current


class AchievementWithProgress(Achievement):
    """Achievement joined with the user's progress"""
    progress: AchievementProgress = Field(default_factory=AchievementProgress)

    def to_achievement(self) -> Achievement:
        return Achievement(**self.model_dump(exclude={"progress"}))


class UserStats(BaseModel):
    """Aggregate activity counters for one user"""
    tasks_completed: int = Field(0, ge=0)
    reflections_written: int = Field(0, ge=0)
    streak_count: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    latest_completion_at: Optional[datetime] = None


class ScoredAchievement(BaseModel):
    """The selected next-best achievement with its justification"""
    achievement: Achievement
    progress: AchievementProgress
    score: int
    priority: Priority
    reason: str
    suggestion: str


class DominoEffect(BaseModel):
    """An achievement whose unlock starts a chain of related achievements"""
    trigger: str
    unlocks: List[str]
    description: str


class PatternTag(BaseModel):
    """Qualitative behavioural tag"""
    type: str  # task_focused, reflection_focused, consistent
    strength: float = Field(ge=0, le=100)
    description: str


class Recommendation(BaseModel):
    """A single targeted recommendation (quick win, pattern match, beginner)"""
    type: str
    achievement: AchievementWithProgress
    reason: str
    priority: Priority


class RankedAchievement(AchievementWithProgress):
    """Locked achievement ranked by the suggestion bundle"""
    score: int


class AchievementSuggestions(BaseModel):
    """Full suggestion bundle returned to the UI"""
    next_best: Optional[RankedAchievement] = None
    domino_effects: List[DominoEffect] = Field(default_factory=list)
    patterns: List[PatternTag] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)


class RawActivityData(BaseModel):
    """Raw counters used to derive UserBehaviorData"""
    tasks_completed: int = Field(0, ge=0)
    reflections_written: int = Field(0, ge=0)
    streak_count: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    last_active_date: datetime
    registration_date: datetime
    total_days: int = Field(0, ge=0)  # days with any activity


class UserBehaviorData(BaseModel):
    """Longitudinal behaviour metrics for threshold analysis"""
    tasks_completed: int = Field(0, ge=0)
    reflections_written: int = Field(0, ge=0)
    streak_count: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    average_tasks_per_day: float = Field(0.0, ge=0)
    average_reflections_per_week: float = Field(0.0, ge=0)
    completion_rate: float = Field(0.0, ge=0, le=1)
    last_active_date: Optional[datetime] = None
    account_age: int = Field(1, ge=0)  # days since registration


class ThresholdAdjustment(BaseModel):
    """Proposed change to an achievement's numeric target"""
    achievement_code: str
    original_threshold: int
    adjusted_threshold: int
    adjustment_reason: str
    confidence: float = Field(ge=0, le=1)

    @property
    def relative_change(self) -> float:
        if self.original_threshold == 0:
            return 0.0
        return abs(self.adjusted_threshold - self.original_threshold) / self.original_threshold
