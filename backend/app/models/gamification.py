"""Gamification models - badges, achievements, ranks and challenges."""

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CriteriaType(str, Enum):
    """Statistic a badge threshold is compared against."""

    trips_completed = "trips_completed"
    countries_visited = "countries_visited"
    budget_saved = "budget_saved"
    activities_done = "activities_done"


class Rarity(str, Enum):
    """Badge rarity tier."""

    common = "common"
    rare = "rare"
    epic = "epic"
    legendary = "legendary"


class AchievementType(str, Enum):
    """Leveled achievement category."""

    explorer = "explorer"
    saver = "saver"
    adventurer = "adventurer"
    foodie = "foodie"
    photographer = "photographer"


class BadgeCriteria(BaseModel):
    """Single-field threshold a badge requires."""

    model_config = ConfigDict(frozen=True)

    type: CriteriaType
    threshold: int = Field(..., gt=0)


class Badge(BaseModel):
    """Static catalog entry."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    image_url: str
    criteria: BadgeCriteria
    rarity: Rarity


class UserBadge(BaseModel):
    """A badge earned by a user."""

    user_id: str
    badge_id: str
    earned_date: datetime
    progress: float | None = None


class Achievement(BaseModel):
    """Computed level within one achievement category."""

    user_id: str
    type: AchievementType
    level: int
    progress: int
    max_progress: int
    rewards: list[str]


class UserStats(BaseModel):
    """Per-user travel statistics snapshot.

    Budget figures are whole currency units.
    """

    trips_completed: int = 0
    countries_visited: int = 0
    visited_countries: list[str] = Field(default_factory=list)
    total_budget_saved: int = 0
    activities_completed: int = 0
    restaurants_visited: int = 0
    photo_activities: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_activity_date: datetime | None = None
    monthly_budget_saved: int = 0


class TravelerRank(BaseModel):
    """Cumulative-score tier."""

    name: str
    level: int
    points_to_next: int


class RarityStats(BaseModel):
    """Count of earned badges per rarity."""

    common: int = 0
    rare: int = 0
    epic: int = 0
    legendary: int = 0


class NextBadgeInfo(BaseModel):
    """An unearned badge with current progress."""

    badge: Badge
    progress: float
    remaining: int


class StreakData(BaseModel):
    """Activity streak summary."""

    current_streak: int
    longest_streak: int
    last_activity: datetime


class GameProgressReport(BaseModel):
    """Overall gamification progress for a user."""

    completion_percentage: int
    earned_badges: int
    total_badges: int
    next_badges: list[NextBadgeInfo]
    rarity_stats: RarityStats
    total_points: int
    rank: TravelerRank
    streak_data: StreakData


class Challenge(BaseModel):
    """Time-boxed goal offered to a user."""

    id: str
    title: str
    description: str
    type: Literal["daily", "weekly", "monthly", "personal"]
    target: int
    current: int
    reward: str
    expiry_date: datetime
    difficulty: Literal["easy", "medium", "hard"]
