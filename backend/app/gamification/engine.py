"""Gamification rules engine - derives badges, achievements and ranks from stats.

Every operation is a pure derivation from a UserStats snapshot; nothing here
persists state. check_badge_eligibility does not dedupe, so callers must
dedupe by (user_id, badge_id) before storing earned badges.
"""

import math
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from backend.app.gamification.badges import BADGE_CATALOG
from backend.app.models.gamification import (
    Achievement,
    AchievementType,
    Badge,
    Challenge,
    CriteriaType,
    GameProgressReport,
    NextBadgeInfo,
    RarityStats,
    StreakData,
    TravelerRank,
    UserBadge,
    UserStats,
)
from backend.app.models.trip import Trip

RARITY_POINTS = {"common": 10, "rare": 25, "epic": 50, "legendary": 100}

# (exclusive upper bound, rank name); the last rank is open-ended
RANK_LADDER: list[tuple[int | None, str]] = [
    (100, "Novice Traveler"),
    (300, "Explorer"),
    (600, "Seasoned Traveler"),
    (1000, "Travel Expert"),
    (1500, "Globetrotter"),
    (2500, "World Navigator"),
    (4000, "Travel Master"),
    (None, "Legendary Explorer"),
]

# Placeholder per-trip increments until stats are derived from the itinerary
EST_ACTIVITIES_PER_TRIP = 5
EST_RESTAURANTS_PER_TRIP = 3
EST_PHOTO_ACTIVITIES_PER_TRIP = 2

MAX_NEXT_BADGES = 5


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def stat_value(criteria_type: CriteriaType, stats: UserStats) -> int:
    """Current value of the statistic a badge criterion reads."""
    if criteria_type == CriteriaType.trips_completed:
        return stats.trips_completed
    if criteria_type == CriteriaType.countries_visited:
        return stats.countries_visited
    if criteria_type == CriteriaType.budget_saved:
        return stats.total_budget_saved
    if criteria_type == CriteriaType.activities_done:
        return stats.activities_completed
    return 0


def rank_points(stats: UserStats) -> int:
    """Weighted score the rank ladder is evaluated on."""
    return (
        stats.trips_completed * 20
        + stats.countries_visited * 15
        + stats.activities_completed * 2
        + stats.total_budget_saved // 100
    )


class GamificationEngine:
    """Rules engine over a shared, immutable badge catalog."""

    def __init__(self, catalog: Sequence[Badge] = BADGE_CATALOG) -> None:
        self.catalog = catalog
        self._by_id = {badge.id: badge for badge in catalog}

    def meets_criteria(self, badge: Badge, stats: UserStats) -> bool:
        """Whether stats reach the badge threshold."""
        return stat_value(badge.criteria.type, stats) >= badge.criteria.threshold

    def calculate_progress(self, badge: Badge, stats: UserStats) -> float:
        """Progress toward a badge in percent, capped at 100."""
        current = stat_value(badge.criteria.type, stats)
        return min(current / badge.criteria.threshold * 100, 100.0)

    def check_badge_eligibility(
        self,
        user_id: str,
        stats: UserStats,
        now: datetime | None = None,
    ) -> list[UserBadge]:
        """Return a UserBadge for every catalog badge the stats qualify for."""
        earned_at = now or datetime.now(UTC)
        return [
            UserBadge(
                user_id=user_id,
                badge_id=badge.id,
                earned_date=earned_at,
                progress=self.calculate_progress(badge, stats),
            )
            for badge in self.catalog
            if self.meets_criteria(badge, stats)
        ]

    def calculate_achievements(self, user_id: str, stats: UserStats) -> list[Achievement]:
        """Compute the five leveled achievements.

        level = metric // divisor + 1 and progress = metric % divisor; levels
        are unbounded.
        """
        explorer_level = stats.countries_visited // 3 + 1
        saver_level = stats.total_budget_saved // 1000 + 1
        adventurer_level = stats.activities_completed // 10 + 1
        foodie_level = stats.restaurants_visited // 15 + 1
        photographer_level = stats.photo_activities // 8 + 1

        return [
            Achievement(
                user_id=user_id,
                type=AchievementType.explorer,
                level=explorer_level,
                progress=stats.countries_visited % 3,
                max_progress=3,
                rewards=[f"Unlock destination recommendations for level {explorer_level}"],
            ),
            Achievement(
                user_id=user_id,
                type=AchievementType.saver,
                level=saver_level,
                progress=stats.total_budget_saved % 1000,
                max_progress=1000,
                rewards=[f"{saver_level * 5}% discount on premium features"],
            ),
            Achievement(
                user_id=user_id,
                type=AchievementType.adventurer,
                level=adventurer_level,
                progress=stats.activities_completed % 10,
                max_progress=10,
                rewards=[f"Unlock {adventurer_level * 2} new activity categories"],
            ),
            Achievement(
                user_id=user_id,
                type=AchievementType.foodie,
                level=foodie_level,
                progress=stats.restaurants_visited % 15,
                max_progress=15,
                rewards=[f"Access to {foodie_level * 3} exclusive restaurant recommendations"],
            ),
            Achievement(
                user_id=user_id,
                type=AchievementType.photographer,
                level=photographer_level,
                progress=stats.photo_activities % 8,
                max_progress=8,
                rewards=[
                    f"Unlock {photographer_level * 2} scenic photography spots per destination"
                ],
            ),
        ]

    def calculate_rank(self, stats: UserStats) -> TravelerRank:
        """Resolve the rank ladder; the top rank has points_to_next == 0."""
        points = rank_points(stats)
        for level, (upper, name) in enumerate(RANK_LADDER, start=1):
            if upper is not None and points < upper:
                return TravelerRank(name=name, level=level, points_to_next=upper - points)
        _, top_name = RANK_LADDER[-1]
        return TravelerRank(name=top_name, level=len(RANK_LADDER), points_to_next=0)

    def calculate_total_points(self, user_badges: Sequence[UserBadge]) -> int:
        """Sum rarity points of earned badges; unknown badge ids score nothing."""
        total = 0
        for user_badge in user_badges:
            badge = self._by_id.get(user_badge.badge_id)
            if badge:
                total += RARITY_POINTS[badge.rarity.value]
        return total

    def calculate_rarity_stats(self, user_badges: Sequence[UserBadge]) -> RarityStats:
        """Count earned badges per rarity."""
        counts = dict.fromkeys(RARITY_POINTS, 0)
        for user_badge in user_badges:
            badge = self._by_id.get(user_badge.badge_id)
            if badge:
                counts[badge.rarity.value] += 1
        return RarityStats(**counts)

    def get_next_badges_to_earn(
        self,
        stats: UserStats,
        user_badges: Sequence[UserBadge],
    ) -> list[NextBadgeInfo]:
        """Up to five unearned badges, closest to completion first."""
        earned_ids = {ub.badge_id for ub in user_badges}
        candidates = [
            NextBadgeInfo(
                badge=badge,
                progress=self.calculate_progress(badge, stats),
                remaining=badge.criteria.threshold - stat_value(badge.criteria.type, stats),
            )
            for badge in self.catalog
            if badge.id not in earned_ids
        ]
        candidates.sort(key=lambda info: -info.progress)
        return candidates[:MAX_NEXT_BADGES]

    def generate_progress_report(
        self,
        stats: UserStats,
        user_badges: Sequence[UserBadge],
        now: datetime | None = None,
    ) -> GameProgressReport:
        """Build the overall progress report for a user."""
        total_badges = len(self.catalog)
        earned = len(user_badges)
        completion = earned / total_badges * 100 if total_badges else 0.0

        return GameProgressReport(
            completion_percentage=math.floor(completion + 0.5),
            earned_badges=earned,
            total_badges=total_badges,
            next_badges=self.get_next_badges_to_earn(stats, user_badges),
            rarity_stats=self.calculate_rarity_stats(user_badges),
            total_points=self.calculate_total_points(user_badges),
            rank=self.calculate_rank(stats),
            streak_data=StreakData(
                current_streak=stats.current_streak,
                longest_streak=stats.longest_streak,
                last_activity=stats.last_activity_date or now or datetime.now(UTC),
            ),
        )

    def update_user_stats(
        self,
        stats: UserStats,
        trip: Trip,
        completed: bool = False,
        now: datetime | None = None,
    ) -> UserStats:
        """Fold a completed trip into a new stats snapshot.

        Returns the input unchanged unless completed is True. Budget saved is
        the full trip budget until actual spend is tracked, and the activity,
        restaurant and photo counters grow by fixed estimates.
        """
        if not completed:
            return stats

        today = _as_utc(now or datetime.now(UTC))
        new_stats = stats.model_copy(deep=True)

        new_stats.trips_completed += 1

        visited = list(dict.fromkeys([*new_stats.visited_countries, trip.destination.country]))
        new_stats.visited_countries = visited
        new_stats.countries_visited = len(visited)

        actual_spent = 0
        budget_saved = max(0, trip.total_budget_cents // 100 - actual_spent)
        new_stats.total_budget_saved += budget_saved

        new_stats.activities_completed += EST_ACTIVITIES_PER_TRIP
        new_stats.restaurants_visited += EST_RESTAURANTS_PER_TRIP
        new_stats.photo_activities += EST_PHOTO_ACTIVITIES_PER_TRIP

        if new_stats.last_activity_date is None:
            days_since = None
        else:
            days_since = (today - _as_utc(new_stats.last_activity_date)).days

        if days_since == 1:
            new_stats.current_streak += 1
        elif days_since is None or days_since > 1:
            new_stats.current_streak = 1

        new_stats.longest_streak = max(new_stats.longest_streak, new_stats.current_streak)
        new_stats.last_activity_date = today

        return new_stats

    def generate_challenges(self, stats: UserStats, now: datetime | None = None) -> list[Challenge]:
        """Weekly, monthly and stat-driven personal challenges."""
        issued_at = now or datetime.now(UTC)
        challenges = [
            Challenge(
                id="weekly_planner",
                title="Weekly Planner",
                description="Plan 2 trips this week",
                type="weekly",
                target=2,
                current=0,
                reward="Unlock premium destination suggestions",
                expiry_date=issued_at + timedelta(days=7),
                difficulty="easy",
            ),
            Challenge(
                id="budget_optimizer",
                title="Budget Optimizer",
                description="Save $500 total across all trips this month",
                type="monthly",
                target=500,
                current=stats.monthly_budget_saved,
                reward="25% discount on premium features",
                expiry_date=issued_at + timedelta(days=30),
                difficulty="medium",
            ),
        ]

        if stats.countries_visited < 5:
            challenges.append(
                Challenge(
                    id="country_explorer",
                    title="Country Explorer",
                    description=f"Visit {5 - stats.countries_visited} more countries",
                    type="personal",
                    target=5,
                    current=stats.countries_visited,
                    reward="World Explorer badge",
                    expiry_date=issued_at + timedelta(days=90),
                    difficulty="hard",
                )
            )

        return challenges
