"""Models package - re-exports for convenience."""

from backend.app.models.budget import (
    AdjustmentOption,
    BudgetAdjustmentSuggestions,
    BudgetAlert,
    BudgetBreakdown,
    BudgetReport,
    SpendingVariance,
)
from backend.app.models.common import (
    AccommodationType,
    ActivityType,
    AlertType,
    BudgetCategory,
    Geo,
    Location,
    MealType,
    TimeWindow,
    TransportMode,
    TripStatus,
)
from backend.app.models.gamification import (
    Achievement,
    Badge,
    BadgeCriteria,
    Challenge,
    GameProgressReport,
    TravelerRank,
    UserBadge,
    UserStats,
)
from backend.app.models.itinerary import (
    Accommodation,
    Activity,
    Itinerary,
    ItineraryDay,
    Meal,
    Route,
    Transportation,
    TransportOption,
)
from backend.app.models.optimization import OptimizationResult
from backend.app.models.trip import Destination, TravelPreferences, Traveler, Trip

__all__ = [
    # Common
    "Geo",
    "Location",
    "TimeWindow",
    "ActivityType",
    "AccommodationType",
    "TransportMode",
    "MealType",
    "TripStatus",
    "BudgetCategory",
    "AlertType",
    # Trip
    "Trip",
    "Destination",
    "Traveler",
    "TravelPreferences",
    # Itinerary
    "Itinerary",
    "ItineraryDay",
    "Activity",
    "Meal",
    "Accommodation",
    "Transportation",
    "TransportOption",
    "Route",
    # Budget
    "BudgetAlert",
    "BudgetBreakdown",
    "SpendingVariance",
    "BudgetReport",
    "AdjustmentOption",
    "BudgetAdjustmentSuggestions",
    "OptimizationResult",
    # Gamification
    "Badge",
    "BadgeCriteria",
    "UserBadge",
    "Achievement",
    "UserStats",
    "TravelerRank",
    "GameProgressReport",
    "Challenge",
]
