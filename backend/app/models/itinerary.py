"""Itinerary models - the day-by-day plan the budget engine reads and rewrites."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from backend.app.models.budget import BudgetBreakdown
from backend.app.models.common import (
    AccommodationType,
    ActivityType,
    Location,
    MealType,
    TimeWindow,
    TransportMode,
)


class Activity(BaseModel):
    """Single scheduled activity."""

    id: str
    name: str
    description: str = ""
    type: ActivityType = ActivityType.sightseeing
    location: Location
    duration_min: int = Field(60, ge=0)
    cost_cents: int = 0
    rating: float | None = None
    time_slot: TimeWindow | None = None
    booking_required: bool = False
    booking_url: str | None = None


class Meal(BaseModel):
    """Single meal."""

    id: str
    name: str
    type: MealType = MealType.lunch
    location: Location
    cost_cents: int = 0
    cuisine: str = "local"
    rating: float | None = None
    time: datetime | None = None


class Accommodation(BaseModel):
    """Lodging for one night of the trip."""

    id: str
    name: str
    type: AccommodationType = AccommodationType.hotel
    location: Location
    check_in: datetime | None = None
    check_out: datetime | None = None
    cost_per_night_cents: int = 0
    total_cost_cents: int = 0
    rating: float | None = None
    amenities: list[str] = Field(default_factory=list)
    booking_url: str | None = None
    images: list[str] = Field(default_factory=list)


class Transportation(BaseModel):
    """Single transport leg."""

    id: str
    mode: TransportMode
    origin: Location
    destination: Location
    departure: datetime | None = None
    arrival: datetime | None = None
    cost_cents: int = 0
    duration_min: int = Field(0, ge=0)
    provider: str | None = None
    booking_url: str | None = None


class TransportOption(BaseModel):
    """One way of covering a route."""

    id: str
    mode: TransportMode
    duration_min: int
    cost_cents: int
    provider: str | None = None
    stops: list[Location] = Field(default_factory=list)
    carbon_footprint_kg: float | None = None


class Route(BaseModel):
    """Optimized route between two locations."""

    origin: Location
    destination: Location
    options: list[TransportOption] = Field(default_factory=list)
    recommended: str | None = None


def compute_day_total(day: "ItineraryDay") -> int:
    """Sum of a day's accommodation, transport, meal and activity costs."""
    total = day.accommodation.total_cost_cents if day.accommodation else 0
    total += sum(t.cost_cents for t in day.transport)
    total += sum(m.cost_cents for m in day.meals)
    total += sum(a.cost_cents for a in day.activities)
    return total


class ItineraryDay(BaseModel):
    """One calendar day of an itinerary.

    total_cost_cents is a cached sum of the day's children and is always
    recomputed on validation; a supplied value is ignored.
    """

    date: date
    activities: list[Activity] = Field(default_factory=list)
    meals: list[Meal] = Field(default_factory=list)
    accommodation: Accommodation | None = None
    transport: list[Transportation] = Field(default_factory=list)
    total_cost_cents: int = 0

    @model_validator(mode="after")
    def derive_total_cost(self) -> "ItineraryDay":
        """Set total_cost_cents from the children."""
        self.total_cost_cents = compute_day_total(self)
        return self


class Itinerary(BaseModel):
    """Complete itinerary for one trip."""

    id: str
    trip_id: str
    days: list[ItineraryDay] = Field(default_factory=list)
    budget_breakdown: BudgetBreakdown | None = None
    optimized_routes: list[Route] = Field(default_factory=list)
