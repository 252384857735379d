"""Common types and enums shared across all models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class Geo(BaseModel):
    """Geographic coordinates (WGS84)."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class Location(BaseModel):
    """Named place with coordinates."""

    name: str
    address: str = ""
    coordinates: Geo
    place_id: str | None = None


class TimeWindow(BaseModel):
    """Scheduled time window."""

    start: datetime
    end: datetime


class ActivityType(str, Enum):
    """Kind of activity."""

    sightseeing = "sightseeing"
    adventure = "adventure"
    cultural = "cultural"
    nightlife = "nightlife"
    shopping = "shopping"
    food = "food"
    nature = "nature"
    relaxation = "relaxation"
    photography = "photography"
    history = "history"


class AccommodationType(str, Enum):
    """Kind of accommodation."""

    hotel = "hotel"
    hostel = "hostel"
    airbnb = "airbnb"
    guesthouse = "guesthouse"
    resort = "resort"
    camping = "camping"
    boutique = "boutique"


class TransportMode(str, Enum):
    """Transport mode."""

    flight = "flight"
    train = "train"
    bus = "bus"
    car = "car"
    bike = "bike"
    walk = "walk"
    ferry = "ferry"
    rideshare = "rideshare"


class MealType(str, Enum):
    """Meal slot."""

    breakfast = "breakfast"
    lunch = "lunch"
    dinner = "dinner"
    snack = "snack"


class TripStatus(str, Enum):
    """Trip lifecycle status."""

    planning = "planning"
    confirmed = "confirmed"
    active = "active"
    completed = "completed"
    cancelled = "cancelled"


class BudgetCategory(str, Enum):
    """Fixed budget category taxonomy (declaration order is significant)."""

    accommodation = "accommodation"
    transport = "transport"
    food = "food"
    activities = "activities"
    shopping = "shopping"
    miscellaneous = "miscellaneous"


class AlertType(str, Enum):
    """Budget alert tag."""

    warning = "warning"
    exceeded = "exceeded"
    recommendation = "recommendation"


BUDGET_CATEGORIES: tuple[str, ...] = tuple(c.value for c in BudgetCategory)


def format_cents(amount_cents: int | float) -> str:
    """Render an amount in minor units with two decimals (e.g. 12345 -> '123.45')."""
    return f"{amount_cents / 100:.2f}"
