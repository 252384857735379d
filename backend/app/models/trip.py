"""Trip models - the planning context an itinerary belongs to."""

from datetime import date
from typing import Literal

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from backend.app.models.common import (
    AccommodationType,
    ActivityType,
    Geo,
    TransportMode,
    TripStatus,
)


class Destination(BaseModel):
    """Trip destination."""

    name: str
    country: str
    city: str | None = None
    coordinates: Geo
    timezone: str = Field("UTC", description="IANA timezone, e.g., 'Europe/Paris'")
    currency: str = "USD"


class TravelPreferences(BaseModel):
    """Traveler preferences used to shape generated itineraries."""

    destinations: list[str] = Field(default_factory=list)
    activities: list[ActivityType] = Field(default_factory=list)
    accommodation_type: list[AccommodationType] = Field(default_factory=list)
    transport_modes: list[TransportMode] = Field(default_factory=list)
    dietary_restrictions: list[str] = Field(default_factory=list)
    accessibility: bool = False
    language_preference: list[str] = Field(default_factory=list)


class Traveler(BaseModel):
    """Person taking part in a trip."""

    id: str
    name: str
    email: str | None = None
    age: int = Field(..., ge=0)
    role: Literal["organizer", "traveler"] = "traveler"
    preferences: TravelPreferences = Field(default_factory=TravelPreferences)


class Trip(BaseModel):
    """A planned trip with a single-currency budget."""

    id: str
    user_id: str
    title: str = ""
    destination: Destination
    start_date: date
    end_date: date
    total_budget_cents: int = Field(..., ge=0)
    currency: str = "USD"
    status: TripStatus = TripStatus.planning
    travelers: list[Traveler] = Field(default_factory=list)

    @field_validator("end_date")
    @classmethod
    def validate_end_after_start(cls, v: date, info: ValidationInfo) -> date:
        """Ensure end_date >= start_date."""
        if "start_date" in info.data and v < info.data["start_date"]:
            raise ValueError("end_date must be >= start_date")
        return v
