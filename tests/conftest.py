"""Shared pytest fixtures for all test suites."""

from collections.abc import Callable
from datetime import date

import pytest

from backend.app.models import (
    Accommodation,
    Activity,
    Destination,
    Geo,
    Itinerary,
    ItineraryDay,
    Location,
    Meal,
    Transportation,
    TransportMode,
    Trip,
)

PARIS = Geo(lat=48.8566, lon=2.3522)


@pytest.fixture
def location() -> Location:
    """A location in central Paris."""
    return Location(name="Paris Center", address="Paris", coordinates=PARIS)


@pytest.fixture
def trip() -> Trip:
    """A four-day Paris trip with a 1,000.00 budget."""
    return Trip(
        id="trip_001",
        user_id="user_001",
        title="Paris getaway",
        destination=Destination(
            name="Paris",
            country="France",
            city="Paris",
            coordinates=PARIS,
            timezone="Europe/Paris",
            currency="EUR",
        ),
        start_date=date(2025, 6, 10),
        end_date=date(2025, 6, 14),
        total_budget_cents=100000,
        currency="EUR",
    )


@pytest.fixture
def make_day(location: Location) -> Callable[..., ItineraryDay]:
    """Factory for itinerary days from plain cent amounts.

    Usage:
        make_day(date(2025, 6, 10), accommodation=20000, transport=[1500],
                 meals=[1000, 3000], activities=[2000, 1500])
    """

    def _make(
        day_date: date,
        accommodation: int | None = None,
        transport: list[int] | None = None,
        meals: list[int] | None = None,
        activities: list[int] | None = None,
    ) -> ItineraryDay:
        tag = day_date.isoformat()
        return ItineraryDay(
            date=day_date,
            accommodation=(
                Accommodation(
                    id=f"acc_{tag}",
                    name=f"Hotel {tag}",
                    location=location,
                    cost_per_night_cents=accommodation,
                    total_cost_cents=accommodation,
                )
                if accommodation is not None
                else None
            ),
            transport=[
                Transportation(
                    id=f"leg_{tag}_{i}",
                    mode=TransportMode.train,
                    origin=location,
                    destination=location,
                    cost_cents=cost,
                )
                for i, cost in enumerate(transport or [])
            ],
            meals=[
                Meal(id=f"meal_{tag}_{i}", name=f"Meal {i}", location=location, cost_cents=cost)
                for i, cost in enumerate(meals or [])
            ],
            activities=[
                Activity(
                    id=f"act_{tag}_{i}",
                    name=f"Activity {i}",
                    location=location,
                    cost_cents=cost,
                )
                for i, cost in enumerate(activities or [])
            ],
        )

    return _make


@pytest.fixture
def sample_itinerary(make_day: Callable[..., ItineraryDay]) -> Itinerary:
    """Two-day itinerary totalling 355.00."""
    return Itinerary(
        id="itinerary_001",
        trip_id="trip_001",
        days=[
            make_day(
                date(2025, 6, 10),
                accommodation=20000,
                transport=[1500],
                meals=[1000, 3000],
                activities=[2000, 1500],
            ),
            make_day(date(2025, 6, 11), meals=[1000, 2500], activities=[3000]),
        ],
    )
