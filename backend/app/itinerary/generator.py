"""Itinerary generation - LLM-backed with a deterministic local fallback."""

import json
import logging
import random
import re
import zlib
from datetime import date, datetime, time, timedelta
from typing import Any
from urllib.parse import quote

from backend.app.budget.aggregator import calculate_trip_budget
from backend.app.config import Settings, get_settings
from backend.app.llm.client import SYSTEM_PROMPT, ItineraryLLMClient, get_llm_client
from backend.app.models.common import (
    AccommodationType,
    ActivityType,
    Geo,
    Location,
    MealType,
    TimeWindow,
    TransportMode,
)
from backend.app.models.itinerary import (
    Accommodation,
    Activity,
    Itinerary,
    ItineraryDay,
    Meal,
    Transportation,
)
from backend.app.models.trip import Destination, TravelPreferences, Trip
from backend.app.utils.logging import StructuredBudgetLogger
from backend.app.utils.metrics import PrometheusBudgetMetrics

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

# Activities above this cost need advance booking
BOOKING_THRESHOLD_CENTS = 2000

_structured_logger = StructuredBudgetLogger()
_metrics = PrometheusBudgetMetrics()


def trip_duration_days(trip: Trip) -> int:
    """Number of planned days (at least one)."""
    return max(1, (trip.end_date - trip.start_date).days)


def seeded_rng(trip: Trip, settings: Settings | None = None) -> random.Random:
    """RNG seeded from the trip and destination so output is reproducible."""
    settings = settings or get_settings()
    key = f"{trip.id}:{trip.destination.name}:{trip.destination.country}"
    return random.Random(zlib.crc32(key.encode()) ^ settings.fallback_rng_seed)


def _new_id(rng: random.Random) -> str:
    return f"{rng.getrandbits(36):09x}"


def _rating(rng: random.Random) -> float:
    return round(rng.uniform(3.0, 5.0), 1)


def _to_cents(value: Any) -> int:
    """Convert a major-unit amount from generated JSON to cents."""
    try:
        return round(float(value) * 100)
    except (TypeError, ValueError):
        return 0


def _parse_datetime(value: Any, fallback: datetime | None = None) -> datetime | None:
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return fallback
    return fallback


def accommodation_images(name: str) -> list[str]:
    """Placeholder gallery for an accommodation."""
    views = [
        "exterior view with modern architecture and welcoming entrance",
        "comfortable guest room with modern amenities and cozy atmosphere",
        "lobby area with elegant design and comfortable seating",
    ]
    return [f"https://placehold.co/800x600?text={quote(f'{name} {view}')}" for view in views]


def build_itinerary_prompt(trip: Trip, preferences: TravelPreferences) -> str:
    """Build the user prompt describing the trip and the expected JSON shape."""
    duration = trip_duration_days(trip)
    lead = trip.travelers[0] if trip.travelers else None
    travel_style = (
        ", ".join(a.value for a in lead.preferences.activities)
        if lead and lead.preferences.activities
        else "general tourism"
    )

    def _join(values: list[Any]) -> str:
        return ", ".join(getattr(v, "value", v) for v in values)

    return f"""
Create a detailed {duration}-day travel itinerary for {trip.destination.name}, {trip.destination.country}.

Trip Details:
- Budget: {trip.total_budget_cents / 100:.2f} {trip.currency}
- Travelers: {max(1, len(trip.travelers))} person(s)
- Dates: {trip.start_date.isoformat()} to {trip.end_date.isoformat()}

Preferences:
- Travel Style: {travel_style}
- Accommodation: {_join(preferences.accommodation_type)}
- Activities: {_join(preferences.activities)}
- Transport: {_join(preferences.transport_modes)}
- Dietary: {_join(preferences.dietary_restrictions) or "none"}

Return a JSON object: {{"days": [...]}} where each day has
"date" (YYYY-MM-DD), "activities", "meals", optional "accommodation" and "transport".
Costs are plain numbers in {trip.currency}. Locations look like
{{"name": ..., "address": ..., "coordinates": {{"lat": 0, "lng": 0}}}}.
- activity: name, description, type, duration (minutes), cost, location,
  timeSlot {{start, end}} (ISO 8601)
- meal: name, type (breakfast|lunch|dinner|snack), cost, cuisine, location, time
- accommodation: name, type, costPerNight, location, amenities
- transport: mode, from, to, cost, duration, departure, arrival

Focus on:
1. Budget-conscious recommendations
2. Logical geographic flow
3. Time-efficient scheduling
4. Local authentic experiences
5. Mix of must-see attractions and hidden gems
"""


def parse_ai_response(content: str) -> dict[str, Any]:
    """Extract the JSON object from a model completion.

    Raises:
        ValueError: If the content is empty or holds no valid JSON object
    """
    if not content or not content.strip():
        raise ValueError("No content in response")

    match = _JSON_OBJECT.search(content)
    json_str = match.group(0) if match else content
    data = json.loads(json_str)
    if not isinstance(data, dict):
        raise ValueError("Response JSON is not an object")
    return data


def _location(raw: Any, destination: Destination) -> Location:
    if not isinstance(raw, dict):
        return Location(name=destination.name, address="", coordinates=destination.coordinates)
    coords = raw.get("coordinates") or {}
    try:
        geo = Geo(lat=float(coords["lat"]), lon=float(coords.get("lng", coords.get("lon"))))
    except (KeyError, TypeError, ValueError):
        geo = destination.coordinates
    return Location(
        name=str(raw.get("name") or destination.name),
        address=str(raw.get("address") or ""),
        coordinates=geo,
    )


def _enum_or(enum_cls: Any, value: Any, default: Any) -> Any:
    try:
        return enum_cls(value)
    except ValueError:
        return default


def enhance_with_local_data(
    raw: dict[str, Any],
    trip: Trip,
    rng: random.Random | None = None,
) -> Itinerary:
    """Turn raw generated JSON into a validated itinerary.

    Missing optional parts (accommodation on travel days, ratings, times) are
    tolerated. Ids and ratings come from the seeded RNG; day totals and the
    budget breakdown are computed.
    """
    rng = rng or seeded_rng(trip)
    destination = trip.destination
    days: list[ItineraryDay] = []

    for offset, raw_day in enumerate(raw.get("days") or []):
        try:
            day_date = date.fromisoformat(str(raw_day.get("date"))[:10])
        except ValueError:
            day_date = trip.start_date + timedelta(days=offset)

        activities = []
        for raw_activity in raw_day.get("activities") or []:
            slot = raw_activity.get("timeSlot") or {}
            start = _parse_datetime(slot.get("start"))
            end = _parse_datetime(slot.get("end"))
            cost = _to_cents(raw_activity.get("cost"))
            activities.append(
                Activity(
                    id=_new_id(rng),
                    name=str(raw_activity.get("name") or "Activity"),
                    description=str(raw_activity.get("description") or ""),
                    type=_enum_or(ActivityType, raw_activity.get("type"), ActivityType.sightseeing),
                    location=_location(raw_activity.get("location"), destination),
                    duration_min=max(0, int(raw_activity.get("duration") or 60)),
                    cost_cents=cost,
                    rating=_rating(rng),
                    time_slot=TimeWindow(start=start, end=end) if start and end else None,
                    booking_required=cost > BOOKING_THRESHOLD_CENTS,
                )
            )

        meals = [
            Meal(
                id=_new_id(rng),
                name=str(raw_meal.get("name") or "Meal"),
                type=_enum_or(MealType, raw_meal.get("type"), MealType.lunch),
                location=_location(raw_meal.get("location"), destination),
                cost_cents=_to_cents(raw_meal.get("cost")),
                cuisine=str(raw_meal.get("cuisine") or "local"),
                rating=_rating(rng),
                time=_parse_datetime(raw_meal.get("time")),
            )
            for raw_meal in raw_day.get("meals") or []
        ]

        accommodation = None
        raw_accommodation = raw_day.get("accommodation")
        if isinstance(raw_accommodation, dict):
            nightly = _to_cents(raw_accommodation.get("costPerNight"))
            name = str(raw_accommodation.get("name") or "Accommodation")
            check_in = datetime.combine(day_date, time())
            accommodation = Accommodation(
                id=_new_id(rng),
                name=name,
                type=_enum_or(
                    AccommodationType, raw_accommodation.get("type"), AccommodationType.hotel
                ),
                location=_location(raw_accommodation.get("location"), destination),
                check_in=check_in,
                check_out=check_in + timedelta(days=1),
                cost_per_night_cents=nightly,
                total_cost_cents=nightly,
                rating=_rating(rng),
                amenities=[str(a) for a in raw_accommodation.get("amenities") or []],
                images=accommodation_images(name),
            )

        transport = [
            Transportation(
                id=_new_id(rng),
                mode=_enum_or(TransportMode, raw_leg.get("mode"), TransportMode.bus),
                origin=_location(raw_leg.get("from"), destination),
                destination=_location(raw_leg.get("to"), destination),
                departure=_parse_datetime(raw_leg.get("departure")),
                arrival=_parse_datetime(raw_leg.get("arrival")),
                cost_cents=_to_cents(raw_leg.get("cost")),
                duration_min=max(0, int(raw_leg.get("duration") or 0)),
            )
            for raw_leg in raw_day.get("transport") or []
        ]

        days.append(
            ItineraryDay(
                date=day_date,
                activities=activities,
                meals=meals,
                accommodation=accommodation,
                transport=transport,
            )
        )

    itinerary = Itinerary(id=_new_id(rng), trip_id=trip.id, days=days)
    itinerary.budget_breakdown = calculate_trip_budget(itinerary, trip)
    return itinerary


def _fallback_activities(
    destination: Destination,
    day_date: date,
    daily_budget_cents: int,
    rng: random.Random,
) -> list[Activity]:
    morning = datetime.combine(day_date, time(9, 0))
    afternoon = datetime.combine(day_date, time(14, 0))
    return [
        Activity(
            id=_new_id(rng),
            name=f"Explore {destination.name} Old Town",
            description="Walking tour of the historic city center",
            type=ActivityType.cultural,
            location=Location(
                name=f"{destination.name} Old Town",
                address=f"Historic Center, {destination.name}",
                coordinates=destination.coordinates,
            ),
            duration_min=180,
            cost_cents=daily_budget_cents * 15 // 100,
            rating=4.2,
            time_slot=TimeWindow(start=morning, end=morning + timedelta(minutes=180)),
            booking_required=False,
        ),
        Activity(
            id=_new_id(rng),
            name=f"{destination.name} Main Museum",
            description="Visit to the city's primary cultural museum",
            type=ActivityType.cultural,
            location=Location(
                name=f"{destination.name} Museum",
                address=f"Museum District, {destination.name}",
                coordinates=destination.coordinates,
            ),
            duration_min=120,
            cost_cents=daily_budget_cents * 10 // 100,
            rating=4.5,
            time_slot=TimeWindow(start=afternoon, end=afternoon + timedelta(minutes=120)),
            booking_required=True,
        ),
    ]


def _fallback_meals(
    destination: Destination,
    day_date: date,
    daily_budget_cents: int,
    rng: random.Random,
) -> list[Meal]:
    return [
        Meal(
            id=_new_id(rng),
            name="Local Breakfast Spot",
            type=MealType.breakfast,
            location=Location(
                name=f"{destination.name} Cafe",
                address=f"City Center, {destination.name}",
                coordinates=destination.coordinates,
            ),
            cost_cents=daily_budget_cents * 10 // 100,
            cuisine="local",
            rating=4.0,
            time=datetime.combine(day_date, time(8, 0)),
        ),
        Meal(
            id=_new_id(rng),
            name="Traditional Restaurant",
            type=MealType.dinner,
            location=Location(
                name=f"{destination.name} Restaurant",
                address=f"Restaurant District, {destination.name}",
                coordinates=destination.coordinates,
            ),
            cost_cents=daily_budget_cents * 20 // 100,
            cuisine="traditional",
            rating=4.3,
            time=datetime.combine(day_date, time(19, 0)),
        ),
    ]


def _fallback_accommodation(
    destination: Destination,
    day_date: date,
    daily_budget_cents: int,
    rng: random.Random,
) -> Accommodation:
    name = f"{destination.name} Budget Hotel"
    nightly = daily_budget_cents * 40 // 100
    check_in = datetime.combine(day_date, time(15, 0))
    return Accommodation(
        id=_new_id(rng),
        name=name,
        type=AccommodationType.hotel,
        location=Location(
            name=f"Budget Hotel {destination.name}",
            address=f"City Center, {destination.name}",
            coordinates=destination.coordinates,
        ),
        check_in=check_in,
        check_out=check_in + timedelta(hours=20),
        cost_per_night_cents=nightly,
        total_cost_cents=nightly,
        rating=3.8,
        amenities=["wifi", "breakfast", "ac"],
        images=accommodation_images(name),
    )


def _fallback_transport(
    destination: Destination,
    day_date: date,
    cost_cents: int,
    rng: random.Random,
) -> list[Transportation]:
    coords = destination.coordinates
    departure = datetime.combine(day_date, time(7, 0))
    return [
        Transportation(
            id=_new_id(rng),
            mode=TransportMode.bus,
            origin=Location(
                name="Airport",
                address=f"{destination.name} Airport",
                coordinates=Geo(
                    lat=max(-90.0, min(90.0, coords.lat + 0.1)),
                    lon=max(-180.0, min(180.0, coords.lon + 0.1)),
                ),
            ),
            destination=Location(
                name="City Center",
                address=f"{destination.name} City Center",
                coordinates=coords,
            ),
            departure=departure,
            arrival=departure + timedelta(minutes=45),
            cost_cents=cost_cents,
            duration_min=45,
        )
    ]


def generate_fallback_itinerary(
    trip: Trip,
    preferences: TravelPreferences | None = None,
    settings: Settings | None = None,
) -> Itinerary:
    """Deterministic local itinerary used when generation is unavailable.

    The daily budget is split into two activities (15%, 10%), breakfast (10%)
    and dinner (20%); the first day also carries accommodation (40%) and an
    airport transfer. The same trip always yields the same itinerary.
    """
    settings = settings or get_settings()
    rng = seeded_rng(trip, settings)
    duration = trip_duration_days(trip)
    daily_budget = trip.total_budget_cents // duration
    destination = trip.destination

    days = []
    for offset in range(duration):
        day_date = trip.start_date + timedelta(days=offset)
        first_day = offset == 0
        days.append(
            ItineraryDay(
                date=day_date,
                activities=_fallback_activities(destination, day_date, daily_budget, rng),
                meals=_fallback_meals(destination, day_date, daily_budget, rng),
                accommodation=(
                    _fallback_accommodation(destination, day_date, daily_budget, rng)
                    if first_day
                    else None
                ),
                transport=(
                    _fallback_transport(
                        destination, day_date, settings.fallback_transport_cost_cents, rng
                    )
                    if first_day
                    else []
                ),
            )
        )

    itinerary = Itinerary(id=_new_id(rng), trip_id=trip.id, days=days)
    itinerary.budget_breakdown = calculate_trip_budget(itinerary, trip)
    return itinerary


async def generate_itinerary(
    trip: Trip,
    preferences: TravelPreferences,
    client: ItineraryLLMClient | None = None,
) -> Itinerary:
    """Generate an itinerary via the LLM, falling back to the local generator.

    Any failure on the LLM path (transport error, empty or malformed JSON,
    validation error) degrades to generate_fallback_itinerary.
    """
    client = client or get_llm_client()
    if client is None:
        itinerary = generate_fallback_itinerary(trip, preferences)
        _record_generation(trip.id, "fallback", itinerary, "no_llm_client")
        return itinerary

    try:
        content = await client.complete(
            system_prompt=SYSTEM_PROMPT,
            user_prompt=build_itinerary_prompt(trip, preferences),
        )
        raw = parse_ai_response(content)
        itinerary = enhance_with_local_data(raw, trip)
    except Exception as e:
        logger.error(f"Itinerary generation failed: {e}")
        logger.warning("Falling back to deterministic local itinerary")
        itinerary = generate_fallback_itinerary(trip, preferences)
        _record_generation(trip.id, "fallback", itinerary, type(e).__name__)
        return itinerary

    if not itinerary.days:
        logger.warning("Generated itinerary has no days, using local fallback")
        itinerary = generate_fallback_itinerary(trip, preferences)
        _record_generation(trip.id, "fallback", itinerary, "empty_itinerary")
        return itinerary

    _record_generation(trip.id, "openai", itinerary)
    return itinerary


def _record_generation(
    trip_id: str,
    source: str,
    itinerary: Itinerary,
    error_reason: str | None = None,
) -> None:
    _structured_logger.log_generation(
        trip_id=trip_id,
        source=source,
        num_days=len(itinerary.days),
        error_reason=error_reason,
    )
    _metrics.inc_generation(source)
