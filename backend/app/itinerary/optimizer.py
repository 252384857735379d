"""Schedule and per-day budget optimization for itineraries."""

import math
from datetime import datetime, time, timedelta

from backend.app.config import Settings, get_settings
from backend.app.models.common import Geo, TimeWindow
from backend.app.models.itinerary import Itinerary, ItineraryDay, compute_day_total

EARTH_RADIUS_KM = 6371.0

# Per-day budget trimming: items above these shares of the daily target are
# cut by the matching percentage while the day is still over target.
ACTIVITY_SHARE_THRESHOLD = 0.1
ACTIVITY_KEEP_PCT = 70
MEAL_SHARE_THRESHOLD = 0.05
MEAL_KEEP_PCT = 80


def calculate_distance(a: Geo, b: Geo) -> float:
    """Great-circle (haversine) distance in kilometers."""
    d_lat = math.radians(b.lat - a.lat)
    d_lon = math.radians(b.lon - a.lon)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(a.lat)) * math.cos(math.radians(b.lat)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def _reschedule_day(day: ItineraryDay, settings: Settings) -> ItineraryDay:
    if not day.activities:
        return day.model_copy(deep=True)

    anchor = day.activities[0].location.coordinates
    ordered = sorted(
        day.activities,
        key=lambda activity: calculate_distance(anchor, activity.location.coordinates),
    )

    current = datetime.combine(day.date, time(settings.day_start_hour, 0))
    buffer = timedelta(minutes=settings.activity_buffer_min)
    rescheduled = []
    for activity in ordered:
        end = current + timedelta(minutes=activity.duration_min)
        rescheduled.append(
            activity.model_copy(deep=True, update={"time_slot": TimeWindow(start=current, end=end)})
        )
        current = end + buffer

    return day.model_copy(deep=True, update={"activities": rescheduled})


def optimize_for_time(itinerary: Itinerary, settings: Settings | None = None) -> Itinerary:
    """Order each day's activities by distance from the first and reschedule.

    Activities start at the configured hour, back to back with a fixed buffer.
    Costs are unchanged.
    """
    settings = settings or get_settings()
    days = [_reschedule_day(day, settings) for day in itinerary.days]
    return itinerary.model_copy(deep=True, update={"days": days})


def optimize_for_budget(itinerary: Itinerary, max_budget_cents: int) -> Itinerary:
    """Trim each day toward an even share of a maximum budget.

    While a day is above max_budget / len(days), activities costing more than
    10% of that target are cut by 30% and meals above 5% by 20%. Days already
    at or below target are left alone.
    """
    if not itinerary.days:
        return itinerary.model_copy(deep=True)

    target = max_budget_cents / len(itinerary.days)
    days = []

    for day in itinerary.days:
        new_day = day.model_copy(deep=True)
        day_cost = compute_day_total(new_day)

        if day_cost <= target:
            days.append(new_day)
            continue

        for activity in new_day.activities:
            if day_cost > target and activity.cost_cents > target * ACTIVITY_SHARE_THRESHOLD:
                new_cost = activity.cost_cents * ACTIVITY_KEEP_PCT // 100
                day_cost -= activity.cost_cents - new_cost
                activity.cost_cents = new_cost

        for meal in new_day.meals:
            if day_cost > target and meal.cost_cents > target * MEAL_SHARE_THRESHOLD:
                new_cost = meal.cost_cents * MEAL_KEEP_PCT // 100
                day_cost -= meal.cost_cents - new_cost
                meal.cost_cents = new_cost

        new_day.total_cost_cents = compute_day_total(new_day)
        days.append(new_day)

    return itinerary.model_copy(deep=True, update={"days": days})
