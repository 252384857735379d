"""Budget aggregation - walks an itinerary and sums costs by category and day."""

from collections.abc import Iterable
from datetime import datetime

from backend.app.budget.alerts import generate_budget_alerts
from backend.app.models.budget import BudgetBreakdown, empty_categories
from backend.app.models.common import BudgetCategory
from backend.app.models.itinerary import Accommodation, Activity, Itinerary, Meal, Transportation
from backend.app.models.trip import Trip


def calculate_trip_budget(
    itinerary: Itinerary,
    trip: Trip,
    now: datetime | None = None,
) -> BudgetBreakdown:
    """Aggregate itinerary costs into a budget breakdown.

    Accommodation (total cost), transport, meals and activities feed their
    categories; shopping and miscellaneous stay at zero (manual entries only).
    Days are keyed by ISO date in the daily ledger.

    Args:
        itinerary: Itinerary to aggregate
        trip: Trip whose total_budget_cents is the ceiling
        now: Timestamp for generated alerts

    Returns:
        BudgetBreakdown with alerts attached
    """
    return aggregate_budget(itinerary, trip.total_budget_cents, now=now)


def aggregate_budget(
    itinerary: Itinerary,
    total_budget_cents: int,
    now: datetime | None = None,
) -> BudgetBreakdown:
    """Aggregate itinerary costs against a bare budget ceiling."""
    categories = empty_categories()
    daily: dict[str, int] = {}

    for day in itinerary.days:
        day_total = 0

        if day.accommodation:
            categories[BudgetCategory.accommodation.value] += day.accommodation.total_cost_cents
            day_total += day.accommodation.total_cost_cents

        for leg in day.transport:
            categories[BudgetCategory.transport.value] += leg.cost_cents
            day_total += leg.cost_cents

        for meal in day.meals:
            categories[BudgetCategory.food.value] += meal.cost_cents
            day_total += meal.cost_cents

        for activity in day.activities:
            categories[BudgetCategory.activities.value] += activity.cost_cents
            day_total += activity.cost_cents

        # Repeated dates accumulate so the daily ledger still sums to the total
        date_key = day.date.isoformat()
        daily[date_key] = daily.get(date_key, 0) + day_total

    total = sum(categories.values())
    remaining = total_budget_cents - total

    return BudgetBreakdown(
        total_cents=total,
        categories=categories,
        daily=daily,
        remaining_cents=remaining,
        alerts=generate_budget_alerts(categories, total_budget_cents, remaining, now=now),
    )


def calculate_daily_costs(
    activities: Iterable[Activity],
    meals: Iterable[Meal],
    accommodation: Accommodation | None = None,
    transport: Iterable[Transportation] = (),
) -> int:
    """Estimate one day's cost from its parts, using the nightly accommodation rate."""
    activity_costs = sum(a.cost_cents for a in activities)
    meal_costs = sum(m.cost_cents for m in meals)
    accommodation_cost = accommodation.cost_per_night_cents if accommodation else 0
    transport_costs = sum(t.cost_cents for t in transport)

    return activity_costs + meal_costs + accommodation_cost + transport_costs
