"""Greedy budget reduction over an itinerary.

Given an overage against a target budget, each day is visited in order and
costs are shaved in fixed priority: accommodation, then the costliest half
of the day's activities, then meals. Every reduction is capped at a share of
the item's own cost, so no item reaches zero and the overage may remain
partly open. This is a convergent greedy pass, not a global optimum.
"""

import math
import time
from datetime import date

from backend.app.budget.aggregator import aggregate_budget
from backend.app.models.budget import AdjustmentOption, BudgetAdjustmentSuggestions
from backend.app.models.common import format_cents
from backend.app.models.itinerary import (
    Activity,
    Itinerary,
    ItineraryDay,
    Meal,
    compute_day_total,
)
from backend.app.models.optimization import OptimizationResult
from backend.app.utils.logging import StructuredBudgetLogger
from backend.app.utils.metrics import PrometheusBudgetMetrics

ACCOMMODATION_REDUCTION_PCT = 30
ACTIVITY_REDUCTION_PCT = 20
MEAL_REDUCTION_PCT = 15

WITHIN_LIMITS_MESSAGE = "Budget is already within limits"

# Share of a budget gap each category is expected to absorb, in percent.
ADJUSTMENT_SHARES: list[tuple[str, str, int]] = [
    ("Accommodation", "Consider hostels or shared accommodations instead of hotels", 40),
    ("Transport", "Use public transport or budget airlines instead of premium options", 30),
    ("Food", "Mix restaurant meals with local markets and street food", 20),
    ("Activities", "Focus on free or low-cost activities like hiking, museums on free days", 10),
]

_structured_logger = StructuredBudgetLogger()
_metrics = PrometheusBudgetMetrics()


def _max_saving(cost_cents: int, pct: int) -> int:
    """Largest allowed reduction for an item; negative costs are not reducible."""
    return max(0, cost_cents) * pct // 100


def _display_date(day_date: date) -> str:
    """Render a date like 'Tue Jun 10 2025'."""
    return day_date.strftime("%a %b %d %Y")


class _Reducer:
    """Tracks the open overage and the change log across one run."""

    def __init__(self, overage_cents: int) -> None:
        self.remaining_to_save = overage_cents
        self.total_savings = 0
        self.changes: list[str] = []

    def take(self, cost_cents: int, pct: int) -> int:
        """Claim a saving from one item, bounded by the open overage."""
        saving = min(_max_saving(cost_cents, pct), self.remaining_to_save)
        self.remaining_to_save -= saving
        self.total_savings += saving
        return saving

    def optimize_day(self, day: ItineraryDay) -> ItineraryDay:
        """Return a reduced copy of one day; the input day is untouched."""
        new_day = day.model_copy(deep=True)

        if self.remaining_to_save > 0 and new_day.accommodation:
            accommodation = new_day.accommodation
            saving = self.take(accommodation.total_cost_cents, ACCOMMODATION_REDUCTION_PCT)
            accommodation.total_cost_cents -= saving
            if saving > 0:
                self.changes.append(
                    f"Reduced accommodation cost by {format_cents(saving)} "
                    f"on {_display_date(day.date)}"
                )

        if self.remaining_to_save > 0:
            new_day.activities = self._optimize_activities(new_day.activities)

        if self.remaining_to_save > 0:
            new_day.meals = self._optimize_meals(new_day.meals)

        new_day.total_cost_cents = compute_day_total(new_day)
        return new_day

    def _optimize_activities(self, activities: list[Activity]) -> list[Activity]:
        # Costliest half (rounded up) are candidates; ties keep original order
        ranked = sorted(range(len(activities)), key=lambda i: -activities[i].cost_cents)
        candidates = set(ranked[: math.ceil(len(activities) / 2)])

        for index, activity in enumerate(activities):
            if index not in candidates or self.remaining_to_save <= 0:
                continue
            saving = self.take(activity.cost_cents, ACTIVITY_REDUCTION_PCT)
            activity.cost_cents -= saving
            if saving > 0:
                self.changes.append(
                    f"Found cheaper alternative for {activity.name} "
                    f"(saved {format_cents(saving)})"
                )
        return activities

    def _optimize_meals(self, meals: list[Meal]) -> list[Meal]:
        for meal in meals:
            if self.remaining_to_save <= 0:
                break
            saving = self.take(meal.cost_cents, MEAL_REDUCTION_PCT)
            meal.cost_cents -= saving
            if saving > 0:
                self.changes.append(
                    f"Found budget-friendly option for {meal.name} "
                    f"(saved {format_cents(saving)})"
                )
        return meals


def optimize_budget(itinerary: Itinerary, target_budget_cents: int) -> OptimizationResult:
    """Reduce itinerary costs toward a target budget.

    The input itinerary is never mutated. When it is already within the target,
    it is returned as-is with zero savings.

    Args:
        itinerary: Itinerary to reduce
        target_budget_cents: Budget ceiling to move toward

    Returns:
        OptimizationResult with the rebuilt itinerary, savings and change log.
        savings_cents may be less than overage_cents when per-item caps run out.
    """
    started = time.perf_counter()

    current = aggregate_budget(itinerary, target_budget_cents)
    overage = current.total_cents - target_budget_cents

    if overage <= 0:
        _record(itinerary.id, "noop", 0, 0, 0, started)
        return OptimizationResult(
            optimized_itinerary=itinerary,
            savings_cents=0,
            overage_cents=0,
            changes=[WITHIN_LIMITS_MESSAGE],
        )

    reducer = _Reducer(overage)
    optimized_days = [reducer.optimize_day(day) for day in itinerary.days]
    optimized = itinerary.model_copy(deep=True, update={"days": optimized_days})

    outcome = "closed" if reducer.remaining_to_save <= 0 else "partial"
    _record(itinerary.id, outcome, overage, reducer.total_savings, len(reducer.changes), started)

    return OptimizationResult(
        optimized_itinerary=optimized,
        savings_cents=reducer.total_savings,
        overage_cents=overage,
        changes=reducer.changes,
    )


def _record(
    itinerary_id: str,
    outcome: str,
    overage_cents: int,
    savings_cents: int,
    num_changes: int,
    started: float,
) -> None:
    latency_ms = (time.perf_counter() - started) * 1000
    _structured_logger.log_optimization(
        itinerary_id=itinerary_id,
        outcome=outcome,
        overage_cents=overage_cents,
        savings_cents=savings_cents,
        num_changes=num_changes,
        latency_ms=latency_ms,
    )
    _metrics.record_optimization(outcome, savings_cents)


def suggest_budget_adjustments(
    current_budget_cents: int,
    target_budget_cents: int,
) -> BudgetAdjustmentSuggestions:
    """Suggest how to move a plan's cost toward a target budget."""
    difference = current_budget_cents - target_budget_cents

    if difference <= 0:
        return BudgetAdjustmentSuggestions(
            recommendations=[
                "Your current plan is within budget!",
                f"You have {format_cents(abs(difference))} to spare for additional "
                "activities or upgrades.",
            ],
        )

    return BudgetAdjustmentSuggestions(
        recommendations=[
            f"You need to reduce costs by {format_cents(difference)} to meet your budget."
        ],
        alternative_options=[
            AdjustmentOption(
                category=category,
                suggestion=suggestion,
                potential_saving_cents=difference * share // 100,
            )
            for category, suggestion, share in ADJUSTMENT_SHARES
        ],
    )
