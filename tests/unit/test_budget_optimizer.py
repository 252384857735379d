"""Tests for the greedy budget optimizer."""

import copy
import logging
import random
from collections.abc import Callable
from datetime import date, timedelta

import pytest

from backend.app.budget.aggregator import aggregate_budget
from backend.app.budget.optimizer import (
    WITHIN_LIMITS_MESSAGE,
    optimize_budget,
    suggest_budget_adjustments,
)
from backend.app.models import Itinerary, ItineraryDay
from backend.app.models.itinerary import compute_day_total


def _total(itinerary: Itinerary) -> int:
    return aggregate_budget(itinerary, 0).total_cents


def test_within_budget_is_noop(sample_itinerary: Itinerary) -> None:
    """Test that an itinerary under target comes back unchanged."""
    result = optimize_budget(sample_itinerary, 40000)

    assert result.optimized_itinerary is sample_itinerary
    assert result.savings_cents == 0
    assert result.overage_cents == 0
    assert result.changes == [WITHIN_LIMITS_MESSAGE]
    assert result.fully_resolved


def test_exactly_on_target_is_noop(sample_itinerary: Itinerary) -> None:
    """Test that an overage of zero needs no work."""
    result = optimize_budget(sample_itinerary, 35500)

    assert result.changes == [WITHIN_LIMITS_MESSAGE]


def test_accommodation_cut_closes_small_overage(sample_itinerary: Itinerary) -> None:
    """Test that the first accommodation cut alone can close the gap."""
    result = optimize_budget(sample_itinerary, 30000)

    assert result.overage_cents == 5500
    assert result.savings_cents == 5500
    assert result.fully_resolved
    assert result.changes == ["Reduced accommodation cost by 55.00 on Tue Jun 10 2025"]

    day = result.optimized_itinerary.days[0]
    assert day.accommodation is not None
    assert day.accommodation.total_cost_cents == 14500
    # Nothing else touched once the overage is closed
    assert [a.cost_cents for a in day.activities] == [2000, 1500]
    assert [m.cost_cents for m in day.meals] == [1000, 3000]
    assert _total(result.optimized_itinerary) == 30000


def test_partial_when_caps_run_out(sample_itinerary: Itinerary) -> None:
    """Test that per-item caps leave an open overage on a large gap."""
    result = optimize_budget(sample_itinerary, 10000)

    assert result.overage_cents == 25500
    # 6000 + 400 + 150 + 450 on day one, 600 + 150 + 375 on day two
    assert result.savings_cents == 8125
    assert not result.fully_resolved
    assert result.changes == [
        "Reduced accommodation cost by 60.00 on Tue Jun 10 2025",
        "Found cheaper alternative for Activity 0 (saved 4.00)",
        "Found budget-friendly option for Meal 0 (saved 1.50)",
        "Found budget-friendly option for Meal 1 (saved 4.50)",
        "Found cheaper alternative for Activity 0 (saved 6.00)",
        "Found budget-friendly option for Meal 0 (saved 1.50)",
        "Found budget-friendly option for Meal 1 (saved 3.75)",
    ]


def test_only_costliest_half_of_activities_reduced(
    make_day: Callable[..., ItineraryDay],
) -> None:
    """Test that the cheaper half of a day's activities keeps its price."""
    itinerary = Itinerary(
        id="it",
        trip_id="trip",
        days=[make_day(date(2025, 6, 10), activities=[1000, 5000, 3000, 2000, 4000])],
    )

    result = optimize_budget(itinerary, 0)

    # ceil(5 / 2) = 3 costliest: 5000, 4000, 3000
    costs = [a.cost_cents for a in result.optimized_itinerary.days[0].activities]
    assert costs == [1000, 4000, 2400, 2000, 3200]


def test_activity_ties_keep_original_order(make_day: Callable[..., ItineraryDay]) -> None:
    """Test that equal-cost activities are picked in listing order."""
    itinerary = Itinerary(
        id="it",
        trip_id="trip",
        days=[make_day(date(2025, 6, 10), activities=[1000, 1000, 1000])],
    )

    result = optimize_budget(itinerary, 0)

    costs = [a.cost_cents for a in result.optimized_itinerary.days[0].activities]
    assert costs == [800, 800, 1000]


def test_day_totals_are_recomputed(sample_itinerary: Itinerary) -> None:
    """Test that each day's cached total matches its reduced children."""
    result = optimize_budget(sample_itinerary, 10000)

    for day in result.optimized_itinerary.days:
        assert day.total_cost_cents == compute_day_total(day)
    assert result.optimized_itinerary.days[0].total_cost_cents == 29000 - 7000


def test_input_not_mutated(sample_itinerary: Itinerary) -> None:
    """Test that the caller's itinerary is left untouched."""
    before = sample_itinerary.model_dump()

    result = optimize_budget(sample_itinerary, 10000)

    assert sample_itinerary.model_dump() == before
    assert result.optimized_itinerary is not sample_itinerary
    assert result.optimized_itinerary.days[0] is not sample_itinerary.days[0]


def test_negative_costs_are_not_reduced(make_day: Callable[..., ItineraryDay]) -> None:
    """Test that a negative-cost item (a refund) is left alone."""
    itinerary = Itinerary(
        id="it",
        trip_id="trip",
        days=[make_day(date(2025, 6, 10), meals=[-500, 4000])],
    )

    result = optimize_budget(itinerary, 0)

    costs = [m.cost_cents for m in result.optimized_itinerary.days[0].meals]
    assert costs == [-500, 3400]
    assert result.savings_cents == 600


def test_partial_run_logs_warning(
    sample_itinerary: Itinerary, caplog: pytest.LogCaptureFixture
) -> None:
    """Test that an unresolved overage is logged at warning level."""
    with caplog.at_level(logging.INFO, logger="backend.app.utils.logging"):
        optimize_budget(sample_itinerary, 10000)

    records = [r for r in caplog.records if "Budget optimization" in r.getMessage()]
    assert records[-1].levelno == logging.WARNING
    structured = records[-1].structured  # type: ignore[attr-defined]
    assert structured["outcome"] == "partial"
    assert structured["unresolved_cents"] == 25500 - 8125


def test_invariants_various_seeds(make_day: Callable[..., ItineraryDay]) -> None:
    """Test savings bounds and non-negativity on random itineraries."""
    for seed in [3, 17, 256, 4096, 65537]:
        rng = random.Random(seed)
        days = [
            make_day(
                date(2025, 7, 1) + timedelta(days=i),
                accommodation=rng.choice([None, rng.randint(0, 40000)]),
                transport=[rng.randint(0, 5000) for _ in range(rng.randint(0, 2))],
                meals=[rng.randint(0, 8000) for _ in range(rng.randint(0, 4))],
                activities=[rng.randint(0, 20000) for _ in range(rng.randint(0, 6))],
            )
            for i in range(rng.randint(1, 6))
        ]
        itinerary = Itinerary(id=f"it_{seed}", trip_id="trip", days=days)
        original_total = _total(itinerary)
        target = rng.randint(0, max(original_total, 1))

        result = optimize_budget(itinerary, target)
        optimized = result.optimized_itinerary

        assert 0 <= result.savings_cents <= max(result.overage_cents, 0), f"Seed {seed}"
        assert _total(optimized) == original_total - result.savings_cents, f"Seed {seed}"

        for before, after in zip(itinerary.days, optimized.days, strict=True):
            if before.accommodation is not None:
                assert after.accommodation is not None
                assert 0 <= after.accommodation.total_cost_cents
                assert after.accommodation.total_cost_cents <= before.accommodation.total_cost_cents
            pairs = list(zip(before.activities, after.activities, strict=True)) + list(
                zip(before.meals, after.meals, strict=True)
            )
            for old, new in pairs:
                assert 0 <= new.cost_cents <= old.cost_cents, f"Seed {seed}"
            assert [t.cost_cents for t in after.transport] == [
                t.cost_cents for t in before.transport
            ], f"Seed {seed}"


def test_savings_never_drop_when_items_added(make_day: Callable[..., ItineraryDay]) -> None:
    """Test that adding a reducible activity or meal never lowers the savings."""
    for seed in range(200):
        rng = random.Random(seed)
        plans = [
            {
                "accommodation": rng.choice([None, rng.randint(0, 40000)]),
                "transport": [rng.randint(0, 5000) for _ in range(rng.randint(0, 2))],
                "meals": [rng.randint(0, 8000) for _ in range(rng.randint(0, 4))],
                "activities": [rng.randint(0, 20000) for _ in range(rng.randint(0, 6))],
            }
            for _ in range(rng.randint(1, 4))
        ]

        def build(day_plans: list[dict]) -> Itinerary:
            days = [
                make_day(date(2025, 7, 1) + timedelta(days=i), **plan)
                for i, plan in enumerate(day_plans)
            ]
            return Itinerary(id=f"it_{seed}", trip_id="trip", days=days)

        base = build(plans)
        target = rng.randint(0, max(_total(base), 1))

        extended = copy.deepcopy(plans)
        extra = rng.choice(extended)
        extra[rng.choice(["meals", "activities"])].append(rng.randint(1, 20000))
        bigger = build(extended)

        base_savings = optimize_budget(base, target).savings_cents
        bigger_savings = optimize_budget(bigger, target).savings_cents

        assert bigger_savings >= base_savings, f"Seed {seed}"


def test_suggest_adjustments_over_target() -> None:
    """Test that a gap is split 40/30/20/10 across categories."""
    suggestions = suggest_budget_adjustments(150000, 100000)

    assert suggestions.recommendations == [
        "You need to reduce costs by 500.00 to meet your budget."
    ]
    assert [o.category for o in suggestions.alternative_options] == [
        "Accommodation",
        "Transport",
        "Food",
        "Activities",
    ]
    assert [o.potential_saving_cents for o in suggestions.alternative_options] == [
        20000,
        15000,
        10000,
        5000,
    ]


def test_suggest_adjustments_within_target() -> None:
    """Test that a plan under target reports its slack and no options."""
    suggestions = suggest_budget_adjustments(80000, 100000)

    assert suggestions.recommendations[0] == "Your current plan is within budget!"
    assert "200.00 to spare" in suggestions.recommendations[1]
    assert suggestions.alternative_options == []
