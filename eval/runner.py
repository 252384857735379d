"""Eval runner - loads budget scenarios and checks predicates against the engine."""

import sys
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from backend.app.budget.aggregator import calculate_trip_budget
from backend.app.budget.optimizer import optimize_budget
from backend.app.budget.report import generate_budget_report
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


def load_scenarios(path: Path = Path("eval/scenarios.yaml")) -> dict[str, Any]:
    """Load scenarios from YAML."""
    with open(path) as f:
        result: dict[str, Any] = yaml.safe_load(f)
        return result


def build_trip_from_yaml(scenario_id: str, trip_data: dict[str, Any]) -> Trip:
    """Build Trip from YAML data."""
    return Trip(
        id=f"trip_{scenario_id}",
        user_id="eval_user",
        title=f"{trip_data['city']} eval trip",
        destination=Destination(
            name=trip_data["city"],
            country=trip_data["country"],
            city=trip_data["city"],
            coordinates=Geo(lat=trip_data["lat"], lon=trip_data["lon"]),
        ),
        start_date=date.fromisoformat(trip_data["start"]),
        end_date=date.fromisoformat(trip_data["end"]),
        total_budget_cents=trip_data["budget_cents"],
    )


def build_itinerary_from_yaml(
    scenario_id: str, trip: Trip, days_data: list[dict[str, Any]]
) -> Itinerary:
    """Build Itinerary from compact YAML day entries."""
    here = Location(name=trip.destination.name, coordinates=trip.destination.coordinates)
    days = []
    for i, day_data in enumerate(days_data):
        accommodation = None
        if "accommodation_cents" in day_data:
            cost = day_data["accommodation_cents"]
            accommodation = Accommodation(
                id=f"acc_{i}",
                name=f"Hotel {i}",
                location=here,
                cost_per_night_cents=cost,
                total_cost_cents=cost,
            )
        days.append(
            ItineraryDay(
                date=date.fromisoformat(day_data["date"]),
                accommodation=accommodation,
                transport=[
                    Transportation(
                        id=f"leg_{i}_{j}",
                        mode=TransportMode.bus,
                        origin=here,
                        destination=here,
                        cost_cents=cost,
                    )
                    for j, cost in enumerate(day_data.get("transport_cents", []))
                ],
                meals=[
                    Meal(id=f"meal_{i}_{j}", name=name, location=here, cost_cents=cost)
                    for j, (name, cost) in enumerate(day_data.get("meals_cents", {}).items())
                ],
                activities=[
                    Activity(id=f"act_{i}_{j}", name=name, location=here, cost_cents=cost)
                    for j, (name, cost) in enumerate(day_data.get("activities_cents", {}).items())
                ],
            )
        )
    return Itinerary(id=f"itinerary_{scenario_id}", trip_id=trip.id, days=days)


def evaluate_predicates(env: dict[str, Any], predicates: list[dict[str, str]]) -> tuple[int, int]:
    """Evaluate predicates; return (passed, total)."""
    passed = 0
    total = len(predicates)
    scope = {
        "__builtins__": {},
        "len": len,
        "sum": sum,
        "all": all,
        "any": any,
        **env,
    }

    for pred_data in predicates:
        predicate = pred_data["predicate"]
        description = pred_data.get("description", predicate)
        try:
            result = eval(predicate, scope)
            if result:
                passed += 1
                print(f"  ✓ PASS: {description}")
            else:
                print(f"  ✗ FAIL: {description}")
        except Exception as e:
            print(f"  ✗ ERROR: {description} - {e}")

    return passed, total


def main() -> int:
    """Run eval scenarios."""
    scenarios_data = load_scenarios()
    scenarios = scenarios_data["scenarios"]

    total_passed = 0
    total_predicates = 0

    for scenario in scenarios:
        scenario_id = scenario["scenario_id"]
        description = scenario["description"]
        print(f"\n=== Scenario: {scenario_id} ===")
        print(f"Description: {description}")

        trip = build_trip_from_yaml(scenario_id, scenario["trip"])
        itinerary = build_itinerary_from_yaml(scenario_id, trip, scenario["days"])
        breakdown = calculate_trip_budget(itinerary, trip)
        env = {
            "trip": trip,
            "itinerary": itinerary,
            "breakdown": breakdown,
            "report": generate_budget_report(breakdown),
            "result": optimize_budget(itinerary, scenario["target_budget_cents"]),
        }

        predicates = scenario["must_satisfy"]
        passed, total = evaluate_predicates(env, predicates)
        total_passed += passed
        total_predicates += total

        print(f"Result: {passed}/{total} predicates passed")

    print("\n=== Summary ===")
    print(f"Total: {total_passed}/{total_predicates} predicates passed")

    if total_passed < total_predicates:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
