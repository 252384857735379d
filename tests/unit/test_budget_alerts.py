"""Tests for budget alert thresholds."""

from datetime import UTC, datetime

from backend.app.budget.alerts import category_limit_cents, generate_budget_alerts
from backend.app.models import AlertType, BudgetCategory
from backend.app.models.budget import empty_categories

NOW = datetime(2025, 6, 1, tzinfo=UTC)


def _categories(**amounts: int) -> dict[str, int]:
    categories = empty_categories()
    categories.update(amounts)
    return categories


def test_exceeded_alert_first() -> None:
    """Over budget emits an exceeded alert before any category warnings."""
    categories = _categories(accommodation=60000, food=50000)

    alerts = generate_budget_alerts(categories, 100000, -10000, now=NOW)

    assert alerts[0].type == AlertType.exceeded
    assert alerts[0].category == BudgetCategory.miscellaneous
    assert alerts[0].amount_cents == 10000
    assert alerts[0].message == "Budget exceeded by 100.00"
    assert [a.category for a in alerts[1:]] == [
        BudgetCategory.accommodation,
        BudgetCategory.food,
    ]


def test_near_limit_warning() -> None:
    """More than 90% used with money left emits a warning with the remaining share."""
    categories = _categories(
        accommodation=30000, transport=25000, food=20000, activities=10000, shopping=10000
    )

    alerts = generate_budget_alerts(categories, 100000, 5000, now=NOW)

    assert len(alerts) == 1
    alert = alerts[0]
    assert alert.type == AlertType.warning
    assert alert.category == BudgetCategory.miscellaneous
    assert alert.amount_cents == 5000
    assert alert.message == "Only 50.00 remaining (5.0% of budget)"


def test_exactly_ninety_percent_is_quiet() -> None:
    """The near-limit rule is strict: exactly 90% used emits nothing."""
    categories = _categories(accommodation=40000, transport=30000, food=20000)

    alerts = generate_budget_alerts(categories, 100000, 10000, now=NOW)

    assert alerts == []


def test_exactly_on_budget_emits_no_total_alert() -> None:
    """Zero remaining is neither exceeded nor near-limit."""
    categories = _categories(accommodation=40000, transport=30000, food=20000, activities=10000)

    alerts = generate_budget_alerts(categories, 100000, 0, now=NOW)

    assert alerts == []


def test_category_warning_amount_is_overage() -> None:
    """Category warnings carry spend minus the recommended limit."""
    categories = _categories(accommodation=50000, transport=10000, food=10000, activities=5000)

    alerts = generate_budget_alerts(categories, 100000, 25000, now=NOW)

    assert [(a.type, a.category, a.amount_cents) for a in alerts] == [
        (AlertType.warning, BudgetCategory.accommodation, 10000),
        (AlertType.recommendation, BudgetCategory.activities, 25000),
    ]
    assert alerts[0].message == (
        "accommodation spending (500.00) exceeds recommended limit (400.00)"
    )
    assert alerts[1].message == (
        "You have 250.00 extra budget. "
        "Consider adding more activities or upgrading accommodations."
    )


def test_shopping_and_miscellaneous_have_no_ceiling() -> None:
    """Only the four planned categories are checked against a ceiling."""
    categories = _categories(shopping=85000, miscellaneous=10000)

    alerts = generate_budget_alerts(categories, 100000, 5000, now=NOW)

    assert [(a.type, a.category) for a in alerts] == [
        (AlertType.warning, BudgetCategory.miscellaneous)
    ]


def test_surplus_recommendation() -> None:
    """More than 20% remaining suggests spending on activities."""
    alerts = generate_budget_alerts(_categories(food=10000), 100000, 90000, now=NOW)

    assert len(alerts) == 1
    assert alerts[0].type == AlertType.recommendation
    assert alerts[0].category == BudgetCategory.activities
    assert alerts[0].amount_cents == 90000
    assert alerts[0].message.startswith("You have 900.00 extra budget.")


def test_surplus_threshold_is_strict() -> None:
    """Exactly 20% remaining does not trigger the recommendation."""
    alerts = generate_budget_alerts(_categories(food=20000, transport=60000), 100000, 20000)

    assert not any(a.type == AlertType.recommendation for a in alerts)


def test_zero_budget_does_not_divide() -> None:
    """A zero budget with spend reports exceeded and category overages only."""
    alerts = generate_budget_alerts(_categories(food=500), 0, -500, now=NOW)

    assert [a.type for a in alerts] == [AlertType.exceeded, AlertType.warning]
    assert alerts[1].category == BudgetCategory.food
    assert alerts[1].amount_cents == 500


def test_timestamp_defaults_to_now() -> None:
    """Alerts are stamped with an aware UTC time when none is given."""
    alerts = generate_budget_alerts(_categories(), 100000, 100000)

    assert alerts[0].timestamp.tzinfo is not None


def test_category_limit_floors() -> None:
    """Limits are floored to whole cents."""
    assert category_limit_cents(999, BudgetCategory.activities) == 99
    assert category_limit_cents(100000, BudgetCategory.transport) == 30000
