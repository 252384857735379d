"""Budget alert generation against absolute and proportional thresholds."""

from collections.abc import Mapping
from datetime import UTC, datetime

from backend.app.models.budget import BudgetAlert
from backend.app.models.common import AlertType, BudgetCategory, format_cents

# Recommended share of the total budget per category, in percent.
CATEGORY_CEILINGS_PCT: dict[BudgetCategory, int] = {
    BudgetCategory.accommodation: 40,
    BudgetCategory.transport: 30,
    BudgetCategory.food: 20,
    BudgetCategory.activities: 10,
}

NEAR_LIMIT_RATIO = 0.9
SURPLUS_PCT = 20


def category_limit_cents(total_budget_cents: int, category: BudgetCategory) -> int:
    """Recommended cap for a category, floored to whole cents."""
    return total_budget_cents * CATEGORY_CEILINGS_PCT[category] // 100


def generate_budget_alerts(
    categories: Mapping[str, int],
    total_budget_cents: int,
    remaining_cents: int,
    now: datetime | None = None,
) -> list[BudgetAlert]:
    """Evaluate category totals against the trip budget.

    Rules (all applicable ones are emitted, in this order):
    1. Over budget -> exceeded (miscellaneous), amount = |remaining|
    2. Otherwise more than 90% used with money left -> warning (miscellaneous)
    3. Accommodation/transport/food/activities above 40/30/20/10% of budget
       -> warning for that category, amount = overage
    4. More than 20% of budget remaining -> recommendation (activities)

    Args:
        categories: Spend per category in cents
        total_budget_cents: Trip budget ceiling
        remaining_cents: total_budget_cents minus total spend (may be negative)
        now: Timestamp for the alerts (defaults to current UTC time)

    Returns:
        Ordered list of alerts
    """
    timestamp = now or datetime.now(UTC)
    alerts: list[BudgetAlert] = []
    total = sum(categories.values())

    if remaining_cents < 0:
        alerts.append(
            BudgetAlert(
                type=AlertType.exceeded,
                category=BudgetCategory.miscellaneous,
                message=f"Budget exceeded by {format_cents(abs(remaining_cents))}",
                amount_cents=abs(remaining_cents),
                timestamp=timestamp,
            )
        )
    elif (
        total_budget_cents > 0
        and total / total_budget_cents > NEAR_LIMIT_RATIO
        and remaining_cents > 0
    ):
        remaining_pct = remaining_cents / total_budget_cents * 100
        alerts.append(
            BudgetAlert(
                type=AlertType.warning,
                category=BudgetCategory.miscellaneous,
                message=(
                    f"Only {format_cents(remaining_cents)} remaining "
                    f"({remaining_pct:.1f}% of budget)"
                ),
                amount_cents=remaining_cents,
                timestamp=timestamp,
            )
        )

    for category in CATEGORY_CEILINGS_PCT:
        spend = categories.get(category.value, 0)
        limit = category_limit_cents(total_budget_cents, category)
        if spend > limit:
            alerts.append(
                BudgetAlert(
                    type=AlertType.warning,
                    category=category,
                    message=(
                        f"{category.value} spending ({format_cents(spend)}) exceeds "
                        f"recommended limit ({format_cents(limit)})"
                    ),
                    amount_cents=spend - limit,
                    timestamp=timestamp,
                )
            )

    if remaining_cents > total_budget_cents * SURPLUS_PCT // 100:
        alerts.append(
            BudgetAlert(
                type=AlertType.recommendation,
                category=BudgetCategory.activities,
                message=(
                    f"You have {format_cents(remaining_cents)} extra budget. "
                    "Consider adding more activities or upgrading accommodations."
                ),
                amount_cents=remaining_cents,
                timestamp=timestamp,
            )
        )

    return alerts
