"""Planned vs. actual spending comparison."""

from collections.abc import Mapping
from datetime import UTC, datetime

from backend.app.models.budget import BudgetAlert, BudgetBreakdown, SpendingVariance
from backend.app.models.common import AlertType, BudgetCategory, format_cents

CATEGORY_VARIANCE_PCT = 10
TOTAL_OVERRUN_PCT = 110


def track_real_time_spending(
    planned: BudgetBreakdown,
    actual_expenses: Mapping[str, int],
    now: datetime | None = None,
) -> SpendingVariance:
    """Compare actual spend against a planned breakdown.

    A category more than 10% over its planned amount gets a warning; a total
    more than 10% over plan gets an exceeded alert.

    projected_total_cents is actual + (planned - actual), which always equals
    the planned total. It is kept as a placeholder for a trend-based forecast.

    Args:
        planned: Planned breakdown
        actual_expenses: Actual spend per category in cents (missing -> 0)
        now: Timestamp for generated alerts

    Returns:
        SpendingVariance with per-category variance, projection and alerts
    """
    timestamp = now or datetime.now(UTC)
    variance: dict[str, int] = {}
    alerts: list[BudgetAlert] = []

    for category, planned_cents in planned.categories.items():
        actual = actual_expenses.get(category, 0)
        delta = actual - planned_cents
        variance[category] = delta

        # delta * 100 > planned * 10  <=>  delta > 10% of planned
        if delta * 100 > planned_cents * CATEGORY_VARIANCE_PCT:
            alerts.append(
                BudgetAlert(
                    type=AlertType.warning,
                    category=BudgetCategory(category),
                    message=f"{category} spending is {format_cents(abs(delta))} over planned",
                    amount_cents=abs(delta),
                    timestamp=timestamp,
                )
            )

    total_actual = sum(actual_expenses.values())
    total_planned = planned.total_cents
    projected_total = total_actual + (total_planned - total_actual)

    if total_actual * 100 > total_planned * TOTAL_OVERRUN_PCT:
        alerts.append(
            BudgetAlert(
                type=AlertType.exceeded,
                category=BudgetCategory.miscellaneous,
                message="Total spending significantly over budget",
                amount_cents=total_actual - total_planned,
                timestamp=timestamp,
            )
        )

    return SpendingVariance(
        variance=variance,
        projected_total_cents=projected_total,
        alerts=alerts,
    )
