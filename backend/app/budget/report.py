"""Human-readable budget report."""

from backend.app.models.budget import BudgetBreakdown, BudgetReport
from backend.app.models.common import format_cents

ROOM_TO_SPARE_PCT = 15


def generate_budget_report(breakdown: BudgetBreakdown) -> BudgetReport:
    """Summarize a breakdown: totals, category shares and recommendations.

    Category shares are 0.0% when nothing is planned. The largest category is
    picked by strict comparison in category order, so on a tie the later
    category wins.
    """
    total = breakdown.total_cents
    remaining = breakdown.remaining_cents

    summary = f"Total planned: {format_cents(total)} | Remaining: {format_cents(remaining)}"

    category_analysis: dict[str, str] = {}
    for category, amount in breakdown.categories.items():
        percentage = amount / total * 100 if total else 0.0
        category_analysis[category] = f"{format_cents(amount)} ({percentage:.1f}%)"

    highest = None
    for category, amount in breakdown.categories.items():
        if highest is None or not breakdown.categories[highest] > amount:
            highest = category

    recommendations = [f"{highest} is your largest expense category"]

    if remaining < 0:
        recommendations.append("Consider the optimization suggestions to reduce costs")
    elif remaining * 100 > total * ROOM_TO_SPARE_PCT:
        recommendations.append("You have room to add more activities or upgrade experiences")

    return BudgetReport(
        summary=summary,
        category_analysis=category_analysis,
        recommendations=recommendations,
    )
