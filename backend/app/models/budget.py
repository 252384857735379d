"""Budget models - aggregated breakdowns, alerts and derived reports."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from backend.app.models.common import BUDGET_CATEGORIES, AlertType, BudgetCategory


def empty_categories() -> dict[str, int]:
    """All six budget categories at zero, in fixed order."""
    return {category: 0 for category in BUDGET_CATEGORIES}


class BudgetAlert(BaseModel):
    """A threshold crossing found while evaluating a budget."""

    type: AlertType
    category: BudgetCategory
    message: str
    amount_cents: int
    timestamp: datetime


class BudgetBreakdown(BaseModel):
    """Per-category and per-day cost snapshot for an itinerary.

    Invariant: total_cents == sum(categories) == sum(daily).
    """

    total_cents: int = 0
    categories: dict[str, int] = Field(default_factory=empty_categories)
    daily: dict[str, int] = Field(default_factory=dict)
    remaining_cents: int = 0
    alerts: list[BudgetAlert] = Field(default_factory=list)

    @model_validator(mode="after")
    def fill_missing_categories(self) -> "BudgetBreakdown":
        """Ensure all six categories are present, in fixed order."""
        unknown = set(self.categories) - set(BUDGET_CATEGORIES)
        if unknown:
            raise ValueError(f"Unknown budget categories: {sorted(unknown)}")
        self.categories = {c: self.categories.get(c, 0) for c in BUDGET_CATEGORIES}
        return self


class SpendingVariance(BaseModel):
    """Planned vs. actual spend comparison."""

    variance: dict[str, int]
    projected_total_cents: int
    alerts: list[BudgetAlert]


class BudgetReport(BaseModel):
    """Human-readable budget summary."""

    summary: str
    category_analysis: dict[str, str]
    recommendations: list[str]


class AdjustmentOption(BaseModel):
    """A suggested way to cut cost in one category."""

    category: str
    suggestion: str
    potential_saving_cents: int


class BudgetAdjustmentSuggestions(BaseModel):
    """Advice for moving a plan toward a target budget."""

    recommendations: list[str]
    alternative_options: list[AdjustmentOption] = Field(default_factory=list)
