"""Optimization result models."""

from pydantic import BaseModel, Field

from backend.app.models.itinerary import Itinerary


class OptimizationResult(BaseModel):
    """Outcome of a greedy budget reduction run.

    The reduction is bounded per item, so savings may fall short of the
    overage; check fully_resolved before treating the plan as within budget.
    """

    optimized_itinerary: Itinerary
    savings_cents: int = Field(..., ge=0)
    overage_cents: int = 0
    changes: list[str]

    @property
    def fully_resolved(self) -> bool:
        """True when the reduction closed the whole overage."""
        return self.savings_cents >= self.overage_cents
