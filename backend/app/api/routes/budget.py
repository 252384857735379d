"""Budget endpoints - breakdown, optimize, variance, report, adjustments."""

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from backend.app.budget.aggregator import calculate_trip_budget
from backend.app.budget.optimizer import optimize_budget, suggest_budget_adjustments
from backend.app.budget.report import generate_budget_report
from backend.app.budget.variance import track_real_time_spending
from backend.app.models.budget import (
    BudgetAdjustmentSuggestions,
    BudgetBreakdown,
    BudgetReport,
    SpendingVariance,
)
from backend.app.models.itinerary import Itinerary
from backend.app.models.trip import Trip

router = APIRouter(prefix="/budget", tags=["budget"])


class BreakdownRequest(BaseModel):
    """Request body for POST /budget/breakdown."""

    itinerary: Itinerary
    trip: Trip


class OptimizeRequest(BaseModel):
    """Request body for POST /budget/optimize."""

    itinerary: Itinerary
    target_budget_cents: int = Field(..., ge=0)


class OptimizeResponse(BaseModel):
    """Response for POST /budget/optimize."""

    optimized_itinerary: Itinerary
    savings_cents: int
    overage_cents: int
    fully_resolved: bool
    changes: list[str]


class VarianceRequest(BaseModel):
    """Request body for POST /budget/variance."""

    planned: BudgetBreakdown
    actual_expenses: dict[str, int]


class AdjustmentsRequest(BaseModel):
    """Request body for POST /budget/adjustments."""

    current_budget_cents: int
    target_budget_cents: int


@router.post("/breakdown", response_model=BudgetBreakdown, status_code=status.HTTP_200_OK)
async def breakdown(request: BreakdownRequest) -> BudgetBreakdown:
    """Aggregate an itinerary's costs against its trip budget."""
    return calculate_trip_budget(request.itinerary, request.trip)


@router.post("/optimize", response_model=OptimizeResponse, status_code=status.HTTP_200_OK)
async def optimize(request: OptimizeRequest) -> OptimizeResponse:
    """Reduce an itinerary toward a target budget."""
    result = optimize_budget(request.itinerary, request.target_budget_cents)
    return OptimizeResponse(
        optimized_itinerary=result.optimized_itinerary,
        savings_cents=result.savings_cents,
        overage_cents=result.overage_cents,
        fully_resolved=result.fully_resolved,
        changes=result.changes,
    )


@router.post("/variance", response_model=SpendingVariance, status_code=status.HTTP_200_OK)
async def variance(request: VarianceRequest) -> SpendingVariance:
    """Compare actual spending against a planned breakdown."""
    return track_real_time_spending(request.planned, request.actual_expenses)


@router.post("/report", response_model=BudgetReport, status_code=status.HTTP_200_OK)
async def report(planned: BudgetBreakdown) -> BudgetReport:
    """Render a budget report for a breakdown."""
    return generate_budget_report(planned)


@router.post(
    "/adjustments",
    response_model=BudgetAdjustmentSuggestions,
    status_code=status.HTTP_200_OK,
)
async def adjustments(request: AdjustmentsRequest) -> BudgetAdjustmentSuggestions:
    """Suggest adjustments to move a plan toward a target budget."""
    return suggest_budget_adjustments(request.current_budget_cents, request.target_budget_cents)
