"""Itinerary endpoints - generation and schedule/budget optimization."""

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from backend.app.itinerary.generator import generate_itinerary
from backend.app.itinerary.optimizer import optimize_for_budget, optimize_for_time
from backend.app.models.itinerary import Itinerary
from backend.app.models.trip import TravelPreferences, Trip

router = APIRouter(prefix="/itineraries", tags=["itineraries"])


class GenerateRequest(BaseModel):
    """Request body for POST /itineraries/generate."""

    trip: Trip
    preferences: TravelPreferences = Field(default_factory=TravelPreferences)


class BudgetOptimizeRequest(BaseModel):
    """Request body for POST /itineraries/optimize/budget."""

    itinerary: Itinerary
    max_budget_cents: int = Field(..., ge=0)


@router.post("/generate", response_model=Itinerary, status_code=status.HTTP_200_OK)
async def generate(request: GenerateRequest) -> Itinerary:
    """Generate an itinerary for a trip (local fallback when the LLM is unavailable)."""
    return await generate_itinerary(request.trip, request.preferences)


@router.post("/optimize/time", response_model=Itinerary, status_code=status.HTTP_200_OK)
async def optimize_time(itinerary: Itinerary) -> Itinerary:
    """Reorder and reschedule each day's activities."""
    return optimize_for_time(itinerary)


@router.post("/optimize/budget", response_model=Itinerary, status_code=status.HTTP_200_OK)
async def optimize_budget_per_day(request: BudgetOptimizeRequest) -> Itinerary:
    """Trim each day toward an even share of a maximum budget."""
    return optimize_for_budget(request.itinerary, request.max_budget_cents)
