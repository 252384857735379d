"""Gamification endpoints - badges, progress, stats updates, challenges."""

from fastapi import APIRouter, status
from pydantic import BaseModel, Field

from backend.app.gamification.badges import get_all_badges
from backend.app.gamification.engine import GamificationEngine
from backend.app.models.gamification import (
    Achievement,
    Badge,
    Challenge,
    GameProgressReport,
    UserBadge,
    UserStats,
)
from backend.app.models.trip import Trip

router = APIRouter(prefix="/gamification", tags=["gamification"])

engine = GamificationEngine()


class ProgressRequest(BaseModel):
    """Request body for POST /gamification/progress."""

    user_id: str
    stats: UserStats
    earned_badges: list[UserBadge] = Field(default_factory=list)


class ProgressResponse(BaseModel):
    """Response for POST /gamification/progress."""

    eligible_badges: list[UserBadge]
    achievements: list[Achievement]
    report: GameProgressReport


class StatsUpdateRequest(BaseModel):
    """Request body for POST /gamification/stats."""

    stats: UserStats
    trip: Trip
    completed: bool = False


@router.get("/badges", response_model=list[Badge])
async def badges() -> list[Badge]:
    """List the badge catalog."""
    return get_all_badges()


@router.post("/progress", response_model=ProgressResponse, status_code=status.HTTP_200_OK)
async def progress(request: ProgressRequest) -> ProgressResponse:
    """Derive badges, achievements and the progress report from stats."""
    return ProgressResponse(
        eligible_badges=engine.check_badge_eligibility(request.user_id, request.stats),
        achievements=engine.calculate_achievements(request.user_id, request.stats),
        report=engine.generate_progress_report(request.stats, request.earned_badges),
    )


@router.post("/stats", response_model=UserStats, status_code=status.HTTP_200_OK)
async def update_stats(request: StatsUpdateRequest) -> UserStats:
    """Fold a trip into a user's stats snapshot."""
    return engine.update_user_stats(request.stats, request.trip, completed=request.completed)


@router.post("/challenges", response_model=list[Challenge], status_code=status.HTTP_200_OK)
async def challenges(stats: UserStats) -> list[Challenge]:
    """Generate challenges for a user."""
    return engine.generate_challenges(stats)
