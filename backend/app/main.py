"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.app.api.routes.budget import router as budget_router
from backend.app.api.routes.gamification import router as gamification_router
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.itineraries import router as itineraries_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.config import get_settings

app = FastAPI(title="Smart Travel Planner API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_settings().ui_origin],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(budget_router, tags=["budget"])
app.include_router(itineraries_router, tags=["itineraries"])
app.include_router(gamification_router, tags=["gamification"])


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Smart Travel Planner API", "version": "0.1.0"}
