"""Health check endpoints."""

from fastapi import APIRouter

from backend.app.config import get_settings

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Simple health check for Docker/k8s.

    Returns:
        200 OK always (application is running)
    """
    return {"status": "ok"}


@router.get("/healthz")
async def healthz() -> dict[str, object]:
    """Health check with component status.

    The budget engine has no external dependencies; only the LLM used for
    itinerary generation is optional, and its absence degrades to the
    local fallback rather than failing.
    """
    settings = get_settings()
    llm_configured = bool(settings.openai_api_key and settings.openai_api_key.get_secret_value())

    return {
        "status": "ok",
        "components": {
            "budget_engine": "ok",
            "llm": "configured" if llm_configured else "fallback",
        },
    }
