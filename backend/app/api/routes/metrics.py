"""Scrape endpoint for budget and itinerary counters."""

from fastapi import APIRouter, Response

from backend.app.utils.metrics import render_latest

router = APIRouter()


@router.get("/metrics")
async def metrics() -> Response:
    """Optimization outcomes, savings histogram and generation sources."""
    payload, content_type = render_latest()
    return Response(content=payload, media_type=content_type)
