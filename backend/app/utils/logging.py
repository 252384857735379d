"""Structured logging for budget optimization and itinerary generation."""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class StructuredBudgetLogger:
    """Structured logger for budget engine runs."""

    def log_optimization(
        self,
        itinerary_id: str,
        outcome: str,
        overage_cents: int,
        savings_cents: int,
        num_changes: int,
        latency_ms: float,
    ) -> None:
        """Log a budget optimization run with structured data."""
        log_data: dict[str, Any] = {
            "itinerary_id": itinerary_id,
            "outcome": outcome,
            "overage_cents": overage_cents,
            "savings_cents": savings_cents,
            "unresolved_cents": max(0, overage_cents - savings_cents),
            "num_changes": num_changes,
            "latency_ms": round(latency_ms, 2),
        }

        log_msg = f"Budget optimization: {itinerary_id} - {outcome}"

        if outcome == "partial":
            logger.warning(log_msg, extra={"structured": log_data})
        else:
            logger.info(log_msg, extra={"structured": log_data})

    def log_generation(
        self,
        trip_id: str,
        source: str,
        num_days: int,
        error_reason: str | None = None,
    ) -> None:
        """Log an itinerary generation with structured data."""
        log_data: dict[str, Any] = {
            "trip_id": trip_id,
            "source": source,
            "num_days": num_days,
        }

        if error_reason:
            log_data["error_reason"] = error_reason

        log_msg = f"Itinerary generation: {trip_id} - {source}"

        if error_reason:
            logger.warning(log_msg, extra={"structured": log_data})
        else:
            logger.info(log_msg, extra={"structured": log_data})
