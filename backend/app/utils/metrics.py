"""Prometheus metrics for the budget engine and itinerary generation."""

from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, Counter, Histogram, generate_latest

budget_optimizations_total = Counter(
    "budget_optimizations_total",
    "Total budget optimization runs",
    ["outcome"],
)

budget_savings_cents = Histogram(
    "budget_savings_cents",
    "Savings produced per optimization run, in cents",
    buckets=[0, 1000, 5000, 10000, 50000, 100000, 500000, 1000000],
)

itinerary_generations_total = Counter(
    "itinerary_generations_total",
    "Total itinerary generations",
    ["source"],
)


class PrometheusBudgetMetrics:
    """Prometheus-based budget engine metrics implementation."""

    def record_optimization(self, outcome: str, savings_cents: int) -> None:
        """Count an optimization run and observe its savings."""
        budget_optimizations_total.labels(outcome=outcome).inc()
        budget_savings_cents.observe(savings_cents)

    def inc_generation(self, source: str) -> None:
        """Increment itinerary generation counter."""
        itinerary_generations_total.labels(source=source).inc()


def render_latest() -> tuple[bytes, str]:
    """Serialize the default registry in the Prometheus text format."""
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
