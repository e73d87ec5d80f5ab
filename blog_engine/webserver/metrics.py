"""Prometheus metrics for served requests."""

from __future__ import annotations

from fastapi import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

# Counts every request, labelled by sanitised path
TOTAL_REQUESTS = Counter(
    "http_requests_total",
    "Number of get requests.",
    ["path"],
)

# Observes response times, labelled by sanitised path
RESPONSE_DURATION = Histogram(
    "http_response_duration_seconds",
    "Duration of HTTP responses.",
    ["path"],
)


def record_metrics(path: str, duration: float) -> None:
    TOTAL_REQUESTS.labels(path=path).inc()
    RESPONSE_DURATION.labels(path=path).observe(duration)


def metrics_response(registry: CollectorRegistry = REGISTRY) -> Response:
    """Expose the registry in the Prometheus text format."""
    return Response(content=generate_latest(registry), media_type=CONTENT_TYPE_LATEST)
