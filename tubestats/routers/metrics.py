"""Prometheus metrics endpoint and collectors.

Metrics exposed:
  tubestats_api_request_duration_seconds{endpoint,method,status}  Histogram
  tubestats_requests_in_flight                                    Gauge
  tubestats_source_load_duration_seconds{source}                  Histogram
  tubestats_rows_parsed_total                                     Counter
  tubestats_row_errors_total                                      Counter
"""

import time

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

router = APIRouter(tags=["metrics"])

# ── Collectors ──

request_duration = Histogram(
    "tubestats_api_request_duration_seconds",
    "HTTP request duration in seconds, by endpoint and method.",
    ["endpoint", "method", "status"],
)

requests_in_flight = Gauge(
    "tubestats_requests_in_flight",
    "Number of HTTP requests currently being served.",
)

source_load_duration = Histogram(
    "tubestats_source_load_duration_seconds",
    "Time spent reading and parsing a data file.",
    ["source"],
)

rows_parsed_total = Counter(
    "tubestats_rows_parsed_total",
    "Video rows parsed from the CSV source.",
)

row_errors_total = Counter(
    "tubestats_row_errors_total",
    "Recoverable row problems found while parsing the CSV source.",
)

# Unknown paths collapse into one label to keep cardinality bounded.
_KNOWN_ENDPOINTS = frozenset(
    {
        "/api/videos",
        "/api/trending",
        "/api/trending/channels",
        "/api/analytics/channels",
        "/api/analytics/daily",
        "/api/analytics/monthly",
        "/api/analytics/views-vs-likes",
        "/api/analytics/shorts",
        "/api/analytics/colors",
        "/api/analytics/parse-errors",
        "/health/live",
        "/health/ready",
    }
)


def _sanitize_endpoint(path: str) -> str:
    path = path.rstrip("/") or "/"
    if path in _KNOWN_ENDPOINTS:
        return path
    return "other"


# ── Metrics endpoint ──


@router.get("/metrics")
async def metrics_endpoint():
    """Serve Prometheus metrics."""
    output = generate_latest()
    return PlainTextResponse(content=output, media_type=CONTENT_TYPE_LATEST)


# ── Middleware ──


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Records request duration and in-flight count for Prometheus."""

    async def dispatch(self, request: Request, call_next) -> Response:
        # Don't instrument the /metrics endpoint itself
        if request.url.path == "/metrics":
            return await call_next(request)

        requests_in_flight.inc()
        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            requests_in_flight.dec()

        request_duration.labels(
            endpoint=_sanitize_endpoint(request.url.path),
            method=request.method,
            status=str(response.status_code),
        ).observe(time.perf_counter() - start)

        return response
