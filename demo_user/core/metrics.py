"""Prometheus metrics for demo-user-service.

All metrics are declared here so the inventory lives in one module.
HTTP metrics are recorded by MetricsMiddleware; domain metrics are
incremented where the behavior happens.  /metrics exposes the lot.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Application-specific metrics
# ---------------------------------------------------------------------------

USERS_SEEDED = Counter(
    "users_seeded_total",
    "Demo user records inserted by the startup seed step",
)

USER_LOOKUPS = Counter(
    "user_lookups_total",
    "Single-user lookups by id, by result",
    ["result"],  # "found" or "missing"
)
