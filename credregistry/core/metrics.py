"""Prometheus metric inventory for the credential registry.

All metrics are defined here; other modules import the one they need and
increment/observe it where the action happens.

  COUNTER   only goes up: requests served, credentials issued
  GAUGE     goes up and down: requests in flight right now
  HISTOGRAM bucketed observations: request latency percentiles
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
# Registry metrics
# ---------------------------------------------------------------------------

CREDENTIAL_OPERATIONS = Counter(
    "credential_operations_total",
    "Credential engine operations by outcome",
    ["operation", "result"],  # issue|renew|revoke|share|verify|search, ok|rejected
)

NOTIFICATIONS = Counter(
    "notifications_total",
    "Notifications handed to a sink by backend and outcome",
    ["backend", "result"],  # memory|redis, sent|failed
)
