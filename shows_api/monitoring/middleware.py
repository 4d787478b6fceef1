"""Prometheus metrics middleware for FastAPI.

Counts requests and records latencies per method, route template and
status, and exposes them on /metrics for Prometheus scraping.
"""

import time

from fastapi import FastAPI
from prometheus_client import Counter, Gauge, Histogram, make_asgi_app
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Match

# =============================================================================
# HTTP METRICS
# =============================================================================

HTTP_REQUESTS_TOTAL = Counter(
    "shows_api_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

HTTP_REQUEST_DURATION = Histogram(
    "shows_api_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "path"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "shows_api_http_requests_in_progress",
    "HTTP requests currently being handled",
    ["method"],
)

_METRICS_PATH = "/metrics"


# =============================================================================
# MIDDLEWARE
# =============================================================================


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Records HTTP request metrics for Prometheus.

    Paths are labelled with their route template (``/shows/{show_id}``)
    so per-id requests share one series. Unmatched paths are labelled
    ``unmatched``. The /metrics endpoint itself is not recorded.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Process request and record metrics.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware/handler in the chain.

        Returns:
            HTTP response from downstream handler.
        """
        if request.url.path.startswith(_METRICS_PATH):
            return await call_next(request)

        method = request.method
        path = _route_template(request)
        start = time.perf_counter()

        with HTTP_REQUESTS_IN_PROGRESS.labels(method=method).track_inprogress():
            response = await call_next(request)

        duration = time.perf_counter() - start
        status = str(response.status_code)

        HTTP_REQUESTS_TOTAL.labels(method=method, path=path, status=status).inc()
        HTTP_REQUEST_DURATION.labels(method=method, path=path).observe(duration)

        return response


def _route_template(request: Request) -> str:
    """Return the path template of the route matching ``request``."""
    for route in request.app.router.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", request.url.path)
    return "unmatched"


# =============================================================================
# MOUNT HELPER
# =============================================================================


def mount_metrics(app: FastAPI) -> None:
    """Mount the /metrics Prometheus endpoint on a FastAPI app.

    Uses prometheus_client.make_asgi_app() which serves all registered
    metrics in Prometheus text exposition format.

    Args:
        app: FastAPI application instance.
    """
    app.mount(_METRICS_PATH, make_asgi_app())
