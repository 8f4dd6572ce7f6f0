# bike_inventory/core/metrics.py

"""
Prometheus metrics.

Request metrics are recorded by ``metrics_middleware`` using the matched
route template (``/api/brand/{item_id}``) so ids do not explode label
cardinality. Storage operations are counted by ``ObjectStorage``.
"""

import time
from typing import Awaitable, Callable

from fastapi import Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)
REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "path"],
)
STORAGE_OPERATIONS = Counter(
    "storage_operations_total",
    "Object storage operations",
    ["operation", "outcome"],
)


def _route_path(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or "unmatched"


async def metrics_middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        path = _route_path(request)
        REQUEST_COUNT.labels(method=request.method, path=path, status=str(status_code)).inc()
        REQUEST_LATENCY.labels(method=request.method, path=path).observe(time.perf_counter() - started)


def metrics_response() -> Response:
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
