"""FastAPI middleware for request tracing and metrics"""

import uuid
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.routing import Match
from expense_ai.infrastructure.observability.metrics import request_duration_histogram

UNMATCHED_ROUTE = "unmatched"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID, reusing the caller's X-Request-ID when present"""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


def route_template(request: Request) -> str:
    """Path template of the matching route, e.g. /v1/plans, so label values stay bounded"""
    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return getattr(route, "path", UNMATCHED_ROUTE)
    return UNMATCHED_ROUTE


class MetricsMiddleware(BaseHTTPMiddleware):
    """Record request duration per method, route template and status"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        endpoint = route_template(request)

        response = await call_next(request)

        request_duration_histogram.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code,
        ).observe(time.time() - start_time)

        return response
