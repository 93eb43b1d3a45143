"""FastAPI middleware for request tracing and metrics"""

import re
import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from retention_engine.infrastructure.observability.metrics import request_duration_histogram

# Caller-supplied IDs end up in JSON logs and response headers
REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._:-]{1,64}$")


def resolve_request_id(header_value) -> str:
    """Reuse a well-formed inbound ID, otherwise mint a fresh UUID"""
    if header_value and REQUEST_ID_PATTERN.match(header_value):
        return header_value
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID, reusing the caller's X-Request-ID when it is well-formed"""

    async def dispatch(self, request: Request, call_next):
        request_id = resolve_request_id(request.headers.get("X-Request-ID"))
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Time each request, labelled by route template rather than raw path"""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()

        response = await call_next(request)

        route = request.scope.get("route")
        request_duration_histogram.labels(
            method=request.method,
            endpoint=getattr(route, "path", None) or "unmatched",
            status=response.status_code,
        ).observe(time.perf_counter() - started)

        return response
