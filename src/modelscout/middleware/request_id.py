"""Middleware to add X-Request-ID to every request/response and count requests."""

from __future__ import annotations

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get("X-Request-ID") or f"req_{uuid.uuid4().hex[:12]}"
        request.state.request_id = request_id

        metrics = getattr(request.app.state, "metrics", None)
        if metrics:
            metrics.requests_total.inc()

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response
