from __future__ import annotations

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from message_board.core.logging import log_info, request_id_ctx
from message_board.observability.metrics import record_request


class RequestContextMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp) -> None:
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        req_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        token = request_id_ctx.set(req_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)
        duration_ms = (time.perf_counter() - start) * 1000.0
        response.headers["X-Request-Id"] = req_id
        # Label by route template ("/messages/{message_id}") to keep message ids out of metrics.
        route = request.scope.get("route")
        path_template = getattr(route, "path", None) or request.url.path
        record_request(request.method, path_template, response.status_code, duration_ms)
        log_info(
            "request",
            path=path_template,
            method=request.method,
            status_code=response.status_code,
            latency_ms=round(duration_ms, 2),
            client_ip=request.client.host if request.client else None,
        )
        return response
