# backend/propertymanager/middleware/structured_logging.py
from __future__ import annotations

import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from .request_id import bound_user_id

log = logging.getLogger("propertymanager.request")


class StructuredLoggingMiddleware(BaseHTTPMiddleware):
    """
    Emits one log line per request with method, path, status_code,
    latency_ms and, for authenticated calls, user_id. request_id is attached
    by the JSON formatter from the RequestIDMiddleware context, so this
    middleware must run inside it.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        t0 = time.perf_counter()

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            latency_ms = int((time.perf_counter() - t0) * 1000)
            extra = {
                "method": request.method,
                "path": request.url.path,
                "status_code": status_code,
                "latency_ms": latency_ms,
            }
            user_id = bound_user_id(request)
            if user_id is not None:
                extra["user_id"] = user_id
            log.info("http_request", extra=extra)
