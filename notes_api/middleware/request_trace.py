"""
Request tracing middleware.

- Reads X-Request-ID from the request or generates one
- Exposes it as request.state.request_id (used as traceId in error bodies)
- Returns X-Request-ID and X-Response-Time headers
- Logs method, path, status code and duration for every request
"""

import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class RequestTraceMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - started) * 1000
            logger.error(
                "%s %s - 500 - %.0fms",
                request.method,
                request.url.path,
                duration_ms,
                extra={"request_id": request_id, "status_code": 500, "duration_ms": duration_ms},
            )
            raise

        duration_ms = (time.perf_counter() - started) * 1000
        log_fn = logger.warning if response.status_code >= 500 else logger.info
        log_fn(
            "%s %s - %s - %.0fms",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
            },
        )
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms:.0f}ms"
        return response
