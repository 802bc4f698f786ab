"""
HeroVault Backend - Request Logging Middleware
===============================================

What:  One access log line per HTTP request.
How:   Times the downstream handler and logs method, path, status,
       duration, request id and client ip. The level follows the status
       class: 5xx → ERROR, 4xx → WARNING, otherwise INFO.

Record tagging:
    Create handlers put the new record's id on `request.state.record_id`;
    it is appended to the line (`record=<id>`) so a 201 can be traced to
    the stored document. Requests with a body also log its size taken
    from Content-Length (`in=<bytes>B`).

Never logged: request bodies or uploaded file contents.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from herovault.middleware.request_id import request_id_var

logger = logging.getLogger("herovault.access")


def _body_size(request: Request) -> Optional[int]:
    try:
        return int(request.headers["content-length"])
    except (KeyError, ValueError):
        return None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs status and duration for every request except /health."""

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        rid = request_id_var.get("")
        client_ip = request.client.host if request.client else "unknown"
        record_id = getattr(request.state, "record_id", None)
        body_size = _body_size(request)

        suffix = ""
        if body_size:
            suffix += f" in={body_size}B"
        if record_id is not None:
            suffix += f" record={record_id}"

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s%s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            client_ip,
            suffix,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "record_id": record_id,
                "body_size": body_size,
            },
        )
        return response
