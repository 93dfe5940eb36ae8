"""
Cocktail API — Access Logging Middleware
==========================================

What:  One log line per HTTP request with status, duration and caller.
How:   Measures time around the downstream app; picks the level from the status
       class (5xx ERROR, 4xx WARNING, else INFO). The username is included when
       an authentication guard attached a principal.

Not logged: request bodies, Authorization headers, API keys.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from cocktail_api.middleware.request_id import request_id_var

logger = logging.getLogger("cocktail_api.access")

# Probes and static pages that would drown out real traffic
QUIET_PATHS = {"/health", "/favicon.ico"}


def _level_for(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status, duration, client and principal for each request."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        client_ip = request.client.host if request.client else "unknown"
        principal = getattr(request.state, "principal", None)
        username = principal.username if principal is not None else "-"
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")
        status = response.status_code

        logger.log(
            _level_for(status),
            "%s %s %d %.1fms [%s] from %s as %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            client_ip,
            username,
            extra={
                "request_id": rid,
                "method": request.method,
                "path": request.url.path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "username": username,
            },
        )
        return response
