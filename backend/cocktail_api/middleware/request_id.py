"""
Cocktail API — Request ID Middleware
======================================

What:  Gives every request a correlation ID and echoes it in X-Request-ID.
Why:   Error bodies carry the same ID, so a client report can be matched to
       the server's log lines for that request.
How:   Reuses a client-supplied X-Request-ID or generates a short UUID, stores
       it in a ContextVar (for loggers and exception handlers) and on
       request.state (for handlers).
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on the same thread each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns the request ID before any route guard runs.

    Client-supplied IDs longer than MAX_REQUEST_ID_LENGTH are replaced, so a
    caller cannot inflate every log line.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER, "")
        if not rid or len(rid) > MAX_REQUEST_ID_LENGTH:
            rid = new_request_id()

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
