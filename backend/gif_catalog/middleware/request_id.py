"""
Gif Catalog Backend — Request ID Middleware
============================================

What:  Tags every request with a short correlation ID and echoes it back in
       the `X-Request-ID` response header.
Why:   Log lines and error bodies for the same request share the ID, so a
       client-side failure can be matched to the server log.
How:   Reuses an incoming `X-Request-ID` header when present, otherwise
       generates one; stores it in a ContextVar and on `request.state`.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Assigns the request ID before any other middleware logs anything."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are enough to correlate and stay readable in logs
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
