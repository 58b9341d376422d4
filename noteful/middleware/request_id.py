"""
Noteful API - Request ID Middleware
===================================

What:  Tags each request with a short correlation id.
How:   Reuses the client's X-Request-ID header when present, otherwise
       generates one; stores it in a ContextVar and echoes it in the response.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Assigns a request id for log correlation.

    Behavior:
        1. Take X-Request-ID from the request if the client sent one
        2. Otherwise use the first 8 characters of a fresh UUID4
        3. Expose it via `request_id_var` and `request.state.request_id`
        4. Return it in the X-Request-ID response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())[:8]
        token = request_id_var.set(rid)
        request.state.request_id = rid

        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response


def current_request_id(request: Request) -> str:
    """
    The id of the request being handled.

    Handlers registered for `Exception` run in Starlette's outermost
    ServerErrorMiddleware, after this middleware has reset the ContextVar;
    `request.state` still carries the id there.
    """
    return request_id_var.get("") or getattr(request.state, "request_id", "")
