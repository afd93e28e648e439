"""
Request Context Middleware

Binds a request id and the request path into the structlog context for the
duration of each request, so every log line written while handling it
carries them. The id is taken from the X-Request-Id header when the caller
(or gateway) supplies one and echoed back on the response.
"""

import uuid

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from mylist.shared.core.logging import clear_log_context, log_context


REQUEST_ID_HEADER = "X-Request-Id"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Request-scoped logging context."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        clear_log_context()
        log_context(request_id=request_id, path=request.url.path, method=request.method)
        try:
            response = await call_next(request)
        finally:
            clear_log_context()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
