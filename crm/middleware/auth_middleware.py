"""Request context middleware."""

import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


def get_client_ip(request: Request) -> str:
    """Client IP, honouring proxy headers."""

    forwarded_ip = request.headers.get("X-Forwarded-For", "").split(",")[
        0
    ].strip() or request.headers.get("X-Real-IP", "")

    if forwarded_ip:
        return forwarded_ip
    if request.client:
        return request.client.host
    return "unknown"


class AuthMiddleware(BaseHTTPMiddleware):
    """Stores client IP, user agent and start time on the request state.

    Authentication itself happens in the ``get_current_user`` dependency.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Attach request context, then time the request."""

        request.state.start_time = time.time()
        request.state.client_ip = get_client_ip(request)
        request.state.user_agent = request.headers.get("User-Agent", "")

        response = await call_next(request)

        process_time = time.time() - request.state.start_time
        response.headers["X-Process-Time"] = str(process_time)

        return response
