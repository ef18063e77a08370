"""Rate limiting middleware using Redis."""

import logging
import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from crm.config.database import get_redis
from crm.config.settings import settings
from crm.constants import APIStatus

from .auth_middleware import get_client_ip

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-IP rate limiting using a sliding window log in a Redis sorted set."""

    def __init__(
        self,
        app,
        max_requests: int | None = None,
        window_seconds: int | None = None,
        exempt_paths: set[str] | None = None,
    ):
        super().__init__(app)
        self.max_requests = max_requests or settings.RATE_LIMIT_MAX_REQUESTS
        self.window_seconds = window_seconds or settings.RATE_LIMIT_WINDOW_SECONDS
        self.exempt_paths = exempt_paths or {"/health", f"{settings.API_PREFIX}/health"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request through rate limiting middleware."""

        if not settings.RATE_LIMIT_ENABLED or request.url.path in self.exempt_paths:
            return await call_next(request)

        client_ip = getattr(request.state, "client_ip", None) or get_client_ip(request)

        if not await self._check_rate_limit(f"ip:{client_ip}"):
            logger.warning(
                f"Rate limit exceeded for {client_ip}",
                extra={"client_ip": client_ip, "path": request.url.path},
            )
            return JSONResponse(
                status_code=APIStatus.RATE_LIMITED,
                content={
                    "success": False,
                    "error_code": "RATE_LIMIT_EXCEEDED",
                    "message": RATE_LIMIT_MESSAGE,
                    "retry_after": self.window_seconds,
                },
                headers={"Retry-After": str(self.window_seconds)},
            )

        return await call_next(request)

    async def _check_rate_limit(self, client_id: str) -> bool:
        """Check if client is within rate limits using sliding window."""

        try:
            redis = await get_redis()
            now = time.time()

            key = f"rate_limit:{client_id}"

            async with redis.pipeline() as pipe:
                # Remove old entries outside the window
                pipe.zremrangebyscore(key, 0, now - self.window_seconds)

                # Count current requests in window
                pipe.zcard(key)

                # Unique member per request so same-timestamp hits are all counted
                pipe.zadd(key, {f"{now}:{uuid.uuid4().hex}": now})

                # Set expiration for cleanup
                pipe.expire(key, self.window_seconds)

                results = await pipe.execute()

            current_count = results[1]
            return current_count < self.max_requests

        except Exception as e:
            # Redis unavailable: fail open
            logger.warning(f"Rate limiter unavailable, allowing request: {e}")
            return True
