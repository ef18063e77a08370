"""Request/Response logging middleware."""

import logging
import time
import uuid
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .auth_middleware import get_client_ip

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging all API requests and responses."""

    def __init__(
        self,
        app: Any,
        log_headers: bool = False,
        sensitive_headers: set[str] | None = None,
        exclude_paths: set[str] | None = None,
    ):
        """
        Initialize request logging middleware.

        Args:
            app: ASGI application
            log_headers: Whether to log headers
            sensitive_headers: Headers to redact when logging
            exclude_paths: Paths to exclude from logging (e.g., health checks)
        """
        super().__init__(app)
        self.log_headers = log_headers
        self.sensitive_headers = sensitive_headers or {
            "authorization",
            "cookie",
            "x-api-key",
        }
        self.exclude_paths = exclude_paths or {
            "/health",
            "/favicon.ico",
            "/docs",
            "/redoc",
            "/openapi.json",
        }

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and response logging."""

        if request.url.path in self.exclude_paths:
            return await call_next(request)

        # Request ID for tracing
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        self._log_request(request, request_id)

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                "API Request Failed",
                extra={
                    "event": "request_failed",
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "error_type": type(e).__name__,
                    "error_message": str(e),
                    "process_time": f"{process_time:.4f}s",
                },
                exc_info=True,
            )
            raise

        process_time = time.time() - start_time
        self._log_response(request, response, request_id, process_time)

        response.headers["X-Request-ID"] = request_id
        return response

    def _log_request(self, request: Request, request_id: str) -> None:
        log_data = {
            "event": "request_started",
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_ip": get_client_ip(request),
            "user_agent": request.headers.get("user-agent"),
        }

        if self.log_headers:
            log_data["headers"] = self._filter_headers(dict(request.headers))

        logger.info("API Request", extra=log_data)

    def _log_response(
        self, request: Request, response: Response, request_id: str, process_time: float
    ) -> None:
        log_data = {
            "event": "request_completed",
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time": f"{process_time:.4f}s",
        }

        # Log level follows status code
        if response.status_code >= 500:
            logger.error("API Response", extra=log_data)
        elif response.status_code >= 400:
            logger.warning("API Response", extra=log_data)
        else:
            logger.info("API Response", extra=log_data)

    def _filter_headers(self, headers: dict[str, str]) -> dict[str, str]:
        """Filter sensitive headers from logging."""
        return {
            key: "[REDACTED]" if key.lower() in self.sensitive_headers else value
            for key, value in headers.items()
        }


class PerformanceMiddleware(BaseHTTPMiddleware):
    """Warns about requests slower than a threshold."""

    def __init__(self, app: Any, slow_request_threshold: float = 1.0):
        super().__init__(app)
        self.slow_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        if process_time > self.slow_threshold:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path}",
                extra={
                    "event": "slow_request",
                    "method": request.method,
                    "path": request.url.path,
                    "process_time": f"{process_time:.4f}s",
                    "threshold": f"{self.slow_threshold}s",
                    "status_code": response.status_code,
                },
            )

        return response
