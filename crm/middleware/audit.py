"""Audit logging middleware."""

import json
import logging
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from crm.config.database import get_async_session_local
from crm.config.settings import settings
from crm.services.audit_service import AuditService

from .auth_middleware import get_client_ip

logger = logging.getLogger(__name__)

METHOD_ACTIONS = {
    "POST": "create",
    "PUT": "update",
    "PATCH": "update",
    "DELETE": "delete",
}


class AuditMiddleware(BaseHTTPMiddleware):
    """Writes one audit log row per mutating API call."""

    def __init__(self, app: Any, prefix: str | None = None):
        super().__init__(app)
        self.prefix = (prefix if prefix is not None else settings.API_PREFIX).rstrip("/")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method not in METHOD_ACTIONS or not request.url.path.startswith(self.prefix):
            return await call_next(request)

        response = await call_next(request)

        body = b""
        async for chunk in response.body_iterator:
            body += chunk

        await self._write_entry(request, response.status_code, body)

        return Response(
            content=body,
            status_code=response.status_code,
            headers=dict(response.headers),
            media_type=response.media_type,
            background=response.background,
        )

    @staticmethod
    def _parse_data(body: bytes) -> Any:
        try:
            payload = json.loads(body) if body else None
        except (UnicodeDecodeError, json.JSONDecodeError):
            return None
        if isinstance(payload, dict):
            return payload.get("data")
        return None

    def _resource_from_path(self, request: Request) -> tuple[str, str | None]:
        """Resource type is the first segment after the prefix; id comes from the route."""
        segments = [s for s in request.url.path[len(self.prefix):].split("/") if s]
        resource_type = segments[0] if segments else "unknown"
        resource_id = next(
            (value for key, value in request.path_params.items() if key.endswith("id")), None
        )
        return resource_type, resource_id

    async def _write_entry(self, request: Request, status_code: int, body: bytes) -> None:
        try:
            data = self._parse_data(body)
            resource_type, resource_id = self._resource_from_path(request)
            if resource_id is None and isinstance(data, dict) and data.get("id"):
                resource_id = str(data["id"])

            session_local = get_async_session_local()
            async with session_local() as db:
                await AuditService(db).record(
                    user_id=getattr(request.state, "actor_id", None),
                    action=METHOD_ACTIONS[request.method],
                    resource_type=resource_type,
                    resource_id=resource_id,
                    new_values=data,
                    ip_address=getattr(request.state, "client_ip", None) or get_client_ip(request),
                    user_agent=request.headers.get("user-agent"),
                    endpoint=str(request.url.path),
                    method=request.method,
                    status_code=status_code,
                )
        except Exception as e:
            logger.error(
                f"Audit logging error: {e}",
                extra={"path": request.url.path, "method": request.method},
                exc_info=True,
            )
