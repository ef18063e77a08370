"""Configuration module."""

from .database import get_async_session_local, get_redis
from .settings import settings

__all__ = ["settings", "get_async_session_local", "get_redis"]
