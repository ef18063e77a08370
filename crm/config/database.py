"""Database configuration and dependencies."""

import redis.asyncio as aioredis
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from .settings import settings

# Global engine variables (lazy initialization)
async_engine = None
AsyncSessionLocal = None


def get_async_engine():
    """Get or create async engine."""
    global async_engine
    if async_engine is None:
        async_engine = create_async_engine(
            settings.DATABASE_URL,
            echo=settings.DEBUG,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
    return async_engine


def get_async_session_local():
    """Get or create async session factory."""
    global AsyncSessionLocal
    if AsyncSessionLocal is None:
        AsyncSessionLocal = async_sessionmaker(
            get_async_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return AsyncSessionLocal


async def init_models():
    """Create all tables that do not exist yet."""
    from crm.models import Base

    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Redis connection
redis_pool = None


async def init_redis():
    """Initialize Redis connection pool."""
    global redis_pool
    redis_pool = aioredis.from_url(
        settings.REDIS_URL,
        encoding="utf-8",
        decode_responses=True,
        max_connections=20,
    )
    return redis_pool


async def close_redis():
    """Close Redis connection pool."""
    global redis_pool
    if redis_pool:
        await redis_pool.aclose()
        redis_pool = None


async def get_redis() -> aioredis.Redis:
    """Get Redis connection."""
    global redis_pool
    if not redis_pool:
        redis_pool = await init_redis()
    return redis_pool


def reset_engines():
    """Reset engine and session factory so new settings are picked up."""
    global async_engine, AsyncSessionLocal
    async_engine = None
    AsyncSessionLocal = None
