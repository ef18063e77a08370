"""Database dependencies for FastAPI."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from crm.config.database import get_async_session_local


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    session_local = get_async_session_local()
    async with session_local() as session:
        try:
            yield session
        finally:
            await session.close()
