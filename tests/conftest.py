"""Test configuration and fixtures."""

import os
import uuid
from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select

from crm.config.settings import settings

# One database file per xdist worker
TEST_DB_PATH = f"./test_crm_{os.environ.get('PYTEST_XDIST_WORKER', 'main')}.db"
DEFAULT_PASSWORD = "Password123!"


# Test settings
@pytest.fixture(scope="session", autouse=True)
def setup_test_settings():
    """Point the application at a throwaway database before anything connects."""
    settings.TESTING = True
    settings.DATABASE_URL = f"sqlite+aiosqlite:///{TEST_DB_PATH}"
    settings.REDIS_URL = "redis://localhost:6379/15"

    from crm.config.database import reset_engines

    reset_engines()

    yield

    try:
        os.remove(TEST_DB_PATH)
    except FileNotFoundError:
        pass


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Hash once; bcrypt is slow."""
    from crm.utils.security import hash_password

    return hash_password(DEFAULT_PASSWORD)


# Fresh schema and seed data per test
@pytest_asyncio.fixture
async def setup_test_database():
    """Create tables and seed roles, then drop everything afterwards."""
    from crm.config.database import get_async_engine, get_async_session_local, reset_engines
    from crm.models import Base
    from crm.seed import seed_permissions, seed_roles

    engine = get_async_engine()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with get_async_session_local()() as session:
        permissions = await seed_permissions(session)
        await seed_roles(session, permissions)
        await session.commit()

    yield

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()
    reset_engines()


@pytest.fixture(autouse=True)
def mock_redis(monkeypatch):
    """In-memory stand-in for the Redis sorted-set pipeline used by the rate limiter."""

    class MockPipeline:
        def __init__(self, counters):
            self.counters = counters
            self.key = None

        async def __aenter__(self):
            return self

        async def __aexit__(self, *exc_info):
            return False

        def zremrangebyscore(self, key, min_score, max_score):
            self.key = key
            return self

        def zcard(self, key):
            self.key = key
            return self

        def zadd(self, key, mapping):
            self.key = key
            return self

        def expire(self, key, seconds):
            return self

        async def execute(self):
            # [removed, count before this request, added, expire]
            current_count = self.counters.get(self.key, 0)
            self.counters[self.key] = current_count + 1
            return [0, current_count, 1, True]

    class MockRedis:
        def __init__(self):
            self.counters: dict[str, int] = {}

        def pipeline(self):
            return MockPipeline(self.counters)

    redis_instance = MockRedis()

    async def mock_get_redis():
        return redis_instance

    monkeypatch.setattr("crm.middleware.rate_limit.get_redis", mock_get_redis)

    return redis_instance


# Async test client
@pytest_asyncio.fixture
async def async_client(setup_test_database) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client."""
    from crm.main import app

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def db_session(setup_test_database):
    from crm.config.database import get_async_session_local

    async with get_async_session_local()() as session:
        yield session


@pytest.fixture
def test_user_data():
    """Registration payload with a unique email."""
    unique_id = uuid.uuid4().hex[:8]
    return {
        "email": f"test_{unique_id}@example.com",
        "password": DEFAULT_PASSWORD,
        "first_name": "Test",
        "last_name": "User",
    }


@pytest.fixture
def make_user(db_session, password_hash):
    """Factory creating a user with the named roles directly in the database."""
    from crm.models import Role, User

    async def _make_user(*role_names, manager_id=None, is_active=True, first_name="Test"):
        roles = []
        if role_names:
            result = await db_session.execute(select(Role).where(Role.name.in_(role_names)))
            roles = list(result.scalars().all())

        user = User(
            email=f"user_{uuid.uuid4().hex[:8]}@example.com",
            password_hash=password_hash,
            first_name=first_name,
            last_name="User",
            manager_id=manager_id,
            is_active=is_active,
            roles=roles,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user."""
    from crm.services.jwt_service import JWTService

    def _auth_headers(user) -> dict[str, str]:
        token = JWTService().create_access_token(user.id, user.email)
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers


@pytest_asyncio.fixture
async def admin_user(make_user):
    return await make_user("Admin", first_name="Admin")


@pytest_asyncio.fixture
async def sales_user(make_user):
    return await make_user("Salesperson", first_name="Sam")


@pytest_asyncio.fixture
async def other_sales_user(make_user):
    return await make_user("Salesperson", first_name="Olive")


@pytest_asyncio.fixture
async def admin_headers(admin_user, auth_headers):
    return auth_headers(admin_user)


@pytest_asyncio.fixture
async def sales_headers(sales_user, auth_headers):
    return auth_headers(sales_user)


@pytest_asyncio.fixture
async def other_sales_headers(other_sales_user, auth_headers):
    return auth_headers(other_sales_user)
