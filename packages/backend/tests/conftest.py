"""Test fixtures — a fresh SQLite database per test, plus app clients.

Learn: Testing pattern for async SQLAlchemy + FastAPI:

1. Each test gets its own in-memory SQLite engine (aiosqlite) with the
   schema created from the ORM models. StaticPool keeps the single
   in-memory connection alive for the whole test.
2. The app's get_db dependency is overridden to yield that session.
3. HTTP tests use httpx.AsyncClient over ASGITransport (no lifespan);
   WebSocket tests use Starlette's TestClient, which runs the lifespan
   so a real ChatHub is started.

The env vars below are set before the app is imported so the module-level
engine never tries to reach Postgres.
"""

import os

os.environ.setdefault("STOREFRONT_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("STOREFRONT_STATIC_DIR", "__no_static_dir__")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from storefront.db.engine import get_db  # noqa: E402
from storefront.db.models import Base  # noqa: E402
from storefront.main import app  # noqa: E402


TEST_DB_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture()
async def db_session():
    """Per-test session on a throwaway in-memory database."""
    engine = create_async_engine(TEST_DB_URL, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session = AsyncSession(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest_asyncio.fixture()
async def client(db_session):
    """HTTP client with the app's get_db overridden for testing."""

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture()
def chat_client():
    """Synchronous client with the lifespan running (chat hub started)."""
    with TestClient(app) as test_client:
        yield test_client
