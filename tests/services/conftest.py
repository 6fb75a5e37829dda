"""Service test fixtures — SQLite-backed store + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database with the customers table
    - The app under test is built by create_app() with explicit Settings
    - app.state.store is set directly; the lifespan is not run by the test client

Design Decisions:
    - SQLite in-memory through aiosqlite stands in for PostgreSQL; the service issues
      one portable SELECT, so no PostgreSQL-specific behavior is lost
"""

import pytest
from httpx import ASGITransport, AsyncClient

from fake_service_db.config import Settings
from fake_service_db.db.base import Base
from fake_service_db.infrastructure.database import DatabaseSessionManager
from fake_service_db.main import create_app
from fake_service_db.models.customer import CustomerRecord


@pytest.fixture
async def sqlite_store():
    store = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    async with store.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield store
    await store.dispose()


@pytest.fixture
def seed_customers(sqlite_store):
    """Insert customers by name; ids are assigned in order."""
    async def _seed(*names):
        async with sqlite_store.session() as db:
            db.add_all([
                CustomerRecord(id=str(i), name=name)
                for i, name in enumerate(names, start=1)
            ])
            await db.commit()
    return _seed


@pytest.fixture
def settings():
    return Settings(
        name="customers",
        database_url="sqlite+aiosqlite:///:memory:",
        query_timeout_seconds=5,
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
