"""
Travel API — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets its own SQLite database file (aiosqlite driver) with
       the schema created from the ORM metadata, so no MySQL is needed.

Fixture Hierarchy:
    ├── test_settings:       Settings pointing at the per-test SQLite file
    ├── datastore:           Datastore with an empty schema
    ├── seeded_datastore:    Datastore with destinations and hotels loaded
    ├── unreachable_datastore: Datastore whose database cannot be opened
    └── test_client:         HTTPX AsyncClient bound to an app on seeded_datastore
"""

import os
import tempfile
from decimal import Decimal

# Override settings BEFORE any travel_api import; main.py builds a module-level app
os.environ["DATABASE_URL"] = (
    f"sqlite+aiosqlite:///{tempfile.mkdtemp(prefix='travel_api_test_')}/default.db"
)
os.environ["NODE_ENV"] = "test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from travel_api.config import Settings
from travel_api.database import Base, Datastore
from travel_api.main import create_app
from travel_api.models.travel import Destination, Hotel


def sqlite_url(path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "travel.db"


@pytest.fixture
def test_settings(db_path):
    return Settings(_env_file=None, DATABASE_URL=sqlite_url(db_path), NODE_ENV="test")


@pytest_asyncio.fixture
async def datastore(db_path):
    """A Datastore over a fresh SQLite file with all tables created."""
    store = Datastore(sqlite_url(db_path))
    async with store.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield store
    await store.dispose()


@pytest_asyncio.fixture
async def seeded_datastore(datastore):
    """
    Datastore with three destinations:
        1 Paris  → 2 hotels
        2 Tokyo  → 1 hotel
        3 Nairobi → no hotels
    """
    async with datastore.session() as session:
        session.add_all([
            Destination(id=1, name="Paris", country="France", description="City of light"),
            Destination(id=2, name="Tokyo", country="Japan", description="Neon and temples"),
            Destination(id=3, name="Nairobi", country="Kenya", description=None),
        ])
        await session.flush()
        session.add_all([
            Hotel(id=10, destination_id=1, name="Hotel Lumiere", price_per_night=Decimal("120.50")),
            Hotel(id=11, destination_id=1, name="Le Petit Nid", price_per_night=Decimal("85.00")),
            Hotel(id=20, destination_id=2, name="Shinjuku Stay", price_per_night=Decimal("99.99")),
        ])
    return datastore


@pytest_asyncio.fixture
async def empty_schema_datastore(tmp_path):
    """Reachable database with no tables: every query fails."""
    store = Datastore(sqlite_url(tmp_path / "no_tables.db"))
    yield store
    await store.dispose()


@pytest_asyncio.fixture
async def unreachable_datastore(tmp_path):
    """Points into a directory that doesn't exist, so connecting fails."""
    store = Datastore(sqlite_url(tmp_path / "missing" / "travel.db"))
    yield store
    await store.dispose()


async def _client_for(app):
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def test_client(test_settings, seeded_datastore):
    """
    HTTPX AsyncClient talking to an app wired to the seeded datastore.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
    """
    app = create_app(settings=test_settings, datastore=seeded_datastore)
    async with await _client_for(app) as client:
        yield client


@pytest.fixture
def make_client(test_settings):
    """Factory for clients over an arbitrary datastore/settings pair."""

    async def _make(store, settings=None):
        app = create_app(settings=settings or test_settings, datastore=store)
        return await _client_for(app)

    return _make
