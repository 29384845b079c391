"""Route test fixtures - async DB + FastAPI test client + seeded reference rows.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use a test session from the patched
      session manager, so constraint errors map the way they do in production
    - SQLite enforces foreign keys (PRAGMA foreign_keys=ON on every connection)
    - db_manager patched so the readiness probe checks the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - Reference rows (cars, schools, destinations, providers) have no create
      endpoint, so fixtures insert them directly
"""

import pytest
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from bizdesk.db.base import Base
from bizdesk.infrastructure.database import get_db, DatabaseSessionManager
from bizdesk.models import Car, Customer, Destination, School, ServiceProvider
import bizdesk.infrastructure.database as db_module
from bizdesk.main import app


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    event.listen(engine.sync_engine, "connect", _enable_foreign_keys)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


async def _insert(db, row):
    db.add(row)
    await db.commit()
    await db.refresh(row)
    return row


@pytest.fixture
async def customer(test_db):
    return await _insert(test_db, Customer(name="Dana Levi", phone="050-1234567", balance=0.0))


@pytest.fixture
async def car(test_db):
    return await _insert(test_db, Car(
        make="Toyota", model="Corolla", year=2020, buy_price=50000, sale_price=45000,
        provider_name="Imports Ltd",
    ))


@pytest.fixture
async def school(test_db):
    return await _insert(test_db, School(name="Herzl High"))


@pytest.fixture
async def destination(test_db):
    return await _insert(test_db, Destination(
        name="Eilat", pricing={"student": 100, "crew": 50},
    ))


@pytest.fixture
async def guide(test_db):
    return await _insert(test_db, ServiceProvider(
        service_type="guides", name="Yossi Guide", user_id="u1", daily_rate=400,
    ))


@pytest.fixture
def booking_body(school, destination, guide):
    """20 students x 100 + 2 crew x 50 + one guide for 2 days at 400 = 2900."""
    return {
        "school_id": str(school.id),
        "destination_id": str(destination.id),
        "customer_name": "Herzl High",
        "trip_date": "2026-05-01",
        "number_of_students": 20,
        "number_of_crew": 2,
        "created_by": "admin",
        "services": [
            {"service_id": str(guide.id), "service_type": "guides", "quantity": 1, "days": 2},
        ],
    }
