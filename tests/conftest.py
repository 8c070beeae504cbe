"""Test configuration and fixtures"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import date, datetime, time
from uuid import uuid4
from zoneinfo import ZoneInfo

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from tablebook.main import app
from tablebook.database import Base, get_db
from tablebook.models.table import RestaurantTable, TableStatus, TableType
from tablebook.models.user import User, UserRole
from tablebook.services.reservations import ReservationService


# Test database URL (use in-memory SQLite for tests)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

SERVICE_DATE = date(2030, 11, 15)
RESTAURANT_TZ = ZoneInfo("America/New_York")


@pytest.fixture
async def test_db():
    """Create test database"""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def slot_at():
    """Build an aware instant on the test service date in restaurant time"""
    def _slot_at(hour: int, minute: int = 0, on: date = SERVICE_DATE) -> datetime:
        return datetime.combine(on, time(hour, minute), tzinfo=RESTAURANT_TZ)
    return _slot_at


@pytest.fixture
async def test_tables(test_db):
    """
    Floor plan: T1 (2), T2 (4), T3 (6) bookable; T4 (8) under maintenance,
    T5 (4) occupied.
    """
    tables = [
        RestaurantTable(id=uuid4(), table_number="T1", capacity=2, location_description="Window"),
        RestaurantTable(id=uuid4(), table_number="T2", capacity=4, location_description="Main dining area"),
        RestaurantTable(
            id=uuid4(),
            table_number="T3",
            capacity=6,
            table_type=TableType.BOOTH,
            location_description="Back booth",
        ),
        RestaurantTable(
            id=uuid4(),
            table_number="T4",
            capacity=8,
            status=TableStatus.MAINTENANCE,
            location_description="Patio",
        ),
        RestaurantTable(
            id=uuid4(),
            table_number="T5",
            capacity=4,
            status=TableStatus.OCCUPIED,
            location_description="Bar side",
        ),
    ]

    for table in tables:
        test_db.add(table)

    await test_db.commit()
    return {table.table_number: table for table in tables}


@pytest.fixture
async def test_manager(test_db):
    """Create a manager who decides reservations"""
    user = User(
        id=uuid4(),
        email="manager@example.com",
        hashed_password="not-a-real-hash",
        first_name="Maria",
        last_name="Rossi",
        role=UserRole.MANAGER,
    )
    test_db.add(user)
    await test_db.commit()

    return user


@pytest.fixture
async def test_customer(test_db):
    """Create a registered customer"""
    user = User(
        id=uuid4(),
        email="alice@example.com",
        hashed_password="not-a-real-hash",
        first_name="Alice",
        last_name="Walker",
        phone="+15551230000",
        role=UserRole.CUSTOMER,
    )
    test_db.add(user)
    await test_db.commit()

    return user


@pytest.fixture
def service(test_db):
    """Reservation service bound to the test session"""
    return ReservationService(test_db)


@pytest.fixture
async def client(test_db):
    """Create test client with overridden database"""
    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
