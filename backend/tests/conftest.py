"""
Device Registry Backend — Test Configuration (conftest.py)
============================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for service unit tests (no DB)
    ├── db_engine:       fresh in-memory SQLite database with all tables
    ├── db_session:      session on that database, for seeding
    ├── seed_data:       device types, employees, devices and assignments
    ├── test_client:     HTTPX AsyncClient whose requests use db_engine
    └── server_error_client: same, but unhandled errors come back as 500 responses
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"

from datetime import datetime
from decimal import Decimal
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base, enable_sqlite_foreign_keys, get_db_session
from app.models import Device, DeviceEmployee, DeviceType, Employee, Person, Position


# ══════════════════════════════════════════════════════════════════════════
# Mocked Session (service unit tests)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get_device(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = device
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Real Database (API tests)
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    """
    In-memory SQLite database shared by every session of one test.

    StaticPool keeps a single connection so the seeded data and the
    request sessions see the same database.
    Foreign keys are enforced as they are in production, so ON DELETE
    CASCADE and the FK constraints behave the same.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seed_data(db_session):
    """
    Seeds a small registry and returns the generated ids.

    Devices:
        laptop:  PC, two open assignments (2023-01-01 → ann, 2024-06-01 → john)
        watch:   Smartwatch, only a returned assignment
        spare:   PC, never assigned
    """
    pc = DeviceType(name="PC")
    watch_type = DeviceType(name="Smartwatch")
    engineer = Position(name="Engineer")

    ann = Employee(
        person=Person(
            passport_number="AB123456",
            first_name="Ann",
            middle_name=None,
            last_name="Lee",
            phone_number="+48111222333",
            email="ann.lee@example.com",
        ),
        position=engineer,
        salary=Decimal("5500.50"),
        hire_date=datetime(2020, 3, 1),
    )
    john = Employee(
        person=Person(
            passport_number="CD654321",
            first_name="John",
            middle_name="Michael",
            last_name="Smith",
            phone_number="+48444555666",
            email="john.smith@example.com",
        ),
        position=engineer,
        salary=Decimal("7200.00"),
        hire_date=datetime(2021, 9, 15),
    )

    laptop = Device(
        name="Laptop X1",
        is_enabled=True,
        additional_properties='{"ram": "16GB", "ports": [1, 2]}',
        device_type=pc,
    )
    watch = Device(
        name="Watch S",
        is_enabled=False,
        additional_properties="{}",
        device_type=watch_type,
    )
    spare = Device(
        name="Spare PC",
        is_enabled=True,
        additional_properties="[]",
        device_type=pc,
    )

    db_session.add_all([pc, watch_type, engineer, ann, john, laptop, watch, spare])
    await db_session.flush()

    db_session.add_all([
        DeviceEmployee(device_id=laptop.id, employee_id=ann.id, issue_date=datetime(2023, 1, 1)),
        DeviceEmployee(device_id=laptop.id, employee_id=john.id, issue_date=datetime(2024, 6, 1)),
        DeviceEmployee(
            device_id=watch.id,
            employee_id=ann.id,
            issue_date=datetime(2022, 5, 1),
            return_date=datetime(2022, 12, 1),
        ),
    ])
    await db_session.commit()

    return {
        "pc_type_id": pc.id,
        "watch_type_id": watch_type.id,
        "ann_id": ann.id,
        "john_id": john.id,
        "position_id": engineer.id,
        "laptop_id": laptop.id,
        "watch_id": watch.id,
        "spare_id": spare.id,
    }


def _override_session(session_factory):
    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    return override_get_db_session


@pytest_asyncio.fixture
async def test_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    get_db_session is overridden so every request uses the test database.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    from app.main import app

    app.dependency_overrides[get_db_session] = _override_session(session_factory)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def server_error_client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """
    Like test_client, but exceptions that reach the server error middleware
    are not re-raised into the test; the client sees the 500 response.
    """
    from app.main import app

    app.dependency_overrides[get_db_session] = _override_session(session_factory)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
