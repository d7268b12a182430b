"""Shared fixtures for unit tests.

Every test gets its own in-memory SQLite database, a session bound to it and
a repository bundle with a private realtime manager.
"""

from __future__ import annotations

from datetime import date
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel.pool import StaticPool

from fleetdesk.core.database import create_all, create_sessionmaker
from fleetdesk.core.database.entities import Client, Driver, Vehicle, VehicleType
from fleetdesk.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session
from fleetdesk.realtime import RealtimeManager

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create an isolated in-memory database with every table."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(name="session")
async def session_fixture(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a new session for each test."""
    async with create_sessionmaker(test_engine)() as session:
        yield session


@pytest.fixture
def realtime() -> RealtimeManager:
    return RealtimeManager(queue_size=10)


@pytest.fixture
def repos(session: AsyncSession, realtime: RealtimeManager) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=session, realtime=realtime)


@pytest_asyncio.fixture
async def vehicle(repos: SqlRepoBundle) -> Vehicle:
    return await repos.vehicles.create(
        Vehicle(make="Toyota", model="Land Cruiser", registration="SO-1234", type=VehicleType.ARMOURED)
    )


@pytest_asyncio.fixture
async def driver(repos: SqlRepoBundle) -> Driver:
    return await repos.drivers.create(Driver(name="Abdi Hassan", license_number="LIC-77", phone="+252611111111"))


@pytest_asyncio.fixture
async def client_record(repos: SqlRepoBundle) -> Client:
    return await repos.clients.create(
        Client(name="Acme Logistics", email="billing@acme.example", address="Airport Road", phone="+25261000000")
    )


@pytest.fixture
def today() -> date:
    return date(2025, 3, 15)
