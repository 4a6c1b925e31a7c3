"""
Pytest fixtures for test database, client, and authentication.

Each test gets a fresh database: a SQLite file under tmp_path by default,
or TEST_DATABASE_URL (e.g. a Postgres test database) when set. Tables are
created before and dropped after every test.
"""

import os
from datetime import date
from decimal import Decimal
from typing import AsyncGenerator

# Settings are read at import time; keep the app off Redis and Postgres
os.environ.setdefault("REDIS_ENABLED", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./boothbook_app.db")

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker

from boothbook.main import app
from boothbook.db.base import Base
from boothbook.db.session import get_db
from boothbook.core.security import create_access_token
from boothbook.domain.date_range import DateRange
from boothbook.domain.statuses import AvailabilityStatus, BoothApprovalStatus
from boothbook.models import Booth, Event
from boothbook.services.reservation_store import SqlAlchemyReservationStore

RENTER_ID = 1
OWNER_ID = 2
OTHER_RENTER_ID = 3

EVENT_RANGE = DateRange(date(2025, 10, 1), date(2025, 10, 5))


@pytest_asyncio.fixture(scope="function")
async def db_session(tmp_path) -> AsyncGenerator[AsyncSession, None]:
    """Create tables, yield session, then drop tables for isolation."""
    url = os.environ.get("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    engine = create_async_engine(url, echo=False)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as session:
        yield session

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client that overrides the DB dependency with the test session."""

    async def override_get_db():
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def store(db_session: AsyncSession) -> SqlAlchemyReservationStore:
    return SqlAlchemyReservationStore(db_session)


def headers_for(user_id: int) -> dict:
    token = create_access_token(data={"sub": str(user_id)})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers() -> dict:
    """Authorization headers for the renter."""
    return headers_for(RENTER_ID)


@pytest.fixture
def owner_headers() -> dict:
    """Authorization headers for the booth owner / organizer."""
    return headers_for(OWNER_ID)


@pytest_asyncio.fixture
async def test_event(db_session: AsyncSession) -> Event:
    """A five-day event: 2025-10-01..2025-10-05."""
    event = Event(
        title="Autumn Makers Fair",
        description="A test event",
        location="Hall A",
        start_date=EVENT_RANGE.start,
        end_date=EVENT_RANGE.end,
        created_by=OWNER_ID,
    )
    db_session.add(event)
    await db_session.commit()
    await db_session.refresh(event)
    return event


@pytest_asyncio.fixture
async def test_booth(db_session: AsyncSession, test_event: Event) -> Booth:
    """An approved, fully available booth on the test event."""
    booth = Booth(
        event_id=test_event.id,
        owner_id=OWNER_ID,
        name="Booth A1",
        size="3x3m",
        price=Decimal("100.00"),
        location="Hall A - Booth 1",
        status=BoothApprovalStatus.APPROVED,
        availability_status=AvailabilityStatus.AVAILABLE,
        version=1,
    )
    db_session.add(booth)
    await db_session.commit()
    await db_session.refresh(booth)
    return booth


def reference_availability(event_range: DateRange, reservations) -> AvailabilityStatus:
    """Day-set rendition of the availability rules, used as an independent oracle."""
    event_days = set(event_range.days())
    reserved_days = set()
    for reservation in reservations:
        if reservation.is_active:
            reserved_days.update(reservation.date_range.days())

    if not reserved_days:
        return AvailabilityStatus.AVAILABLE
    if reserved_days >= event_days:
        return AvailabilityStatus.UNAVAILABLE
    return AvailabilityStatus.RESERVED


@pytest.fixture
def assert_booth_consistent(store: SqlAlchemyReservationStore):
    """Check the no-overlap, in-bounds and availability invariants from stored state."""

    async def check(booth_id: int) -> AvailabilityStatus:
        booth = await store.get_booth(booth_id)
        event = await store.get_event(booth.event_id)
        reservations = await store.list_reservations_for_booth(booth_id)
        active = [r for r in reservations if r.is_active]

        for i, first in enumerate(active):
            assert first.date_range.is_subrange_of(event.date_range)
            for second in active[i + 1:]:
                assert not first.date_range.overlaps(second.date_range), (first, second)

        expected = reference_availability(event.date_range, reservations)
        assert AvailabilityStatus(booth.availability_status) == expected
        return expected

    return check
