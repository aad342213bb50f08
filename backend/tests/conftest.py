"""Shared test configuration and fixtures.

Each test gets a fresh in-memory SQLite database (aiosqlite) with the full
schema, so tests are isolated without relying on a running PostgreSQL.
Pure engine tests use ``FakeStore``, an in-memory double of ``BookingStore``.
"""

import uuid
from collections.abc import AsyncGenerator
from datetime import date, timedelta
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

import lakehouse.models  # noqa: F401
from lakehouse.booking.errors import StoreUnavailableError
from lakehouse.database import Base, build_engine, build_session_factory, get_db
from lakehouse.main import app
from lakehouse.models.addon import Addon
from lakehouse.models.property_settings import PropertySettings
from lakehouse.models.seasonal_rate import SeasonalRate
from lakehouse.store import BookingStore, pick_seasonal_rate

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def future_dates(offset_start: int = 30, nights: int = 3) -> tuple[date, date]:
    """Return a (check_in, check_out) pair safely in the future."""
    check_in = date.today() + timedelta(days=offset_start)
    return check_in, check_in + timedelta(days=nights)


def make_settings(**overrides) -> PropertySettings:
    """Build a transient PropertySettings row with sensible defaults."""
    values = {
        "property_name": "Serenity Lake House",
        "sleeps": 8,
        "bedrooms": 3,
        "bathrooms": Decimal("2.5"),
        "pets_allowed": True,
        "base_nightly_rate": Decimal("200.00"),
        "cleaning_fee": Decimal("150.00"),
        "tax_rate": Decimal("0.0600"),
        "min_nights": 1,
        "damage_deposit": Decimal("500.00"),
        "check_in_time": "4:00 PM",
        "check_out_time": "10:00 AM",
    }
    values.update(overrides)
    return PropertySettings(**values)


def make_season(name: str, start: date, end: date, rate: str, active: bool = True, **extra) -> SeasonalRate:
    return SeasonalRate(
        name=name,
        start_date=start,
        end_date=end,
        nightly_rate=Decimal(rate),
        active=active,
        **extra,
    )


class FakeStore:
    """In-memory stand-in for ``BookingStore`` covering the read operations."""

    def __init__(self, settings=None, seasons=(), blocked=(), addons=()):
        self.settings = settings
        self.seasons = list(seasons)
        self.blocked = set(blocked)
        self.addons = list(addons)
        self.fail_reads = False
        self.rate_lookups: list[date] = []

    async def get_property_settings(self):
        self._maybe_fail("fetch property settings")
        return self.settings

    async def get_blocked_dates(self, start: date, end: date) -> list[date]:
        self._maybe_fail("fetch blocked dates")
        return sorted(d for d in self.blocked if start <= d <= end)

    async def get_active_seasonal_rate(self, night: date):
        self._maybe_fail("fetch seasonal rate")
        self.rate_lookups.append(night)
        return pick_seasonal_rate([s for s in self.seasons if s.active and s.covers(night)])

    async def list_active_addons(self):
        self._maybe_fail("fetch add-ons")
        return [a for a in self.addons if a.active]

    def _maybe_fail(self, operation: str) -> None:
        if self.fail_reads:
            raise StoreUnavailableError(f"Unable to {operation}")


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore(settings=make_settings())


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with every table created."""
    engine = build_engine("sqlite+aiosqlite://")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    session_factory = build_session_factory(test_engine)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def store(db_session: AsyncSession) -> BookingStore:
    return BookingStore(db_session, timeout=5, read_retries=0)


@pytest_asyncio.fixture
async def client(test_engine: AsyncEngine) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient whose requests use the test database."""
    session_factory = build_session_factory(test_engine)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Seeded data
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def property_settings(db_session: AsyncSession) -> PropertySettings:
    """Persist the property settings row: $200/night, $150 cleaning, 6% tax."""
    settings = make_settings()
    db_session.add(settings)
    await db_session.commit()
    return settings


@pytest_asyncio.fixture
async def addons(db_session: AsyncSession) -> dict[str, Addon]:
    """Persist a small add-on catalog, including one per-night and one retired item."""
    catalog = {
        "early_check_in": Addon(name="Early Check-in", price=Decimal("75.00"), per_night=False, sort_order=1),
        "pet_fee": Addon(name="Pet Fee", price=Decimal("25.00"), per_night=True, sort_order=2),
        "retired": Addon(name="Boat Rental", price=Decimal("300.00"), per_night=False, active=False, sort_order=3),
    }
    db_session.add_all(catalog.values())
    await db_session.commit()
    return catalog


@pytest.fixture
def guest_payload() -> dict:
    unique = uuid.uuid4().hex[:8]
    return {
        "guest_name": "Jamie Rivera",
        "guest_email": f"jamie-{unique}@example.com",
        "guest_phone": "+1 555 010 2030",
        "num_guests": 4,
        "special_requests": "Arriving late, around 9pm",
        "agreement_accepted": True,
    }
