"""Fixtures communes / Shared fixtures."""

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import smartpass.models  # noqa: F401
from smartpass.database import Base
from smartpass.models.credential import Credential, PaymentStatus
from smartpass.models.route import Route


class FixedClock:
    """Horloge de test reglable / Settable test clock."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def __call__(self) -> datetime:
        return self.moment

    def set(self, hour: int, minute: int = 0, second: int = 0, day: int = 20) -> datetime:
        self.moment = datetime(2026, 10, day, hour, minute, second, tzinfo=ZoneInfo("UTC"))
        return self.moment


@pytest.fixture
def clock():
    c = FixedClock(datetime(2026, 10, 20, 8, 5, tzinfo=ZoneInfo("UTC")))
    return c


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'smartpass_test.db'}",
        connect_args={"timeout": 30},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def seeded(session_factory):
    """Lignes B101/B102/B103 et titres S001-S004 / Routes B101/B102/B103 and credentials S001-S004."""
    async with session_factory() as session:
        session.add_all([
            Route(id="B101", route_name="North Campus Loop", driver_name="Ramesh", capacity=40,
                  conductor_credential_hash="not-a-real-hash"),
            Route(id="B102", route_name="City Centre Express", driver_name="Suresh", capacity=52,
                  conductor_credential_hash="not-a-real-hash"),
            Route(id="B103", route_name="Depot Shuttle", driver_name="Kiran", capacity=20,
                  conductor_credential_hash="not-a-real-hash"),
            Credential(id="S001", name="Asha Verma", payment_status=PaymentStatus.PAID,
                       assigned_route_id="B101", stop="Main Gate"),
            Credential(id="S002", name="Rahul Nair", payment_status=PaymentStatus.UNPAID,
                       assigned_route_id="B101", stop="Library"),
            Credential(id="S003", name="Meera Iyer", payment_status=PaymentStatus.PAID,
                       assigned_route_id="B102", stop="Market Road"),
            Credential(id="S004", name="Karan Singh", payment_status=PaymentStatus.PAID,
                       assigned_route_id="B101", stop="Hostel"),
        ])
        await session.commit()
