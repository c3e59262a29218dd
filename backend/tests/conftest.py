"""Pytest configuration and fixtures for disbursement tests"""
import pytest
import pytest_asyncio
from typing import AsyncGenerator
from httpx import AsyncClient, ASGITransport
from dotenv import load_dotenv

from disbursement.main import app
from disbursement.models.ledger import InMemoryTokenLedger
from disbursement.services.clock import ManualClock
from disbursement.services.registry import ScheduleRegistry, get_registry

# Load environment variables
load_dotenv()

from tests.constants import (
    CONTROLLER,
    FOUR_YEARS,
    ONE_YEAR,
    PREASSIGNED_TOKENS,
    RECEIVER,
    START_DATE,
)


@pytest.fixture
def clock() -> ManualClock:
    """Manual clock parked at the schedule start date"""
    return ManualClock(start=START_DATE)


@pytest.fixture
def ledger() -> InMemoryTokenLedger:
    return InMemoryTokenLedger(name="New Order", symbol="NEWO", decimals=18)


@pytest.fixture
def registry(ledger: InMemoryTokenLedger, clock: ManualClock) -> ScheduleRegistry:
    return ScheduleRegistry(ledger=ledger, clock=clock)


@pytest.fixture
def schedule(registry: ScheduleRegistry):
    """Unfunded four-year schedule with a one-year cliff"""
    return registry.create_schedule(
        receiver=RECEIVER,
        controller=CONTROLLER,
        disbursement_period=FOUR_YEARS,
        start_date=START_DATE,
        cliff_date=START_DATE + ONE_YEAR,
    )


@pytest.fixture
def funded_schedule(schedule, ledger: InMemoryTokenLedger):
    """The same schedule holding 10M tokens"""
    ledger.mint(schedule.address, PREASSIGNED_TOKENS)
    return schedule


@pytest_asyncio.fixture(scope="function")
async def client(registry: ScheduleRegistry) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client backed by the fixture registry"""

    def override_get_registry():
        return registry

    app.dependency_overrides[get_registry] = override_get_registry

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def mock_schedule_request():
    """Schedule creation payload for API tests"""
    return {
        "receiver": RECEIVER,
        "controller": CONTROLLER,
        "disbursement_period": FOUR_YEARS,
        "start_date": START_DATE,
        "cliff_date": START_DATE + ONE_YEAR,
    }
