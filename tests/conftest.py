"""
Shared test fixtures for FX Calc.

Provides test Settings, pre-wired FeeCalculator / RateRouter instances,
a call-recording FX provider, and an async test client whose settings
point the live providers at respx-mockable hosts.
"""

from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fxcalc.api.deps import get_settings
from fxcalc.config import Settings
from fxcalc.services.coin_service import CoinGeckoProvider, MockCoinProvider
from fxcalc.services.fee_service import FeeCalculator
from fxcalc.services.rate_service import ExchangeRateHostProvider, MockFxProvider, RateRouter

from tests.helpers import COIN_BASE, FX_BASE, RecordingFxProvider


# --- Settings ---


@pytest.fixture
def test_settings():
    """Settings with the default fee schedule and test upstream hosts."""
    return Settings(
        FX_API_BASE_URL=FX_BASE,
        COIN_API_BASE_URL=COIN_BASE,
        FX_SOURCE_LABEL="test-fx",
        UPSTREAM_TIMEOUT_SECONDS=2.0,
    )


@pytest.fixture
def fee_calculator(test_settings):
    return FeeCalculator(test_settings)


# --- Providers ---


@pytest.fixture
def recording_provider():
    return RecordingFxProvider({"SGD": Decimal("1.35"), "BTN": Decimal("83.20")})


@pytest.fixture
def recording_router(test_settings, recording_provider):
    return RateRouter(test_settings, recording_provider, MockCoinProvider())


@pytest.fixture
def mock_router(test_settings):
    """RateRouter over the deterministic mock providers."""
    return RateRouter(test_settings, MockFxProvider(), MockCoinProvider())


@pytest.fixture
def live_router(test_settings):
    """RateRouter over the HTTP providers; mock the hosts with respx."""
    return RateRouter(
        test_settings,
        ExchangeRateHostProvider(base_url=FX_BASE, timeout=2.0, source="test-fx"),
        CoinGeckoProvider(base_url=COIN_BASE, timeout=2.0),
    )


# --- HTTP client ---


@pytest_asyncio.fixture
async def client(test_settings):
    """
    Async HTTP test client with get_settings overridden so the live
    providers talk to FX_BASE / COIN_BASE.
    """
    from fxcalc.main import app

    app.dependency_overrides[get_settings] = lambda: test_settings

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
