"""Tests for coin prices — reshaping, CoinGecko provider, endpoint."""

from decimal import Decimal

import httpx
import pytest
import respx
from httpx import Response

from fxcalc.core.errors import UnsupportedPairError, UpstreamError
from fxcalc.services.coin_service import (
    MOCK_COIN_PRICES,
    CoinGeckoProvider,
    MockCoinProvider,
    make_coin_provider,
    reshape_prices,
)

from tests.helpers import COIN_BASE

COIN_IDS = {"usdt": "tether", "eth": "ethereum", "usdc": "usd-coin", "sol": "solana"}
QUOTES = ["usd", "sgd"]
PRICE_URL = f"{COIN_BASE}/simple/price"


# ---------------------------------------------------------------------------
# reshape_prices
# ---------------------------------------------------------------------------


class TestReshapePrices:

    def test_rekeys_by_symbol(self):
        """Id-keyed payload comes back keyed by friendly symbol."""
        raw = {
            "ethereum": {"usd": 3000.5, "sgd": 4050},
            "solana": {"usd": 150, "sgd": 202.5},
            "tether": {"usd": 1, "sgd": 1.35},
            "usd-coin": {"usd": 0.9999, "sgd": 1.3499},
        }
        out = reshape_prices(COIN_IDS, raw, QUOTES)
        assert set(out) == {"usdt", "eth", "usdc", "sol"}
        assert out["eth"] == {"usd": Decimal("3000.5"), "sgd": Decimal("4050")}

    def test_absent_coin_omitted(self):
        """A coin missing from the payload is omitted, not null-filled."""
        raw = {"ethereum": {"usd": 3000, "sgd": 4050}}
        out = reshape_prices(COIN_IDS, raw, QUOTES)
        assert out == {"eth": {"usd": Decimal("3000"), "sgd": Decimal("4050")}}
        assert "sol" not in out

    def test_empty_payload(self):
        assert reshape_prices(COIN_IDS, {}, QUOTES) == {}

    @pytest.mark.parametrize(
        "entry",
        [{"usd": 3000}, {"usd": 3000, "sgd": None}, {"usd": "3000", "sgd": 1}, 42],
    )
    def test_malformed_entry(self, entry):
        """A returned coin without a numeric price per quote currency fails."""
        with pytest.raises(UpstreamError):
            reshape_prices(COIN_IDS, {"ethereum": entry}, QUOTES)


# ---------------------------------------------------------------------------
# Providers
# ---------------------------------------------------------------------------


class TestMockCoinProvider:

    @pytest.mark.asyncio
    async def test_returns_fixed_prices(self):
        provider = MockCoinProvider()
        raw = await provider.fetch_prices(["ethereum", "dogecoin"], ["usd"])
        assert raw == {"ethereum": {"usd": MOCK_COIN_PRICES["ethereum"]["usd"]}}


class TestCoinGeckoProvider:

    @pytest.mark.asyncio
    @respx.mock
    async def test_batched_request(self):
        """One request carries every id and quote currency."""
        route = respx.get(PRICE_URL).mock(
            return_value=Response(200, json={"tether": {"usd": 1, "sgd": 1.35}})
        )
        provider = CoinGeckoProvider(base_url=COIN_BASE, timeout=2.0)
        raw = await provider.fetch_prices(["tether", "ethereum"], QUOTES)

        assert raw == {"tether": {"usd": 1, "sgd": 1.35}}
        assert route.call_count == 1
        params = route.calls.last.request.url.params
        assert params["ids"] == "tether,ethereum"
        assert params["vs_currencies"] == "usd,sgd"

    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error(self):
        respx.get(PRICE_URL).mock(return_value=Response(429))
        provider = CoinGeckoProvider(base_url=COIN_BASE, timeout=2.0)
        with pytest.raises(UpstreamError, match="HTTP 429"):
            await provider.fetch_prices(["tether"], QUOTES)

    @pytest.mark.asyncio
    @respx.mock
    async def test_timeout(self):
        respx.get(PRICE_URL).mock(side_effect=httpx.ConnectTimeout("slow"))
        provider = CoinGeckoProvider(base_url=COIN_BASE, timeout=2.0)
        with pytest.raises(UpstreamError, match="timed out"):
            await provider.fetch_prices(["tether"], QUOTES)

    @pytest.mark.asyncio
    @respx.mock
    async def test_non_object_payload(self):
        respx.get(PRICE_URL).mock(return_value=Response(200, json=["tether"]))
        provider = CoinGeckoProvider(base_url=COIN_BASE, timeout=2.0)
        with pytest.raises(UpstreamError, match="unexpected payload"):
            await provider.fetch_prices(["tether"], QUOTES)


class TestCoinProviderFactory:

    def test_mock_selected(self, test_settings):
        settings = test_settings.model_copy(update={"COIN_PRICE_MOCK": True})
        assert isinstance(make_coin_provider(settings), MockCoinProvider)

    def test_live_selected(self, test_settings):
        assert isinstance(make_coin_provider(test_settings), CoinGeckoProvider)


# ---------------------------------------------------------------------------
# RateRouter.coin_prices
# ---------------------------------------------------------------------------


class TestCoinPrices:

    @pytest.mark.asyncio
    async def test_all_coins(self, mock_router):
        prices = await mock_router.coin_prices()
        assert set(prices) == {"usdt", "eth", "usdc", "sol"}
        assert prices["sol"]["sgd"] == Decimal("202.5")

    @pytest.mark.asyncio
    async def test_subset(self, mock_router):
        """A symbol subset narrows the result, case-insensitively."""
        prices = await mock_router.coin_prices(["ETH", " sol "])
        assert set(prices) == {"eth", "sol"}

    @pytest.mark.asyncio
    async def test_blank_subset_means_all(self, mock_router):
        prices = await mock_router.coin_prices([" ", ""])
        assert len(prices) == 4

    @pytest.mark.asyncio
    async def test_unknown_symbol(self, mock_router):
        """Unknown symbol is rejected with the supported list."""
        with pytest.raises(UnsupportedPairError) as exc_info:
            await mock_router.coin_prices(["doge"])
        assert "usdt, eth, usdc, sol" in exc_info.value.message


# ---------------------------------------------------------------------------
# Endpoint tests: GET /api/coins/latest
# ---------------------------------------------------------------------------


class TestCoinsEndpoint:

    @pytest.mark.asyncio
    @respx.mock
    async def test_returns_200_and_drops_missing(self, client):
        """Coins absent upstream are not in data; present ones are numbers."""
        respx.get(PRICE_URL).mock(
            return_value=Response(200, json={
                "tether": {"usd": 1.0, "sgd": 1.35},
                "ethereum": {"usd": 3200, "sgd": 4320},
            })
        )
        response = await client.get("/api/coins/latest")
        assert response.status_code == 200
        body = response.json()
        assert body["ok"] is True
        assert body["data"] == {
            "usdt": {"usd": 1.0, "sgd": 1.35},
            "eth": {"usd": 3200.0, "sgd": 4320.0},
        }

    @pytest.mark.asyncio
    @respx.mock
    async def test_symbols_query(self, client):
        """?symbols= narrows the upstream ids."""
        route = respx.get(PRICE_URL).mock(
            return_value=Response(200, json={"solana": {"usd": 150, "sgd": 202.5}})
        )
        response = await client.get("/api/coins/latest", params={"symbols": "sol"})
        assert response.status_code == 200
        assert route.calls.last.request.url.params["ids"] == "solana"
        assert response.json()["data"] == {"sol": {"usd": 150.0, "sgd": 202.5}}

    @pytest.mark.asyncio
    async def test_unknown_symbol_400(self, client):
        response = await client.get("/api/coins/latest", params={"symbols": "doge"})
        assert response.status_code == 400
        assert response.json()["ok"] is False

    @pytest.mark.asyncio
    @respx.mock
    async def test_upstream_500(self, client):
        """Upstream HTTP 500 is an overall 500, never a partial 200."""
        respx.get(PRICE_URL).mock(return_value=Response(500))
        response = await client.get("/api/coins/latest")
        assert response.status_code == 500
        body = response.json()
        assert body["ok"] is False
        assert body["message"] == "Failed to load live coin prices."
        assert "data" not in body
