"""
Coin-price providers — batched spot prices keyed by upstream coin id.

Architecture:
  - CoinPriceProvider (protocol) defines the interface
  - MockCoinProvider returns fixed prices for development
  - CoinGeckoProvider calls the /simple/price endpoint
  - COIN_PRICE_MOCK=true selects the mock provider

reshape_prices() maps the id-keyed payload back to friendly symbols.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Protocol

from fxcalc.config import Settings
from fxcalc.core.errors import UpstreamError
from fxcalc.services.upstream import get_json, parse_price

logger = logging.getLogger(__name__)

SERVICE_NAME = "Coin price API"


# ---------------------------------------------------------------------------
# Provider protocol
# ---------------------------------------------------------------------------


class CoinPriceProvider(Protocol):
    async def fetch_prices(
        self, ids: list[str], quote_currencies: list[str]
    ) -> dict: ...


# ---------------------------------------------------------------------------
# Mock provider (development / testing)
# ---------------------------------------------------------------------------

MOCK_COIN_PRICES: dict[str, dict[str, float]] = {
    "tether": {"usd": 1.0, "sgd": 1.35},
    "ethereum": {"usd": 3200.0, "sgd": 4320.0},
    "usd-coin": {"usd": 1.0, "sgd": 1.35},
    "solana": {"usd": 150.0, "sgd": 202.5},
}


class MockCoinProvider:
    """Deterministic prices. Ids not in the table are left out, like the live API."""

    async def fetch_prices(
        self, ids: list[str], quote_currencies: list[str]
    ) -> dict:
        out: dict[str, dict[str, float]] = {}
        for coin_id in ids:
            prices = MOCK_COIN_PRICES.get(coin_id)
            if prices is None:
                continue
            out[coin_id] = {q: prices[q] for q in quote_currencies if q in prices}
        return out


# ---------------------------------------------------------------------------
# CoinGecko provider
# ---------------------------------------------------------------------------


class CoinGeckoProvider:
    """Calls ``{base_url}/simple/price?ids=..&vs_currencies=..``."""

    def __init__(self, base_url: str, timeout: float):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def fetch_prices(
        self, ids: list[str], quote_currencies: list[str]
    ) -> dict:
        data = await get_json(
            f"{self._base_url}/simple/price",
            params={
                "ids": ",".join(ids),
                "vs_currencies": ",".join(quote_currencies),
            },
            timeout=self._timeout,
            service=SERVICE_NAME,
        )
        if not isinstance(data, dict):
            raise UpstreamError(f"{SERVICE_NAME} returned an unexpected payload")
        return data


# ---------------------------------------------------------------------------
# Reshaping
# ---------------------------------------------------------------------------


def reshape_prices(
    coin_ids: dict[str, str], raw: dict, quote_currencies: list[str]
) -> dict[str, dict[str, Decimal]]:
    """
    Re-key an id-keyed price payload by friendly symbol.

    Coins missing from ``raw`` are omitted. A coin that is present but lacks
    a valid price for one of ``quote_currencies`` raises UpstreamError.
    """
    out: dict[str, dict[str, Decimal]] = {}
    for symbol, coin_id in coin_ids.items():
        entry = raw.get(coin_id)
        if entry is None:
            logger.info("No price returned for %s (%s)", symbol, coin_id)
            continue
        if not isinstance(entry, dict):
            raise UpstreamError(f"{SERVICE_NAME} returned a malformed entry for '{coin_id}'")
        out[symbol] = {
            q: parse_price(entry.get(q), f"{coin_id}.{q}", SERVICE_NAME)
            for q in quote_currencies
        }
    return out


def make_coin_provider(settings: Settings) -> CoinPriceProvider:
    """Return the configured coin-price provider."""
    if settings.COIN_PRICE_MOCK:
        logger.debug("Using MockCoinProvider for coin prices")
        return MockCoinProvider()
    logger.debug("Using CoinGeckoProvider (live API)")
    return CoinGeckoProvider(
        base_url=settings.COIN_API_BASE_URL,
        timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
    )
