"""
FX rate router — pair routing, upstream quote fetching, and coin prices.

Routes each currency pair through the pivot currency (USD by default):
identity pairs never touch the network, pivot pairs need one single-pair
quote, and cross pairs need one batched table. Uses exchangerate.host or
mock data for development/testing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal, Overflow
from typing import Protocol

from fxcalc.config import Settings
from fxcalc.core.errors import InvalidInputError, UnsupportedPairError, UpstreamError
from fxcalc.services.amounts import fits_json_number, to_positive_decimal
from fxcalc.services.coin_service import CoinPriceProvider, reshape_prices
from fxcalc.services.routing import (
    ONE,
    Cross,
    Identity,
    PivotDirect,
    QuoteConvention,
    classify_pair,
    cross_rate,
    normalize_code,
    pivot_direct_rate,
    rate_from_pivot_quotes,
    units_per_pivot,
)
from fxcalc.services.upstream import get_json, parse_price

logger = logging.getLogger(__name__)

SERVICE_NAME = "FX API"

# exchangerate.host answers /latest?base=USD&symbols=SGD with
# {"rates": {"SGD": 1.35}}: units of the quoted currency per 1 base.
EXCHANGERATE_HOST_CONVENTION = QuoteConvention.QUOTED_PER_PIVOT

# Mock rates (deterministic for testing), units per 1 USD
MOCK_UNITS_PER_USD: dict[str, Decimal] = {
    "USD": Decimal("1"),
    "SGD": Decimal("1.35"),
    "BTN": Decimal("83.20"),
}

INVALID_AMOUNT_MESSAGE = "Please enter a valid amount."
MISSING_CURRENCY_MESSAGE = "Both 'from' and 'to' currencies are required."


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FxTable:
    """Quotes for several currencies against one base, as the upstream sent them."""
    base: str
    rates: dict[str, Decimal]
    date: str | None = None


@dataclass(frozen=True)
class ConversionResult:
    from_currency: str
    to_currency: str
    input_amount: Decimal
    rate: Decimal           # units of to_currency per 1 from_currency
    output_amount: Decimal


@dataclass(frozen=True)
class FxSnapshot:
    base: str
    rates: dict[str, Decimal]
    source: str
    date: str | None = None


# ---------------------------------------------------------------------------
# Rate provider protocol
# ---------------------------------------------------------------------------


class FxQuoteProvider(Protocol):
    source: str
    convention: QuoteConvention

    async def fetch_quote(self, pivot: str, code: str) -> Decimal:
        """Fetch the raw quote for ``code`` against ``pivot``."""
        ...

    async def fetch_table(self, pivot: str, codes: list[str]) -> FxTable:
        """Fetch raw quotes for several codes against ``pivot`` in one call."""
        ...


class MockFxProvider:
    """Deterministic rates for dev/testing."""

    source = "mock"
    convention = QuoteConvention.QUOTED_PER_PIVOT

    async def fetch_quote(self, pivot: str, code: str) -> Decimal:
        table = await self.fetch_table(pivot, [code])
        return table.rates[code]

    async def fetch_table(self, pivot: str, codes: list[str]) -> FxTable:
        try:
            pivot_per_usd = MOCK_UNITS_PER_USD[pivot]
            rates = {c: MOCK_UNITS_PER_USD[c] / pivot_per_usd for c in codes}
        except KeyError as exc:
            raise UpstreamError(f"Mock FX provider has no rate for {exc.args[0]}") from exc
        return FxTable(base=pivot, rates=rates, date=None)


class ExchangeRateHostProvider:
    """Fetch live rates from ``{base_url}/latest?base=..&symbols=..``."""

    def __init__(
        self,
        base_url: str,
        timeout: float,
        source: str = "exchangerate.host",
        convention: QuoteConvention = EXCHANGERATE_HOST_CONVENTION,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self.source = source
        self.convention = convention

    async def fetch_quote(self, pivot: str, code: str) -> Decimal:
        table = await self.fetch_table(pivot, [code])
        return table.rates[code]

    async def fetch_table(self, pivot: str, codes: list[str]) -> FxTable:
        data = await get_json(
            f"{self._base_url}/latest",
            params={"base": pivot, "symbols": ",".join(codes)},
            timeout=self._timeout,
            service=SERVICE_NAME,
        )
        if not isinstance(data, dict):
            raise UpstreamError(f"{SERVICE_NAME} returned an unexpected payload")
        if data.get("success") is False:
            raise UpstreamError(f"{SERVICE_NAME} error: {data.get('error')}")

        raw_rates = data.get("rates")
        if not isinstance(raw_rates, dict):
            raise UpstreamError(f"{SERVICE_NAME} response is missing 'rates'")

        rates = {
            code: parse_price(raw_rates.get(code), f"rates.{code}", SERVICE_NAME)
            for code in codes
        }
        return FxTable(base=pivot, rates=rates, date=data.get("date"))


def make_fx_provider(settings: Settings) -> FxQuoteProvider:
    """Return the configured FX quote provider."""
    if settings.FX_RATE_MOCK:
        logger.debug("Using MockFxProvider for FX quotes")
        return MockFxProvider()
    logger.debug("Using ExchangeRateHostProvider (live API)")
    return ExchangeRateHostProvider(
        base_url=settings.FX_API_BASE_URL,
        timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        source=settings.FX_SOURCE_LABEL,
        convention=QuoteConvention(settings.FX_QUOTE_CONVENTION),
    )


def _checked_rate(rate: Decimal) -> Decimal:
    """A derived rate must still be a finite, non-zero JSON number."""
    if not fits_json_number(rate):
        raise UpstreamError(f"{SERVICE_NAME} quotes give an out-of-range rate: {rate}")
    return rate


# ---------------------------------------------------------------------------
# RateRouter
# ---------------------------------------------------------------------------


class RateRouter:
    """Stateless router: one upstream call per request, no caching, no retries."""

    def __init__(
        self,
        settings: Settings,
        fx_provider: FxQuoteProvider,
        coin_provider: CoinPriceProvider,
    ):
        self._supported = settings.supported_currencies
        self._pivot = settings.pivot_currency
        self._snapshot_base = settings.FX_SNAPSHOT_BASE.upper()
        self._coin_ids = dict(settings.COIN_IDS)
        self._coin_quotes = list(settings.COIN_QUOTE_CURRENCIES)
        self._fx = fx_provider
        self._coins = coin_provider

    # --- Rates ---

    async def get_rate(self, from_currency: str, to_currency: str) -> Decimal:
        """Units of ``to_currency`` per 1 ``from_currency``."""
        route = classify_pair(from_currency, to_currency, self._supported, self._pivot)

        if isinstance(route, Identity):
            return ONE
        if isinstance(route, PivotDirect):
            quote = await self._fx.fetch_quote(route.pivot, route.other)
            return _checked_rate(pivot_direct_rate(route, quote, self._fx.convention))
        if isinstance(route, Cross):
            table = await self._fx.fetch_table(route.pivot, [route.source, route.target])
            return _checked_rate(cross_rate(route, table.rates, self._fx.convention))
        raise TypeError(f"Unknown pair route: {route!r}")

    async def convert(self, from_currency: str, to_currency: str, amount) -> ConversionResult:
        """
        Convert ``amount`` of ``from_currency``.

        Amount and currency presence are checked before any upstream call.
        """
        amt = to_positive_decimal(amount, INVALID_AMOUNT_MESSAGE)
        src = normalize_code(from_currency)
        tgt = normalize_code(to_currency)
        if not src or not tgt:
            raise InvalidInputError(MISSING_CURRENCY_MESSAGE)

        rate = await self.get_rate(src, tgt)
        try:
            output = amt * rate
        except Overflow:
            raise InvalidInputError(INVALID_AMOUNT_MESSAGE) from None
        if not fits_json_number(output):
            raise InvalidInputError(INVALID_AMOUNT_MESSAGE)

        return ConversionResult(
            from_currency=src,
            to_currency=tgt,
            input_amount=amt,
            rate=rate,
            output_amount=output,
        )

    async def snapshot(self) -> FxSnapshot:
        """Rates from the UI base currency to every other supported currency."""
        base = self._snapshot_base
        targets = [c for c in self._supported if c != base]
        non_pivot = [c for c in self._supported if c != self._pivot]

        per_pivot = {self._pivot: ONE}
        date = None
        if non_pivot:
            table = await self._fx.fetch_table(self._pivot, non_pivot)
            date = table.date
            for code, quote in table.rates.items():
                per_pivot[code] = units_per_pivot(quote, self._fx.convention)

        rates = {
            code: _checked_rate(rate_from_pivot_quotes(per_pivot[base], per_pivot[code]))
            for code in targets
        }
        return FxSnapshot(base=base, rates=rates, source=self._fx.source, date=date)

    # --- Coins ---

    async def coin_prices(
        self, symbols: list[str] | None = None
    ) -> dict[str, dict[str, Decimal]]:
        """
        Latest prices for known coins, keyed by friendly symbol.

        ``symbols`` narrows the request; unknown symbols are rejected before
        the upstream call. Coins the upstream did not return are omitted.
        """
        wanted = [s.strip().lower() for s in symbols or [] if s.strip()]
        if wanted:
            unknown = [s for s in wanted if s not in self._coin_ids]
            if unknown:
                raise UnsupportedPairError(
                    f"Unsupported coin: {', '.join(unknown)}. "
                    f"Supported coins: {', '.join(self._coin_ids)}.",
                )
            coin_ids = {s: self._coin_ids[s] for s in wanted}
        else:
            coin_ids = self._coin_ids

        raw = await self._coins.fetch_prices(list(coin_ids.values()), self._coin_quotes)
        return reshape_prices(coin_ids, raw, self._coin_quotes)
