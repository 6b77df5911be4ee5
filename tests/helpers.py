"""Test doubles and constants shared across test modules."""

from decimal import Decimal

from fxcalc.services.rate_service import FxTable
from fxcalc.services.routing import QuoteConvention

FX_BASE = "http://fx.test"
COIN_BASE = "http://coins.test"


class RecordingFxProvider:
    """Fixed quotes that records every upstream call it would have made."""

    source = "recording"

    def __init__(self, quotes: dict[str, Decimal], convention=QuoteConvention.QUOTED_PER_PIVOT):
        self.quotes = quotes
        self.convention = convention
        self.calls: list[tuple] = []

    async def fetch_quote(self, pivot: str, code: str) -> Decimal:
        self.calls.append(("quote", pivot, code))
        return self.quotes[code]

    async def fetch_table(self, pivot: str, codes: list[str]) -> FxTable:
        self.calls.append(("table", pivot, tuple(codes)))
        return FxTable(base=pivot, rates={c: self.quotes[c] for c in codes}, date="2025-01-01")
