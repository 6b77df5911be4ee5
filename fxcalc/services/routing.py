"""
Currency-pair routing — decides which upstream quote(s) a pair needs.

Every pair falls into exactly one route:
  - Identity:    from == to, rate is 1, no upstream call
  - PivotDirect: one side is the pivot, one single-pair quote
  - Cross:       neither side is the pivot, one batched table lookup

Quotes are normalized to "units of X per 1 pivot" before any arithmetic,
so the rate for from -> to is always per_pivot(to) / per_pivot(from).
"""

import enum
from dataclasses import dataclass
from decimal import Decimal
from typing import Union

from fxcalc.core.errors import UnsupportedPairError

ONE = Decimal("1")


class QuoteConvention(str, enum.Enum):
    """Which side of an upstream quote is "per 1 unit of"."""

    QUOTED_PER_PIVOT = "quoted_per_pivot"   # quote[X] = X per 1 pivot
    PIVOT_PER_QUOTED = "pivot_per_quoted"   # quote[X] = pivot per 1 X


@dataclass(frozen=True)
class Identity:
    code: str


@dataclass(frozen=True)
class PivotDirect:
    pivot: str
    other: str
    from_pivot: bool  # True for pivot -> other


@dataclass(frozen=True)
class Cross:
    pivot: str
    source: str
    target: str


PairRoute = Union[Identity, PivotDirect, Cross]


def normalize_code(code: str | None) -> str:
    return (code or "").strip().upper()


def classify_pair(
    source: str, target: str, supported: tuple[str, ...], pivot: str
) -> PairRoute:
    """Classify a pair, raising UnsupportedPairError for unknown codes."""
    src = normalize_code(source)
    tgt = normalize_code(target)
    pivot = normalize_code(pivot)

    unknown = [c for c in (src, tgt) if c not in supported]
    if unknown:
        raise UnsupportedPairError(
            f"Unsupported currency: {', '.join(unknown)}. "
            f"Supported currencies: {', '.join(supported)}.",
        )

    if src == tgt:
        return Identity(code=src)
    if src == pivot:
        return PivotDirect(pivot=pivot, other=tgt, from_pivot=True)
    if tgt == pivot:
        return PivotDirect(pivot=pivot, other=src, from_pivot=False)
    return Cross(pivot=pivot, source=src, target=tgt)


def units_per_pivot(quote: Decimal, convention: QuoteConvention) -> Decimal:
    """Normalize a raw upstream quote to units of the quoted currency per 1 pivot."""
    if convention is QuoteConvention.QUOTED_PER_PIVOT:
        return quote
    return ONE / quote


def rate_from_pivot_quotes(
    source_per_pivot: Decimal, target_per_pivot: Decimal
) -> Decimal:
    """Units of target per 1 unit of source, given both sides per 1 pivot."""
    return target_per_pivot / source_per_pivot


def pivot_direct_rate(
    route: PivotDirect, quote: Decimal, convention: QuoteConvention
) -> Decimal:
    other = units_per_pivot(quote, convention)
    if route.from_pivot:
        return rate_from_pivot_quotes(ONE, other)
    return rate_from_pivot_quotes(other, ONE)


def cross_rate(
    route: Cross, table: dict[str, Decimal], convention: QuoteConvention
) -> Decimal:
    return rate_from_pivot_quotes(
        units_per_pivot(table[route.source], convention),
        units_per_pivot(table[route.target], convention),
    )
