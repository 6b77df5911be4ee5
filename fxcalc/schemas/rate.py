"""
Pydantic schemas for currency conversion, FX snapshots and coin prices.
"""

from pydantic import Field

from fxcalc.schemas.calc import NumericInput
from fxcalc.schemas.common import CamelModel, JsonDecimal


class ConvertRequest(CamelModel):
    from_currency: str | None = Field(default=None, alias="from")
    to_currency: str | None = Field(default=None, alias="to")
    amount: NumericInput = None


class ConversionData(CamelModel):
    """Conversion result; ``rate`` is units of ``to`` per 1 ``from``."""
    from_currency: str = Field(alias="from")
    to_currency: str = Field(alias="to")
    input_amount: JsonDecimal
    rate: JsonDecimal
    output_amount: JsonDecimal


class FxSnapshotData(CamelModel):
    base: str
    rates: dict[str, JsonDecimal]
    source: str
    date: str | None = None


# Symbol -> {quote currency -> price}
CoinPriceSnapshot = dict[str, dict[str, JsonDecimal]]
