"""Pydantic request/response schemas for the FX Calc API."""

from fxcalc.schemas.calc import CalcRequest, FeeQuoteData, FeeScheduleData
from fxcalc.schemas.common import Envelope, ErrorResponse
from fxcalc.schemas.rate import (
    CoinPriceSnapshot,
    ConversionData,
    ConvertRequest,
    FxSnapshotData,
)

__all__ = [
    "CalcRequest", "FeeQuoteData", "FeeScheduleData",
    "Envelope", "ErrorResponse",
    "CoinPriceSnapshot", "ConversionData", "ConvertRequest", "FxSnapshotData",
]
