"""
Fee calculator endpoints.

Synchronous and local: no upstream calls. Validation failures
(invalid numbers, below minimum, fees exceeding principal) are rendered
as ``400 {ok: false, message}`` by the FxCalcError handler.
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from fxcalc.api.deps import get_fee_calculator
from fxcalc.schemas import CalcRequest, Envelope, ErrorResponse, FeeQuoteData, FeeScheduleData
from fxcalc.services.fee_service import FeeCalculator

router = APIRouter()


@router.post(
    "/calc",
    response_model=Envelope[FeeQuoteData],
    responses={400: {"model": ErrorResponse}},
)
async def calculate(
    payload: CalcRequest,
    calculator: FeeCalculator = Depends(get_fee_calculator),
):
    """
    Compute how many coins a principal buys at the given market value.

    Commission is charged on top of the principal; the platform fee and
    its GST come out of the principal.
    """
    quote = calculator.compute_fee(payload.principal, payload.market_value)
    return Envelope(data=FeeQuoteData(**asdict(quote)))


@router.get("/calc/schedule", response_model=Envelope[FeeScheduleData])
async def fee_schedule(calculator: FeeCalculator = Depends(get_fee_calculator)):
    """Current fee schedule, for rendering the fee table."""
    return Envelope(data=FeeScheduleData(**asdict(calculator.schedule())))
