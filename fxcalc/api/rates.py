"""
FX conversion and snapshot endpoints.

Rates come from the upstream FX provider on every request. Upstream
failures return ``500 {ok: false, message, error}``; they are never
replaced by a fallback rate.
"""

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, status

from fxcalc.api.deps import get_rate_router
from fxcalc.core.errors import UpstreamError, error_response
from fxcalc.schemas import ConversionData, ConvertRequest, Envelope, ErrorResponse, FxSnapshotData
from fxcalc.services.rate_service import RateRouter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/convert",
    response_model=Envelope[ConversionData],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def convert(
    payload: ConvertRequest,
    rates: RateRouter = Depends(get_rate_router),
):
    """
    Convert an amount between two supported currencies.

    ``rate`` in the response is units of ``to`` per 1 ``from``.
    """
    try:
        result = await rates.convert(
            payload.from_currency, payload.to_currency, payload.amount
        )
    except UpstreamError as exc:
        logger.error("FX convert error: %s", exc.message)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to fetch live FX rate.",
            exc.message,
        )
    return Envelope(data=ConversionData(**asdict(result)))


@router.get(
    "/fx/latest",
    response_model=Envelope[FxSnapshotData],
    responses={500: {"model": ErrorResponse}},
)
async def latest_rates(rates: RateRouter = Depends(get_rate_router)):
    """Rates from the display base currency to every other supported currency."""
    try:
        snapshot = await rates.snapshot()
    except UpstreamError as exc:
        logger.error("FX latest error: %s", exc.message)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to load live FX rates.",
            exc.message,
        )
    return Envelope(data=FxSnapshotData(**asdict(snapshot)))
