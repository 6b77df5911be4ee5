"""
Coin price endpoint.
"""

import logging

from fastapi import APIRouter, Depends, Query, status

from fxcalc.api.deps import get_rate_router
from fxcalc.core.errors import UpstreamError, error_response
from fxcalc.schemas import CoinPriceSnapshot, Envelope, ErrorResponse
from fxcalc.services.rate_service import RateRouter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/coins/latest",
    response_model=Envelope[CoinPriceSnapshot],
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def latest_coin_prices(
    symbols: str | None = Query(
        None, description="Comma-separated coin symbols", examples=["eth,sol"],
    ),
    rates: RateRouter = Depends(get_rate_router),
):
    """
    Latest prices for the supported coins in each quote currency.

    Coins the upstream did not return are left out of ``data``.
    """
    wanted = symbols.split(",") if symbols else None
    try:
        prices = await rates.coin_prices(wanted)
    except UpstreamError as exc:
        logger.error("Coin prices error: %s", exc.message)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to load live coin prices.",
            exc.message,
        )
    return Envelope(data=prices)
