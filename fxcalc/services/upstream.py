"""
Shared upstream HTTP access for the FX and coin-price providers.

Every failure mode (transport error, timeout, non-2xx, non-JSON body,
missing or non-numeric field) surfaces as UpstreamError.
"""

import logging
import math
from decimal import Decimal

import httpx

from fxcalc.core.errors import UpstreamError

logger = logging.getLogger(__name__)


async def get_json(url: str, params: dict, timeout: float, service: str):
    """GET ``url`` and return the decoded JSON body."""
    logger.debug("%s request: %s params=%s", service, url, params)
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.get(url, params=params)
            resp.raise_for_status()
            return resp.json()
    except httpx.HTTPStatusError as exc:
        raise UpstreamError(
            f"{service} returned HTTP {exc.response.status_code}"
        ) from exc
    except httpx.TimeoutException as exc:
        raise UpstreamError(f"{service} timed out after {timeout}s") from exc
    except httpx.RequestError as exc:
        raise UpstreamError(f"{service} request failed: {exc}") from exc
    except ValueError as exc:
        raise UpstreamError(f"{service} returned a non-JSON body") from exc


def parse_price(value, field: str, service: str) -> Decimal:
    """Validate an upstream numeric field: finite and strictly positive."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise UpstreamError(f"{service} response is missing numeric field '{field}'")
    if isinstance(value, float) and not math.isfinite(value):
        raise UpstreamError(f"{service} returned non-finite value for '{field}'")
    if value <= 0:
        raise UpstreamError(f"{service} returned non-positive value for '{field}'")
    return Decimal(str(value))
