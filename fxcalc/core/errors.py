"""
Error taxonomy and JSON error rendering.

Local validation errors map to 400 and are raised before any upstream call.
UpstreamError maps to 500 and is never replaced by a fallback value.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class FxCalcError(Exception):
    """Base class for errors rendered as ``{ok: false, message}``."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInputError(FxCalcError):
    """Malformed, non-finite, or non-positive numeric field."""


class BelowMinimumError(FxCalcError):
    """Principal below the configured minimum."""


class FeesExceedPrincipalError(FxCalcError):
    """Fees leave nothing to spend on the purchase."""


class UnsupportedPairError(FxCalcError):
    """Currency code or coin symbol outside the supported set."""


class UpstreamError(FxCalcError):
    """Network failure, non-2xx status, or bad payload from a collaborator."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    """Build the ``{ok: false, ...}`` envelope."""
    content: dict = {"ok": False, "message": message}
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content)


async def fxcalc_error_handler(request: Request, exc: FxCalcError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return error_response(exc.status_code, "Upstream service error.", exc.message)
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.info("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return error_response(status.HTTP_400_BAD_REQUEST, "Malformed request body.")
