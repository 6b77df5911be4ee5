"""
FX Calc — FastAPI application entry point.

Configures logging, middleware and error handlers, and registers the
API routers.
"""

import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from fxcalc.api import calc, coins, rates
from fxcalc.config import settings
from fxcalc.core.errors import FxCalcError, fxcalc_error_handler, validation_error_handler

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.APP_NAME,
    description="Crypto purchase fee calculator with live FX and coin price proxies.",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Error handlers ---
app.add_exception_handler(FxCalcError, fxcalc_error_handler)
app.add_exception_handler(RequestValidationError, validation_error_handler)

# --- Routers ---
app.include_router(calc.router, prefix="/api", tags=["Calculator"])
app.include_router(rates.router, prefix="/api", tags=["FX"])
app.include_router(coins.router, prefix="/api", tags=["Coins"])


@app.get("/health")
async def health_check():
    """Health check endpoint for load balancers and monitoring."""
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "environment": settings.APP_ENV,
    }
