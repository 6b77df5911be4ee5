"""
Reusable FastAPI dependencies.

Dependencies:
  - get_settings       — the process-wide immutable Settings
  - get_fee_calculator — FeeCalculator over the configured fee schedule
  - get_rate_router    — RateRouter wired to the configured providers

Tests swap any of these through ``app.dependency_overrides``.
"""

from fastapi import Depends

from fxcalc.config import Settings, settings as app_settings
from fxcalc.services.coin_service import make_coin_provider
from fxcalc.services.fee_service import FeeCalculator
from fxcalc.services.rate_service import RateRouter, make_fx_provider


def get_settings() -> Settings:
    return app_settings


def get_fee_calculator(settings: Settings = Depends(get_settings)) -> FeeCalculator:
    return FeeCalculator(settings)


def get_rate_router(settings: Settings = Depends(get_settings)) -> RateRouter:
    return RateRouter(
        settings,
        fx_provider=make_fx_provider(settings),
        coin_provider=make_coin_provider(settings),
    )
