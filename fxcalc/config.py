"""
Application settings loaded from environment variables.

Uses pydantic-settings for type-safe configuration with .env file support.
Settings are frozen: components receive an instance at construction and
never mutate it.
"""

from decimal import Decimal

from pydantic import model_validator
from pydantic_settings import BaseSettings

QUOTE_CONVENTIONS = ("quoted_per_pivot", "pivot_per_quoted")


class Settings(BaseSettings):
    """Global application settings."""

    # App
    APP_NAME: str = "FX Calc"
    APP_ENV: str = "development"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Fee schedule
    COMMISSION_RATE: Decimal = Decimal("0.03")   # 3% of principal, charged on top
    PLATFORM_FEE: Decimal = Decimal("0.99")      # flat, absorbed out of principal
    GST_RATE: Decimal = Decimal("0.09")          # applied to the platform fee
    MIN_PRINCIPAL: Decimal = Decimal("10")

    # FX quotes
    FX_API_BASE_URL: str = "https://api.exchangerate.host"
    FX_PIVOT_CURRENCY: str = "USD"
    FX_SUPPORTED_CURRENCIES: list[str] = ["USD", "SGD", "BTN"]
    FX_QUOTE_CONVENTION: str = "quoted_per_pivot"
    FX_SNAPSHOT_BASE: str = "SGD"
    FX_SOURCE_LABEL: str = "exchangerate.host"
    FX_RATE_MOCK: bool = False  # set True in development to skip the live API

    # Coin prices
    COIN_API_BASE_URL: str = "https://api.coingecko.com/api/v3"
    COIN_IDS: dict[str, str] = {
        "usdt": "tether",
        "eth": "ethereum",
        "usdc": "usd-coin",
        "sol": "solana",
    }
    COIN_QUOTE_CURRENCIES: list[str] = ["usd", "sgd"]
    COIN_PRICE_MOCK: bool = False

    # Upstream HTTP
    UPSTREAM_TIMEOUT_SECONDS: float = 10.0

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "frozen": True}

    @model_validator(mode="after")
    def _check_consistency(self) -> "Settings":
        supported = [c.upper() for c in self.FX_SUPPORTED_CURRENCIES]
        if self.FX_PIVOT_CURRENCY.upper() not in supported:
            raise ValueError(
                f"FX_PIVOT_CURRENCY {self.FX_PIVOT_CURRENCY} is not in "
                f"FX_SUPPORTED_CURRENCIES {supported}"
            )
        if self.FX_SNAPSHOT_BASE.upper() not in supported:
            raise ValueError(
                f"FX_SNAPSHOT_BASE {self.FX_SNAPSHOT_BASE} is not in "
                f"FX_SUPPORTED_CURRENCIES {supported}"
            )
        if self.FX_QUOTE_CONVENTION not in QUOTE_CONVENTIONS:
            raise ValueError(
                f"FX_QUOTE_CONVENTION must be one of {QUOTE_CONVENTIONS}"
            )
        if self.PLATFORM_FEE < 0 or self.COMMISSION_RATE < 0 or self.GST_RATE < 0:
            raise ValueError("Fee constants cannot be negative")
        if self.MIN_PRINCIPAL <= 0:
            raise ValueError("MIN_PRINCIPAL must be positive")
        return self

    @property
    def supported_currencies(self) -> tuple[str, ...]:
        return tuple(c.upper() for c in self.FX_SUPPORTED_CURRENCIES)

    @property
    def pivot_currency(self) -> str:
        return self.FX_PIVOT_CURRENCY.upper()


settings = Settings()
