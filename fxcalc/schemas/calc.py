"""
Pydantic schemas for the fee calculator.
"""

from typing import Any

from fxcalc.schemas.common import CamelModel, JsonDecimal

# Accept both strings and numbers; the calculator does the real parsing.
NumericInput = Any


class CalcRequest(CamelModel):
    principal: NumericInput = None
    market_value: NumericInput = None


class FeeQuoteData(CamelModel):
    """Full purchase breakdown with every fee component."""
    principal: JsonDecimal
    market_value: JsonDecimal
    commission_rate: JsonDecimal
    commission_amount: JsonDecimal
    platform_fee: JsonDecimal
    gst_rate: JsonDecimal
    gst_amount: JsonDecimal
    total_fixed_fee: JsonDecimal
    net_for_purchase: JsonDecimal
    units_purchased: JsonDecimal
    total_charged: JsonDecimal
    min_principal: JsonDecimal


class FeeScheduleData(CamelModel):
    commission_rate: JsonDecimal
    platform_fee: JsonDecimal
    gst_rate: JsonDecimal
    gst_amount: JsonDecimal
    total_fixed_fee: JsonDecimal
    min_principal: JsonDecimal
