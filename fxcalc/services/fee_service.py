"""
Fee calculator — converts a cash principal into a crypto purchase breakdown.

Fee schedule (all from Settings):
    commission   = principal * COMMISSION_RATE      (charged on top)
    gst          = PLATFORM_FEE * GST_RATE
    fixed fee    = PLATFORM_FEE + gst               (absorbed out of principal)
    net          = principal - commission - fixed fee
    units        = net / market_value
    total charge = principal + commission

The commission is added to what the customer pays while the flat fee and
GST come out of the principal. Both halves are business rules.
"""

from dataclasses import dataclass
from decimal import Decimal, Overflow

from fxcalc.config import Settings
from fxcalc.core.errors import BelowMinimumError, FeesExceedPrincipalError, InvalidInputError
from fxcalc.services.amounts import fits_json_number, to_positive_decimal

INVALID_NUMBERS_MESSAGE = "Please enter valid positive numbers."


@dataclass(frozen=True)
class FeeSchedule:
    commission_rate: Decimal
    platform_fee: Decimal
    gst_rate: Decimal
    gst_amount: Decimal
    total_fixed_fee: Decimal
    min_principal: Decimal


@dataclass(frozen=True)
class FeeQuote:
    """Full purchase breakdown, echoing every fee component."""
    principal: Decimal
    market_value: Decimal
    commission_rate: Decimal
    commission_amount: Decimal
    platform_fee: Decimal
    gst_rate: Decimal
    gst_amount: Decimal
    total_fixed_fee: Decimal
    net_for_purchase: Decimal
    units_purchased: Decimal
    total_charged: Decimal
    min_principal: Decimal


class FeeCalculator:
    """Pure, stateless fee computation over an immutable fee schedule."""

    def __init__(self, settings: Settings):
        self._commission_rate = settings.COMMISSION_RATE
        self._platform_fee = settings.PLATFORM_FEE
        self._gst_rate = settings.GST_RATE
        self._min_principal = settings.MIN_PRINCIPAL

    def schedule(self) -> FeeSchedule:
        gst_amount = self._platform_fee * self._gst_rate
        return FeeSchedule(
            commission_rate=self._commission_rate,
            platform_fee=self._platform_fee,
            gst_rate=self._gst_rate,
            gst_amount=gst_amount,
            total_fixed_fee=self._platform_fee + gst_amount,
            min_principal=self._min_principal,
        )

    def compute_fee(self, principal, market_value) -> FeeQuote:
        """
        Compute the purchase breakdown.

        Raises InvalidInputError for non-numeric or non-positive inputs
        (or a breakdown too large to render as JSON numbers),
        BelowMinimumError under the minimum principal, and
        FeesExceedPrincipalError when nothing is left to buy with.
        """
        p = to_positive_decimal(principal, INVALID_NUMBERS_MESSAGE)
        mv = to_positive_decimal(market_value, INVALID_NUMBERS_MESSAGE)

        if p < self._min_principal:
            raise BelowMinimumError(
                f"Minimum principal is {self._min_principal:.2f}."
            )

        sched = self.schedule()
        try:
            commission_amount = p * self._commission_rate
            net_for_purchase = p - commission_amount - sched.total_fixed_fee
            units_purchased = net_for_purchase / mv
            total_charged = p + commission_amount
        except Overflow:
            raise InvalidInputError(INVALID_NUMBERS_MESSAGE) from None

        if net_for_purchase <= 0:
            raise FeesExceedPrincipalError(
                "Fees are higher than the principal. Increase the principal amount."
            )

        quote = FeeQuote(
            principal=p,
            market_value=mv,
            commission_rate=self._commission_rate,
            commission_amount=commission_amount,
            platform_fee=self._platform_fee,
            gst_rate=self._gst_rate,
            gst_amount=sched.gst_amount,
            total_fixed_fee=sched.total_fixed_fee,
            net_for_purchase=net_for_purchase,
            units_purchased=units_purchased,
            total_charged=total_charged,
            min_principal=self._min_principal,
        )
        # Every field must render as a JSON number; never a partial breakdown.
        if not all(fits_json_number(v) for v in vars(quote).values()):
            raise InvalidInputError(INVALID_NUMBERS_MESSAGE)
        return quote
