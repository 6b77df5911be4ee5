"""Parsing of user-supplied numeric fields into positive Decimals."""

import math
from decimal import Decimal, InvalidOperation

from fxcalc.core.errors import InvalidInputError


def fits_json_number(value: Decimal) -> bool:
    """True when ``value`` survives conversion to a finite JSON number.

    Non-zero values that underflow to 0.0 do not fit either.
    """
    as_float = float(value)
    return math.isfinite(as_float) and (as_float != 0 or value == 0)


def to_positive_decimal(value, message: str) -> Decimal:
    """
    Parse ``value`` (str, int, float or Decimal) into a finite Decimal > 0.

    Floats go through ``str()`` so 0.1 becomes Decimal("0.1") rather than
    its binary expansion. Values outside the double range ("1e400",
    "1e-999") are rejected. Anything else raises InvalidInputError(message).
    """
    if value is None or isinstance(value, bool):
        raise InvalidInputError(message)

    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float)):
        parsed = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise InvalidInputError(message)
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            raise InvalidInputError(message) from None
    else:
        raise InvalidInputError(message)

    if not parsed.is_finite() or parsed <= 0 or not fits_json_number(parsed):
        raise InvalidInputError(message)
    return parsed
