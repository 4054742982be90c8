"""
Fail-soft numeric coercion for caller-supplied form values.

Anything that is not a finite, non-negative number becomes zero. Nothing
here raises: user-entered values mid-form must never break a calculation.

Amounts above ``MAX_AMOUNT`` are treated as unparseable. Everything at or
below it is handled exactly: cent rounding widens the decimal context to
fit the value, and ``money_context()`` gives the engines enough digits for
a product of two maximal amounts held to the cent.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext, localcontext
from typing import Any

CENT = Decimal("0.01")
ZERO = Decimal("0")

MAX_AMOUNT = Decimal("1e100")
MONEY_PRECISION = 256


def money_context():
    """Context manager for engine arithmetic on amounts up to ``MAX_AMOUNT``."""
    ctx = getcontext().copy()
    ctx.prec = max(ctx.prec, MONEY_PRECISION)
    return localcontext(ctx)


def round_cent(value: Decimal) -> Decimal:
    """Round to the cent (half up) without overflowing the context precision."""
    with localcontext() as ctx:
        # one digit of headroom for a carry out of the top digit
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def coerce_non_negative(value: Any) -> Decimal:
    """Convert ``value`` to a non-negative Decimal, or zero if that is not possible."""
    if value is None or isinstance(value, bool):
        return ZERO

    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, (int, float)):
        number = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return ZERO
        try:
            number = Decimal(text)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO

    if not number.is_finite() or number <= 0 or number > MAX_AMOUNT:
        return ZERO
    return number


def to_money(value: Any) -> Decimal:
    """Coerce ``value`` and round it to the cent."""
    return round_cent(coerce_non_negative(value))
