"""
Decimal helpers shared by every evaluator.

Divisions and percentages round half-up to ``MONEY_SCALE`` fractional digits;
sums and products stay exact. Working precision grows with the operands so
large amounts never hit the default 28 digit context.
"""
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Iterable

from couponengine.core.config import settings
from couponengine.schemas.cart import CartItem

ZERO = Decimal("0")
HUNDRED = Decimal("100")
MONEY_SCALE = settings.DISCOUNT_SCALE
_QUANT = Decimal(1).scaleb(-MONEY_SCALE)
# extra digits kept before the final half-up rounding
_GUARD_DIGITS = 12


def _digits(value: Decimal) -> int:
    return len(value.as_tuple().digits)


def quantize(value: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + MONEY_SCALE + _GUARD_DIGITS)
        return value.quantize(_QUANT, rounding=ROUND_HALF_UP)


def divide(numerator: Decimal, denominator: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, numerator.adjusted() - denominator.adjusted() + MONEY_SCALE + _GUARD_DIGITS)
        return quantize(numerator / denominator)


def multiply(a: Decimal, b: Decimal) -> Decimal:
    """exact product, whatever the number of digits."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, _digits(a) + _digits(b))
        return a * b


def percent_of(amount: Decimal, percent: Decimal) -> Decimal:
    """amount * percent / 100, rounded half-up to the money scale."""
    return divide(multiply(amount, percent), HUNDRED)


def allocate(part: Decimal, whole: Decimal, amount: Decimal) -> Decimal:
    """
    Share of ``amount`` proportional to ``part / whole``.

    The ratio is rounded to the money scale first and then scaled, so the
    shares of one amount may not add back up exactly.
    """
    return quantize(multiply(divide(part, whole), amount))


def line_total(item: CartItem) -> Decimal:
    return multiply(item.unit_price, Decimal(item.quantity))


def cart_total(items: Iterable[CartItem]) -> Decimal:
    return sum((line_total(item) for item in items), ZERO)
