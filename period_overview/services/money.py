"""Exact decimal helpers for monetary arithmetic."""

from collections.abc import Iterator
from contextlib import contextmanager
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, ROUND_DOWN, Context, Decimal, localcontext

RATE_PLACES = 4


@contextmanager
def exact_arithmetic() -> Iterator[Context]:
    """Decimal context in which addition, subtraction and negation never round."""
    with localcontext() as ctx:
        ctx.prec = MAX_PREC
        ctx.Emax = MAX_EMAX
        ctx.Emin = MIN_EMIN
        yield ctx


def _quantum(places: int) -> Decimal:
    # e.g. 0.01 for 2 places, 1 for 0 places
    return Decimal("1").scaleb(-places)


def divide(numerator: Decimal, denominator: Decimal | int, places: int) -> Decimal:
    """Divide and truncate toward zero to `places` fractional digits.

    Precision is widened to cover every integer digit of the quotient, so the
    result is exact up to the truncation.
    """
    denominator = Decimal(denominator)
    if denominator == 0:
        raise ZeroDivisionError("division by zero amount")
    with localcontext() as ctx:
        ctx.rounding = ROUND_DOWN
        ctx.prec = max(28, abs(numerator.adjusted()) + abs(denominator.adjusted()) + places + 4)
        return (numerator / denominator).quantize(_quantum(places))


def negate_positive(amount: Decimal) -> Decimal:
    """Return a non-positive amount: positives are negated, the rest untouched."""
    return amount.copy_negate() if amount > 0 else amount


def magnitude(amount: Decimal) -> Decimal:
    return amount.copy_abs()
