"""Q64.96 fixed-point conversions.

Prices cross the contract boundary as integers scaled by 2^96. This module
converts between that representation and ``decimal.Decimal`` for display
and for turning user input into call arguments.

The decimal side is display-only: a value produced by ``to_decimal`` is
never converted back and submitted; call arguments always come from user
input via ``from_decimal`` or from integers read off the chain.
"""

from __future__ import annotations

import math
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext

from beamdex.constants import Q96
from beamdex.errors import PriceError

__all__ = [
    "WORKING_PRECISION",
    "to_decimal",
    "from_decimal",
    "as_decimal",
    "as_price",
    "sqrt_price_x96_to_price",
    "price_to_sqrt_price_x96",
]

# Significant digits for intermediate results. A uint256 has 78 digits, so
# products of a Q64.96 value with a 2^96 factor stay exact.
WORKING_PRECISION = 80

_Q96_DECIMAL = Decimal(Q96)


def _context() -> Context:
    return Context(prec=WORKING_PRECISION, rounding=ROUND_HALF_UP)


def as_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert user input to Decimal, rejecting NaN and infinities.

    Floats go through ``repr`` so 0.9 becomes Decimal("0.9") rather than
    its binary expansion.

    Raises:
        PriceError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise PriceError(f"Expected a number, got {value!r}")

    try:
        if isinstance(value, Decimal):
            result = value
        elif isinstance(value, float):
            result = Decimal(repr(value))
        else:
            result = Decimal(value)
    except (InvalidOperation, ValueError, TypeError) as e:
        raise PriceError(f"Not a number: {value!r}") from e

    if not result.is_finite():
        raise PriceError(f"Price must be finite, got {value!r}")
    return result


def as_price(value: Decimal | int | float | str) -> Decimal:
    """Convert user input to a strictly positive Decimal price.

    Raises:
        PriceError: If the value is NaN, infinite, zero or negative
    """
    price = as_decimal(value)
    if price <= 0:
        raise PriceError(f"Price must be positive, got {value!r}")
    return price


def to_decimal(q: int, places: int | None = None) -> Decimal:
    """Convert a Q64.96 integer to Decimal.

    The division is carried out at working precision and only then rounded
    to ``places`` decimal places, so no precision is dropped before dividing.

    Args:
        q: Value scaled by 2^96
        places: Decimal places to round to for display (None = full precision)

    Returns:
        q / 2^96 as Decimal

    Raises:
        PriceError: If q is negative
    """
    if q < 0:
        raise PriceError(f"Q64.96 value cannot be negative: {q}")

    with localcontext(_context()):
        result = Decimal(q) / _Q96_DECIMAL
        if places is not None:
            result = result.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    return result


def from_decimal(d: Decimal | int | float | str) -> int:
    """Convert a positive decimal price to Q64.96: floor(d * 2^96).

    Args:
        d: Price as Decimal, int, float or numeric string

    Returns:
        Integer price scaled by 2^96

    Raises:
        PriceError: If d is NaN, infinite, zero or negative
    """
    price = as_price(d)
    with localcontext(_context()):
        scaled = price * _Q96_DECIMAL
        return int(scaled.to_integral_value(rounding=ROUND_FLOOR))


def sqrt_price_x96_to_price(sqrt_price_x96: int) -> Decimal:
    """Pool price (token1 per token0) from the pool's sqrtPriceX96.

    Args:
        sqrt_price_x96: sqrt(price) * 2^96 as stored by the pool

    Returns:
        (sqrt_price_x96 / 2^96)^2 as Decimal
    """
    if sqrt_price_x96 <= 0:
        raise PriceError(f"sqrtPriceX96 must be positive, got {sqrt_price_x96}")

    with localcontext(_context()):
        return (Decimal(sqrt_price_x96) * Decimal(sqrt_price_x96)) / (_Q96_DECIMAL * _Q96_DECIMAL)


def price_to_sqrt_price_x96(price: Decimal | int | float | str) -> int:
    """sqrtPriceX96 for a decimal price: floor(sqrt(price) * 2^96).

    Used to seed a new pool's initial price.
    """
    value = as_price(price)
    with localcontext(_context()):
        scaled = value * _Q96_DECIMAL * _Q96_DECIMAL
        return math.isqrt(int(scaled.to_integral_value(rounding=ROUND_FLOOR)))
