"""Price <-> tick conversion and tick-spacing alignment.

The conversion here is a logarithmic approximation used to pre-fill and
validate range inputs. It is a hint only: the pool contract runs its own
integer tick math on submission and remains the source of truth.

Alignment rounds lower bounds down and upper bounds up to a multiple of the
pool's tick spacing, so a [lower, upper] range never collapses to an empty
range after alignment.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Context, Decimal, localcontext
from enum import Enum

from beamdex.constants import (
    FULL_RANGE_TICK_LOWER,
    FULL_RANGE_TICK_UPPER,
    MAX_TICK,
    MIN_TICK,
)
from beamdex.errors import TickRangeError, ValidationError
from beamdex.math.fixed_point import as_price

__all__ = [
    "TickRounding",
    "TickRange",
    "raw_tick",
    "price_to_tick",
    "tick_to_price",
    "align_tick",
    "is_tick_aligned",
    "usable_tick_bounds",
    "price_range_to_ticks",
    "full_range_bounds",
]

# Digits for ln(); enough to place a price on the right tick for any
# value representable as Q64.96
_LOG_PRECISION = 40
_LN_TICK_BASE = Context(prec=_LOG_PRECISION).ln(Decimal("1.0001"))


class TickRounding(str, Enum):
    """Direction used when aligning a tick to the tick spacing."""

    DOWN = "down"  # lower bound
    UP = "up"  # upper bound


@dataclass(frozen=True)
class TickRange:
    """An aligned [lower, upper) tick range."""

    lower: int
    upper: int

    @property
    def width(self) -> int:
        return self.upper - self.lower


def _check_spacing(tick_spacing: int) -> None:
    if tick_spacing <= 0:
        raise ValidationError(f"Tick spacing must be positive, got {tick_spacing}")


def _check_tick(tick: int) -> None:
    if not MIN_TICK <= tick <= MAX_TICK:
        raise TickRangeError(f"Tick {tick} outside [{MIN_TICK}, {MAX_TICK}]")


def raw_tick(price: Decimal | int | float | str) -> int:
    """floor(ln(price) / ln(1.0001)) without any alignment.

    Raises:
        PriceError: If price is not a positive finite number
        TickRangeError: If the tick falls outside [MIN_TICK, MAX_TICK]
    """
    value = as_price(price)
    with localcontext(Context(prec=_LOG_PRECISION)):
        ratio = value.ln() / _LN_TICK_BASE
        tick = int(ratio.to_integral_value(rounding=ROUND_FLOOR))
    _check_tick(tick)
    return tick


def usable_tick_bounds(tick_spacing: int) -> tuple[int, int]:
    """Smallest and largest multiples of tick_spacing within the tick bounds."""
    _check_spacing(tick_spacing)
    lowest = -(-MIN_TICK // tick_spacing) * tick_spacing
    highest = (MAX_TICK // tick_spacing) * tick_spacing
    return lowest, highest


def align_tick(tick: int, tick_spacing: int, rounding: TickRounding = TickRounding.DOWN) -> int:
    """Align a tick to a multiple of tick_spacing.

    Floor division is used for both directions so negative ticks round
    toward -inf (DOWN) or +inf (UP) like positive ones. The result is
    clamped to the usable multiples inside the tick bounds.

    Args:
        tick: Tick to align
        tick_spacing: Pool tick spacing (e.g., 10, 60, 200)
        rounding: DOWN for a lower bound, UP for an upper bound
    """
    _check_spacing(tick_spacing)
    if rounding is TickRounding.DOWN:
        aligned = (tick // tick_spacing) * tick_spacing
    else:
        aligned = -(-tick // tick_spacing) * tick_spacing

    lowest, highest = usable_tick_bounds(tick_spacing)
    return max(lowest, min(highest, aligned))


def is_tick_aligned(tick: int, tick_spacing: int) -> bool:
    """True if tick is a multiple of tick_spacing."""
    _check_spacing(tick_spacing)
    return tick % tick_spacing == 0


def price_to_tick(
    price: Decimal | int | float | str,
    tick_spacing: int,
    rounding: TickRounding = TickRounding.DOWN,
) -> int:
    """Approximate tick for a price, aligned to the pool's tick spacing.

    Args:
        price: Positive decimal price (token1 per token0)
        tick_spacing: Pool tick spacing
        rounding: DOWN when computing a lower bound, UP for an upper bound

    Returns:
        Aligned tick

    Raises:
        PriceError: If price <= 0, NaN or infinite
        TickRangeError: If the unaligned tick is outside [MIN_TICK, MAX_TICK]
    """
    return align_tick(raw_tick(price), tick_spacing, rounding)


def tick_to_price(tick: int) -> Decimal:
    """Decimal price at a tick: 1.0001^tick."""
    _check_tick(tick)
    with localcontext(Context(prec=_LOG_PRECISION)):
        return Decimal("1.0001") ** tick


def price_range_to_ticks(
    lower_price: Decimal | int | float | str,
    upper_price: Decimal | int | float | str,
    tick_spacing: int,
) -> TickRange:
    """Aligned tick range for a [lower_price, upper_price] price range.

    The lower price rounds down and the upper price rounds up. If both land
    on the same multiple the range is widened by one spacing.

    Raises:
        ValidationError: If lower_price >= upper_price
    """
    if as_price(lower_price) >= as_price(upper_price):
        raise ValidationError(
            f"Lower price must be below upper price ({lower_price} >= {upper_price})"
        )

    lower = price_to_tick(lower_price, tick_spacing, TickRounding.DOWN)
    upper = price_to_tick(upper_price, tick_spacing, TickRounding.UP)

    if lower == upper:
        _, highest = usable_tick_bounds(tick_spacing)
        if upper + tick_spacing <= highest:
            upper += tick_spacing
        else:
            lower -= tick_spacing

    return TickRange(lower=lower, upper=upper)


def full_range_bounds(tick_spacing: int | None = None) -> tuple[int, int]:
    """Full-range position bounds.

    Always (-887220, 887220), whatever the spacing. These are not multiples
    of every tier's spacing (887220 % 200 != 0); the pool contract decides
    how to treat them.
    """
    _ = tick_spacing
    return FULL_RANGE_TICK_LOWER, FULL_RANGE_TICK_UPPER
