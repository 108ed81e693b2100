"""Mathematical utilities for the BeamDEX client.

This package mirrors the subset of pool math the client needs for hints:
- fixed_point: Q64.96 <-> Decimal conversions
- tick: price <-> tick conversion and tick-spacing alignment
"""

from beamdex.math.fixed_point import (
    as_decimal,
    as_price,
    from_decimal,
    price_to_sqrt_price_x96,
    sqrt_price_x96_to_price,
    to_decimal,
)
from beamdex.math.tick import (
    TickRange,
    TickRounding,
    align_tick,
    full_range_bounds,
    is_tick_aligned,
    price_range_to_ticks,
    price_to_tick,
    raw_tick,
    tick_to_price,
    usable_tick_bounds,
)

__all__ = [
    # Fixed point
    "as_decimal",
    "as_price",
    "from_decimal",
    "to_decimal",
    "sqrt_price_x96_to_price",
    "price_to_sqrt_price_x96",
    # Ticks
    "TickRange",
    "TickRounding",
    "raw_tick",
    "price_to_tick",
    "tick_to_price",
    "align_tick",
    "is_tick_aligned",
    "usable_tick_bounds",
    "price_range_to_ticks",
    "full_range_bounds",
]
