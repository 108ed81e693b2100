"""Pool and position models.

All exports are available from the package root:
    from beamdex.pools import Pool, Position, FEE_MEDIUM
"""

from .constants import FEE_HIGH, FEE_LOW, FEE_MEDIUM, FEE_TIER_LABELS, FEE_TIERS, TICK_SPACING
from .pool import (
    Pool,
    PoolMetadata,
    PoolState,
    Position,
    sort_tokens,
    tick_spacing_for_fee,
    validate_position_ticks,
)

__all__ = [
    # Constants
    "FEE_LOW",
    "FEE_MEDIUM",
    "FEE_HIGH",
    "FEE_TIERS",
    "FEE_TIER_LABELS",
    "TICK_SPACING",
    # Models
    "Pool",
    "PoolMetadata",
    "PoolState",
    "Position",
    "sort_tokens",
    "tick_spacing_for_fee",
    "validate_position_ticks",
]
