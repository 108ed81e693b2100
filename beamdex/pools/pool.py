"""Pool and Position value types.

Both are snapshots of on-chain state. The client never mutates them; a
fresh read from the gateway replaces the previous snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from beamdex.errors import ValidationError
from beamdex.math.fixed_point import sqrt_price_x96_to_price
from beamdex.math.tick import full_range_bounds, is_tick_aligned
from beamdex.models.types import normalize_address

from .constants import FEE_TIER_LABELS, TICK_SPACING


def tick_spacing_for_fee(fee: int) -> int:
    """Tick spacing of an enumerated fee tier.

    Raises:
        ValidationError: If fee is not one of the supported tiers
    """
    try:
        return TICK_SPACING[fee]
    except KeyError:
        raise ValidationError(
            f"Unsupported fee tier {fee}; expected one of {sorted(TICK_SPACING)}"
        ) from None


@dataclass(frozen=True)
class Pool:
    """A concentrated liquidity pool as last read from the chain.

    Attributes:
        address: Pool contract address
        token0: First token (pools order their tokens)
        token1: Second token
        fee: Fee in parts-per-million (e.g., 3000 for 0.3%)
        tick_spacing: Tick spacing of the fee tier
        sqrt_price_x96: sqrt(price) * 2^96, 0 if the pool is not initialized
        tick: Current tick
        liquidity: Active liquidity at the current tick
    """

    address: str
    token0: str
    token1: str
    fee: int
    tick_spacing: int
    sqrt_price_x96: int = 0
    tick: int = 0
    liquidity: int = 0
    fee_growth_global0: int = 0
    fee_growth_global1: int = 0

    def __post_init__(self) -> None:
        """Validate the fee / tick spacing pair against the enumerated tiers."""
        expected = tick_spacing_for_fee(self.fee)
        if self.tick_spacing != expected:
            raise ValidationError(
                f"Tick spacing {self.tick_spacing} does not match fee {self.fee} "
                f"(expected {expected})"
            )

    @property
    def fee_percent(self) -> float:
        """Fee as percentage (e.g., 0.3 for 0.3%)."""
        return self.fee / 10000

    @property
    def fee_decimal(self) -> float:
        """Fee as decimal (e.g., 0.003 for 0.3%)."""
        return self.fee / 1_000_000

    @property
    def fee_label(self) -> str:
        return FEE_TIER_LABELS[self.fee]

    @property
    def is_initialized(self) -> bool:
        return self.sqrt_price_x96 > 0

    @property
    def current_price(self) -> Decimal | None:
        """token1 per token0, or None if the pool has no price yet."""
        if not self.is_initialized:
            return None
        return sqrt_price_x96_to_price(self.sqrt_price_x96)

    def get_token_out(self, token_in: str) -> str:
        """Get the output token for a given input token."""
        token_in_norm = normalize_address(token_in)
        if token_in_norm == normalize_address(self.token0):
            return self.token1
        elif token_in_norm == normalize_address(self.token1):
            return self.token0
        else:
            raise ValidationError(f"Token {token_in} not in pool")

    def is_token0(self, token: str) -> bool:
        """Check if token is token0 (determines swap direction)."""
        return normalize_address(token) == normalize_address(self.token0)

    def zero_for_one(self, token_in: str) -> bool:
        """Swap direction for an input token; raises if token is not in the pool."""
        self.get_token_out(token_in)
        return self.is_token0(token_in)


@dataclass(frozen=True)
class Position:
    """A liquidity position in a pool.

    Positions are never deleted on-chain: burning all liquidity leaves a
    zero-liquidity record that may still hold uncollected tokens.
    """

    owner: str
    pool: str
    tick_lower: int
    tick_upper: int
    liquidity: int = 0
    tokens_owed0: int = 0
    tokens_owed1: int = 0

    def __post_init__(self) -> None:
        if self.tick_lower >= self.tick_upper:
            raise ValidationError(
                f"tick_lower must be below tick_upper ({self.tick_lower} >= {self.tick_upper})"
            )

    @property
    def is_empty(self) -> bool:
        """True once all liquidity has been burned."""
        return self.liquidity == 0

    @property
    def has_uncollected(self) -> bool:
        return self.tokens_owed0 > 0 or self.tokens_owed1 > 0


def sort_tokens(token_a: str, token_b: str) -> tuple[str, str]:
    """Order a token pair the way the factory does (plain string comparison)."""
    a, b = normalize_address(token_a), normalize_address(token_b)
    return (a, b) if a <= b else (b, a)


@dataclass(frozen=True)
class PoolMetadata:
    """Static pool parameters from getPoolMetadata."""

    token0: str
    token1: str
    fee: int
    tick_spacing: int
    factory: str
    max_liquidity_per_tick: str


@dataclass(frozen=True)
class PoolState:
    """Mutable pool state from getState."""

    sqrt_price_x96: int
    tick: int
    liquidity: int
    fee_growth_global0: int = 0
    fee_growth_global1: int = 0


def validate_position_ticks(tick_lower: int, tick_upper: int, tick_spacing: int) -> None:
    """Check a position range before a mint/burn/collect call.

    The full-range pair is passed through unaligned; the pool contract
    owns that case.

    Raises:
        ValidationError: If the range is empty or a bound is not a multiple of tick_spacing
    """
    if tick_lower >= tick_upper:
        raise ValidationError(
            f"tick_lower must be below tick_upper ({tick_lower} >= {tick_upper})"
        )
    if (tick_lower, tick_upper) == full_range_bounds(tick_spacing):
        return
    for name, tick in (("tick_lower", tick_lower), ("tick_upper", tick_upper)):
        if not is_tick_aligned(tick, tick_spacing):
            raise ValidationError(f"{name} {tick} is not a multiple of tick spacing {tick_spacing}")


__all__ = [
    "Pool",
    "PoolMetadata",
    "PoolState",
    "Position",
    "sort_tokens",
    "tick_spacing_for_fee",
    "validate_position_ticks",
]
