"""Grid order model.

A grid order owns an ordered ladder of levels across [lower_price,
upper_price]. Level status is written on-chain by the grid bot; the client
only reflects the last state it read and never advances a level itself.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass

from beamdex.constants import GRID_MAX_LEVELS, GRID_MIN_LEVELS
from beamdex.errors import OrderValidationError
from beamdex.orders.types import GridLevelStatus, GridOrderStatus


@dataclass(frozen=True)
class GridLevel:
    """One rung of a grid.

    Attributes:
        price: Q64.96 level price
        amount: Amount traded at this level
        status: IDLE, BUY_PENDING or SELL_PENDING
        last_fill_period: Chain period of the last fill (0 if never filled)
    """

    price: int
    amount: int
    status: GridLevelStatus = GridLevelStatus.IDLE
    last_fill_period: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "status", GridLevelStatus(self.status))

    @property
    def is_idle(self) -> bool:
        return self.status is GridLevelStatus.IDLE


def grid_level_prices(lower_price: int, upper_price: int, grid_levels: int) -> list[int]:
    """Evenly spaced Q64.96 prices from lower_price up to upper_price.

    Uses the same integer step as the grid manager when it initializes a
    ladder, step = (upper - lower) // (levels - 1), so the result matches
    the levels stored on-chain. The last level sits on upper_price less at
    most levels - 2 units of integer rounding.

    Raises:
        OrderValidationError: If the bounds are inverted or the level count is out of range
    """
    if not GRID_MIN_LEVELS <= grid_levels <= GRID_MAX_LEVELS:
        raise OrderValidationError(
            "grid_levels",
            f"Grid levels must be between {GRID_MIN_LEVELS} and {GRID_MAX_LEVELS}",
        )
    if lower_price <= 0:
        raise OrderValidationError("lower_price", "Lower price must be greater than zero")
    if lower_price >= upper_price:
        raise OrderValidationError("upper_price", "Upper price must be greater than lower price")

    step = (upper_price - lower_price) // (grid_levels - 1)
    return [lower_price + step * i for i in range(grid_levels)]


def build_grid_levels(
    lower_price: int, upper_price: int, grid_levels: int, amount_per_level: int
) -> tuple[GridLevel, ...]:
    """Initial ladder for a new grid: every level IDLE."""
    return tuple(
        GridLevel(price=price, amount=amount_per_level)
        for price in grid_level_prices(lower_price, upper_price, grid_levels)
    )


@dataclass(frozen=True)
class GridOrder:
    """A grid order as stored by the grid order manager.

    ``levels`` is empty until the ladder has been read; a grid with no
    loaded levels reports zero progress.
    """

    grid_id: int
    owner: str
    token_in: str
    token_out: str
    grid_levels: int
    lower_price: int
    upper_price: int
    amount_per_level: int
    active: bool
    cancelled: bool
    levels: tuple[GridLevel, ...] = ()

    def status(self) -> GridOrderStatus:
        if self.cancelled or not self.active:
            return GridOrderStatus.CANCELLED
        return GridOrderStatus.ACTIVE

    def with_levels(self, levels: list[GridLevel] | tuple[GridLevel, ...]) -> GridOrder:
        return dataclasses.replace(self, levels=tuple(levels))

    @property
    def filled_levels(self) -> int:
        """Levels the bot has acted on (status other than IDLE)."""
        return sum(1 for level in self.levels if not level.is_idle)

    @property
    def progress_pct(self) -> float:
        if self.grid_levels <= 0:
            return 0.0
        return self.filled_levels / self.grid_levels * 100

    def level_counts(self) -> dict[GridLevelStatus, int]:
        counts = {status: 0 for status in GridLevelStatus}
        for level in self.levels:
            counts[level.status] += 1
        return counts

    @property
    def total_amount(self) -> int:
        return self.amount_per_level * self.grid_levels


@dataclass(frozen=True)
class GridStats:
    """Contract-wide grid counters."""

    total_grids: int = 0
    active_grids: int = 0
    cancelled_grids: int = 0
    bot_executions: int = 0


__all__ = [
    "GridLevel",
    "GridOrder",
    "GridStats",
    "build_grid_levels",
    "grid_level_prices",
]
