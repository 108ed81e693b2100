"""Order models for limit, recurring (DCA) and grid strategies."""

from beamdex.orders.grid import (
    GridLevel,
    GridOrder,
    GridStats,
    build_grid_levels,
    grid_level_prices,
)
from beamdex.orders.limit import LimitOrder, LimitOrderStats, expected_limit_output
from beamdex.orders.recurring import OrderProgress, RecurringOrder
from beamdex.orders.types import (
    GridLevelStatus,
    GridOrderStatus,
    LimitOrderStatus,
    OrderType,
    RecurringOrderStatus,
)
from beamdex.orders.validation import GridOrderRequest, LimitOrderRequest, RecurringOrderRequest

__all__ = [
    "GridLevel",
    "GridLevelStatus",
    "GridOrder",
    "GridOrderRequest",
    "GridOrderStatus",
    "GridStats",
    "LimitOrder",
    "LimitOrderRequest",
    "LimitOrderStats",
    "LimitOrderStatus",
    "OrderProgress",
    "OrderType",
    "RecurringOrder",
    "RecurringOrderRequest",
    "RecurringOrderStatus",
    "build_grid_levels",
    "expected_limit_output",
    "grid_level_prices",
]
