"""Order enums shared by the limit, recurring and grid order models."""

from enum import Enum, IntEnum


class OrderType(IntEnum):
    """Limit order side as encoded on-chain (u256 0 / 1)."""

    BUY = 0
    SELL = 1


class LimitOrderStatus(str, Enum):
    PENDING = "PENDING"
    FILLED = "FILLED"
    CANCELLED = "CANCELLED"
    EXPIRED = "EXPIRED"


class RecurringOrderStatus(str, Enum):
    ACTIVE = "ACTIVE"
    COMPLETE = "COMPLETE"
    CANCELLED = "CANCELLED"


class GridOrderStatus(str, Enum):
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"


class GridLevelStatus(IntEnum):
    """Per-level state written by the grid bot (u8 on-chain)."""

    IDLE = 0
    BUY_PENDING = 1
    SELL_PENDING = 2


__all__ = [
    "OrderType",
    "LimitOrderStatus",
    "RecurringOrderStatus",
    "GridOrderStatus",
    "GridLevelStatus",
]
