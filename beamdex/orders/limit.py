"""Limit order model.

Status is derived from the record's canonical fields each time it is
asked for; no separately stored status can drift from the flags.
"""

from __future__ import annotations

import time
from dataclasses import dataclass

from beamdex.constants import Q96
from beamdex.errors import OrderValidationError
from beamdex.orders.types import LimitOrderStatus, OrderType


def expected_limit_output(amount_in: int, limit_price_x96: int, order_type: OrderType) -> int:
    """Output a limit order receives when filled at its limit price, before fees.

    Mirrors the quote direction logic with the fixed limit price:
    SELL receives amount_in * price, BUY receives amount_in / price.

    Args:
        amount_in: Input amount in token units
        limit_price_x96: Limit price as Q64.96 (tokenOut per tokenIn for SELL)
        order_type: BUY or SELL

    Returns:
        Expected output amount, floored

    Raises:
        OrderValidationError: If limit_price_x96 is not positive
    """
    if limit_price_x96 <= 0:
        raise OrderValidationError("limit_price", "Limit price must be greater than zero")
    if OrderType(order_type) is OrderType.SELL:
        return amount_in * limit_price_x96 // Q96
    return amount_in * Q96 // limit_price_x96


@dataclass(frozen=True)
class LimitOrder:
    """A limit order as stored by the limit order manager contract.

    Attributes:
        order_id: Sequential id assigned by the contract
        owner: Creator address
        token_in: Token sold (or NATIVE_MAS)
        token_out: Token bought
        amount_in: Input amount in token units
        min_amount_out: Minimum acceptable output
        limit_price: Q64.96 limit price
        order_type: BUY or SELL
        expiry: Lifetime in seconds from created_at (0 = never expires)
        filled: Set by the bot once executed
        cancelled: Set when the owner cancels
        created_at: Creation timestamp in seconds
    """

    order_id: int
    owner: str
    token_in: str
    token_out: str
    amount_in: int
    min_amount_out: int
    limit_price: int
    order_type: OrderType
    expiry: int
    filled: bool
    cancelled: bool
    created_at: int

    def __post_init__(self) -> None:
        """Coerce the raw on-chain side into OrderType."""
        object.__setattr__(self, "order_type", OrderType(self.order_type))

    @property
    def expires_at(self) -> int | None:
        """Expiry timestamp in seconds, None for orders that never expire."""
        if self.expiry == 0:
            return None
        return self.created_at + self.expiry

    def is_expired(self, now: int | None = None) -> bool:
        expires_at = self.expires_at
        if expires_at is None:
            return False
        current = int(time.time()) if now is None else now
        return current >= expires_at

    def status(self, now: int | None = None) -> LimitOrderStatus:
        """Derive the order status.

        Filled and cancelled are checked before expiry, so an order that was
        filled (or cancelled) keeps that status after its expiry passes.
        """
        if self.filled:
            return LimitOrderStatus.FILLED
        if self.cancelled:
            return LimitOrderStatus.CANCELLED
        if self.is_expired(now):
            return LimitOrderStatus.EXPIRED
        return LimitOrderStatus.PENDING

    def is_terminal(self, now: int | None = None) -> bool:
        return self.status(now) is not LimitOrderStatus.PENDING

    @property
    def expected_output(self) -> int:
        return expected_limit_output(self.amount_in, self.limit_price, self.order_type)


@dataclass(frozen=True)
class LimitOrderStats:
    """Contract-wide counters plus per-user derived counts."""

    total_orders: int = 0
    pending_orders: int = 0
    filled_orders: int = 0
    cancelled_orders: int = 0
    expired_orders: int = 0


__all__ = ["LimitOrder", "LimitOrderStats", "expected_limit_output"]
