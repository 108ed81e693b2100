"""Limit order manager adapter."""

from __future__ import annotations

import time

import structlog

from beamdex.codec import schemas
from beamdex.managers.base import created_id
from beamdex.managers.escrow import OrderManager
from beamdex.orders.limit import LimitOrder, LimitOrderStats
from beamdex.orders.types import LimitOrderStatus
from beamdex.orders.validation import LimitOrderRequest

logger = structlog.get_logger()

CREATED_EVENT = "LimitOrderCreated:"

# Orders fetched per user when deriving stats
STATS_ORDER_LIMIT = 1000


class LimitOrderManager(OrderManager):
    contract_name = "limit order manager"
    address_setting = "limit_order_manager"

    async def create_limit_order(self, request: LimitOrderRequest) -> int:
        """Create a limit order and return its id.

        Arguments are encoded first, so a request the codec rejects never
        touches the allowance. Then, strictly in sequence: allowance check,
        approval if short, createLimitOrder and the wait for finality.

        Raises:
            WalletNotConnectedError: If no wallet is connected
            CodecError: If a field does not fit its on-chain width
            ChainRejectionError: If the approval or the creation is rejected
        """
        owner = self.wallet.require_address()
        args = schemas.CREATE_LIMIT_ORDER.encode(
            token_in=request.token_in,
            token_out=request.token_out,
            amount_in=request.amount_in,
            min_amount_out=request.effective_min_amount_out,
            limit_price=request.limit_price_x96,
            order_type=int(request.order_type),
            expiry=request.expiry,
        )
        extra_coins = await self._prepare_deposit(request.token_in, request.amount_in)
        handle = await self._execute("createLimitOrder", args, extra_coins=extra_coins)
        order_id = created_id(handle, CREATED_EVENT)
        logger.info(
            "limit_order_created",
            order_id=order_id,
            owner=owner,
            token_in=request.token_in,
            token_out=request.token_out,
            amount_in=str(request.amount_in),
            order_type=request.order_type.name,
            operation_id=handle.id,
        )
        return order_id

    async def cancel_limit_order(self, order_id: int) -> str:
        """Cancel an order; the contract refunds the escrowed input."""
        self.wallet.require_account()
        handle = await self._execute(
            "cancelLimitOrder", schemas.CANCEL_LIMIT_ORDER.encode(order_id=order_id)
        )
        logger.info("limit_order_cancelled", order_id=order_id, operation_id=handle.id)
        return handle.id

    async def get_limit_order(self, order_id: int) -> LimitOrder:
        result = await self._read("getOrder", schemas.GET_LIMIT_ORDER.encode(order_id=order_id))
        return LimitOrder(**schemas.LIMIT_ORDER.decode(result))

    async def get_user_orders(self, user: str | None = None, limit: int = 100) -> list[LimitOrder]:
        args = schemas.GET_USER_ORDERS.encode(user=self._owner(user), limit=limit)
        records = await self._read_records("getUserOrders", args, schemas.LIMIT_ORDER)
        return [LimitOrder(**record) for record in records]

    async def get_orders_by_token_pair(
        self, token_in: str, token_out: str, limit: int = 100
    ) -> list[LimitOrder]:
        args = schemas.GET_ORDERS_BY_TOKEN_PAIR.encode(
            token_in=token_in, token_out=token_out, limit=limit
        )
        records = await self._read_records("getOrdersByTokenPair", args, schemas.LIMIT_ORDER)
        return [LimitOrder(**record) for record in records]

    async def get_pending_orders_count(self) -> int:
        return await self._read_value("getPendingOrdersCount", "u64")

    async def get_bot_execution_count(self) -> int:
        return await self._read_value("getBotExecutionCount", "u64")

    async def get_total_order_count(self) -> int:
        return await self._read_value("getOrderCount", "u256")

    async def get_order_stats(self, now: int | None = None) -> LimitOrderStats:
        """Contract totals plus filled / cancelled / expired counts over the user's orders.

        The per-status counts cover the connected wallet's orders only and
        are zero when no wallet is connected.
        """
        total = await self.get_total_order_count()
        pending = await self.get_pending_orders_count()
        if not self.wallet.is_connected:
            return LimitOrderStats(total_orders=total, pending_orders=pending)

        current = int(time.time()) if now is None else now
        orders = await self.get_user_orders(limit=STATS_ORDER_LIMIT)
        statuses = [order.status(current) for order in orders]
        return LimitOrderStats(
            total_orders=total,
            pending_orders=pending,
            filled_orders=statuses.count(LimitOrderStatus.FILLED),
            cancelled_orders=statuses.count(LimitOrderStatus.CANCELLED),
            expired_orders=statuses.count(LimitOrderStatus.EXPIRED),
        )


__all__ = ["LimitOrderManager"]
