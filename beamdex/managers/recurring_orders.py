"""Recurring (DCA) order manager adapter."""

from __future__ import annotations

from datetime import datetime

import structlog

from beamdex.codec import schemas
from beamdex.managers.base import created_id
from beamdex.managers.escrow import OrderManager
from beamdex.orders.recurring import OrderProgress, RecurringOrder
from beamdex.orders.validation import RecurringOrderRequest

logger = structlog.get_logger()

CREATED_EVENT = "RecurringOrder:Created:"


class RecurringOrderManager(OrderManager):
    contract_name = "recurring order manager"
    address_setting = "recurring_order_manager"

    async def create_recurring_order(self, request: RecurringOrderRequest) -> int:
        """Create a DCA order and return its id.

        The contract escrows amount_per_execution * total_executions up front.
        """
        owner = self.wallet.require_address()
        args = schemas.CREATE_RECURRING_ORDER.encode(
            token_in=request.token_in,
            token_out=request.token_out,
            amount_per_execution=request.amount_per_execution,
            interval_periods=request.interval_periods,
            total_executions=request.total_executions,
        )
        extra_coins = await self._prepare_deposit(request.token_in, request.total_amount)
        handle = await self._execute("createRecurringOrder", args, extra_coins=extra_coins)
        order_id = created_id(handle, CREATED_EVENT)
        logger.info(
            "recurring_order_created",
            order_id=order_id,
            owner=owner,
            token_in=request.token_in,
            token_out=request.token_out,
            interval_periods=request.interval_periods,
            total_executions=request.total_executions,
            operation_id=handle.id,
        )
        return order_id

    async def cancel_recurring_order(self, order_id: int) -> str:
        self.wallet.require_account()
        handle = await self._execute(
            "cancelRecurringOrder", schemas.CANCEL_RECURRING_ORDER.encode(order_id=order_id)
        )
        logger.info("recurring_order_cancelled", order_id=order_id, operation_id=handle.id)
        return handle.id

    async def get_recurring_order(self, order_id: int) -> RecurringOrder:
        result = await self._read(
            "getRecurringOrder", schemas.GET_RECURRING_ORDER.encode(order_id=order_id)
        )
        return RecurringOrder(**schemas.RECURRING_ORDER.decode(result))

    async def get_order_progress(self, order_id: int, now: datetime | None = None) -> OrderProgress:
        """Execution progress with the next period and a completion estimate.

        Reads getOrderProgress, then the order itself for its schedule.
        """
        progress = schemas.ORDER_PROGRESS.decode(
            await self._read("getOrderProgress", schemas.GET_ORDER_PROGRESS.encode(order_id=order_id))
        )
        order = await self.get_recurring_order(order_id)

        running = progress["is_active"] and not progress["is_complete"]
        return OrderProgress(
            **progress,
            next_execution_period=order.next_execution_period if running else None,
            estimated_completion=(
                order.estimated_completion(now, self.config.seconds_per_period) if running else None
            ),
        )

    async def get_user_orders(self, user: str | None = None, limit: int = 100) -> list[RecurringOrder]:
        args = schemas.GET_USER_ORDERS.encode(user=self._owner(user), limit=limit)
        records = await self._read_records("getUserOrders", args, schemas.RECURRING_ORDER)
        return [RecurringOrder(**record) for record in records]

    async def get_orders_by_token_pair(
        self, token_in: str, token_out: str, limit: int = 100
    ) -> list[RecurringOrder]:
        args = schemas.GET_ORDERS_BY_TOKEN_PAIR.encode(
            token_in=token_in, token_out=token_out, limit=limit
        )
        records = await self._read_records("getOrdersByTokenPair", args, schemas.RECURRING_ORDER)
        return [RecurringOrder(**record) for record in records]

    async def get_active_orders_count(self) -> int:
        return await self._read_value("getActiveOrdersCount", "u64")

    async def get_bot_execution_count(self) -> int:
        return await self._read_value("getBotExecutionCount", "u64")


__all__ = ["RecurringOrderManager"]
