"""Tests for the recurring (DCA) order manager adapter."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from beamdex.codec import schemas
from beamdex.codec.schemas import encode_value
from beamdex.config import NANO_MAS
from beamdex.errors import ChainRejectionError, CodecError, WalletNotConnectedError
from beamdex.managers import RecurringOrderManager
from beamdex.orders import RecurringOrderRequest, RecurringOrderStatus
from beamdex.wallet import WalletContext
from tests.helpers import (
    MAS,
    RECURRING_MANAGER,
    USDC,
    USER,
    WMAS,
    encode_recurring_order,
    encode_recurring_orders,
    make_recurring_order,
)

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


def dca_request(**overrides) -> RecurringOrderRequest:
    fields = {
        "token_in": USDC,
        "token_out": WMAS,
        "amount_per_execution": 100,
        "interval_periods": 10,
        "total_executions": 5,
    }
    fields.update(overrides)
    return RecurringOrderRequest(**fields)


def progress_bytes(executed: int, total: int, active: bool, complete: bool) -> bytes:
    return schemas.ORDER_PROGRESS.encode(
        executed_count=executed, total_executions=total, is_active=active, is_complete=complete
    )


@pytest.fixture
def manager(beamdex_client) -> RecurringOrderManager:
    return beamdex_client.recurring_orders


class TestCreateRecurringOrder:
    def test_escrows_every_execution(self, gateway, manager):
        """The approval covers amount_per_execution * total_executions."""
        gateway.set_read("allowance", encode_value("u256", 0))
        gateway.set_call_result("createRecurringOrder", events=[f"RecurringOrder:Created:3:{USER}"])

        order_id = asyncio.run(manager.create_recurring_order(dca_request()))

        assert order_id == 3
        approval = gateway.calls_to("increaseAllowance")[0]
        assert schemas.INCREASE_ALLOWANCE.decode(approval.args) == {
            "spender": RECURRING_MANAGER,
            "amount": 500,
        }
        create = gateway.calls_to("createRecurringOrder")[0]
        assert create.address == RECURRING_MANAGER
        assert schemas.CREATE_RECURRING_ORDER.decode(create.args) == {
            "token_in": USDC,
            "token_out": WMAS,
            "amount_per_execution": 100,
            "interval_periods": 10,
            "total_executions": 5,
        }

    def test_native_mas(self, gateway, manager):
        gateway.set_call_result("createRecurringOrder", events=["RecurringOrder:Created:4"])

        asyncio.run(manager.create_recurring_order(dca_request(token_in=MAS, token_out=USDC)))

        create = gateway.calls_to("createRecurringOrder")[0]
        assert create.coins == NANO_MAS // 10 + 500
        assert gateway.calls_to("allowance") == []

    def test_interval_wider_than_u64_leaves_allowance_untouched(self, gateway, manager):
        with pytest.raises(CodecError):
            asyncio.run(manager.create_recurring_order(dca_request(interval_periods=2**64)))
        assert gateway.calls == []

    def test_requires_wallet(self, gateway, config):
        manager = RecurringOrderManager(gateway, WalletContext(), config)

        with pytest.raises(WalletNotConnectedError):
            asyncio.run(manager.create_recurring_order(dca_request()))

    def test_cancel(self, gateway, manager):
        operation_id = asyncio.run(manager.cancel_recurring_order(3))

        call = gateway.calls_to("cancelRecurringOrder")[0]
        assert operation_id == "op-1"
        assert schemas.CANCEL_RECURRING_ORDER.decode(call.args) == {"order_id": 3}

    def test_cancel_rejected(self, gateway, manager):
        gateway.fail_call("cancelRecurringOrder", "ORDER_NOT_ACTIVE")

        with pytest.raises(ChainRejectionError) as exc_info:
            asyncio.run(manager.cancel_recurring_order(3))
        assert exc_info.value.reason == "ORDER_NOT_ACTIVE"


class TestRecurringOrderReads:
    def test_get_recurring_order(self, gateway, manager):
        order = make_recurring_order(order_id=3, executed_count=2)
        gateway.set_read("getRecurringOrder", encode_recurring_order(order))

        result = asyncio.run(manager.get_recurring_order(3))

        assert result == order
        assert result.status() is RecurringOrderStatus.ACTIVE

    def test_get_user_orders(self, gateway, manager):
        orders = [make_recurring_order(order_id=1), make_recurring_order(order_id=2, active=False)]
        gateway.set_read("getUserOrders", encode_recurring_orders(orders))

        result = asyncio.run(manager.get_user_orders())

        assert [o.status() for o in result] == [
            RecurringOrderStatus.ACTIVE,
            RecurringOrderStatus.CANCELLED,
        ]

    def test_active_count(self, gateway, manager):
        gateway.set_read("getActiveOrdersCount", encode_value("u64", 8))

        assert asyncio.run(manager.get_active_orders_count()) == 8


class TestOrderProgress:
    """getOrderProgress combined with the order's schedule."""

    def test_running_order(self, gateway, manager):
        gateway.set_read("getOrderProgress", progress_bytes(2, 5, True, False))
        gateway.set_read(
            "getRecurringOrder",
            encode_recurring_order(make_recurring_order(executed_count=2)),
        )

        progress = asyncio.run(manager.get_order_progress(1, now=NOW))

        assert progress.executed_count == 2
        assert progress.total_executions == 5
        assert progress.progress_pct == 40.0
        assert progress.next_execution_period == 1010
        # 3 remaining executions * 10 periods * 16 seconds
        assert progress.estimated_completion == NOW + timedelta(seconds=480)

    def test_completed_order(self, gateway, manager):
        gateway.set_read("getOrderProgress", progress_bytes(5, 5, False, True))
        gateway.set_read(
            "getRecurringOrder",
            encode_recurring_order(make_recurring_order(executed_count=5, active=False)),
        )

        progress = asyncio.run(manager.get_order_progress(1, now=NOW))

        assert progress.is_complete
        assert progress.next_execution_period is None
        assert progress.estimated_completion is None
