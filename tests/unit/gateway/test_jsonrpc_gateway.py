"""Tests for the JSON-RPC contract gateway."""

import asyncio
import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from beamdex.errors import (
    ChainRejectionError,
    GatewayError,
    OperationTimeoutError,
    WalletNotConnectedError,
)
from beamdex.gateway import JsonRpcGateway, OperationStatus, operation_status_from_info
from beamdex.wallet import WalletContext
from tests.helpers import LIMIT_MANAGER, TEST_CONFIG, USER, FakeAccount

Handler = Callable[[str, list[Any]], Any]


def rpc_transport(handler: Handler, seen: list[dict] | None = None) -> httpx.MockTransport:
    """MockTransport answering JSON-RPC requests with handler(method, params)."""

    def respond(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        if seen is not None:
            seen.append(body)
        result = handler(body["method"], body["params"])
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": body["id"], "result": result})

    return httpx.MockTransport(respond)


def run_with_gateway(handler: Handler, test, wallet: WalletContext | None = None, seen=None):
    """Build a gateway on a mock transport and run test(gateway) to completion."""

    async def main():
        client = httpx.AsyncClient(transport=rpc_transport(handler, seen))
        gateway = JsonRpcGateway(
            TEST_CONFIG,
            wallet or WalletContext(FakeAccount()),
            client=client,
            status_poll_interval=0.001,
        )
        try:
            return await test(gateway)
        finally:
            await gateway.aclose()

    return asyncio.run(main())


class TestOperationStatusMapping:
    """get_operations entries map onto OperationStatus."""

    def test_missing(self):
        assert operation_status_from_info(None) is OperationStatus.NOT_FOUND

    def test_pending(self):
        info = {"op_exec_status": None, "in_pool": True, "in_blocks": []}
        assert operation_status_from_info(info) is OperationStatus.PENDING

    def test_unknown_operation(self):
        info = {"op_exec_status": None, "in_pool": False, "in_blocks": []}
        assert operation_status_from_info(info) is OperationStatus.NOT_FOUND

    def test_speculative(self):
        assert (
            operation_status_from_info({"op_exec_status": True, "is_operation_final": False})
            is OperationStatus.SPECULATIVE_SUCCESS
        )
        assert (
            operation_status_from_info({"op_exec_status": False, "is_operation_final": False})
            is OperationStatus.SPECULATIVE_ERROR
        )

    def test_final(self):
        assert (
            operation_status_from_info({"op_exec_status": True, "is_operation_final": True})
            is OperationStatus.FINAL_SUCCESS
        )
        assert (
            operation_status_from_info({"op_exec_status": False, "is_operation_final": True})
            is OperationStatus.FINAL_ERROR
        )

    def test_status_properties(self):
        assert OperationStatus.FINAL_ERROR.is_final
        assert OperationStatus.FINAL_ERROR.is_error
        assert OperationStatus.SPECULATIVE_SUCCESS.is_executed
        assert not OperationStatus.SPECULATIVE_SUCCESS.is_final
        assert not OperationStatus.PENDING.is_executed


class TestRead:
    """execute_read_only_call."""

    def test_ok_result(self):
        seen: list[dict] = []

        def handler(method, params):
            return [{"result": {"Ok": [1, 2, 3]}}]

        result = run_with_gateway(
            handler,
            lambda gateway: gateway.read(LIMIT_MANAGER, "getOrder", b"\x07"),
            seen=seen,
        )

        assert result == b"\x01\x02\x03"
        request = seen[0]
        assert request["method"] == "execute_read_only_call"
        call = request["params"][0][0]
        assert call["target_address"] == LIMIT_MANAGER
        assert call["target_function"] == "getOrder"
        assert call["parameter"] == [7]
        assert call["caller_address"] == USER

    def test_contract_error(self):
        """A failed assertion surfaces as a chain rejection with its code."""

        def handler(method, params):
            return [{"result": {"Error": "Runtime error: ORDER_NOT_FOUND at getOrder"}}]

        with pytest.raises(ChainRejectionError) as exc_info:
            run_with_gateway(handler, lambda gateway: gateway.read(LIMIT_MANAGER, "getOrder"))

        assert exc_info.value.reason == "ORDER_NOT_FOUND"
        assert exc_info.value.function == "getOrder"

    def test_rpc_error(self):
        def handler(method, params):
            return httpx.Response(
                200, json={"jsonrpc": "2.0", "id": 1, "error": {"code": -32000, "message": "busy"}}
            )

        with pytest.raises(GatewayError, match="busy"):
            run_with_gateway(handler, lambda gateway: gateway.read(LIMIT_MANAGER, "getOrder"))

    def test_http_error(self):
        def handler(method, params):
            return httpx.Response(503, text="unavailable")

        with pytest.raises(GatewayError):
            run_with_gateway(handler, lambda gateway: gateway.read(LIMIT_MANAGER, "getOrder"))

    def test_transport_error(self):
        def handler(method, params):
            raise httpx.ConnectError("connection refused")

        with pytest.raises(GatewayError):
            run_with_gateway(handler, lambda gateway: gateway.read(LIMIT_MANAGER, "getOrder"))

    def test_invalid_json(self):
        def handler(method, params):
            return httpx.Response(200, text="not json")

        with pytest.raises(GatewayError):
            run_with_gateway(handler, lambda gateway: gateway.read(LIMIT_MANAGER, "getOrder"))

    def test_chain_rejection_is_not_a_gateway_error(self):
        """Contract rejections and transport failures stay distinguishable."""
        assert not issubclass(ChainRejectionError, GatewayError)


class TestCall:
    """State-changing calls and finality polling."""

    def test_requires_wallet(self):
        def handler(method, params):
            raise AssertionError("no request expected")

        with pytest.raises(WalletNotConnectedError):
            run_with_gateway(
                handler,
                lambda gateway: gateway.call(LIMIT_MANAGER, "cancelLimitOrder", b"", 0, 1),
                wallet=WalletContext(),
            )

    def test_submits_through_wallet_and_waits_for_final(self):
        account = FakeAccount()
        statuses = iter(
            [
                {"op_exec_status": None, "in_pool": True},
                {"op_exec_status": True, "is_operation_final": False},
                {"op_exec_status": True, "is_operation_final": True},
            ]
        )

        def handler(method, params):
            if method == "get_operations":
                return [next(statuses)]
            if method == "get_filtered_sc_output_event":
                return [{"data": "LimitOrderCreated:7", "context": {"is_error": False}}]
            raise AssertionError(method)

        async def test(gateway):
            handle = await gateway.call(LIMIT_MANAGER, "createLimitOrder", b"\x01", 100, 200)
            status = await handle.wait_final_execution()
            return handle, status

        handle, status = run_with_gateway(handler, test, wallet=WalletContext(account))

        assert status is OperationStatus.FINAL_SUCCESS
        assert handle.id == "op-1"
        assert handle.events == ["LimitOrderCreated:7"]
        assert handle.error is None
        assert account.submitted == [(LIMIT_MANAGER, "createLimitOrder", b"\x01", 100, 200)]

    def test_speculative_wait(self):
        def handler(method, params):
            if method == "get_operations":
                return [{"op_exec_status": True, "is_operation_final": False}]
            return []

        async def test(gateway):
            handle = await gateway.call(LIMIT_MANAGER, "cancelLimitOrder", b"", 0, 1)
            return await handle.wait_speculative_execution()

        assert run_with_gateway(handler, test) is OperationStatus.SPECULATIVE_SUCCESS

    def test_final_error_carries_error_event(self):
        def handler(method, params):
            if method == "get_operations":
                return [{"op_exec_status": False, "is_operation_final": True}]
            return [
                {"data": "started", "context": {"is_error": False}},
                {"data": "NOT_ORDER_OWNER", "context": {"is_error": True}},
            ]

        async def test(gateway):
            handle = await gateway.call(LIMIT_MANAGER, "cancelLimitOrder", b"", 0, 1)
            status = await handle.wait_final_execution()
            return handle, status

        handle, status = run_with_gateway(handler, test)

        assert status is OperationStatus.FINAL_ERROR
        assert handle.error == "NOT_ORDER_OWNER"

    def test_timeout(self):
        """An operation that never finalizes raises after operation_timeout."""

        def handler(method, params):
            return [{"op_exec_status": None, "in_pool": True}]

        async def test(gateway):
            handle = await gateway.call(LIMIT_MANAGER, "cancelLimitOrder", b"", 0, 1)
            await handle.wait_final_execution()

        with pytest.raises(OperationTimeoutError) as exc_info:
            run_with_gateway(handler, test)
        assert exc_info.value.operation_id == "op-1"


class TestPeriod:
    """get_status."""

    def test_period(self):
        def handler(method, params):
            assert method == "get_status"
            return {"last_slot": {"period": 1234, "thread": 5}}

        assert run_with_gateway(handler, lambda gateway: gateway.get_period()) == 1234

    def test_missing_slot(self):
        def handler(method, params):
            return {}

        with pytest.raises(GatewayError):
            run_with_gateway(handler, lambda gateway: gateway.get_period())
