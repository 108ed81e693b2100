"""Contract gateway over the node's JSON-RPC API.

Reads go through ``execute_read_only_call``. State-changing calls are signed
and submitted by the connected wallet account; the gateway then polls
``get_operations`` for the operation's status and, once it has executed,
``get_filtered_sc_output_event`` for the events it emitted.
"""

from __future__ import annotations

import asyncio
import itertools
import time
from typing import Any

import httpx
import structlog

from beamdex.config import ClientConfig
from beamdex.errors import ChainRejectionError, GatewayError, OperationTimeoutError
from beamdex.gateway.base import OperationStatus
from beamdex.wallet import WalletContext

logger = structlog.get_logger()

# Seconds between operation status polls
DEFAULT_STATUS_POLL_INTERVAL = 1.0


def operation_status_from_info(info: dict[str, Any] | None) -> OperationStatus:
    """Map a ``get_operations`` entry to an OperationStatus.

    ``op_exec_status`` is null until the operation executes, then true or
    false; ``is_operation_final`` tells whether that outcome is final.
    """
    if info is None:
        return OperationStatus.NOT_FOUND
    executed = info.get("op_exec_status")
    final = bool(info.get("is_operation_final"))
    if executed is None:
        if info.get("in_pool") or info.get("in_blocks"):
            return OperationStatus.PENDING
        return OperationStatus.NOT_FOUND
    if final:
        return OperationStatus.FINAL_SUCCESS if executed else OperationStatus.FINAL_ERROR
    return OperationStatus.SPECULATIVE_SUCCESS if executed else OperationStatus.SPECULATIVE_ERROR


class JsonRpcOperation:
    """Handle for an operation submitted through JsonRpcGateway."""

    def __init__(
        self,
        gateway: JsonRpcGateway,
        operation_id: str,
        function: str,
        timeout: float,
        poll_interval: float,
    ) -> None:
        self.id = operation_id
        self.function = function
        self.return_value = b""
        self.error: str | None = None
        self.events: list[str] = []
        self.status = OperationStatus.PENDING
        self._gateway = gateway
        self._timeout = timeout
        self._poll_interval = poll_interval

    async def _wait_until(self, final: bool) -> OperationStatus:
        deadline = time.monotonic() + self._timeout
        while True:
            status = await self._gateway.get_operation_status(self.id)
            self.status = status
            done = status.is_final if final else status.is_executed
            if done:
                await self._load_events()
                return status
            if time.monotonic() >= deadline:
                logger.warning(
                    "operation_wait_timeout",
                    operation_id=self.id,
                    function=self.function,
                    status=status.value,
                    timeout=self._timeout,
                )
                raise OperationTimeoutError(self.id, self._timeout)
            await asyncio.sleep(self._poll_interval)

    async def _load_events(self) -> None:
        raw_events = await self._gateway.get_events(self.id)
        self.events = [str(event.get("data", "")) for event in raw_events]
        if self.status.is_error:
            errors = [
                str(event.get("data", ""))
                for event in raw_events
                if event.get("context", {}).get("is_error")
            ]
            self.error = errors[-1] if errors else f"Operation {self.id} failed"

    async def wait_speculative_execution(self) -> OperationStatus:
        return await self._wait_until(final=False)

    async def wait_final_execution(self) -> OperationStatus:
        status = await self._wait_until(final=True)
        logger.info(
            "operation_final",
            operation_id=self.id,
            function=self.function,
            status=status.value,
        )
        return status


class JsonRpcGateway:
    """ContractGateway backed by a node's JSON-RPC endpoint.

    Attributes:
        config: Client configuration (RPC URL, read gas, wait timeout)
        wallet: Wallet context used to sign state-changing calls
    """

    def __init__(
        self,
        config: ClientConfig,
        wallet: WalletContext,
        client: httpx.AsyncClient | None = None,
        status_poll_interval: float = DEFAULT_STATUS_POLL_INTERVAL,
    ) -> None:
        self.config = config
        self.wallet = wallet
        self._client = client or httpx.AsyncClient(timeout=30.0)
        self._status_poll_interval = status_poll_interval
        self._request_ids = itertools.count(1)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _rpc(self, method: str, params: list[Any]) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._request_ids),
            "method": method,
            "params": params,
        }
        try:
            response = await self._client.post(self.config.rpc_url, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as e:
            logger.warning("gateway_request_failed", method=method, error=str(e))
            raise GatewayError(f"{method} failed: {e}") from e
        except ValueError as e:
            logger.warning("gateway_invalid_response", method=method, error=str(e))
            raise GatewayError(f"{method} returned invalid JSON") from e

        if body.get("error"):
            error = body["error"]
            message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
            logger.warning("gateway_rpc_error", method=method, error=message)
            raise GatewayError(f"{method}: {message}")
        return body.get("result")

    async def read(self, address: str, function: str, args: bytes = b"") -> bytes:
        request = {
            "max_gas": self.config.read_max_gas,
            "target_address": address,
            "target_function": function,
            "parameter": list(args),
            "caller_address": self.wallet.address,
            "coins": None,
            "fee": None,
        }
        result = await self._rpc("execute_read_only_call", [[request]])
        if not result:
            raise GatewayError(f"{function}: empty read-only call response")

        outcome = result[0].get("result", {})
        if "Error" in outcome:
            logger.warning(
                "gateway_read_failed",
                address=address,
                function=function,
                error=outcome["Error"],
            )
            raise ChainRejectionError(str(outcome["Error"]), function=function)
        if "Ok" not in outcome:
            raise GatewayError(f"{function}: malformed read-only call result")
        return bytes(outcome["Ok"])

    async def call(
        self,
        address: str,
        function: str,
        args: bytes,
        coins: int,
        max_gas: int,
    ) -> JsonRpcOperation:
        account = self.wallet.require_account()
        operation_id = await account.call_sc(address, function, args, coins, max_gas)
        logger.info(
            "operation_submitted",
            operation_id=operation_id,
            address=address,
            function=function,
            coins=coins,
            max_gas=max_gas,
        )
        return JsonRpcOperation(
            self,
            operation_id,
            function,
            timeout=self.config.operation_timeout,
            poll_interval=self._status_poll_interval,
        )

    async def get_operation_status(self, operation_id: str) -> OperationStatus:
        result = await self._rpc("get_operations", [[operation_id]])
        info = result[0] if result else None
        return operation_status_from_info(info)

    async def get_events(self, operation_id: str) -> list[dict[str, Any]]:
        event_filter = {
            "start": None,
            "end": None,
            "emitter_address": None,
            "original_caller_address": None,
            "original_operation_id": operation_id,
            "is_final": None,
            "is_error": None,
        }
        return await self._rpc("get_filtered_sc_output_event", [event_filter]) or []

    async def get_period(self) -> int:
        """Current chain period, for recurring order schedules."""
        status = await self._rpc("get_status", [])
        try:
            return int(status["last_slot"]["period"])
        except (KeyError, TypeError, ValueError) as e:
            raise GatewayError("get_status returned no last_slot") from e


__all__ = ["JsonRpcGateway", "JsonRpcOperation", "operation_status_from_info"]
