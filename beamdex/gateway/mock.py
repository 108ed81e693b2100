"""In-memory contract gateway for tests and offline screens.

Configure read results and call outcomes per (address, function), and
inspect ``calls`` afterwards to assert on what the client sent.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable
from dataclasses import dataclass, field

import structlog

from beamdex.errors import ChainRejectionError, GatewayError, OperationTimeoutError
from beamdex.gateway.base import OperationStatus
from beamdex.wallet import WalletContext

logger = structlog.get_logger()

ReadResult = bytes | Callable[[bytes], bytes]


@dataclass
class MockOperation:
    """A canned operation outcome.

    Attributes:
        id: Operation id
        final_status: FINAL_SUCCESS or FINAL_ERROR
        return_value: Bytes returned by the called function
        error: Error text for a failed operation
        events: Emitted event strings
        times_out: If True, wait_final_execution raises OperationTimeoutError
    """

    id: str = ""
    final_status: OperationStatus = OperationStatus.FINAL_SUCCESS
    return_value: bytes = b""
    error: str | None = None
    events: list[str] = field(default_factory=list)
    times_out: bool = False

    async def wait_speculative_execution(self) -> OperationStatus:
        if self.final_status is OperationStatus.FINAL_ERROR:
            return OperationStatus.SPECULATIVE_ERROR
        return OperationStatus.SPECULATIVE_SUCCESS

    async def wait_final_execution(self) -> OperationStatus:
        if self.times_out:
            raise OperationTimeoutError(self.id, 0)
        return self.final_status


CallHandler = Callable[[bytes], MockOperation]


@dataclass(frozen=True)
class RecordedCall:
    """One request seen by the mock gateway."""

    kind: str  # "read" or "call"
    address: str
    function: str
    args: bytes
    coins: int = 0
    max_gas: int = 0


class MockContractGateway:
    """Mock gateway for testing without a node.

    Reads and calls are looked up by (address, function) first, then by
    function alone, so tests that do not care about addresses can register
    ``set_read("getOrder", ...)``.
    """

    def __init__(self, wallet: WalletContext | None = None) -> None:
        self.wallet = wallet
        self.calls: list[RecordedCall] = []
        self._reads: dict[tuple[str | None, str], ReadResult] = {}
        self._read_errors: dict[tuple[str | None, str], str] = {}
        self._handlers: dict[tuple[str | None, str], CallHandler] = {}
        self._operation_ids = itertools.count(1)

    def set_read(self, function: str, result: ReadResult, address: str | None = None) -> None:
        """Register a read result (bytes, or a function of the argument buffer)."""
        self._reads[(address, function)] = result
        self._read_errors.pop((address, function), None)

    def set_read_error(self, function: str, message: str, address: str | None = None) -> None:
        """Make a read fail the way a contract assertion does."""
        self._read_errors[(address, function)] = message

    def on_call(self, function: str, handler: CallHandler, address: str | None = None) -> None:
        self._handlers[(address, function)] = handler

    def set_call_result(
        self,
        function: str,
        return_value: bytes = b"",
        events: list[str] | None = None,
        address: str | None = None,
    ) -> None:
        """Make a call succeed with the given return value."""
        self.on_call(
            function,
            lambda _args: MockOperation(return_value=return_value, events=list(events or [])),
            address,
        )

    def fail_call(self, function: str, message: str, address: str | None = None) -> None:
        """Make a call reach finality with an error."""
        self.on_call(
            function,
            lambda _args: MockOperation(final_status=OperationStatus.FINAL_ERROR, error=message),
            address,
        )

    def calls_to(self, function: str, kind: str | None = None) -> list[RecordedCall]:
        return [
            c for c in self.calls if c.function == function and (kind is None or c.kind == kind)
        ]

    def _lookup(self, table: dict, address: str, function: str):
        if (address, function) in table:
            return table[(address, function)]
        return table.get((None, function))

    async def read(self, address: str, function: str, args: bytes = b"") -> bytes:
        self.calls.append(RecordedCall("read", address, function, bytes(args)))

        error = self._lookup(self._read_errors, address, function)
        if error is not None:
            raise ChainRejectionError(error, function=function)

        result = self._lookup(self._reads, address, function)
        if result is None:
            raise GatewayError(f"No mock read configured for {function} at {address}")
        return result(bytes(args)) if callable(result) else result

    async def call(
        self,
        address: str,
        function: str,
        args: bytes,
        coins: int,
        max_gas: int,
    ) -> MockOperation:
        if self.wallet is not None:
            self.wallet.require_account()
        self.calls.append(RecordedCall("call", address, function, bytes(args), coins, max_gas))

        handler = self._lookup(self._handlers, address, function)
        operation = handler(bytes(args)) if handler is not None else MockOperation()
        if not operation.id:
            operation.id = f"op-{next(self._operation_ids)}"
        logger.debug("mock_operation_submitted", operation_id=operation.id, function=function)
        return operation


__all__ = ["MockContractGateway", "MockOperation", "RecordedCall"]
