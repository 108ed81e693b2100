"""Contract gateway interface.

The client core reaches the chain only through this protocol: read-only
calls that return a result buffer, and state-changing calls that return an
operation handle. A handle's speculative status is provisional; callers
trust a result only after ``wait_final_execution``.
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol


class OperationStatus(str, Enum):
    """Execution status of a submitted operation."""

    NOT_FOUND = "not_found"
    PENDING = "pending"
    SPECULATIVE_SUCCESS = "speculative_success"
    SPECULATIVE_ERROR = "speculative_error"
    FINAL_SUCCESS = "final_success"
    FINAL_ERROR = "final_error"

    @property
    def is_final(self) -> bool:
        return self in (OperationStatus.FINAL_SUCCESS, OperationStatus.FINAL_ERROR)

    @property
    def is_executed(self) -> bool:
        """True once the operation has at least a speculative outcome."""
        return self not in (OperationStatus.NOT_FOUND, OperationStatus.PENDING)

    @property
    def is_error(self) -> bool:
        return self in (OperationStatus.SPECULATIVE_ERROR, OperationStatus.FINAL_ERROR)


class OperationHandle(Protocol):
    """A submitted state-changing call.

    Attributes:
        id: Operation id assigned on submission
        return_value: Bytes returned by the called function (empty if unknown)
        error: Error text once the operation failed, None otherwise
        events: Event strings emitted during execution
    """

    id: str
    return_value: bytes
    error: str | None
    events: list[str]

    async def wait_speculative_execution(self) -> OperationStatus:
        """Wait for a provisional outcome. Never treat it as final."""
        ...

    async def wait_final_execution(self) -> OperationStatus:
        """Wait until the outcome is final.

        Raises:
            OperationTimeoutError: If finality is not reached in time
        """
        ...


class ContractGateway(Protocol):
    """Protocol for chain access.

    This allows swapping between the JSON-RPC gateway and the in-memory mock
    for testing.
    """

    async def read(self, address: str, function: str, args: bytes = b"") -> bytes:
        """Read-only call.

        Args:
            address: Target contract
            function: Exported function name
            args: Serialized argument buffer

        Returns:
            Result buffer

        Raises:
            ChainRejectionError: If the function asserted
            GatewayError: On transport failure
        """
        ...

    async def call(
        self,
        address: str,
        function: str,
        args: bytes,
        coins: int,
        max_gas: int,
    ) -> OperationHandle:
        """Submit a state-changing call through the connected wallet.

        Args:
            address: Target contract
            function: Exported function name
            args: Serialized argument buffer
            coins: nanoMAS attached to the call
            max_gas: Gas limit

        Raises:
            WalletNotConnectedError: If no wallet is connected
            GatewayError: On transport failure
        """
        ...


__all__ = ["ContractGateway", "OperationHandle", "OperationStatus"]
