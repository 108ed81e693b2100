"""Shared plumbing for the per-contract managers."""

from __future__ import annotations

from typing import Any

import structlog

from beamdex.codec.schemas import Schema, decode_record_list, decode_value
from beamdex.config import DEFAULT_CLIENT_CONFIG, ClientConfig
from beamdex.errors import ChainRejectionError, GatewayError
from beamdex.gateway.base import ContractGateway, OperationHandle, OperationStatus
from beamdex.wallet import WalletContext

logger = structlog.get_logger()


class ContractManager:
    """Base class for adapters around one deployed contract.

    Managers hold no chain state of their own. Every method reads through
    the gateway; state-changing methods wait for finality before returning.

    Attributes:
        gateway: Contract gateway
        wallet: Wallet context used for signing and as the default owner
        config: Client configuration (addresses, call budgets)
    """

    contract_name = "contract"
    # ClientConfig field holding the default address, if any
    address_setting: str | None = None

    def __init__(
        self,
        gateway: ContractGateway,
        wallet: WalletContext,
        config: ClientConfig | None = None,
        address: str | None = None,
    ) -> None:
        self.gateway = gateway
        self.wallet = wallet
        self.config = config or DEFAULT_CLIENT_CONFIG
        self._address = address

    @property
    def address(self) -> str:
        address = self._address
        if not address and self.address_setting:
            address = getattr(self.config, self.address_setting)
        if not address:
            raise GatewayError(f"No address configured for the {self.contract_name}")
        return address

    async def _read(self, function: str, args: bytes = b"", address: str | None = None) -> bytes:
        return await self.gateway.read(address or self.address, function, args)

    async def _read_value(self, function: str, kind: str, args: bytes = b"") -> int:
        return decode_value(kind, await self._read(function, args))

    async def _read_records(self, function: str, args: bytes, schema: Schema) -> list[dict[str, Any]]:
        return decode_record_list(await self._read(function, args), schema)

    async def _execute(
        self,
        function: str,
        args: bytes,
        *,
        extra_coins: int = 0,
        address: str | None = None,
    ) -> OperationHandle:
        """Submit a call and wait for its final outcome.

        Args:
            function: Contract function
            args: Encoded argument buffer
            extra_coins: nanoMAS sent on top of the function's fee budget
                (native coin deposits)
            address: Target contract, defaults to this manager's contract

        Raises:
            ChainRejectionError: If the operation finished with an error
        """
        target = address or self.address
        budget = self.config.budget_for(function)
        coins = budget.coins + extra_coins
        handle = await self.gateway.call(target, function, args, coins, budget.max_gas)
        status = await handle.wait_final_execution()
        if status is not OperationStatus.FINAL_SUCCESS:
            message = handle.error or f"{function} finished with status {status.value}"
            logger.warning(
                "contract_call_rejected",
                contract=self.contract_name,
                function=function,
                operation_id=handle.id,
                error=message,
            )
            raise ChainRejectionError(message, function=function)
        return handle


def created_id(handle: OperationHandle, event_prefix: str) -> int:
    """Id of the entity created by an operation.

    Taken from the function's u256 return value when the gateway exposes it,
    otherwise from the creation event, e.g. "LimitOrderCreated:17:AU1...".

    Raises:
        GatewayError: If neither source carries an id
    """
    if handle.return_value:
        return decode_value("u256", handle.return_value)
    for event in handle.events:
        if event.startswith(event_prefix):
            head = event[len(event_prefix) :].split(":", 1)[0]
            if head.isdigit():
                return int(head)
    raise GatewayError(f"Operation {handle.id} returned no id ({event_prefix} event missing)")


__all__ = ["ContractManager", "created_id"]
