"""Base for the order manager contracts."""

from __future__ import annotations

from beamdex.config import ClientConfig
from beamdex.gateway.base import ContractGateway
from beamdex.managers.base import ContractManager
from beamdex.managers.token import TokenManager
from beamdex.models.types import is_native
from beamdex.wallet import WalletContext


class OrderManager(ContractManager):
    """Order managers escrow the full input amount when an order is created."""

    def __init__(
        self,
        gateway: ContractGateway,
        wallet: WalletContext,
        config: ClientConfig | None = None,
        address: str | None = None,
        tokens: TokenManager | None = None,
    ) -> None:
        super().__init__(gateway, wallet, config, address)
        self.tokens = tokens or TokenManager(gateway, wallet, self.config)

    async def _prepare_deposit(self, token: str, amount: int) -> int:
        """Approve the manager for a token deposit, or return coins to attach for NATIVE_MAS.

        Returns:
            nanoMAS to send with the creation call on top of its fee budget
        """
        if is_native(token):
            return amount
        await self.tokens.ensure_allowance(token, self.address, amount)
        return 0

    def _owner(self, user: str | None) -> str:
        return user or self.wallet.require_address()


__all__ = ["OrderManager"]
