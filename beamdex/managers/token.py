"""Fungible token reads and approvals."""

from __future__ import annotations

import structlog

from beamdex.codec import schemas
from beamdex.codec.schemas import decode_raw_string, decode_value
from beamdex.constants import NATIVE_MAS_DECIMALS, NATIVE_MAS_SYMBOL, UINT256_MAX
from beamdex.errors import ValidationError
from beamdex.managers.base import ContractManager
from beamdex.models.types import is_native

logger = structlog.get_logger()


class TokenManager(ContractManager):
    """Token contract adapter.

    Token addresses are passed per call. The native coin pseudo-token
    NATIVE_MAS is handled locally: it has 9 decimals, is sent as coins with
    the call and never needs an allowance.
    """

    contract_name = "token"

    async def symbol(self, token: str) -> str:
        if is_native(token):
            return NATIVE_MAS_SYMBOL
        return decode_raw_string(await self._read("symbol", address=token))

    async def decimals(self, token: str) -> int:
        if is_native(token):
            return NATIVE_MAS_DECIMALS
        return decode_value("u8", await self._read("decimals", address=token))

    async def balance_of(self, token: str, account: str | None = None) -> int:
        """Balance of account (default: the connected wallet)."""
        owner = account or self.wallet.require_address()
        if is_native(token):
            wallet_account = self.wallet.require_account()
            if owner != wallet_account.address:
                raise ValidationError("Native balance is only available for the connected wallet")
            return await wallet_account.balance()
        result = await self._read("balanceOf", schemas.BALANCE_OF.encode(account=owner), address=token)
        return decode_value("u256", result)

    async def allowance(self, token: str, spender: str, owner: str | None = None) -> int:
        if is_native(token):
            return UINT256_MAX
        owner = owner or self.wallet.require_address()
        result = await self._read(
            "allowance", schemas.ALLOWANCE.encode(owner=owner, spender=spender), address=token
        )
        return decode_value("u256", result)

    async def increase_allowance(self, token: str, spender: str, amount: int) -> str | None:
        """Approve spender for amount more. Returns the operation id (None for NATIVE_MAS)."""
        if is_native(token):
            return None
        if amount <= 0:
            raise ValidationError("Approval amount must be greater than zero")
        handle = await self._execute(
            "increaseAllowance",
            schemas.INCREASE_ALLOWANCE.encode(spender=spender, amount=amount),
            address=token,
        )
        logger.info("allowance_increased", token=token, spender=spender, amount=str(amount))
        return handle.id

    async def ensure_allowance(self, token: str, spender: str, amount: int) -> bool:
        """Approve the shortfall if the current allowance is below amount.

        The allowance read and the approval run strictly in sequence.

        Returns:
            True if an approval was submitted
        """
        if is_native(token):
            return False
        current = await self.allowance(token, spender)
        if current >= amount:
            return False
        await self.increase_allowance(token, spender, amount - current)
        return True


__all__ = ["TokenManager"]
