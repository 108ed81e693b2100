"""Explicit wallet context.

Chain access that needs a signer receives a WalletContext; there is no
module-level wallet. Connecting and disconnecting are explicit calls.
"""

from __future__ import annotations

from typing import Protocol

import structlog

from beamdex.errors import WalletNotConnectedError

logger = structlog.get_logger()


class WalletAccount(Protocol):
    """A signing account supplied by a wallet provider."""

    @property
    def address(self) -> str: ...

    async def call_sc(
        self,
        target: str,
        function: str,
        parameter: bytes,
        coins: int,
        max_gas: int,
    ) -> str:
        """Sign and submit a smart contract call.

        Returns:
            Operation id
        """
        ...

    async def balance(self) -> int:
        """Native coin balance in nanoMAS."""
        ...


class WalletContext:
    """Holds the connected account, if any.

    Examples:
        wallet = WalletContext()
        wallet.connect(account)
        manager = LimitOrderManager(gateway, wallet, config)
    """

    def __init__(self, account: WalletAccount | None = None) -> None:
        self._account = account

    @property
    def is_connected(self) -> bool:
        return self._account is not None

    @property
    def account(self) -> WalletAccount | None:
        return self._account

    @property
    def address(self) -> str | None:
        return self._account.address if self._account is not None else None

    def connect(self, account: WalletAccount) -> None:
        if self._account is not None and self._account.address != account.address:
            logger.info("wallet_switched", previous=self._account.address, address=account.address)
        self._account = account
        logger.info("wallet_connected", address=account.address)

    def disconnect(self) -> None:
        if self._account is None:
            return
        logger.info("wallet_disconnected", address=self._account.address)
        self._account = None

    def require_account(self) -> WalletAccount:
        """The connected account.

        Raises:
            WalletNotConnectedError: If no account is connected
        """
        if self._account is None:
            raise WalletNotConnectedError()
        return self._account

    def require_address(self) -> str:
        return self.require_account().address


__all__ = ["WalletAccount", "WalletContext"]
