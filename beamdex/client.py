"""Wiring of configuration, wallet, gateway and contract managers."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import httpx
import structlog

from beamdex.config import ClientConfig
from beamdex.gateway.base import ContractGateway
from beamdex.gateway.jsonrpc import JsonRpcGateway
from beamdex.managers.factory import FactoryManager
from beamdex.managers.grid_orders import GridOrderManager
from beamdex.managers.limit_orders import LimitOrderManager
from beamdex.managers.pool import PoolManager
from beamdex.managers.recurring_orders import RecurringOrderManager
from beamdex.managers.token import TokenManager
from beamdex.polling import Poller
from beamdex.wallet import WalletContext

logger = structlog.get_logger()


class BeamDexClient:
    """One gateway, one wallet context and the managers that share them.

    Attributes:
        config: Client configuration
        wallet: Wallet context (connect an account before state-changing calls)
        gateway: Contract gateway
    """

    def __init__(
        self,
        gateway: ContractGateway,
        wallet: WalletContext | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self.wallet = wallet or WalletContext()
        self.gateway = gateway
        self.tokens = TokenManager(gateway, self.wallet, self.config)
        self.pools = PoolManager(gateway, self.wallet, self.config, tokens=self.tokens)
        self.factory = FactoryManager(gateway, self.wallet, self.config)
        self.limit_orders = LimitOrderManager(gateway, self.wallet, self.config, tokens=self.tokens)
        self.recurring_orders = RecurringOrderManager(
            gateway, self.wallet, self.config, tokens=self.tokens
        )
        self.grid_orders = GridOrderManager(gateway, self.wallet, self.config, tokens=self.tokens)

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        wallet: WalletContext | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> BeamDexClient:
        """Client talking to the node at config.rpc_url."""
        wallet = wallet or WalletContext()
        gateway = JsonRpcGateway(config, wallet, client=http_client)
        return cls(gateway, wallet, config)

    def poller(self, fetch: Callable[[], Awaitable[Any]], name: str, **kwargs: Any) -> Poller:
        """Poller at the configured order refresh interval."""
        return Poller(fetch, interval=self.config.poll_interval, name=name, **kwargs)

    async def aclose(self) -> None:
        if isinstance(self.gateway, JsonRpcGateway):
            await self.gateway.aclose()


_default_client: BeamDexClient | None = None


def get_default_client() -> BeamDexClient:
    """Process-wide client built from BEAMDEX_* environment variables.

    Used by the API; library callers construct their own BeamDexClient.
    """
    global _default_client
    if _default_client is None:
        config = ClientConfig.from_env()
        logger.info("client_configured", network=config.network, rpc_url=config.rpc_url)
        _default_client = BeamDexClient.from_config(config)
    return _default_client


__all__ = ["BeamDexClient", "get_default_client"]
