"""Client configuration.

Values consumed at startup by the glue that wires gateways and managers
together. Defaults match the buildnet deployment of the web client; every
field can be overridden through BEAMDEX_* environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal

from beamdex.constants import DEFAULT_POLL_INTERVAL, SECONDS_PER_PERIOD
from beamdex.quoting.config import QuoteConfig

# 1 MAS = 10^9 nanoMAS; coin amounts below are in nanoMAS
NANO_MAS = 10**9


@dataclass(frozen=True)
class CallBudget:
    """Coins attached and gas limit for one state-changing contract call."""

    coins: int
    max_gas: int


DEFAULT_CALL_BUDGETS: dict[str, CallBudget] = {
    "createLimitOrder": CallBudget(coins=NANO_MAS // 10, max_gas=300_000_000),
    "cancelLimitOrder": CallBudget(coins=NANO_MAS // 100, max_gas=200_000_000),
    "createRecurringOrder": CallBudget(coins=NANO_MAS // 10, max_gas=300_000_000),
    "cancelRecurringOrder": CallBudget(coins=NANO_MAS // 100, max_gas=200_000_000),
    "createGridOrder": CallBudget(coins=NANO_MAS // 10, max_gas=300_000_000),
    "cancelGridOrder": CallBudget(coins=NANO_MAS // 10, max_gas=300_000_000),
    "increaseAllowance": CallBudget(coins=NANO_MAS // 100, max_gas=100_000_000),
    "createPool": CallBudget(coins=NANO_MAS // 10, max_gas=4_000_000_000),
    "mint": CallBudget(coins=0, max_gas=3_000_000_000),
    "burn": CallBudget(coins=0, max_gas=2_000_000_000),
    "swap": CallBudget(coins=0, max_gas=2_000_000_000),
    "collect": CallBudget(coins=0, max_gas=2_000_000_000),
}

# Gas ceiling for read-only calls
DEFAULT_READ_MAX_GAS = 4_000_000_000


@dataclass(frozen=True)
class ClientConfig:
    """Centralized configuration for the client core.

    Attributes:
        network: Network name (e.g., "buildnet", "mainnet")
        rpc_url: JSON-RPC endpoint of the node
        factory_address: Pool factory contract
        limit_order_manager: Limit order manager contract
        recurring_order_manager: Recurring (DCA) order manager contract
        grid_order_manager: Grid order manager contract
        poll_interval: Seconds between order list refreshes
        large_trade_fraction: Share of visible liquidity above which a quote
            is flagged as understating price impact
        seconds_per_period: Chain period length used for DCA schedule estimates
        operation_timeout: Seconds to wait for finality before giving up the UI wait
        call_budgets: Coins / gas per contract function
    """

    network: str = "buildnet"
    rpc_url: str = "https://buildnet.massa.net/api/v2"
    factory_address: str = ""
    limit_order_manager: str = ""
    recurring_order_manager: str = ""
    grid_order_manager: str = ""
    poll_interval: float = DEFAULT_POLL_INTERVAL
    large_trade_fraction: float = 0.1
    seconds_per_period: int = SECONDS_PER_PERIOD
    operation_timeout: float = 120.0
    read_max_gas: int = DEFAULT_READ_MAX_GAS
    call_budgets: dict[str, CallBudget] = field(
        default_factory=lambda: dict(DEFAULT_CALL_BUDGETS)
    )

    def budget_for(self, function: str) -> CallBudget:
        """Coins / gas for a contract function, falling back to the swap budget."""
        return self.call_budgets.get(function, self.call_budgets["swap"])

    def quote_config(self) -> QuoteConfig:
        """Quote estimator settings derived from this config."""
        return QuoteConfig(large_trade_fraction=Decimal(str(self.large_trade_fraction)))

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> ClientConfig:
        """Build a config from BEAMDEX_* environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)

        Returns:
            ClientConfig with defaults for any unset variable
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            network=env.get("BEAMDEX_NETWORK", defaults.network),
            rpc_url=env.get("BEAMDEX_RPC_URL", defaults.rpc_url),
            factory_address=env.get("BEAMDEX_FACTORY_ADDRESS", ""),
            limit_order_manager=env.get("BEAMDEX_LIMIT_ORDER_MANAGER", ""),
            recurring_order_manager=env.get("BEAMDEX_RECURRING_ORDER_MANAGER", ""),
            grid_order_manager=env.get("BEAMDEX_GRID_ORDER_MANAGER", ""),
            poll_interval=float(env.get("BEAMDEX_POLL_INTERVAL", defaults.poll_interval)),
            large_trade_fraction=float(
                env.get("BEAMDEX_LARGE_TRADE_FRACTION", defaults.large_trade_fraction)
            ),
            operation_timeout=float(
                env.get("BEAMDEX_OPERATION_TIMEOUT", defaults.operation_timeout)
            ),
        )


# Default configuration instance
DEFAULT_CLIENT_CONFIG = ClientConfig()
