"""Pool contract adapter: state reads, liquidity and swaps."""

from __future__ import annotations

from decimal import Decimal

import structlog

from beamdex.codec import schemas
from beamdex.config import ClientConfig
from beamdex.constants import MAX_SQRT_RATIO, MIN_SQRT_RATIO, UINT128_MAX
from beamdex.errors import ValidationError
from beamdex.gateway.base import ContractGateway
from beamdex.managers.base import ContractManager
from beamdex.managers.token import TokenManager
from beamdex.pools.pool import (
    Pool,
    PoolMetadata,
    PoolState,
    Position,
    validate_position_ticks,
)
from beamdex.quoting.estimator import SwapQuoteEstimator
from beamdex.quoting.result import QuoteResult
from beamdex.wallet import WalletContext

logger = structlog.get_logger()


def default_price_limit(zero_for_one: bool) -> int:
    """sqrtPriceX96 limit that lets a swap move the price as far as liquidity allows."""
    return MIN_SQRT_RATIO + 1 if zero_for_one else MAX_SQRT_RATIO - 1


class PoolManager(ContractManager):
    """Adapter for pool contracts; the pool address is passed per call."""

    contract_name = "pool"

    def __init__(
        self,
        gateway: ContractGateway,
        wallet: WalletContext,
        config: ClientConfig | None = None,
        tokens: TokenManager | None = None,
    ) -> None:
        super().__init__(gateway, wallet, config)
        self.tokens = tokens or TokenManager(gateway, wallet, self.config)
        self.estimator = SwapQuoteEstimator(self.config.quote_config())

    async def get_metadata(self, pool_address: str) -> PoolMetadata:
        result = await self._read("getPoolMetadata", address=pool_address)
        return PoolMetadata(**schemas.POOL_METADATA.decode(result))

    async def get_state(self, pool_address: str) -> PoolState:
        result = await self._read("getState", address=pool_address)
        return PoolState(**schemas.POOL_STATE.decode(result))

    async def get_pool(self, pool_address: str) -> Pool:
        """Metadata and state combined into a Pool snapshot (two sequential reads)."""
        metadata = await self.get_metadata(pool_address)
        state = await self.get_state(pool_address)
        return Pool(
            address=pool_address,
            token0=metadata.token0,
            token1=metadata.token1,
            fee=metadata.fee,
            tick_spacing=metadata.tick_spacing,
            sqrt_price_x96=state.sqrt_price_x96,
            tick=state.tick,
            liquidity=state.liquidity,
            fee_growth_global0=state.fee_growth_global0,
            fee_growth_global1=state.fee_growth_global1,
        )

    async def get_position(
        self,
        pool_address: str,
        tick_lower: int,
        tick_upper: int,
        owner: str | None = None,
    ) -> Position:
        owner = owner or self.wallet.require_address()
        args = schemas.GET_POSITION.encode(owner=owner, tick_lower=tick_lower, tick_upper=tick_upper)
        result = await self._read("getPosition", args, address=pool_address)
        return Position(
            owner=owner,
            pool=pool_address,
            tick_lower=tick_lower,
            tick_upper=tick_upper,
            **schemas.POSITION.decode(result),
        )

    async def mint(
        self,
        pool: Pool,
        tick_lower: int,
        tick_upper: int,
        liquidity: int,
        recipient: str | None = None,
    ) -> str:
        """Add liquidity to [tick_lower, tick_upper). Returns the operation id."""
        validate_position_ticks(tick_lower, tick_upper, pool.tick_spacing)
        if liquidity <= 0:
            raise ValidationError("Liquidity must be greater than zero")
        recipient = recipient or self.wallet.require_address()
        args = schemas.MINT.encode(
            recipient=recipient, tick_lower=tick_lower, tick_upper=tick_upper, amount=liquidity
        )
        handle = await self._execute("mint", args, address=pool.address)
        logger.info(
            "liquidity_added",
            pool=pool.address,
            tick_lower=tick_lower,
            tick_upper=tick_upper,
            liquidity=str(liquidity),
        )
        return handle.id

    async def burn(self, pool: Pool, tick_lower: int, tick_upper: int, liquidity: int) -> str:
        """Remove liquidity. Burned tokens stay owed until collected."""
        validate_position_ticks(tick_lower, tick_upper, pool.tick_spacing)
        if liquidity <= 0:
            raise ValidationError("Liquidity must be greater than zero")
        self.wallet.require_account()
        args = schemas.BURN.encode(tick_lower=tick_lower, tick_upper=tick_upper, amount=liquidity)
        handle = await self._execute("burn", args, address=pool.address)
        logger.info(
            "liquidity_removed",
            pool=pool.address,
            tick_lower=tick_lower,
            tick_upper=tick_upper,
            liquidity=str(liquidity),
        )
        return handle.id

    async def collect(
        self,
        pool: Pool,
        tick_lower: int,
        tick_upper: int,
        amount0_requested: int = UINT128_MAX,
        amount1_requested: int = UINT128_MAX,
        recipient: str | None = None,
    ) -> str:
        """Collect owed tokens; defaults request everything owed."""
        validate_position_ticks(tick_lower, tick_upper, pool.tick_spacing)
        recipient = recipient or self.wallet.require_address()
        args = schemas.COLLECT.encode(
            recipient=recipient,
            tick_lower=tick_lower,
            tick_upper=tick_upper,
            amount0_requested=amount0_requested,
            amount1_requested=amount1_requested,
        )
        handle = await self._execute("collect", args, address=pool.address)
        logger.info("fees_collected", pool=pool.address, tick_lower=tick_lower, tick_upper=tick_upper)
        return handle.id

    async def swap(
        self,
        pool: Pool,
        token_in: str,
        amount_in: int,
        sqrt_price_limit_x96: int | None = None,
        recipient: str | None = None,
    ) -> str:
        """Exact-input swap of token_in.

        Sequence: allowance check, approval if short, then the swap, each
        awaited before the next starts.
        """
        zero_for_one = pool.zero_for_one(token_in)
        if amount_in <= 0:
            raise ValidationError("Swap amount must be greater than zero")
        recipient = recipient or self.wallet.require_address()
        limit = sqrt_price_limit_x96 or default_price_limit(zero_for_one)

        await self.tokens.ensure_allowance(token_in, pool.address, amount_in)
        args = schemas.SWAP.encode(
            recipient=recipient,
            zero_for_one=zero_for_one,
            amount_specified=amount_in,
            sqrt_price_limit_x96=limit,
        )
        handle = await self._execute("swap", args, address=pool.address)
        logger.info(
            "swap_executed",
            pool=pool.address,
            token_in=token_in,
            amount_in=str(amount_in),
            zero_for_one=zero_for_one,
            operation_id=handle.id,
        )
        return handle.id

    async def quote_swap(self, pool_address: str, token_in: str, amount_in: int | Decimal) -> QuoteResult:
        """Fresh pool read, then a quote at its current price."""
        pool = await self.get_pool(pool_address)
        return self.estimator.quote_pool(pool, token_in, amount_in)


__all__ = ["PoolManager", "default_price_limit"]
