"""Swap quote estimation at the current pool price.

The estimate is a single-tick linear approximation:

    gross_out = amount_in * price        (token0 -> token1)
    gross_out = amount_in / price        (token1 -> token0)
    net_out   = gross_out * (1 - fee_ppm / 1e6)

It does not simulate crossing initialized ticks, so it understates impact
for trades that are large relative to the pool's active liquidity. Such
quotes are flagged with ``exceeds_liquidity`` rather than corrected.
"""

from __future__ import annotations

from decimal import Context, Decimal, localcontext
from typing import TYPE_CHECKING, Protocol

import structlog

from beamdex.constants import FEE_DENOMINATOR
from beamdex.errors import ValidationError
from beamdex.math.fixed_point import WORKING_PRECISION, as_decimal
from beamdex.quoting.config import DEFAULT_QUOTE_CONFIG, QuoteConfig
from beamdex.quoting.result import QuoteResult, QuoteUnavailable, SwapQuote

if TYPE_CHECKING:
    from beamdex.pools.pool import Pool

logger = structlog.get_logger()

__all__ = ["QuoteEstimator", "SwapQuoteEstimator", "DEFAULT_ESTIMATOR", "quote", "quote_pool"]

_ZERO = Decimal(0)
_HUNDRED = Decimal(100)
_FEE_DENOMINATOR = Decimal(FEE_DENOMINATOR)

Number = Decimal | int | float | str


class QuoteEstimator(Protocol):
    """Protocol for swap quote estimators."""

    def quote(
        self,
        amount_in: Number,
        zero_for_one: bool,
        current_price: Number | None,
        fee_ppm: int,
        visible_liquidity: int | None = None,
    ) -> QuoteResult:
        """Estimate output and price impact for a hypothetical swap.

        Args:
            amount_in: Input amount (token units, any scale)
            zero_for_one: True to swap token0 for token1
            current_price: Pool price as token1 per token0, None if not loaded
            fee_ppm: Pool fee in parts per million
            visible_liquidity: Active liquidity, used only for the large-trade flag

        Returns:
            QuoteResult holding a SwapQuote, or unavailable when there is no price
        """
        ...


def _check_fee(fee_ppm: int) -> None:
    if isinstance(fee_ppm, bool) or not isinstance(fee_ppm, int):
        raise ValidationError(f"Fee must be an integer in parts per million, got {fee_ppm!r}")
    if not 0 <= fee_ppm < FEE_DENOMINATOR:
        raise ValidationError(f"Fee must be in [0, {FEE_DENOMINATOR}), got {fee_ppm}")


class SwapQuoteEstimator:
    """Default quote estimator.

    Attributes:
        config: Quote configuration settings
    """

    def __init__(self, config: QuoteConfig | None = None):
        self.config = config or DEFAULT_QUOTE_CONFIG

    def quote(
        self,
        amount_in: Number,
        zero_for_one: bool,
        current_price: Number | None,
        fee_ppm: int,
        visible_liquidity: int | None = None,
    ) -> QuoteResult:
        _check_fee(fee_ppm)
        amount = as_decimal(amount_in)
        if amount < 0:
            raise ValidationError(f"Amount must not be negative, got {amount_in!r}")

        if current_price is None:
            logger.debug("quote_unavailable", reason="no_price")
            return QuoteResult.unavailable(QuoteUnavailable.PRICE_UNAVAILABLE)

        price = as_decimal(current_price)
        if price <= 0:
            logger.debug("quote_unavailable", reason="pool_not_initialized", price=str(price))
            return QuoteResult.unavailable(QuoteUnavailable.POOL_NOT_INITIALIZED)

        if amount == 0:
            return QuoteResult.with_quote(
                SwapQuote(
                    amount_in=_ZERO,
                    amount_out=_ZERO,
                    gross_amount_out=_ZERO,
                    fee_amount=_ZERO,
                    effective_price=None,
                    price_impact_pct=_ZERO,
                    zero_for_one=zero_for_one,
                )
            )

        with localcontext(Context(prec=WORKING_PRECISION)):
            gross_out = amount * price if zero_for_one else amount / price
            net_out = gross_out * (1 - Decimal(fee_ppm) / _FEE_DENOMINATOR)
            fee_amount = gross_out - net_out

            effective_price = net_out / amount if zero_for_one else amount / net_out
            impact = abs(effective_price - price) / price * _HUNDRED
            impact = min(impact, self.config.max_price_impact_pct)

        exceeds = self._exceeds_liquidity(amount, visible_liquidity)
        if exceeds:
            logger.debug(
                "quote_large_trade",
                amount_in=str(amount),
                visible_liquidity=visible_liquidity,
                fraction=str(self.config.large_trade_fraction),
            )

        return QuoteResult.with_quote(
            SwapQuote(
                amount_in=amount,
                amount_out=net_out,
                gross_amount_out=gross_out,
                fee_amount=fee_amount,
                effective_price=effective_price,
                price_impact_pct=impact,
                zero_for_one=zero_for_one,
                exceeds_liquidity=exceeds,
            )
        )

    def quote_pool(self, pool: Pool, token_in: str, amount_in: Number) -> QuoteResult:
        """Quote a swap of token_in against a loaded pool."""
        zero_for_one = pool.zero_for_one(token_in)
        if not pool.is_initialized:
            logger.debug("quote_unavailable", reason="pool_not_initialized", pool=pool.address)
            return QuoteResult.unavailable(QuoteUnavailable.POOL_NOT_INITIALIZED)
        return self.quote(
            amount_in,
            zero_for_one,
            pool.current_price,
            pool.fee,
            visible_liquidity=pool.liquidity,
        )

    def _exceeds_liquidity(self, amount: Decimal, visible_liquidity: int | None) -> bool:
        if visible_liquidity is None:
            return False
        if visible_liquidity <= 0:
            return True
        return amount > Decimal(visible_liquidity) * self.config.large_trade_fraction


DEFAULT_ESTIMATOR = SwapQuoteEstimator()


def quote(
    amount_in: Number,
    zero_for_one: bool,
    current_price: Number | None,
    fee_ppm: int,
    visible_liquidity: int | None = None,
) -> QuoteResult:
    """Quote with the default estimator. See SwapQuoteEstimator.quote."""
    return DEFAULT_ESTIMATOR.quote(amount_in, zero_for_one, current_price, fee_ppm, visible_liquidity)


def quote_pool(pool: Pool, token_in: str, amount_in: Number) -> QuoteResult:
    """Quote against a loaded pool with the default estimator."""
    return DEFAULT_ESTIMATOR.quote_pool(pool, token_in, amount_in)
