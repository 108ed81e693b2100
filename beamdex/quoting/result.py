"""Quote result types."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from enum import Enum


class QuoteUnavailable(Enum):
    """Why no quote could be produced."""

    PRICE_UNAVAILABLE = "price_unavailable"
    POOL_NOT_INITIALIZED = "pool_not_initialized"


@dataclass(frozen=True)
class SwapQuote:
    """Estimated outcome of a swap at the current pool price.

    Attributes:
        amount_in: Input amount
        amount_out: Estimated output after the pool fee
        gross_amount_out: Output before the fee
        fee_amount: Fee deducted, in output token units
        effective_price: Execution price in the pool's price units
            (None for a zero input)
        price_impact_pct: |effective - current| / current * 100, capped
        zero_for_one: True when swapping token0 for token1
        exceeds_liquidity: Input is large relative to visible liquidity,
            so the estimate likely understates impact
    """

    amount_in: Decimal
    amount_out: Decimal
    gross_amount_out: Decimal
    fee_amount: Decimal
    effective_price: Decimal | None
    price_impact_pct: Decimal
    zero_for_one: bool
    exceeds_liquidity: bool = False

    def minimum_received(self, slippage_pct: Decimal) -> Decimal:
        """Lowest acceptable output for a given slippage tolerance (in %)."""
        if slippage_pct < 0 or slippage_pct >= 100:
            raise ValueError(f"Slippage must be in [0, 100), got {slippage_pct}")
        factor = (Decimal(100) - slippage_pct) / Decimal(100)
        return self.amount_out * factor

    def minimum_received_units(self, slippage_pct: Decimal) -> int:
        """minimum_received floored to an integer token amount for call arguments."""
        return int(self.minimum_received(slippage_pct).to_integral_value(rounding=ROUND_FLOOR))


@dataclass(frozen=True)
class QuoteResult:
    """Result of a quote request.

    An unavailable quote is a degraded display state, not an error: callers
    show "price unavailable" and never fall back to an older quote.

    Examples:
        result = estimator.quote(amount, True, price, 3000)
        if result.is_available:
            show(result.quote.amount_out)
        else:
            show_unavailable(result.reason)
    """

    quote: SwapQuote | None
    reason: QuoteUnavailable | None = None

    @property
    def is_available(self) -> bool:
        return self.quote is not None

    @classmethod
    def with_quote(cls, quote: SwapQuote) -> QuoteResult:
        return cls(quote=quote)

    @classmethod
    def unavailable(cls, reason: QuoteUnavailable = QuoteUnavailable.PRICE_UNAVAILABLE) -> QuoteResult:
        return cls(quote=None, reason=reason)
