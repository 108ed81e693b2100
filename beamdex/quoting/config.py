"""Quote estimator configuration."""

from dataclasses import dataclass
from decimal import Decimal

from beamdex.constants import MAX_PRICE_IMPACT_PCT


@dataclass(frozen=True)
class QuoteConfig:
    """Tunables for the swap quote estimator.

    Attributes:
        large_trade_fraction: A quote whose input exceeds this share of the
            pool's visible liquidity is flagged, since the single-tick
            estimate understates impact once ticks are crossed
        max_price_impact_pct: Display cap on price impact
        default_slippage_pct: Slippage used for minimum-received hints
    """

    large_trade_fraction: Decimal = Decimal("0.1")
    max_price_impact_pct: Decimal = Decimal(MAX_PRICE_IMPACT_PCT)
    default_slippage_pct: Decimal = Decimal("0.5")


# Default configuration instance
DEFAULT_QUOTE_CONFIG = QuoteConfig()
