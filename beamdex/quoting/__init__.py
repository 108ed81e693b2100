"""Swap quote estimation."""

from beamdex.quoting.config import DEFAULT_QUOTE_CONFIG, QuoteConfig
from beamdex.quoting.estimator import (
    DEFAULT_ESTIMATOR,
    QuoteEstimator,
    SwapQuoteEstimator,
    quote,
    quote_pool,
)
from beamdex.quoting.result import QuoteResult, QuoteUnavailable, SwapQuote

__all__ = [
    "DEFAULT_ESTIMATOR",
    "DEFAULT_QUOTE_CONFIG",
    "QuoteConfig",
    "QuoteEstimator",
    "QuoteResult",
    "QuoteUnavailable",
    "SwapQuote",
    "SwapQuoteEstimator",
    "quote",
    "quote_pool",
]
