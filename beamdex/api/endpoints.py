"""API endpoints for the BeamDEX client core."""

import structlog
from fastapi import APIRouter, Depends, Query

from beamdex.client import BeamDexClient, get_default_client
from beamdex.config import ClientConfig
from beamdex.math.tick import (
    TickRounding,
    full_range_bounds,
    price_range_to_ticks,
    price_to_tick,
    tick_to_price,
    usable_tick_bounds,
)
from beamdex.models.api import (
    FullRangeResponse,
    GridOrderResponse,
    LimitOrderResponse,
    QuoteRequest,
    QuoteResponse,
    RecurringOrderResponse,
    TickHintResponse,
)
from beamdex.quoting.estimator import SwapQuoteEstimator

logger = structlog.get_logger()

router = APIRouter()


def get_client() -> BeamDexClient:
    """Dependency provider for the client (and through it, the contract gateway).

    Override this in tests to inject a client backed by a mock gateway:
        app.dependency_overrides[get_client] = lambda: client

    Returns:
        The client used to read orders.
    """
    return get_default_client()


def get_client_config() -> ClientConfig:
    """Dependency provider for configuration used by gateway-free endpoints."""
    return ClientConfig.from_env()


@router.post("/quote", response_model_exclude_none=True)
async def post_quote(
    request: QuoteRequest,
    config: ClientConfig = Depends(get_client_config),
) -> QuoteResponse:
    """Quote a hypothetical swap at the current pool price.

    Returns ``{"available": false, "reason": ...}`` when there is no usable
    price; invalid input is reported as a 400 by the error handler.
    """
    estimator = SwapQuoteEstimator(config.quote_config())
    result = estimator.quote(
        request.amount_in,
        request.zero_for_one,
        request.current_price,
        request.fee,
        visible_liquidity=request.visible_liquidity,
    )
    return QuoteResponse.from_result(result, request.slippage_pct)


@router.get("/ticks/hint")
async def tick_hint(
    price: str,
    tick_spacing: int,
    upper_price: str | None = Query(default=None),
) -> TickHintResponse:
    """Aligned tick bounds around a price, or for a [price, upper_price] range.

    For a single price the hint is the spacing-wide band that contains it.
    """
    if upper_price is not None:
        ticks = price_range_to_ticks(price, upper_price, tick_spacing)
        lower, upper = ticks.lower, ticks.upper
    else:
        lower = price_to_tick(price, tick_spacing, TickRounding.DOWN)
        _, highest = usable_tick_bounds(tick_spacing)
        if lower + tick_spacing <= highest:
            upper = lower + tick_spacing
        else:
            lower, upper = lower - tick_spacing, lower

    return TickHintResponse(
        tick_spacing=tick_spacing,
        tick_lower=lower,
        tick_upper=upper,
        price_lower=tick_to_price(lower),
        price_upper=tick_to_price(upper),
    )


@router.get("/ticks/full-range")
async def full_range() -> FullRangeResponse:
    lower, upper = full_range_bounds()
    return FullRangeResponse(tick_lower=lower, tick_upper=upper)


@router.get("/orders/limit/{order_id}", response_model_exclude_none=True)
async def get_limit_order(
    order_id: int,
    client: BeamDexClient = Depends(get_client),
) -> LimitOrderResponse:
    order = await client.limit_orders.get_limit_order(order_id)
    logger.debug("limit_order_read", order_id=order_id, status=order.status().value)
    return LimitOrderResponse.from_order(order)


@router.get("/orders/recurring/{order_id}", response_model_exclude_none=True)
async def get_recurring_order(
    order_id: int,
    client: BeamDexClient = Depends(get_client),
) -> RecurringOrderResponse:
    order = await client.recurring_orders.get_recurring_order(order_id)
    logger.debug("recurring_order_read", order_id=order_id, status=order.status().value)
    return RecurringOrderResponse.from_order(order)


@router.get("/orders/grid/{grid_id}")
async def get_grid_order(
    grid_id: int,
    client: BeamDexClient = Depends(get_client),
) -> GridOrderResponse:
    """Grid order with every level read back from the chain."""
    grid = await client.grid_orders.get_grid_with_levels(grid_id)
    logger.debug("grid_order_read", grid_id=grid_id, status=grid.status().value)
    return GridOrderResponse.from_grid(grid)
