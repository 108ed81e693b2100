"""Pydantic models for the presentation JSON API.

Integer token amounts and Q64.96 prices travel as decimal strings so they
survive JavaScript number precision; decimal values are serialized as
strings as well.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from beamdex.math.fixed_point import to_decimal
from beamdex.models.types import Address, Uint256
from beamdex.orders.grid import GridLevel, GridOrder
from beamdex.orders.limit import LimitOrder
from beamdex.orders.recurring import RecurringOrder
from beamdex.quoting.result import QuoteResult

# Decimal places for display prices derived from Q64.96 values
DISPLAY_PRICE_PLACES = 8


class QuoteRequest(BaseModel):
    """Hypothetical swap to quote."""

    amount_in: Decimal = Field(alias="amountIn", description="Input amount")
    zero_for_one: bool = Field(alias="zeroForOne", description="True for token0 -> token1")
    current_price: Decimal | None = Field(
        default=None,
        alias="currentPrice",
        description="Pool price (token1 per token0); null when not loaded",
    )
    fee: int = Field(description="Pool fee in parts per million (e.g., 3000)")
    visible_liquidity: int | None = Field(
        default=None,
        alias="visibleLiquidity",
        description="Pool liquidity used to flag large trades",
    )
    slippage_pct: Decimal = Field(
        default=Decimal("0.5"),
        alias="slippagePct",
        ge=0,
        lt=100,
        description="Slippage tolerance in percent for minimumReceived",
    )

    model_config = {"populate_by_name": True}


class QuoteResponse(BaseModel):
    """Quote outcome. Only ``available`` and ``reason`` are set when no quote exists."""

    available: bool
    reason: str | None = None
    amount_in: Decimal | None = Field(default=None, alias="amountIn")
    amount_out: Decimal | None = Field(default=None, alias="amountOut")
    gross_amount_out: Decimal | None = Field(default=None, alias="grossAmountOut")
    fee_amount: Decimal | None = Field(default=None, alias="feeAmount")
    effective_price: Decimal | None = Field(default=None, alias="effectivePrice")
    price_impact_pct: Decimal | None = Field(default=None, alias="priceImpactPct")
    minimum_received: Decimal | None = Field(default=None, alias="minimumReceived")
    exceeds_liquidity: bool | None = Field(default=None, alias="exceedsLiquidity")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_result(cls, result: QuoteResult, slippage_pct: Decimal) -> "QuoteResponse":
        if result.quote is None:
            reason = result.reason.value if result.reason is not None else None
            return cls(available=False, reason=reason)

        quote = result.quote
        return cls(
            available=True,
            amount_in=quote.amount_in,
            amount_out=quote.amount_out,
            gross_amount_out=quote.gross_amount_out,
            fee_amount=quote.fee_amount,
            effective_price=quote.effective_price,
            price_impact_pct=quote.price_impact_pct,
            minimum_received=quote.minimum_received(slippage_pct),
            exceeds_liquidity=quote.exceeds_liquidity,
        )


class TickHintResponse(BaseModel):
    """Aligned tick bounds suggested for a price (or price range)."""

    tick_spacing: int = Field(alias="tickSpacing")
    tick_lower: int = Field(alias="tickLower")
    tick_upper: int = Field(alias="tickUpper")
    price_lower: Decimal = Field(alias="priceLower", description="Price at tickLower")
    price_upper: Decimal = Field(alias="priceUpper", description="Price at tickUpper")

    model_config = {"populate_by_name": True}


class FullRangeResponse(BaseModel):
    tick_lower: int = Field(alias="tickLower")
    tick_upper: int = Field(alias="tickUpper")

    model_config = {"populate_by_name": True}


def _display_price(q: int) -> Decimal:
    return to_decimal(q, places=DISPLAY_PRICE_PLACES)


class LimitOrderResponse(BaseModel):
    """Limit order record with its derived status."""

    order_id: Uint256 = Field(alias="orderId")
    owner: Address
    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")
    order_type: str = Field(alias="orderType", description="BUY or SELL")
    amount_in: Uint256 = Field(alias="amountIn")
    min_amount_out: Uint256 = Field(alias="minAmountOut")
    expected_output: Uint256 = Field(alias="expectedOutput")
    limit_price: Uint256 = Field(alias="limitPrice", description="Q64.96 limit price")
    limit_price_decimal: Decimal = Field(alias="limitPriceDecimal")
    created_at: int = Field(alias="createdAt")
    expires_at: int | None = Field(default=None, alias="expiresAt")
    status: str

    model_config = {"populate_by_name": True}

    @classmethod
    def from_order(cls, order: LimitOrder, now: int | None = None) -> "LimitOrderResponse":
        return cls(
            order_id=str(order.order_id),
            owner=order.owner,
            token_in=order.token_in,
            token_out=order.token_out,
            order_type=order.order_type.name,
            amount_in=str(order.amount_in),
            min_amount_out=str(order.min_amount_out),
            expected_output=str(order.expected_output),
            limit_price=str(order.limit_price),
            limit_price_decimal=_display_price(order.limit_price),
            created_at=order.created_at,
            expires_at=order.expires_at,
            status=order.status(now).value,
        )


class RecurringOrderResponse(BaseModel):
    """Recurring (DCA) order record with its derived status and progress."""

    order_id: Uint256 = Field(alias="orderId")
    owner: Address
    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")
    amount_per_execution: Uint256 = Field(alias="amountPerExecution")
    interval_periods: int = Field(alias="intervalPeriods")
    total_executions: int = Field(alias="totalExecutions")
    executed_count: int = Field(alias="executedCount")
    remaining_executions: int = Field(alias="remainingExecutions")
    progress_pct: float = Field(alias="progressPct")
    next_execution_period: int | None = Field(default=None, alias="nextExecutionPeriod")
    status: str

    model_config = {"populate_by_name": True}

    @classmethod
    def from_order(cls, order: RecurringOrder) -> "RecurringOrderResponse":
        return cls(
            order_id=str(order.order_id),
            owner=order.owner,
            token_in=order.token_in,
            token_out=order.token_out,
            amount_per_execution=str(order.amount_per_execution),
            interval_periods=order.interval_periods,
            total_executions=order.total_executions,
            executed_count=order.executed_count,
            remaining_executions=order.remaining_executions,
            progress_pct=order.progress_pct,
            next_execution_period=order.next_execution_period,
            status=order.status().value,
        )


class GridLevelResponse(BaseModel):
    price: Uint256 = Field(description="Q64.96 level price")
    price_decimal: Decimal = Field(alias="priceDecimal")
    amount: Uint256
    status: str = Field(description="IDLE, BUY_PENDING or SELL_PENDING")
    last_fill_period: int = Field(alias="lastFillPeriod")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_level(cls, level: GridLevel) -> "GridLevelResponse":
        return cls(
            price=str(level.price),
            price_decimal=_display_price(level.price),
            amount=str(level.amount),
            status=level.status.name,
            last_fill_period=level.last_fill_period,
        )


class GridOrderResponse(BaseModel):
    """Grid order record with its level ladder and derived progress."""

    grid_id: Uint256 = Field(alias="gridId")
    owner: Address
    token_in: Address = Field(alias="tokenIn")
    token_out: Address = Field(alias="tokenOut")
    grid_levels: int = Field(alias="gridLevels")
    lower_price: Uint256 = Field(alias="lowerPrice")
    upper_price: Uint256 = Field(alias="upperPrice")
    amount_per_level: Uint256 = Field(alias="amountPerLevel")
    filled_levels: int = Field(alias="filledLevels")
    progress_pct: float = Field(alias="progressPct")
    status: str
    levels: list[GridLevelResponse] = Field(default_factory=list)

    model_config = {"populate_by_name": True}

    @classmethod
    def from_grid(cls, grid: GridOrder) -> "GridOrderResponse":
        return cls(
            grid_id=str(grid.grid_id),
            owner=grid.owner,
            token_in=grid.token_in,
            token_out=grid.token_out,
            grid_levels=grid.grid_levels,
            lower_price=str(grid.lower_price),
            upper_price=str(grid.upper_price),
            amount_per_level=str(grid.amount_per_level),
            filled_levels=grid.filled_levels,
            progress_pct=grid.progress_pct,
            status=grid.status().value,
            levels=[GridLevelResponse.from_level(level) for level in grid.levels],
        )


class ErrorResponse(BaseModel):
    """JSON body for every recognised core error."""

    kind: str = Field(description="validation, wallet, network, timeout, rejected or error")
    message: str
    field: str | None = None
    reason: str | None = Field(default=None, description="Contract assertion code, if any")
