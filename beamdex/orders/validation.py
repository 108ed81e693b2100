"""Client-side order requests.

Each request validates itself on construction so bad input fails before
any gateway call. Prices arrive as user decimals and are converted to
Q64.96 exactly once, here; call arguments never come from a displayed
decimal.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from beamdex.constants import GRID_MAX_LEVELS, GRID_MIN_LEVELS, UINT256_MAX
from beamdex.errors import OrderValidationError, PriceError
from beamdex.math.fixed_point import from_decimal
from beamdex.models.types import is_valid_address, normalize_address
from beamdex.orders.grid import GridLevel, build_grid_levels
from beamdex.orders.limit import expected_limit_output
from beamdex.orders.types import OrderType

Number = Decimal | int | float | str


def _check_tokens(token_in: str, token_out: str) -> None:
    if not token_in:
        raise OrderValidationError("token_in", "Select the token to sell")
    if not token_out:
        raise OrderValidationError("token_out", "Select the token to buy")
    for name, token in (("token_in", token_in), ("token_out", token_out)):
        if not is_valid_address(normalize_address(token)):
            raise OrderValidationError(name, f"Invalid token address: {token}")
    if normalize_address(token_in) == normalize_address(token_out):
        raise OrderValidationError("token_out", "Tokens must be different")


def _check_positive(field: str, value: int, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise OrderValidationError(field, f"{label} must be an integer amount")
    if value <= 0:
        raise OrderValidationError(field, f"{label} must be greater than zero")


def _to_q96(field: str, price: Number, label: str) -> int:
    try:
        q = from_decimal(price)
    except PriceError as e:
        raise OrderValidationError(field, f"{label} must be a positive number") from e
    if q == 0:
        raise OrderValidationError(field, f"{label} is too small to represent on-chain")
    if q > UINT256_MAX:
        raise OrderValidationError(field, f"{label} is too large to represent on-chain")
    return q


def _check_int(field: str, value: int, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise OrderValidationError(field, f"{label} must be an integer")
    if value < 0:
        raise OrderValidationError(field, f"{label} cannot be negative")


@dataclass(frozen=True)
class LimitOrderRequest:
    """Parameters for createLimitOrder.

    Attributes:
        token_in: Token to sell
        token_out: Token to buy
        amount_in: Input amount in token units
        limit_price: Decimal limit price (tokenOut per tokenIn for SELL)
        order_type: BUY or SELL
        expiry: Lifetime in seconds, 0 for no expiry
        min_amount_out: Minimum output; defaults to the expected output at the limit price
    """

    token_in: str
    token_out: str
    amount_in: int
    limit_price: Number
    order_type: OrderType = OrderType.SELL
    expiry: int = 0
    min_amount_out: int | None = None

    def __post_init__(self) -> None:
        _check_tokens(self.token_in, self.token_out)
        _check_positive("amount_in", self.amount_in, "Amount")
        _to_q96("limit_price", self.limit_price, "Limit price")
        try:
            object.__setattr__(self, "order_type", OrderType(self.order_type))
        except ValueError as e:
            raise OrderValidationError("order_type", f"Unknown order type: {self.order_type}") from e
        _check_int("expiry", self.expiry, "Expiry")
        if self.min_amount_out is not None:
            _check_int("min_amount_out", self.min_amount_out, "Minimum output")

    @property
    def limit_price_x96(self) -> int:
        return from_decimal(self.limit_price)

    @property
    def expected_output(self) -> int:
        """Output at the limit price before fees."""
        return expected_limit_output(self.amount_in, self.limit_price_x96, self.order_type)

    @property
    def effective_min_amount_out(self) -> int:
        if self.min_amount_out is None:
            return self.expected_output
        return self.min_amount_out


@dataclass(frozen=True)
class RecurringOrderRequest:
    """Parameters for createRecurringOrder."""

    token_in: str
    token_out: str
    amount_per_execution: int
    interval_periods: int
    total_executions: int

    def __post_init__(self) -> None:
        _check_tokens(self.token_in, self.token_out)
        _check_positive("amount_per_execution", self.amount_per_execution, "Amount per execution")
        _check_positive("interval_periods", self.interval_periods, "Interval")
        _check_positive("total_executions", self.total_executions, "Number of executions")

    @property
    def total_amount(self) -> int:
        return self.amount_per_execution * self.total_executions


@dataclass(frozen=True)
class GridOrderRequest:
    """Parameters for createGridOrder.

    Attributes:
        lower_price: Decimal bottom of the grid
        upper_price: Decimal top of the grid
        grid_levels: Number of levels, both bounds included
        amount_per_level: Amount traded at each level
    """

    token_in: str
    token_out: str
    lower_price: Number
    upper_price: Number
    grid_levels: int
    amount_per_level: int

    def __post_init__(self) -> None:
        _check_tokens(self.token_in, self.token_out)
        _check_positive("amount_per_level", self.amount_per_level, "Amount per level")
        lower = _to_q96("lower_price", self.lower_price, "Lower price")
        upper = _to_q96("upper_price", self.upper_price, "Upper price")
        if lower >= upper:
            raise OrderValidationError("upper_price", "Upper price must be greater than lower price")
        if isinstance(self.grid_levels, bool) or not isinstance(self.grid_levels, int):
            raise OrderValidationError("grid_levels", "Grid levels must be an integer")
        if not GRID_MIN_LEVELS <= self.grid_levels <= GRID_MAX_LEVELS:
            raise OrderValidationError(
                "grid_levels",
                f"Grid levels must be between {GRID_MIN_LEVELS} and {GRID_MAX_LEVELS}",
            )

    @property
    def lower_price_x96(self) -> int:
        return from_decimal(self.lower_price)

    @property
    def upper_price_x96(self) -> int:
        return from_decimal(self.upper_price)

    @property
    def total_amount(self) -> int:
        return self.amount_per_level * self.grid_levels

    def levels(self) -> tuple[GridLevel, ...]:
        """The ladder this request creates, every level IDLE."""
        return build_grid_levels(
            self.lower_price_x96, self.upper_price_x96, self.grid_levels, self.amount_per_level
        )


__all__ = ["LimitOrderRequest", "RecurringOrderRequest", "GridOrderRequest"]
