"""Typed argument and result layouts for every contract function the client uses.

A Schema pins the field order and width of one buffer so encoder and
decoder cannot drift apart. Field names match the attributes of the
corresponding model dataclass, so a decoded record can be passed straight
to its constructor:

    order = LimitOrder(**LIMIT_ORDER.decode(result))
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from beamdex.codec.args import INT_WIDTHS, Args, ArgsReader
from beamdex.errors import CodecError

FIELD_TYPES = frozenset({"string", "bytes", "bool", *INT_WIDTHS})


def _write(args: Args, kind: str, value: Any) -> None:
    if kind == "string":
        args.add_string(value)
    elif kind == "bytes":
        args.add_bytes(value)
    elif kind == "bool":
        args.add_bool(value)
    else:
        getattr(args, f"add_{kind}")(value)


def _read(reader: ArgsReader, kind: str) -> Any:
    return getattr(reader, f"next_{kind}")()


@dataclass(frozen=True)
class Schema:
    """Ordered (name, type) layout of one argument or result buffer.

    Attributes:
        name: Contract function or record name, used in error messages
        fields: (field name, type tag) pairs in wire order
    """

    name: str
    fields: tuple[tuple[str, str], ...]

    def __post_init__(self) -> None:
        for field_name, kind in self.fields:
            if kind not in FIELD_TYPES:
                raise CodecError(f"{self.name}.{field_name}: unknown field type {kind!r}")

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(name for name, _ in self.fields)

    def encode(self, values: Mapping[str, Any] | None = None, **kwargs: Any) -> bytes:
        """Serialize values in schema order.

        Raises:
            CodecError: If a field is missing, unexpected, or out of range
        """
        merged = {**(values or {}), **kwargs}
        unexpected = set(merged) - set(self.field_names)
        if unexpected:
            raise CodecError(f"{self.name}: unexpected fields {sorted(unexpected)}")

        args = Args()
        for field_name, kind in self.fields:
            if field_name not in merged:
                raise CodecError(f"{self.name}: missing field {field_name!r}")
            try:
                _write(args, kind, merged[field_name])
            except CodecError as e:
                raise CodecError(f"{self.name}.{field_name}: {e}") from e
        return args.serialize()

    def read(self, reader: ArgsReader) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for field_name, kind in self.fields:
            try:
                result[field_name] = _read(reader, kind)
            except CodecError as e:
                raise CodecError(f"{self.name}.{field_name}: {e}") from e
        return result

    def decode(self, data: bytes) -> dict[str, Any]:
        """Decode a whole buffer; trailing bytes are an error."""
        reader = ArgsReader(data)
        result = self.read(reader)
        if not reader.at_end():
            raise CodecError(f"{self.name}: {reader.remaining} unexpected trailing bytes")
        return result


def decode_value(kind: str, data: bytes) -> Any:
    """Decode a single-value result such as a u64 counter."""
    return Schema(kind, (("value", kind),)).decode(data)["value"]


def encode_value(kind: str, value: Any) -> bytes:
    return Schema(kind, (("value", kind),)).encode(value=value)


def decode_raw_string(data: bytes) -> str:
    """Decode a result that is bare UTF-8 with no length prefix (token symbol, pool list)."""
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise CodecError("Result is not valid UTF-8") from e


def decode_record_list(data: bytes, schema: Schema) -> list[dict[str, Any]]:
    """Decode a list result: u64 count, then count length-prefixed record blobs."""
    reader = ArgsReader(data)
    count = reader.next_u64()
    records = [schema.decode(reader.next_bytes()) for _ in range(count)]
    if not reader.at_end():
        raise CodecError(f"{schema.name} list: {reader.remaining} unexpected trailing bytes")
    return records


def encode_record_list(records: list[Mapping[str, Any]], schema: Schema) -> bytes:
    """Inverse of decode_record_list; used by test fixtures and the mock gateway."""
    args = Args().add_u64(len(records))
    for record in records:
        args.add_bytes(schema.encode(record))
    return args.serialize()


EMPTY = Schema("empty", ())

# Records

LIMIT_ORDER = Schema(
    "LimitOrder",
    (
        ("order_id", "u256"),
        ("owner", "string"),
        ("token_in", "string"),
        ("token_out", "string"),
        ("amount_in", "u256"),
        ("min_amount_out", "u256"),
        ("limit_price", "u256"),
        ("order_type", "u256"),
        ("expiry", "u256"),
        ("filled", "bool"),
        ("cancelled", "bool"),
        ("created_at", "u256"),
    ),
)

RECURRING_ORDER = Schema(
    "RecurringOrder",
    (
        ("order_id", "u256"),
        ("owner", "string"),
        ("token_in", "string"),
        ("token_out", "string"),
        ("amount_per_execution", "u256"),
        ("interval_periods", "u64"),
        ("total_executions", "u64"),
        ("executed_count", "u64"),
        ("last_execution_period", "u64"),
        ("active", "bool"),
        ("cancelled", "bool"),
    ),
)

GRID_ORDER = Schema(
    "GridOrder",
    (
        ("grid_id", "u256"),
        ("owner", "string"),
        ("token_in", "string"),
        ("token_out", "string"),
        ("grid_levels", "u64"),
        ("lower_price", "u256"),
        ("upper_price", "u256"),
        ("amount_per_level", "u256"),
        ("active", "bool"),
        ("cancelled", "bool"),
    ),
)

GRID_LEVEL = Schema(
    "GridLevel",
    (
        ("price", "u256"),
        ("amount", "u256"),
        ("status", "u8"),
        ("last_fill_period", "u64"),
    ),
)

ORDER_PROGRESS = Schema(
    "OrderProgress",
    (
        ("executed_count", "u64"),
        ("total_executions", "u64"),
        ("is_active", "bool"),
        ("is_complete", "bool"),
    ),
)

POOL_STATE = Schema(
    "PoolState",
    (
        ("sqrt_price_x96", "u256"),
        ("tick", "i32"),
        ("liquidity", "u128"),
        ("fee_growth_global0", "u256"),
        ("fee_growth_global1", "u256"),
    ),
)

POOL_METADATA = Schema(
    "PoolMetadata",
    (
        ("token0", "string"),
        ("token1", "string"),
        ("fee", "u64"),
        ("tick_spacing", "u64"),
        ("factory", "string"),
        ("max_liquidity_per_tick", "string"),
    ),
)

POSITION = Schema(
    "Position",
    (
        ("liquidity", "u128"),
        ("tokens_owed0", "u128"),
        ("tokens_owed1", "u128"),
    ),
)

# Function arguments

CREATE_LIMIT_ORDER = Schema(
    "createLimitOrder",
    (
        ("token_in", "string"),
        ("token_out", "string"),
        ("amount_in", "u256"),
        ("min_amount_out", "u256"),
        ("limit_price", "u256"),
        ("order_type", "u256"),
        ("expiry", "u256"),
    ),
)
CANCEL_LIMIT_ORDER = Schema("cancelLimitOrder", (("order_id", "u256"),))
GET_LIMIT_ORDER = Schema("getOrder", (("order_id", "u256"),))

CREATE_RECURRING_ORDER = Schema(
    "createRecurringOrder",
    (
        ("token_in", "string"),
        ("token_out", "string"),
        ("amount_per_execution", "u256"),
        ("interval_periods", "u64"),
        ("total_executions", "u64"),
    ),
)
CANCEL_RECURRING_ORDER = Schema("cancelRecurringOrder", (("order_id", "u256"),))
GET_RECURRING_ORDER = Schema("getRecurringOrder", (("order_id", "u256"),))
GET_ORDER_PROGRESS = Schema("getOrderProgress", (("order_id", "u256"),))

CREATE_GRID_ORDER = Schema(
    "createGridOrder",
    (
        ("token_in", "string"),
        ("token_out", "string"),
        ("grid_levels", "u64"),
        ("lower_price", "u256"),
        ("upper_price", "u256"),
        ("amount_per_level", "u256"),
    ),
)
CANCEL_GRID_ORDER = Schema("cancelGridOrder", (("grid_id", "u256"),))
GET_GRID_ORDER = Schema("getGridOrder", (("grid_id", "u256"),))
GET_GRID_LEVEL = Schema("getGridLevel", (("grid_id", "u256"), ("level_index", "u64")))

GET_USER_ORDERS = Schema("getUserOrders", (("user", "string"), ("limit", "u64")))
GET_USER_GRIDS = Schema("getUserGrids", (("user", "string"), ("limit", "u64")))
GET_ORDERS_BY_TOKEN_PAIR = Schema(
    "getOrdersByTokenPair",
    (("token_in", "string"), ("token_out", "string"), ("limit", "u64")),
)

BALANCE_OF = Schema("balanceOf", (("account", "string"),))
ALLOWANCE = Schema("allowance", (("owner", "string"), ("spender", "string")))
INCREASE_ALLOWANCE = Schema("increaseAllowance", (("spender", "string"), ("amount", "u256")))

CREATE_POOL = Schema("createPool", (("token_a", "string"), ("token_b", "string"), ("fee", "u64")))
IS_POOL_EXIST = Schema("isPoolExist", (("token_a", "string"), ("token_b", "string"), ("fee", "u64")))
GET_POOL = Schema("getPool", (("token_a", "string"), ("token_b", "string"), ("fee", "u64")))

GET_POSITION = Schema(
    "getPosition",
    (("owner", "string"), ("tick_lower", "i32"), ("tick_upper", "i32")),
)
MINT = Schema(
    "mint",
    (
        ("recipient", "string"),
        ("tick_lower", "i32"),
        ("tick_upper", "i32"),
        ("amount", "u128"),
    ),
)
BURN = Schema("burn", (("tick_lower", "i32"), ("tick_upper", "i32"), ("amount", "u128")))
SWAP = Schema(
    "swap",
    (
        ("recipient", "string"),
        ("zero_for_one", "bool"),
        ("amount_specified", "i128"),
        ("sqrt_price_limit_x96", "u256"),
    ),
)
COLLECT = Schema(
    "collect",
    (
        ("recipient", "string"),
        ("tick_lower", "i32"),
        ("tick_upper", "i32"),
        ("amount0_requested", "u128"),
        ("amount1_requested", "u128"),
    ),
)


__all__ = [
    "FIELD_TYPES",
    "Schema",
    "decode_raw_string",
    "decode_record_list",
    "decode_value",
    "encode_record_list",
    "encode_value",
]
