"""Sequential binary argument buffers.

Contract functions take a single byte buffer built by appending typed
values in a fixed order, and return results in the same format:

- string / bytes: u32 little-endian length, then the payload (UTF-8 for strings)
- u8, u64, u128, u256: fixed-width little-endian
- i32, i128: fixed-width little-endian two's complement
- bool: one byte, 0 or 1

Nothing in the buffer describes its own layout, so the reader must ask for
exactly the types the writer appended. Out-of-range values and reads past
the end of the buffer raise CodecError instead of producing garbage.
"""

from __future__ import annotations

from beamdex.errors import CodecError

_LENGTH_BYTES = 4

# (width in bytes, signed)
INT_WIDTHS: dict[str, tuple[int, bool]] = {
    "u8": (1, False),
    "u32": (4, False),
    "u64": (8, False),
    "u128": (16, False),
    "u256": (32, False),
    "i32": (4, True),
    "i128": (16, True),
}


def _int_bounds(kind: str) -> tuple[int, int]:
    width, signed = INT_WIDTHS[kind]
    bits = width * 8
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def encode_int(kind: str, value: int) -> bytes:
    """Fixed-width little-endian encoding of an integer type."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise CodecError(f"{kind} expects an int, got {type(value).__name__}")
    low, high = _int_bounds(kind)
    if not low <= value <= high:
        raise CodecError(f"{kind} out of range: {value}")
    width, signed = INT_WIDTHS[kind]
    return value.to_bytes(width, "little", signed=signed)


class Args:
    """Argument buffer builder.

    Examples:
        payload = Args().add_string(token_in).add_u256(amount).serialize()
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def __len__(self) -> int:
        return len(self._buffer)

    def _add_int(self, kind: str, value: int) -> Args:
        self._buffer += encode_int(kind, value)
        return self

    def add_u8(self, value: int) -> Args:
        return self._add_int("u8", value)

    def add_u32(self, value: int) -> Args:
        return self._add_int("u32", value)

    def add_u64(self, value: int) -> Args:
        return self._add_int("u64", value)

    def add_u128(self, value: int) -> Args:
        return self._add_int("u128", value)

    def add_u256(self, value: int) -> Args:
        return self._add_int("u256", value)

    def add_i32(self, value: int) -> Args:
        return self._add_int("i32", value)

    def add_i128(self, value: int) -> Args:
        return self._add_int("i128", value)

    def add_bool(self, value: bool) -> Args:
        if not isinstance(value, bool):
            raise CodecError(f"bool expects a bool, got {type(value).__name__}")
        self._buffer.append(1 if value else 0)
        return self

    def add_bytes(self, value: bytes) -> Args:
        if not isinstance(value, (bytes, bytearray)):
            raise CodecError(f"bytes expects bytes, got {type(value).__name__}")
        self.add_u32(len(value))
        self._buffer += value
        return self

    def add_string(self, value: str) -> Args:
        if not isinstance(value, str):
            raise CodecError(f"string expects a str, got {type(value).__name__}")
        return self.add_bytes(value.encode("utf-8"))

    def serialize(self) -> bytes:
        return bytes(self._buffer)


class ArgsReader:
    """Sequential reader over a result or argument buffer."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._offset = 0

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def at_end(self) -> bool:
        return self.remaining == 0

    def _take(self, size: int, what: str) -> bytes:
        if size > self.remaining:
            raise CodecError(
                f"Buffer underflow reading {what}: need {size} bytes at offset "
                f"{self._offset}, have {self.remaining}"
            )
        chunk = self._data[self._offset : self._offset + size]
        self._offset += size
        return chunk

    def _next_int(self, kind: str) -> int:
        width, signed = INT_WIDTHS[kind]
        return int.from_bytes(self._take(width, kind), "little", signed=signed)

    def next_u8(self) -> int:
        return self._next_int("u8")

    def next_u32(self) -> int:
        return self._next_int("u32")

    def next_u64(self) -> int:
        return self._next_int("u64")

    def next_u128(self) -> int:
        return self._next_int("u128")

    def next_u256(self) -> int:
        return self._next_int("u256")

    def next_i32(self) -> int:
        return self._next_int("i32")

    def next_i128(self) -> int:
        return self._next_int("i128")

    def next_bool(self) -> bool:
        raw = self._take(1, "bool")[0]
        if raw > 1:
            raise CodecError(f"Invalid bool byte {raw} at offset {self._offset - 1}")
        return raw == 1

    def next_bytes(self) -> bytes:
        length = self.next_u32()
        return self._take(length, "bytes")

    def next_string(self) -> str:
        raw = self.next_bytes()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise CodecError(f"Invalid UTF-8 string ending at offset {self._offset}") from e


__all__ = ["Args", "ArgsReader", "INT_WIDTHS", "encode_int"]
