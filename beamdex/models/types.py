"""Shared type definitions for BeamDEX models.

These types are used by the order models, pool models and the JSON API.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from beamdex.constants import NATIVE_MAS, UINT256_MAX

# Base58 alphabet used by Massa addresses (no 0, O, I, l)
_BASE58_CHARS = frozenset("123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz")

# User accounts start with AU, smart contracts with AS
ADDRESS_PREFIXES = ("AU", "AS")


def validate_uint256(value: Any) -> str:
    """Coerce an amount to a u256 decimal string.

    Token amounts cross the JSON boundary as strings because they routinely
    exceed 2^53. Accepts ints and decimal strings; rejects bools and values
    outside [0, 2^256).
    """
    if isinstance(value, bool) or not isinstance(value, int | str):
        raise ValueError(f"Expected a u256 amount, got {type(value).__name__}")

    try:
        amount = int(value)
    except ValueError as err:
        raise ValueError(f"Amount is not a decimal integer: '{value}'") from err

    if not 0 <= amount <= UINT256_MAX:
        raise ValueError(f"Amount out of u256 range: {value}")
    return str(amount)


# 256-bit unsigned integer as decimal string (validated)
Uint256 = Annotated[
    str,
    BeforeValidator(validate_uint256),
    Field(description="256-bit unsigned integer as decimal string"),
]

# Massa address or the native coin pseudo-token
Address = Annotated[str, Field(pattern=r"^(A[US][1-9A-HJ-NP-Za-km-z]{40,60}|NATIVE_MAS)$")]


def normalize_address(address: str, *, validate: bool = False) -> str:
    """Normalize a Massa address for comparison.

    Massa addresses are case-sensitive base58, so normalization only strips
    surrounding whitespace.

    Args:
        address: A Massa address ("AU..." / "AS...") or "NATIVE_MAS"
        validate: If True, raises ValueError for invalid addresses

    Returns:
        The stripped address

    Raises:
        ValueError: If validate=True and address is not a valid address
    """
    addr = address.strip()

    if validate and not is_valid_address(addr):
        raise ValueError(f"Invalid address: {address}")

    return addr


def is_valid_address(address: str) -> bool:
    """Check if a string is a plausible Massa address.

    Checks prefix and alphabet only; the base58check checksum is verified
    by the node when the address is used.
    """
    if not isinstance(address, str):
        return False
    if address == NATIVE_MAS:
        return True
    if not address.startswith(ADDRESS_PREFIXES):
        return False
    body = address[2:]
    if not 40 <= len(body) <= 60:
        return False
    return all(c in _BASE58_CHARS for c in body)


def is_native(address: str) -> bool:
    """True for the native coin pseudo-token."""
    return normalize_address(address) == NATIVE_MAS
