"""Shared types for the BeamDEX client. JSON API models live in beamdex.models.api."""

from beamdex.models.types import (
    Address,
    Uint256,
    is_native,
    is_valid_address,
    normalize_address,
    validate_uint256,
)

__all__ = [
    "Address",
    "Uint256",
    "is_native",
    "is_valid_address",
    "normalize_address",
    "validate_uint256",
]
