"""Error taxonomy for the BeamDEX client core.

Four families of failure reach the UI boundary:
- ValidationError: bad input caught before any network call (never retried)
- GatewayError: transport or RPC failure (user re-triggers the action)
- ChainRejectionError: a contract assertion rejected the operation
- WalletNotConnectedError: a state-changing call without a wallet

An unavailable quote is not an error; see beamdex.quoting.result.QuoteResult.
"""

from __future__ import annotations

import re

# Assertion codes raised by the order managers, pool and token contracts
_REASON_PATTERN = re.compile(r"\b([A-Z][A-Z0-9]*(?:_[A-Z0-9]+)+)\b")


class BeamDexError(Exception):
    """Base class for all client core errors."""

    pass


class ValidationError(BeamDexError, ValueError):
    """Input rejected client-side before any gateway call."""

    pass


class OrderValidationError(ValidationError):
    """An order parameter failed client-side validation.

    Attributes:
        field: Name of the offending parameter (e.g., "amount_in")
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class PriceError(ValidationError):
    """Price is non-positive, NaN or infinite."""

    pass


class TickRangeError(ValidationError):
    """Tick falls outside the protocol tick bounds."""

    pass


class CodecError(BeamDexError, ValueError):
    """Argument buffer could not be encoded or decoded."""

    pass


class GatewayError(BeamDexError):
    """Transport or RPC failure talking to the contract gateway."""

    pass


class OperationTimeoutError(GatewayError):
    """Gave up waiting for an operation to reach finality.

    The operation itself may still execute; a submitted state change
    cannot be revoked from the client.
    """

    def __init__(self, operation_id: str, timeout: float) -> None:
        super().__init__(f"Operation {operation_id} not final after {timeout:.0f}s")
        self.operation_id = operation_id
        self.timeout = timeout


class ChainRejectionError(BeamDexError):
    """The contract rejected the operation.

    Attributes:
        message: Verbatim error text from the gateway
        reason: Recognised assertion code (e.g., "ORDER_NOT_FOUND"), if any
        function: Contract function that was being called, if known
    """

    def __init__(self, message: str, function: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.function = function
        self.reason = extract_reason(message)


class WalletNotConnectedError(BeamDexError):
    """A state-changing call was attempted without a connected wallet."""

    def __init__(self, message: str = "Wallet not connected") -> None:
        super().__init__(message)


def extract_reason(message: str) -> str | None:
    """Pull the contract assertion code out of a gateway error message.

    Args:
        message: Raw error text, e.g. "... Runtime error: ORDER_NOT_FOUND at ..."

    Returns:
        The first UPPER_SNAKE_CASE token, or None if there is none
    """
    match = _REASON_PATTERN.search(message)
    return match.group(1) if match else None


__all__ = [
    "BeamDexError",
    "ValidationError",
    "OrderValidationError",
    "PriceError",
    "TickRangeError",
    "CodecError",
    "GatewayError",
    "OperationTimeoutError",
    "ChainRejectionError",
    "WalletNotConnectedError",
    "extract_reason",
]
