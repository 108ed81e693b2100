"""Conversion of core errors into user-facing messages.

Every failure the core raises is recovered at the UI boundary through
``to_display_message``. Recognised contract assertions get a friendly
label; anything else is shown verbatim.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

import structlog

from beamdex.errors import (
    BeamDexError,
    ChainRejectionError,
    GatewayError,
    OperationTimeoutError,
    OrderValidationError,
    ValidationError,
    WalletNotConnectedError,
)

logger = structlog.get_logger()

APPROVE_TOKENS_FIRST = "Approve tokens first"


class MessageKind(str, Enum):
    VALIDATION = "validation"
    WALLET = "wallet"
    NETWORK = "network"
    TIMEOUT = "timeout"
    REJECTED = "rejected"
    ERROR = "error"


@dataclass(frozen=True)
class DisplayMessage:
    """A message ready for display.

    Attributes:
        kind: Broad category, drives styling
        text: Text shown to the user
        field: Offending input, for inline validation messages
        reason: Contract assertion code, when recognised
    """

    kind: MessageKind
    text: str
    field: str | None = None
    reason: str | None = None


# Contract assertion codes with a friendlier label
FRIENDLY_REASONS: dict[str, str] = {
    "INSUFFICIENT_ALLOWANCE": APPROVE_TOKENS_FIRST,
    "INSUFFICIENT_MAS_SENT": "Not enough MAS attached to cover the order",
    "INSUFFICIENT_BALANCE": "Insufficient balance",
    "INSUFFICIENT_LIQUIDITY": "Not enough liquidity in the pool",
    "INSUFFICIENT_OUTPUT_AMOUNT": "Output below your minimum; try a higher slippage",
    "ORDER_NOT_FOUND": "Order not found",
    "GRID_NOT_FOUND": "Grid order not found",
    "LEVEL_NOT_FOUND": "Grid level not found",
    "NOT_ORDER_OWNER": "Only the order owner can do that",
    "NOT_GRID_OWNER": "Only the grid owner can do that",
    "ORDER_EXPIRED": "Order has expired",
    "ORDER_ALREADY_FILLED": "Order is already filled",
    "ORDER_ALREADY_CANCELLED": "Order is already cancelled",
    "ORDER_CANCELLED": "Order is cancelled",
    "ORDER_NOT_ACTIVE": "Order is no longer active",
    "GRID_NOT_ACTIVE": "Grid is no longer active",
    "POOL_NOT_FOUND": "Pool does not exist",
    "POOL_ALREADY_EXISTS": "A pool for this pair and fee already exists",
    "FEE_NOT_ENABLED": "Fee tier is not enabled",
    "IDENTICAL_TOKENS": "Tokens must be different",
    "TOKENS_MUST_BE_DIFFERENT": "Tokens must be different",
    "PRICE_LIMIT_INVALID": "Price limit is on the wrong side of the current price",
}

# Free-text gateway messages without an assertion code
_TEXT_PATTERNS: list[tuple[re.Pattern[str], str, str]] = [
    (
        re.compile(r"insufficient\s+allowance|allowance\s+exceeded", re.I),
        "INSUFFICIENT_ALLOWANCE",
        APPROVE_TOKENS_FIRST,
    ),
    (
        re.compile(r"pool\s+(does\s+not|doesn't)\s+exist|pool\s+not\s+found", re.I),
        "POOL_NOT_FOUND",
        "Pool does not exist",
    ),
    (
        re.compile(r"insufficient\s+balance", re.I),
        "INSUFFICIENT_BALANCE",
        "Insufficient balance",
    ),
]


def friendly_chain_message(error: ChainRejectionError) -> tuple[str, str | None]:
    """(text, reason) for a chain rejection; unknown messages pass through verbatim."""
    if error.reason and error.reason in FRIENDLY_REASONS:
        return FRIENDLY_REASONS[error.reason], error.reason
    for pattern, reason, text in _TEXT_PATTERNS:
        if pattern.search(error.message):
            return text, reason
    return error.message, error.reason


def to_display_message(error: BaseException) -> DisplayMessage:
    """Convert any core error into a DisplayMessage.

    Non-core exceptions are logged and shown as a generic failure so they
    never escape the UI boundary.
    """
    if isinstance(error, OrderValidationError):
        return DisplayMessage(MessageKind.VALIDATION, str(error), field=error.field)
    if isinstance(error, ValidationError):
        return DisplayMessage(MessageKind.VALIDATION, str(error))
    if isinstance(error, WalletNotConnectedError):
        return DisplayMessage(MessageKind.WALLET, "Connect your wallet first")
    if isinstance(error, OperationTimeoutError):
        return DisplayMessage(
            MessageKind.TIMEOUT,
            "Still waiting for confirmation; check the order list shortly",
        )
    if isinstance(error, ChainRejectionError):
        text, reason = friendly_chain_message(error)
        return DisplayMessage(MessageKind.REJECTED, text, reason=reason)
    if isinstance(error, GatewayError):
        return DisplayMessage(MessageKind.NETWORK, f"Network error: {error}")
    if isinstance(error, BeamDexError):
        return DisplayMessage(MessageKind.ERROR, str(error))

    logger.error("unexpected_error", error_type=type(error).__name__, error=str(error))
    return DisplayMessage(MessageKind.ERROR, "Something went wrong")


__all__ = [
    "APPROVE_TOKENS_FIRST",
    "DisplayMessage",
    "FRIENDLY_REASONS",
    "MessageKind",
    "friendly_chain_message",
    "to_display_message",
]
