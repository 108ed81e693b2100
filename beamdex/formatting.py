"""Display formatting.

Everything here produces strings or datetimes for presentation. Nothing
returned by these helpers is converted back into a call argument, with
the exception of ``parse_token_amount``, which parses user input exactly.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import ROUND_DOWN, Context, Decimal, InvalidOperation, localcontext

from beamdex.constants import SECONDS_PER_PERIOD
from beamdex.errors import ValidationError
from beamdex.math.fixed_point import WORKING_PRECISION, to_decimal


def format_token_amount(amount: int | str, decimals: int = 18, max_decimals: int = 6) -> str:
    """Integer token amount to a decimal string, truncated to max_decimals.

    Trailing zeros are dropped: 1_500_000_000_000_000_000 -> "1.5".
    """
    value = int(amount)
    sign = "-" if value < 0 else ""
    whole, remainder = divmod(abs(value), 10**decimals)
    if remainder == 0:
        return f"{sign}{whole}"
    fraction = str(remainder).rjust(decimals, "0")[:max_decimals].rstrip("0")
    return f"{sign}{whole}.{fraction}" if fraction else f"{sign}{whole}"


def parse_token_amount(text: str, decimals: int = 18) -> int:
    """Parse a user-entered decimal string into integer token units.

    Digits beyond ``decimals`` are truncated. No float is involved.

    Raises:
        ValidationError: If text is not a non-negative decimal number
    """
    cleaned = text.strip().replace(",", "")
    try:
        value = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValidationError(f"Not a valid amount: {text!r}") from e
    if not value.is_finite() or value < 0:
        raise ValidationError(f"Not a valid amount: {text!r}")
    try:
        with localcontext(Context(prec=WORKING_PRECISION)):
            scaled = value.scaleb(decimals).quantize(Decimal(1), rounding=ROUND_DOWN)
    except InvalidOperation as e:
        raise ValidationError(f"Amount too large: {text!r}") from e
    return int(scaled)


def format_price_q96(q: int, places: int = 6) -> str:
    """Q64.96 price as a fixed-point string, trailing zeros removed."""
    price = to_decimal(q, places)
    text = f"{price:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_percent(value: float | Decimal, decimals: int = 2) -> str:
    return f"{Decimal(str(value)):.{decimals}f}%"


def format_compact(value: float | Decimal) -> str:
    """Large numbers with K / M / B suffixes."""
    number = Decimal(str(value))
    for threshold, suffix in ((Decimal("1e9"), "B"), (Decimal("1e6"), "M"), (Decimal("1e3"), "K")):
        if number >= threshold:
            return f"{number / threshold:.2f}{suffix}"
    return f"{number:.2f}"


def format_address(address: str, start_chars: int = 6, end_chars: int = 4) -> str:
    if not address or len(address) < start_chars + end_chars:
        return address
    return f"{address[:start_chars]}...{address[-end_chars:]}"


def periods_to_time(periods: int, seconds_per_period: int = SECONDS_PER_PERIOD) -> str:
    """Human-readable duration of a number of chain periods ("2d 3h", "1h 4m", "16m")."""
    seconds = periods * seconds_per_period
    days, rest = divmod(seconds, 86400)
    hours, rest = divmod(rest, 3600)
    minutes = rest // 60
    if days > 0:
        return f"{days}d {hours}h"
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def expiry_datetime(created_at: int, expiry: int) -> datetime | None:
    """Expiry of a limit order as a UTC datetime, None for orders that never expire."""
    if expiry == 0:
        return None
    return datetime.fromtimestamp(created_at + expiry, tz=timezone.utc)


def format_timestamp(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%b %d, %Y %H:%M UTC")


__all__ = [
    "expiry_datetime",
    "format_address",
    "format_compact",
    "format_percent",
    "format_price_q96",
    "format_timestamp",
    "format_token_amount",
    "parse_token_amount",
    "periods_to_time",
]
