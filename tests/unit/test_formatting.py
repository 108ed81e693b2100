"""Tests for display formatting helpers."""

from datetime import datetime, timezone

import pytest

from beamdex.constants import Q96
from beamdex.errors import ValidationError
from beamdex.formatting import (
    expiry_datetime,
    format_address,
    format_compact,
    format_percent,
    format_price_q96,
    format_timestamp,
    format_token_amount,
    parse_token_amount,
    periods_to_time,
)
from tests.helpers import USER


class TestTokenAmounts:
    def test_format(self):
        assert format_token_amount(1_500_000_000_000_000_000) == "1.5"
        assert format_token_amount(123_456_789, decimals=6) == "123.456789"
        assert format_token_amount("2000000", decimals=6) == "2"

    def test_format_truncates(self):
        assert format_token_amount(1, decimals=18) == "0"
        assert format_token_amount(1_234_567_891, decimals=9, max_decimals=2) == "1.23"

    def test_format_negative(self):
        assert format_token_amount(-1_500_000, decimals=6) == "-1.5"

    def test_parse(self):
        assert parse_token_amount("1.5", decimals=6) == 1_500_000
        assert parse_token_amount(" 1,000 ", decimals=0) == 1000

    def test_parse_truncates_extra_digits(self):
        assert parse_token_amount("0.1234567", decimals=6) == 123456

    def test_parse_keeps_full_precision(self):
        """No float rounding: 0.1 + 18 decimals is exact."""
        assert parse_token_amount("0.1") == 10**17

    @pytest.mark.parametrize("text", ["abc", "-1", "", "NaN", "Infinity"])
    def test_parse_rejects(self, text):
        with pytest.raises(ValidationError):
            parse_token_amount(text)

    def test_parse_too_large(self):
        with pytest.raises(ValidationError):
            parse_token_amount("1e100")


class TestPrices:
    def test_price_q96(self):
        assert format_price_q96(Q96) == "1"
        assert format_price_q96(3 * Q96 // 2) == "1.5"
        assert format_price_q96(Q96 // 3, places=4) == "0.3333"


class TestNumbers:
    def test_percent(self):
        assert format_percent(1.234) == "1.23%"
        assert format_percent(40.0, decimals=0) == "40%"

    def test_compact(self):
        assert format_compact(1500) == "1.50K"
        assert format_compact(2_500_000) == "2.50M"
        assert format_compact(3_000_000_000) == "3.00B"
        assert format_compact(12) == "12.00"

    def test_address(self):
        assert format_address(USER) == f"{USER[:6]}...{USER[-4:]}"
        assert format_address("AU12") == "AU12"


class TestTimes:
    def test_periods_to_time(self):
        assert periods_to_time(60) == "16m"
        assert periods_to_time(225) == "1h 0m"
        assert periods_to_time(10800) == "2d 0h"

    def test_expiry_datetime(self):
        assert expiry_datetime(1_700_000_000, 0) is None
        assert expiry_datetime(1_700_000_000, 60) == datetime.fromtimestamp(
            1_700_000_060, tz=timezone.utc
        )

    def test_format_timestamp(self):
        assert format_timestamp(0) == "Jan 01, 1970 00:00 UTC"
