"""
Tests for Fractional Price codec

Coverage:
- decode: базовые значения, '+' как 4/256, границы XY
- encode: усечение до 1/256, '+' при остатке 4
- decode → encode возвращает исходную строку
- строгий разбор: невалидные строки → InvalidFractionalPrice
"""

import math

import pytest

from src.core.math import (
    TICK_SIZE,
    InvalidFractionalPrice,
    decode_fractional,
    encode_fractional,
    is_valid_fractional,
)


class TestDecodeFractional:
    """Тесты decode_fractional."""

    def test_whole_price(self):
        assert decode_fractional("99-000") == 99.0

    def test_half_tick_plus(self):
        """'+' означает 4/256."""
        assert decode_fractional("99-16+") == 99.515625

    def test_max_fraction(self):
        assert decode_fractional("100-317") == 100 + 31 / 32 + 7 / 256

    def test_plus_equals_digit_four(self):
        assert decode_fractional("99-004") == decode_fractional("99-00+")

    @pytest.mark.parametrize(
        "text",
        [
            "", "abc", "99", "99-", "99-1", "99-1234", "99-32+", "99-328", "99-00-", "-1-000", "99-0a0", "99-009",
            "９９-16+", "99-１6+", "099-000", "00-000", " 99-010 ", "99-010\n",
        ],
    )
    def test_invalid_raises(self, text):
        """Невалидная строка никогда не превращается в 0.0."""
        with pytest.raises(InvalidFractionalPrice):
            decode_fractional(text)

    def test_non_string_raises(self):
        with pytest.raises(InvalidFractionalPrice):
            decode_fractional(99.5)  # type: ignore[arg-type]

    def test_error_is_value_error(self):
        with pytest.raises(ValueError) as exc_info:
            decode_fractional("bogus")
        assert exc_info.value.text == "bogus"

    def test_is_valid_fractional(self):
        assert is_valid_fractional("99-16+")
        assert not is_valid_fractional("99-40+")


class TestEncodeFractional:
    """Тесты encode_fractional."""

    def test_whole_price(self):
        assert encode_fractional(99.0) == "99-000"

    def test_half_tick_rendered_as_plus(self):
        assert encode_fractional(99.515625) == "99-16+"

    def test_one_128th(self):
        assert encode_fractional(1.0 / 128) == "0-002"

    def test_truncates_below_tick(self):
        """Остаток меньше 1/256 отбрасывается, не округляется."""
        assert encode_fractional(99.0 + TICK_SIZE * 0.99) == "99-000"

    def test_negative_raises(self):
        with pytest.raises(ValueError):
            encode_fractional(-0.5)

    def test_non_finite_raises(self):
        with pytest.raises(ValueError):
            encode_fractional(math.inf)


class TestRoundTrip:
    """decode → encode для валидных строк."""

    @pytest.mark.parametrize("text", ["99-000", "99-16+", "100-317", "0-002", "101-253"])
    def test_round_trip(self, text):
        assert encode_fractional(decode_fractional(text)) == text

    @pytest.mark.parametrize("base", [0, 1, 99, 100, 131])
    def test_round_trip_every_tick(self, base):
        """Все XY 00..31 и все z, с '+' вместо 4."""
        for xy in range(32):
            for z_char in "0123+567":
                text = f"{base}-{xy:02d}{z_char}"
                assert encode_fractional(decode_fractional(text)) == text

    def test_digit_four_is_canonicalised(self):
        assert encode_fractional(decode_fractional("99-004")) == "99-00+"
