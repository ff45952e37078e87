"""Unit tests for validators and operand parsing."""

import pytest

from deskcalc import BaseMode, InvalidInputError, OutOfRangeError
from deskcalc.validators import (
    INT64_MAX,
    INT64_MIN,
    parse_decimal,
    parse_integer,
    to_int64,
    validate_number,
    validate_positive,
    validate_range,
    wrap_int64,
)


class TestValidateNumber:
    """Tests for validate_number function."""

    def test_accepts_int(self):
        assert validate_number(42) == 42

    def test_accepts_float(self):
        assert validate_number(3.14) == 3.14

    def test_rejects_nan(self):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_number(float("nan"))
        assert "NaN" in str(exc_info.value)

    def test_rejects_positive_inf(self):
        with pytest.raises(InvalidInputError) as exc_info:
            validate_number(float("inf"))
        assert "Infinity" in str(exc_info.value)

    def test_rejects_string(self):
        with pytest.raises(InvalidInputError):
            validate_number("42")  # type: ignore

    def test_rejects_bool(self):
        with pytest.raises(InvalidInputError):
            validate_number(True)


class TestValidatePositive:
    """Tests for validate_positive function."""

    def test_accepts_positive_float(self):
        assert validate_positive(0.001) == 0.001

    def test_rejects_zero_by_default(self):
        with pytest.raises(InvalidInputError):
            validate_positive(0)

    def test_accepts_zero_when_allowed(self):
        assert validate_positive(0, allow_zero=True) == 0

    def test_rejects_negative_even_with_allow_zero(self):
        with pytest.raises(InvalidInputError):
            validate_positive(-1, allow_zero=True)


class TestValidateRange:
    """Tests for validate_range function."""

    def test_accepts_bounds_inclusive(self):
        assert validate_range(0, min_val=0, max_val=15) == 0
        assert validate_range(15, min_val=0, max_val=15) == 15

    def test_rejects_value_at_max_exclusive(self):
        with pytest.raises(OutOfRangeError):
            validate_range(15, min_val=0, max_val=15, inclusive=False)

    def test_rejects_above_max(self):
        with pytest.raises(OutOfRangeError):
            validate_range(16, min_val=0, max_val=15)

    def test_min_only(self):
        assert validate_range(100, min_val=1) == 100
        with pytest.raises(OutOfRangeError):
            validate_range(0, min_val=1)


class TestParseDecimal:
    """Tests for parsing normal-mode operand text."""

    def test_integer_text(self):
        assert parse_decimal("42") == 42.0

    def test_fraction_and_trailing_point(self):
        assert parse_decimal("3.25") == 3.25
        assert parse_decimal("7.") == 7.0

    def test_negative(self):
        assert parse_decimal("-0.5") == -0.5

    def test_comma_is_decimal_separator(self):
        assert parse_decimal("2,5") == 2.5

    def test_exponent(self):
        assert parse_decimal("1.5E3") == 1500.0

    @pytest.mark.parametrize("text", ["E", "e", "E-", "e-"])
    def test_bare_exponent_marker_cannot_parse(self, text):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_decimal(text)
        assert exc_info.value.message == "Invalid Input: Cannot parse."

    @pytest.mark.parametrize("text", ["5E", "abc", "1.2.3", "inf", "nan", "1_000"])
    def test_rejects_non_literals(self, text):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_decimal(text)
        assert exc_info.value.message == "Invalid Format: Number Expected."


class TestParseInteger:
    """Tests for parsing programmer-mode operand text."""

    def test_hex(self):
        assert parse_integer("FF", BaseMode.HEX) == 255

    def test_hex_lower_case(self):
        assert parse_integer("ff", BaseMode.HEX) == 255

    def test_binary_and_octal(self):
        assert parse_integer("1010", BaseMode.BIN) == 10
        assert parse_integer("17", BaseMode.OCT) == 15

    def test_signed(self):
        assert parse_integer("-12", BaseMode.DEC) == -12

    def test_rejects_digit_outside_base(self):
        with pytest.raises(InvalidInputError) as exc_info:
            parse_integer("102", BaseMode.BIN)
        assert exc_info.value.message == "Prog Error: Invalid Num Format."

    def test_rejects_prefix(self):
        with pytest.raises(InvalidInputError):
            parse_integer("0x1F", BaseMode.HEX)

    def test_range_is_signed_64_bit(self):
        assert parse_integer("7FFFFFFFFFFFFFFF", BaseMode.HEX) == INT64_MAX
        with pytest.raises(InvalidInputError):
            parse_integer("FFFFFFFFFFFFFFFF", BaseMode.HEX)


class TestIntegerConversions:
    """Tests for the 64-bit helpers."""

    def test_to_int64_truncates_toward_zero(self):
        assert to_int64(2.9) == 2
        assert to_int64(-2.9) == -2

    def test_to_int64_saturates(self):
        assert to_int64(1e300) == INT64_MAX
        assert to_int64(-1e300) == INT64_MIN
        assert to_int64(float("inf")) == INT64_MAX

    def test_to_int64_nan_is_zero(self):
        assert to_int64(float("nan")) == 0

    def test_wrap_int64(self):
        assert wrap_int64(INT64_MAX + 1) == INT64_MIN
        assert wrap_int64(-1) == -1
        assert wrap_int64(2**64 + 5) == 5
