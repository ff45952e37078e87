"""Input validation and operand parsing."""

import math
import re
from typing import TypeVar

from deskcalc.exceptions import InvalidInputError, OutOfRangeError
from deskcalc.state import BaseMode

T = TypeVar("T", int, float)

# Signed 64-bit integer limits used by programmer mode
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
_UINT64_MASK = 2**64 - 1

_DECIMAL_LITERAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_INCOMPLETE_EXPONENTS = frozenset({"E", "e", "E-", "e-"})
_PARTIAL_ZERO = frozenset({".", "-"})

INVALID_FORMAT = "Invalid Format: Number Expected."
INVALID_PROGRAMMER_FORMAT = "Prog Error: Invalid Num Format."


def validate_number(value: T) -> T:
    """
    Validate that a value is a finite number.

    Args:
        value: The value to validate

    Returns:
        The validated value

    Raises:
        InvalidInputError: If value is NaN, Inf, or not a number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(value, f"Expected number, got {type(value).__name__}")

    if isinstance(value, float):
        if math.isnan(value):
            raise InvalidInputError(value, "NaN is not allowed")
        if math.isinf(value):
            raise InvalidInputError(value, "Infinity is not allowed")

    return value


def validate_positive(value: T, allow_zero: bool = False) -> T:
    """
    Validate that a value is positive.

    Args:
        value: The value to validate
        allow_zero: Whether zero is considered valid

    Returns:
        The validated value

    Raises:
        InvalidInputError: If value is not positive
    """
    validate_number(value)

    if allow_zero:
        if value < 0:
            raise InvalidInputError(value, "Value must be non-negative")
    elif value <= 0:
        raise InvalidInputError(value, "Value must be positive")

    return value


def validate_range(
    value: T,
    min_val: float | None = None,
    max_val: float | None = None,
    inclusive: bool = True,
) -> T:
    """
    Validate that a value is within a specified range.

    Args:
        value: The value to validate
        min_val: Minimum allowed value (None for no limit)
        max_val: Maximum allowed value (None for no limit)
        inclusive: Whether bounds are inclusive

    Returns:
        The validated value

    Raises:
        OutOfRangeError: If value is outside the range
    """
    validate_number(value)

    if min_val is not None:
        if inclusive and value < min_val:
            raise OutOfRangeError(value, min_val, max_val)
        if not inclusive and value <= min_val:
            raise OutOfRangeError(value, min_val, max_val)

    if max_val is not None:
        if inclusive and value > max_val:
            raise OutOfRangeError(value, min_val, max_val)
        if not inclusive and value >= max_val:
            raise OutOfRangeError(value, min_val, max_val)

    return value


def is_valid_digit(digit: str, base: BaseMode) -> bool:
    """Whether ``digit`` is a single character valid in ``base`` (case-insensitive)."""
    return base.accepts(digit)


def is_partial_zero(text: str) -> bool:
    """Text such as "." or "-" that is still being typed and counts as zero."""
    return text in _PARTIAL_ZERO


def parse_decimal(text: str) -> float:
    """
    Parse operand text typed in normal or scientific mode.

    A comma is accepted as the decimal separator.

    Raises:
        InvalidInputError: If the text is not a decimal literal
    """
    normalized = text.replace(",", ".")
    if normalized in _INCOMPLETE_EXPONENTS or not normalized:
        raise InvalidInputError(text)
    if not _DECIMAL_LITERAL.fullmatch(normalized):
        raise InvalidInputError(text, INVALID_FORMAT)
    return float(normalized)


def parse_integer(text: str, base: BaseMode) -> int:
    """
    Parse operand text typed in programmer mode as a signed 64-bit integer.

    Raises:
        InvalidInputError: If the text has digits outside ``base`` or does
            not fit in a signed 64-bit integer
    """
    sign, digits = "", text
    if digits[:1] in ("+", "-"):
        sign, digits = digits[0], digits[1:]
    if not digits or not all(base.accepts(d) for d in digits):
        raise InvalidInputError(text, INVALID_PROGRAMMER_FORMAT)

    value = int(sign + digits, base.radix)
    if not INT64_MIN <= value <= INT64_MAX:
        raise InvalidInputError(text, INVALID_PROGRAMMER_FORMAT)
    return value


def to_int64(value: float) -> int:
    """
    Truncate a float to a signed 64-bit integer.

    Truncates toward zero and saturates at the 64-bit limits; NaN maps to 0.
    """
    if math.isnan(value):
        return 0
    if value >= INT64_MAX:
        return INT64_MAX
    if value <= INT64_MIN:
        return INT64_MIN
    return int(value)


def wrap_int64(value: int) -> int:
    """Reduce an arbitrary integer to signed 64-bit two's complement."""
    value &= _UINT64_MASK
    if value > INT64_MAX:
        value -= 2**64
    return value


def to_unsigned64(value: int) -> int:
    """Raw 64-bit pattern of a signed value, as a non-negative integer."""
    return value & _UINT64_MASK
