"""Arithmetic rules for the calculator's operators and functions.

Float rules check for non-finite results; integer rules use signed 64-bit
two's-complement arithmetic and wrap on overflow. Each operator kind is a
closed enum whose members know how to evaluate themselves.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import TYPE_CHECKING

from deskcalc.exceptions import (
    DivisionByZeroError,
    DomainError,
    OverflowError,
    ReciprocalOfZeroError,
    UndefinedResultError,
    UnknownOperatorError,
)
from deskcalc.state import AngleMode
from deskcalc.validators import wrap_int64

if TYPE_CHECKING:
    from collections.abc import Callable

# Tolerance for "is zero" checks on floats
EPSILON = 1e-12

# Non-zero unary results smaller than this are shown as zero
UNARY_SNAP_THRESHOLD = 1e-15


def check_finite(result: float, operation: str, *operands: float) -> float:
    """Return ``result`` or raise OverflowError if it is infinite or NaN."""
    if not math.isfinite(result):
        raise OverflowError(operation, *operands)
    return result


def add(a: float, b: float) -> float:
    """
    Add two numbers.

    Raises:
        OverflowError: If the result is not finite
    """
    return check_finite(a + b, "addition", a, b)


def subtract(a: float, b: float) -> float:
    """
    Subtract b from a.

    Raises:
        OverflowError: If the result is not finite
    """
    return check_finite(a - b, "subtraction", a, b)


def multiply(a: float, b: float) -> float:
    """
    Multiply two numbers.

    Raises:
        OverflowError: If the result is not finite
    """
    return check_finite(a * b, "multiplication", a, b)


def divide(a: float, b: float, epsilon: float = EPSILON) -> float:
    """
    Divide a by b.

    Any divisor within ``epsilon`` of zero counts as zero.

    Args:
        a: Dividend
        b: Divisor
        epsilon: Zero tolerance for the divisor

    Returns:
        Quotient of a and b

    Raises:
        DivisionByZeroError: If b is (nearly) zero
        OverflowError: If the result is not finite
    """
    if abs(b) < epsilon:
        raise DivisionByZeroError(a)
    return check_finite(a / b, "division", a, b)


def power(base: float, exponent: float) -> float:
    """
    Raise base to the power of exponent.

    Undefined cases (zero to a negative power, a negative base with a
    fractional exponent) are reported the same way as overflow.

    Raises:
        OverflowError: If the result is undefined or not finite
    """
    try:
        result = math.pow(base, exponent)
    except (ValueError, ArithmeticError) as e:
        raise OverflowError("exponentiation", base, exponent) from e
    return check_finite(result, "exponentiation", base, exponent)


def int_divide(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    if b == 0:
        raise DivisionByZeroError(a, "Prog Error: Div by Zero")
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def int_modulo(a: int, b: int) -> int:
    """Integer remainder carrying the sign of the dividend."""
    if b == 0:
        raise DivisionByZeroError(a, "Prog Error: Mod by Zero")
    return a - b * int_divide(a, b)


def shift_left(a: int, b: int) -> int:
    # shift counts use the low six bits, as on a 64-bit register
    return a << (b & 63)


def shift_right(a: int, b: int) -> int:
    return a >> (b & 63)


class BinaryOperator(Enum):
    """Operators that combine the previous value with the current one."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "x^y"
    MOD = "Mod"
    AND = "AND"
    OR = "OR"
    XOR = "XOR"
    LSH = "Lsh"
    RSH = "Rsh"

    @property
    def is_additive(self) -> bool:
        return self in (BinaryOperator.ADD, BinaryOperator.SUBTRACT)

    @property
    def is_multiplicative(self) -> bool:
        return self in (BinaryOperator.MULTIPLY, BinaryOperator.DIVIDE)

    def apply_float(self, left: float, right: float, epsilon: float = EPSILON) -> float:
        """
        Evaluate with float arithmetic (normal and scientific modes).

        Raises:
            UnknownOperatorError: If the operator only exists in programmer mode
            DivisionByZeroError: If dividing by (nearly) zero
            OverflowError: If the result is not finite
        """
        if self is BinaryOperator.DIVIDE:
            return divide(left, right, epsilon)
        rule = _FLOAT_RULES.get(self)
        if rule is None:
            raise UnknownOperatorError(self.value)
        return rule(left, right)

    def apply_int(self, left: int, right: int) -> int:
        """
        Evaluate with signed 64-bit integer arithmetic (programmer mode).

        Raises:
            UnknownOperatorError: If the operator has no integer meaning
            DivisionByZeroError: If dividing or taking a remainder by zero
        """
        rule = _INTEGER_RULES.get(self)
        if rule is None:
            raise UnknownOperatorError(self.value, "Prog Error: Unknown Op")
        return wrap_int64(rule(left, right))


_FLOAT_RULES: dict[BinaryOperator, Callable[[float, float], float]] = {
    BinaryOperator.ADD: add,
    BinaryOperator.SUBTRACT: subtract,
    BinaryOperator.MULTIPLY: multiply,
    BinaryOperator.POWER: power,
}

_INTEGER_RULES: dict[BinaryOperator, Callable[[int, int], int]] = {
    BinaryOperator.ADD: lambda a, b: a + b,
    BinaryOperator.SUBTRACT: lambda a, b: a - b,
    BinaryOperator.MULTIPLY: lambda a, b: a * b,
    BinaryOperator.DIVIDE: int_divide,
    BinaryOperator.MOD: int_modulo,
    BinaryOperator.AND: lambda a, b: a & b,
    BinaryOperator.OR: lambda a, b: a | b,
    BinaryOperator.XOR: lambda a, b: a ^ b,
    BinaryOperator.LSH: shift_left,
    BinaryOperator.RSH: shift_right,
}


def log10(value: float) -> float:
    if value <= 0:
        raise DomainError("log", value, "Log Error: Argument <= 0.")
    return math.log10(value)


def ln(value: float) -> float:
    if value <= 0:
        raise DomainError("ln", value, "Ln Error: Argument <= 0.")
    return math.log(value)


def square_root(value: float) -> float:
    if value < 0:
        raise DomainError("sqrt", value, "Sqrt Error: Argument < 0.")
    return math.sqrt(value)


def square(value: float) -> float:
    return value * value


def reciprocal(value: float, epsilon: float = EPSILON) -> float:
    if abs(value) < epsilon:
        raise ReciprocalOfZeroError()
    return 1.0 / value


def bitwise_not(value: int) -> int:
    """Complement of a signed 64-bit integer; ``bitwise_not(0) == -1``."""
    return wrap_int64(~value)


class UnaryOperator(Enum):
    """Functions of the current value alone."""

    LOG = "log"
    LN = "ln"
    SQRT = "sqrt"
    SQUARE = "x²"
    RECIPROCAL = "1/x"
    NOT = "NOT"

    def apply_float(self, value: float, epsilon: float = EPSILON) -> float:
        """
        Evaluate in normal or scientific mode.

        Non-zero results below ``UNARY_SNAP_THRESHOLD`` in magnitude become 0.

        Raises:
            DomainError: If the argument is outside the function's domain
            ReciprocalOfZeroError: For 1/x of (nearly) zero
            UnknownOperatorError: For NOT, which only exists in programmer mode
            OverflowError: If the result is not finite
        """
        if self is UnaryOperator.RECIPROCAL:
            result = reciprocal(value, epsilon)
        elif self is UnaryOperator.NOT:
            raise UnknownOperatorError(self.value, "Unknown Unary Operation: Internal Error.")
        else:
            result = _UNARY_RULES[self](value)
        if result != 0.0 and abs(result) < UNARY_SNAP_THRESHOLD:
            result = 0.0
        return check_finite(result, self.value, value)


_UNARY_RULES: dict[UnaryOperator, Callable[[float], float]] = {
    UnaryOperator.LOG: log10,
    UnaryOperator.LN: ln,
    UnaryOperator.SQRT: square_root,
    UnaryOperator.SQUARE: square,
}


class TrigFunction(Enum):
    """Trigonometric functions of the current value."""

    SIN = "sin"
    COS = "cos"
    TAN = "tan"

    def apply(self, angle: float, mode: AngleMode, epsilon: float = EPSILON) -> float:
        """
        Evaluate at ``angle`` expressed in ``mode`` units.

        At odd multiples of a right angle cosine is exactly zero and tangent
        is undefined. Results smaller than ``epsilon`` in magnitude become 0.

        Raises:
            UndefinedResultError: For the tangent of an odd right angle
            OverflowError: If the result is not finite
        """
        check_finite(angle, self.value, angle)
        radians = to_radians(angle, mode)
        at_right_angle = is_odd_right_angle(angle, mode, epsilon)

        if self is TrigFunction.SIN:
            result = math.sin(radians)
        elif self is TrigFunction.COS:
            result = 0.0 if at_right_angle else math.cos(radians)
        else:
            if at_right_angle:
                raise UndefinedResultError(self.value, angle)
            result = math.tan(radians)

        if abs(result) < epsilon:
            result = 0.0
        return check_finite(result, self.value, angle)


def to_radians(angle: float, mode: AngleMode) -> float:
    if mode is AngleMode.DEG:
        return math.radians(angle)
    if mode is AngleMode.GRAD:
        return angle * (math.pi / 200.0)
    return angle


def is_odd_right_angle(angle: float, mode: AngleMode, epsilon: float = EPSILON) -> bool:
    """Whether ``angle`` is 90 degrees, 100 grad or pi/2 rad plus a multiple of a half turn."""
    if not math.isfinite(angle):
        return False
    if mode is AngleMode.DEG:
        return abs(math.fmod(angle, 180.0)) == 90.0
    if mode is AngleMode.GRAD:
        return abs(math.fmod(angle, 200.0)) == 100.0
    return abs(math.fmod(abs(angle), math.pi) - math.pi / 2) < epsilon
