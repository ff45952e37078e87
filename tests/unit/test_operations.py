"""Unit tests for operator and function rules."""

import math

import pytest

from deskcalc import (
    AngleMode,
    BinaryOperator,
    DivisionByZeroError,
    DomainError,
    OverflowError,
    ReciprocalOfZeroError,
    TrigFunction,
    UnaryOperator,
    UndefinedResultError,
    UnknownOperatorError,
)
from deskcalc.operations import (
    add,
    bitwise_not,
    divide,
    int_divide,
    int_modulo,
    is_odd_right_angle,
    multiply,
    power,
    subtract,
)
from deskcalc.validators import INT64_MAX, INT64_MIN


class TestFloatArithmetic:
    """Tests for the float rules."""

    def test_add_and_subtract(self):
        assert add(2, 3) == 5
        assert subtract(3, 5) == -2

    def test_add_floats(self):
        assert abs(add(0.1, 0.2) - 0.3) < 1e-10

    def test_multiply_overflow(self):
        with pytest.raises(OverflowError):
            multiply(1e308, 10)

    def test_divide(self):
        assert divide(7, 2) == 3.5

    def test_divide_by_zero_raises(self):
        with pytest.raises(DivisionByZeroError) as exc_info:
            divide(10, 0)
        assert exc_info.value.numerator == 10
        assert exc_info.value.message == "Division by Zero"

    def test_divide_by_nearly_zero_raises(self):
        with pytest.raises(DivisionByZeroError):
            divide(1, 1e-13)

    def test_divide_by_small_but_not_tiny(self):
        assert divide(1, 1e-11) == pytest.approx(1e11)

    def test_power(self):
        assert power(2, 10) == 1024
        assert power(2, -1) == 0.5

    def test_power_undefined_is_overflow(self):
        with pytest.raises(OverflowError):
            power(-8, 0.5)
        with pytest.raises(OverflowError):
            power(0, -1)

    def test_power_overflow(self):
        with pytest.raises(OverflowError):
            power(10, 400)


class TestBinaryOperator:
    """Tests for BinaryOperator dispatch by mode."""

    def test_float_rules(self):
        assert BinaryOperator.ADD.apply_float(3, 4) == 7
        assert BinaryOperator.POWER.apply_float(2, 3) == 8

    @pytest.mark.parametrize(
        "operator",
        [BinaryOperator.MOD, BinaryOperator.AND, BinaryOperator.LSH, BinaryOperator.RSH],
    )
    def test_programmer_operators_unknown_in_float_mode(self, operator):
        with pytest.raises(UnknownOperatorError):
            operator.apply_float(6, 3)

    def test_power_unknown_in_programmer_mode(self):
        with pytest.raises(UnknownOperatorError) as exc_info:
            BinaryOperator.POWER.apply_int(2, 3)
        assert exc_info.value.message == "Prog Error: Unknown Op"

    def test_integer_wraps(self):
        assert BinaryOperator.ADD.apply_int(INT64_MAX, 1) == INT64_MIN
        assert BinaryOperator.MULTIPLY.apply_int(2**62, 4) == 0

    def test_bitwise(self):
        assert BinaryOperator.AND.apply_int(0b1100, 0b1010) == 0b1000
        assert BinaryOperator.OR.apply_int(0b1100, 0b1010) == 0b1110
        assert BinaryOperator.XOR.apply_int(0b1100, 0b1010) == 0b0110

    def test_shifts(self):
        assert BinaryOperator.LSH.apply_int(1, 4) == 16
        assert BinaryOperator.RSH.apply_int(-16, 2) == -4
        assert BinaryOperator.LSH.apply_int(1, 63) == INT64_MIN
        assert BinaryOperator.LSH.apply_int(1, 64) == 1

    def test_additive_and_multiplicative(self):
        assert BinaryOperator.SUBTRACT.is_additive
        assert BinaryOperator.DIVIDE.is_multiplicative
        assert not BinaryOperator.MOD.is_multiplicative


class TestIntegerDivision:
    """Tests for truncating division and remainder."""

    def test_truncates_toward_zero(self):
        assert int_divide(7, 2) == 3
        assert int_divide(-7, 2) == -3
        assert int_divide(7, -2) == -3

    def test_remainder_sign_follows_dividend(self):
        assert int_modulo(-7, 2) == -1
        assert int_modulo(7, -2) == 1

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError) as exc_info:
            int_divide(5, 0)
        assert exc_info.value.message == "Prog Error: Div by Zero"

    def test_modulo_by_zero(self):
        with pytest.raises(DivisionByZeroError) as exc_info:
            int_modulo(5, 0)
        assert exc_info.value.message == "Prog Error: Mod by Zero"

    def test_min_divided_by_minus_one_wraps(self):
        assert BinaryOperator.DIVIDE.apply_int(INT64_MIN, -1) == INT64_MIN


class TestUnaryOperator:
    """Tests for the unary functions."""

    def test_log_and_ln(self):
        assert UnaryOperator.LOG.apply_float(1000) == pytest.approx(3)
        assert UnaryOperator.LN.apply_float(math.e) == pytest.approx(1)

    @pytest.mark.parametrize("operation", [UnaryOperator.LOG, UnaryOperator.LN])
    @pytest.mark.parametrize("value", [0, -1])
    def test_log_domain(self, operation, value):
        with pytest.raises(DomainError):
            operation.apply_float(value)

    def test_sqrt_of_negative(self):
        with pytest.raises(DomainError) as exc_info:
            UnaryOperator.SQRT.apply_float(-1)
        assert exc_info.value.message == "Sqrt Error: Argument < 0."

    def test_square(self):
        assert UnaryOperator.SQUARE.apply_float(-3) == 9

    def test_square_overflow(self):
        with pytest.raises(OverflowError):
            UnaryOperator.SQUARE.apply_float(1e200)

    def test_reciprocal(self):
        assert UnaryOperator.RECIPROCAL.apply_float(4) == 0.25

    def test_reciprocal_of_zero(self):
        with pytest.raises(ReciprocalOfZeroError):
            UnaryOperator.RECIPROCAL.apply_float(0)

    def test_reciprocal_of_zero_is_a_division_by_zero(self):
        assert issubclass(ReciprocalOfZeroError, DivisionByZeroError)

    def test_tiny_results_snap_to_zero(self):
        assert UnaryOperator.SQUARE.apply_float(1e-10) == 0.0

    def test_not_only_exists_for_integers(self):
        with pytest.raises(UnknownOperatorError):
            UnaryOperator.NOT.apply_float(0)

    def test_bitwise_not(self):
        assert bitwise_not(0) == -1
        assert bitwise_not(-1) == 0
        assert bitwise_not(INT64_MAX) == INT64_MIN


class TestTrigFunction:
    """Tests for trigonometric functions."""

    def test_sin_degrees(self):
        assert TrigFunction.SIN.apply(30, AngleMode.DEG) == pytest.approx(0.5)

    def test_sin_of_180_degrees_snaps_to_zero(self):
        assert TrigFunction.SIN.apply(180, AngleMode.DEG) == 0.0

    def test_cos_grad(self):
        assert TrigFunction.COS.apply(200, AngleMode.GRAD) == pytest.approx(-1)

    def test_cos_at_right_angle_is_exactly_zero(self):
        assert TrigFunction.COS.apply(90, AngleMode.DEG) == 0.0
        assert TrigFunction.COS.apply(-270, AngleMode.DEG) == 0.0
        assert TrigFunction.COS.apply(100, AngleMode.GRAD) == 0.0
        assert TrigFunction.COS.apply(math.pi / 2, AngleMode.RAD) == 0.0

    def test_tan_radians(self):
        assert TrigFunction.TAN.apply(math.pi / 4, AngleMode.RAD) == pytest.approx(1)

    @pytest.mark.parametrize(
        "angle,mode",
        [
            (90, AngleMode.DEG),
            (270, AngleMode.DEG),
            (-90, AngleMode.DEG),
            (300, AngleMode.GRAD),
            (3 * math.pi / 2, AngleMode.RAD),
        ],
    )
    def test_tan_undefined_at_right_angles(self, angle, mode):
        with pytest.raises(UndefinedResultError) as exc_info:
            TrigFunction.TAN.apply(angle, mode)
        assert "Undefined" in exc_info.value.message

    def test_right_angle_detection(self):
        assert is_odd_right_angle(450, AngleMode.DEG)
        assert not is_odd_right_angle(180, AngleMode.DEG)
        assert not is_odd_right_angle(float("inf"), AngleMode.DEG)
