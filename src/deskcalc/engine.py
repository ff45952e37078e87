"""Evaluation engine: keystroke handling and arithmetic on a calculator state."""

from __future__ import annotations

import logging
import re

from deskcalc.config import CalculatorConfig
from deskcalc.exceptions import (
    CalculatorError,
    UnknownOperatorError,
    UnsupportedInModeError,
)
from deskcalc.operations import BinaryOperator, TrigFunction, UnaryOperator, bitwise_not
from deskcalc.state import CalculatorState
from deskcalc.validators import (
    is_partial_zero,
    is_valid_digit,
    parse_decimal,
    parse_integer,
    to_int64,
    wrap_int64,
)

logger = logging.getLogger(__name__)

_DECIMAL_DIGITS = "0123456789"
_TEXTUAL_ZERO = re.compile(r"0(\.0*)?")


class EvaluationEngine:
    """
    Applies calculator operations to one live :class:`CalculatorState`.

    Every public operation leaves the state renderable. Rules that fail raise
    :class:`CalculatorError`; the engine catches it at the operation
    boundary and puts the state into its error state instead, so a failed
    operation never commits a partial result.

    Example:
        >>> engine = EvaluationEngine()
        >>> for d in "12":
        ...     engine.append_digit(d)
        >>> engine.set_operator(BinaryOperator.ADD)
        >>> engine.append_digit("3")
        >>> engine.handle_equals()
        >>> engine.state.current_value
        15.0
    """

    def __init__(
        self, state: CalculatorState | None = None, config: CalculatorConfig | None = None
    ) -> None:
        self.config = config or CalculatorConfig()
        self.state = state if state is not None else CalculatorState(
            decimal_precision=self.config.default_precision
        )

    @property
    def epsilon(self) -> float:
        return self.config.epsilon

    def _fail(self, error: CalculatorError) -> None:
        logger.info("calculator error: %s", error)
        self.state.set_error(error.message)

    def _materialize_operand(self) -> bool:
        """Parse the operand if one is being typed; False if that failed."""
        if self.state.start_new_number:
            return True
        return self.parse_current_operand()

    # -- entry -------------------------------------------------------------

    def append_digit(self, digit: str) -> None:
        """Add one digit to the operand being typed."""
        state = self.state
        if state.error_state:
            state.clear_all()

        if state.is_programmer:
            if not is_valid_digit(digit, state.base_mode):
                return
            digit = digit.upper()
        elif len(digit) != 1 or digit not in _DECIMAL_DIGITS:
            return

        if state.start_new_number:
            state.operand_text = digit
            state.start_new_number = False
            return

        text = state.operand_text
        if text == "0":
            if digit != "0":
                state.operand_text = digit
            return
        if len(text) < self.config.max_operand_length:
            state.operand_text = text + digit

    def append_decimal(self) -> None:
        state = self.state
        if state.error_state:
            state.clear_all()
        if state.is_programmer:
            return

        if state.start_new_number:
            state.operand_text = "0."
            state.start_new_number = False
        elif "." not in state.operand_text and (
            len(state.operand_text) < self.config.max_operand_length
        ):
            state.operand_text += "."

    def parse_current_operand(self) -> bool:
        """
        Convert the operand text into ``current_value``.

        Returns:
            True on success. On failure the state is already in error.
        """
        state = self.state
        text = state.operand_text
        if is_partial_zero(text):
            state.current_value = 0.0
            state.operand_text = "0"
            return True

        try:
            if state.is_programmer:
                state.current_value = float(parse_integer(text, state.base_mode))
            else:
                state.current_value = parse_decimal(text)
        except CalculatorError as e:
            self._fail(e)
            return False
        return True

    # -- binary operators --------------------------------------------------

    def set_operator(self, operator: BinaryOperator) -> None:
        """Queue ``operator``, resolving a pending one first when chaining."""
        state = self.state
        if state.error_state:
            return
        if not self._materialize_operand():
            return

        if state.pending_operation is not None and not state.start_new_number:
            self.perform_calculation()
            if state.error_state:
                return

        state.previous_value = state.current_value
        state.pending_operation = operator
        state.start_new_number = True

    def perform_calculation(self) -> None:
        """
        Resolve the pending operation.

        With nothing pending, the last operator and right operand are applied
        again (repeated ``=``), or the operand is simply parsed.
        """
        state = self.state
        if state.pending_operation is None:
            if state.last_operator_for_equals is None:
                if self._materialize_operand():
                    state.start_new_number = True
                return
            state.pending_operation = state.last_operator_for_equals
            state.previous_value = state.current_value
            state.current_value = state.last_operand_for_equals

        operator = state.pending_operation
        right = state.current_value
        try:
            if state.is_programmer:
                result = float(
                    operator.apply_int(to_int64(state.previous_value), to_int64(right))
                )
            else:
                result = operator.apply_float(state.previous_value, right, self.epsilon)
        except CalculatorError as e:
            self._fail(e)
            return

        logger.debug("%r %s %r = %r", state.previous_value, operator.value, right, result)
        state.current_value = result
        state.last_operator_for_equals = operator
        state.last_operand_for_equals = right
        state.pending_operation = None
        state.start_new_number = True

    def handle_equals(self) -> None:
        if self.state.error_state:
            return
        if not self._materialize_operand():
            return
        self.perform_calculation()

    # -- functions of the current value ------------------------------------

    def change_sign(self) -> None:
        state = self.state
        if state.error_state:
            return

        if state.is_programmer:
            if not self._materialize_operand():
                return
            state.current_value = float(wrap_int64(-to_int64(state.current_value)))
            state.start_new_number = True
            return

        if state.start_new_number:
            state.current_value = -state.current_value
            return

        text = state.operand_text
        if _TEXTUAL_ZERO.fullmatch(text):
            return
        if text.startswith("-"):
            state.operand_text = text[1:]
        elif len(text) < self.config.max_operand_length:
            state.operand_text = "-" + text

    def handle_trigonometric_function(self, function: TrigFunction) -> None:
        state = self.state
        if state.error_state:
            return
        if state.is_programmer:
            self._fail(
                UnsupportedInModeError(
                    "Trig Func not available in Programmer Mode.", state.display_mode
                )
            )
            return
        if not self._materialize_operand():
            return

        try:
            result = function.apply(state.current_value, state.angle_mode, self.epsilon)
        except CalculatorError as e:
            self._fail(e)
            return
        state.current_value = result
        state.start_new_number = True

    def handle_unary_operation(self, operation: UnaryOperator) -> None:
        state = self.state
        if state.error_state:
            return
        if state.is_programmer and operation is not UnaryOperator.NOT:
            self._fail(
                UnsupportedInModeError(
                    "Unary Op not available in Programmer Mode (except NOT).",
                    state.display_mode,
                )
            )
            return
        if not self._materialize_operand():
            return

        try:
            if state.is_programmer:
                result = float(bitwise_not(to_int64(state.current_value)))
            else:
                result = operation.apply_float(state.current_value, self.epsilon)
        except CalculatorError as e:
            self._fail(e)
            return
        state.current_value = result
        state.start_new_number = True

    def handle_percentage(self) -> None:
        """
        Percent key.

        With ``+``/``-`` pending the operand becomes that percentage of the
        previous value (``200 + 10 %`` is ``220``); with ``*``/``/`` pending
        it is divided by 100; otherwise the operand is divided by 100 and the
        repeated-equals memory is dropped.
        """
        state = self.state
        if state.error_state:
            return
        if state.is_programmer:
            self._fail(
                UnsupportedInModeError(
                    "Percentage not available in Programmer Mode.", state.display_mode
                )
            )
            return
        if not self._materialize_operand():
            return

        pending = state.pending_operation
        if pending is not None and pending.is_additive:
            state.current_value = state.previous_value * state.current_value / 100.0
            self.perform_calculation()
        elif pending is not None and pending.is_multiplicative:
            state.current_value = state.current_value / 100.0
            self.perform_calculation()
        else:
            state.current_value = state.current_value / 100.0
            state.last_operator_for_equals = None
            state.last_operand_for_equals = 0.0
        state.start_new_number = True

    # -- memory and constants ----------------------------------------------

    def handle_memory_operation(self, operation: str) -> None:
        """Apply ``MC``, ``MR``, ``M+`` or ``M-``."""
        state = self.state
        if operation == "MC":
            state.memory_clear()
            return
        if operation == "MR":
            state.memory_recall()
            return
        if operation not in ("M+", "M-"):
            raise UnknownOperatorError(operation)

        if state.error_state:
            return
        if not self._materialize_operand():
            return

        value = state.current_value
        if state.is_programmer:
            value = float(to_int64(value))
        if operation == "M+":
            state.memory_add(value)
        else:
            state.memory_subtract(value)
        state.start_new_number = True

    def insert_constant(self, value: float) -> None:
        """Replace the operand with a constant such as pi; truncated in programmer mode."""
        state = self.state
        if state.error_state:
            state.clear_all()
        if state.is_programmer:
            value = float(to_int64(value))
        state.current_value = value
        state.start_new_number = True
