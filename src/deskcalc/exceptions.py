"""Custom exceptions for the calculator engine.

Every rule that can fail raises one of these. The engine turns them into the
calculator's error state using ``message`` as the display text, so messages
are written for the display, not for a traceback.
"""

from typing import Any


class CalculatorError(Exception):
    """Base exception for all calculator errors."""

    def __init__(self, message: str, value: Any = None) -> None:
        self.message = message
        self.value = value
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.value is not None:
            return f"{self.message}: {self.value}"
        return self.message


class InvalidInputError(CalculatorError):
    """Raised when the operand text cannot be parsed."""

    def __init__(self, value: Any, reason: str = "Invalid Input: Cannot parse.") -> None:
        super().__init__(reason, value)
        self.reason = reason


class DivisionByZeroError(CalculatorError):
    """Raised when dividing (or taking a remainder) by zero."""

    def __init__(self, numerator: float, message: str = "Division by Zero") -> None:
        super().__init__(message, numerator)
        self.numerator = numerator


class ReciprocalOfZeroError(DivisionByZeroError):
    """Raised for 1/x when x is zero."""

    def __init__(self) -> None:
        super().__init__(1.0, "Reciprocal of Zero: Division by zero.")


class DomainError(CalculatorError):
    """Raised when a function argument is outside its domain."""

    def __init__(self, function: str, argument: float, message: str) -> None:
        super().__init__(message, argument)
        self.function = function
        self.argument = argument


class UndefinedResultError(CalculatorError):
    """Raised at a singularity, e.g. the tangent of 90 degrees."""

    def __init__(self, function: str, argument: float) -> None:
        super().__init__("Tan Undefined: Angle approaches singularity.", argument)
        self.function = function
        self.argument = argument


class OverflowError(CalculatorError):
    """Raised when a calculation results in overflow or NaN."""

    def __init__(
        self,
        operation: str,
        *operands: float,
        message: str = "Calculation Error: Overflow/Invalid Result.",
    ) -> None:
        super().__init__(message, operands)
        self.operation = operation
        self.operands = operands


class UnsupportedInModeError(CalculatorError):
    """Raised when a function is not available in the current display mode."""

    def __init__(self, message: str, mode: Any = None) -> None:
        super().__init__(message, mode)
        self.mode = mode


class UnknownOperatorError(CalculatorError):
    """Raised for an operator or function outside the supported set."""

    def __init__(self, operator: Any, message: str = "Unknown Operator") -> None:
        super().__init__(message, operator)
        self.operator = operator


class UnknownCommandError(CalculatorError):
    """Raised by the dispatcher for a token it has no action for."""

    def __init__(self, token: str) -> None:
        super().__init__("Unknown command token", token)
        self.token = token


class OutOfRangeError(CalculatorError):
    """Raised when a value is outside acceptable range."""

    def __init__(
        self, value: float, min_val: float | None = None, max_val: float | None = None
    ) -> None:
        range_str = f"[{min_val}, {max_val}]"
        super().__init__(f"Value out of range {range_str}", value)
        self.min_val = min_val
        self.max_val = max_val
