"""
Keystroke-driven calculator engine.

Normal, scientific and programmer (64-bit integer, multi-base) arithmetic
behind a single command entry point, with undo/redo of every command.

    >>> from deskcalc import CommandDispatcher
    >>> calc = CommandDispatcher()
    >>> for token in "3 + 4 = =".split():
    ...     _ = calc.dispatch(token)
    >>> calc.display_text
    '11'
"""

from deskcalc.config import CalculatorConfig
from deskcalc.dispatcher import CommandDispatcher, Keypad, keypad_for
from deskcalc.engine import EvaluationEngine
from deskcalc.exceptions import (
    CalculatorError,
    DivisionByZeroError,
    DomainError,
    InvalidInputError,
    OutOfRangeError,
    OverflowError,
    ReciprocalOfZeroError,
    UndefinedResultError,
    UnknownCommandError,
    UnknownOperatorError,
    UnsupportedInModeError,
)
from deskcalc.formatting import NumericFormatter, format_value
from deskcalc.history import HistoryManager
from deskcalc.keyboard import key_to_command
from deskcalc.operations import BinaryOperator, TrigFunction, UnaryOperator
from deskcalc.scheduling import ManualScheduler, Scheduler, ThreadingScheduler
from deskcalc.state import AngleMode, BaseMode, CalculatorState, DisplayMode

__all__ = [
    "AngleMode",
    "BaseMode",
    "BinaryOperator",
    "CalculatorConfig",
    "CalculatorError",
    "CalculatorState",
    "CommandDispatcher",
    "DisplayMode",
    "DivisionByZeroError",
    "DomainError",
    "EvaluationEngine",
    "HistoryManager",
    "InvalidInputError",
    "Keypad",
    "ManualScheduler",
    "NumericFormatter",
    "OutOfRangeError",
    "OverflowError",
    "ReciprocalOfZeroError",
    "Scheduler",
    "ThreadingScheduler",
    "TrigFunction",
    "UnaryOperator",
    "UndefinedResultError",
    "UnknownCommandError",
    "UnknownOperatorError",
    "UnsupportedInModeError",
    "format_value",
    "key_to_command",
    "keypad_for",
]

__version__ = "0.1.0"
