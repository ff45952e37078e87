"""Calculator state and the mode enums it carries."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from deskcalc.operations import BinaryOperator

DEFAULT_PRECISION = 10


class AngleMode(Enum):
    """Angle unit used by the trigonometric functions."""

    DEG = "DEG"
    RAD = "RAD"
    GRAD = "GRAD"


class DisplayMode(Enum):
    """Main calculator mode."""

    NORMAL = "NORMAL_DISP"
    SCIENTIFIC = "SCI_DISP"
    PROGRAMMER = "PROG_DISP"


class BaseMode(Enum):
    """Integer radix used in programmer mode."""

    DEC = "DEC"
    HEX = "HEX"
    OCT = "OCT"
    BIN = "BIN"

    @property
    def radix(self) -> int:
        return _RADIX[self]

    @property
    def digits(self) -> str:
        """Upper-case digit characters valid in this base."""
        return "0123456789ABCDEF"[: self.radix]

    def accepts(self, digit: str) -> bool:
        return len(digit) == 1 and digit.upper() in self.digits


_RADIX = {BaseMode.DEC: 10, BaseMode.HEX: 16, BaseMode.OCT: 8, BaseMode.BIN: 2}


@dataclass
class CalculatorState:
    """
    Everything the calculator knows at one instant.

    The engine mutates a single live instance in place; the history keeps
    deep copies made with :meth:`copy`. ``current_value`` and
    ``previous_value`` are floats in every mode; in programmer mode they hold
    integral values of a signed 64-bit integer.
    """

    operand_text: str = "0"
    start_new_number: bool = True
    error_state: bool = False
    error_message: str = ""
    current_value: float = 0.0
    previous_value: float = 0.0
    pending_operation: BinaryOperator | None = None
    last_operator_for_equals: BinaryOperator | None = None
    last_operand_for_equals: float = 0.0
    angle_mode: AngleMode = AngleMode.DEG
    display_mode: DisplayMode = DisplayMode.NORMAL
    base_mode: BaseMode = BaseMode.DEC
    decimal_precision: int = DEFAULT_PRECISION
    memory_value: float = 0.0

    @property
    def is_programmer(self) -> bool:
        return self.display_mode is DisplayMode.PROGRAMMER

    def copy(self) -> CalculatorState:
        """Return an independent snapshot of this state."""
        return deepcopy(self)

    def set_error(self, message: str) -> None:
        """Enter the error state; memory and modes are left alone."""
        self.operand_text = message
        self.error_message = message
        self.error_state = True
        self.start_new_number = True
        self.pending_operation = None
        self.last_operator_for_equals = None
        self.last_operand_for_equals = 0.0

    def clear_error(self) -> None:
        self.error_state = False
        self.error_message = ""

    def clear_all(self) -> None:
        """Reset operands, pending work and error; keep modes and memory."""
        self.operand_text = "0"
        self.current_value = 0.0
        self.previous_value = 0.0
        self.pending_operation = None
        self.start_new_number = True
        self.last_operator_for_equals = None
        self.last_operand_for_equals = 0.0
        self.clear_error()

    def clear_entry(self) -> None:
        """Reset the current operand only, or everything while in error."""
        if self.error_state:
            self.clear_all()
            return
        self.operand_text = "0"
        self.current_value = 0.0
        self.start_new_number = True

    def memory_clear(self) -> None:
        self.memory_value = 0.0

    def memory_recall(self) -> None:
        self.current_value = self.memory_value
        self.start_new_number = True
        self.clear_error()

    def memory_add(self, value: float) -> None:
        self.memory_value += value

    def memory_subtract(self, value: float) -> None:
        self.memory_value -= value
