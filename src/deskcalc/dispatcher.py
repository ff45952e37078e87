"""Command dispatch: the single entry point a calculator front end talks to."""

from __future__ import annotations

import logging
import math
import threading
from enum import Enum
from functools import partial
from typing import TYPE_CHECKING

from deskcalc.config import MAX_PRECISION, CalculatorConfig
from deskcalc.engine import EvaluationEngine
from deskcalc.exceptions import InvalidInputError, UnknownCommandError
from deskcalc.formatting import NumericFormatter
from deskcalc.history import HistoryManager
from deskcalc.operations import BinaryOperator, TrigFunction, UnaryOperator
from deskcalc.scheduling import Scheduler, ThreadingScheduler
from deskcalc.state import AngleMode, BaseMode, CalculatorState, DisplayMode
from deskcalc.validators import to_int64, validate_range

if TYPE_CHECKING:
    from collections.abc import Callable

    from deskcalc.scheduling import ScheduledTask

logger = logging.getLogger(__name__)

UNDO = "Undo"
REDO = "Redo"
CLEAR_ALL = "AC"
PI = "PI"
EULER = "EULER"
MEMORY_TOKENS = ("MC", "MR", "M+", "M-")

# Tokens still accepted while an error is on the display
ERROR_ALLOWED_TOKENS = frozenset(
    {CLEAR_ALL, "C", "CE", "MC", "MR"}
    | {mode.value for mode in AngleMode}
    | {mode.value for mode in DisplayMode}
    | {mode.value for mode in BaseMode}
)


class Keypad(Enum):
    """Auxiliary keypad a front end should show next to the standard keys."""

    NONE = "none"
    SCIENTIFIC = "scientific"
    PROGRAMMER = "programmer"


def keypad_for(display_mode: DisplayMode) -> Keypad:
    if display_mode is DisplayMode.SCIENTIFIC:
        return Keypad.SCIENTIFIC
    if display_mode is DisplayMode.PROGRAMMER:
        return Keypad.PROGRAMMER
    return Keypad.NONE


class CommandDispatcher:
    """
    Maps command tokens to engine operations.

    Every token except ``Undo``/``Redo`` saves the pre-command state to the
    history first, even when the command ends up changing nothing. After each
    dispatch the display is rendered and ``on_render(text, is_error)`` is
    called. An error stays on the display for ``config.error_revert_delay``
    seconds; each render cancels the pending revert before arming a new one.
    Tokens ignored while an error shows leave the pending revert alone.
    Commands and reverts run under :attr:`lock`, so a revert fired from a
    timer thread never interleaves with a dispatch.

    Example:
        >>> calc = CommandDispatcher()
        >>> for token in ["7", "+", "3", "="]:
        ...     _ = calc.dispatch(token)
        >>> calc.display_text
        '10'
        >>> _ = calc.dispatch("Undo")
        >>> calc.display_text
        '3'
    """

    def __init__(
        self,
        config: CalculatorConfig | None = None,
        scheduler: Scheduler | None = None,
        on_render: Callable[[str, bool], None] | None = None,
        on_keypad_change: Callable[[Keypad], None] | None = None,
        history: HistoryManager | None = None,
    ) -> None:
        self.config = config or CalculatorConfig()
        self.engine = EvaluationEngine(config=self.config)
        self.history = history if history is not None else HistoryManager()
        self.formatter = NumericFormatter()
        self.scheduler = scheduler if scheduler is not None else ThreadingScheduler()
        self.on_render = on_render
        self.on_keypad_change = on_keypad_change
        self._revert_task: ScheduledTask | None = None
        self._revert_generation = 0
        # held while a command or an error revert touches the state
        self.lock = threading.RLock()
        self._actions = self._build_actions()
        self._keypad = keypad_for(self.state.display_mode)
        self.display_text = self.formatter.display_text(self.state)

    @property
    def state(self) -> CalculatorState:
        """The live state. Undo and redo replace it with a snapshot."""
        return self.engine.state

    @property
    def is_error(self) -> bool:
        return self.state.error_state

    @property
    def keypad(self) -> Keypad:
        return self._keypad

    @property
    def tokens(self) -> frozenset[str]:
        """Every token :meth:`dispatch` accepts."""
        return frozenset(self._actions) | {UNDO, REDO}

    def _build_actions(self) -> dict[str, Callable[[], None]]:
        engine = self.engine
        actions: dict[str, Callable[[], None]] = {}

        for digit in "0123456789ABCDEFabcdef":
            actions[digit] = partial(engine.append_digit, digit)
        actions["."] = engine.append_decimal
        for operator in BinaryOperator:
            actions[operator.value] = partial(engine.set_operator, operator)
        actions["="] = engine.handle_equals
        actions["C"] = self._clear_key
        actions[CLEAR_ALL] = self._clear_all
        actions["CE"] = self._clear_entry
        actions["+/-"] = engine.change_sign
        for function in TrigFunction:
            actions[function.value] = partial(engine.handle_trigonometric_function, function)
        for operation in UnaryOperator:
            actions[operation.value] = partial(engine.handle_unary_operation, operation)
        actions["%"] = engine.handle_percentage
        for memory_op in MEMORY_TOKENS:
            actions[memory_op] = partial(engine.handle_memory_operation, memory_op)
        for angle in AngleMode:
            actions[angle.value] = partial(self._set_angle_mode, angle)
        for display in DisplayMode:
            actions[display.value] = partial(self._set_display_mode, display)
        for base in BaseMode:
            actions[base.value] = partial(self._set_base_mode, base)
        actions[PI] = partial(engine.insert_constant, math.pi)
        actions[EULER] = partial(engine.insert_constant, math.e)
        return actions

    def dispatch(self, token: str) -> CalculatorState:
        """
        Run one command.

        Args:
            token: A command token such as ``"7"``, ``"+"``, ``"sqrt"`` or ``"HEX"``

        Returns:
            The live state after the command.

        Raises:
            UnknownCommandError: If ``token`` is not a command
        """
        logger.debug("dispatch %r", token)
        with self.lock:
            if token == UNDO:
                self.undo()
                return self.state
            if token == REDO:
                self.redo()
                return self.state

            action = self._actions.get(token)
            if action is None:
                raise UnknownCommandError(token)

            if self.state.error_state and token not in ERROR_ALLOWED_TOKENS:
                # the pending revert keeps running
                logger.debug("ignoring %r while in error", token)
                self._notify(self.display_text, True)
                return self.state

            self.history.push_undo(self.state)
            action()
            self._render()
            return self.state

    def undo(self) -> None:
        with self.lock:
            previous = self.history.undo(self.state)
            if previous is not None:
                self.engine.state = previous
            self._render()

    def redo(self) -> None:
        with self.lock:
            following = self.history.redo(self.state)
            if following is not None:
                self.engine.state = following
            self._render()

    def set_precision(self, precision: int) -> None:
        """
        Set how many fraction digits the display shows.

        Raises:
            InvalidInputError: If ``precision`` is not an integer
            OutOfRangeError: If ``precision`` is outside 0..15
        """
        if isinstance(precision, bool) or not isinstance(precision, int):
            raise InvalidInputError(precision, "Precision must be an integer")
        validate_range(precision, min_val=0, max_val=MAX_PRECISION)
        with self.lock:
            self.history.push_undo(self.state)
            self.state.decimal_precision = precision
            self._render()

    # -- state commands ----------------------------------------------------

    def _clear_key(self) -> None:
        """``C`` is the hex digit C in programmer mode and clear-all elsewhere."""
        if self.state.is_programmer:
            self.engine.append_digit("C")
        else:
            self.state.clear_all()

    def _clear_all(self) -> None:
        self.state.clear_all()

    def _clear_entry(self) -> None:
        self.state.clear_entry()

    def _set_angle_mode(self, mode: AngleMode) -> None:
        self.state.angle_mode = mode

    def _set_display_mode(self, mode: DisplayMode) -> None:
        self._resettle(lambda state: setattr(state, "display_mode", mode))

    def _set_base_mode(self, base: BaseMode) -> None:
        self._resettle(lambda state: setattr(state, "base_mode", base))

    def _resettle(self, switch: Callable[[CalculatorState], None]) -> None:
        """
        Change a mode while keeping the operand's value.

        The typed operand is parsed under the old mode, the display is
        redrawn under the new one, and the operand is parsed again if it is
        somehow still being typed.
        """
        state = self.state
        if not state.start_new_number and not state.error_state:
            self.engine.parse_current_operand()
        switch(state)
        if state.is_programmer and not state.error_state:
            state.current_value = float(to_int64(state.current_value))
        state.start_new_number = True
        self._settle_display()
        if not state.start_new_number and not state.error_state:
            self.engine.parse_current_operand()

    # -- rendering ---------------------------------------------------------

    def _settle_display(self) -> str:
        """
        Compute the display text; a finished value also becomes the operand text.

        The settled text mirrors the display, so it can be longer than
        ``max_operand_length`` (grouped decimals, 64 binary digits). The cap
        only applies to typing, and the next keystroke replaces it.
        """
        state = self.state
        text = self.formatter.display_text(state)
        if state.start_new_number and not state.error_state:
            state.operand_text = text
        self.display_text = text
        return text

    def _render(self) -> None:
        self._cancel_revert()
        text = self._settle_display()
        is_error = self.state.error_state
        if is_error:
            self._revert_generation += 1
            self._revert_task = self.scheduler.schedule(
                self.config.error_revert_delay,
                partial(self._revert_error, self._revert_generation),
            )
            logger.debug("error revert armed for %.1fs", self.config.error_revert_delay)

        keypad = keypad_for(self.state.display_mode)
        if keypad is not self._keypad:
            self._keypad = keypad
            if self.on_keypad_change is not None:
                self.on_keypad_change(keypad)

        self._notify(text, is_error)

    def _notify(self, text: str, is_error: bool) -> None:
        if self.on_render is not None:
            self.on_render(text, is_error)

    def _cancel_revert(self) -> None:
        if self._revert_task is not None:
            self._revert_task.cancel()
            self._revert_task = None

    def _revert_error(self, generation: int) -> None:
        with self.lock:
            # a timer that fired just before being cancelled must not clear a newer error
            if generation != self._revert_generation:
                return
            self._revert_task = None
            if self.state.error_state:
                logger.debug("error display timed out")
                self.state.clear_error()
                self._render()
