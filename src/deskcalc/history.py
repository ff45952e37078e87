"""Undo/redo history of calculator state snapshots."""

from __future__ import annotations

import logging

from deskcalc.state import CalculatorState

logger = logging.getLogger(__name__)


class HistoryManager:
    """
    Snapshot-based undo/redo.

    Each push saves a copy of the state as it was *before* a command ran;
    undo and redo move one snapshot between the two stacks and hand it back
    as the state to make live. Neither of them pushes onto the undo stack as
    a new command would.

    Usage::

        history = HistoryManager()
        history.push_undo(state)           # before mutating state
        previous = history.undo(state)     # None when there is nothing to undo
        following = history.redo(previous)
    """

    def __init__(self, max_levels: int | None = None) -> None:
        self._undo_stack: list[CalculatorState] = []
        self._redo_stack: list[CalculatorState] = []
        self._max_levels = max_levels

    @property
    def can_undo(self) -> bool:
        return bool(self._undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo_stack)

    @property
    def undo_count(self) -> int:
        return len(self._undo_stack)

    @property
    def redo_count(self) -> int:
        return len(self._redo_stack)

    def push_undo(self, state: CalculatorState) -> None:
        """Save a copy of the pre-mutation state and forget the redo branch."""
        self._undo_stack.append(state.copy())
        if self._max_levels is not None and len(self._undo_stack) > self._max_levels:
            self._undo_stack.pop(0)
        self._redo_stack.clear()

    def undo(self, current: CalculatorState) -> CalculatorState | None:
        """
        Step back one snapshot.

        Args:
            current: The live state, saved onto the redo stack

        Returns:
            The state to restore, or None if there is nothing to undo.
        """
        if not self._undo_stack:
            return None
        self._redo_stack.append(current.copy())
        logger.debug("undo (%d left)", len(self._undo_stack) - 1)
        return self._undo_stack.pop()

    def redo(self, current: CalculatorState) -> CalculatorState | None:
        """Step forward one snapshot; the mirror image of :meth:`undo`."""
        if not self._redo_stack:
            return None
        self._undo_stack.append(current.copy())
        logger.debug("redo (%d left)", len(self._redo_stack) - 1)
        return self._redo_stack.pop()

    def clear(self) -> None:
        self._undo_stack.clear()
        self._redo_stack.clear()
