"""Deferred, cancelable callbacks used for the error-display timeout."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from collections.abc import Callable


class ScheduledTask(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """
    Something that can run a callback later.

    A GUI front end should adapt its own event loop (e.g. Tk's ``after``)
    so the callback runs on the thread that owns the calculator state.
    """

    def schedule(self, delay: float, callback: Callable[[], None]) -> ScheduledTask: ...


class ThreadingScheduler:
    """Runs callbacks on a :class:`threading.Timer` daemon thread."""

    def schedule(self, delay: float, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class ManualTask:
    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Scheduler that only fires when told to.

    Used where there is no event loop (the console front end) and in tests.
    """

    def __init__(self) -> None:
        self.tasks: list[ManualTask] = []

    def schedule(self, delay: float, callback: Callable[[], None]) -> ManualTask:
        task = ManualTask(delay, callback)
        self.tasks.append(task)
        return task

    @property
    def pending(self) -> list[ManualTask]:
        return [task for task in self.tasks if not task.cancelled]

    def run_pending(self) -> int:
        """Fire every task that has not been cancelled; return how many ran."""
        due = self.pending
        self.tasks.clear()
        for task in due:
            task.callback()
        return len(due)
