"""
Scheduled Tasks (Qt Event Loop)
===============================
Timers with explicit cancellation tokens.

Why is this file needed?
------------------------
1. Cancellation: The periodic shuffle must stop for good once the black hole
   opens, including a grace-period timer that has not fired yet.
2. Single thread: Callbacks run on the Qt event loop, one at a time and to
   completion, so the spots never need locking.

Classes:
    ScheduledTask: A one-shot or repeating QTimer wrapper.
    Scheduler: Factory that keeps track of its tasks.
"""
from __future__ import annotations

import logging
from typing import Callable

from PySide6.QtCore import QObject, QTimer, Slot

logger = logging.getLogger(__name__)


def _to_msec(seconds: float) -> int:
    if seconds < 0.0:
        raise ValueError(f"Delay must not be negative, got {seconds} s.")
    return int(round(seconds * 1000.0))


class ScheduledTask(QObject):
    def __init__(
        self,
        seconds: float,
        callback: Callable[[], object],
        repeating: bool,
        name: str = "",
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.name = name or getattr(callback, "__name__", "task")
        self.repeating = repeating
        self.cancelled = False
        self.fire_count = 0
        self._callback = callback
        self._msec = _to_msec(seconds)

        self._timer = QTimer(self)
        self._timer.setSingleShot(not repeating)
        self._timer.setInterval(self._msec)
        self._timer.timeout.connect(self._on_timeout)

    def __repr__(self) -> str:
        kind = "repeating" if self.repeating else "once"
        return f"ScheduledTask({self.name!r}, {kind}, {self._msec} ms)"

    @property
    def interval(self) -> float:
        return self._msec / 1000.0

    @property
    def is_active(self) -> bool:
        return not self.cancelled and self._timer.isActive()

    def start(self) -> ScheduledTask:
        if not self.cancelled:
            self._timer.start()
        return self

    def fire(self) -> None:
        """
        Run the callback now.

        A one-shot task is finished afterwards; a repeating task keeps its
        schedule. Firing a cancelled task does nothing.
        """
        if self.cancelled:
            return
        if not self.repeating:
            self._timer.stop()
        self.fire_count += 1
        self._callback()

    def cancel(self) -> None:
        # The timer may already be deleted once the scheduler disposed of the task
        if self.cancelled:
            return
        logger.debug(f"{self!r} cancelled.")
        self.cancelled = True
        self._timer.stop()

    @Slot()
    def _on_timeout(self) -> None:
        self.fire()


class Scheduler(QObject):
    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._tasks: list[ScheduledTask] = []

    @property
    def tasks(self) -> list[ScheduledTask]:
        return list(self._tasks)

    def call_later(self, delay: float, callback: Callable[[], object], name: str = "") -> ScheduledTask:
        """Run `callback` once after `delay` seconds."""
        return self._track(ScheduledTask(delay, callback, repeating=False, name=name, parent=self))

    def call_repeating(self, interval: float, callback: Callable[[], object], name: str = "") -> ScheduledTask:
        """Run `callback` every `interval` seconds until cancelled."""
        if interval <= 0.0:
            raise ValueError(f"Interval must be positive, got {interval} s.")
        return self._track(ScheduledTask(interval, callback, repeating=True, name=name, parent=self))

    def cancel_all(self) -> None:
        for task in self._tasks:
            self._dispose(task)
        self._tasks.clear()

    def _dispose(self, task: ScheduledTask) -> None:
        task.cancel()
        task.deleteLater()

    def _track(self, task: ScheduledTask) -> ScheduledTask:
        # Drop tasks that can no longer fire
        alive = []
        for t in self._tasks:
            if not t.cancelled and (t.repeating or t.is_active):
                alive.append(t)
            else:
                self._dispose(t)
        self._tasks = alive
        self._tasks.append(task)
        logger.debug(f"Scheduled {task!r}.")
        return task.start()
