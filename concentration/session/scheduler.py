"""
Scheduler - Non-blocking delayed callbacks.

The session only ever needs "run this later, unless cancelled".
Two implementations:
- TimerScheduler: real time, one daemon threading.Timer per call
- ManualScheduler: virtual clock advanced explicitly (tests, scripted play)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable
import itertools
import threading


class ScheduledCall(ABC):
    """Handle for a pending callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the callback from running if it has not started."""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        ...


class Scheduler(ABC):
    """Runs callbacks after a delay without blocking the caller."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        ...

    def shutdown(self) -> None:
        """Release any resources. Default: nothing to release."""


class _TimerCall(ScheduledCall):
    def __init__(self, timer: threading.Timer):
        self._timer = timer
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True
        self._timer.cancel()

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class TimerScheduler(Scheduler):
    """Real-time scheduler backed by threading.Timer."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return _TimerCall(timer)


@dataclass(order=True)
class _ManualCall(ScheduledCall):
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    _cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """
    Deterministic scheduler driven by a virtual clock.

    Usage:
        scheduler = ManualScheduler()
        session = GameSession(4, scheduler=scheduler, mismatch_delay=1.0)
        ...
        scheduler.advance(1.0)  # runs everything due by now
    """

    def __init__(self):
        self.now = 0.0
        self._calls: list[_ManualCall] = []
        self._seq = itertools.count()

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        call = _ManualCall(due=self.now + delay, seq=next(self._seq), callback=callback)
        self._calls.append(call)
        return call

    @property
    def pending(self) -> int:
        """Number of callbacks still waiting to run."""
        return sum(1 for c in self._calls if not c.cancelled)

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward and run every callback now due, in order.

        Returns the number of callbacks run.
        """
        self.now += seconds
        ran = 0
        while True:
            due = sorted(c for c in self._calls if c.due <= self.now)
            if not due:
                return ran
            call = due[0]
            self._calls.remove(call)
            if not call.cancelled:
                call.callback()
                ran += 1

    def run_all(self) -> int:
        """Run every pending callback regardless of its due time."""
        if not self._calls:
            return 0
        latest = max(c.due for c in self._calls)
        return self.advance(max(0.0, latest - self.now))

    def shutdown(self) -> None:
        for call in self._calls:
            call.cancel()
        self._calls.clear()
