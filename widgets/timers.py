"""Cooperative timer queue for the page widgets.

Time only moves when `advance` is called, so a widget driven by this queue is
single threaded and fully deterministic. Widgets must clear their handles on
teardown, exactly as a browser component clears its intervals.
"""

import itertools
from typing import Callable, Dict, Optional


class _Timer:
    __slots__ = ("callback", "due", "interval")

    def __init__(self, callback: Callable[[], None], due: int, interval: Optional[int]):
        self.callback = callback
        self.due = due
        self.interval = interval


class TimerQueue:
    def __init__(self) -> None:
        self.now = 0
        self._timers: Dict[int, _Timer] = {}
        self._ids = itertools.count(1)

    def set_timeout(self, callback: Callable[[], None], delay_ms: int) -> int:
        handle = next(self._ids)
        self._timers[handle] = _Timer(callback, self.now + delay_ms, None)
        return handle

    def set_interval(self, callback: Callable[[], None], every_ms: int) -> int:
        if every_ms <= 0:
            raise ValueError("interval must be positive")
        handle = next(self._ids)
        self._timers[handle] = _Timer(callback, self.now + every_ms, every_ms)
        return handle

    def clear(self, handle: Optional[int]) -> None:
        if handle is not None:
            self._timers.pop(handle, None)

    def clear_all(self) -> None:
        self._timers.clear()

    @property
    def pending(self) -> int:
        return len(self._timers)

    def advance(self, ms: int) -> None:
        """Moves the clock forward, firing every callback that falls due in order."""
        target = self.now + ms
        while True:
            due = [(t.due, h) for h, t in self._timers.items() if t.due <= target]
            if not due:
                break
            when, handle = min(due)
            timer = self._timers[handle]
            self.now = when
            if timer.interval is None:
                del self._timers[handle]
            else:
                timer.due = when + timer.interval
            timer.callback()
        self.now = target
