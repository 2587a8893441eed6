from typing import List, Optional, Sequence

from widgets.timers import TimerQueue

AUTO_PLAY_INTERVAL_MS = 3500


class CardCarousel:
    """Circular card carousel: auto-advances unless hovered."""

    def __init__(self, items: Sequence[dict], timers: TimerQueue, auto_play: bool = True,
                 interval_ms: int = AUTO_PLAY_INTERVAL_MS):
        self.items = list(items)
        self.timers = timers
        self.auto_play = auto_play
        self.interval_ms = interval_ms
        self.current_index = 0
        self.paused = False
        self._timer: Optional[int] = None

    def mount(self) -> None:
        self._sync_timer()

    def unmount(self) -> None:
        self.timers.clear(self._timer)
        self._timer = None

    def _sync_timer(self) -> None:
        self.timers.clear(self._timer)
        self._timer = None
        if self.auto_play and len(self.items) > 1 and not self.paused:
            self._timer = self.timers.set_interval(self.next, self.interval_ms)

    @property
    def current(self) -> Optional[dict]:
        return self.items[self.current_index] if self.items else None

    @property
    def playing(self) -> bool:
        return self._timer is not None

    def index_at(self, offset: int) -> int:
        return (self.current_index + offset + len(self.items)) % len(self.items)

    def next(self) -> None:
        if self.items:
            self.current_index = self.index_at(1)

    def prev(self) -> None:
        if self.items:
            self.current_index = self.index_at(-1)

    def jump(self, index: int) -> None:
        if not 0 <= index < len(self.items):
            raise IndexError(index)
        self.current_index = index

    def hover(self, inside: bool) -> None:
        self.paused = inside
        self._sync_timer()

    def neighbours(self) -> List[dict]:
        """[previous, current, next] for rendering; fewer with fewer items."""
        if not self.items:
            return []
        if len(self.items) == 1:
            return [self.items[0]]
        return [self.items[self.index_at(-1)], self.items[self.current_index], self.items[self.index_at(1)]]
