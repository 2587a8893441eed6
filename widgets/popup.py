"""Session-once promotional popup.

Eligible items are posters, plus POPUP notifications whose link looks like an
image. The first eligible item is the "latest"; if the visitor already
dismissed it this browser session nothing is shown, even when later items
are still unseen.
"""

import re
from typing import List, MutableMapping, Optional, Sequence

from widgets.timers import TimerQueue


ENTRANCE_DELAY_MS = 2000
ROTATION_INTERVAL_MS = 5000

SEEN_PREFIX = "seen_popup_"
IMAGE_EXT_RE = re.compile(r"\.(jpeg|jpg|gif|png|webp|bmp|svg)$", re.I)
IMAGE_PATH_MARKERS = ("/uploads/", "images", "cloudinary")


def looks_like_image(link: Optional[str]) -> bool:
    if not link:
        return False
    return bool(IMAGE_EXT_RE.search(link)) or any(marker in link for marker in IMAGE_PATH_MARKERS)


def is_popup_eligible(item: dict) -> bool:
    kind = item.get("type")
    if kind == "POSTER":
        return True
    return kind == "POPUP" and looks_like_image(item.get("link"))


def select_popups(notifications: Sequence[dict]) -> List[dict]:
    """Eligible items in source order; index 0 is treated as the latest."""
    return [n for n in notifications if is_popup_eligible(n)]


def seen_key(item_id) -> str:
    return f"{SEEN_PREFIX}{item_id}"


def has_seen(storage, item_id) -> bool:
    return bool(storage.get(seen_key(item_id)))


def mark_seen(storage: MutableMapping, item_id) -> None:
    storage[seen_key(item_id)] = "true"


class PopupModal:
    def __init__(self, notifications: Sequence[dict], storage: MutableMapping, timers: TimerQueue):
        self.notifications = list(notifications)
        self.storage = storage
        self.timers = timers
        self.popups: List[dict] = []
        self.current_index = 0
        self.visible = False
        self._entrance_timer: Optional[int] = None
        self._rotation_timer: Optional[int] = None

    @property
    def current(self) -> Optional[dict]:
        return self.popups[self.current_index] if self.popups else None

    def mount(self) -> bool:
        """Decides whether to show anything this session; True when scheduled."""
        candidates = select_popups(self.notifications)
        if not candidates or has_seen(self.storage, candidates[0]["id"]):
            return False

        self.popups = candidates
        self.current_index = 0
        self._entrance_timer = self.timers.set_timeout(self._show, ENTRANCE_DELAY_MS)
        return True

    def _show(self) -> None:
        self._entrance_timer = None
        self.visible = True
        if len(self.popups) > 1:
            self._stop_rotation()
            self._rotation_timer = self.timers.set_interval(self._rotate, ROTATION_INTERVAL_MS)

    def _rotate(self) -> None:
        self.current_index = (self.current_index + 1) % len(self.popups)

    def _stop_rotation(self) -> None:
        self.timers.clear(self._rotation_timer)
        self._rotation_timer = None

    @property
    def rotating(self) -> bool:
        return self._rotation_timer is not None

    # Manual navigation stops the auto-advance and does not restart it; rotation
    # resumes only after a remount.
    def next(self) -> None:
        if not self.popups:
            return
        self._stop_rotation()
        self.current_index = (self.current_index + 1) % len(self.popups)

    def prev(self) -> None:
        if not self.popups:
            return
        self._stop_rotation()
        self.current_index = (self.current_index - 1 + len(self.popups)) % len(self.popups)

    def close(self) -> None:
        self.visible = False
        self._stop_rotation()
        # Only the latest item is remembered, whichever one is on screen
        if self.popups:
            mark_seen(self.storage, self.popups[0]["id"])

    def unmount(self) -> None:
        self.timers.clear(self._entrance_timer)
        self._entrance_timer = None
        self._stop_rotation()
