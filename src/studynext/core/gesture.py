"""Swipe-to-complete gesture state machine - no I/O dependencies.

One recognizer belongs to one list item. Pointer events drive it through
idle -> dragging -> (idle | committing -> idle). The completion callback is
its only side effect and fires at most once per commit.
"""

import logging
from enum import Enum
from typing import Callable

from studynext.ports.timer import Timer, TimerHandle

logger = logging.getLogger(__name__)

COMMIT_THRESHOLD = 100
FLY_OUT_OFFSET = 1000
COMMIT_DELAY = 0.3


class GestureState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTING = "committing"


class SwipeGesture:
    """
    Horizontal swipe recognizer for a single item.

    Only rightward displacement moves the item; leftward motion is clamped to
    zero. The offset is not capped while dragging. Releasing past `threshold`
    flies the item out and schedules `on_commit` after `commit_delay` seconds
    on the given timer.
    """

    def __init__(
        self,
        on_commit: Callable[[], None],
        timer: Timer,
        threshold: float = COMMIT_THRESHOLD,
        fly_out_offset: float = FLY_OUT_OFFSET,
        commit_delay: float = COMMIT_DELAY,
    ):
        self.on_commit = on_commit
        self.timer = timer
        self.threshold = threshold
        self.fly_out_offset = fly_out_offset
        self.commit_delay = commit_delay

        self.state = GestureState.IDLE
        self.start_x = 0.0
        self.offset = 0.0
        self._pending: TimerHandle | None = None

    @property
    def is_dragging(self) -> bool:
        return self.state == GestureState.DRAGGING

    @property
    def is_committing(self) -> bool:
        return self.state == GestureState.COMMITTING

    def pointer_down(self, x: float) -> None:
        # Ignored mid-session: the item is either being dragged or about to go away.
        if self.state != GestureState.IDLE:
            return
        self.start_x = x
        self.offset = 0.0
        self.state = GestureState.DRAGGING

    def pointer_move(self, x: float) -> None:
        if self.state != GestureState.DRAGGING:
            return
        self.offset = max(0.0, x - self.start_x)

    def pointer_up(self) -> None:
        if self.state != GestureState.DRAGGING:
            return
        if self.offset > self.threshold:
            self.state = GestureState.COMMITTING
            self.offset = self.fly_out_offset
            handle = self.timer.call_later(self.commit_delay, self._fire)
            # A synchronous timer may already have fired
            if self.state == GestureState.COMMITTING:
                self._pending = handle
        else:
            self._reset()

    def dispose(self) -> None:
        """Cancel any pending commit and reset. Call when the item goes away."""
        if self._pending is not None:
            logger.debug("Cancelling pending swipe commit")
            self._pending.cancel()
        self._reset()

    def _fire(self) -> None:
        if self.state != GestureState.COMMITTING:
            return
        self._reset()
        self.on_commit()

    def _reset(self) -> None:
        self._pending = None
        self.state = GestureState.IDLE
        self.start_x = 0.0
        self.offset = 0.0
