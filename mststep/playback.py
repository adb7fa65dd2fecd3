"""Timed auto-play on top of a :class:`Navigator`.

A tick source is anything with the tkinter ``after`` / ``after_cancel``
pair, so a ``tk.Tk`` root works directly. :class:`ManualTickSource` is a
deterministic stand-in that only advances when told to.
"""

import logging
from typing import Any, Callable, List, Optional, Protocol, Tuple

from .navigator import Navigator

logger = logging.getLogger(__name__)

MIN_SPEED = 1
MAX_SPEED = 10


class TickSource(Protocol):
    def after(self, ms: int, func: Callable[[], None]) -> Any: ...

    def after_cancel(self, handle: Any) -> None: ...


def interval_for(speed: int) -> int:
    """Delay in ms between auto-play ticks at ``speed`` (1 slow .. 10 fast)."""
    return 2200 - speed * 200


class ManualTickSource:
    """Tick source driven by :meth:`advance` instead of wall-clock time."""

    def __init__(self) -> None:
        self.now = 0
        self._pending: List[Tuple[int, int, Callable[[], None]]] = []
        self._next_handle = 0

    @property
    def pending(self) -> int:
        return len(self._pending)

    def after(self, ms: int, func: Callable[[], None]) -> int:
        self._next_handle += 1
        self._pending.append((self.now + ms, self._next_handle, func))
        return self._next_handle

    def after_cancel(self, handle: int) -> None:
        self._pending = [p for p in self._pending if p[1] != handle]

    def advance(self, ms: int) -> int:
        """Move time forward by ``ms`` and fire due callbacks in order.

        Returns the number of callbacks fired.
        """
        target = self.now + ms
        fired = 0
        while True:
            due = [p for p in self._pending if p[0] <= target]
            if not due:
                break
            when, handle, func = min(due, key=lambda p: (p[0], p[1]))
            self._pending.remove((when, handle, func))
            self.now = when
            func()
            fired += 1
        self.now = target
        return fired


class PlaybackScheduler:
    """Advances a navigator one step per tick while playing.

    Manual steps always cancel auto-play first, so a pending tick can never
    advance the cursor a second time.
    """

    def __init__(self, navigator: Navigator, tick_source: TickSource, speed: int = 5,
                 on_tick: Optional[Callable[[], None]] = None,
                 on_finish: Optional[Callable[[], None]] = None) -> None:
        self.navigator = navigator
        self.tick_source = tick_source
        self.on_tick = on_tick
        self.on_finish = on_finish
        self._speed = MIN_SPEED
        self._handle: Any = None
        self._playing = False
        self.speed = speed

    @property
    def speed(self) -> int:
        return self._speed

    @speed.setter
    def speed(self, value: int) -> None:
        self._speed = max(MIN_SPEED, min(MAX_SPEED, int(value)))
        if self.is_playing:
            # new interval applies from the next tick on
            self._cancel()
            self._schedule()

    @property
    def interval_ms(self) -> int:
        return interval_for(self._speed)

    @property
    def is_playing(self) -> bool:
        return self._playing

    def play(self) -> bool:
        if self.is_playing:
            return True
        if self.navigator.log is None or self.navigator.at_end:
            logger.debug("play ignored: nothing left to replay")
            return False
        self._playing = True
        self._schedule()
        return True

    def pause(self) -> None:
        self._playing = False
        self._cancel()

    def toggle(self) -> bool:
        """Pause if playing, resume otherwise. Returns the new playing state."""
        if self.is_playing:
            self.pause()
            return False
        return self.play()

    def stop(self) -> None:
        self.pause()
        self.navigator.reset()

    def step_forward(self) -> bool:
        self.pause()
        return self.navigator.step_forward()

    def step_backward(self) -> bool:
        self.pause()
        return self.navigator.step_backward()

    def _schedule(self) -> None:
        self._handle = self.tick_source.after(self.interval_ms, self._tick)

    def _cancel(self) -> None:
        if self._handle is not None:
            self.tick_source.after_cancel(self._handle)
            self._handle = None

    def _tick(self) -> None:
        self._handle = None
        self.navigator.step_forward()
        if self.on_tick is not None:
            self.on_tick()
        if self.navigator.at_end:
            self._playing = False
            logger.info("Playback finished at step %d", self.navigator.cursor)
            if self.on_finish is not None:
                self.on_finish()
        elif self._playing and self._handle is None:
            self._schedule()
