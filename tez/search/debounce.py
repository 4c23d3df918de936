"""Trailing-edge, single-slot redraw rate limiting."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

DEFAULT_DEBOUNCE_SECONDS = 0.1


class RedrawDebouncer:
    """Forward at most one redraw per ``interval`` seconds.

    The first notification, or one arriving after the interval has elapsed,
    forwards immediately. Otherwise a single timer is armed for the end of the
    interval; notifications arriving while it is armed collapse into it.
    ``notify`` may be called from any thread.
    """

    def __init__(
        self,
        forward: Callable[[], None],
        interval: float = DEFAULT_DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        timer_factory: Callable[[float, Callable[[], None]], threading.Timer] = threading.Timer,
    ) -> None:
        self._forward = forward
        self._interval = max(0.0, interval)
        self._clock = clock
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._last_forward: float | None = None
        self._armed = False
        self._timer: threading.Timer | None = None
        self._closed = False

    @property
    def armed(self) -> bool:
        return self._armed

    @property
    def last_forward(self) -> float | None:
        return self._last_forward

    def notify(self) -> None:
        with self._lock:
            if self._armed or self._closed:
                return
            now = self._clock()
            if self._last_forward is None or now - self._last_forward >= self._interval:
                self._last_forward = now
                delay = None
            else:
                self._armed = True
                delay = self._interval - (now - self._last_forward)
                timer = self._timer_factory(delay, self._fire)
                timer.daemon = True
                self._timer = timer
        if delay is None:
            self._forward()
        else:
            timer.start()

    def _fire(self) -> None:
        with self._lock:
            if self._closed or not self._armed:
                return
            self._armed = False
            self._timer = None
            self._last_forward = self._clock()
        self._forward()

    def cancel(self) -> None:
        """Disarm any pending forward and ignore later notifications."""
        with self._lock:
            self._closed = True
            self._armed = False
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
