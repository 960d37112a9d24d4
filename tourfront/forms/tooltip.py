"""Single-message error tooltip state with optional auto-hide."""

from __future__ import annotations

from collections.abc import Callable
import threading
from typing import Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


Scheduler = Callable[[float, Callable[[], None]], TimerHandle]


def thread_timer_scheduler(delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
    """Run ``callback`` once after ``delay_seconds`` on a daemon timer thread."""
    timer = threading.Timer(delay_seconds, callback)
    timer.daemon = True
    timer.start()
    return timer


class ErrorTooltip:
    """Visibility and message of one tooltip, hidden after a delay if configured.

    Every show/hide/close bumps a generation counter, so a timer that fires
    after being superseded (or after ``close``) changes nothing.
    """

    def __init__(
        self,
        *,
        auto_hide_delay_ms: int | None = None,
        scheduler: Scheduler = thread_timer_scheduler,
    ) -> None:
        self._auto_hide_delay_ms = auto_hide_delay_ms
        self._scheduler = scheduler
        self._lock = threading.RLock()
        self._visible = False
        self._message = ""
        self._timer: TimerHandle | None = None
        self._generation = 0
        self._closed = False

    @property
    def is_visible(self) -> bool:
        return self._visible

    @property
    def message(self) -> str:
        return self._message

    def show(self, message: str) -> None:
        with self._lock:
            self._cancel_timer()
            self._message = message
            self._visible = True
            if self._closed or not self._auto_hide_delay_ms or self._auto_hide_delay_ms <= 0:
                return
            generation = self._generation
            self._timer = self._scheduler(
                self._auto_hide_delay_ms / 1000,
                lambda: self._expire(generation),
            )

    def hide(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._visible = False

    def toggle(self, message: str | None = None) -> None:
        if self._visible:
            self.hide()
        elif message:
            self.show(message)

    def close(self) -> None:
        """Release the pending timer; later expirations are ignored."""
        with self._lock:
            self._cancel_timer()
            self._closed = True

    def _cancel_timer(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _expire(self, generation: int) -> None:
        with self._lock:
            if self._closed or generation != self._generation:
                return
            self._visible = False
            self._timer = None
