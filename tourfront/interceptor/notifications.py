"""Notification sinks the error interceptor renders toasts through."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Protocol

logger = logging.getLogger(__name__)

SINGLE_TOAST_MAX_WIDTH = 400
LIST_TOAST_MAX_WIDTH = 500


@dataclass(frozen=True)
class Toast:
    """One user-facing notification with its display hints."""

    message: str
    duration_ms: int
    level: str = "error"
    max_width: int = SINGLE_TOAST_MAX_WIDTH
    preserve_line_breaks: bool = False


class NotificationSink(Protocol):
    """Capability used to surface a toast to the user."""

    def notify(self, toast: Toast) -> None: ...


class NullNotificationSink:
    """Drop every toast; used where no user is watching."""

    def notify(self, toast: Toast) -> None:
        return None


class LoggingNotificationSink:
    """Write toasts to the log for non-interactive contexts."""

    def __init__(self, *, log: logging.Logger | None = None) -> None:
        self._log = log or logger

    def notify(self, toast: Toast) -> None:
        self._log.warning("[%s toast %sms] %s", toast.level, toast.duration_ms, toast.message)


class BufferedNotificationSink:
    """Collect toasts so a page renderer can flush them into its response."""

    def __init__(self) -> None:
        self._pending: list[Toast] = []

    def notify(self, toast: Toast) -> None:
        self._pending.append(toast)

    @property
    def pending(self) -> tuple[Toast, ...]:
        return tuple(self._pending)

    def drain(self) -> list[Toast]:
        """Return queued toasts in arrival order and forget them."""
        drained, self._pending = self._pending, []
        return drained
