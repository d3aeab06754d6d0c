"""
Cancellable delayed callbacks on the Qt event loop.

This module provides the debounce primitive used by validation sessions:
`schedule(delay_ms, callback)` returns a token and `cancel(token)` guarantees
the callback will not run. Each scheduled call is backed by its own
single-shot QTimer.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from PySide6.QtCore import QObject, QTimer

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class ScheduledCall:
    """Token identifying one scheduled callback."""

    call_id: int
    delay_ms: int
    cancelled: bool = False
    fired: bool = False

    @property
    def pending(self) -> bool:
        """True while the callback may still run."""
        return not (self.cancelled or self.fired)


class Scheduler(Protocol):
    """Anything able to run a callback later and take it back."""

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall: ...
    def cancel(self, token: ScheduledCall | None) -> None: ...


class QtTimerScheduler(QObject):
    """
    Scheduler backed by single-shot QTimers.

    A delay of 0 fires on the next event loop iteration, never synchronously.
    Timers are parented to the scheduler so they die with it.
    """

    def __init__(self, parent: QObject | None = None):
        super().__init__(parent)
        self._timers: dict[int, tuple[ScheduledCall, QTimer]] = {}
        self._ids = itertools.count(1)

    def schedule(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        """
        Run a callback once after a delay.

        Args:
            delay_ms: Quiet period in milliseconds (non-negative)
            callback: Function to call when the timer fires

        Returns:
            Token that can be passed to cancel()
        """
        if delay_ms < 0:
            raise ConfigurationError(f"Delay must be non-negative, got {delay_ms}")

        token = ScheduledCall(call_id=next(self._ids), delay_ms=delay_ms)

        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.timeout.connect(lambda: self._fire(token, callback))
        self._timers[token.call_id] = (token, timer)

        timer.start(delay_ms)
        logger.debug(f"Scheduled call {token.call_id} in {delay_ms}ms")
        return token

    def cancel(self, token: ScheduledCall | None) -> None:
        """Cancel a scheduled call. Unknown, fired or cancelled tokens are ignored."""
        if token is None or not token.pending:
            return

        token.cancelled = True
        entry = self._timers.pop(token.call_id, None)
        if entry is not None:
            self._dispose_timer(entry[1])
        logger.debug(f"Cancelled call {token.call_id}")

    def cancel_all(self) -> None:
        """Cancel every pending call."""
        for token, timer in self._timers.values():
            token.cancelled = True
            self._dispose_timer(timer)
        self._timers.clear()

    def pending_count(self) -> int:
        """Number of calls that have not fired or been cancelled."""
        return len(self._timers)

    def _fire(self, token: ScheduledCall, callback: Callable[[], None]) -> None:
        entry = self._timers.pop(token.call_id, None)
        if entry is None or token.cancelled:
            return

        entry[1].deleteLater()
        token.fired = True
        callback()

    @staticmethod
    def _dispose_timer(timer: QTimer) -> None:
        timer.stop()
        timer.deleteLater()
