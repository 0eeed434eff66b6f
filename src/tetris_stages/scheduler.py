"""Timer handling for the game loop.

The controller never talks to a clock directly.  It asks a :class:`Scheduler`
to run a callback later; an :mod:`asyncio` event loop already provides the
required ``call_later`` method, and tests substitute a fake that advances
virtual time.
"""

from __future__ import annotations

from typing import Callable, Optional, Protocol


class Cancellable(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> Cancellable:
        ...


class TimerSlot:
    """Owner of at most one pending timer.

    Arming the slot with :meth:`every` or :meth:`once` always cancels whatever
    was armed before, so two tick loops can never run side by side.  A handle
    that fires after being superseded is ignored; this covers schedulers whose
    ``cancel`` cannot stop a callback that is already queued.
    """

    def __init__(self, scheduler: Scheduler) -> None:
        self._scheduler = scheduler
        self._handle: Optional[Cancellable] = None
        self._token: Optional[object] = None
        self.interval_ms: Optional[float] = None

    @property
    def active(self) -> bool:
        """``True`` while a callback is pending."""

        return self._token is not None

    @property
    def repeating(self) -> bool:
        return self.active and self.interval_ms is not None

    def every(self, interval_ms: float, callback: Callable[[], None]) -> None:
        """Run ``callback`` every ``interval_ms`` until cancelled or replaced."""

        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.cancel()
        self.interval_ms = interval_ms
        self._arm(interval_ms, callback, repeat=True)

    def once(self, delay_ms: float, callback: Callable[[], None]) -> None:
        """Run ``callback`` a single time after ``delay_ms``."""

        self.cancel()
        self._arm(delay_ms, callback, repeat=False)

    def cancel(self) -> None:
        """Cancel the pending callback, if any."""

        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._token = None
        self.interval_ms = None

    def _arm(self, delay_ms: float, callback: Callable[[], None], *, repeat: bool) -> None:
        token = object()
        self._token = token

        def fire() -> None:
            if self._token is not token:
                return
            if repeat:
                # Re-arm first so the callback may replace the timer itself.
                self._handle = self._scheduler.call_later(delay_ms / 1000.0, fire)
            else:
                self._handle = None
                self._token = None
            callback()

        self._handle = self._scheduler.call_later(delay_ms / 1000.0, fire)
