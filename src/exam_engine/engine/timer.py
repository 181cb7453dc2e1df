"""
Module: engine.timer

Purpose:
    Countdown clock shared by a whole attempt. The controller owns the
    Running/Paused state; ticks come from an injected tick source so the
    clock can be driven by a Qt timer in an application and by simulated
    ticks in tests.

Key Classes:
    - TimerState: RUNNING / PAUSED
    - TimerController: Countdown with pause/resume and an end-of-time callback
    - ManualTickSource: Delivers ticks on demand
    - QtTickSource: Delivers ticks from a QTimer on the Qt event loop

Dependencies:
    - PySide6.QtCore: QTimer for the real-time tick source

Used By:
    - engine.session: One controller per attempt
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional, Protocol

from PySide6.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)

TickCallback = Callable[[], None]


class TimerState(str, Enum):
    RUNNING = "running"
    PAUSED = "paused"


class TickSource(Protocol):
    """Something that calls back once per logical second until stopped."""

    def start(self, callback: TickCallback) -> None: ...

    def stop(self) -> None: ...


class ManualTickSource:
    """
    Tick source driven by the caller.

    Usage:
        source = ManualTickSource()
        timer = TimerController(5, source)
        timer.resume()
        source.advance(5)  # five ticks
    """

    def __init__(self) -> None:
        self._callback: Optional[TickCallback] = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    def start(self, callback: TickCallback) -> None:
        self._callback = callback

    def stop(self) -> None:
        self._callback = None

    def advance(self, ticks: int = 1) -> int:
        """
        Deliver up to ``ticks`` ticks.

        Stops early if the receiver stops the source (pause, expiry,
        cancellation).

        Returns:
            Number of ticks actually delivered
        """
        delivered = 0
        for _ in range(ticks):
            if self._callback is None:
                break
            self._callback()
            delivered += 1
        return delivered


class QtTickSource(QObject):
    """Tick source backed by a repeating QTimer."""

    def __init__(self, interval_ms: int = 1000, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._callback: Optional[TickCallback] = None
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._on_timeout)

    @property
    def active(self) -> bool:
        return self._timer.isActive()

    def start(self, callback: TickCallback) -> None:
        self._callback = callback
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()
        self._callback = None

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()


class TimerController:
    """
    Countdown for one attempt.

    The controller starts PAUSED at ``remaining_sec``; call resume() to run.
    Each tick while RUNNING removes exactly one second, floored at 0. When
    the clock reaches 0 it pauses itself, calls ``on_expired`` once and
    never resumes.

    Invariants:
        - remaining_sec >= 0 and never increases while RUNNING
        - on_expired is called at most once
        - no tick mutates the clock after cancel()
    """

    def __init__(
        self,
        remaining_sec: int,
        tick_source: TickSource,
        *,
        on_expired: Optional[Callable[[], None]] = None,
        on_tick: Optional[Callable[[int], None]] = None,
    ) -> None:
        self._remaining = max(0, int(remaining_sec))
        self._source = tick_source
        self._on_expired = on_expired
        self._on_tick = on_tick
        self._state = TimerState.PAUSED
        self._expired = False
        self._cancelled = False

    @property
    def remaining_sec(self) -> int:
        return self._remaining

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is TimerState.RUNNING

    @property
    def expired(self) -> bool:
        return self._expired

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def resume(self) -> None:
        """Start counting down. No-op if running, cancelled or at zero."""
        if self._cancelled or self._state is TimerState.RUNNING or self._remaining == 0:
            return
        self._state = TimerState.RUNNING
        self._source.start(self.tick)
        logger.debug(f"Timer resumed at {self._remaining}s")

    def pause(self) -> None:
        """Stop counting down. No-op if already paused."""
        if self._state is TimerState.PAUSED:
            return
        self._state = TimerState.PAUSED
        self._source.stop()
        logger.debug(f"Timer paused at {self._remaining}s")

    def set_remaining(self, value: int) -> bool:
        """
        Overwrite the remaining time while paused.

        Used to restore a persisted value. Ignored while running so a live
        countdown is never corrupted.

        Returns:
            True if the value was applied
        """
        if self._state is TimerState.RUNNING or self._cancelled:
            logger.debug(f"Ignoring set_remaining({value}) while {self._state.value}")
            return False
        self._remaining = max(0, int(value))
        return True

    def cancel(self) -> None:
        """Halt ticking for good (submit or exit)."""
        self._source.stop()
        self._state = TimerState.PAUSED
        self._cancelled = True

    def tick(self) -> None:
        """Advance the clock by one second."""
        if self._cancelled or self._state is not TimerState.RUNNING:
            return

        self._remaining = max(0, self._remaining - 1)
        if self._on_tick is not None:
            self._on_tick(self._remaining)

        if self._remaining == 0 and not self._cancelled:
            self._state = TimerState.PAUSED
            self._source.stop()
            if not self._expired:
                self._expired = True
                logger.info("Time expired")
                if self._on_expired is not None:
                    self._on_expired()
