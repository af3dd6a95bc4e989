from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from PyQt6.QtCore import QObject, QTimer, pyqtSignal


TICK_INTERVAL_MS = 1000


class Mode(str, Enum):
    WORK = "work"
    REST = "rest"

    @property
    def other(self) -> Mode:
        return Mode.REST if self is Mode.WORK else Mode.WORK


@dataclass
class TimerState:
    mode: Mode
    remaining_seconds: int
    is_active: bool = False


class Ticker(QObject):
    """1 Hz countdown detached from any domain logic.

    Emits ``ticked(remaining)`` after each decrement and ``expired`` once
    when the count reaches zero, after which it must be armed again.
    """

    ticked = pyqtSignal(int)
    expired = pyqtSignal()

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._remaining = 0
        self._armed = False
        self._timer = QTimer(self)
        self._timer.setInterval(TICK_INTERVAL_MS)
        self._timer.timeout.connect(self.tick)

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._armed and self._timer.isActive()

    def arm(self, duration_seconds: int) -> None:
        if duration_seconds < 0:
            raise ValueError("Duration must not be negative")
        self._remaining = duration_seconds
        self._armed = True
        if duration_seconds == 0:
            self._expire()
            return
        self._timer.start()

    def pause(self) -> None:
        self._timer.stop()

    def resume(self) -> None:
        if self._armed and self._remaining > 0:
            self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()
        self._remaining = 0
        self._armed = False

    def tick(self) -> None:
        """Apply one decrement; connected to the QTimer timeout."""
        if not self.is_running or self._remaining <= 0:
            return
        self._remaining -= 1
        self.ticked.emit(self._remaining)
        if self._remaining == 0:
            self._expire()

    def _expire(self) -> None:
        self._timer.stop()
        self._armed = False
        self.expired.emit()


def format_time(seconds: int) -> str:
    mins, secs = divmod(max(0, seconds), 60)
    return f"{mins:02d}:{secs:02d}"


def liquid_level(state: TimerState, work_minutes: int, rest_minutes: int) -> float:
    """Cup fill percentage: work drains the cup, rest refills it."""
    total = (work_minutes if state.mode == Mode.WORK else rest_minutes) * 60
    if total <= 0:
        return 100.0 if state.mode == Mode.WORK else 0.0
    progress = max(0.0, min(100.0, state.remaining_seconds / total * 100))
    return progress if state.mode == Mode.WORK else 100.0 - progress
