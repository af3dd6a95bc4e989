from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from PyQt6.QtCore import QObject, pyqtSignal

from coffeetime import config
from coffeetime.core.audio import Cue
from coffeetime.core.progression import ProgressionState, ProgressionStore, add_xp
from coffeetime.core.timer import Mode, Ticker, TimerState
from coffeetime.data.storage import Storage


logger = logging.getLogger(__name__)


def clamp_duration(value: Any) -> int:
    """Coerce a user-entered minute count; anything unusable becomes 1."""
    try:
        minutes = int(value)
    except (TypeError, ValueError):
        return 1
    return max(1, minutes)


@dataclass(frozen=True)
class SessionRecord:
    id: int
    completed_at: datetime
    duration_minutes: int


class SessionLog:
    """Completed work sessions in completion order.

    When given a storage the log is loaded from and written through to the
    ``sessions`` table.
    """

    def __init__(self, storage: Storage | None = None) -> None:
        self._storage = storage
        self._records: list[SessionRecord] = []

    def load(self) -> None:
        if not self._storage:
            return
        try:
            rows = self._storage.list_sessions()
        except sqlite3.Error:
            logger.exception("Failed to load session history")
            return
        records = []
        for row in rows:
            try:
                completed_at = datetime.fromisoformat(row.completed_at)
            except ValueError:
                logger.warning("Skipping session %s with bad timestamp %r", row.id, row.completed_at)
                continue
            records.append(SessionRecord(row.id, completed_at, row.duration_minutes))
        self._records = records

    def append(self, duration_minutes: int, completed_at: datetime | None = None) -> SessionRecord:
        if duration_minutes < 1:
            raise ValueError("Session duration must be positive")
        completed_at = completed_at or datetime.now().replace(microsecond=0)
        record_id = self._next_local_id()
        if self._storage:
            try:
                record_id = self._storage.insert_session(completed_at.isoformat(), duration_minutes)
            except sqlite3.Error:
                logger.exception("Failed to persist session; keeping it in memory only")
        record = SessionRecord(record_id, completed_at, duration_minutes)
        self._records.append(record)
        return record

    @property
    def records(self) -> tuple[SessionRecord, ...]:
        return tuple(self._records)

    def recent(self) -> list[SessionRecord]:
        """Newest first."""
        return list(reversed(self._records))

    def __len__(self) -> int:
        return len(self._records)

    def _next_local_id(self) -> int:
        return max((r.id for r in self._records), default=0) + 1


class CueSink(Protocol):
    def play(self, cue: Cue) -> None: ...


class SessionStateMachine(QObject):
    """Work/rest cycle driven by the ticker.

    Every completed work period is logged and converted to XP; the next
    period starts on its own, so the timer keeps cycling until paused.
    """

    state_changed = pyqtSignal()
    session_logged = pyqtSignal(object)
    progression_changed = pyqtSignal(object)
    leveled_up = pyqtSignal(int)
    rewards_unlocked = pyqtSignal(object)
    notice = pyqtSignal(str, str)

    def __init__(
        self,
        store: ProgressionStore,
        session_log: SessionLog,
        ticker: Ticker | None = None,
        cue_player: CueSink | None = None,
        work_minutes: int = config.DEFAULT_WORK_MINUTES,
        rest_minutes: int = config.DEFAULT_REST_MINUTES,
    ) -> None:
        super().__init__()
        self._store = store
        self.session_log = session_log
        self._cue_player = cue_player
        self._work_minutes = clamp_duration(work_minutes)
        self._rest_minutes = clamp_duration(rest_minutes)
        self._state = TimerState(mode=Mode.WORK, remaining_seconds=self._work_minutes * 60)

        self._ticker = ticker or Ticker(self)
        self._ticker.ticked.connect(self._on_ticked)
        self._ticker.expired.connect(self._on_expired)

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def progression(self) -> ProgressionState:
        return self._store.state

    @property
    def work_minutes(self) -> int:
        return self._work_minutes

    @property
    def rest_minutes(self) -> int:
        return self._rest_minutes

    def duration_seconds(self, mode: Mode) -> int:
        return (self._work_minutes if mode == Mode.WORK else self._rest_minutes) * 60

    def toggle(self) -> None:
        if not self._state.is_active and self._state.remaining_seconds == 0:
            self._state.mode = self._state.mode.other
            self._state.remaining_seconds = self.duration_seconds(self._state.mode)

        if self._state.is_active:
            self._state.is_active = False
            self._ticker.pause()
        else:
            self._state.is_active = True
            self._play(Cue.START)
            self._ticker.arm(self._state.remaining_seconds)
        self.state_changed.emit()

    def switch_mode(self, mode: Mode) -> bool:
        if self._state.is_active:
            self.notice.emit("Cannot switch mode while timer is active", "Pause the timer first.")
            return False
        self._ticker.cancel()
        self._state.mode = Mode(mode)
        self._state.remaining_seconds = self.duration_seconds(self._state.mode)
        self.state_changed.emit()
        return True

    def reset(self) -> None:
        self._ticker.cancel()
        self._state.mode = Mode.WORK
        self._state.is_active = False
        self._state.remaining_seconds = self.duration_seconds(Mode.WORK)
        self.state_changed.emit()

    def configure(self, work_minutes: Any, rest_minutes: Any) -> None:
        self._work_minutes = clamp_duration(work_minutes)
        self._rest_minutes = clamp_duration(rest_minutes)
        if not self._state.is_active:
            self._ticker.cancel()
            self._state.remaining_seconds = self.duration_seconds(self._state.mode)
        self.state_changed.emit()

    def _on_ticked(self, remaining: int) -> None:
        self._state.remaining_seconds = remaining
        self.state_changed.emit()

    def _on_expired(self) -> None:
        if not self._state.is_active:
            return
        self._play(Cue.END)
        if self._state.mode == Mode.WORK:
            self._complete_work_session()

        self._state.mode = self._state.mode.other
        self._state.remaining_seconds = self.duration_seconds(self._state.mode)
        logger.info("Switching to %s for %s seconds", self._state.mode.value, self._state.remaining_seconds)
        self.state_changed.emit()
        self._ticker.arm(self._state.remaining_seconds)

    def _complete_work_session(self) -> None:
        record = self.session_log.append(self._work_minutes)
        self.session_logged.emit(record)

        current = self._store.state
        result = add_xp(current.xp, current.level, self._work_minutes * config.XP_PER_MINUTE)
        self._store.save(result.state)
        self.progression_changed.emit(result.state)

        if result.leveled_up:
            logger.info("Level up: %s -> %s", current.level, result.state.level)
            self._play(Cue.LEVEL_UP)
            self.leveled_up.emit(result.state.level)
        if result.unlocked_tiers:
            self.rewards_unlocked.emit(list(result.unlocked_tiers))

    def _play(self, cue: Cue) -> None:
        if self._cue_player is None:
            return
        try:
            self._cue_player.play(cue)
        except Exception:
            logger.exception("Cue %s failed", cue.value)
