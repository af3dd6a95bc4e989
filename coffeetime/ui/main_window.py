from __future__ import annotations

import threading

from PyQt6.QtCore import QElapsedTimer, QRectF, QTimer, Qt, pyqtSignal
from PyQt6.QtGui import QAction, QKeySequence, QPainter
from PyQt6.QtWidgets import (
    QApplication,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QProgressBar,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from coffeetime.ai.phrases import PhraseSource, resolve_phrase
from coffeetime.core.audio import CuePlayer
from coffeetime.core.progression import ProgressionStore, xp_progress
from coffeetime.core.rewards import REWARD_CATALOG, RewardTier, SelectionGuard
from coffeetime.core.session import SessionLog, SessionStateMachine
from coffeetime.core.timer import Mode, format_time, liquid_level
from coffeetime.cups.base import BaseCup
from coffeetime.cups.fancy import FancyCup
from coffeetime.cups.glass import GlassCup
from coffeetime.cups.mug import MugCup
from coffeetime.cups.takeaway import TakeawayCup
from coffeetime.ui.styles import apply_theme

UNLOCK_TOAST_DELAY_MS = 1000
UNLOCK_TOAST_SPACING_MS = 3000


def unlock_delay_ms(position: int) -> int:
    """Delay before the toast for the unlock at ``position`` in one award."""
    return UNLOCK_TOAST_DELAY_MS + position * UNLOCK_TOAST_SPACING_MS


class CupWidget(QWidget):
    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(260, 260)
        self._cup: BaseCup = MugCup()
        self._level = 100.0
        self._is_hot = True
        self._time_s = 0.0

    def set_cup(self, cup: BaseCup) -> None:
        self._cup = cup
        self.update()

    def set_state(self, level: float, is_hot: bool, time_s: float) -> None:
        self._level = level
        self._is_hot = is_hot
        self._time_s = time_s
        self.update()

    def paintEvent(self, event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        rect = QRectF(self.rect().adjusted(10, 10, -10, -10))
        self._cup.render(painter, rect, self._level, self._is_hot, self._time_s)


class SettingsDialog(QDialog):
    def __init__(self, work_minutes: int, rest_minutes: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Customize Sessions")
        self.work_spin = QSpinBox()
        self.work_spin.setRange(1, 240)
        self.work_spin.setValue(work_minutes)
        self.rest_spin = QSpinBox()
        self.rest_spin.setRange(1, 240)
        self.rest_spin.setValue(rest_minutes)

        form = QFormLayout(self)
        form.addRow("Work:", self.work_spin)
        form.addRow("Rest:", self.rest_spin)
        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        form.addRow(buttons)


class HistoryDialog(QDialog):
    def __init__(self, session_log: SessionLog, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Session History")
        self.resize(360, 420)
        count = len(session_log)
        layout = QVBoxLayout(self)
        layout.addWidget(QLabel(f"You have completed {count} work session{'' if count == 1 else 's'}."))
        history = QListWidget()
        for record in session_log.recent():
            QListWidgetItem(
                f"☕ {record.duration_minutes} minutes · {record.completed_at:%Y-%m-%d %H:%M}",
                history,
            )
        if not count:
            QListWidgetItem("No sessions completed yet.", history)
        layout.addWidget(history, 1)


class MainWindow(QMainWindow):
    phrase_ready = pyqtSignal(str, str)

    def __init__(
        self,
        machine: SessionStateMachine,
        store: ProgressionStore,
        guard: SelectionGuard,
        cue_player: CuePlayer,
        phrase_source: PhraseSource,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Coffee Time")
        self.resize(480, 720)

        self.machine = machine
        self.store = store
        self.guard = guard
        self.cue_player = cue_player
        self.phrase_source = phrase_source
        self.cups: dict[str, BaseCup] = {
            cup.identifier: cup for cup in (MugCup(), GlassCup(), TakeawayCup(), FancyCup())
        }
        self._last_mode = machine.state.mode
        self.dark_theme = False

        self.elapsed = QElapsedTimer()
        self.elapsed.start()

        self._build_ui()
        self._connect_signals()

        self.frame_timer = QTimer(self)
        self.frame_timer.setInterval(33)
        self.frame_timer.timeout.connect(self._on_frame)
        self.frame_timer.start()

        self._refresh_progression()
        self._refresh_timer()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        top_bar = QHBoxLayout()
        title = QLabel("Coffee Time")
        title.setObjectName("Heading")
        self.settings_btn = QPushButton("Settings")
        self.history_btn = QPushButton("History")
        self.theme_btn = QPushButton("Dark")
        top_bar.addWidget(title)
        top_bar.addStretch()
        top_bar.addWidget(self.settings_btn)
        top_bar.addWidget(self.history_btn)
        top_bar.addWidget(self.theme_btn)
        layout.addLayout(top_bar)

        mode_bar = QHBoxLayout()
        self.work_btn = QPushButton("Work")
        self.rest_btn = QPushButton("Rest")
        mode_bar.addStretch()
        mode_bar.addWidget(self.work_btn)
        mode_bar.addWidget(self.rest_btn)
        mode_bar.addStretch()
        layout.addLayout(mode_bar)

        cup_bar = QHBoxLayout()
        self.cup_combo = QComboBox()
        cup_bar.addWidget(QLabel("Cup:"))
        cup_bar.addWidget(self.cup_combo, 1)
        layout.addLayout(cup_bar)

        self.cup_widget = CupWidget()
        layout.addWidget(self.cup_widget, 1)

        self.time_label = QLabel("25:00")
        self.time_label.setObjectName("TimerLabel")
        self.time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.time_label)

        self.phrase_label = QLabel("")
        self.phrase_label.setObjectName("MutedText")
        self.phrase_label.setWordWrap(True)
        self.phrase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.phrase_label)

        info_bar = QHBoxLayout()
        self.cup_name_label = QLabel("")
        self.level_label = QLabel("Level 1")
        info_bar.addWidget(self.cup_name_label)
        info_bar.addStretch()
        info_bar.addWidget(self.level_label)
        layout.addLayout(info_bar)

        self.xp_bar = QProgressBar()
        self.xp_bar.setRange(0, 100)
        self.xp_bar.setTextVisible(False)
        layout.addWidget(self.xp_bar)
        self.xp_label = QLabel("")
        self.xp_label.setObjectName("MutedText")
        self.xp_label.setAlignment(Qt.AlignmentFlag.AlignRight)
        layout.addWidget(self.xp_label)

        controls = QHBoxLayout()
        self.toggle_btn = QPushButton("Start")
        self.toggle_btn.setObjectName("PrimaryButton")
        self.reset_btn = QPushButton("Reset")
        self.mute_btn = QPushButton("Mute")
        controls.addStretch()
        controls.addWidget(self.toggle_btn)
        controls.addWidget(self.reset_btn)
        controls.addWidget(self.mute_btn)
        controls.addStretch()
        layout.addLayout(controls)

        space_action = QAction(self)
        space_action.setShortcut(QKeySequence(Qt.Key.Key_Space))
        space_action.triggered.connect(self.machine.toggle)
        self.addAction(space_action)

    def _connect_signals(self) -> None:
        self.toggle_btn.clicked.connect(self.machine.toggle)
        self.reset_btn.clicked.connect(self.machine.reset)
        self.mute_btn.clicked.connect(self._toggle_mute)
        self.work_btn.clicked.connect(lambda: self.machine.switch_mode(Mode.WORK))
        self.rest_btn.clicked.connect(lambda: self.machine.switch_mode(Mode.REST))
        self.settings_btn.clicked.connect(self._open_settings)
        self.history_btn.clicked.connect(self._open_history)
        self.theme_btn.clicked.connect(self._toggle_theme)
        self.cup_combo.currentIndexChanged.connect(self._on_cup_requested)

        self.machine.state_changed.connect(self._refresh_timer)
        self.machine.progression_changed.connect(lambda _state: self._refresh_progression())
        self.machine.leveled_up.connect(self._on_leveled_up)
        self.machine.rewards_unlocked.connect(self._on_rewards_unlocked)
        self.machine.notice.connect(self._toast)
        self.phrase_ready.connect(self._on_phrase_ready)

    def _toast(self, title: str, message: str = "") -> None:
        text = f"{title} {message}".strip()
        self.statusBar().showMessage(text, 5000)

    def _on_cup_requested(self, index: int) -> None:
        result = self.guard.select(index, self.store.state.level)
        if not result.accepted:
            self._toast("Cup Locked!", result.notice)
            self.cup_combo.blockSignals(True)
            self.cup_combo.setCurrentIndex(result.index)
            self.cup_combo.blockSignals(False)
        self._show_selected_cup()

    def _show_selected_cup(self) -> None:
        tier = REWARD_CATALOG[self.store.selected_index]
        self.cup_widget.set_cup(self.cups[tier.identifier])
        self.cup_name_label.setText(tier.display_name)

    def _refresh_cups(self) -> None:
        level = self.store.state.level
        self.cup_combo.blockSignals(True)
        self.cup_combo.clear()
        for tier in REWARD_CATALOG:
            suffix = "" if tier.level_requirement <= level else f"  (Lvl {tier.level_requirement})"
            self.cup_combo.addItem(f"{tier.display_name}{suffix}")
        self.cup_combo.setCurrentIndex(self.store.selected_index)
        self.cup_combo.blockSignals(False)
        self._show_selected_cup()

    def _refresh_progression(self) -> None:
        state = self.store.state
        self.level_label.setText(f"Level {state.level}")
        self.xp_bar.setValue(int(xp_progress(state)))
        self.xp_label.setText(f"{state.xp}/{state.xp_to_next_level} XP")
        self._refresh_cups()

    def _refresh_timer(self) -> None:
        state = self.machine.state
        self.time_label.setText(format_time(state.remaining_seconds))
        self.toggle_btn.setText("Pause" if state.is_active else "Start")
        self.work_btn.setEnabled(state.mode != Mode.WORK)
        self.rest_btn.setEnabled(state.mode != Mode.REST)

        if state.mode != self._last_mode:
            self._last_mode = state.mode
            if state.mode == Mode.REST:
                self._request_phrase()
            else:
                self.phrase_label.setText("")

    def _request_phrase(self) -> None:
        self.phrase_label.setText("Brewing a thought…")
        threading.Thread(target=self._fetch_phrase, daemon=True).start()

    def _fetch_phrase(self) -> None:
        result = resolve_phrase(self.phrase_source)
        self.phrase_ready.emit(result.text, result.notice)

    def _on_phrase_ready(self, text: str, notice: str) -> None:
        if self.machine.state.mode != Mode.REST:
            return
        self.phrase_label.setText(text)
        if notice:
            self._toast(notice)

    def _on_leveled_up(self, level: int) -> None:
        self._toast("Level Up!", f"You've reached level {level}!")

    def _on_rewards_unlocked(self, tiers: list[RewardTier]) -> None:
        for position, tier in enumerate(tiers):
            QTimer.singleShot(unlock_delay_ms(position), lambda tier=tier: self._show_unlock(tier))

    def _show_unlock(self, tier: RewardTier) -> None:
        self._toast(
            f"✨ Unlocked: {tier.display_name}!",
            f"You've reached level {tier.level_requirement} and unlocked a new cup.",
        )

    def _toggle_mute(self) -> None:
        self.cue_player.muted = not self.cue_player.muted
        self.mute_btn.setText("Unmute" if self.cue_player.muted else "Mute")

    def _toggle_theme(self) -> None:
        self.dark_theme = not self.dark_theme
        apply_theme(QApplication.instance(), dark=self.dark_theme)
        self.theme_btn.setText("Light" if self.dark_theme else "Dark")

    def _open_settings(self) -> None:
        dialog = SettingsDialog(self.machine.work_minutes, self.machine.rest_minutes, self)
        if dialog.exec() == QDialog.DialogCode.Accepted:
            self.machine.configure(dialog.work_spin.value(), dialog.rest_spin.value())

    def _open_history(self) -> None:
        HistoryDialog(self.machine.session_log, self).exec()

    def _on_frame(self) -> None:
        state = self.machine.state
        level = liquid_level(state, self.machine.work_minutes, self.machine.rest_minutes)
        self.cup_widget.set_state(level, state.mode == Mode.WORK, self.elapsed.elapsed() / 1000.0)
