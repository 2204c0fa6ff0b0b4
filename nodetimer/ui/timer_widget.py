"""EMOM timer card.

Layout (top → bottom):
    - "Round X of Y"
    - MM:SS
    - phase label (WORK / REST / COMPLETE)
    - Start/Pause + Reset
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
)

from ..timer.engine import IntervalTimer, Phase
from .styles import PHASE_COLORS, COMPLETE_COLOR


PHASE_LABELS: dict[Phase, str] = {
    Phase.WORK: "WORK",
    Phase.REST: "REST",
}


def format_time(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class EmomTimerWidget(QWidget):
    """Displays and drives an :class:`IntervalTimer`."""

    def __init__(self, timer: IntervalTimer, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._timer = timer
        self._build_ui()
        self._connect_buttons()
        self._connect_timer(timer)
        self._refresh()

    @property
    def timer(self) -> IntervalTimer:
        return self._timer

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(8)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._round_label = QLabel(card)
        self._round_label.setObjectName("roundLabel")
        self._round_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._round_label)

        self._time_label = QLabel(card)
        self._time_label.setObjectName("timeLabel")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._time_label)

        self._phase_label = QLabel(card)
        self._phase_label.setObjectName("phaseLabel")
        self._phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._phase_label)

        layout.addSpacing(16)

        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_pause_btn = QPushButton("Start", card)
        self._start_pause_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton("Reset", card)

        btn_row.addWidget(self._start_pause_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_buttons(self) -> None:
        self._start_pause_btn.clicked.connect(self._on_start_pause)
        self._reset_btn.clicked.connect(self._on_reset)

    def _connect_timer(self, timer: IntervalTimer) -> None:
        timer.tick.connect(self._on_tick)
        timer.phase_changed.connect(self._on_phase_changed)
        timer.running_changed.connect(self._on_running_changed)
        timer.completed.connect(self._refresh)

    def _disconnect_timer(self, timer: IntervalTimer) -> None:
        timer.tick.disconnect(self._on_tick)
        timer.phase_changed.disconnect(self._on_phase_changed)
        timer.running_changed.disconnect(self._on_running_changed)
        timer.completed.disconnect(self._refresh)

    def set_timer(self, timer: IntervalTimer) -> None:
        """Swap in a new timer (e.g. after the EMOM settings changed)."""
        self._disconnect_timer(self._timer)
        self._timer = timer
        self._connect_timer(timer)
        self._refresh()

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_start_pause(self) -> None:
        if self._timer.is_running:
            self._timer.pause()
        else:
            self._timer.start()

    def _on_reset(self) -> None:
        self._timer.reset()
        self._refresh()

    def _on_tick(self, remaining: int, phase: Phase, round_number: int) -> None:
        self._time_label.setText(format_time(remaining))

    def _on_phase_changed(self, phase: Phase, round_number: int) -> None:
        self._refresh()

    def _on_running_changed(self, running: bool) -> None:
        self._refresh()

    def _refresh(self) -> None:
        t = self._timer
        self._round_label.setText(f"Round {t.current_round} of {t.total_rounds}")
        self._time_label.setText(format_time(t.remaining))

        if t.is_complete:
            label, color = "COMPLETE", COMPLETE_COLOR
        else:
            label, color = PHASE_LABELS[t.phase], PHASE_COLORS[t.phase]
        self._phase_label.setText(label)
        self._time_label.setStyleSheet(f"color: {color};")

        self._start_pause_btn.setText("Pause" if t.is_running else "Start")
        self._start_pause_btn.setVisible(not t.is_complete)
