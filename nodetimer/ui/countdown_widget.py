"""Plain countdown card: MM:SS with Start/Pause and Reset."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QFrame,
)

from ..timer.countdown import CountdownTimer
from .styles import PALETTE
from .timer_widget import format_time


class CountdownWidget(QWidget):
    """Displays and drives a :class:`CountdownTimer`."""

    def __init__(self, timer: CountdownTimer, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._timer = timer
        self._build_ui()
        self._start_pause_btn.clicked.connect(self._on_start_pause)
        self._reset_btn.clicked.connect(self._on_reset)
        self._connect_timer(timer)
        self._refresh()

    @property
    def timer(self) -> CountdownTimer:
        return self._timer

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._time_label = QLabel(card)
        self._time_label.setObjectName("timeLabel")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._time_label.setStyleSheet(f"color: {PALETTE['accent']};")
        layout.addWidget(self._time_label)

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

    def _connect_timer(self, timer: CountdownTimer) -> None:
        timer.tick.connect(self._on_tick)
        timer.running_changed.connect(self._on_running_changed)

    def set_timer(self, timer: CountdownTimer) -> None:
        self._timer.tick.disconnect(self._on_tick)
        self._timer.running_changed.disconnect(self._on_running_changed)
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

    def _on_tick(self, remaining: int) -> None:
        self._time_label.setText(format_time(remaining))

    def _on_running_changed(self, running: bool) -> None:
        self._refresh()

    def _refresh(self) -> None:
        t = self._timer
        self._time_label.setText(format_time(t.remaining))
        self._start_pause_btn.setText("Pause" if t.is_running else "Start")
        # Start only makes sense while there is time left
        self._start_pause_btn.setVisible(not t.is_complete)
