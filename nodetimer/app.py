"""Main window: EMOM and countdown tabs, audio cues, settings."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import QMainWindow, QStatusBar, QTabWidget, QVBoxLayout, QWidget

from .audio.cues import AudioCueController
from .audio.sounds import SoundManager
from .audio.voice import VoiceAnnouncer
from .database.db import Database
from .settings import Settings, load_settings, save_settings
from .timer.countdown import CountdownTimer
from .timer.engine import IntervalTimer, InvalidConfigurationError, Phase
from .ui.countdown_widget import CountdownWidget
from .ui.styles import build_stylesheet
from .ui.timer_widget import EmomTimerWidget

logger = logging.getLogger(__name__)


class NodeTimerApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        settings_path: Path | None = None,
        database: Database | None = None,
        sound_manager: SoundManager | None = None,
        voice: VoiceAnnouncer | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("NØDE Timer")
        self.setMinimumSize(380, 480)

        # ── settings ──────────────────────────────────────────────────
        self._settings_path = settings_path
        self._settings: Settings = (
            settings if settings is not None else load_settings(settings_path)
        )
        self._database = database
        self.resize(self._settings.window_width, self._settings.window_height)
        if self._settings.window_x is not None and self._settings.window_y is not None:
            self.move(self._settings.window_x, self._settings.window_y)

        # ── audio ─────────────────────────────────────────────────────
        self._sound_manager = (
            sound_manager if sound_manager is not None else SoundManager(parent=self)
        )
        self._voice = voice if voice is not None else VoiceAnnouncer(parent=self)
        self._cues = AudioCueController(self._sound_manager, self._voice, self)
        self._cues.apply_settings(self._settings)

        # ── timers ────────────────────────────────────────────────────
        self._emom = self._make_emom_timer()
        self._countdown = self._make_countdown_timer()
        self._cues.attach_interval(self._emom)
        self._cues.attach_countdown(self._countdown)

        # ── central widget ────────────────────────────────────────────
        self.setStyleSheet(build_stylesheet())
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 12, 16, 12)

        self._tabs = QTabWidget(central)
        layout.addWidget(self._tabs)

        self._emom_widget = EmomTimerWidget(self._emom, self._tabs)
        self._tabs.addTab(self._emom_widget, "EMOM")

        self._countdown_widget = CountdownWidget(self._countdown, self._tabs)
        self._tabs.addTab(self._countdown_widget, "Countdown")

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage("Ready")

        self._build_menu_bar()
        self._connect_timer_status(self._emom)

    # ══════════════════════════════════════════════════════════════════
    #  TIMERS
    # ══════════════════════════════════════════════════════════════════

    @property
    def emom_timer(self) -> IntervalTimer:
        return self._emom

    @property
    def countdown_timer(self) -> CountdownTimer:
        return self._countdown

    def _make_emom_timer(self) -> IntervalTimer:
        try:
            config = self._settings.timer_configuration()
        except InvalidConfigurationError as exc:
            logger.error("Invalid EMOM settings (%s); using defaults", exc)
            config = Settings().timer_configuration()
        return IntervalTimer(config, self, database=self._database)

    def _make_countdown_timer(self) -> CountdownTimer:
        try:
            return CountdownTimer(
                self._settings.countdown_seconds, self, database=self._database,
            )
        except InvalidConfigurationError as exc:
            logger.error("Invalid countdown length (%s); using default", exc)
            return CountdownTimer(
                Settings().countdown_seconds, self, database=self._database,
            )

    def _connect_timer_status(self, timer: IntervalTimer) -> None:
        timer.phase_changed.connect(self._on_phase_changed)
        timer.completed.connect(self._on_emom_completed)

    # ══════════════════════════════════════════════════════════════════
    #  MENU
    # ══════════════════════════════════════════════════════════════════

    def _build_menu_bar(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("File")
        settings_action = QAction("Settings…", self)
        settings_action.setShortcut(QKeySequence("Ctrl+,"))
        settings_action.triggered.connect(self._open_settings)
        file_menu.addAction(settings_action)

        audio_menu = menu_bar.addMenu("Audio")
        self._mute_action = QAction("Mute", self)
        self._mute_action.setCheckable(True)
        self._mute_action.setChecked(self._settings.muted)
        self._mute_action.setShortcut(QKeySequence("Ctrl+M"))
        self._mute_action.triggered.connect(self._toggle_mute)
        audio_menu.addAction(self._mute_action)

    def _toggle_mute(self) -> None:
        self._settings.muted = self._cues.toggle_mute()
        self._mute_action.setChecked(self._settings.muted)
        save_settings(self._settings, self._settings_path)

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_phase_changed(self, phase: Phase, round_number: int) -> None:
        total = self._emom.total_rounds
        label = "Work" if phase == Phase.WORK else "Rest"
        self._status_bar.showMessage(f"Round {round_number}/{total} · {label}")

    def _on_emom_completed(self) -> None:
        self._status_bar.showMessage("Workout complete")

    # ══════════════════════════════════════════════════════════════════
    #  SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _open_settings(self) -> None:
        from .ui.settings_dialog import SettingsDialog

        def _preview_beep():
            self._sound_manager.set_volume(self._settings.volume)
            self._sound_manager.play("beep")

        dlg = SettingsDialog(
            self._settings,
            parent=self,
            settings_path=self._settings_path,
            sound_preview_callback=_preview_beep,
        )
        dlg.exec()
        self._apply_settings()

    def _apply_settings(self) -> None:
        """Push current Settings into audio and any idle timers."""
        s = self._settings
        self._cues.apply_settings(s)
        self._mute_action.setChecked(s.muted)

        # Only rebuild timers that aren't mid-workout
        if not self._emom.has_started or self._emom.is_complete:
            old = self._emom
            self._emom = self._make_emom_timer()
            self._cues.attach_interval(self._emom)
            self._emom_widget.set_timer(self._emom)
            self._connect_timer_status(self._emom)
            old.deleteLater()

        if not self._countdown.has_started or self._countdown.is_complete:
            old_cd = self._countdown
            self._countdown = self._make_countdown_timer()
            self._cues.attach_countdown(self._countdown)
            self._countdown_widget.set_timer(self._countdown)
            old_cd.deleteLater()

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:
        self._emom.reset()
        self._countdown.reset()
        self._save_geometry()
        super().closeEvent(event)

    def _save_geometry(self) -> None:
        geo = self.geometry()
        self._settings.window_x = geo.x()
        self._settings.window_y = geo.y()
        self._settings.window_width = geo.width()
        self._settings.window_height = geo.height()
        save_settings(self._settings, self._settings_path)
