"""Settings dialog for NØDE timer.

A modal dialog for EMOM durations, the countdown length, and audio
preferences.  Changes are saved immediately and the caller re-applies the
settings once the dialog closes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QSpinBox, QSlider, QCheckBox, QPushButton, QFrame, QWidget,
)

from ..settings import Settings, save_settings


class SettingsDialog(QDialog):
    """Modal dialog for all user preferences."""

    def __init__(
        self,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        settings_path: Path | None = None,
        sound_preview_callback: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setMinimumWidth(400)
        self.setModal(True)

        self._settings = settings
        self._settings_path = settings_path
        self._sound_preview = sound_preview_callback
        self._populating = False

        self._build_ui()
        self._populate()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(24, 20, 24, 20)
        root.setSpacing(16)

        # ── EMOM section ─────────────────────────────────────────────
        root.addWidget(self._section_label("EMOM"))
        emom_form = QFormLayout()
        emom_form.setHorizontalSpacing(20)
        emom_form.setVerticalSpacing(10)

        self._work_spin = QSpinBox()
        self._work_spin.setRange(1, 600)
        self._work_spin.setSuffix(" s")
        self._work_spin.valueChanged.connect(self._on_timer_changed)
        emom_form.addRow("Work:", self._work_spin)

        self._rest_spin = QSpinBox()
        self._rest_spin.setRange(0, 600)
        self._rest_spin.setSuffix(" s")
        self._rest_spin.valueChanged.connect(self._on_timer_changed)
        emom_form.addRow("Rest:", self._rest_spin)

        self._rounds_spin = QSpinBox()
        self._rounds_spin.setRange(1, 99)
        self._rounds_spin.valueChanged.connect(self._on_timer_changed)
        emom_form.addRow("Rounds:", self._rounds_spin)

        root.addLayout(emom_form)
        root.addWidget(self._separator())

        # ── Countdown section ────────────────────────────────────────
        root.addWidget(self._section_label("Countdown"))
        cd_form = QFormLayout()
        cd_form.setHorizontalSpacing(20)

        self._countdown_spin = QSpinBox()
        self._countdown_spin.setRange(1, 3600)
        self._countdown_spin.setSuffix(" s")
        self._countdown_spin.valueChanged.connect(self._on_timer_changed)
        cd_form.addRow("Length:", self._countdown_spin)

        self._warning_spin = QSpinBox()
        self._warning_spin.setRange(0, 10)
        self._warning_spin.setSuffix(" s")
        self._warning_spin.valueChanged.connect(self._on_timer_changed)
        cd_form.addRow("Count last:", self._warning_spin)

        root.addLayout(cd_form)
        root.addWidget(self._separator())

        # ── Audio section ────────────────────────────────────────────
        root.addWidget(self._section_label("Audio"))
        snd_form = QFormLayout()
        snd_form.setHorizontalSpacing(20)
        snd_form.setVerticalSpacing(10)

        self._mute_cb = QCheckBox("Mute all")
        self._mute_cb.toggled.connect(self._on_toggle_changed)
        snd_form.addRow("", self._mute_cb)

        self._sfx_cb = QCheckBox("Sound effects")
        self._sfx_cb.toggled.connect(self._on_toggle_changed)
        snd_form.addRow("", self._sfx_cb)

        self._voice_cb = QCheckBox("Voice cues")
        self._voice_cb.toggled.connect(self._on_toggle_changed)
        snd_form.addRow("", self._voice_cb)

        vol_row = QHBoxLayout()
        vol_row.setSpacing(10)
        self._vol_slider = QSlider(Qt.Orientation.Horizontal)
        self._vol_slider.setRange(0, 100)
        self._vol_slider.setTickInterval(10)
        self._vol_label = QLabel("80%")
        self._vol_label.setMinimumWidth(36)
        self._vol_slider.valueChanged.connect(self._on_volume_changed)
        self._vol_slider.sliderReleased.connect(self._on_volume_released)
        vol_row.addWidget(self._vol_slider)
        vol_row.addWidget(self._vol_label)

        vol_wrapper = QWidget()
        vol_wrapper.setLayout(vol_row)
        snd_form.addRow("Volume:", vol_wrapper)

        root.addLayout(snd_form)

        # ── close button ─────────────────────────────────────────────
        root.addStretch()
        btn_row = QHBoxLayout()
        btn_row.addStretch()
        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.accept)
        btn_row.addWidget(close_btn)
        root.addLayout(btn_row)

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700; margin-top: 4px;")
        return lbl

    @staticmethod
    def _separator() -> QFrame:
        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        line.setFixedHeight(1)
        return line

    # ══════════════════════════════════════════════════════════════════
    #  POPULATE FROM SETTINGS
    # ══════════════════════════════════════════════════════════════════

    def _populate(self) -> None:
        # setValue fires valueChanged; don't write back half-populated state
        self._populating = True
        s = self._settings
        self._work_spin.setValue(s.work_seconds)
        self._rest_spin.setValue(s.rest_seconds)
        self._rounds_spin.setValue(s.total_rounds)
        self._countdown_spin.setValue(s.countdown_seconds)
        self._warning_spin.setValue(s.countdown_warning_seconds)
        self._mute_cb.setChecked(s.muted)
        self._sfx_cb.setChecked(s.sound_effects_enabled)
        self._voice_cb.setChecked(s.voice_cues_enabled)
        self._vol_slider.setValue(s.volume)
        self._vol_label.setText(f"{s.volume}%")
        self._populating = False

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLERS — save immediately
    # ══════════════════════════════════════════════════════════════════

    def _on_timer_changed(self) -> None:
        if self._populating:
            return
        self._settings.work_seconds = self._work_spin.value()
        self._settings.rest_seconds = self._rest_spin.value()
        self._settings.total_rounds = self._rounds_spin.value()
        self._settings.countdown_seconds = self._countdown_spin.value()
        self._settings.countdown_warning_seconds = self._warning_spin.value()
        self._save()

    def _on_toggle_changed(self) -> None:
        if self._populating:
            return
        self._settings.muted = self._mute_cb.isChecked()
        self._settings.sound_effects_enabled = self._sfx_cb.isChecked()
        self._settings.voice_cues_enabled = self._voice_cb.isChecked()
        self._save()

    def _on_volume_changed(self, value: int) -> None:
        self._vol_label.setText(f"{value}%")
        if self._populating:
            return
        self._settings.volume = value
        self._save()

    def _on_volume_released(self) -> None:
        """Play a preview beep when the user releases the volume slider."""
        if self._sound_preview:
            self._sound_preview()

    def _save(self) -> None:
        save_settings(self._settings, self._settings_path)

    @property
    def settings(self) -> Settings:
        return self._settings
