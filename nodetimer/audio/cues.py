"""Maps timer notifications to sound effects and spoken cues."""

from __future__ import annotations

from PyQt6.QtCore import QObject

from ..settings import Settings
from ..timer.countdown import CountdownTimer
from ..timer.engine import IntervalTimer, Phase
from .sounds import SoundManager
from .voice import VoiceAnnouncer, VoiceCue, phrase_for

DEFAULT_WARNING_SECONDS = 3


class AudioCueController(QObject):
    """Subscribes to an :class:`IntervalTimer` (and optionally a
    :class:`CountdownTimer`) and plays the matching cues.

    ==================  ===================  ===========================
    event               sound                voice
    ==================  ===================  ===========================
    WORK entered        ``transition``       "Round N. Work"
    REST entered        ``transition``       "Rest"
    last N seconds      ``beep``             "3", "2", "1"
    EMOM complete       ``fanfare``          "Workout complete"
    countdown done      ``complete``         "Time"
    ==================  ===================  ===========================
    """

    def __init__(
        self,
        sounds: SoundManager,
        voice: VoiceAnnouncer,
        parent: QObject | None = None,
        *,
        warning_seconds: int = DEFAULT_WARNING_SECONDS,
    ) -> None:
        super().__init__(parent)
        self._sounds = sounds
        self._voice = voice
        self._warning_seconds = warning_seconds
        self._muted = False
        self._sound_effects = True
        self._voice_cues = True
        self._interval: IntervalTimer | None = None
        self._countdown: CountdownTimer | None = None

    # ── wiring ────────────────────────────────────────────────────────

    def attach_interval(self, timer: IntervalTimer) -> None:
        """Follow *timer*, dropping any previously attached interval timer."""
        if self._interval is not None:
            self._interval.phase_changed.disconnect(self._on_phase_changed)
            self._interval.tick.disconnect(self._on_interval_tick)
            self._interval.completed.disconnect(self._on_interval_completed)
        self._interval = timer
        timer.phase_changed.connect(self._on_phase_changed)
        timer.tick.connect(self._on_interval_tick)
        timer.completed.connect(self._on_interval_completed)

    def attach_countdown(self, timer: CountdownTimer) -> None:
        if self._countdown is not None:
            self._countdown.tick.disconnect(self._on_countdown_tick)
            self._countdown.completed.disconnect(self._on_countdown_completed)
        self._countdown = timer
        timer.tick.connect(self._on_countdown_tick)
        timer.completed.connect(self._on_countdown_completed)

    # ── settings ──────────────────────────────────────────────────────

    @property
    def warning_seconds(self) -> int:
        return self._warning_seconds

    @property
    def muted(self) -> bool:
        return self._muted

    def apply_settings(self, settings: Settings) -> None:
        self._muted = settings.muted
        self._sound_effects = settings.sound_effects_enabled
        self._voice_cues = settings.voice_cues_enabled
        self._warning_seconds = settings.countdown_warning_seconds
        self._sounds.set_volume(settings.volume)
        self._voice.set_volume(settings.volume)
        self._sounds.set_enabled(not self._muted and self._sound_effects)
        self._voice.set_enabled(not self._muted and self._voice_cues)

    def toggle_mute(self) -> bool:
        """Flip the master mute; returns the new value."""
        self._muted = not self._muted
        self._sounds.set_enabled(not self._muted and self._sound_effects)
        self._voice.set_enabled(not self._muted and self._voice_cues)
        return self._muted

    # ── slots ─────────────────────────────────────────────────────────

    def _on_phase_changed(self, phase: Phase, round_number: int) -> None:
        self._sounds.play("transition")
        if phase == Phase.WORK:
            self._voice.say(
                f"{phrase_for(VoiceCue.ROUND, count=round_number)}. "
                f"{phrase_for(VoiceCue.PHASE, phase=Phase.WORK)}"
            )
        else:
            self._voice.announce(VoiceCue.PHASE, phase=Phase.REST)

    def _on_interval_tick(self, remaining: int, phase: Phase, round_number: int) -> None:
        self._countdown_cue(remaining)

    def _on_interval_completed(self) -> None:
        self._sounds.play("fanfare")
        self._voice.say("Workout complete")

    def _on_countdown_tick(self, remaining: int) -> None:
        self._countdown_cue(remaining)

    def _on_countdown_completed(self) -> None:
        self._sounds.play("complete")
        self._voice.say("Time")

    def _countdown_cue(self, remaining: int) -> None:
        if 0 < remaining <= self._warning_seconds:
            self._sounds.play("beep")
            self._voice.announce(VoiceCue.COUNTDOWN, count=remaining)
