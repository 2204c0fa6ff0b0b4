"""Spoken workout cues via text-to-speech.

Phrases are built by :func:`phrase_for`; :class:`VoiceAnnouncer` speaks
them through ``QTextToSpeech`` (or any object with the same ``say`` /
``stop`` / ``setVolume`` / ``setRate`` / ``setPitch`` methods).
"""

from __future__ import annotations

import logging
from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal

from ..timer.engine import Phase

logger = logging.getLogger(__name__)


class VoiceCue(Enum):
    EXERCISE = "exercise"
    ROUND = "round"
    STATION = "station"
    PHASE = "phase"
    TIME = "time"
    COUNTDOWN = "countdown"


# Browser-style rate/pitch (1.0 = normal); QTextToSpeech uses -1..1 around 0.
SPEECH_RATE = 1.2
SPEECH_PITCH = 1.0


def _to_qt_scale(value: float) -> float:
    return max(-1.0, min(1.0, value - 1.0))


def phrase_for(
    cue: VoiceCue,
    count: int | None = None,
    phase: Phase | None = None,
) -> str:
    """Default wording for *cue*; *count* and *phase* fill in the blanks."""
    if cue == VoiceCue.EXERCISE:
        return "Next exercise"
    if cue == VoiceCue.ROUND:
        return f"Round {count}" if count else "Round"
    if cue == VoiceCue.STATION:
        return f"Station {count}" if count else "Station"
    if cue == VoiceCue.PHASE:
        return "Work" if phase == Phase.WORK else "Rest"
    if cue == VoiceCue.TIME:
        return f"{count} seconds remaining" if count else "Time remaining"
    return f"{count}" if count else "Get ready"


class VoiceAnnouncer(QObject):
    """Speaks one phrase at a time; a new phrase cuts off the previous one.

    Signals
    -------
    spoken(text: str)
        Emitted for every phrase handed to the speech engine.
    """

    spoken = pyqtSignal(str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        speaker: object | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.8
        self._speaker = speaker if speaker is not None else self._default_speaker()
        self._speaker.setRate(_to_qt_scale(SPEECH_RATE))
        self._speaker.setPitch(_to_qt_scale(SPEECH_PITCH))
        self._speaker.setVolume(self._volume)

    def _default_speaker(self) -> object:
        from PyQt6.QtTextToSpeech import QTextToSpeech

        return QTextToSpeech(self)

    # ── public API ────────────────────────────────────────────────────

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def volume(self) -> int:
        return round(self._volume * 100)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if not enabled:
            self.cancel()

    def set_volume(self, level: int) -> None:
        """Set volume (0-100)."""
        self._volume = max(0, min(level, 100)) / 100.0
        self._speaker.setVolume(self._volume)

    def say(self, text: str) -> None:
        """Speak *text*, interrupting anything in progress.  No-op if disabled."""
        if not self._enabled or not text:
            return
        self._speaker.stop()
        logger.debug("say: %s", text)
        self._speaker.say(text)
        self.spoken.emit(text)

    def announce(
        self,
        cue: VoiceCue,
        count: int | None = None,
        phase: Phase | None = None,
    ) -> None:
        self.say(phrase_for(cue, count=count, phase=phase))

    def cancel(self) -> None:
        self._speaker.stop()
