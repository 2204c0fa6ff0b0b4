"""Audio package: synthesised sounds, voice cues, and the timer bridge."""

from .sounds import SoundManager, SOUND_NAMES
from .voice import VoiceAnnouncer, VoiceCue, phrase_for
from .cues import AudioCueController

__all__ = [
    "SoundManager",
    "SOUND_NAMES",
    "VoiceAnnouncer",
    "VoiceCue",
    "phrase_for",
    "AudioCueController",
]
