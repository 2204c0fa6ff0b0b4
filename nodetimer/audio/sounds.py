"""Sound synthesis and playback using numpy + QSoundEffect.

All sounds are generated programmatically as WAV files: sine tones with a
fast linear attack and an exponential fall-off.  Files are cached to disk
so subsequent launches are instant.

Sound names
-----------
- ``beep``        — short 800 Hz countdown beep
- ``beep2``       — higher, slightly longer beep ("go")
- ``beep3``       — lower, longer beep
- ``fanfare``     — C-E-G arpeggio for a finished workout
- ``transition``  — 440 Hz tone on work/rest changes
- ``complete``    — 880 Hz tone when a countdown ends
- ``warning``     — low 400 Hz tone
- ``tick``        — very short 1 kHz tick

The cue controller plays ``beep``, ``transition``, ``fanfare`` and
``complete``.  The others are synthesised so hosts can play them by name
through :meth:`SoundManager.play`.
"""

from __future__ import annotations

import io
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import DATA_DIR


# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = DATA_DIR / "sounds"

SOUND_NAMES = (
    "beep",
    "beep2",
    "beep3",
    "fanfare",
    "transition",
    "complete",
    "warning",
    "tick",
)

SAMPLE_RATE = 44100
_PEAK = 0.5
_ATTACK_S = 0.01
_FLOOR = 0.01  # exponential ramp target, relative to peak


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _envelope(length: int) -> np.ndarray:
    """Linear attack to 1.0, then exponential decay to ``_FLOOR``."""
    attack = min(int(SAMPLE_RATE * _ATTACK_S), length)
    env = np.empty(length, dtype=np.float64)
    env[:attack] = np.linspace(0.0, 1.0, attack)
    if length > attack:
        env[attack:] = np.geomspace(1.0, _FLOOR, length - attack)
    return env


def _tone(freq: float, duration_s: float) -> np.ndarray:
    samples = _sine(freq, duration_s)
    return samples * _envelope(len(samples)) * _PEAK


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


def _single(freq: float, duration_s: float) -> Callable[[], bytes]:
    def generate() -> bytes:
        # Trailing silence so QSoundEffect doesn't clip the tail
        return _to_wav_bytes(np.concatenate([_tone(freq, duration_s), _silence(0.03)]))
    generate.__doc__ = f"{freq:g} Hz for {duration_s:g} s."
    return generate


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_fanfare() -> bytes:
    """C5 → E5 → G5, 100 ms apart, last note held."""
    parts = [
        _tone(523.0, 0.1),
        _tone(659.0, 0.1),
        _tone(784.0, 0.2),
        _silence(0.03),
    ]
    return _to_wav_bytes(np.concatenate(parts))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "beep": _single(800.0, 0.1),
    "beep2": _single(1000.0 * 1.2, 0.15),
    "beep3": _single(600.0 * 0.8, 0.2),
    "fanfare": _generate_fanfare,
    "transition": _single(440.0, 0.2),
    "complete": _single(880.0, 0.3),
    "warning": _single(400.0, 0.3),
    "tick": _single(1000.0, 0.05),
}


def generate(name: str) -> bytes:
    """Return the WAV bytes for sound *name*.  ``KeyError`` if unknown."""
    return _GENERATORS[name]()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Manages sound synthesis, caching, and playback.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(80)
        mgr.play("transition")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.8  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a sound by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is not None:
            effect.play()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
