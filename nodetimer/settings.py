"""Application settings with JSON persistence.

Settings are stored at:
    ~/.config/nodetimer/settings.json

(``NODETIMER_HOME`` overrides the directory.)

Usage::

    settings = load_settings()
    settings.volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.engine import TimerConfiguration

logger = logging.getLogger(__name__)


DATA_DIR = Path(
    os.environ.get("NODETIMER_HOME", Path.home() / ".config" / "nodetimer")
)
SETTINGS_PATH = DATA_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── EMOM defaults ─────────────────────────────────────────────────
    work_seconds: int = 40
    rest_seconds: int = 20
    total_rounds: int = 10

    # ── countdown ─────────────────────────────────────────────────────
    countdown_seconds: int = 60
    countdown_warning_seconds: int = 3     # beep + voice for the last N s

    # ── audio ─────────────────────────────────────────────────────────
    muted: bool = False
    volume: int = 80                       # 0-100
    sound_effects_enabled: bool = True
    voice_cues_enabled: bool = True

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 460
    window_height: int = 560

    def timer_configuration(self) -> TimerConfiguration:
        """Build a validated EMOM configuration from these settings."""
        return TimerConfiguration(
            work_seconds=self.work_seconds,
            rest_seconds=self.rest_seconds,
            total_rounds=self.total_rounds,
        )


def _value_fits(default: object, value: object) -> bool:
    """True if *value* has the same JSON type as the field default."""
    if isinstance(default, bool):
        return isinstance(value, bool)
    if default is None:
        return value is None or (isinstance(value, int) and not isinstance(value, bool))
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, type(default))


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from disk, falling back to defaults.

    Unknown keys are ignored and values of the wrong type are replaced by
    the default for that field.
    """
    path = path or SETTINGS_PATH
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        defaults = {f.name: f.default for f in fields(Settings)}
        filtered = {}
        for key, value in data.items():
            if key not in defaults:
                continue
            if not _value_fits(defaults[key], value):
                logger.warning(
                    "Ignoring setting %s=%r in %s: wrong type", key, value, path,
                )
                continue
            filtered[key] = value
        return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return Settings()


def save_settings(settings: Settings, path: Path | None = None) -> None:
    """Write settings to disk as JSON."""
    path = path or SETTINGS_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
