"""UI package."""

from .timer_widget import EmomTimerWidget, format_time
from .countdown_widget import CountdownWidget
from .settings_dialog import SettingsDialog
from .styles import build_stylesheet

__all__ = [
    "EmomTimerWidget",
    "format_time",
    "CountdownWidget",
    "SettingsDialog",
    "build_stylesheet",
]
