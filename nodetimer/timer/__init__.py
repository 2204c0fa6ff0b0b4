"""Timer package."""

from .engine import (
    IntervalTimer,
    TimerConfiguration,
    Phase,
    InvalidConfigurationError,
    TICK_INTERVAL_MS,
)
from .countdown import CountdownTimer

__all__ = [
    "IntervalTimer",
    "TimerConfiguration",
    "Phase",
    "InvalidConfigurationError",
    "TICK_INTERVAL_MS",
    "CountdownTimer",
]
