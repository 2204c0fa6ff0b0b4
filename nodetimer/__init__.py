"""NØDE timer: EMOM and countdown timers with audio cues."""

__version__ = "0.1.0"
