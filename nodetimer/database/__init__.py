"""Database package."""

from .db import Database
from .models import WorkoutRun

__all__ = ["Database", "WorkoutRun"]
