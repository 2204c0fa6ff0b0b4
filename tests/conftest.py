"""Shared pytest fixtures for NØDE timer tests."""

import os
import sys
import tempfile

# Headless Qt, and keep settings/sound caches out of the real home directory
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("NODETIMER_HOME", tempfile.mkdtemp(prefix="nodetimer-"))

import pytest

from PyQt6.QtWidgets import QApplication

from nodetimer.database.db import Database
from nodetimer.timer.engine import IntervalTimer, TimerConfiguration
from nodetimer.timer.countdown import CountdownTimer


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def database():
    """A fresh in-memory SQLite database."""
    db = Database("sqlite:///:memory:")
    db.init()
    yield db
    db.dispose()


@pytest.fixture
def config():
    """work=3, rest=2, rounds=2 — the reference scenario."""
    return TimerConfiguration(work_seconds=3, rest_seconds=2, total_rounds=2)


@pytest.fixture
def timer(qapp, config):
    """IntervalTimer without persistence."""
    return IntervalTimer(config)


@pytest.fixture
def timer_db(qapp, config, database):
    """IntervalTimer logging runs to the in-memory database."""
    return IntervalTimer(config, database=database)


@pytest.fixture
def countdown(qapp):
    return CountdownTimer(5)
