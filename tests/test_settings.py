"""Tests for Settings defaults, JSON persistence, and the run database."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta

import pytest

from nodetimer.audio.cues import AudioCueController
from nodetimer.audio.voice import VoiceAnnouncer
from nodetimer.database.db import Database
from nodetimer.database.models import WorkoutRun
from nodetimer.settings import Settings, load_settings, save_settings
from nodetimer.timer.engine import InvalidConfigurationError, TimerConfiguration

from helpers import FakeSounds, FakeSpeaker


# ═══════════════════════════════════════════════════════════════════════
#  SETTINGS
# ═══════════════════════════════════════════════════════════════════════


class TestSettingsDefaults:

    def test_emom(self):
        s = Settings()
        assert (s.work_seconds, s.rest_seconds, s.total_rounds) == (40, 20, 10)

    def test_countdown(self):
        s = Settings()
        assert s.countdown_seconds == 60
        assert s.countdown_warning_seconds == 3

    def test_audio(self):
        s = Settings()
        assert s.muted is False
        assert s.volume == 80
        assert s.sound_effects_enabled is True
        assert s.voice_cues_enabled is True

    def test_timer_configuration(self):
        assert Settings().timer_configuration() == TimerConfiguration(40, 20, 10)

    def test_invalid_timer_configuration(self):
        with pytest.raises(InvalidConfigurationError):
            Settings(total_rounds=0).timer_configuration()


class TestSettingsPersistence:

    def test_round_trip(self, tmp_path):
        path = tmp_path / "settings.json"
        original = Settings(work_seconds=45, rest_seconds=15, total_rounds=8,
                            muted=True, volume=30, window_x=10, window_y=20)
        save_settings(original, path)
        assert load_settings(path) == original

    def test_creates_parent_dir(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "settings.json"
        save_settings(Settings(), path)
        assert path.exists()

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_settings(tmp_path / "nope.json") == Settings()

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"volume": 55, "theme": "neon"}), encoding="utf-8")
        s = load_settings(path)
        assert s.volume == 55
        assert not hasattr(s, "theme")

    def test_corrupt_file_gives_defaults(self, tmp_path, caplog):
        path = tmp_path / "settings.json"
        path.write_text("{not json", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="nodetimer.settings"):
            assert load_settings(path) == Settings()
        assert "unreadable settings" in caplog.text

    def test_non_object_json_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        assert load_settings(path) == Settings()

    def test_wrong_typed_values_fall_back(self, tmp_path, caplog):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({
            "countdown_warning_seconds": None,
            "volume": "80",
            "window_width": "x",
            "muted": 1,
            "total_rounds": True,
            "window_x": 12,
            "window_y": None,
            "rest_seconds": 5,
        }), encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="nodetimer.settings"):
            s = load_settings(path)
        defaults = Settings()
        assert s.countdown_warning_seconds == defaults.countdown_warning_seconds
        assert s.volume == defaults.volume
        assert s.window_width == defaults.window_width
        assert s.muted is False
        assert s.total_rounds == defaults.total_rounds
        assert (s.window_x, s.window_y, s.rest_seconds) == (12, None, 5)
        assert "wrong type" in caplog.text

    def test_wrong_typed_warning_keeps_countdown_cues_working(self, qapp, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"countdown_warning_seconds": None}), encoding="utf-8")
        sounds = FakeSounds()
        cues = AudioCueController(sounds, VoiceAnnouncer(speaker=FakeSpeaker()))
        cues.apply_settings(load_settings(path))
        cues._on_countdown_tick(2)
        assert sounds.played == ["beep"]


# ═══════════════════════════════════════════════════════════════════════
#  DATABASE
# ═══════════════════════════════════════════════════════════════════════


class TestDatabase:

    def test_empty(self, database):
        assert database.recent_runs() == []

    def test_session_commits(self, database):
        with database.session() as db:
            db.add(WorkoutRun(kind="emom", work_seconds=30, rest_seconds=30, total_rounds=5))
        runs = database.recent_runs()
        assert len(runs) == 1
        assert runs[0].rounds_completed == 0
        assert runs[0].completed is False

    def test_session_rolls_back_and_reraises(self, database):
        with pytest.raises(RuntimeError):
            with database.session() as db:
                db.add(WorkoutRun(kind="emom"))
                db.flush()
                raise RuntimeError("boom")
        assert database.recent_runs() == []

    def test_recent_runs_newest_first_and_limited(self, database):
        base = datetime(2026, 1, 1, 7, 0)
        with database.session() as db:
            for i in range(5):
                db.add(WorkoutRun(kind="emom", started_at=base + timedelta(minutes=i),
                                  total_rounds=i + 1))
        runs = database.recent_runs(limit=3)
        assert [r.total_rounds for r in runs] == [5, 4, 3]

    def test_file_database(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'runs.db'}"
        db = Database(url)
        db.init()
        with db.session() as s:
            s.add(WorkoutRun(kind="countdown", work_seconds=60))
        db.dispose()

        reopened = Database(url)
        assert reopened.url == url
        assert reopened.recent_runs()[0].kind == "countdown"
        reopened.dispose()

    def test_repr(self):
        run = WorkoutRun(id=1, kind="emom", rounds_completed=2, total_rounds=4, completed=False)
        assert repr(run) == "<WorkoutRun id=1 kind=emom rounds=2/4 completed=False>"
