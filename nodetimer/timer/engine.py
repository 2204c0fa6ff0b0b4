"""EMOM interval timer state machine for NØDE.

States
------
WORK          Work interval counting down.
REST          Rest interval counting down.

Each (phase, round) pair is additionally either running or paused, and the
whole timer is either complete or not.

Transitions
-----------
initial → WORK round 1, paused             (construct / reset)
paused → running                           (start)
running → paused                           (pause)
WORK → REST, same round                    (work reaches 0)
REST → WORK, round + 1                     (rest reaches 0, rounds left)
REST of the last round → complete          (rest reaches 0, no rounds left)
Any → initial                              (reset)

A zero-length rest is never entered: when work reaches 0 and
``rest_seconds == 0`` the round advance / completion check runs on the same
tick.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from sqlalchemy.exc import SQLAlchemyError

if TYPE_CHECKING:
    from ..database.db import Database

logger = logging.getLogger(__name__)


# ── enums / errors ────────────────────────────────────────────────────────


class Phase(Enum):
    WORK = "work"
    REST = "rest"


class InvalidConfigurationError(ValueError):
    """Raised when a timer is configured with out-of-range values."""


# ── configuration ─────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 1000


def _require_int(name: str, value: object, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    if value < minimum:
        raise InvalidConfigurationError(
            f"{name} must be >= {minimum}, got {value}"
        )


@dataclass(frozen=True)
class TimerConfiguration:
    """Immutable work/rest/round settings for an :class:`IntervalTimer`."""

    work_seconds: int
    rest_seconds: int
    total_rounds: int

    def __post_init__(self) -> None:
        _require_int("work_seconds", self.work_seconds, 1)
        _require_int("rest_seconds", self.rest_seconds, 0)
        _require_int("total_rounds", self.total_rounds, 1)


# ── engine ────────────────────────────────────────────────────────────────


class IntervalTimer(QObject):
    """Qt-based EMOM timer: work/rest countdown over a number of rounds.

    Signals
    -------
    tick(remaining_seconds: int, phase: Phase, round: int)
        Emitted every second while running, except on the second that
        ends a phase (the transition notification replaces it).
    phase_changed(phase: Phase, round: int)
        Emitted on first start and on every phase transition.
    completed()
        Emitted once when the rest of the final round reaches zero.
    running_changed(is_running: bool)
        Emitted when the countdown starts, pauses, completes or resets.
    """

    tick = pyqtSignal(int, object, int)
    phase_changed = pyqtSignal(object, int)
    completed = pyqtSignal()
    running_changed = pyqtSignal(bool)

    def __init__(
        self,
        config: TimerConfiguration,
        parent: QObject | None = None,
        *,
        database: Database | None = None,
    ) -> None:
        if not isinstance(config, TimerConfiguration):
            raise InvalidConfigurationError(
                f"expected TimerConfiguration, got {type(config).__name__}"
            )
        super().__init__(parent)

        self._config = config
        self._database = database

        # ── countdown state ───────────────────────────────────────────
        self._phase: Phase = Phase.WORK
        self._round: int = 1
        self._remaining: int = config.work_seconds
        self._running: bool = False
        self._complete: bool = False
        self._started: bool = False  # phase entry for WORK/1 announced

        # ── DB tracking ───────────────────────────────────────────────
        self._run_id: int | None = None

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def config(self) -> TimerConfiguration:
        return self._config

    @property
    def remaining(self) -> int:
        """Seconds left in the current phase."""
        return self._remaining

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def current_round(self) -> int:
        """Current round (1-based)."""
        return self._round

    @property
    def total_rounds(self) -> int:
        return self._config.total_rounds

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def has_started(self) -> bool:
        """True once ``start()`` has been called since the last reset."""
        return self._started

    @property
    def phase_duration(self) -> int:
        if self._phase == Phase.WORK:
            return self._config.work_seconds
        return self._config.rest_seconds

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current phase."""
        if self._complete:
            return 1.0
        duration = self.phase_duration
        if duration <= 0:
            return 0.0
        elapsed = duration - self._remaining
        return max(0.0, min(1.0, elapsed / duration))

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start or resume the countdown.  No-op if running or complete."""
        if self._running or self._complete:
            return
        first_start = not self._started
        self._started = True
        self._running = True
        self._qt_timer.start()

        if first_start and self._database is not None:
            self._persist_start()

        self.running_changed.emit(True)
        if first_start:
            logger.debug("EMOM started: %s", self._config)
            self.phase_changed.emit(self._phase, self._round)

    def pause(self) -> None:
        """Freeze the countdown where it is.  No-op unless running."""
        if not self._running:
            return
        self._qt_timer.stop()
        self._running = False
        self.running_changed.emit(False)

    def reset(self) -> None:
        """Return to WORK, round 1, full work duration, not running."""
        was_running = self._running
        self._qt_timer.stop()
        self._phase = Phase.WORK
        self._round = 1
        self._remaining = self._config.work_seconds
        self._running = False
        self._complete = False
        self._started = False
        self._run_id = None  # an unfinished run stays incomplete
        if was_running:
            self.running_changed.emit(False)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        if not self._running or self._complete:
            return
        self._remaining -= 1
        if self._remaining > 0:
            self.tick.emit(self._remaining, self._phase, self._round)
            return
        self._advance()

    def _advance(self) -> None:
        """Phase boundary: remaining has just reached zero."""
        if self._phase == Phase.WORK:
            self._phase = Phase.REST
            self._remaining = self._config.rest_seconds
            if self._remaining > 0:
                logger.debug("round %d: work → rest", self._round)
                self.phase_changed.emit(Phase.REST, self._round)
                return
            # zero-length rest: fall through to the round check

        finished_round = self._round
        if self._round >= self._config.total_rounds:
            self._finish()
            return

        self._round += 1
        self._phase = Phase.WORK
        self._remaining = self._config.work_seconds
        if self._database is not None:
            self._persist_rounds(finished_round)
        logger.debug("rest → work, round %d", self._round)
        self.phase_changed.emit(Phase.WORK, self._round)

    def _finish(self) -> None:
        self._qt_timer.stop()
        self._remaining = 0
        self._running = False
        self._complete = True

        if self._database is not None:
            self._persist_completed(datetime.now())

        logger.info("EMOM complete after %d rounds", self._round)
        self.running_changed.emit(False)
        self.completed.emit()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — database persistence
    # ══════════════════════════════════════════════════════════════════

    # The run log is best-effort: a storage failure is logged and the
    # workout carries on.

    def _persist_start(self) -> None:
        from ..database.models import WorkoutRun

        try:
            with self._database.session() as db:
                record = WorkoutRun(
                    kind="emom",
                    started_at=datetime.now(),
                    work_seconds=self._config.work_seconds,
                    rest_seconds=self._config.rest_seconds,
                    total_rounds=self._config.total_rounds,
                )
                db.add(record)
                db.flush()
                self._run_id = record.id
        except SQLAlchemyError as exc:
            self._run_id = None
            logger.warning("Could not record EMOM run start: %s", exc)

    def _persist_rounds(self, rounds_completed: int) -> None:
        if self._run_id is None:
            return
        from ..database.models import WorkoutRun

        try:
            with self._database.session() as db:
                record = db.get(WorkoutRun, self._run_id)
                if record:
                    record.rounds_completed = rounds_completed
        except SQLAlchemyError as exc:
            logger.warning("Could not record round %d: %s", rounds_completed, exc)

    def _persist_completed(self, end_time: datetime) -> None:
        if self._run_id is None:
            return
        from ..database.models import WorkoutRun

        run_id, self._run_id = self._run_id, None
        try:
            with self._database.session() as db:
                record = db.get(WorkoutRun, run_id)
                if record:
                    record.rounds_completed = self._config.total_rounds
                    record.ended_at = end_time
                    record.completed = True
        except SQLAlchemyError as exc:
            logger.warning("Could not record EMOM completion: %s", exc)
