"""Single-phase countdown timer (rest blocks, timed holds, AMRAP caps)."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from sqlalchemy.exc import SQLAlchemyError

from .engine import TICK_INTERVAL_MS, InvalidConfigurationError

if TYPE_CHECKING:
    from ..database.db import Database

logger = logging.getLogger(__name__)


class CountdownTimer(QObject):
    """Counts down from ``initial_seconds`` once, then goes inert.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted every second while running and above zero.
    completed()
        Emitted when the countdown reaches zero.
    running_changed(is_running: bool)
    """

    tick = pyqtSignal(int)
    completed = pyqtSignal()
    running_changed = pyqtSignal(bool)

    def __init__(
        self,
        initial_seconds: int,
        parent: QObject | None = None,
        *,
        auto_start: bool = False,
        database: Database | None = None,
    ) -> None:
        if isinstance(initial_seconds, bool) or not isinstance(initial_seconds, int):
            raise InvalidConfigurationError(
                f"initial_seconds must be an integer, got {type(initial_seconds).__name__}"
            )
        if initial_seconds < 1:
            raise InvalidConfigurationError(
                f"initial_seconds must be >= 1, got {initial_seconds}"
            )
        super().__init__(parent)

        self._initial = initial_seconds
        self._remaining = initial_seconds
        self._running = False
        self._started = False
        self._database = database
        self._run_id: int | None = None

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

        if auto_start:
            self.start()

    @property
    def initial_seconds(self) -> int:
        return self._initial

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_complete(self) -> bool:
        return self._remaining == 0

    @property
    def has_started(self) -> bool:
        return self._started

    @property
    def percent_complete(self) -> float:
        return (self._initial - self._remaining) / self._initial

    # ── controls ──────────────────────────────────────────────────────

    def start(self) -> None:
        if self._running or self._remaining == 0:
            return
        first_start = not self._started
        self._started = True
        self._running = True
        self._qt_timer.start()
        if first_start and self._database is not None:
            self._persist_start()
        self.running_changed.emit(True)

    def pause(self) -> None:
        if not self._running:
            return
        self._qt_timer.stop()
        self._running = False
        self.running_changed.emit(False)

    def reset(self) -> None:
        was_running = self._running
        self._qt_timer.stop()
        self._remaining = self._initial
        self._running = False
        self._started = False
        self._run_id = None
        if was_running:
            self.running_changed.emit(False)

    # ── internal ──────────────────────────────────────────────────────

    def _on_tick(self) -> None:
        if not self._running:
            return
        self._remaining -= 1
        if self._remaining > 0:
            self.tick.emit(self._remaining)
            return

        self._qt_timer.stop()
        self._running = False
        if self._database is not None:
            self._persist_completed()
        logger.info("countdown of %ds complete", self._initial)
        self.running_changed.emit(False)
        self.completed.emit()

    def _persist_start(self) -> None:
        from ..database.models import WorkoutRun

        try:
            with self._database.session() as db:
                record = WorkoutRun(
                    kind="countdown",
                    started_at=datetime.now(),
                    work_seconds=self._initial,
                    rest_seconds=0,
                    total_rounds=1,
                )
                db.add(record)
                db.flush()
                self._run_id = record.id
        except SQLAlchemyError as exc:
            self._run_id = None
            logger.warning("Could not record countdown start: %s", exc)

    def _persist_completed(self) -> None:
        if self._run_id is None:
            return
        from ..database.models import WorkoutRun

        run_id, self._run_id = self._run_id, None
        try:
            with self._database.session() as db:
                record = db.get(WorkoutRun, run_id)
                if record:
                    record.ended_at = datetime.now()
                    record.rounds_completed = 1
                    record.completed = True
        except SQLAlchemyError as exc:
            logger.warning("Could not record countdown completion: %s", exc)
