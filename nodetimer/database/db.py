"""Database connection and session management.

A :class:`Database` is constructed by whoever owns the application session
and handed to the timers that log runs; there is no module-level engine.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker, Session as OrmSession

from ..settings import DATA_DIR
from .models import Base, WorkoutRun

logger = logging.getLogger(__name__)

DB_FILENAME = "nodetimer.db"


class Database:
    """SQLite-backed store for :class:`WorkoutRun` records."""

    def __init__(self, url: str | None = None) -> None:
        if url is None:
            DATA_DIR.mkdir(parents=True, exist_ok=True)
            url = f"sqlite:///{DATA_DIR / DB_FILENAME}"
        self._url = url
        self._engine = create_engine(
            url,
            connect_args={"check_same_thread": False},
            echo=False,
        )
        self._factory = sessionmaker(bind=self._engine, expire_on_commit=False)

    @property
    def url(self) -> str:
        return self._url

    def init(self) -> None:
        """Create all tables."""
        Base.metadata.create_all(self._engine)
        logger.debug("database ready at %s", self._url)

    @contextmanager
    def session(self):
        """Yield a SQLAlchemy session; commit on success, rollback on error."""
        session: OrmSession = self._factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def recent_runs(self, limit: int = 20) -> list[WorkoutRun]:
        """Most recent runs first."""
        with self.session() as db:
            stmt = (
                select(WorkoutRun)
                .order_by(WorkoutRun.started_at.desc(), WorkoutRun.id.desc())
                .limit(limit)
            )
            return list(db.scalars(stmt))

    def dispose(self) -> None:
        self._engine.dispose()
