"""SQLAlchemy ORM models for NØDE timer."""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class WorkoutRun(Base):
    """One run of a timer, finished or not."""

    __tablename__ = "workout_runs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    kind = Column(String(20), nullable=False, default="emom")  # emom | countdown
    started_at = Column(DateTime, nullable=False, default=datetime.now)
    ended_at = Column(DateTime, nullable=True)
    work_seconds = Column(Integer, nullable=False, default=0)
    rest_seconds = Column(Integer, nullable=False, default=0)
    total_rounds = Column(Integer, nullable=False, default=1)
    rounds_completed = Column(Integer, nullable=False, default=0)
    completed = Column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return (
            f"<WorkoutRun id={self.id} kind={self.kind} "
            f"rounds={self.rounds_completed}/{self.total_rounds} "
            f"completed={self.completed}>"
        )
