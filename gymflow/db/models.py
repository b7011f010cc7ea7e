from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""


class Category(Base):
    """Exercise category (e.g. Upper Body), ordered by sort_order."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    color: Mapped[str] = mapped_column(String, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    exercises: Mapped[list[Exercise]] = relationship(
        "Exercise",
        back_populates="category",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Exercise(Base):
    """Exercise definition.

    Stores:
    - template_type: how the four metric slots of its logs are interpreted
      (strength, cardio, cardio_machine, timed, bodyweight). Locked once the
      exercise has logs.
    - last_used_at: timestamp of the most recent log, used for ordering
    """

    __tablename__ = "exercises"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_id: Mapped[int] = mapped_column(Integer, ForeignKey("categories.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    template_type: Mapped[str] = mapped_column(String, nullable=False)
    last_used_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    category: Mapped[Category] = relationship("Category", back_populates="exercises")
    logs: Mapped[list[Log]] = relationship(
        "Log",
        back_populates="exercise",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_exercises_category", "category_id"),
        Index("idx_exercises_last_used", "last_used_at"),
    )


class Log(Base):
    """One logged session of an exercise.

    metric_1..metric_4 are raw slots whose meaning depends on the exercise's
    template type. Any slot may be null.
    """

    __tablename__ = "logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    exercise_id: Mapped[int] = mapped_column(Integer, ForeignKey("exercises.id", ondelete="CASCADE"), nullable=False)
    metric_1: Mapped[float | None] = mapped_column(Float, nullable=True)
    metric_2: Mapped[int | None] = mapped_column(Integer, nullable=True)
    metric_3: Mapped[int | None] = mapped_column(Integer, nullable=True)
    metric_4: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=_utcnow)

    exercise: Mapped[Exercise] = relationship("Exercise", back_populates="logs")

    __table_args__ = (
        Index("idx_logs_exercise", "exercise_id"),
        Index("idx_logs_created", "created_at"),
    )
