"""Repositories for category, exercise and log data access.

Thin query helpers over the ORM models. Repositories flush but never commit;
the caller owns the transaction.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timezone
from typing import Any

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.orm import Session, joinedload

from gymflow.db.models import Category, Exercise, Log
from gymflow.errors import CategoryNotFoundError, ExerciseNotFoundError, LogNotFoundError, TemplateTypeLockedError
from gymflow.metrics.templates import MeasurementTuple, TemplateType

SQL_INTEGER_MIN = -(2**63)
SQL_INTEGER_MAX = 2**63 - 1


def coerce_metric(value: Any, *, integer: bool = False) -> float | int | None:
    """Permissively coerce a submitted metric value.

    Empty, non-numeric and zero values are stored as null; integer slots
    truncate toward zero and go null when they do not fit a 64-bit column.
    """
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    if integer:
        number = int(number)
        if not SQL_INTEGER_MIN <= number <= SQL_INTEGER_MAX:
            return None
    return number or None


class CategoryRepository:
    """Repository for category data access."""

    @staticmethod
    def list_all(session: Session) -> list[Category]:
        stmt = select(Category).order_by(Category.sort_order.asc(), Category.id.asc())
        return list(session.execute(stmt).scalars().all())

    @staticmethod
    def get(session: Session, category_id: int) -> Category:
        category = session.get(Category, category_id)
        if category is None:
            raise CategoryNotFoundError(category_id)
        return category

    @staticmethod
    def create(session: Session, name: str, color: str, sort_order: int = 0) -> Category:
        category = Category(name=name, color=color, sort_order=sort_order)
        session.add(category)
        session.flush()
        logger.info(f"Created category id={category.id} name={name!r}")
        return category

    @staticmethod
    def update(
        session: Session,
        category_id: int,
        name: str | None = None,
        color: str | None = None,
        sort_order: int | None = None,
    ) -> Category:
        category = CategoryRepository.get(session, category_id)
        if name is not None:
            category.name = name
        if color is not None:
            category.color = color
        if sort_order is not None:
            category.sort_order = sort_order
        session.flush()
        return category

    @staticmethod
    def delete(session: Session, category_id: int) -> None:
        category = CategoryRepository.get(session, category_id)
        session.delete(category)
        session.flush()
        logger.info(f"Deleted category id={category_id}")


class ExerciseRepository:
    """Repository for exercise data access."""

    @staticmethod
    def list_for_category(session: Session, category_id: int) -> list[Exercise]:
        """Exercises of a category, most recently used first (never-used last)."""
        stmt = (
            select(Exercise)
            .where(Exercise.category_id == category_id)
            .order_by(
                Exercise.last_used_at.is_(None),
                Exercise.last_used_at.desc(),
                Exercise.created_at.desc(),
                Exercise.id.desc(),
            )
        )
        return list(session.execute(stmt).scalars().all())

    @staticmethod
    def get(session: Session, exercise_id: int) -> Exercise:
        exercise = session.get(Exercise, exercise_id)
        if exercise is None:
            raise ExerciseNotFoundError(exercise_id)
        return exercise

    @staticmethod
    def create(session: Session, category_id: int, name: str, template_type: TemplateType) -> Exercise:
        CategoryRepository.get(session, category_id)
        exercise = Exercise(category_id=category_id, name=name, template_type=TemplateType(template_type).value)
        session.add(exercise)
        session.flush()
        logger.info(f"Created exercise id={exercise.id} name={name!r} template_type={exercise.template_type}")
        return exercise

    @staticmethod
    def has_logs(session: Session, exercise_id: int) -> bool:
        stmt = select(Log.id).where(Log.exercise_id == exercise_id).limit(1)
        return session.execute(stmt).first() is not None

    @staticmethod
    def update(
        session: Session,
        exercise_id: int,
        name: str | None = None,
        template_type: TemplateType | None = None,
    ) -> Exercise:
        """Update name and/or template type.

        Raises:
            ExerciseNotFoundError: exercise does not exist
            TemplateTypeLockedError: template type change requested for an exercise with logs
        """
        exercise = ExerciseRepository.get(session, exercise_id)
        if template_type is not None and TemplateType(template_type).value != exercise.template_type:
            if ExerciseRepository.has_logs(session, exercise_id):
                raise TemplateTypeLockedError(exercise_id, exercise.template_type, TemplateType(template_type).value)
            exercise.template_type = TemplateType(template_type).value
        if name is not None:
            exercise.name = name
        session.flush()
        return exercise

    @staticmethod
    def delete(session: Session, exercise_id: int) -> None:
        exercise = ExerciseRepository.get(session, exercise_id)
        session.delete(exercise)
        session.flush()
        logger.info(f"Deleted exercise id={exercise_id}")


class LogRepository:
    """Repository for log data access."""

    @staticmethod
    def recent_for_exercise(session: Session, exercise_id: int, limit: int) -> list[Log]:
        """Most recent logs of an exercise, newest first."""
        stmt = (
            select(Log)
            .where(Log.exercise_id == exercise_id)
            .order_by(Log.created_at.desc(), Log.id.desc())
            .limit(limit)
        )
        return list(session.execute(stmt).scalars().all())

    @staticmethod
    def list_all(session: Session, limit: int, offset: int) -> tuple[list[Log], int]:
        """All logs newest first with the total count, for admin listings."""
        stmt = select(Log).order_by(Log.created_at.desc(), Log.id.desc()).limit(limit).offset(offset)
        logs = list(session.execute(stmt).scalars().all())
        total = session.execute(select(func.count(Log.id))).scalar_one()
        return logs, total

    @staticmethod
    def workout_days(session: Session, since: datetime) -> list[tuple[str, int]]:
        """(YYYY-MM-DD, distinct exercises logged) per day since `since`, oldest first."""
        day = func.date(Log.created_at)
        stmt = (
            select(day, func.count(Log.exercise_id.distinct()))
            .where(Log.created_at >= since)
            .group_by(day)
            .order_by(day.asc())
        )
        return [(str(row[0]), row[1]) for row in session.execute(stmt).all()]

    @staticmethod
    def for_day(session: Session, day: date) -> list[Log]:
        """Logs of every exercise on one calendar day, in the order they were recorded."""
        stmt = (
            select(Log)
            .options(joinedload(Log.exercise).joinedload(Exercise.category))
            .where(func.date(Log.created_at) == day.isoformat())
            .order_by(Log.created_at.asc(), Log.id.asc())
        )
        return list(session.execute(stmt).scalars().all())

    @staticmethod
    def create(
        session: Session,
        exercise_id: int,
        metric_1: Any = None,
        metric_2: Any = None,
        metric_3: Any = None,
        metric_4: Any = None,
        notes: str | None = None,
    ) -> Log:
        """Insert a log and mark its exercise as used now."""
        exercise = ExerciseRepository.get(session, exercise_id)
        now = datetime.now(timezone.utc)
        log = Log(
            exercise_id=exercise_id,
            metric_1=coerce_metric(metric_1),
            metric_2=coerce_metric(metric_2, integer=True),
            metric_3=coerce_metric(metric_3, integer=True),
            metric_4=coerce_metric(metric_4, integer=True),
            notes=notes or None,
            created_at=now,
        )
        session.add(log)
        exercise.last_used_at = now
        session.flush()
        logger.debug(f"Logged exercise_id={exercise_id} log_id={log.id}")
        return log

    @staticmethod
    def delete(session: Session, log_id: int) -> None:
        log = session.get(Log, log_id)
        if log is None:
            raise LogNotFoundError(log_id)
        session.delete(log)
        session.flush()


class SqlTrendStore:
    """TrendStore backed by the SQL database."""

    def __init__(self, session: Session):
        self.session = session

    def fetch_recent_logs(self, exercise_id: int, limit: int) -> list[MeasurementTuple]:
        return [MeasurementTuple.from_record(log) for log in LogRepository.recent_for_exercise(self.session, exercise_id, limit)]

    def fetch_exercise_template_type(self, exercise_id: int) -> str | None:
        stmt = select(Exercise.template_type).where(Exercise.id == exercise_id)
        return self.session.execute(stmt).scalar_one_or_none()
