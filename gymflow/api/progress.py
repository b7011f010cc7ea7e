"""Progress calendar endpoints.

Per-day workout counts for the calendar view and the logs of a single day.
A workout day is any calendar day (UTC) with at least one log.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy.orm import Session

from gymflow.api.logs import log_to_schema
from gymflow.api.schemas import CalendarResponse, DailyLogSchema, DailyLogsResponse, WorkoutDaySchema
from gymflow.db.repository import LogRepository
from gymflow.db.session import get_db

router = APIRouter(prefix="/api/progress", tags=["progress"])

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_day(value: str) -> date:
    """Parse a YYYY-MM-DD path parameter.

    Raises:
        ValueError: not in that format or not a real calendar date
    """
    if not DATE_PATTERN.match(value):
        raise ValueError(f"Invalid date {value!r}")
    return date.fromisoformat(value)


@router.get("/calendar", response_model=CalendarResponse)
def workout_calendar(days: int = Query(default=30, ge=1, le=3660), db: Session = Depends(get_db)) -> CalendarResponse:
    """Distinct exercises logged per day over the last `days` days."""
    since = datetime.now(timezone.utc) - timedelta(days=days)
    workout_days = [
        WorkoutDaySchema(date=day, workout_count=count) for day, count in LogRepository.workout_days(db, since)
    ]
    return CalendarResponse(days=workout_days, total_workout_days=len(workout_days))


@router.get("/daily/{day}", response_model=DailyLogsResponse)
def daily_logs(day: str, db: Session = Depends(get_db)) -> DailyLogsResponse:
    """Every log recorded on one day with its exercise and category."""
    try:
        parsed = parse_day(day)
    except ValueError as e:
        logger.info(f"Rejected daily progress request: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid date format. Use YYYY-MM-DD") from e

    logs = []
    for log in LogRepository.for_day(db, parsed):
        exercise = log.exercise
        logs.append(
            DailyLogSchema(
                **log_to_schema(log, exercise.template_type).model_dump(),
                exercise_name=exercise.name,
                template_type=exercise.template_type,
                category_name=exercise.category.name,
                category_color=exercise.category.color,
            )
        )
    return DailyLogsResponse(date=parsed, logs=logs)
