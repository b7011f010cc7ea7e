from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from gymflow.api.schemas import DeleteResponse, LogCreateRequest, LogListResponse, LogSchema
from gymflow.config.settings import settings
from gymflow.db.models import Log
from gymflow.db.repository import LogRepository
from gymflow.db.session import get_db
from gymflow.errors import ExerciseNotFoundError, LogNotFoundError
from gymflow.metrics.templates import format_measurement

router = APIRouter(prefix="/api/logs", tags=["logs"])


def log_to_schema(log: Log, template_type: str | None = None) -> LogSchema:
    """Serialize a log with its metrics rendered under the exercise's template."""
    if template_type is None:
        template_type = log.exercise.template_type
    schema = LogSchema.model_validate(log)
    schema.summary = format_measurement(template_type, log)
    return schema


@router.get("", response_model=list[LogSchema])
def recent_logs(
    exercise_id: int = Query(...),
    limit: int = Query(default=settings.recent_logs_default_limit, ge=1, le=500),
    db: Session = Depends(get_db),
) -> list[LogSchema]:
    """Most recent logs for one exercise, newest first."""
    return [log_to_schema(log) for log in LogRepository.recent_for_exercise(db, exercise_id, limit)]


@router.get("/all", response_model=LogListResponse)
def all_logs(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    db: Session = Depends(get_db),
) -> LogListResponse:
    logs, total = LogRepository.list_all(db, limit, offset)
    return LogListResponse(logs=[log_to_schema(log) for log in logs], total=total, limit=limit, offset=offset)


@router.post("", response_model=LogSchema, status_code=status.HTTP_201_CREATED)
def create_log(request: LogCreateRequest, db: Session = Depends(get_db)) -> LogSchema:
    """Record a session and bump the exercise's last_used_at."""
    try:
        log = LogRepository.create(
            db,
            request.exercise_id,
            metric_1=request.metric_1,
            metric_2=request.metric_2,
            metric_3=request.metric_3,
            metric_4=request.metric_4,
            notes=request.notes,
        )
    except ExerciseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    db.commit()
    return log_to_schema(log)


@router.delete("/{log_id}", response_model=DeleteResponse)
def delete_log(log_id: int, db: Session = Depends(get_db)) -> DeleteResponse:
    """Delete a log (corrections)."""
    try:
        LogRepository.delete(db, log_id)
    except LogNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    db.commit()
    return DeleteResponse()
