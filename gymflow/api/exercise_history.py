"""Exercise history and trend endpoints.

History pairs a display window of raw logs with the trend verdict computed
from a separate, fixed-size fetch window.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy.orm import Session

from gymflow.analysis.trends import summarize_trend
from gymflow.api.logs import log_to_schema
from gymflow.api.schemas import ExerciseDetailSchema, ExerciseHistoryResponse, TrendSchema
from gymflow.config.settings import settings
from gymflow.db.repository import ExerciseRepository, LogRepository, SqlTrendStore
from gymflow.db.session import get_db
from gymflow.errors import ExerciseNotFoundError
from gymflow.metrics.templates import resolve_template
from gymflow.services.trend_service import TrendService

router = APIRouter(prefix="/api/exercise", tags=["trends"])


def get_trend_service(db: Session = Depends(get_db)) -> TrendService:
    return TrendService(SqlTrendStore(db))


def _trend_schema(service: TrendService, exercise_id: int, template_type: str | None = None) -> TrendSchema:
    verdict = service.get_trend(exercise_id)
    if template_type is None:
        template_type = service.store.fetch_exercise_template_type(exercise_id)
    return TrendSchema.from_verdict(verdict, summarize_trend(verdict, template_type, service.config))


@router.get("/{exercise_id}/trend", response_model=TrendSchema)
def exercise_trend(exercise_id: int, service: TrendService = Depends(get_trend_service)) -> TrendSchema:
    """Trend verdict for an exercise."""
    try:
        return _trend_schema(service, exercise_id)
    except ExerciseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get("/{exercise_id}/history", response_model=ExerciseHistoryResponse)
def exercise_history(
    exercise_id: int,
    db: Session = Depends(get_db),
    service: TrendService = Depends(get_trend_service),
) -> ExerciseHistoryResponse:
    """Exercise details, trend verdict and the most recent logs for display."""
    try:
        exercise = ExerciseRepository.get(db, exercise_id)
        trend = _trend_schema(service, exercise_id, exercise.template_type)
    except ExerciseNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except Exception:
        logger.exception(f"Error fetching history for exercise_id={exercise_id}")
        raise

    template = resolve_template(exercise.template_type)
    detail = ExerciseDetailSchema(
        id=exercise.id,
        name=exercise.name,
        template_type=exercise.template_type,
        category_name=exercise.category.name,
        category_color=exercise.category.color,
        metric_labels=list(template.labels) if template else [None, None, None, None],
        trend_metric=template.trend_metric_name if template else None,
    )
    display_logs = LogRepository.recent_for_exercise(db, exercise_id, settings.history_display_limit)
    return ExerciseHistoryResponse(
        exercise=detail,
        trend=trend,
        logs=[log_to_schema(log, exercise.template_type) for log in display_logs],
    )
