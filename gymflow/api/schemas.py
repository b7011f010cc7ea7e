"""API schemas (Pydantic).

Request and response contracts for the category, exercise, log and history
endpoints, plus the progress calendar views.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from gymflow.analysis.trends import TrendDirection, TrendState, TrendVerdict
from gymflow.metrics.templates import TemplateType

MetricInput = float | str | None


class CategorySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    color: str
    sort_order: int


class CategoryCreateRequest(BaseModel):
    name: str = Field(min_length=1)
    color: str = Field(min_length=1)
    sort_order: int = 0


class CategoryUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    color: str | None = Field(default=None, min_length=1)
    sort_order: int | None = None


class ExerciseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    template_type: str
    category_id: int
    last_used_at: datetime | None


class ExerciseCreateRequest(BaseModel):
    category_id: int
    name: str = Field(min_length=1)
    template_type: TemplateType


class ExerciseUpdateRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    template_type: TemplateType | None = None


class LogSchema(BaseModel):
    """Log as returned to clients, with a rendered summary of its metrics."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    exercise_id: int
    metric_1: float | None
    metric_2: int | None
    metric_3: int | None
    metric_4: int | None
    notes: str | None
    created_at: datetime
    summary: str | None = None


class LogCreateRequest(BaseModel):
    """New log. Metric values are coerced permissively (blank or zero -> null)."""

    exercise_id: int
    metric_1: MetricInput = None
    metric_2: MetricInput = None
    metric_3: MetricInput = None
    metric_4: MetricInput = None
    notes: str | None = None


class LogListResponse(BaseModel):
    logs: list[LogSchema]
    total: int
    limit: int
    offset: int


class TrendSchema(BaseModel):
    """Trend verdict. direction and all numbers are null unless state is 'classified'."""

    state: TrendState
    direction: TrendDirection | None
    recent_avg: float | None
    previous_avg: float | None
    percent_change: float | None
    session_count: int
    summary: str

    @classmethod
    def from_verdict(cls, verdict: TrendVerdict, summary: str) -> TrendSchema:
        return cls(**verdict.to_dict(), summary=summary)


class ExerciseDetailSchema(BaseModel):
    id: int
    name: str
    template_type: str
    category_name: str
    category_color: str
    metric_labels: list[str | None]
    trend_metric: str | None


class ExerciseHistoryResponse(BaseModel):
    exercise: ExerciseDetailSchema
    trend: TrendSchema
    logs: list[LogSchema]


class DeleteResponse(BaseModel):
    success: bool = True


class WorkoutDaySchema(BaseModel):
    date: date
    workout_count: int


class CalendarResponse(BaseModel):
    """Days with at least one log in the requested range, oldest first."""

    days: list[WorkoutDaySchema]
    total_workout_days: int


class DailyLogSchema(LogSchema):
    exercise_name: str
    template_type: str
    category_name: str
    category_color: str


class DailyLogsResponse(BaseModel):
    date: date
    logs: list[DailyLogSchema]
