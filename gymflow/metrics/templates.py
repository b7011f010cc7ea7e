"""Exercise metric templates.

An exercise's template type decides how the four raw metric slots of a log are
read: which slot means what, how the log is rendered, and how the log is
reduced to the single number trend analysis compares across sessions.

Reduction rules (absent slots count as 0):

- strength: weight x reps x sets (total volume)
- bodyweight: reps x sets (total reps)
- cardio: distance
- cardio_machine: calories (metric_4)
- timed: duration

Unknown template types reduce every log to 0.
"""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

METRIC_FIELDS = ("metric_1", "metric_2", "metric_3", "metric_4")


class TemplateType(StrEnum):
    """Exercise template types."""

    STRENGTH = "strength"
    CARDIO = "cardio"
    CARDIO_MACHINE = "cardio_machine"
    TIMED = "timed"
    BODYWEIGHT = "bodyweight"


@dataclass(frozen=True)
class MeasurementTuple:
    """Raw metric slots of one logged session."""

    metric_1: float | None = None
    metric_2: float | None = None
    metric_3: float | None = None
    metric_4: float | None = None

    @classmethod
    def from_record(cls, record: Any) -> MeasurementTuple:
        """Build from a mapping or any object exposing metric_1..metric_4."""
        if isinstance(record, MeasurementTuple):
            return record
        if isinstance(record, Mapping):
            return cls(**{name: record.get(name) for name in METRIC_FIELDS})
        return cls(**{name: getattr(record, name, None) for name in METRIC_FIELDS})

    def value(self, index: int) -> float:
        """Slot value with absent treated as 0 (index is 1-based)."""
        raw = getattr(self, METRIC_FIELDS[index - 1])
        return float(raw) if raw else 0.0


def format_duration(seconds: float | None) -> str:
    """Format seconds as M:SS ("0:00" when absent)."""
    if not seconds:
        return "0:00"
    total = int(seconds)
    mins, secs = divmod(total, 60)
    return f"{mins}:{secs:02d}"


def _num(value: float | None) -> str:
    if not value:
        return "0"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _format_strength(m: MeasurementTuple) -> str:
    return f"{_num(m.metric_1)} lbs × {_num(m.metric_2)} reps × {_num(m.metric_3)} sets"


def _format_cardio(m: MeasurementTuple) -> str:
    return f"{_num(m.metric_1)} miles in {format_duration(m.metric_2)}"


def _format_cardio_machine(m: MeasurementTuple) -> str:
    parts = []
    if m.metric_1:
        parts.append(f"Level {_num(m.metric_1)}")
    if m.metric_2:
        parts.append(f"Incline {_num(m.metric_2)}")
    if m.metric_3:
        parts.append(format_duration(m.metric_3))
    if m.metric_4:
        parts.append(f"{_num(m.metric_4)} cal")
    return ", ".join(parts)


def _format_timed(m: MeasurementTuple) -> str:
    return format_duration(m.metric_1)


def _format_bodyweight(m: MeasurementTuple) -> str:
    return f"{_num(m.metric_1)} reps × {_num(m.metric_2)} sets"


@dataclass(frozen=True)
class MetricTemplate:
    """One template variant: slot labels, reduction and display rules."""

    type: TemplateType
    labels: tuple[str | None, str | None, str | None, str | None]
    trend_metric_name: str
    reduce: Callable[[MeasurementTuple], float]
    format: Callable[[MeasurementTuple], str]
    unit: str | None = None

    def format_derived(self, value: float | None) -> str:
        """Render a derived value (e.g. a trend average) in this template's unit."""
        if value is None:
            return "-"
        if self.type is TemplateType.TIMED:
            return format_duration(value)
        return f"{value:,.1f} {self.unit}" if self.unit else f"{value:,.1f}"


TEMPLATES: dict[TemplateType, MetricTemplate] = {
    TemplateType.STRENGTH: MetricTemplate(
        type=TemplateType.STRENGTH,
        labels=("Weight (lbs)", "Reps", "Sets", None),
        trend_metric_name="total volume",
        reduce=lambda m: m.value(1) * m.value(2) * m.value(3),
        format=_format_strength,
        unit="lbs",
    ),
    TemplateType.CARDIO: MetricTemplate(
        type=TemplateType.CARDIO,
        labels=("Distance (miles)", "Duration (seconds)", None, None),
        trend_metric_name="distance",
        reduce=lambda m: m.value(1),
        format=_format_cardio,
        unit="miles",
    ),
    TemplateType.CARDIO_MACHINE: MetricTemplate(
        type=TemplateType.CARDIO_MACHINE,
        labels=("Level", "Incline", "Duration (seconds)", "Calories"),
        trend_metric_name="calories",
        reduce=lambda m: m.value(4),
        format=_format_cardio_machine,
        unit="cal",
    ),
    TemplateType.TIMED: MetricTemplate(
        type=TemplateType.TIMED,
        labels=("Duration (seconds)", None, None, None),
        trend_metric_name="duration",
        reduce=lambda m: m.value(1),
        format=_format_timed,
    ),
    TemplateType.BODYWEIGHT: MetricTemplate(
        type=TemplateType.BODYWEIGHT,
        labels=("Reps", "Sets", None, None),
        trend_metric_name="total reps",
        reduce=lambda m: m.value(1) * m.value(2),
        format=_format_bodyweight,
        unit="reps",
    ),
}

_missing = set(TemplateType) - set(TEMPLATES)
if _missing:
    raise RuntimeError(f"Template types without a metric template: {sorted(_missing)}")


def resolve_template(template_type: TemplateType | str | None) -> MetricTemplate | None:
    """Look up the template variant for a type tag, None when unrecognized."""
    try:
        return TEMPLATES[TemplateType(template_type)]
    except ValueError:
        return None


def reduce_measurement(template_type: TemplateType | str | None, measurement: Any) -> float:
    """Reduce one log to its derived metric.

    Never raises: unknown template types and non-numeric slot values yield 0.

    Args:
        template_type: Exercise template type tag
        measurement: MeasurementTuple, mapping or object with metric_1..metric_4

    Returns:
        Derived scalar for this session
    """
    template = resolve_template(template_type)
    if template is None:
        return 0.0
    try:
        value = float(template.reduce(MeasurementTuple.from_record(measurement)))
    except (TypeError, ValueError):
        return 0.0
    return value


def is_valid_metric(value: float) -> bool:
    """Derived metrics at or below zero, NaN or infinite mean missing data."""
    return math.isfinite(value) and value > 0


def format_measurement(template_type: TemplateType | str | None, measurement: Any) -> str:
    """Human readable rendering of a log's raw slots."""
    template = resolve_template(template_type)
    if template is None:
        return "Unknown template type"
    return template.format(MeasurementTuple.from_record(measurement))
