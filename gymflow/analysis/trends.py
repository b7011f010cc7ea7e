"""Trend computation.

Two-window comparison of an exercise's recent sessions: the average derived
metric of the newest window against the window before it, classified by
percent change. Pure functions, no I/O.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass
from enum import StrEnum
from typing import Any

from gymflow.metrics.templates import TemplateType, is_valid_metric, reduce_measurement, resolve_template


class TrendDirection(StrEnum):
    """Direction of a classified trend."""

    IMPROVING = "improving"
    MAINTAINING = "maintaining"
    DECLINING = "declining"


class TrendState(StrEnum):
    """Which branch of the classifier produced a verdict."""

    INSUFFICIENT_DATA = "insufficient_data"
    DEGENERATE_BASELINE = "degenerate_baseline"
    CLASSIFIED = "classified"


@dataclass(frozen=True)
class TrendConfig:
    """Window sizes and percent-change bands for trend classification."""

    window_size: int = 8
    min_sessions: int = 16
    improving_threshold_pct: float = 10.0
    declining_threshold_pct: float = -10.0

    def __post_init__(self) -> None:
        if self.window_size < 1:
            raise ValueError(f"window_size must be positive, got {self.window_size}")
        if self.min_sessions < 2 * self.window_size:
            raise ValueError(f"min_sessions ({self.min_sessions}) must cover two windows of {self.window_size}")
        if self.declining_threshold_pct > self.improving_threshold_pct:
            raise ValueError("declining_threshold_pct must not exceed improving_threshold_pct")

    @classmethod
    def from_settings(cls, settings: Any) -> TrendConfig:
        """Build from application settings (symmetric bands)."""
        return cls(
            window_size=settings.trend_window_size,
            min_sessions=settings.trend_min_sessions,
            improving_threshold_pct=settings.trend_change_threshold_pct,
            declining_threshold_pct=-settings.trend_change_threshold_pct,
        )


DEFAULT_TREND_CONFIG = TrendConfig()


@dataclass(frozen=True)
class TrendVerdict:
    """Outcome of a trend computation.

    direction is None for the insufficient-data and degenerate-baseline
    states; the averages and percent change are None whenever direction is.
    """

    state: TrendState
    direction: TrendDirection | None
    recent_avg: float | None
    previous_avg: float | None
    percent_change: float | None
    session_count: int

    @classmethod
    def unclassified(cls, state: TrendState, session_count: int) -> TrendVerdict:
        return cls(
            state=state,
            direction=None,
            recent_avg=None,
            previous_avg=None,
            percent_change=None,
            session_count=session_count,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def round_half_up(value: float, digits: int = 1) -> float:
    """Round to `digits` decimals with halves going up (123.45 -> 123.5)."""
    factor = 10**digits
    scaled = value * factor
    # Past ~1e307 every float is already integral at this precision
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled + 0.5) / factor


def _mean(values: Sequence[float]) -> float:
    count = len(values)
    try:
        return math.fsum(values) / count
    except OverflowError:
        # Window of near-max floats: scale down before summing
        return math.fsum(value / count for value in values)


def derive_valid_metrics(logs: Iterable[Any], template_type: TemplateType | str | None) -> list[float]:
    """Reduce logs to derived metrics, dropping non-positive and non-finite ones.

    Args:
        logs: Raw logs, newest first
        template_type: Exercise template type tag

    Returns:
        Derived metrics of the valid logs, order preserved
    """
    derived = (reduce_measurement(template_type, log) for log in logs)
    return [value for value in derived if is_valid_metric(value)]


def classify_metrics(values: Sequence[float], config: TrendConfig = DEFAULT_TREND_CONFIG) -> TrendVerdict:
    """Classify a newest-first sequence of valid derived metrics.

    Only the first `2 * window_size` values are compared; the session count
    reported is the full length of `values`.
    """
    session_count = len(values)
    if session_count < config.min_sessions:
        return TrendVerdict.unclassified(TrendState.INSUFFICIENT_DATA, session_count)

    window = config.window_size
    recent_avg = _mean(values[:window])
    previous_avg = _mean(values[window : 2 * window])

    # A baseline that displays as 0.0 gives no meaningful percentage
    if round_half_up(previous_avg) == 0:
        return TrendVerdict.unclassified(TrendState.DEGENERATE_BASELINE, session_count)

    percent_change = (recent_avg - previous_avg) * 100 / previous_avg
    if not math.isfinite(percent_change):
        return TrendVerdict.unclassified(TrendState.DEGENERATE_BASELINE, session_count)

    if percent_change > config.improving_threshold_pct:
        direction = TrendDirection.IMPROVING
    elif percent_change < config.declining_threshold_pct:
        direction = TrendDirection.DECLINING
    else:
        direction = TrendDirection.MAINTAINING

    return TrendVerdict(
        state=TrendState.CLASSIFIED,
        direction=direction,
        recent_avg=round_half_up(recent_avg),
        previous_avg=round_half_up(previous_avg),
        percent_change=round_half_up(percent_change),
        session_count=session_count,
    )


def classify_trend(
    logs: Iterable[Any],
    template_type: TemplateType | str | None,
    config: TrendConfig = DEFAULT_TREND_CONFIG,
) -> TrendVerdict:
    """Compute the trend verdict for an exercise's recent logs.

    Args:
        logs: Raw logs (MeasurementTuple, mappings or ORM rows), newest first
        template_type: Exercise template type tag; unknown tags never classify
        config: Window and threshold configuration

    Returns:
        TrendVerdict
    """
    return classify_metrics(derive_valid_metrics(logs, template_type), config)


def summarize_trend(
    verdict: TrendVerdict,
    template_type: TemplateType | str | None,
    config: TrendConfig = DEFAULT_TREND_CONFIG,
) -> str:
    """One-line human summary of a verdict."""
    if verdict.direction is None:
        remaining = max(0, config.min_sessions - verdict.session_count)
        if remaining > 0:
            plural = "s" if remaining > 1 else ""
            return f"Not enough data: log {remaining} more workout{plural} to see your trend"
        return "Not enough data: keep logging to see your trend"

    template = resolve_template(template_type)
    sign = "+" if verdict.percent_change > 0 else ""
    line = f"{verdict.direction.value.capitalize()} ({sign}{verdict.percent_change:.1f}%)"
    if template is None:
        return line
    return (
        f"{line}: {template.trend_metric_name} {template.format_derived(verdict.recent_avg)} "
        f"vs {template.format_derived(verdict.previous_avg)} "
        f"over your last {config.window_size} vs previous {config.window_size} workouts"
    )
