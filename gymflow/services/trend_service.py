"""Exercise trend service.

Glue between storage and the trend classifier: fetch an exercise's template
type and recent logs, then classify them.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from loguru import logger

from gymflow.analysis.trends import TrendConfig, TrendVerdict, classify_trend
from gymflow.config.settings import settings
from gymflow.errors import ExerciseNotFoundError


class TrendStore(Protocol):
    """Storage operations the trend service needs."""

    def fetch_recent_logs(self, exercise_id: int, limit: int) -> Sequence[Any]:
        """Most recent raw logs of the exercise, newest first."""
        ...

    def fetch_exercise_template_type(self, exercise_id: int) -> str | None:
        """Template type tag of the exercise, None if it does not exist."""
        ...


class TrendService:
    """Computes trend verdicts for exercises."""

    def __init__(
        self,
        store: TrendStore,
        config: TrendConfig | None = None,
        fetch_limit: int | None = None,
    ):
        self.store = store
        self.config = config or TrendConfig.from_settings(settings)
        self.fetch_limit = fetch_limit or settings.trend_fetch_limit

    def get_trend(self, exercise_id: int) -> TrendVerdict:
        """Trend verdict for one exercise.

        Raises:
            ExerciseNotFoundError: the store has no such exercise
        """
        template_type = self.store.fetch_exercise_template_type(exercise_id)
        if template_type is None:
            raise ExerciseNotFoundError(exercise_id)

        logs = self.store.fetch_recent_logs(exercise_id, self.fetch_limit)
        verdict = classify_trend(logs, template_type, self.config)
        logger.debug(
            f"Trend for exercise_id={exercise_id} template_type={template_type}: "
            f"state={verdict.state} direction={verdict.direction} sessions={verdict.session_count}/{len(logs)}"
        )
        return verdict
