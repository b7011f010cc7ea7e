"""Domain errors raised by repositories and services.

Routes translate these to HTTP responses; none of them is a database error.
"""


class NotFoundError(LookupError):
    """Base class for missing rows."""

    entity = "Record"

    def __init__(self, entity_id: int):
        self.entity_id = entity_id
        super().__init__(f"{self.entity} {entity_id} not found")


class CategoryNotFoundError(NotFoundError):
    entity = "Category"


class ExerciseNotFoundError(NotFoundError):
    entity = "Exercise"


class LogNotFoundError(NotFoundError):
    entity = "Log"


class TemplateTypeLockedError(RuntimeError):
    """Raised when changing the template type of an exercise that already has logs.

    Existing logs were recorded under the old template's slot meanings, so
    reinterpreting them under a new one would corrupt trend history.
    """

    def __init__(self, exercise_id: int, current: str, requested: str):
        self.exercise_id = exercise_id
        self.current = current
        self.requested = requested
        super().__init__(
            f"Exercise {exercise_id} already has logs recorded as '{current}'; "
            f"its template type cannot change to '{requested}'"
        )
