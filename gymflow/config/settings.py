import os
from pathlib import Path

from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_database_url() -> str:
    """Get database URL, using absolute path for SQLite to avoid path resolution issues.

    A `DATABASE_URL` environment variable always wins. Without one, a SQLite
    file next to the repository root is used, which is fine for a single-user
    install but gets lost with the container on hosted deployments.
    """
    db_url = os.getenv("DATABASE_URL", "")
    if db_url:
        logger.info(f"Using DATABASE_URL from environment: {db_url}")
        return db_url

    db_path = Path(__file__).parent.parent.parent / "gymflow.db"
    abs_path = db_path.resolve()
    db_url = f"sqlite:///{abs_path}"
    logger.warning(f"Using local SQLite database: {db_url}. Set DATABASE_URL to use a different database.")
    return db_url


class Settings(BaseSettings):
    database_url: str = Field(
        default_factory=get_database_url,
        validation_alias="DATABASE_URL",
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_file: str | None = Field(default=None, validation_alias="LOG_FILE")
    log_rotation: str = Field(default="10 MB", validation_alias="LOG_ROTATION")
    log_retention: str = Field(default="7 days", validation_alias="LOG_RETENTION")
    seed_defaults: bool = Field(
        default=True,
        validation_alias="SEED_DEFAULTS",
        description="Seed default categories and exercises into an empty database",
    )

    # Log windows
    trend_fetch_limit: int = Field(
        default=20,
        ge=1,
        validation_alias="TREND_FETCH_LIMIT",
        description="How many recent logs are fetched for trend computation",
    )
    history_display_limit: int = Field(
        default=30,
        ge=1,
        validation_alias="HISTORY_DISPLAY_LIMIT",
        description="How many recent logs the history endpoint returns for display",
    )
    recent_logs_default_limit: int = Field(default=3, ge=1, validation_alias="RECENT_LOGS_DEFAULT_LIMIT")

    # Trend classification
    trend_window_size: int = Field(default=8, ge=1, validation_alias="TREND_WINDOW_SIZE")
    trend_min_sessions: int = Field(default=16, ge=2, validation_alias="TREND_MIN_SESSIONS")
    trend_change_threshold_pct: float = Field(
        default=10.0,
        gt=0,
        validation_alias="TREND_CHANGE_THRESHOLD_PCT",
        description="Percent change beyond which a trend counts as improving or declining",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate that log level is one of the standard logging levels."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_value = value.upper()
        if upper_value not in valid_levels:
            logger.warning(f"Invalid LOG_LEVEL '{value}'. Valid levels are: {', '.join(valid_levels)}. Defaulting to INFO.")
            return "INFO"
        return upper_value

    @model_validator(mode="after")
    def validate_trend_windows(self) -> "Settings":
        """Both comparison windows must fit inside the minimum session count."""
        if self.trend_min_sessions < 2 * self.trend_window_size:
            raise ValueError(
                f"TREND_MIN_SESSIONS ({self.trend_min_sessions}) must be at least twice "
                f"TREND_WINDOW_SIZE ({self.trend_window_size})"
            )
        if self.trend_fetch_limit < self.trend_min_sessions:
            logger.warning(
                f"TREND_FETCH_LIMIT ({self.trend_fetch_limit}) is below TREND_MIN_SESSIONS "
                f"({self.trend_min_sessions}); trends will never be classified."
            )
        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
