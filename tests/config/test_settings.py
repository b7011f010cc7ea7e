import pytest
from pydantic import ValidationError

from gymflow.analysis.trends import TrendConfig
from gymflow.config.settings import Settings


def test_defaults(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite://")

    settings = Settings(_env_file=None)

    assert settings.database_url == "sqlite://"
    assert settings.trend_fetch_limit == 20
    assert settings.history_display_limit == 30
    assert TrendConfig.from_settings(settings) == TrendConfig(8, 16, 10.0, -10.0)


def test_invalid_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "chatty")

    assert Settings(_env_file=None).log_level == "INFO"


def test_trend_thresholds_from_environment(monkeypatch):
    monkeypatch.setenv("TREND_WINDOW_SIZE", "4")
    monkeypatch.setenv("TREND_MIN_SESSIONS", "8")
    monkeypatch.setenv("TREND_CHANGE_THRESHOLD_PCT", "5")

    config = TrendConfig.from_settings(Settings(_env_file=None))

    assert config == TrendConfig(4, 8, 5.0, -5.0)


def test_min_sessions_must_cover_both_windows(monkeypatch):
    monkeypatch.setenv("TREND_WINDOW_SIZE", "10")
    monkeypatch.setenv("TREND_MIN_SESSIONS", "16")

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
