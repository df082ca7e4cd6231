"""Tests for settings and logging configuration."""

import pytest

from veritas.core.logging import get_logging_config
from veritas.core.settings import Settings, get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("CLUSTER_THRESHOLD", raising=False)
        settings = Settings(_env_file=None)

        assert settings.cluster_threshold == 0.15
        assert settings.topic_keywords == 3
        assert settings.recap_window_hours == 24
        assert settings.recap_max_items == 6
        assert settings.overrides_path is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("CLUSTER_THRESHOLD", "0.3")
        monkeypatch.setenv("scoring_workers", "4")

        settings = get_settings()
        assert settings.cluster_threshold == 0.3
        assert settings.scoring_workers == 4

    def test_cached(self):
        assert get_settings() is get_settings()


class TestLoggingConfig:
    """Tests for the logging dictConfig."""

    def test_console_in_development(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "development")
        config = get_logging_config("engine")

        assert config["handlers"]["console"]["formatter"] == "console"
        assert "[engine]" in config["formatters"]["console"]["format"]

    def test_json_in_production(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        config = get_logging_config("engine")

        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["formatters"]["json"]["class"] == "pythonjsonlogger.jsonlogger.JsonFormatter"
        assert "veritas" in config["loggers"]

    def test_step_loggers_follow_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")
        monkeypatch.delenv("ENGINE_LOG_LEVEL", raising=False)
        loggers = get_logging_config()["loggers"]

        assert loggers["veritas.engine"]["level"] == "WARNING"
        assert loggers["veritas.scoring"]["level"] == "WARNING"

    def test_engine_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        monkeypatch.setenv("ENGINE_LOG_LEVEL", "debug")
        loggers = get_logging_config()["loggers"]

        assert loggers["veritas"]["level"] == "INFO"
        assert loggers["veritas.engine"]["level"] == "DEBUG"
        assert loggers["httpx"]["level"] == "WARNING"
        assert loggers["veritas.engine"]["propagate"] is False
