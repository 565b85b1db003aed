"""Tests for configuration management."""

import pytest
from pydantic import ValidationError

from diary_mood.config import Environment, Settings, get_settings


def test_settings_defaults(monkeypatch):
    """Test that settings have correct defaults."""
    for var in ("LOG_LEVEL", "ENVIRONMENT", "PIPELINE_CHUNK_SIZE", "CLOVA_SUMMARY_MAX_CONTENT_LENGTH"):
        monkeypatch.delenv(var, raising=False)

    settings = Settings()

    assert settings.app_name == "diary-mood"
    assert settings.environment == Environment.DEVELOPMENT
    assert settings.log_level == "INFO"
    assert settings.sentiment.url.endswith("/sentiment-analysis/v1/analyze")
    assert settings.summary.url.endswith("/text-summary/v1/summarize")
    assert settings.summary.max_content_length == 2000
    assert settings.summary.language == "ko"
    assert settings.pipeline.chunk_size == 1000
    assert settings.pipeline.max_concurrency == 4
    assert settings.pipeline.sequential is False
    assert settings.mood.strong_threshold == 50.0


def test_settings_from_env(monkeypatch):
    """Test that settings load from environment variables."""
    monkeypatch.setenv("ENVIRONMENT", "staging")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CLOVA_SENTIMENT_API_KEY_ID", "env-sentiment-id")
    monkeypatch.setenv("CLOVA_SENTIMENT_API_KEY", "env-sentiment-key")
    monkeypatch.setenv("CLOVA_SUMMARY_TIMEOUT", "2.5")
    monkeypatch.setenv("PIPELINE_MAX_CONCURRENCY", "8")
    monkeypatch.setenv("PIPELINE_SEQUENTIAL", "true")
    monkeypatch.setenv("MOOD_STRONG_THRESHOLD", "65")

    settings = get_settings()

    assert settings.environment == Environment.STAGING
    assert settings.log_level == "DEBUG"
    assert settings.sentiment.api_key_id == "env-sentiment-id"
    assert settings.sentiment.is_configured
    assert settings.summary.timeout == 2.5
    assert settings.pipeline.max_concurrency == 8
    assert settings.pipeline.sequential is True
    assert settings.mood.strong_threshold == 65.0


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_unknown_environment_falls_back_to_development():
    assert Settings(environment="qa").environment == Environment.DEVELOPMENT


def test_invalid_log_level_raises():
    with pytest.raises(ValidationError):
        Settings(log_level="LOUD")


def test_invalid_chunk_size_raises(monkeypatch):
    monkeypatch.setenv("PIPELINE_CHUNK_SIZE", "0")
    with pytest.raises(ValidationError):
        Settings()


def test_missing_credentials_warn(monkeypatch):
    for var in (
        "CLOVA_SENTIMENT_API_KEY_ID",
        "CLOVA_SENTIMENT_API_KEY",
        "CLOVA_SUMMARY_API_KEY_ID",
        "CLOVA_SUMMARY_API_KEY",
    ):
        monkeypatch.delenv(var, raising=False)

    with pytest.warns(UserWarning, match="not configured"):
        Settings().validate_configuration()


def test_production_requires_credentials(monkeypatch):
    for var in ("CLOVA_SENTIMENT_API_KEY_ID", "CLOVA_SENTIMENT_API_KEY"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("ENVIRONMENT", "production")

    with pytest.raises(ValueError, match="Sentiment API credentials"):
        get_settings()


def test_production_rejects_debug(monkeypatch):
    monkeypatch.setenv("CLOVA_SENTIMENT_API_KEY_ID", "id")
    monkeypatch.setenv("CLOVA_SENTIMENT_API_KEY", "key")
    monkeypatch.setenv("CLOVA_SUMMARY_API_KEY_ID", "id")
    monkeypatch.setenv("CLOVA_SUMMARY_API_KEY", "key")

    settings = Settings(environment="production", debug=True)

    with pytest.raises(ValueError, match="DEBUG"):
        settings.validate_production_settings()


def test_nested_settings_load_from_env_file(tmp_path, monkeypatch):
    """Credentials in .env reach the nested API settings."""
    for var in (
        "LOG_LEVEL",
        "CLOVA_SENTIMENT_API_KEY_ID",
        "CLOVA_SENTIMENT_API_KEY",
        "CLOVA_SUMMARY_API_KEY_ID",
        "CLOVA_SUMMARY_API_KEY",
        "PIPELINE_CHUNK_SIZE",
        "MOOD_STRONG_THRESHOLD",
    ):
        monkeypatch.delenv(var, raising=False)
    (tmp_path / ".env").write_text(
        "LOG_LEVEL=DEBUG\n"
        "CLOVA_SENTIMENT_API_KEY_ID=dotenv-sentiment-id\n"
        "CLOVA_SENTIMENT_API_KEY=dotenv-sentiment-key\n"
        "CLOVA_SUMMARY_API_KEY_ID=dotenv-summary-id\n"
        "CLOVA_SUMMARY_API_KEY=dotenv-summary-key\n"
        "PIPELINE_CHUNK_SIZE=500\n"
        "MOOD_STRONG_THRESHOLD=70\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    settings = Settings()

    assert settings.log_level == "DEBUG"
    assert settings.sentiment.is_configured
    assert settings.sentiment.api_key_id == "dotenv-sentiment-id"
    assert settings.summary.is_configured
    assert settings.summary.api_key == "dotenv-summary-key"
    assert settings.pipeline.chunk_size == 500
    assert settings.mood.strong_threshold == 70.0
