"""Configuration management using pydantic-settings."""

import warnings
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class SentimentAPISettings(BaseSettings):
    """CLOVA sentiment-analysis API configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CLOVA_SENTIMENT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="https://naveropenapi.apigw.ntruss.com/sentiment-analysis/v1/analyze",
        description="Sentiment analysis endpoint. Env var: CLOVA_SENTIMENT_URL",
    )
    api_key_id: Optional[str] = Field(
        default=None,
        description="API key id (sent as X-NCP-APIGW-API-KEY-ID). Env var: CLOVA_SENTIMENT_API_KEY_ID",
    )
    api_key: Optional[str] = Field(
        default=None,
        description="API key (sent as X-NCP-APIGW-API-KEY). Env var: CLOVA_SENTIMENT_API_KEY",
    )
    timeout: float = Field(
        default=10.0, gt=0, description="Request timeout in seconds. Env var: CLOVA_SENTIMENT_TIMEOUT"
    )

    @property
    def is_configured(self) -> bool:
        """Check if both credentials are present."""
        return bool(self.api_key_id and self.api_key)


class SummaryAPISettings(BaseSettings):
    """CLOVA text-summary API configuration."""

    model_config = SettingsConfigDict(
        env_prefix="CLOVA_SUMMARY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="https://naveropenapi.apigw.ntruss.com/text-summary/v1/summarize",
        description="Summary endpoint. Env var: CLOVA_SUMMARY_URL",
    )
    api_key_id: Optional[str] = Field(
        default=None,
        description="API key id (sent as X-NCP-APIGW-API-KEY-ID). Env var: CLOVA_SUMMARY_API_KEY_ID",
    )
    api_key: Optional[str] = Field(
        default=None,
        description="API key (sent as X-NCP-APIGW-API-KEY). Env var: CLOVA_SUMMARY_API_KEY",
    )
    timeout: float = Field(
        default=10.0, gt=0, description="Request timeout in seconds. Env var: CLOVA_SUMMARY_TIMEOUT"
    )
    max_content_length: int = Field(
        default=2000,
        ge=1,
        description="Content is truncated to this many characters before summarizing. "
        "Env var: CLOVA_SUMMARY_MAX_CONTENT_LENGTH",
    )
    language: str = Field(
        default="ko", description="Summary language option. Env var: CLOVA_SUMMARY_LANGUAGE"
    )

    @property
    def is_configured(self) -> bool:
        """Check if both credentials are present."""
        return bool(self.api_key_id and self.api_key)


class PipelineSettings(BaseSettings):
    """Chunking and per-chunk scheduling configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PIPELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    chunk_size: int = Field(
        default=1000, ge=1, description="Maximum characters per chunk. Env var: PIPELINE_CHUNK_SIZE"
    )
    max_concurrency: int = Field(
        default=4,
        ge=1,
        description="Maximum in-flight sentiment requests per diary. Env var: PIPELINE_MAX_CONCURRENCY",
    )
    sequential: bool = Field(
        default=False,
        description="Analyze chunks one at a time, in order. Env var: PIPELINE_SEQUENTIAL",
    )


class MoodSettings(BaseSettings):
    """Mood classification configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MOOD_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    strong_threshold: float = Field(
        default=50.0,
        description="Per-chunk average above which a mood is strong (SO_GOOD/SO_BAD). "
        "Env var: MOOD_STRONG_THRESHOLD",
    )


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="diary-mood", description="Application name. Env var: APP_NAME")
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment. Env var: ENVIRONMENT",
    )
    debug: bool = Field(default=False, description="Enable debug mode. Env var: DEBUG")
    log_level: str = Field(default="INFO", description="Logging level. Env var: LOG_LEVEL")

    # Sub-settings
    sentiment: Optional[SentimentAPISettings] = None
    summary: Optional[SummaryAPISettings] = None
    pipeline: Optional[PipelineSettings] = None
    mood: Optional[MoodSettings] = None

    @model_validator(mode="after")
    def initialize_nested_settings(self) -> "Settings":
        """Initialize nested settings to ensure they read from environment."""
        if self.sentiment is None:
            self.sentiment = SentimentAPISettings()
        if self.summary is None:
            self.summary = SummaryAPISettings()
        if self.pipeline is None:
            self.pipeline = PipelineSettings()
        if self.mood is None:
            self.mood = MoodSettings()
        return self

    @field_validator("environment", mode="before")
    @classmethod
    def parse_environment(cls, v):
        """Parse environment from string."""
        if isinstance(v, str):
            try:
                return Environment(v.lower())
            except ValueError:
                return Environment.DEVELOPMENT
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == Environment.PRODUCTION

    def validate_configuration(self) -> None:
        """Warn about external APIs that are missing credentials."""
        if not self.sentiment.is_configured:
            warnings.warn(
                "Sentiment API is not configured. Set CLOVA_SENTIMENT_API_KEY_ID and "
                "CLOVA_SENTIMENT_API_KEY",
                UserWarning,
            )
        if not self.summary.is_configured:
            warnings.warn(
                "Summary API is not configured. Set CLOVA_SUMMARY_API_KEY_ID and "
                "CLOVA_SUMMARY_API_KEY",
                UserWarning,
            )

    def validate_production_settings(self) -> None:
        """Validate that production settings are complete."""
        if self.is_production:
            if self.debug:
                raise ValueError("DEBUG must be False in production")
            if not self.sentiment.is_configured:
                raise ValueError("Sentiment API credentials must be configured in production")
            if not self.summary.is_configured:
                raise ValueError("Summary API credentials must be configured in production")


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
        _settings.validate_configuration()
        try:
            _settings.validate_production_settings()
        except ValueError as e:
            import logging

            logging.error(f"Configuration validation failed: {e}")
            if _settings.is_production:
                raise  # Fail fast in production
    return _settings
