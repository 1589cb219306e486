"""Pydantic settings models for feedcomposer configuration."""

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from feedcomposer.config.defaults import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_DB_BUSY_TIMEOUT,
    DEFAULT_DB_PATH,
    DEFAULT_FEED_LIMIT,
    DEFAULT_LOG_BACKUP_COUNT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_LOG_MAX_SIZE_MB,
    DEFAULT_REVIEW_STATUS,
    DEFAULT_SOURCE_PRIORITY,
    FEED_LIMIT_MAX,
    LOGS_DIR,
    REVIEW_STATUSES,
)


class DatabaseSettings(BaseModel):
    """Database configuration."""

    path: Path = DEFAULT_DB_PATH
    busy_timeout_seconds: float = DEFAULT_DB_BUSY_TIMEOUT


class FeedSettings(BaseModel):
    """Activity feed configuration."""

    chunk_size: int = DEFAULT_CHUNK_SIZE
    default_limit: int = DEFAULT_FEED_LIMIT
    max_limit: int = FEED_LIMIT_MAX
    source_priority: list[str] = Field(default_factory=lambda: list(DEFAULT_SOURCE_PRIORITY))
    review_status: str = DEFAULT_REVIEW_STATUS

    @field_validator("chunk_size", "default_limit", "max_limit")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Sizes must be at least 1."""
        if v < 1:
            raise ValueError(f"Value must be >= 1, got {v}")
        return v

    @field_validator("source_priority")
    @classmethod
    def validate_source_priority(cls, v: list[str]) -> list[str]:
        """Validate the merge tie-break order of source kinds."""
        v = [kind.lower() for kind in v]
        unknown = [kind for kind in v if kind not in DEFAULT_SOURCE_PRIORITY]
        if unknown:
            raise ValueError(
                f"Unknown source kind(s): {unknown}. Must be one of {DEFAULT_SOURCE_PRIORITY}"
            )
        if len(set(v)) != len(v):
            raise ValueError("Source priority must not repeat a source kind")
        if not v:
            raise ValueError("Source priority must name at least one source kind")
        return v

    @field_validator("review_status")
    @classmethod
    def validate_review_status(cls, v: str) -> str:
        """Validate the review visibility status."""
        v = v.upper()
        if v not in REVIEW_STATUSES:
            raise ValueError(f"Invalid review status: {v}. Must be one of {list(REVIEW_STATUSES)}")
        return v

    @model_validator(mode="after")
    def validate_limits(self) -> "FeedSettings":
        if self.default_limit > self.max_limit:
            raise ValueError("default_limit must be <= max_limit")
        return self


class LoggingSettings(BaseModel):
    """Logging configuration."""

    level: str = DEFAULT_LOG_LEVEL
    file: Path = LOGS_DIR / "feedcomposer.log"
    max_size_mb: int = DEFAULT_LOG_MAX_SIZE_MB
    backup_count: int = DEFAULT_LOG_BACKUP_COUNT

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of {valid_levels}")
        return v


class Settings(BaseSettings):
    """Main settings class for feedcomposer."""

    model_config = SettingsConfigDict(
        env_prefix="FEEDCOMPOSER_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    feed: FeedSettings = Field(default_factory=FeedSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        self.database.path.parent.mkdir(parents=True, exist_ok=True)
        self.logging.file.parent.mkdir(parents=True, exist_ok=True)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    settings.ensure_directories()
    return settings
