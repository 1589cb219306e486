"""Tests for settings configuration module."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from feedcomposer.config.settings import (
    DatabaseSettings,
    FeedSettings,
    LoggingSettings,
    Settings,
    get_settings,
)


class TestDatabaseSettings:
    """Tests for DatabaseSettings model."""

    def test_default_path(self):
        """Test that default path is set."""
        settings = DatabaseSettings()
        assert settings.path.name == "feedcomposer.db"
        assert settings.busy_timeout_seconds > 0

    def test_custom_path(self):
        """Test setting a custom path."""
        settings = DatabaseSettings(path=Path("/custom/path.db"))
        assert settings.path == Path("/custom/path.db")


class TestFeedSettings:
    """Tests for FeedSettings model."""

    def test_default_values(self):
        """Test default values."""
        settings = FeedSettings()
        assert settings.chunk_size == 20
        assert settings.default_limit == 20
        assert settings.max_limit == 50
        assert settings.source_priority == ["review", "complaint"]
        assert settings.review_status == "APPROVED"

    @pytest.mark.parametrize("field", ["chunk_size", "default_limit", "max_limit"])
    def test_sizes_must_be_positive(self, field):
        """Test that zero sizes are rejected."""
        with pytest.raises(ValidationError, match="Value must be >= 1"):
            FeedSettings(**{field: 0})

    def test_default_limit_above_max_rejected(self):
        with pytest.raises(ValidationError, match="default_limit must be <= max_limit"):
            FeedSettings(default_limit=60, max_limit=50)

    def test_source_priority_normalized(self):
        settings = FeedSettings(source_priority=["Complaint", "REVIEW"])
        assert settings.source_priority == ["complaint", "review"]

    def test_single_source_allowed(self):
        assert FeedSettings(source_priority=["complaint"]).source_priority == ["complaint"]

    @pytest.mark.parametrize(
        "priority,message",
        [
            (["review", "article"], "Unknown source kind"),
            (["review", "review"], "must not repeat"),
            ([], "at least one"),
        ],
    )
    def test_invalid_source_priority(self, priority, message):
        """Test source priority validation."""
        with pytest.raises(ValidationError, match=message):
            FeedSettings(source_priority=priority)

    def test_review_status_case_insensitive(self):
        assert FeedSettings(review_status="approved").review_status == "APPROVED"

    def test_invalid_review_status(self):
        with pytest.raises(ValidationError, match="Invalid review status"):
            FeedSettings(review_status="HIDDEN")


class TestLoggingSettings:
    """Tests for LoggingSettings model."""

    def test_level_uppercased(self):
        assert LoggingSettings(level="debug").level == "DEBUG"

    def test_invalid_level(self):
        with pytest.raises(ValidationError, match="Invalid log level"):
            LoggingSettings(level="LOUD")


class TestSettings:
    """Tests for the main Settings class."""

    def test_nested_env_overrides(self, monkeypatch):
        """Test FEEDCOMPOSER_ prefixed environment variables with nested keys."""
        monkeypatch.setenv("FEEDCOMPOSER_FEED__CHUNK_SIZE", "7")
        monkeypatch.setenv("FEEDCOMPOSER_LOGGING__LEVEL", "warning")

        settings = Settings()

        assert settings.feed.chunk_size == 7
        assert settings.logging.level == "WARNING"

    def test_ensure_directories(self, tmp_path):
        settings = Settings(
            database=DatabaseSettings(path=tmp_path / "db" / "feed.db"),
            logging=LoggingSettings(file=tmp_path / "logs" / "feed.log"),
        )

        settings.ensure_directories()

        assert (tmp_path / "db").is_dir()
        assert (tmp_path / "logs").is_dir()

    def test_get_settings_is_cached(self):
        """Test that get_settings returns the same instance."""
        assert get_settings() is get_settings()
