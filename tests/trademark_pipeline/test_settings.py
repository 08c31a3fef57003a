"""Tests for trademark_pipeline/config/settings.py."""

import pytest
from pydantic import ValidationError

from trademark_pipeline.config.constants import DEFAULT_API_URL, MAX_DUPLICATES, MAX_PAGE_NUMBER
from trademark_pipeline.config.settings import Settings, get_settings, mask_secret


class TestMaskSecret:
    """Tests for mask_secret()."""

    def test_long_value(self):
        assert mask_secret("abcd1234efgh5678") == "abcd...5678"

    def test_short_value_fully_masked(self):
        assert mask_secret("short") == "*****"

    def test_missing_value(self):
        assert mask_secret(None) == "(not set)"
        assert mask_secret("") == "(not set)"


class TestSettingsDefaults:
    """Tests for defaults without environment."""

    def test_defaults(self):
        settings = Settings()

        assert settings.api_key is None
        assert not settings.has_api_key
        assert settings.trademark_api_url == DEFAULT_API_URL
        assert settings.verbose is False
        assert settings.max_page_number == MAX_PAGE_NUMBER
        assert settings.max_duplicates == MAX_DUPLICATES
        assert settings.pool_timeout == 10.0
        assert settings.request_timeout == 300.0


class TestSettingsEnvironment:
    """Tests for values read from the environment."""

    def test_api_key_from_env(self, monkeypatch):
        monkeypatch.setenv("API_KEY", "env-key")
        assert Settings().api_key == "env-key"

    def test_api_key_from_dotenv(self, tmp_path):
        """A .env file in the working directory is read."""
        (tmp_path / ".env").write_text("API_KEY=file-key\n")
        assert Settings().api_key == "file-key"

    @pytest.mark.parametrize("value", ["1", "true", "0", "false", ""])
    def test_verbose_presence_enables(self, monkeypatch, value):
        """Any VERBOSE value, even 0 or empty, enables verbose output."""
        monkeypatch.setenv("VERBOSE", value)
        assert Settings().verbose is True

    def test_verbose_absent(self):
        assert Settings().verbose is False

    def test_limits_from_env(self, monkeypatch):
        monkeypatch.setenv("MAX_PAGE_NUMBER", "10")
        monkeypatch.setenv("MAX_DUPLICATES", "3")

        settings = Settings()

        assert settings.max_page_number == 10
        assert settings.max_duplicates == 3

    def test_negative_limit_rejected(self, monkeypatch):
        monkeypatch.setenv("MAX_DUPLICATES", "-1")
        with pytest.raises(ValidationError):
            Settings()


class TestSettingsSummary:
    """Tests for summary() and caching."""

    def test_summary_masks_key(self):
        summary = Settings(api_key="abcd1234efgh5678").summary()

        assert summary["api_key"] == "abcd...5678"
        assert "abcd1234efgh5678" not in str(summary)

    def test_get_settings_cached(self, monkeypatch):
        monkeypatch.setenv("API_KEY", "first")
        first = get_settings()
        monkeypatch.setenv("API_KEY", "second")

        assert get_settings() is first
        assert get_settings().api_key == "first"
