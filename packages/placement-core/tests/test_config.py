"""Tests for environment-based settings."""

import pytest
from pydantic import ValidationError

from placement_core.config import Settings
from placement_core.types import StrategyType


class TestSettings:
    def test_defaults(self, monkeypatch):
        for name in ("PLACEMENT_LOG_LEVEL", "PLACEMENT_DEFAULT_STRATEGY", "PLACEMENT_JSON_OUTPUT"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.log_level == "WARNING"
        assert settings.default_strategy == StrategyType.DYNAMIC_WEIGHT
        assert settings.json_output is False

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("PLACEMENT_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("PLACEMENT_DEFAULT_STRATEGY", "Aggregated")
        monkeypatch.setenv("PLACEMENT_JSON_OUTPUT", "true")

        settings = Settings()

        assert settings.log_level == "DEBUG"
        assert settings.default_strategy == StrategyType.AGGREGATED
        assert settings.json_output is True

    def test_log_level_case_insensitive(self, monkeypatch):
        monkeypatch.setenv("PLACEMENT_LOG_LEVEL", "info")

        assert Settings().log_level == "INFO"

    def test_unknown_log_level_rejected(self, monkeypatch):
        """An unknown level fails validation instead of reaching logging."""
        monkeypatch.setenv("PLACEMENT_LOG_LEVEL", "VERBOSE")

        with pytest.raises(ValidationError, match="log_level"):
            Settings()
