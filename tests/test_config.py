"""Configuration Tests."""

import pytest
from pydantic import ValidationError

from nmcp_config.settings import Settings


def test_settings_load_defaults(monkeypatch):
    """Test settings load with defaults."""
    monkeypatch.delenv("NOTION_API_KEY", raising=False)
    settings = Settings(_env_file=None)

    assert settings.NOTION_API_KEY == ""
    assert settings.NOTION_API_VERSION == "2022-06-28"
    assert settings.RATE_LIMIT_DEFAULT_RETRY_AFTER == 5.0
    assert settings.LOG_FORMAT == "json"
    assert settings.METRICS_PORT == 0
    assert settings.OTEL_TRACES_ENABLED is False
    assert settings.notion_configured is False


def test_settings_read_environment(monkeypatch):
    """Test credential and API version come from the environment."""
    monkeypatch.setenv("NOTION_API_KEY", "secret_from_env")
    monkeypatch.setenv("NOTION_API_VERSION", "2025-01-01")

    settings = Settings(_env_file=None)

    assert settings.NOTION_API_KEY == "secret_from_env"
    assert settings.NOTION_API_VERSION == "2025-01-01"
    assert settings.notion_configured is True


def test_blank_credential_is_not_configured():
    settings = Settings(_env_file=None, NOTION_API_KEY="   ")
    assert settings.notion_configured is False


def test_settings_reject_unknown_log_level():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, LOG_LEVEL="VERBOSE")
