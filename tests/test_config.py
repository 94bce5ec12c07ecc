"""Configuration Tests."""

import pytest
from pydantic import ValidationError

from sig_config.settings import Settings


def test_settings_load_defaults():
    """Test settings load with defaults."""
    settings = Settings()
    assert settings.OTEL_SERVICE_NAME == "sig"
    assert settings.SIG_TRACING_ENABLED is True
    assert settings.SIG_METRICS_ENABLED is False
    assert settings.SIG_LOG_BACKEND == "structlog"


def test_settings_read_environment(monkeypatch):
    """Test env vars override defaults."""
    monkeypatch.setenv("SIG_LOG_BACKEND", "otel")
    monkeypatch.setenv("sig_tracing_enabled", "false")

    settings = Settings()
    assert settings.SIG_LOG_BACKEND == "otel"
    assert settings.SIG_TRACING_ENABLED is False


def test_settings_reject_unknown_log_backend():
    """Test SIG_LOG_BACKEND is validated."""
    with pytest.raises(ValidationError):
        Settings(SIG_LOG_BACKEND="syslog")
