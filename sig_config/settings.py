"""
Library Settings (Pydantic Settings).

Loads configuration from environment variables (.env file or system env).

Settings only select which already-configured OpenTelemetry providers are
looked up and how the library's own diagnostics are rendered. Providers,
exporters and processors stay the application's responsibility.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library settings loaded from environment variables.

    All settings documented in .env.example.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # ========================================================================
    # OPENTELEMETRY
    # ========================================================================
    OTEL_SERVICE_NAME: str = Field(
        default="sig",
        description="Instrumentation scope used when looking up tracer, meter and logger",
    )

    # ========================================================================
    # SIGNALS
    # ========================================================================
    SIG_TRACING_ENABLED: bool = Field(default=True)
    SIG_METRICS_ENABLED: bool = Field(default=False)
    SIG_LOGGING_ENABLED: bool = Field(default=True)
    SIG_LOG_BACKEND: str = Field(
        default="structlog",
        description="otel (OpenTelemetry logs API) or structlog",
        pattern="^(otel|structlog)$",
    )
    SIG_SELF_METRICS_ENABLED: bool = Field(
        default=False,
        description="Count units of work and events in prometheus_client",
    )

    # ========================================================================
    # LOGGING
    # ========================================================================
    LOG_LEVEL: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    LOG_FORMAT: str = Field(default="json", pattern="^(json|text)$")
