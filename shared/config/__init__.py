"""Shared configuration base classes.

Provides common configuration patterns used across all services to reduce
duplication and ensure consistency.
"""

from pydantic_settings import BaseSettings


class BaseLoggingConfig(BaseSettings):
    """Common logging configuration for all services."""

    app_log_level: str = "INFO"
    app_log_redaction_patterns: list[str] = [
        "password",
        "token",
        "secret",
        "key",
        "authorization",
        "bearer",
        "cookie",
    ]
    app_environment: str = "production"


class BaseMetricsApiConfig(BaseSettings):
    """Connection settings for the agent metrics HTTP API."""

    metrics_api_base_url: str = "http://localhost:8080"
    metrics_api_timeout_seconds: float = 10.0


class BaseServiceConfig(BaseLoggingConfig, BaseMetricsApiConfig):
    """Base configuration combining logging and metrics API settings.

    Services should inherit from this and add their own specific settings.
    The otel_service_name should be overridden by each service.
    """

    otel_service_name: str = "unknown"  # Should be overridden by service


__all__ = ["BaseLoggingConfig", "BaseMetricsApiConfig", "BaseServiceConfig"]
