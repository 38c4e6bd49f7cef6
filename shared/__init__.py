"""Shared utilities and components for all services."""

from .config import BaseLoggingConfig, BaseMetricsApiConfig, BaseServiceConfig
from .constants import ChartMetric, Environment, RangeToken

__all__ = [
    "ChartMetric",
    "Environment",
    "RangeToken",
    "BaseServiceConfig",
    "BaseLoggingConfig",
    "BaseMetricsApiConfig",
]
