"""
Configuration management for monday_api.

This module provides the client, request and logging configuration models and
a loader reading environment variables and configuration files.
"""

from .loader import ConfigLoader, load_config
from .models import (
    ApiClientConfig,
    LoggingConfig,
    LogLevel,
    RequestConfig,
    RequestOptions,
)

__all__ = [
    "ApiClientConfig",
    "RequestConfig",
    "RequestOptions",
    "LoggingConfig",
    "LogLevel",
    "ConfigLoader",
    "load_config",
]
