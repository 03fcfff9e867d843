"""
Logging support for monday_api.

The library logs through module loggers under ``monday_api``; this package
offers optional setup with credential masking and JSON output.
"""

from .filters import ComponentFilter, SensitiveDataFilter
from .formatters import StructuredFormatter
from .manager import LoggingManager, cleanup_logging, get_logger, setup_logging

__all__ = [
    "LoggingManager",
    "setup_logging",
    "get_logger",
    "cleanup_logging",
    "StructuredFormatter",
    "SensitiveDataFilter",
    "ComponentFilter",
]
