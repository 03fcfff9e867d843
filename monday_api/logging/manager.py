"""
Logging manager for monday_api.

This module provides centralized logging configuration for applications
embedding the client.
"""

import logging
import sys
from typing import Dict, Optional

from ..config.models import LoggingConfig, LogLevel
from .filters import ComponentFilter, SensitiveDataFilter
from .formatters import StructuredFormatter


class LoggingManager:
    """Centralized logging manager."""

    def __init__(self) -> None:
        """Initialize logging manager."""
        self._configured = False
        self._handlers: Dict[str, logging.Handler] = {}
        self._loggers: Dict[str, logging.Logger] = {}

    def setup_logging(self, config: LoggingConfig) -> None:
        """
        Setup logging based on configuration.

        Args:
            config: Logging configuration
        """
        if self._configured:
            self.cleanup()

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, config.level.value))

        if config.enable_console:
            handler: logging.Handler = logging.StreamHandler(sys.stdout)
            self._add_handler("console", handler, config)

        if config.file_path:
            config.file_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(str(config.file_path), encoding="utf-8")
            self._add_handler("file", handler, config)

        for component, level in config.component_levels.items():
            logger = logging.getLogger(component)
            logger.setLevel(getattr(logging, level.value))
            self._loggers[component] = logger

        self._configured = True

        logging.getLogger(__name__).info("Logging system configured successfully")

    def _add_handler(self, name: str, handler: logging.Handler, config: LoggingConfig) -> None:
        formatter: logging.Formatter
        if config.enable_structured:
            formatter = StructuredFormatter()
        else:
            formatter = logging.Formatter(config.format)

        handler.setFormatter(formatter)
        handler.setLevel(getattr(logging, config.level.value))

        if config.mask_credentials:
            handler.addFilter(SensitiveDataFilter())

        logging.getLogger().addHandler(handler)
        self._handlers[name] = handler

    def get_logger(self, name: str) -> logging.Logger:
        """Get logger for specific component."""
        return logging.getLogger(name)

    def set_level(self, level: LogLevel, component: Optional[str] = None) -> None:
        """
        Set logging level.

        Args:
            level: New logging level
            component: Specific component (None for root logger)
        """
        log_level = getattr(logging, level.value)

        if component:
            logging.getLogger(component).setLevel(log_level)
        else:
            logging.getLogger().setLevel(log_level)
            for handler in self._handlers.values():
                handler.setLevel(log_level)

    def restrict_to(self, component: str) -> None:
        """Only let records from ``component`` reach the configured handlers."""
        component_filter = ComponentFilter(component)
        for handler in self._handlers.values():
            handler.addFilter(component_filter)

    def cleanup(self) -> None:
        """Remove and close the handlers installed by this manager."""
        root_logger = logging.getLogger()
        for handler in self._handlers.values():
            root_logger.removeHandler(handler)
            handler.close()

        self._handlers.clear()
        self._loggers.clear()
        self._configured = False

    def is_configured(self) -> bool:
        """Check if logging is configured."""
        return self._configured


# Global logging manager instance
_logging_manager = LoggingManager()


def setup_logging(config: Optional[LoggingConfig] = None) -> LoggingManager:
    """
    Setup logging with configuration.

    Args:
        config: Logging configuration (defaults apply when omitted)

    Returns:
        The global logging manager
    """
    _logging_manager.setup_logging(config or LoggingConfig())
    return _logging_manager


def get_logger(name: str) -> logging.Logger:
    """Get logger for component."""
    return _logging_manager.get_logger(name)


def cleanup_logging() -> None:
    """Cleanup logging system."""
    _logging_manager.cleanup()
